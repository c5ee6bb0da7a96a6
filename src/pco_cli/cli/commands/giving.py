"""
``pco giving`` commands.
"""

from datetime import datetime
from typing import Optional

import typer

from ..common import add_get_command, add_list_command, console, fail, get_cli_context, run_async

app = typer.Typer(name="giving", help="Manage donations, funds, batches and pledges", no_args_is_help=True)

donations_app = typer.Typer(name="donations", help="Donations", no_args_is_help=True)
add_list_command(
    donations_app,
    "donations",
    lambda client, params: client.giving.list_donations(params),
    lambda client, params, options: client.giving.stream_donations(params, options),
)
add_get_command(donations_app, "Donation", lambda client, donation_id: client.giving.get_donation(donation_id))


@donations_app.command("total")
def total_command(
    ctx: typer.Context,
    person_id: Optional[str] = typer.Option(None, "--person-id", help="Only donations by this person"),
    fund_id: Optional[str] = typer.Option(None, "--fund-id", help="Only donations to this fund"),
    start: Optional[datetime] = typer.Option(None, "--start", formats=["%Y-%m-%d"], help="Received on or after"),
    end: Optional[datetime] = typer.Option(None, "--end", formats=["%Y-%m-%d"], help="Received on or before"),
) -> None:
    """Sum the amount of every matching donation."""
    cli = get_cli_context(ctx)
    if (start is None) != (end is None):
        fail("--start and --end must be given together")

    total_cents = run_async(
        cli,
        lambda client: client.giving.get_total_giving(
            start=start.date() if start else None,
            end=end.date() if end else None,
            fund_id=fund_id,
            person_id=person_id,
        ),
    )
    console.print(f"Total giving: ${total_cents / 100:,.2f} ({total_cents} cents)")


app.add_typer(donations_app)

funds_app = typer.Typer(name="funds", help="Funds", no_args_is_help=True)
add_list_command(funds_app, "funds", lambda client, params: client.giving.list_funds(params))
add_get_command(funds_app, "Fund", lambda client, fund_id: client.giving.get_fund(fund_id))
app.add_typer(funds_app)

batches_app = typer.Typer(name="batches", help="Donation batches", no_args_is_help=True)
add_list_command(batches_app, "batches", lambda client, params: client.giving.list_batches(params))
add_get_command(batches_app, "Batch", lambda client, batch_id: client.giving.get_batch(batch_id))
app.add_typer(batches_app)

pledges_app = typer.Typer(name="pledges", help="Pledges", no_args_is_help=True)
add_list_command(pledges_app, "pledges", lambda client, params: client.giving.list_pledges(params))
add_get_command(pledges_app, "Pledge", lambda client, pledge_id: client.giving.get_pledge(pledge_id))
app.add_typer(pledges_app)

recurring_app = typer.Typer(name="recurring-donations", help="Recurring donations", no_args_is_help=True)
add_list_command(
    recurring_app, "recurring donations", lambda client, params: client.giving.list_recurring_donations(params)
)
add_get_command(
    recurring_app,
    "Recurring donation",
    lambda client, recurring_donation_id: client.giving.get_recurring_donation(recurring_donation_id),
)
app.add_typer(recurring_app)

refunds_app = typer.Typer(name="refunds", help="Refunds", no_args_is_help=True)
add_list_command(refunds_app, "refunds", lambda client, params: client.giving.list_refunds(params))
app.add_typer(refunds_app)

payment_sources_app = typer.Typer(name="payment-sources", help="Payment sources", no_args_is_help=True)
add_list_command(
    payment_sources_app, "payment sources", lambda client, params: client.giving.list_payment_sources(params)
)
add_get_command(
    payment_sources_app,
    "Payment source",
    lambda client, payment_source_id: client.giving.get_payment_source(payment_source_id),
)
app.add_typer(payment_sources_app)
