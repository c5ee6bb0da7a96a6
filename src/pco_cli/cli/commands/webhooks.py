"""
``pco webhooks`` commands.
"""

from pathlib import Path

import typer

from pco_cli.services.webhooks import validate_event_signature
from ..common import add_get_command, add_list_command, console, fail

app = typer.Typer(name="webhooks", help="Manage webhook subscriptions and events", no_args_is_help=True)

subscriptions_app = typer.Typer(name="subscriptions", help="Webhook subscriptions", no_args_is_help=True)
add_list_command(
    subscriptions_app,
    "subscriptions",
    lambda client, params: client.webhooks.list_subscriptions(params),
    lambda client, params, options: client.webhooks.stream_subscriptions(params, options),
)
add_get_command(
    subscriptions_app,
    "Subscription",
    lambda client, subscription_id: client.webhooks.get_subscription(subscription_id),
)
app.add_typer(subscriptions_app)

events_app = typer.Typer(name="events", help="Available and delivered webhook events", no_args_is_help=True)
add_list_command(
    events_app,
    "available events",
    lambda client, params: client.webhooks.list_available_events(params),
    name="available",
)
add_list_command(
    events_app,
    "events",
    lambda client, subscription_id, params: client.webhooks.list_events(subscription_id, params),
    parent="subscription",
)
add_get_command(events_app, "Event", lambda client, event_id: client.webhooks.get_event(event_id))
app.add_typer(events_app)


@app.command("verify")
def verify_command(
    payload_file: Path = typer.Option(
        ..., "--payload-file", exists=True, dir_okay=False, readable=True, help="File with the raw request body"
    ),
    signature: str = typer.Option(..., "--signature", help="X-PCO-Webhooks-Authenticity header value"),
    secret: str = typer.Option(..., "--secret", help="Authenticity secret of the subscription"),
) -> None:
    """Check the signature of a webhook delivery."""
    try:
        is_valid = validate_event_signature(payload_file.read_bytes(), signature, secret)
    except ValueError as e:
        fail(str(e))

    if is_valid:
        console.print("[green]Signature is valid.[/green]")
        return
    console.print("[red]Signature is invalid.[/red]")
    raise typer.Exit(1)
