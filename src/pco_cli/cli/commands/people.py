"""
``pco people`` commands.
"""

from pathlib import Path
from typing import Optional

import typer

from pco_cli.core.query import QueryParameters, parse_list
from ..common import (
    add_get_command,
    add_list_command,
    console,
    emit,
    formatter_options,
    get_cli_context,
    run_async,
)

app = typer.Typer(name="people", help="Manage people", no_args_is_help=True)

add_list_command(
    app,
    "people",
    lambda client, params: client.people.list_people(params),
    lambda client, params, options: client.people.stream_people(params, options),
)
add_get_command(app, "Person", lambda client, person_id: client.people.get_person(person_id))


@app.command("me")
def me_command(ctx: typer.Context) -> None:
    """Show the person the credentials belong to."""
    cli = get_cli_context(ctx)
    person = run_async(cli, lambda client: client.people.get_me())
    if person is None:
        console.print("The authenticated person could not be found.")
        return
    emit(cli, person, formatter_options(None, None, False, None))


@app.command("search")
def search_command(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Name or email address to search for"),
    limit: int = typer.Option(25, "--limit", min=1, max=100, help="Maximum number of results"),
    include: Optional[str] = typer.Option(None, "--include", help="Related resources to include (comma separated)"),
    include_props: Optional[str] = typer.Option(None, "--include-props", help="Only show these properties"),
    exclude_props: Optional[str] = typer.Option(None, "--exclude-props", help="Hide these properties"),
    output_file: Optional[Path] = typer.Option(None, "--output-file", "-o", help="Write output to this file"),
    include_nulls: bool = typer.Option(False, "--include-nulls", help="Show properties without a value"),
) -> None:
    """Search for people by name or email."""
    cli = get_cli_context(ctx)
    params = QueryParameters(include=parse_list(include))
    result = run_async(cli, lambda client: client.people.search_people(query, limit=limit, params=params))

    if not result.items:
        console.print(f"No people found matching '{query}'.")
        return
    emit(cli, result.items, formatter_options(include_props, exclude_props, include_nulls, output_file))
    if not output_file:
        total = result.total_count if result.total_count is not None else len(result.items)
        console.print(f"\nFound {len(result.items)} of {total} people matching '{query}'")


add_list_command(
    app,
    "field data",
    lambda client, person_id, params: client.people.list_field_data(person_id, params),
    parent="person",
    name="field-data",
)


emails_app = typer.Typer(name="emails", help="Email addresses of a person", no_args_is_help=True)
add_list_command(
    emails_app,
    "emails",
    lambda client, person_id, params: client.people.list_emails(person_id, params),
    parent="person",
)
app.add_typer(emails_app)

addresses_app = typer.Typer(name="addresses", help="Addresses of a person", no_args_is_help=True)
add_list_command(
    addresses_app,
    "addresses",
    lambda client, person_id, params: client.people.list_addresses(person_id, params),
    parent="person",
)
app.add_typer(addresses_app)

phone_numbers_app = typer.Typer(name="phone-numbers", help="Phone numbers of a person", no_args_is_help=True)
add_list_command(
    phone_numbers_app,
    "phone numbers",
    lambda client, person_id, params: client.people.list_phone_numbers(person_id, params),
    parent="person",
)
app.add_typer(phone_numbers_app)

households_app = typer.Typer(name="households", help="Households", no_args_is_help=True)
add_list_command(households_app, "households", lambda client, params: client.people.list_households(params))
add_get_command(households_app, "Household", lambda client, household_id: client.people.get_household(household_id))
add_list_command(
    households_app,
    "members",
    lambda client, household_id, params: client.people.list_people_in_household(household_id, params),
    parent="household",
    name="members",
)
app.add_typer(households_app)

workflows_app = typer.Typer(name="workflows", help="Workflows and their cards", no_args_is_help=True)
add_list_command(workflows_app, "workflows", lambda client, params: client.people.list_workflows(params))
add_get_command(workflows_app, "Workflow", lambda client, workflow_id: client.people.get_workflow(workflow_id))
add_list_command(
    workflows_app,
    "workflow cards",
    lambda client, workflow_id, params: client.people.list_workflow_cards(workflow_id, params),
    parent="workflow",
    name="cards",
)
add_get_command(
    workflows_app,
    "Workflow card",
    lambda client, workflow_id, card_id: client.people.get_workflow_card(workflow_id, card_id),
    parent="workflow",
    name="card",
)
app.add_typer(workflows_app)

forms_app = typer.Typer(name="forms", help="Forms and submissions", no_args_is_help=True)
add_list_command(forms_app, "forms", lambda client, params: client.people.list_forms(params))
add_get_command(forms_app, "Form", lambda client, form_id: client.people.get_form(form_id))
add_list_command(
    forms_app,
    "form submissions",
    lambda client, form_id, params: client.people.list_form_submissions(form_id, params),
    parent="form",
    name="submissions",
)
add_get_command(
    forms_app,
    "Form submission",
    lambda client, form_id, submission_id: client.people.get_form_submission(form_id, submission_id),
    parent="form",
    name="submission",
)
app.add_typer(forms_app)

lists_app = typer.Typer(name="lists", help="People lists", no_args_is_help=True)
add_list_command(lists_app, "lists", lambda client, params: client.people.list_lists(params))
add_get_command(lists_app, "List", lambda client, list_id: client.people.get_list(list_id))
add_list_command(
    lists_app,
    "people",
    lambda client, list_id, params: client.people.list_people_in_list(list_id, params),
    parent="list",
    name="people",
)
app.add_typer(lists_app)

campuses_app = typer.Typer(name="campuses", help="Campuses", no_args_is_help=True)
add_list_command(campuses_app, "campuses", lambda client, params: client.people.list_campuses(params))
app.add_typer(campuses_app)
