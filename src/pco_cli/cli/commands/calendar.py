"""
``pco calendar`` commands.
"""

import typer

from ..common import add_get_command, add_list_command

app = typer.Typer(name="calendar", help="Manage calendar events and resources", no_args_is_help=True)

events_app = typer.Typer(name="events", help="Calendar events", no_args_is_help=True)
add_list_command(
    events_app,
    "events",
    lambda client, params: client.calendar.list_events(params),
    lambda client, params, options: client.calendar.stream_events(params, options),
)
add_get_command(events_app, "Event", lambda client, event_id: client.calendar.get_event(event_id))
app.add_typer(events_app)

resources_app = typer.Typer(name="resources", help="Rooms and equipment", no_args_is_help=True)
add_list_command(resources_app, "resources", lambda client, params: client.calendar.list_resources(params))
add_get_command(resources_app, "Resource", lambda client, resource_id: client.calendar.get_resource(resource_id))
app.add_typer(resources_app)
