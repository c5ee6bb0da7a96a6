"""
``pco check-ins`` commands.
"""

import typer

from ..common import add_get_command, add_list_command

app = typer.Typer(name="check-ins", help="Manage check-ins and check-in events", no_args_is_help=True)

add_list_command(
    app,
    "check-ins",
    lambda client, params: client.check_ins.list_check_ins(params),
    lambda client, params, options: client.check_ins.stream_check_ins(params, options),
)
add_get_command(app, "Check-in", lambda client, check_in_id: client.check_ins.get_check_in(check_in_id))

events_app = typer.Typer(name="events", help="Check-in events", no_args_is_help=True)
add_list_command(events_app, "events", lambda client, params: client.check_ins.list_events(params))
add_get_command(events_app, "Event", lambda client, event_id: client.check_ins.get_event(event_id))
add_list_command(
    events_app,
    "check-ins",
    lambda client, event_id, params: client.check_ins.list_event_check_ins(event_id, params),
    parent="event",
    name="check-ins",
)
app.add_typer(events_app)
