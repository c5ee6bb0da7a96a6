"""
``pco services`` commands.
"""

import typer

from ..common import add_get_command, add_list_command

app = typer.Typer(name="services", help="Manage service plans, service types and songs", no_args_is_help=True)

plans_app = typer.Typer(name="plans", help="Service plans", no_args_is_help=True)
add_list_command(
    plans_app,
    "plans",
    lambda client, params: client.services.list_plans(params),
    lambda client, params, options: client.services.stream_plans(params, options),
)
add_get_command(plans_app, "Plan", lambda client, plan_id: client.services.get_plan(plan_id))
add_list_command(
    plans_app,
    "items",
    lambda client, plan_id, params: client.services.list_plan_items(plan_id, params),
    parent="plan",
    name="items",
)
app.add_typer(plans_app)

service_types_app = typer.Typer(name="service-types", help="Service types", no_args_is_help=True)
add_list_command(service_types_app, "service types", lambda client, params: client.services.list_service_types(params))
add_get_command(
    service_types_app,
    "Service type",
    lambda client, service_type_id: client.services.get_service_type(service_type_id),
)
app.add_typer(service_types_app)

songs_app = typer.Typer(name="songs", help="Song library", no_args_is_help=True)
add_list_command(songs_app, "songs", lambda client, params: client.services.list_songs(params))
add_get_command(songs_app, "Song", lambda client, song_id: client.services.get_song(song_id))
app.add_typer(songs_app)
