"""
``pco groups`` commands.
"""

import typer

from ..common import add_get_command, add_list_command

app = typer.Typer(name="groups", help="Manage groups, group types and memberships", no_args_is_help=True)

add_list_command(
    app,
    "groups",
    lambda client, params: client.groups.list_groups(params),
    lambda client, params, options: client.groups.stream_groups(params, options),
)
add_get_command(app, "Group", lambda client, group_id: client.groups.get_group(group_id))

group_types_app = typer.Typer(name="group-types", help="Group types", no_args_is_help=True)
add_list_command(group_types_app, "group types", lambda client, params: client.groups.list_group_types(params))
add_get_command(
    group_types_app, "Group type", lambda client, group_type_id: client.groups.get_group_type(group_type_id)
)
app.add_typer(group_types_app)

memberships_app = typer.Typer(name="memberships", help="Memberships of a group", no_args_is_help=True)
add_list_command(
    memberships_app,
    "memberships",
    lambda client, group_id, params: client.groups.list_memberships(group_id, params),
    parent="group",
)
add_get_command(
    memberships_app,
    "Membership",
    lambda client, group_id, membership_id: client.groups.get_membership(group_id, membership_id),
    parent="group",
)
app.add_typer(memberships_app)
