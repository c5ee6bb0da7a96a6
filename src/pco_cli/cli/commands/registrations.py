"""
``pco registrations`` commands.
"""

import typer

from ..common import add_get_command, add_list_command

app = typer.Typer(name="registrations", help="Manage signups and attendees", no_args_is_help=True)

signups_app = typer.Typer(name="signups", help="Signups", no_args_is_help=True)
add_list_command(
    signups_app,
    "signups",
    lambda client, params: client.registrations.list_signups(params),
    lambda client, params, options: client.registrations.stream_signups(params, options),
)
add_get_command(signups_app, "Signup", lambda client, signup_id: client.registrations.get_signup(signup_id))
app.add_typer(signups_app)

attendees_app = typer.Typer(name="attendees", help="Attendees of a signup", no_args_is_help=True)
add_list_command(
    attendees_app,
    "attendees",
    lambda client, signup_id, params: client.registrations.list_attendees(signup_id, params),
    parent="signup",
)
add_get_command(attendees_app, "Attendee", lambda client, attendee_id: client.registrations.get_attendee(attendee_id))
app.add_typer(attendees_app)

registrations_app = typer.Typer(name="registrations", help="Registrations of a signup", no_args_is_help=True)
add_list_command(
    registrations_app,
    "registrations",
    lambda client, signup_id, params: client.registrations.list_registrations(signup_id, params),
    parent="signup",
)
add_get_command(
    registrations_app,
    "Registration",
    lambda client, registration_id: client.registrations.get_registration(registration_id),
)
app.add_typer(registrations_app)

categories_app = typer.Typer(name="categories", help="Signup categories", no_args_is_help=True)
add_list_command(categories_app, "categories", lambda client, params: client.registrations.list_categories(params))
add_get_command(categories_app, "Category", lambda client, category_id: client.registrations.get_category(category_id))
app.add_typer(categories_app)

campuses_app = typer.Typer(name="campuses", help="Campuses", no_args_is_help=True)
add_list_command(campuses_app, "campuses", lambda client, params: client.registrations.list_campuses(params))
add_get_command(campuses_app, "Campus", lambda client, campus_id: client.registrations.get_campus(campus_id))
app.add_typer(campuses_app)
