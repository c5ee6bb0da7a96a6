"""
``pco publishing`` commands.
"""

import typer

from ..common import add_get_command, add_list_command

app = typer.Typer(name="publishing", help="Manage episodes, series, speakers and media", no_args_is_help=True)

episodes_app = typer.Typer(name="episodes", help="Episodes", no_args_is_help=True)
add_list_command(
    episodes_app,
    "episodes",
    lambda client, params: client.publishing.list_episodes(params),
    lambda client, params, options: client.publishing.stream_episodes(params, options),
)
add_get_command(episodes_app, "Episode", lambda client, episode_id: client.publishing.get_episode(episode_id))
app.add_typer(episodes_app)

series_app = typer.Typer(name="series", help="Series", no_args_is_help=True)
add_list_command(series_app, "series", lambda client, params: client.publishing.list_series(params))
add_get_command(series_app, "Series", lambda client, series_id: client.publishing.get_series(series_id))
app.add_typer(series_app)

speakers_app = typer.Typer(name="speakers", help="Speakers", no_args_is_help=True)
add_list_command(speakers_app, "speakers", lambda client, params: client.publishing.list_speakers(params))
add_get_command(speakers_app, "Speaker", lambda client, speaker_id: client.publishing.get_speaker(speaker_id))
app.add_typer(speakers_app)

media_app = typer.Typer(name="media", help="Media of an episode", no_args_is_help=True)
add_list_command(
    media_app,
    "media",
    lambda client, episode_id, params: client.publishing.list_episode_media(episode_id, params),
    parent="episode",
)
add_get_command(media_app, "Media", lambda client, media_id: client.publishing.get_media(media_id))
app.add_typer(media_app)

speakerships_app = typer.Typer(name="speakerships", help="Speakers of an episode", no_args_is_help=True)
add_list_command(
    speakerships_app,
    "speakerships",
    lambda client, episode_id, params: client.publishing.list_speakerships(episode_id, params),
    parent="episode",
)
app.add_typer(speakerships_app)
