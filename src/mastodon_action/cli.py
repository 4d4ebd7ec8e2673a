"""Command-line entry point for posting a status from a workflow.

Every option can also be set through the environment variable of the same name
(``--access-token`` reads ``ACCESS_TOKEN``). Explicit flags win over the environment,
which wins over the built-in defaults. A ``.env`` file in the working directory (or a
parent) is loaded first but never overrides variables that are already set.

Usage examples:

1. Post a public status:
   mastodon-action --url https://mastodon.social --access-token $TOKEN --message "Hello!"

2. Post an unlisted status behind a content warning:
   mastodon-action --message "Release notes" --visibility unlisted --spoiler-text "Long post"

3. Schedule a status (UTC, at least five minutes ahead):
   mastodon-action --message "Later" --scheduled-at "2026-12-24 18:00"
"""

from typing import Annotated

import typer

from mastodon_action import BUILD_INFO
from mastodon_action.client import post_status
from mastodon_action.env_utils import load_env, mask_secret
from mastodon_action.errors import MastodonActionError, SchedulingError, ValidationError
from mastodon_action.logging_config import configure_logging, logger
from mastodon_action.output import set_action_outputs
from mastodon_action.validation import build_status_request

app = typer.Typer(
    add_completion=False,
    help="Post a status to a Mastodon instance and report its id and URL.",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"mastodon-action {BUILD_INFO.version} (revision {BUILD_INFO.revision})")
        raise typer.Exit()


@app.command()
def toot(  # noqa: PLR0913
    url: Annotated[
        str,
        typer.Option(envvar="URL", help="Base URL of the instance, e.g. https://mastodon.social."),
    ],
    access_token: Annotated[
        str, typer.Option(envvar="ACCESS_TOKEN", help="Access token with write:statuses scope.")
    ],
    message: Annotated[str, typer.Option(envvar="MESSAGE", help="The status text.")],
    visibility: Annotated[
        str, typer.Option(envvar="VISIBILITY", help="One of public, unlisted, private, direct.")
    ] = "public",
    sensitive: Annotated[
        bool, typer.Option("--sensitive", envvar="SENSITIVE", help="Mark the status as sensitive.")
    ] = False,
    spoiler_text: Annotated[
        str, typer.Option(envvar="SPOILER_TEXT", help="Content warning shown before the status.")
    ] = "",
    language: Annotated[
        str,
        typer.Option(
            envvar="LANGUAGE",
            help=(
                "ISO 639 language code of the status. LANGUAGE is also read by gettext, "
                "unset it outside CI if it holds a locale list."
            ),
        ),
    ] = "",
    scheduled_at: Annotated[
        str,
        typer.Option(envvar="SCHEDULED_AT", help="Publish later, as 'YYYY-MM-DD HH:MM' in UTC."),
    ] = "",
    max_chars: Annotated[
        int | None,
        typer.Option(envvar="MAX_CHARS", min=1, help="Truncate longer messages with an ellipsis."),
    ] = None,
    log_level: Annotated[str, typer.Option(envvar="LOG_LEVEL", help="Log level.")] = "INFO",
    log_file: Annotated[
        str | None, typer.Option(envvar="LOG_FILE", help="Also write DEBUG logs to this file.")
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
        ),
    ] = None,
) -> None:
    """Post a status to a Mastodon instance and report its id and URL."""
    try:
        configure_logging(log_level, log_file)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e

    logger.info(
        f"Mastodon Action Version: {BUILD_INFO.version}, Build: {BUILD_INFO.revision}, "
        f"Python: {BUILD_INFO.python_version}"
    )
    logger.debug(
        f"url={url} access_token={mask_secret(access_token)} visibility={visibility} "
        f"sensitive={sensitive} language={language!r} scheduled_at={scheduled_at!r}"
    )

    try:
        status = build_status_request(
            message,
            visibility=visibility,
            sensitive=sensitive,
            spoiler_text=spoiler_text,
            language=language,
            scheduled_at=scheduled_at,
            max_chars=max_chars,
        )
    except SchedulingError as e:
        logger.error(f"Scheduled at error: {e}")
        raise typer.Exit(code=1) from e
    except ValidationError as e:
        logger.error(f"Invalid input: {e}")
        raise typer.Exit(code=1) from e

    try:
        result = post_status(url, access_token, status)
    except MastodonActionError as e:
        logger.error(f"Error posting status: {e}")
        raise typer.Exit(code=1) from e

    set_action_outputs(result.outputs())


def main() -> None:
    """Load the .env file, then run the command."""
    load_env()
    app()


if __name__ == "__main__":
    main()
