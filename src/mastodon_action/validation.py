"""Validate action inputs and turn them into a :class:`StatusRequest`."""

from datetime import UTC, datetime, timedelta

from mastodon_action.errors import SchedulingError, ValidationError
from mastodon_action.logging_config import logger
from mastodon_action.models import StatusRequest, Visibility

SCHEDULED_AT_FORMAT = "%Y-%m-%d %H:%M"
WIRE_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
MIN_SCHEDULE_DELAY = timedelta(minutes=5)
ELLIPSIS = "…"


def validate_message(message: str | None) -> str:
    """Return the message unchanged, rejecting empty or whitespace-only text."""
    if message is None or not message.strip():
        raise ValidationError("Status message cannot be empty")
    return message


def validate_visibility(visibility: str | None) -> Visibility:
    """
    Resolve the visibility input, defaulting to ``public`` when it is omitted.

    Args:
        visibility (str | None): The raw input. Matching is case-sensitive.

    Returns
    -------
        Visibility: The matching visibility.

    Raises
    ------
        ValidationError: If the value is not one of public, unlisted, private, direct.
    """
    if not visibility:
        return Visibility.PUBLIC
    if not Visibility.is_valid(visibility):
        raise ValidationError(
            f"Invalid visibility: {visibility} "
            f"(expected one of: {', '.join(member.value for member in Visibility)})"
        )
    return Visibility(visibility)


def parse_scheduled_at(value: str | None, now: datetime | None = None) -> str:
    """
    Normalize a ``YYYY-MM-DD HH:MM`` schedule into the wire timestamp format.

    The input carries no timezone and is read as UTC.

    Args:
        value (str | None): The raw input. Empty means "post immediately".
        now (datetime | None): The reference time, defaults to the current UTC time.

    Returns
    -------
        str: The timestamp as ``YYYY-MM-DDTHH:MM:SSZ``, or an empty string.

    Raises
    ------
        ValidationError: If the value does not match the expected format.
        SchedulingError: If the moment is less than five minutes away.
    """
    if not value:
        return ""

    try:
        scheduled = datetime.strptime(value, SCHEDULED_AT_FORMAT).replace(tzinfo=UTC)
    except ValueError as e:
        raise ValidationError(
            f"invalid date format {value!r}, expected YYYY-MM-DD HH:MM: {e}"
        ) from e

    now = now or datetime.now(UTC)
    if scheduled - now < MIN_SCHEDULE_DELAY:
        raise SchedulingError("scheduled time must be at least 5 minutes in the future")

    return scheduled.strftime(WIRE_TIMESTAMP_FORMAT)


def trim_message(message: str, max_chars: int) -> str:
    """Cut the message to ``max_chars`` characters, ending it with an ellipsis."""
    if max_chars < 1:
        raise ValidationError(f"max chars must be positive, got {max_chars}")
    if len(message) <= max_chars:
        return message
    return message[: max_chars - 1] + ELLIPSIS


def build_status_request(  # noqa: PLR0913
    message: str | None,
    visibility: str | None = None,
    sensitive: bool = False,
    spoiler_text: str | None = None,
    language: str | None = None,
    scheduled_at: str | None = None,
    max_chars: int | None = None,
    now: datetime | None = None,
) -> StatusRequest:
    """
    Validate every input and assemble the request body.

    Raises
    ------
        ValidationError: If the message, visibility or schedule format is invalid.
        SchedulingError: If the schedule is too close to ``now``.
    """
    message = validate_message(message)
    if max_chars is not None:
        trimmed = trim_message(message, max_chars)
        if trimmed != message:
            logger.warning(f"Status message truncated to {max_chars} characters")
        message = trimmed

    request = StatusRequest(
        status=message,
        visibility=validate_visibility(visibility),
        sensitive=sensitive,
        spoiler_text=spoiler_text or "",
        language=language or "",
        scheduled_at=parse_scheduled_at(scheduled_at, now=now),
    )
    logger.debug(f"Validated status request: {request.to_payload()}")
    return request
