"""Exceptions raised while validating and posting a status."""


class MastodonActionError(Exception):
    """Base class for every failure that should stop the action."""


class ValidationError(MastodonActionError):
    """Raised when an input is missing or malformed."""


class SchedulingError(ValidationError):
    """Raised when a scheduled time is not far enough in the future."""


class TransportError(MastodonActionError):
    """Raised when the request could not be completed (network error or timeout)."""


class APIError(MastodonActionError):
    """
    Raised when the instance answers with anything other than HTTP 200.

    Args:
        status_code (int): The HTTP status code returned by the instance.
        reason (str): The HTTP reason phrase.
        body (str): The raw response body, or an empty string if it could not be read.
    """

    def __init__(self, status_code: int, reason: str, body: str) -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"API response: {status_code} {reason}, Body: {body}")


class ResponseReadError(MastodonActionError):
    """Raised when a successful response body could not be read."""


class DecodeError(MastodonActionError):
    """Raised when a response body does not match the expected shape."""
