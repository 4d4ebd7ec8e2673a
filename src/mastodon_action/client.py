"""Submit a status to the Mastodon statuses endpoint."""

import time

import requests
import urllib3

from mastodon_action.errors import APIError, DecodeError, ResponseReadError, TransportError
from mastodon_action.logging_config import logger
from mastodon_action.models import ScheduledStatusResponse, StatusRequest, StatusResponse

STATUSES_PATH = "/api/v1/statuses"
DEFAULT_TIMEOUT = 10.0

# One byte per read so a slow sender cannot hold a read open past the deadline
READ_CHUNK_SIZE = 1


def statuses_url(base_url: str) -> str:
    """Append the statuses path to the instance URL as given."""
    return f"{base_url}{STATUSES_PATH}"


def _is_timeout(error: BaseException) -> bool:
    timeout_types = (requests.Timeout, TimeoutError, urllib3.exceptions.TimeoutError)
    if isinstance(error, timeout_types):
        return True
    # requests wraps urllib3's ReadTimeoutError in a ConnectionError during iter_content
    return any(isinstance(arg, timeout_types) for arg in error.args)


def _check_deadline(response: requests.Response, deadline: float) -> None:
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise TransportError("timed out reading response body")
    # Next socket read may only wait for what is left of the deadline
    sock = getattr(getattr(response.raw, "connection", None), "sock", None)
    if sock is not None:
        sock.settimeout(remaining)


def _read_body(response: requests.Response, deadline: float) -> bytes:
    """
    Read the whole body before ``deadline`` (a ``time.monotonic()`` value).

    Raises
    ------
        TransportError: If the deadline passes or a read times out.
        ResponseReadError: If the body cannot be read for any other reason.
    """
    chunks = []
    try:
        _check_deadline(response, deadline)
        for chunk in response.iter_content(READ_CHUNK_SIZE):
            chunks.append(chunk)
            _check_deadline(response, deadline)
    except (requests.RequestException, OSError) as e:
        if _is_timeout(e):
            raise TransportError(f"timed out reading response body: {e}") from e
        raise ResponseReadError(f"reading response body error: {e}") from e
    return b"".join(chunks)


def _read_error_body(response: requests.Response, deadline: float) -> str:
    try:
        body = _read_body(response, deadline)
    except (TransportError, ResponseReadError) as e:
        logger.debug(f"Could not read error response body: {e}")
        return ""
    return body.decode(response.encoding or "utf-8", errors="replace")


def post_status(
    base_url: str,
    access_token: str,
    status: StatusRequest,
    timeout: float = DEFAULT_TIMEOUT,
) -> StatusResponse | ScheduledStatusResponse:
    """
    Post a status with a single request. Nothing is retried.

    Args:
        base_url (str): The instance URL, e.g. ``https://mastodon.social``.
        access_token (str): Bearer token with the ``write:statuses`` scope.
        status (StatusRequest): The validated request.
        timeout (float): Seconds allowed for the whole exchange, body included.

    Returns
    -------
        StatusResponse | ScheduledStatusResponse: The decoded response. The shape
        follows the request: a scheduled request yields a ScheduledStatusResponse.

    Raises
    ------
        TransportError: If the request fails or the exchange runs past ``timeout``.
        APIError: If the response status is not 200.
        ResponseReadError: If the response body cannot be read.
        DecodeError: If the body does not match the expected shape.
    """
    url = statuses_url(base_url)
    headers = {
        "Authorization": f"Bearer {access_token}",
        "Content-Type": "application/json",
    }
    payload = status.to_json().encode("utf-8")

    deadline = time.monotonic() + timeout
    logger.debug(f"Posting status to {url}...")
    try:
        response = requests.post(url, data=payload, headers=headers, timeout=timeout, stream=True)
    except requests.RequestException as e:
        logger.error(f"API call error: {e}")
        raise TransportError(f"API call error: {e}") from e

    with response:
        if response.status_code != requests.codes.ok:
            error = APIError(
                response.status_code, response.reason or "", _read_error_body(response, deadline)
            )
            logger.error(str(error))
            raise error

        try:
            body = _read_body(response, deadline)
        except (TransportError, ResponseReadError) as e:
            logger.error(str(e))
            raise

    # Shape follows the request, not the body
    try:
        if status.is_scheduled:
            scheduled = ScheduledStatusResponse.from_json(body)
            logger.info(f"Scheduled Status ID: {scheduled.id}, Scheduled At: {scheduled.scheduled_at}")
            return scheduled
        posted = StatusResponse.from_json(body)
    except DecodeError as e:
        logger.error(f"decoding response error: {e}")
        raise
    logger.info(f"Status Posted: {posted.id}, URL: {posted.url}")
    return posted
