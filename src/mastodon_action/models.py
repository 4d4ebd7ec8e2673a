"""Request and response types for the Mastodon statuses endpoint."""

import json
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any

from mastodon_action.errors import DecodeError

# Separator between date and time in the normalized scheduled_at string
SCHEDULE_SEPARATOR = "T"


class Visibility(StrEnum):
    """Visibility options for a Mastodon status."""

    PUBLIC = "public"
    UNLISTED = "unlisted"
    PRIVATE = "private"
    DIRECT = "direct"

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return value in {member.value for member in cls}


@dataclass(frozen=True)
class StatusRequest:
    """The body sent to ``POST /api/v1/statuses``."""

    status: str
    visibility: Visibility = Visibility.PUBLIC
    sensitive: bool = False
    spoiler_text: str = ""
    language: str = ""
    scheduled_at: str = ""

    @property
    def is_scheduled(self) -> bool:
        """Whether the request asks for deferred publication."""
        return SCHEDULE_SEPARATOR in self.scheduled_at

    def to_payload(self) -> dict[str, Any]:
        """
        Build the JSON body, leaving out optional fields that hold their default.

        Returns
        -------
            dict[str, Any]: The request body.
        """
        payload: dict[str, Any] = {"status": self.status, "visibility": str(self.visibility)}
        if self.sensitive:
            payload["sensitive"] = True
        if self.spoiler_text:
            payload["spoiler_text"] = self.spoiler_text
        if self.language:
            payload["language"] = self.language
        if self.scheduled_at:
            payload["scheduled_at"] = self.scheduled_at
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_payload())

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "StatusRequest":
        """Rebuild a request from a body produced by :meth:`to_payload`."""
        return cls(
            status=payload["status"],
            visibility=Visibility(payload.get("visibility", Visibility.PUBLIC)),
            sensitive=bool(payload.get("sensitive", False)),
            spoiler_text=payload.get("spoiler_text", ""),
            language=payload.get("language", ""),
            scheduled_at=payload.get("scheduled_at", ""),
        )


def _load_object(body: bytes | str) -> dict[str, Any]:
    try:
        data = json.loads(body)
    except ValueError as e:
        raise DecodeError(f"response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise DecodeError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _string_field(data: dict[str, Any], name: str) -> str:
    value = data.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"field {name!r} must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class StatusResponse:
    """A status that was published immediately."""

    id: str
    url: str
    content: str = ""
    created_at: str = ""
    visibility: str = ""

    @classmethod
    def from_json(cls, body: bytes | str) -> "StatusResponse":
        data = _load_object(body)
        return cls(
            id=_string_field(data, "id"),
            url=_string_field(data, "url"),
            content=_string_field(data, "content"),
            created_at=_string_field(data, "created_at"),
            visibility=_string_field(data, "visibility"),
        )

    def outputs(self) -> dict[str, str]:
        return {"id": self.id, "url": self.url}


@dataclass(frozen=True)
class ScheduledStatusResponse:
    """A status accepted for publication at a later time."""

    id: str
    scheduled_at: datetime

    @classmethod
    def from_json(cls, body: bytes | str) -> "ScheduledStatusResponse":
        data = _load_object(body)
        raw_scheduled_at = _string_field(data, "scheduled_at")
        try:
            scheduled_at = datetime.fromisoformat(raw_scheduled_at)
        except ValueError as e:
            raise DecodeError(f"invalid scheduled_at {raw_scheduled_at!r}: {e}") from e
        return cls(id=_string_field(data, "id"), scheduled_at=scheduled_at)

    def outputs(self) -> dict[str, str]:
        return {"id": self.id, "scheduled_at": str(self.scheduled_at)}
