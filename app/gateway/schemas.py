"""Messaging gateway domain schemas.

Normalized views of what the WAHA control-plane API returns, plus the
request bodies accepted by the admin gateway endpoints.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field

from app.core.schemas import CamelModel


class SessionState(str, Enum):
    """Session lifecycle as reported by the gateway.

    NOT_STARTED -> STARTING -> SCAN_QR_CODE -> WORKING, with STOPPED and
    FAILED reachable from any state.
    """

    NOT_STARTED = "NOT_STARTED"
    STARTING = "STARTING"
    SCAN_QR_CODE = "SCAN_QR_CODE"
    WORKING = "WORKING"
    STOPPED = "STOPPED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class GatewayConnection:
    """Where and how to reach the gateway for one call."""

    base_url: str | None = None
    session_name: str | None = None
    api_key: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.base_url and self.session_name)


class SessionSummary(CamelModel):
    """One gateway session.

    ``status`` keeps whatever string the gateway sent so states added by
    newer gateway versions survive the round trip; ``state`` maps it onto
    the known lifecycle.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    status: str = SessionState.NOT_STARTED.value
    config: dict[str, Any] | None = None
    me: dict[str, Any] | None = None
    already_exists: bool = False

    @property
    def state(self) -> SessionState | None:
        try:
            return SessionState(self.status)
        except ValueError:
            return None

    @classmethod
    def from_gateway(
        cls, data: dict[str, Any], name: str | None = None
    ) -> "SessionSummary":
        payload = dict(data)
        if not payload.get("name"):
            payload["name"] = name or ""
        if payload.get("status") is None:
            payload["status"] = SessionState.NOT_STARTED.value
        return cls.model_validate(payload)


class ChatTarget(CamelModel):
    """A group or channel messages can be broadcast to."""

    id: str
    name: str
    kind: str = Field(alias="type")


# --- Admin endpoint request/response bodies ---


class GatewayTarget(CamelModel):
    """Connection parameters supplied by the admin UI."""

    waha_base_url: str = Field(min_length=1)
    session_name: str = Field(min_length=1)
    waha_api_key: str | None = None


class StartSessionRequest(GatewayTarget):
    config: dict[str, Any] | None = None


class SendTextRequest(CamelModel):
    chat_id: str = Field(min_length=1)
    text: str = Field(min_length=1, max_length=4096)


class SessionListResponse(CamelModel):
    sessions: list[SessionSummary]


class StartSessionResponse(CamelModel):
    session: SessionSummary
    already_exists: bool = False


class QRCodeResponse(CamelModel):
    qr: str


class ChatTargetListResponse(CamelModel):
    groups: list[ChatTarget]


class SendTextResponse(CamelModel):
    sent: bool
