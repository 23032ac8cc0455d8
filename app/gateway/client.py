"""WhatsApp HTTP API (WAHA) control-plane client.

Thin async wrapper over the gateway's session, QR, group and send endpoints.
Every call is a single stateless request: the gateway process is the source
of truth for session state and may restart independently, so nothing is
cached here. Calls are not retried; the caller decides whether to try again.
"""

import base64
import logging
from typing import Any
from urllib.parse import quote

import httpx

from app.core.http import get_gateway_client
from app.gateway.exceptions import GatewayError
from app.gateway.schemas import ChatTarget, SessionState, SessionSummary

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-Api-Key"

# Upstream bodies are logged, truncated, and never returned to clients.
_MAX_LOGGED_BODY = 500

DEFAULT_SESSION_CONFIG: dict[str, Any] = {"proxy": None, "webhooks": []}

UNKNOWN_GROUP_NAME = "Unknown Group"


def build_headers(
    api_key: str | None, *, accept: str = "application/json"
) -> dict[str, str]:
    """Fixed header set, plus the access key when one is configured."""
    headers = {
        "Content-Type": "application/json",
        "Accept": accept,
    }
    if api_key:
        headers[API_KEY_HEADER] = api_key
    return headers


def _segment(value: str) -> str:
    return quote(value, safe="")


def _json_or_empty(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {}


def _serialized_id(value: Any) -> str | None:
    if isinstance(value, dict):
        return value.get("_serialized")
    return value


def parse_group(item: dict[str, Any]) -> ChatTarget:
    """Normalize one entry of the groups endpoint.

    Prefers ``groupMetadata`` (whatsapp-web.js engines) and falls back to the
    flat ``id``/``subject``/``name`` shape of other engines.
    """
    metadata = item.get("groupMetadata") or {}
    raw_id = _serialized_id(metadata.get("id")) or _serialized_id(item.get("id"))
    name = metadata.get("subject") or item.get("subject") or item.get("name")
    return ChatTarget(
        id=str(raw_id or ""),
        name=name or UNKNOWN_GROUP_NAME,
        kind="group",
    )


def parse_channel(item: dict[str, Any]) -> ChatTarget:
    return ChatTarget(
        id=str(item.get("id") or ""),
        name=item.get("name") or "",
        kind="channel",
    )


class WahaClient:
    """Client for one or more WAHA gateways.

    The base URL and access key are passed per call because operators can
    change them at runtime through site settings.
    """

    def __init__(self, http_client: httpx.AsyncClient | None = None):
        self._http_client = http_client

    @property
    def http(self) -> httpx.AsyncClient:
        return self._http_client or get_gateway_client()

    async def _send(
        self,
        method: str,
        base_url: str,
        path: str,
        *,
        api_key: str | None = None,
        json: dict[str, Any] | None = None,
        accept: str = "application/json",
    ) -> httpx.Response:
        """Issue one request, translating transport failures to GatewayError."""
        url = f"{base_url.rstrip('/')}{path}"
        try:
            return await self.http.request(
                method,
                url,
                headers=build_headers(api_key, accept=accept),
                json=json,
            )
        except httpx.TimeoutException as e:
            logger.warning(
                "Gateway request timed out: %s %s",
                method,
                path,
                extra={"gateway_url": base_url},
            )
            raise GatewayError("Messaging gateway timed out") from e
        except httpx.RequestError as e:
            logger.warning(
                "Gateway unreachable: %s %s (%s)",
                method,
                path,
                type(e).__name__,
                extra={"gateway_url": base_url},
            )
            raise GatewayError("Messaging gateway unreachable") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response, operation: str) -> None:
        if response.is_success:
            return
        body = response.text[:_MAX_LOGGED_BODY]
        logger.error(
            "Gateway %s failed: status=%s body=%s",
            operation,
            response.status_code,
            body,
            extra={"upstream_status": response.status_code},
        )
        raise GatewayError(
            f"Messaging gateway error: {operation} returned {response.status_code}",
            upstream_status=response.status_code,
            upstream_body=body,
        )

    async def _call(
        self,
        method: str,
        base_url: str,
        path: str,
        operation: str,
        *,
        api_key: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        response = await self._send(method, base_url, path, api_key=api_key, json=json)
        self._raise_for_status(response, operation)
        return _json_or_empty(response)

    # --- Sessions ---

    async def list_sessions(
        self, base_url: str, api_key: str | None = None
    ) -> list[SessionSummary]:
        data = await self._call(
            "GET", base_url, "/api/sessions", "list sessions", api_key=api_key
        )
        if not isinstance(data, list):
            raise GatewayError("Messaging gateway returned an invalid session list")
        return [
            SessionSummary.from_gateway(item)
            for item in data
            if isinstance(item, dict)
        ]

    async def start_session(
        self,
        base_url: str,
        name: str,
        config: dict[str, Any] | None = None,
        api_key: str | None = None,
    ) -> SessionSummary:
        """Create and start a session.

        A 422 means the session already exists; that is reported as success
        with state SCAN_QR_CODE so the caller can go straight to the QR code.
        """
        response = await self._send(
            "POST",
            base_url,
            "/api/sessions/start",
            api_key=api_key,
            json={"name": name, "config": config or DEFAULT_SESSION_CONFIG},
        )
        if response.status_code == httpx.codes.UNPROCESSABLE_ENTITY:
            logger.info(
                "Gateway session already exists", extra={"session_name": name}
            )
            return SessionSummary(
                name=name,
                status=SessionState.SCAN_QR_CODE.value,
                already_exists=True,
            )
        self._raise_for_status(response, "start session")
        data = _json_or_empty(response)
        return SessionSummary.from_gateway(data if isinstance(data, dict) else {}, name)

    async def get_status(
        self, base_url: str, name: str, api_key: str | None = None
    ) -> SessionSummary:
        data = await self._call(
            "GET",
            base_url,
            f"/api/sessions/{_segment(name)}",
            "get session status",
            api_key=api_key,
        )
        return SessionSummary.from_gateway(data if isinstance(data, dict) else {}, name)

    async def get_qr_image(
        self, base_url: str, name: str, api_key: str | None = None
    ) -> str:
        """Fetch the pairing QR code as a ``data:image/png;base64,...`` URL.

        The gateway normally answers with raw image bytes; a JSON body of
        the form ``{"mimetype": ..., "data": <base64>}`` is accepted too.
        """
        response = await self._send(
            "GET",
            base_url,
            f"/api/{_segment(name)}/auth/qr",
            api_key=api_key,
            accept="image/png",
        )
        self._raise_for_status(response, "get QR code")

        content_type = response.headers.get("content-type", "")
        if content_type.startswith("application/json"):
            data = _json_or_empty(response)
            if isinstance(data, dict) and data.get("data"):
                mimetype = data.get("mimetype") or "image/png"
                return f"data:{mimetype};base64,{data['data']}"
            raise GatewayError("Messaging gateway returned no QR image")

        encoded = base64.b64encode(response.content).decode("ascii")
        return f"data:image/png;base64,{encoded}"

    async def logout(
        self, base_url: str, name: str, api_key: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "POST",
            base_url,
            f"/api/{_segment(name)}/auth/logout",
            "logout",
            api_key=api_key,
        )

    async def stop_session(
        self, base_url: str, name: str, api_key: str | None = None
    ) -> dict[str, Any]:
        return await self._call(
            "POST",
            base_url,
            f"/api/sessions/{_segment(name)}/stop",
            "stop session",
            api_key=api_key,
        )

    async def delete_session(
        self, base_url: str, name: str, api_key: str | None = None
    ) -> Any:
        return await self._call(
            "DELETE",
            base_url,
            f"/api/sessions/{_segment(name)}",
            "delete session",
            api_key=api_key,
        )

    # --- Groups and channels ---

    async def list_groups_and_channels(
        self, base_url: str, name: str, api_key: str | None = None
    ) -> list[ChatTarget]:
        """Groups followed by channels.

        Failing to list groups fails the call; failing to list channels only
        drops the channels.
        """
        groups_data = await self._call(
            "GET",
            base_url,
            f"/api/{_segment(name)}/groups",
            "list groups",
            api_key=api_key,
        )
        if isinstance(groups_data, dict):
            # Some engines return a mapping keyed by group id.
            groups_data = list(groups_data.values())
        if not isinstance(groups_data, list):
            raise GatewayError("Messaging gateway returned an invalid group list")
        targets = [parse_group(item) for item in groups_data if isinstance(item, dict)]

        try:
            channels_data = await self._call(
                "GET",
                base_url,
                f"/api/{_segment(name)}/channels",
                "list channels",
                api_key=api_key,
            )
        except GatewayError:
            logger.warning(
                "Channel listing failed, returning groups only",
                extra={"session_name": name},
            )
            return targets

        if isinstance(channels_data, list):
            targets.extend(
                parse_channel(item) for item in channels_data if isinstance(item, dict)
            )
        return targets

    # --- Messaging ---

    async def send_text(
        self,
        base_url: str,
        session_name: str,
        chat_id: str,
        text: str,
        api_key: str | None = None,
    ) -> bool:
        """Send a text message; returns False instead of raising on failure.

        The underlying error is logged so OTP issuance can report a single
        unambiguous delivery failure.
        """
        try:
            await self._call(
                "POST",
                base_url,
                "/api/sendText",
                "send text",
                api_key=api_key,
                json={"chatId": chat_id, "text": text, "session": session_name},
            )
        except GatewayError as e:
            logger.error(
                "WhatsApp send failed: %s",
                e.message,
                extra={
                    "session_name": session_name,
                    "upstream_status": e.upstream_status,
                },
            )
            return False
        return True
