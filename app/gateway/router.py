"""Gateway domain router.

Admin-only endpoints driving the WhatsApp gateway: session lifecycle, QR
pairing, status polling, group listing and broadcast sends. Connection
parameters come from the request; when no access key is sent the configured
one is used.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from app.auth.dependencies import require_admin
from app.core.constants import CommonResponses, Routes
from app.core.schemas import MessageResponse
from app.gateway.dependencies import GatewayClientDep, GatewayConfigDep
from app.gateway.exceptions import GatewayNotConfiguredError
from app.gateway.schemas import (
    ChatTargetListResponse,
    GatewayTarget,
    QRCodeResponse,
    SendTextRequest,
    SendTextResponse,
    SessionListResponse,
    SessionSummary,
    StartSessionRequest,
    StartSessionResponse,
)

router = APIRouter(
    prefix=Routes.ADMIN_WAHA.prefix,
    tags=[Routes.ADMIN_WAHA.tag],
    dependencies=[Depends(require_admin)],
    responses={
        **CommonResponses.BAD_REQUEST,
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
        **CommonResponses.BAD_GATEWAY,
    },
)


def query_target(
    waha_base_url: Annotated[str, Query(alias="wahaBaseUrl", min_length=1)],
    session_name: Annotated[str, Query(alias="sessionName", min_length=1)],
    waha_api_key: Annotated[str | None, Query(alias="wahaApiKey")] = None,
) -> GatewayTarget:
    return GatewayTarget(
        waha_base_url=waha_base_url,
        session_name=session_name,
        waha_api_key=waha_api_key,
    )


QueryTargetDep = Annotated[GatewayTarget, Depends(query_target)]


@router.get("/sessions", response_model=SessionListResponse)
async def list_sessions(
    waha: GatewayClientDep,
    gateway_config: GatewayConfigDep,
    waha_base_url: Annotated[str, Query(alias="wahaBaseUrl", min_length=1)],
    waha_api_key: Annotated[str | None, Query(alias="wahaApiKey")] = None,
):
    """List all sessions known to the gateway."""
    sessions = await waha.list_sessions(
        waha_base_url, api_key=gateway_config.resolve_api_key(waha_api_key)
    )
    return SessionListResponse(sessions=sessions)


@router.post("/sessions", response_model=StartSessionResponse)
async def start_session(
    body: StartSessionRequest,
    waha: GatewayClientDep,
    gateway_config: GatewayConfigDep,
):
    """Create or start a session.

    An existing session is not an error: the response carries
    ``alreadyExists: true`` and state SCAN_QR_CODE.
    """
    summary = await waha.start_session(
        body.waha_base_url,
        body.session_name,
        config=body.config,
        api_key=gateway_config.resolve_api_key(body.waha_api_key),
    )
    return StartSessionResponse(session=summary, already_exists=summary.already_exists)


@router.delete("/sessions", response_model=MessageResponse)
async def stop_session(
    target: QueryTargetDep,
    waha: GatewayClientDep,
    gateway_config: GatewayConfigDep,
):
    """Stop a running session (it can be started again)."""
    await waha.stop_session(
        target.waha_base_url,
        target.session_name,
        api_key=gateway_config.resolve_api_key(target.waha_api_key),
    )
    return MessageResponse(message="Session stopped successfully")


@router.get("/status", response_model=SessionSummary)
async def session_status(
    target: QueryTargetDep,
    waha: GatewayClientDep,
    gateway_config: GatewayConfigDep,
):
    """Poll one session's state."""
    return await waha.get_status(
        target.waha_base_url,
        target.session_name,
        api_key=gateway_config.resolve_api_key(target.waha_api_key),
    )


@router.get("/qr", response_model=QRCodeResponse)
async def session_qr(
    target: QueryTargetDep,
    waha: GatewayClientDep,
    gateway_config: GatewayConfigDep,
):
    """Pairing QR code as a data URL ready for an <img> tag."""
    qr = await waha.get_qr_image(
        target.waha_base_url,
        target.session_name,
        api_key=gateway_config.resolve_api_key(target.waha_api_key),
    )
    return QRCodeResponse(qr=qr)


@router.post("/logout", response_model=MessageResponse)
async def logout_session(
    body: GatewayTarget,
    waha: GatewayClientDep,
    gateway_config: GatewayConfigDep,
):
    """Unpair the WhatsApp account from the session."""
    await waha.logout(
        body.waha_base_url,
        body.session_name,
        api_key=gateway_config.resolve_api_key(body.waha_api_key),
    )
    return MessageResponse(message="Logged out successfully")


@router.delete("/delete-session")
async def delete_session(
    target: QueryTargetDep,
    waha: GatewayClientDep,
    gateway_config: GatewayConfigDep,
) -> Any:
    """Delete a session from the gateway and relay its acknowledgement."""
    return await waha.delete_session(
        target.waha_base_url,
        target.session_name,
        api_key=gateway_config.resolve_api_key(target.waha_api_key),
    )


@router.post("/groups", response_model=ChatTargetListResponse)
async def list_groups(
    body: GatewayTarget,
    waha: GatewayClientDep,
    gateway_config: GatewayConfigDep,
):
    """Groups and channels the session's account belongs to."""
    targets = await waha.list_groups_and_channels(
        body.waha_base_url,
        body.session_name,
        api_key=gateway_config.resolve_api_key(body.waha_api_key),
    )
    return ChatTargetListResponse(groups=targets)


@router.post("/send-text", response_model=SendTextResponse)
async def send_text(
    body: SendTextRequest,
    waha: GatewayClientDep,
    gateway_config: GatewayConfigDep,
):
    """Broadcast a text message through the configured session."""
    connection = gateway_config.get_connection()
    if not connection.is_complete:
        raise GatewayNotConfiguredError()
    sent = await waha.send_text(
        connection.base_url,
        connection.session_name,
        body.chat_id,
        body.text,
        api_key=connection.api_key,
    )
    return SendTextResponse(sent=sent)
