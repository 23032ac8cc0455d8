"""Messaging gateway exceptions."""

from app.core.exceptions import ExternalServiceError, ServiceUnavailableError


class GatewayError(ExternalServiceError):
    """Raised when the gateway is unreachable or answers with a non-2xx status.

    The upstream status and body are kept for logging only; the message sent
    to clients never includes the body.
    """

    error_type = "gateway_error"

    def __init__(
        self,
        message: str = "Messaging gateway error",
        *,
        upstream_status: int | None = None,
        upstream_body: str | None = None,
    ):
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body
        super().__init__(message)


class GatewayNotConfiguredError(ServiceUnavailableError):
    """Raised when no gateway base URL or session name is configured."""

    error_type = "gateway_not_configured"

    def __init__(self, message: str = "WhatsApp gateway is not configured"):
        super().__init__(message)
