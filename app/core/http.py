"""HTTP client factory for external API calls.

Provides per-service HTTP clients with connection pooling, timeouts,
and proper resource management.
"""

import httpx

# Default timeout configuration (seconds)
DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_READ_TIMEOUT = 10.0
DEFAULT_WRITE_TIMEOUT = 10.0
DEFAULT_POOL_TIMEOUT = 5.0

# Module-level client storage for singleton pattern
_gateway_client: httpx.AsyncClient | None = None


def create_http_client(
    base_url: str = "",
    max_connections: int = 20,
    max_keepalive_connections: int = 10,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: float = DEFAULT_READ_TIMEOUT,
    write_timeout: float = DEFAULT_WRITE_TIMEOUT,
    pool_timeout: float = DEFAULT_POOL_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create a configured async HTTP client.

    Args:
        base_url: Base URL for all requests (empty string for none)
        max_connections: Maximum number of concurrent connections
        max_keepalive_connections: Maximum idle connections to keep alive
        connect_timeout: Timeout for establishing connection
        read_timeout: Timeout for reading response
        write_timeout: Timeout for sending request
        pool_timeout: Timeout for acquiring connection from pool
        transport: Optional custom transport (e.g. httpx.MockTransport in tests)

    Returns:
        Configured httpx.AsyncClient instance
    """
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(
            connect=connect_timeout,
            read=read_timeout,
            write=write_timeout,
            pool=pool_timeout,
        ),
        limits=httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        ),
        transport=transport,
    )


def get_gateway_client() -> httpx.AsyncClient:
    """Get singleton HTTP client for the messaging gateway.

    The gateway base URL is operator-configured and may change between
    requests, so the client carries no base_url; every call passes an
    absolute URL. Close via close_gateway_client() on shutdown.
    """
    global _gateway_client
    if _gateway_client is None:
        from app.core.settings import get_settings

        timeout = get_settings().waha_timeout_seconds
        _gateway_client = create_http_client(
            max_connections=50,
            max_keepalive_connections=10,
            read_timeout=timeout,
            write_timeout=timeout,
        )
    return _gateway_client


async def close_gateway_client() -> None:
    """Close the gateway HTTP client and release resources."""
    global _gateway_client
    if _gateway_client is not None:
        await _gateway_client.aclose()
        _gateway_client = None
