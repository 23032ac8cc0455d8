"""
App-wide constants for route configuration.

This module provides a single source of truth for route prefixes, tags,
and common response definitions for API routes.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.core.schemas import ErrorResponse


@dataclass(frozen=True)
class RouteConfig:
    """Configuration for a route group."""

    prefix: str
    tag: str


class Routes:
    """Route configurations for all API endpoints."""

    AUTH = RouteConfig(prefix="/auth", tag="auth")
    OTP = RouteConfig(prefix="/otp", tag="otp")
    ADMIN_USERS = RouteConfig(prefix="/admin/users", tag="admin-users")
    ADMIN_SETTINGS = RouteConfig(prefix="/admin/settings", tag="admin-settings")
    ADMIN_WAHA = RouteConfig(prefix="/admin/waha", tag="admin-waha")
    HEALTH = RouteConfig(prefix="/health", tag="health")


# Admin UI (SQLAdmin) mount point; kept apart from the /admin API prefix.
ADMIN_UI_PATH = "/admin-ui"


# Common response definitions for reuse across routers
# Use these when configuring APIRouter or individual endpoints
class CommonResponses:
    """Standard HTTP error response definitions for OpenAPI documentation."""

    UNAUTHORIZED: dict[int, dict[str, Any]] = {
        401: {
            "model": ErrorResponse,
            "description": "Not authenticated or invalid credentials",
        }
    }
    FORBIDDEN: dict[int, dict[str, Any]] = {
        403: {
            "model": ErrorResponse,
            "description": "User lacks admin privileges",
        }
    }
    NOT_FOUND: dict[int, dict[str, Any]] = {
        404: {
            "model": ErrorResponse,
            "description": "Resource not found",
        }
    }
    CONFLICT: dict[int, dict[str, Any]] = {
        409: {
            "model": ErrorResponse,
            "description": "Resource already exists",
        }
    }
    BAD_REQUEST: dict[int, dict[str, Any]] = {
        400: {
            "model": ErrorResponse,
            "description": "Invalid request data",
        }
    }
    TOO_MANY_REQUESTS: dict[int, dict[str, Any]] = {
        429: {
            "model": ErrorResponse,
            "description": "Requested again before the cooldown elapsed",
        }
    }
    BAD_GATEWAY: dict[int, dict[str, Any]] = {
        502: {
            "model": ErrorResponse,
            "description": "Messaging gateway unreachable or rejected the call",
        }
    }


# HTML email templates
EmailTemplatesDir = Path(__file__).parent.parent / "templates" / "emails"

JinjaEmailTemplatesEnv = Environment(
    loader=FileSystemLoader(str(EmailTemplatesDir)),
    autoescape=select_autoescape(["html", "xml"]),
)
