"""Shared schema base classes.

The public API speaks camelCase (``isAdmin``, ``wahaBaseUrl``) while Python
code uses snake_case; CamelModel bridges the two.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema accepting and emitting camelCase field names.

    Snake_case names are accepted on input as well.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Generic message response."""

    message: str


class ErrorResponse(BaseModel):
    """Body of every error response.

    ``type`` is the machine-readable kind (``otp_expired``, ``admin_required``,
    ``gateway_error``); ``message`` is safe to show to end users.
    """

    type: str
    message: str
