"""Mobile number formats.

Only Indian numbers are supported: a 10-digit local number starting with
6-9, stored as ``+91XXXXXXXXXX`` and addressed on WhatsApp as
``91XXXXXXXXXX@c.us``.
"""

import re

COUNTRY_CODE = "91"
WHATSAPP_USER_SUFFIX = "@c.us"

# [0-9] rather than \d: \d also matches non-ASCII digits.
LOCAL_MOBILE_RE = re.compile(r"[6-9][0-9]{9}")
FULL_MOBILE_RE = re.compile(rf"\+{COUNTRY_CODE}[6-9][0-9]{{9}}")
# Profile edits accept any 10 digits after the country code.
PROFILE_MOBILE_RE = re.compile(rf"\+{COUNTRY_CODE}[0-9]{{10}}")


def is_valid_local_mobile(value: str | None) -> bool:
    return bool(value) and LOCAL_MOBILE_RE.fullmatch(value) is not None


def is_valid_full_mobile(value: str | None) -> bool:
    return bool(value) and FULL_MOBILE_RE.fullmatch(value) is not None


def is_valid_profile_mobile(value: str | None) -> bool:
    return bool(value) and PROFILE_MOBILE_RE.fullmatch(value) is not None


def to_full_mobile(local_mobile: str) -> str:
    """``9876543210`` -> ``+919876543210``."""
    return f"+{COUNTRY_CODE}{local_mobile}"


def to_whatsapp_chat_id(full_mobile: str) -> str:
    """``+919876543210`` -> ``919876543210@c.us``."""
    return f"{full_mobile.lstrip('+')}{WHATSAPP_USER_SUFFIX}"
