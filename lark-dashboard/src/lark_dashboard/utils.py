"""Utility functions: JSON argument parsing, None-stripping, log redaction."""

import json
from enum import Enum

from .validation import ValidationError


def safe_json(val):
    """Parse JSON string, or return as-is if already deserialized.

    FastMCP's pre_parse_json() auto-deserializes Optional[str] params
    that look like JSON. This helper handles both cases safely.
    """
    if val is None:
        return None
    if isinstance(val, (dict, list)):
        return val  # already deserialized by FastMCP
    if isinstance(val, str):
        return json.loads(val)
    return val


def enum_value(val):
    """Enum member → its wire value; anything else unchanged."""
    return val.value if isinstance(val, Enum) else val


def parse_enum(enum_cls, value, label: str):
    """Accept a member, its value, or its name in any case ("sum", "Sum", "SUM").

    Raises ValidationError listing the accepted names.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        pass
    text = str(value).strip()
    for member in enum_cls:
        if str(member.value).lower() == text.lower():
            return member
    key = text.upper().replace("-", "_").replace(" ", "_")
    if key in enum_cls.__members__:
        return enum_cls[key]
    names = ", ".join(m.lower() for m in enum_cls.__members__)
    raise ValidationError(f"Unknown {label}: {value}. Use one of: {names}")


def compact(d: dict) -> dict:
    """Drop keys whose value is None (the wire format omits unset fields)."""
    return {k: v for k, v in d.items() if v is not None}


def redact(data):
    """Deep-copy a request/response structure with credentials masked."""
    if isinstance(data, dict):
        return {k: ("[REDACTED]" if k.lower() in _SECRET_KEYS else redact(v))
                for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [redact(v) for v in data]
    return data


_SECRET_KEYS = {"authorization", "public_link_password", "app_secret"}


def env_flag(value) -> bool:
    """Truthy environment value: 1, true, yes, on (any case)."""
    return (value or "").strip().lower() in ("1", "true", "yes", "on")
