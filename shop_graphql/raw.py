"""
Raw Document Accessors — Checked reads over the parsed-but-untyped JSON tree.

The decoder never assumes a key holds a given shape. Every structural read
goes through one of these helpers, which either return the value or raise
MalformedElement naming what was expected and what was found.
"""

from typing import Any, Dict, List, Optional

from .errors import MalformedElement


def type_name(value: Any) -> str:
    """JSON-flavoured name of a raw value's type, for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def expect_mapping(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise MalformedElement(f"expected object for {what}, got {type_name(value)}")
    return value


def optional_list(fields: Dict[str, Any], key: str) -> List[Any]:
    """Return fields[key] as a list; absent or null reads as empty."""
    value = fields.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedElement(f"expected array for {key}, got {type_name(value)}")
    return value


def optional_string(fields: Dict[str, Any], key: str, default: str = "") -> str:
    """Return fields[key] as a string; only an absent key reads as the default."""
    if key not in fields:
        return default
    value = fields[key]
    if not isinstance(value, str):
        raise MalformedElement(f"expected string for {key}, got {type_name(value)}")
    return value


def optional_mapping(fields: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    value = fields.get(key)
    if value is None:
        return None
    return expect_mapping(value, key)
