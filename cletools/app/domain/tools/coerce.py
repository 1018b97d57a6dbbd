"""Strict parsers for raw configuration property values.

Each parser raises TypeError or ValueError on input it cannot interpret;
the snapshot builder catches those and falls back to the field default.
"""
from __future__ import annotations

from typing import Any


def parse_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return str(value)
    raise TypeError(f"expected a string, got {type(value).__name__}")


def parse_positive_int(value: Any) -> int:
    # bool is an int subclass; True must not become a frame height of 1
    if isinstance(value, bool):
        raise TypeError("expected an integer, got bool")
    if isinstance(value, int):
        result = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected an integer, got {value!r}")
        result = int(value)
    elif isinstance(value, str):
        result = int(value.strip())
    else:
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    if result <= 0:
        raise ValueError(f"expected a positive integer, got {result}")
    return result


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise ValueError(f"expected 'true' or 'false', got {value!r}")
    raise TypeError(f"expected a boolean, got {type(value).__name__}")


def parse_str_list(value: Any) -> tuple[str, ...]:
    """Parse a list of identifiers.

    A plain string is treated as a comma-separated list, unlike Sling's
    ``PropertiesUtil.toStringArray`` which keeps it as a single entry.
    Duplicates collapse to their first occurrence so the result keeps
    configuration order.
    """
    if isinstance(value, str):
        items = [part.strip() for part in value.split(",")]
        items = [item for item in items if item]
    elif isinstance(value, (list, tuple)):
        items = []
        for item in value:
            if item is None:
                continue
            if not isinstance(item, str):
                raise TypeError(f"expected string entries, got {type(item).__name__}")
            items.append(item)
    else:
        raise TypeError(f"expected a list of strings, got {type(value).__name__}")
    return tuple(dict.fromkeys(items))
