"""
Coercion rules for loosely-typed LLM JSON.

The model is trusted for intent, not for format. Every field goes through one
of these functions; the fallback for each type is:

    string          -> field default ("" or e.g. "Untitled recipe")
    optional string -> None (numbers become strings)
    string list     -> [] ; non-string and blank elements dropped
    bool            -> False ; only real JSON booleans count
    enum            -> field default when the value is not an allowed choice
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple


def coerce_str(value: Any, default: str = "") -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def coerce_optional_str(value: Any) -> Optional[str]:
    # bool is an int subclass; "True" servings make no sense
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def coerce_str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def coerce_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    return default


def coerce_choice(value: Any, choices: Iterable[str], default: str) -> str:
    if isinstance(value, str):
        candidate = value.strip().lower()
        if candidate in choices:
            return candidate
    return default


Coercer = Callable[[Any], Any]

# (key in the LLM reply, coercer) per model field
FieldPolicy = Mapping[str, Tuple[str, Coercer]]


def normalize_fields(data: Mapping[str, Any], policy: FieldPolicy) -> Dict[str, Any]:
    """
    Apply a field policy table to a parsed JSON object.
    Returns a dict keyed by model field name; unknown keys are ignored.
    """
    return {field: coerce(data.get(key)) for field, (key, coerce) in policy.items()}
