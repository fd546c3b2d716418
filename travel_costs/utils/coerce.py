"""Prevody hodnôt snímok / Snapshot value coercion helpers.

Výpočty pracujú s ORM riadkami, pydantic schémami aj obyčajnými dict-mi.
Calculations accept ORM rows, pydantic schemas and plain dicts alike.
"""

import math
from collections.abc import Mapping


def get_field(obj, name: str, default=None):
    """Atribút alebo kľúč / Attribute or mapping key."""
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def to_float(value) -> float:
    """Číslo alebo 0.0 / Number or 0.0 for missing or non-numeric input."""
    if value is None:
        return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(result):
        return 0.0
    return result


def enum_value(value):
    """Hodnota enumu alebo samotný reťazec / Enum value or the raw string."""
    return value.value if hasattr(value, "value") else value
