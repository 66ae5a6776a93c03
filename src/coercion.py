"""
Coercion of loosely-typed extra configuration.

Callers declare extra configuration as string values. Before transmission
each value is coerced: "true"/"false" become booleans, strings that parse
cleanly as an integer become ints, anything else stays a string. Values that
are already typed pass through, so coercing twice is a no-op.
"""

import copy
import re
from typing import Any, Dict, Mapping, Optional, Union

ConfigValue = Union[str, int, bool]

_INTEGER = re.compile(r"[+-]?[0-9]+")


def coerce_value(value: Any) -> Any:
    """Coerce a single declared value."""
    if not isinstance(value, str):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    if _INTEGER.fullmatch(value):
        return int(value)
    return value


def coerce_mapping(
    values: Optional[Mapping[str, ConfigValue]],
) -> Dict[str, ConfigValue]:
    """Coerce every value of a declared mapping, keeping key order."""
    if not values:
        return {}
    return {key: coerce_value(value) for key, value in values.items()}


def apply_defaults(
    values: Dict[str, Any], defaults: Optional[Mapping[str, Any]]
) -> Dict[str, Any]:
    """
    Fill keys missing from ``values`` with a copy of their default.

    Keys the caller declared are never overwritten.

    Args:
        values: Coerced extra configuration, modified in place.
        defaults: Default value per required key, or None.

    Returns:
        The same ``values`` dict.
    """
    for key, default in (defaults or {}).items():
        if key not in values:
            values[key] = copy.deepcopy(default)
    return values
