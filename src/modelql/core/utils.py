"""
Utility functions for ModelQL.

Includes:
- Value classification (record / list / scalar)
- Record field access for mappings and plain objects
- Writing into the result tree at an explicit path
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Sequence


# =============================================================================
# Value classification
# =============================================================================

_SCALAR_TYPES = (str, bytes, bytearray, int, float, complex, bool, Enum)


def is_list_value(value: Any) -> bool:
    """True for ordered sequences resolved element by element (list and tuple)."""
    return isinstance(value, (list, tuple))


def is_record(value: Any) -> bool:
    """
    True for structured records: mappings and plain object instances.

    Scalars, sequences, callables and classes are not records.

    Examples:
        {"a": 1}          -> True
        User(name="x")    -> True
        "abc", 1, [1, 2]  -> False
    """
    if isinstance(value, Mapping):
        return True
    if value is None or isinstance(value, _SCALAR_TYPES) or is_list_value(value):
        return False
    if isinstance(value, type) or callable(value):
        return False
    return hasattr(value, "__dict__") or hasattr(value, "__slots__")


def get_field(record: Any, name: str) -> Any:
    """
    Read a field from a record.

    Mappings are read by key, other objects by attribute. Missing -> None.
    """
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


# =============================================================================
# Result tree writes
# =============================================================================


def set_path(result: dict, path: Sequence[Any], value: Any) -> None:
    """
    Write value into the result tree at path.

    Missing dict keys along the way are created as dicts. Integer parts
    index into lists that must already be sized.

    Example:
        result = {}
        set_path(result, ["root", "a"], 1)
        -> {"root": {"a": 1}}
    """
    if not path:
        raise ValueError("Cannot write at an empty path")

    target: Any = result
    for part in path[:-1]:
        if isinstance(target, list):
            target = target[part]
            continue
        if target.get(part) is None:
            target[part] = {}
        target = target[part]

    target[path[-1]] = value
