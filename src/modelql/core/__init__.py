"""
Core module - definitions, query types, registry and errors.
"""

from __future__ import annotations

from .defs import (
    SCALAR,
    DynamicSpec,
    FieldSpec,
    Model,
    ModelRef,
    ScalarSpec,
    to_field_spec,
)
from .errors import (
    CannotQuerySubfieldsOnScalar,
    InvalidFieldSpec,
    InvalidQuery,
    ModelQLError,
    UnknownField,
    UnknownModel,
)
from .query_types import (
    DEFAULT_PARAMS_KEY,
    LeafSelection,
    Selection,
    SubSelection,
    parse_query,
    parse_selection,
)
from .registry import ModelRegistry

__all__ = [
    # Definitions
    "SCALAR",
    "ScalarSpec",
    "ModelRef",
    "DynamicSpec",
    "FieldSpec",
    "Model",
    "to_field_spec",
    # Errors
    "ModelQLError",
    "InvalidFieldSpec",
    "CannotQuerySubfieldsOnScalar",
    "UnknownModel",
    "UnknownField",
    "InvalidQuery",
    # Query types
    "DEFAULT_PARAMS_KEY",
    "LeafSelection",
    "SubSelection",
    "Selection",
    "parse_query",
    "parse_selection",
    # Registry
    "ModelRegistry",
]
