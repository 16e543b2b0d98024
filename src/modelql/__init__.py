"""
ModelQL - schema-driven hierarchical query execution engine.

Register models (fields, methods, computed fields) on a Runtime, then
execute nested query documents against live data:

Usage:
    from modelql import Runtime

    runtime = Runtime()
    runtime.register("Query", methods={"hello": lambda _, params, ctx: "world"})

    result = await runtime.execute("Query", {"hello": 1})
    # {"hello": "world"}
"""

from __future__ import annotations

from .config import RuntimeConfig
from .core import (
    SCALAR,
    CannotQuerySubfieldsOnScalar,
    DEFAULT_PARAMS_KEY,
    DynamicSpec,
    FieldSpec,
    InvalidFieldSpec,
    InvalidQuery,
    LeafSelection,
    Model,
    ModelQLError,
    ModelRef,
    ModelRegistry,
    ScalarSpec,
    Selection,
    SubSelection,
    UnknownField,
    UnknownModel,
    parse_query,
)
from .execution import ExecutionContext
from .runtime import Runtime

__version__ = "0.1.0"

__all__ = [
    # Runtime
    "Runtime",
    "RuntimeConfig",
    "ExecutionContext",
    # Definitions
    "SCALAR",
    "ScalarSpec",
    "ModelRef",
    "DynamicSpec",
    "FieldSpec",
    "Model",
    "ModelRegistry",
    # Query types
    "DEFAULT_PARAMS_KEY",
    "LeafSelection",
    "SubSelection",
    "Selection",
    "parse_query",
    # Errors
    "ModelQLError",
    "InvalidFieldSpec",
    "CannotQuerySubfieldsOnScalar",
    "UnknownModel",
    "UnknownField",
    "InvalidQuery",
]
