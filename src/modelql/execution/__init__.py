"""
Execution module - query resolution pipeline.
"""

from __future__ import annotations

from .context import ExecutionContext, TypeHook
from .executor import execute_computed, execute_method, settle
from .resolvers import resolve_object, resolve_value
from .type_resolver import infer_identity, resolve_type

__all__ = [
    "ExecutionContext",
    "TypeHook",
    "execute_method",
    "execute_computed",
    "settle",
    "resolve_type",
    "infer_identity",
    "resolve_value",
    "resolve_object",
]
