"""
Custom exceptions for the ModelQL engine.

Errors raised by user code (methods, computed fields, hooks) are never
wrapped in these; they reach the caller of ``Runtime.execute`` unchanged.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


def format_path(path: Sequence[Any]) -> str:
    """Render a result path as a dotted string: ("Query", "users", 0) -> "Query.users.0"."""
    return ".".join(str(part) for part in path)


class ModelQLError(Exception):
    """Base exception for all engine errors."""

    code = "MODELQL_ERROR"

    def __init__(self, message: str, path: Sequence[Any] = ()):
        self.path = tuple(path)
        super().__init__(message)


class InvalidFieldSpec(ModelQLError):
    """Raised when a field or return spec does not resolve to "*" or a registered model."""

    code = "INVALID_FIELD_SPEC"

    def __init__(self, spec: Any, path: Sequence[Any] = ()):
        self.spec = spec
        message = f"Invalid field spec: {spec!r}"
        if path:
            message += f" - path: {format_path(path)}"
        super().__init__(message, path)


class CannotQuerySubfieldsOnScalar(ModelQLError):
    """Raised when a sub-selection is requested on a scalar value."""

    code = "CANNOT_QUERY_SUBFIELDS_ON_SCALAR"

    def __init__(self, model: str, path: Sequence[Any] = ()):
        self.model = model
        super().__init__(f"Cannot query scalar as {model} - path: {format_path(path)}", path)


class UnknownModel(ModelQLError):
    """Raised when a model name is not registered."""

    code = "UNKNOWN_MODEL"

    def __init__(self, model: str, path: Sequence[Any] = ()):
        self.model = model
        message = f"Model '{model}' not found"
        if path:
            message += f" - path: {format_path(path)}"
        super().__init__(message, path)


class UnknownField(ModelQLError):
    """Raised when a query references a name the model does not define."""

    code = "UNKNOWN_FIELD"

    def __init__(self, model: str, field: str, path: Sequence[Any] = ()):
        self.model = model
        self.field = field
        super().__init__(
            f"Model '{model}' has no field, method or computed '{field}' - path: {format_path(path)}",
            path,
        )


class InvalidQuery(ModelQLError):
    """Raised when a query fragment is neither a leaf selection nor a mapping."""

    code = "INVALID_QUERY"

    def __init__(self, query: Any, path: Sequence[Any] = (), reason: Optional[str] = None):
        self.query = query
        message = reason or f"Invalid query: {query!r}"
        if path:
            message += f" - path: {format_path(path)}"
        super().__init__(message, path)
