"""
Type resolver - derives a TypeTag ("*" or a registered model name) for a value.

Two sources of type evidence:
- Static: a declared FieldSpec (field spec or method return spec)
- Dynamic: the runtime's ordered hook list, consulted only when no static
  spec is declared
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Sequence, Union

from ..core.defs import SCALAR, DynamicSpec, FieldSpec, ModelRef, ScalarSpec, to_field_spec
from ..core.errors import CannotQuerySubfieldsOnScalar, InvalidFieldSpec
from ..core.query_types import LeafSelection, SubSelection
from .context import ExecutionContext

logger = logging.getLogger(__name__)


def _coerce(raw: Any, path: Sequence[Any], allow_dynamic: bool) -> FieldSpec:
    try:
        return to_field_spec(raw, allow_dynamic=allow_dynamic)
    except InvalidFieldSpec:
        raise InvalidFieldSpec(raw, path) from None


def resolve_type(
    value: Any,
    selection: Union[LeafSelection, SubSelection, None],
    spec: Any,
    ctx: ExecutionContext,
    path: Sequence[Any],
    model_name: str,
) -> str:
    """
    Resolve a declared spec to a TypeTag.

    Args:
        value: The value being typed, passed to dynamic specs
        selection: What the query asks for at this path
        spec: FieldSpec or raw declaration (1, "*", "Model", callable)
        ctx: Execution context (for the registry)
        path: Result path of the value, for error messages
        model_name: Enclosing model name, for error messages

    Returns:
        "*" or a registered model name

    Raises:
        InvalidFieldSpec: spec (or a dynamic spec's result) is not scalar or a registered model
        CannotQuerySubfieldsOnScalar: nested fields were requested on a scalar spec
    """
    spec = _coerce(spec, path, allow_dynamic=True)

    # Dynamic specs are evaluated once; their result must be final
    if isinstance(spec, DynamicSpec):
        raw = spec.fn(value)
        if raw is None:
            raise InvalidFieldSpec(raw, path)
        spec = _coerce(raw, path, allow_dynamic=False)

    if isinstance(spec, ScalarSpec):
        # A sub-selection carrying params and no fields counts as a leaf
        if isinstance(selection, SubSelection) and (selection.has_fields or selection.params is None):
            raise CannotQuerySubfieldsOnScalar(model_name, path)
        return SCALAR

    if isinstance(spec, ModelRef):
        if spec.name not in ctx.registry:
            raise InvalidFieldSpec(spec.name, path)
        return spec.name

    raise InvalidFieldSpec(spec, path)


def infer_identity(value: Any, ctx: ExecutionContext) -> Optional[str]:
    """
    Infer the model of a record without static type evidence.

    Hooks run in registration order; the first one returning a name wins and
    later hooks are not called. Without a hook match, an object whose class
    name is a registered model resolves to that model (when enabled).

    Returns:
        A model name, or None to treat the value as scalar
    """
    for hook in ctx.hooks:
        name = hook(value)
        if name is not None:
            logger.debug(f"Hook {getattr(hook, '__name__', hook)!r} resolved value as {name}")
            return name

    if ctx.config.class_name_identity and not isinstance(value, Mapping):
        class_name = type(value).__name__
        if class_name in ctx.registry:
            logger.debug(f"Resolved {class_name} instance by class name")
            return class_name

    return None
