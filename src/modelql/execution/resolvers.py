"""
Value and object resolvers - walk data against a query and fill the result tree.

Handles:
- Dispatch across scalar, single record and list of records
- Method, computed and declared field members of a model
- Dynamic identity for values without a declared type

Every resolver writes at an explicit path into ctx.result. Sibling members
and list elements own disjoint paths, so they may run concurrently.
"""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Any, Awaitable, Callable, Optional, Sequence, Union

from ..core.defs import SCALAR, Model
from ..core.errors import CannotQuerySubfieldsOnScalar, InvalidFieldSpec, InvalidQuery, UnknownField
from ..core.query_types import LeafSelection, SubSelection
from ..core.utils import get_field, is_list_value, is_record, set_path
from .context import ExecutionContext
from .executor import execute_computed, execute_method, settle
from .type_resolver import infer_identity, resolve_type

logger = logging.getLogger(__name__)

Selection = Union[LeafSelection, SubSelection]


async def _run_all(ctx: ExecutionContext, jobs: list[Callable[[], Awaitable[Any]]]) -> None:
    """
    Run resolution jobs, fail-fast.

    Concurrent mode gathers all jobs and cancels the ones still pending when
    the first one fails. Sequential mode runs them in order.
    """
    if not ctx.config.concurrent or len(jobs) < 2:
        for job in jobs:
            await job()
        return

    tasks = [asyncio.ensure_future(job()) for job in jobs]
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        raise


async def resolve_value(
    value: Any,
    type_tag: str,
    selection: Optional[Selection],
    ctx: ExecutionContext,
    path: Sequence[Any],
) -> None:
    """
    Write value at path according to its resolved type.

    - None -> None
    - "*" -> value as-is
    - model + list -> list of resolved objects, same length and order
    - model + record -> resolved object
    - model + anything else -> CannotQuerySubfieldsOnScalar
    """
    if value is None:
        set_path(ctx.result, path, None)
        return

    if type_tag == SCALAR:
        set_path(ctx.result, path, value)
        return

    model = ctx.registry.find(type_tag)
    if model is None:
        raise InvalidFieldSpec(type_tag, path)

    if is_list_value(value):
        set_path(ctx.result, path, [None] * len(value))
        await _run_all(ctx, [
            partial(_resolve_element, item, model, selection, ctx, (*path, index))
            for index, item in enumerate(value)
        ])
        return

    if not is_record(value):
        raise CannotQuerySubfieldsOnScalar(model.name, path)

    await resolve_object(value, model, selection, ctx, path)


async def _resolve_element(
    item: Any,
    model: Model,
    selection: Optional[Selection],
    ctx: ExecutionContext,
    path: Sequence[Any],
) -> None:
    """Resolve one list element as an object of model."""
    if item is None:
        return  # slot is pre-filled with None
    if not is_record(item):
        raise CannotQuerySubfieldsOnScalar(model.name, path)
    await resolve_object(item, model, selection, ctx, path)


async def resolve_object(
    value: Any,
    model: Model,
    selection: Optional[Selection],
    ctx: ExecutionContext,
    path: Sequence[Any],
) -> None:
    """
    Resolve one record against a sub-selection of model members.

    The output mapping is created with every requested key set to None,
    in query order, before any member is resolved.

    Raises:
        InvalidQuery: selection is not a mapping of field names
        UnknownField: a requested name is not a method, computed or field of model
    """
    if not isinstance(selection, SubSelection):
        raise InvalidQuery(
            selection,
            path,
            reason=f"Selection on model '{model.name}' must be a mapping of field names",
        )

    set_path(ctx.result, path, {name: None for name in selection.fields})
    await _run_all(ctx, [
        partial(_resolve_member, value, model, name, sub, ctx, (*path, name))
        for name, sub in selection.fields.items()
    ])


async def _resolve_member(
    value: Any,
    model: Model,
    name: str,
    selection: Selection,
    ctx: ExecutionContext,
    path: Sequence[Any],
) -> None:
    """Resolve one requested name: method, then computed, then declared field."""
    type_tag: Optional[str] = None

    if name in model.methods:
        params = {}
        if isinstance(selection, SubSelection) and selection.params is not None:
            params = selection.params
        logger.debug(f"Calling method {model.name}.{name}")
        data = await execute_method(model.methods[name], value, params, ctx.context)
        spec = model.returns.get(name)
        if spec is not None:
            type_tag = resolve_type(data, selection, spec, ctx, path, model.name)

    elif name in model.computed:
        logger.debug(f"Computing {model.name}.{name}")
        data = await execute_computed(model.computed[name], value, ctx.context)
        spec = model.fields.get(name)
        if spec is not None:
            type_tag = resolve_type(data, selection, spec, ctx, path, model.name)

    elif name in model.fields:
        data = await settle(get_field(value, name))
        type_tag = resolve_type(data, selection, model.fields[name], ctx, path, model.name)

    else:
        raise UnknownField(model.name, name, path)

    if type_tag is None:
        await _resolve_untyped(data, selection, ctx, path)
    else:
        await resolve_value(data, type_tag, selection, ctx, path)


async def _resolve_untyped(
    data: Any,
    selection: Selection,
    ctx: ExecutionContext,
    path: Sequence[Any],
) -> None:
    """
    Resolve a value that has no declared type.

    A leaf selection takes the value as-is. Records are typed by the hook
    list (see infer_identity) and fall back to scalar; lists are typed
    element by element.
    """
    if data is None or not isinstance(selection, SubSelection):
        set_path(ctx.result, path, data)
        return

    if is_list_value(data):
        set_path(ctx.result, path, [None] * len(data))
        await _run_all(ctx, [
            partial(_resolve_untyped, item, selection, ctx, (*path, index))
            for index, item in enumerate(data)
        ])
        return

    type_tag = infer_identity(data, ctx) if is_record(data) else None
    await resolve_value(data, type_tag or SCALAR, selection, ctx, path)
