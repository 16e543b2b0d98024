"""
Method/computed executor - invokes user functions bound to a model.

Sync functions, coroutine functions and functions returning awaitables all
produce one awaited outcome. Exceptions raised by user code propagate
unchanged. Deferred field values read from records are settled the same way.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable


async def settle(outcome: Any) -> Any:
    """Await outcome if it is awaitable, else return it."""
    if inspect.isawaitable(outcome):
        return await outcome
    return outcome


async def execute_method(
    fn: Callable[..., Any],
    instance: Any,
    params: Any,
    context: Any,
) -> Any:
    """
    Invoke a method once as fn(instance, params, context).

    Args:
        fn: The method registered on the model
        instance: The record the method is called on (None at the root)
        params: Parameter bag from the query, {} when none was given
        context: Caller-supplied execution context

    Returns:
        The method's (awaited) return value
    """
    return await settle(fn(instance, params, context))


async def execute_computed(
    fn: Callable[..., Any],
    instance: Any,
    context: Any,
) -> Any:
    """Invoke a computed field once as fn(instance, context)."""
    return await settle(fn(instance, context))
