"""
ModelQL Runtime - owns the model registry and hooks, and executes queries.

Usage:
    from modelql import Runtime

    runtime = Runtime()

    runtime.register(
        "User",
        fields={"id": 1, "name": 1, "address": {"city": 1}},
        computed={"display": lambda user, ctx: user["name"].title()},
    )
    runtime.register(
        "Query",
        methods={"users": lambda _, params, ctx: load_users(**params)},
        returns={"users": "User"},
    )

    result = await runtime.execute(
        "Query",
        {"users": {"$params": {"limit": 10}, "id": 1, "display": 1}},
    )
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from .config import RuntimeConfig
from .core.defs import Model
from .core.query_types import SubSelection, parse_query
from .core.registry import ModelRegistry
from .execution.context import ExecutionContext, TypeHook
from .execution.resolvers import resolve_object

logger = logging.getLogger(__name__)

# fn(model_name, query, context); may be async; raise to abort the execution
BeforeExecuteHook = Callable[[str, SubSelection, Any], Any]

MODEL_DEFINITION_KEYS = {"fields", "methods", "computed", "returns"}


class Runtime:
    """
    Registry of models plus the single execution entry point.

    Each Runtime is independent: models and hooks registered on one are not
    visible to another.
    """

    def __init__(self, config: Optional[RuntimeConfig] = None):
        """
        Initialize runtime.

        Args:
            config: Runtime configuration (defaults to RuntimeConfig())
        """
        self.config = config or RuntimeConfig()
        self.registry = ModelRegistry()
        self.hooks: list[TypeHook] = []
        self.before_execute_hooks: list[BeforeExecuteHook] = []

    # =========================================================================
    # Registration
    # =========================================================================

    def register(
        self,
        name: str,
        definition: Optional[Mapping[str, Any]] = None,
        *,
        fields: Optional[Mapping[str, Any]] = None,
        methods: Optional[Mapping[str, Callable[..., Any]]] = None,
        computed: Optional[Mapping[str, Callable[..., Any]]] = None,
        returns: Optional[Mapping[str, Any]] = None,
    ) -> Model:
        """
        Register a model.

        Accepts either keyword arguments or a single definition mapping:

            runtime.register("User", fields={"id": 1})
            runtime.register("User", {"fields": {"id": 1}})

        Re-registering a name replaces the previous model.
        """
        if definition is not None:
            unknown = set(definition) - MODEL_DEFINITION_KEYS
            if unknown:
                raise ValueError(f"Model '{name}': unknown definition keys {sorted(unknown)}")
            fields = definition.get("fields", fields)
            methods = definition.get("methods", methods)
            computed = definition.get("computed", computed)
            returns = definition.get("returns", returns)

        return self.registry.register(
            name,
            fields=fields,
            methods=methods,
            computed=computed,
            returns=returns,
        )

    def register_hook(self, fn: TypeHook) -> TypeHook:
        """
        Append a type-resolution hook: fn(instance) -> model name | None.

        Hooks run in registration order. Returns fn, so it can be used as a decorator.
        """
        self.hooks.append(fn)
        logger.info(f"Registered type hook: {getattr(fn, '__name__', fn)!r}")
        return fn

    def before_execute(self, fn: BeforeExecuteHook) -> BeforeExecuteHook:
        """
        Append a hook run before every execution: fn(model_name, query, context).

        A hook may be async. Raising aborts the execution with that error.
        Returns fn, so it can be used as a decorator.
        """
        self.before_execute_hooks.append(fn)
        logger.info(f"Registered before-execute hook: {getattr(fn, '__name__', fn)!r}")
        return fn

    def use(self, plugin: Callable[..., Any], **options: Any) -> "Runtime":
        """
        Apply a plugin: plugin(runtime, **options).

        Plugins register models and hooks on this runtime. Returns self for chaining.
        """
        plugin(self, **options)
        return self

    # =========================================================================
    # Lookup
    # =========================================================================

    def model(self, name: str) -> Model:
        """
        Get a registered model.

        Raises:
            UnknownModel: if name is not registered
        """
        return self.registry.get(name)

    def has_model(self, name: str) -> bool:
        return name in self.registry

    # =========================================================================
    # Execution
    # =========================================================================

    async def execute(
        self,
        model_name: str,
        query: Union[Mapping[str, Any], SubSelection],
        context: Any = None,
    ) -> dict[str, Any]:
        """
        Execute a query against a root model.

        Top-level names are usually the root model's methods. The root model
        is resolved without an instance, so its methods receive None.

        Args:
            model_name: Registered root model name
            query: Raw query mapping or parsed SubSelection
            context: Forwarded to methods, computed fields and before-execute hooks

        Returns:
            Result tree with the same shape as the query

        Raises:
            UnknownModel: model_name is not registered
            ModelQLError: any engine-detected violation
            Exception: errors raised by user code, unchanged
        """
        model = self.registry.get(model_name)
        selection = parse_query(query, self.config.params_key, (model_name,))

        for hook in self.before_execute_hooks:
            outcome = hook(model_name, selection, context)
            if inspect.isawaitable(outcome):
                await outcome

        ctx = ExecutionContext(
            registry=self.registry,
            hooks=tuple(self.hooks),
            config=self.config,
            context=context,
        )

        logger.debug(f"Executing query on {model_name}: {list(selection.fields)}")
        await resolve_object(None, model, selection, ctx, (model_name,))
        return ctx.result[model_name]
