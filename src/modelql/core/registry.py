"""
Model registry - name -> Model definition map owned by one Runtime.

Registration normalizes raw declarations into FieldSpecs:

    registry = ModelRegistry()
    registry.register("User", fields={"id": 1, "address": {"city": 1}, "friends": "User"})

Inline mapping declarations (address above) are compiled into anonymous
models named "<Model>.<field>" and registered alongside their parent.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from .defs import FieldSpec, Model, ModelRef, to_field_spec
from .errors import InvalidFieldSpec, UnknownModel

logger = logging.getLogger(__name__)


class ModelRegistry:
    """
    Stores models by name.

    Duplicate registration replaces the previous model (last write wins) and
    logs a warning. Definitions are never merged.
    """

    def __init__(self):
        self._models: dict[str, Model] = {}

    def register(
        self,
        name: str,
        fields: Optional[Mapping[str, Any]] = None,
        methods: Optional[Mapping[str, Callable[..., Any]]] = None,
        computed: Optional[Mapping[str, Callable[..., Any]]] = None,
        returns: Optional[Mapping[str, Any]] = None,
    ) -> Model:
        """
        Register a model under name and return it.

        The model and its inline models are compiled first and stored only
        once the whole definition is valid.

        Raises:
            InvalidFieldSpec: if a field or return declaration has an invalid shape
        """
        if not isinstance(name, str) or not name:
            raise ValueError(f"Model name must be a non-empty string, got {name!r}")

        staged: dict[str, Model] = {}
        self._compile_model(name, fields, methods, computed, returns, staged)

        for model_name, model in staged.items():
            if model_name in self._models:
                logger.warning(f"Model '{model_name}' is already registered, replacing it")
            self._models[model_name] = model
            logger.info(f"Registered model: {model_name}")
        return staged[name]

    def _compile_model(
        self,
        name: str,
        fields: Optional[Mapping[str, Any]],
        methods: Optional[Mapping[str, Callable[..., Any]]],
        computed: Optional[Mapping[str, Callable[..., Any]]],
        returns: Optional[Mapping[str, Any]],
        staged: dict[str, Model],
    ) -> Model:
        """Build a model into staged, inline models included."""
        model = Model(
            name=name,
            fields={
                field_name: self._compile_field(name, field_name, raw, staged)
                for field_name, raw in (fields or {}).items()
            },
            methods=self._check_callables(name, "method", methods),
            computed=self._check_callables(name, "computed", computed),
            returns={
                method_name: to_field_spec(raw)
                for method_name, raw in (returns or {}).items()
            },
        )
        staged[name] = model
        return model

    def _compile_field(
        self,
        model_name: str,
        field_name: str,
        raw: Any,
        staged: dict[str, Model],
    ) -> FieldSpec:
        """Compile one field declaration, staging inline models as needed."""
        if isinstance(raw, Mapping):
            inline_name = f"{model_name}.{field_name}"
            self._compile_model(inline_name, raw, None, None, None, staged)
            return ModelRef(inline_name)
        try:
            return to_field_spec(raw)
        except InvalidFieldSpec as e:
            raise InvalidFieldSpec(raw, path=(model_name, field_name)) from e

    def _check_callables(
        self,
        model_name: str,
        kind: str,
        entries: Optional[Mapping[str, Callable[..., Any]]],
    ) -> dict[str, Callable[..., Any]]:
        checked = dict(entries or {})
        for entry_name, fn in checked.items():
            if not callable(fn):
                raise TypeError(f"{model_name}.{entry_name}: {kind} must be callable, got {fn!r}")
        return checked

    def get(self, name: str) -> Model:
        """
        Get a model by name.

        Raises:
            UnknownModel: if name is not registered
        """
        model = self._models.get(name)
        if model is None:
            raise UnknownModel(name, path=(name,))
        return model

    def find(self, name: Any) -> Optional[Model]:
        """Get a model by name, or None."""
        if not isinstance(name, str):
            return None
        return self._models.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._models

    def __len__(self) -> int:
        return len(self._models)
