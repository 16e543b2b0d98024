"""
Core dataclass definitions for ModelQL.

These define the schema structure: models and the field specs that type
their fields and method return values.

A FieldSpec is one of three variants:
- ScalarSpec: opaque leaf, resolves to "*"
- ModelRef: reference to a registered model by name
- DynamicSpec: function of the value that returns a spec, evaluated per resolution
"""

from __future__ import annotations


from dataclasses import dataclass, field
from typing import Any, Callable, Union

from .errors import InvalidFieldSpec


# Type tag for scalar (opaque) values
SCALAR = "*"


@dataclass(frozen=True)
class ScalarSpec:
    """Opaque leaf. Declared as 1, True, "*" or ScalarSpec()."""


@dataclass(frozen=True)
class ModelRef:
    """Reference to a model by name. Checked against the registry at resolution time."""
    name: str


@dataclass(frozen=True)
class DynamicSpec:
    """Spec computed from the value being typed: fn(value) -> raw spec."""
    fn: Callable[[Any], Any]


FieldSpec = Union[ScalarSpec, ModelRef, DynamicSpec]


def is_scalar_marker(raw: Any) -> bool:
    """True for the raw scalar declarations: 1, True and "*"."""
    if isinstance(raw, ScalarSpec):
        return True
    if isinstance(raw, str):
        return raw == SCALAR
    return isinstance(raw, int) and raw == 1


def to_field_spec(raw: Any, allow_dynamic: bool = True) -> FieldSpec:
    """
    Coerce a raw declaration into a FieldSpec.

    Examples:
        1, True, "*"        -> ScalarSpec()
        "User"              -> ModelRef("User")
        lambda value: "*"   -> DynamicSpec(fn)

    Raises:
        InvalidFieldSpec: for None, mappings (inline models are compiled by the
            registry, not here), other values, and callables when
            allow_dynamic is False.
    """
    if isinstance(raw, (ScalarSpec, ModelRef)):
        return raw
    if isinstance(raw, DynamicSpec):
        if not allow_dynamic:
            raise InvalidFieldSpec(raw)
        return raw
    if is_scalar_marker(raw):
        return ScalarSpec()
    if isinstance(raw, str) and raw:
        return ModelRef(raw)
    if callable(raw) and not isinstance(raw, type):
        if not allow_dynamic:
            raise InvalidFieldSpec(raw)
        return DynamicSpec(raw)
    raise InvalidFieldSpec(raw)


@dataclass(frozen=True)
class Model:
    """
    Registered model definition.

    fields:   name -> FieldSpec for plain data fields (and static types of computed entries)
    methods:  name -> fn(instance, params, context)
    computed: name -> fn(instance, context)
    returns:  method name -> FieldSpec of its return value
    """
    name: str
    fields: dict[str, FieldSpec] = field(default_factory=dict)
    methods: dict[str, Callable[..., Any]] = field(default_factory=dict)
    computed: dict[str, Callable[..., Any]] = field(default_factory=dict)
    returns: dict[str, FieldSpec] = field(default_factory=dict)

    def has_member(self, name: str) -> bool:
        return name in self.methods or name in self.computed or name in self.fields
