"""
Pydantic models for query documents.

A query document is an already-decoded selection tree:

    {
        "users": {
            "$params": {"limit": 10},
            "id": 1,
            "friends": {"name": 1}
        }
    }

Leaves are 1 (or True). Nested mappings are sub-selections; the reserved
params key is lifted out of the mapping into SubSelection.params.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, Field

from .errors import InvalidQuery


DEFAULT_PARAMS_KEY = "$params"


class LeafSelection(BaseModel):
    """Select a value as-is, without nested fields."""
    kind: Literal["leaf"] = "leaf"


class SubSelection(BaseModel):
    """
    Select nested fields of a value.

    params is forwarded verbatim to a method matching this selection's name.
    """
    kind: Literal["sub"] = "sub"
    fields: dict[str, Selection] = Field(default_factory=dict)
    params: Optional[Any] = None

    @property
    def has_fields(self) -> bool:
        return bool(self.fields)


Selection = Annotated[Union[LeafSelection, SubSelection], Field(discriminator="kind")]

SubSelection.model_rebuild()


def is_leaf_marker(value: Any) -> bool:
    """True for raw leaf selections: 1 and True."""
    return isinstance(value, int) and value == 1


def parse_selection(
    raw: Any,
    params_key: str = DEFAULT_PARAMS_KEY,
    path: Sequence[Any] = (),
) -> Union[LeafSelection, SubSelection]:
    """
    Decode one raw selection value.

    Raises:
        InvalidQuery: if raw is neither a leaf marker nor a mapping
    """
    if isinstance(raw, (LeafSelection, SubSelection)):
        return raw
    if is_leaf_marker(raw):
        return LeafSelection()
    if isinstance(raw, Mapping):
        return parse_query(raw, params_key, path)
    raise InvalidQuery(raw, path)


def parse_query(
    raw: Any,
    params_key: str = DEFAULT_PARAMS_KEY,
    path: Sequence[Any] = (),
) -> SubSelection:
    """
    Decode a raw query mapping into a SubSelection tree.

    Example:
        parse_query({"test": {"$params": {"x": 1}, "a": 1}})
        -> SubSelection(fields={"test": SubSelection(fields={"a": LeafSelection()}, params={"x": 1})})

    Raises:
        InvalidQuery: if raw (or any nested value) is not a valid selection
    """
    if isinstance(raw, SubSelection):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidQuery(raw, path, reason="Query must be a mapping of field names")

    fields: dict[str, Union[LeafSelection, SubSelection]] = {}
    params = None
    for name, value in raw.items():
        if name == params_key:
            params = value
            continue
        if not isinstance(name, str):
            raise InvalidQuery(raw, path, reason=f"Field name must be a string, got {name!r}")
        fields[name] = parse_selection(value, params_key, (*path, name))

    return SubSelection(fields=fields, params=params)
