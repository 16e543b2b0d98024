"""Tests for the value and object resolvers."""

import pytest

from modelql.core.errors import CannotQuerySubfieldsOnScalar, InvalidFieldSpec, InvalidQuery, UnknownField
from modelql.core.query_types import parse_selection
from modelql.core.utils import set_path
from modelql.execution.resolvers import resolve_object, resolve_value

from .conftest import Record


async def run_value(ctx, value, type_tag, query, path=("root",)):
    await resolve_value(value, type_tag, parse_selection(query), ctx, path)
    return ctx.result


class TestSetPath:
    """Tests for result tree writes."""

    def test_creates_missing_dicts(self):
        result = {}
        set_path(result, ["a", "b"], 1)
        assert result == {"a": {"b": 1}}

    def test_writes_into_list_slots(self):
        result = {"a": [None, None]}
        set_path(result, ["a", 1], {"x": 1})
        set_path(result, ["a", 1, "y"], 2)
        assert result == {"a": [None, {"x": 1, "y": 2}]}

    def test_empty_path(self):
        with pytest.raises(ValueError):
            set_path({}, [], 1)


class TestResolveScalarValue:
    """Scalar values are written verbatim."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [1, "abc", True, 1.5])
    async def test_scalar_as_scalar(self, make_ctx, value):
        result = await run_value(make_ctx(), value, "*", 1, path=("a", "b"))
        assert result == {"a": {"b": value}}

    @pytest.mark.asyncio
    async def test_none_is_null(self, make_ctx):
        result = await run_value(make_ctx(), None, "*", 1, path=("a", "b"))
        assert result == {"a": {"b": None}}

    @pytest.mark.asyncio
    async def test_object_as_scalar(self, make_ctx):
        value = {"a": 1, "b": {"c": 1}}
        result = await run_value(make_ctx(), value, "*", 1, path=("a", "b"))
        assert result["a"]["b"] is value

    @pytest.mark.asyncio
    async def test_array_as_scalar(self, make_ctx):
        value = [{"a": "a", "b": {"c": "www"}}]
        result = await run_value(make_ctx(), value, "*", 1)
        assert result == {"root": [{"a": "a", "b": {"c": "www"}}]}


class TestResolveModelValue:
    """Model-typed values are resolved as objects or lists of objects."""

    @pytest.mark.asyncio
    async def test_unregistered_type_tag(self, make_ctx):
        with pytest.raises(InvalidFieldSpec):
            await run_value(make_ctx(), [{"a": "a"}], "dafd", {"a": 1})

    @pytest.mark.asyncio
    async def test_single_object(self, runtime, make_ctx):
        runtime.register("test", fields={"a": 1, "b": {"c": 1}})
        result = await run_value(
            make_ctx(), {"a": "a", "b": {"c": "www"}}, "test", {"a": 1, "b": {"c": 1}}
        )
        assert result == {"root": {"a": "a", "b": {"c": "www"}}}

    @pytest.mark.asyncio
    async def test_array_of_objects(self, runtime, make_ctx):
        runtime.register("test", fields={"a": 1, "b": {"c": 1}})
        result = await run_value(
            make_ctx(), [{"a": "a", "b": {"c": "www"}}], "test", {"a": 1, "b": {"c": 1}}
        )
        assert result == {"root": [{"a": "a", "b": {"c": "www"}}]}

    @pytest.mark.asyncio
    async def test_list_matches_elements_resolved_alone(self, runtime, make_ctx):
        runtime.register("test", fields={"a": 1})
        records = [{"a": 1, "x": 0}, {"a": 2}, {"a": 3, "y": 0}]

        combined = await run_value(make_ctx(), records, "test", {"a": 1})
        singles = [(await run_value(make_ctx(), r, "test", {"a": 1}))["root"] for r in records]

        assert combined["root"] == singles
        assert combined["root"] == [{"a": 1}, {"a": 2}, {"a": 3}]

    @pytest.mark.asyncio
    async def test_tuple_is_resolved_as_list(self, runtime, make_ctx):
        runtime.register("test", fields={"a": 1})
        result = await run_value(make_ctx(), ({"a": 1}, {"a": 2}), "test", {"a": 1})
        assert result == {"root": [{"a": 1}, {"a": 2}]}

    @pytest.mark.asyncio
    async def test_empty_list(self, runtime, make_ctx):
        runtime.register("test", fields={"a": 1})
        result = await run_value(make_ctx(), [], "test", {"a": 1})
        assert result == {"root": []}

    @pytest.mark.asyncio
    async def test_none_elements_stay_null(self, runtime, make_ctx):
        runtime.register("test", fields={"a": 1})
        result = await run_value(make_ctx(), [None, {"a": 1}], "test", {"a": 1})
        assert result == {"root": [None, {"a": 1}]}

    @pytest.mark.asyncio
    async def test_scalar_as_model(self, runtime, make_ctx):
        runtime.register("test", fields={"a": 1})
        with pytest.raises(CannotQuerySubfieldsOnScalar) as excinfo:
            await run_value(make_ctx(), True, "test", {"a": 1}, path=("root", "x"))
        assert str(excinfo.value) == "Cannot query scalar as test - path: root.x"

    @pytest.mark.asyncio
    async def test_scalar_element_as_model(self, runtime, make_ctx):
        runtime.register("test", fields={"a": 1})
        with pytest.raises(CannotQuerySubfieldsOnScalar) as excinfo:
            await run_value(make_ctx(), [{"a": 1}, "x"], "test", {"a": 1})
        assert excinfo.value.path == ("root", 1)

    @pytest.mark.asyncio
    async def test_object_record(self, runtime, make_ctx):
        runtime.register("test", fields={"a": 1, "b": {"c": 1}})
        result = await run_value(
            make_ctx(), Record(a="a", b=Record(c="www")), "test", {"a": 1, "b": {"c": 1}}
        )
        assert result == {"root": {"a": "a", "b": {"c": "www"}}}


class TestResolveObject:
    """Tests for resolving one record against a sub-selection."""

    @pytest.mark.asyncio
    async def test_simple_object_simple_query(self, runtime, make_ctx):
        model = runtime.register("test", fields={"a": 1})
        ctx = make_ctx()

        await resolve_object({"a": "a"}, model, parse_selection({"a": 1}), ctx, ("root",))
        assert ctx.result == {"root": {"a": "a"}}

    @pytest.mark.asyncio
    async def test_sub_selection_on_scalar_field(self, runtime, make_ctx):
        model = runtime.register("test", fields={"a": 1, "b": 1})
        ctx = make_ctx()

        with pytest.raises(CannotQuerySubfieldsOnScalar) as excinfo:
            await resolve_object(
                {"a": "a", "b": {"c": "www"}},
                model,
                parse_selection({"a": 1, "b": {"c": 1}}),
                ctx,
                ("root",),
            )
        assert excinfo.value.path == ("root", "b")

    @pytest.mark.asyncio
    async def test_unknown_field(self, runtime, make_ctx):
        model = runtime.register("test", fields={"a": 1})

        with pytest.raises(UnknownField) as excinfo:
            await resolve_object({"a": "a"}, model, parse_selection({"z": 1}), make_ctx(), ("root",))

        assert excinfo.value.field == "z"
        assert excinfo.value.model == "test"
        assert excinfo.value.path == ("root", "z")

    @pytest.mark.asyncio
    async def test_leaf_selection_on_model(self, runtime, make_ctx):
        model = runtime.register("test", fields={"a": 1})

        with pytest.raises(InvalidQuery):
            await resolve_object({"a": "a"}, model, parse_selection(1), make_ctx(), ("root",))

    @pytest.mark.asyncio
    async def test_missing_fields_are_null(self, runtime, make_ctx):
        model = runtime.register("test", fields={"a": 1, "b": {"c": 1}})
        ctx = make_ctx()

        await resolve_object({}, model, parse_selection({"a": 1, "b": {"c": 1}}), ctx, ("root",))
        assert ctx.result == {"root": {"a": None, "b": None}}

    @pytest.mark.asyncio
    async def test_keys_follow_query_order(self, runtime, make_ctx):
        model = runtime.register("test", fields={"a": 1, "b": 1, "c": 1})
        ctx = make_ctx()

        await resolve_object(
            {"a": 1, "b": 2, "c": 3}, model, parse_selection({"c": 1, "a": 1, "b": 1}), ctx, ("root",)
        )
        assert list(ctx.result["root"]) == ["c", "a", "b"]
