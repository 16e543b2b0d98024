"""Shared fixtures for ModelQL tests."""

import pytest

from modelql import Runtime
from modelql.execution import ExecutionContext


class Record:
    """Plain object record, typed by its class name when registered."""

    def __init__(self, **attrs):
        self.__dict__.update(attrs)


@pytest.fixture
def runtime():
    """Create a fresh Runtime with its own registry and hooks."""
    return Runtime()


@pytest.fixture
def make_ctx(runtime):
    """Build an ExecutionContext over the runtime's current registry and hooks."""

    def _make(context=None):
        return ExecutionContext(
            registry=runtime.registry,
            hooks=tuple(runtime.hooks),
            config=runtime.config,
            context=context,
        )

    return _make
