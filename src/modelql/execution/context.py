"""
Execution context for query processing.

Contains everything one execute() call needs during resolution.
"""

from __future__ import annotations


from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..config import RuntimeConfig
from ..core.registry import ModelRegistry


# fn(instance) -> model name | None
TypeHook = Callable[[Any], Optional[str]]


@dataclass
class ExecutionContext:
    """
    Context passed through the resolution pipeline.

    Contains:
    - registry: models of the owning Runtime (read-only during execution)
    - hooks: ordered type-resolution hooks (read-only during execution)
    - config: runtime configuration
    - context: caller-supplied value forwarded to methods and computed fields
    - result: the result tree owned by this call
    """
    registry: ModelRegistry
    hooks: tuple[TypeHook, ...] = ()
    config: RuntimeConfig = field(default_factory=RuntimeConfig)
    context: Any = None
    result: dict[str, Any] = field(default_factory=dict)
