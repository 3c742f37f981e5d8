"""Shape registry: every leaf capability maps to one synthesis function, registered via decorator.

Usage:
    @shape(Capability.BUTTON, description="Inset rounded rect")
    def button_shape(ctx: ShapeContext) -> None:
        ctx.path.add_round_rect(...)

Adding a new capability = one decorated function. The tracer dispatches through
this table, never through isinstance checks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from shimmertrace.model.node import Capability

if TYPE_CHECKING:
    from shimmertrace.engine.default_shapes import ShapeContext

logger = logging.getLogger(__name__)

ShapeFn = Callable[["ShapeContext"], None]


@dataclass
class ShapeSpec:
    capability: Capability
    fn: ShapeFn
    description: str = ""


class ShapeRegistry:
    """Lookup table from capability to shape synthesis function."""

    def __init__(self) -> None:
        self._shapes: dict[Capability, ShapeSpec] = {}

    def register(self, spec: ShapeSpec) -> None:
        if spec.capability in self._shapes:
            raise ValueError(f"Duplicate shape for capability: {spec.capability.name}")
        self._shapes[spec.capability] = spec
        logger.debug("Registered shape %s (%s)", spec.capability.name, spec.fn.__name__)

    def get(self, capability: Capability) -> ShapeSpec:
        return self._shapes[capability]

    def has(self, capability: Capability) -> bool:
        return capability in self._shapes

    def capabilities(self) -> list[Capability]:
        return sorted(self._shapes, key=lambda c: c.value)

    @property
    def count(self) -> int:
        return len(self._shapes)


# Module-level singleton
_registry = ShapeRegistry()


def get_registry() -> ShapeRegistry:
    return _registry


def shape(capability: Capability, *, description: str = ""):
    """Decorator to register a shape function for ``capability``."""

    def decorator(fn: ShapeFn) -> ShapeFn:
        _registry.register(ShapeSpec(capability=capability, fn=fn, description=description))
        return fn

    return decorator
