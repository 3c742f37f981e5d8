"""Override strategies consulted before the default shapes, and exclusion handling."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Protocol, Union, runtime_checkable

from shimmertrace.geometry.path import Path
from shimmertrace.geometry.rect import PointF
from shimmertrace.model.node import Node

ExcludePredicate = Callable[[Node], bool]
Exclusion = Union[ExcludePredicate, Iterable[Union[str, int]], None]


@runtime_checkable
class ShapeDelegate(Protocol):
    def handle(self, node: Node, path: Path, exclude: ExcludePredicate, offset: PointF) -> bool:
        """Append ``node``'s silhouette to ``path`` if desired.

        Args:
            node: A leaf node whose silhouette has not been created yet.
            path: The composite path being built for the whole trace.
            exclude: Exclusion predicate of the current trace.
            offset: Absolute left/top of ``node`` relative to the trace root.

        Returns:
            True if the node was fully handled; False to fall through to the defaults.
        """
        ...


def _never(node: Node) -> bool:
    return False


def as_predicate(exclusion: Exclusion) -> ExcludePredicate:
    """Normalise an id collection or a predicate into a predicate."""
    if exclusion is None:
        return _never
    if callable(exclusion):
        return exclusion
    ids = frozenset(exclusion)
    if not ids:
        return _never

    def _excluded_by_id(node: Node) -> bool:
        return node.id is not None and node.id in ids

    return _excluded_by_id


class ChainedDelegate:
    """Consults several delegates in order; the first one that handles the node wins."""

    def __init__(self, *delegates: ShapeDelegate) -> None:
        self.delegates = list(delegates)

    def handle(self, node: Node, path: Path, exclude: ExcludePredicate, offset: PointF) -> bool:
        return any(d.handle(node, path, exclude, offset) for d in self.delegates)
