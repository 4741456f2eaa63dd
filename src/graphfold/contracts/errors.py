"""Exceptions raised across the traversal engine.

Every failure to honour a mapping contract surfaces as one of these.
The engine never returns a truncated or zero-filled result in place of
raising.
"""

from __future__ import annotations

from typing import Any

from graphfold.contracts.enums import Direction, ResultKind
from graphfold.contracts.types import NodeIndex


class InvalidRootError(ValueError):
    """Raised when a search root does not resolve to exactly one node.

    Raised before any visitor is invoked, so there is never a partial result.

    Attributes:
        root: The reference that failed to resolve
        order: Number of nodes in the graph it was resolved against
    """

    def __init__(self, root: Any, order: int, reason: str) -> None:
        self.root = root
        self.order = order
        super().__init__(f"Root {root!r} must identify a single node in a graph of {order} node(s): {reason}")


class VisitorFailure(RuntimeError):
    """Raised when the caller-supplied visitor raises.

    The original exception is chained as ``__cause__``. Results recorded
    before the failure are discarded: callers get either a complete
    per-node mapping or this exception.

    Attributes:
        node: Node whose visitor call failed
        direction: Pass direction, or None for neighbourhood mapping
    """

    def __init__(self, node: NodeIndex, direction: Direction | None = None) -> None:
        self.node = node
        self.direction = direction
        where = f"{direction} pass" if direction is not None else "neighbourhood mapping"
        super().__init__(f"Visitor failed on node {node} during {where}")


class CollectionTypeError(TypeError):
    """Raised when per-node results cannot collapse to a single kind.

    The untyped mapping is still available from the untyped entry point
    (``map_bfs`` instead of ``map_bfs_float``, and so on).

    Attributes:
        kind: The requested kind, or None when no kind was requested
        offending: Descriptions of the elements that blocked the collapse
    """

    def __init__(self, kind: ResultKind | None, offending: list[str]) -> None:
        self.kind = kind
        self.offending = offending
        target = str(kind) if kind is not None else "a common kind"
        super().__init__(f"Cannot coerce values to {target}: {'; '.join(offending)}")


class SearchInvariantError(RuntimeError):
    """Raised when a search table violates an ordering invariant.

    Examples: a parent ranked after its child, a descendant set consumed
    before all children were finalized, or a path row requested for a node
    whose result is not yet computed. These indicate a bug in the search
    adapter rather than bad caller input.
    """

    pass
