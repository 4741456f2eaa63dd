# src/graphfold/contracts/search.py
"""Search record table shared by the traversal passes.

A SearchTable is created fresh for every mapping call, fully populated
before any visitor runs (apart from results), and discarded once the
results have been extracted. Results are write-once: the runner records a
node's value when its visitor returns and nothing may overwrite it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from graphfold.contracts.enums import SearchKind
from graphfold.contracts.errors import SearchInvariantError
from graphfold.contracts.types import NodeIndex

_BFS_FIELDS: tuple[str, ...] = ("rank", "parent", "predecessor", "successor", "distance")
_DFS_FIELDS: tuple[str, ...] = ("rank", "rank_out", "parent", "distance")


def metadata_fields(kind: SearchKind) -> tuple[str, ...]:
    """Names of the per-node keywords a visitor receives for a search kind."""
    return ("node", *(_BFS_FIELDS if kind == SearchKind.BFS else _DFS_FIELDS))


@dataclass(frozen=True, slots=True)
class SearchRecord:
    """Search statistics for one node.

    Attributes:
        node: Node index
        rank: 1-based visitation position, None if never reached
        parent: Node this one was first reached from, None for a tree root
        distance: Edges between this node and the root of its search tree
        predecessor: Node visited just before this one in its tree (BFS only)
        successor: Node visited just after this one in its tree (BFS only)
        rank_out: 1-based post-order completion position (DFS only)
    """

    node: NodeIndex
    rank: int | None
    parent: NodeIndex | None
    distance: int | None
    predecessor: NodeIndex | None = None
    successor: NodeIndex | None = None
    rank_out: int | None = None

    @property
    def reached(self) -> bool:
        return self.rank is not None

    @property
    def is_root(self) -> bool:
        """A reached node with no parent starts a search tree."""
        return self.rank is not None and self.parent is None

    def metadata(self, kind: SearchKind) -> dict[str, Any]:
        """Keyword arguments describing this node to a visitor."""
        return {name: getattr(self, name) for name in metadata_fields(kind)}


@dataclass(frozen=True, slots=True)
class PathRow:
    """One row of a visitor's path context.

    ``result`` holds the finalized result of ``node``. The row for the
    node currently being visited carries None because its result is what
    the visitor is computing.
    """

    node: NodeIndex
    rank: int
    parent: NodeIndex | None
    distance: int | None
    predecessor: NodeIndex | None
    successor: NodeIndex | None
    rank_out: int | None
    result: Any


class SearchTable:
    """Per-call table of search records plus the results written so far.

    Records are indexed by node and iterate in node order. Only the
    traversal that created the table writes results into it.
    """

    def __init__(self, kind: SearchKind, records: Iterable[SearchRecord]) -> None:
        self._kind = kind
        ordered = sorted(records, key=lambda record: record.node)
        self._records: Mapping[NodeIndex, SearchRecord] = MappingProxyType({record.node: record for record in ordered})
        self._results: dict[NodeIndex, Any] = {}
        self._rank_order: tuple[SearchRecord, ...] = tuple(
            sorted((record for record in ordered if record.reached), key=lambda record: record.rank or 0)
        )

    @property
    def kind(self) -> SearchKind:
        return self._kind

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SearchRecord]:
        return iter(self._records.values())

    def __getitem__(self, node: NodeIndex) -> SearchRecord:
        return self._records[node]

    @property
    def nodes(self) -> tuple[NodeIndex, ...]:
        """All node indices, ascending."""
        return tuple(self._records)

    def in_rank_order(self) -> tuple[SearchRecord, ...]:
        """Reached records sorted by ascending rank; unreached nodes are excluded."""
        return self._rank_order

    def rank(self, node: NodeIndex) -> int:
        """Rank of a reached node.

        Raises:
            SearchInvariantError: If the node was never reached
        """
        rank = self._records[node].rank
        if rank is None:
            raise SearchInvariantError(f"Node {node} was not reached by the search and has no rank")
        return rank

    def is_finalized(self, node: NodeIndex) -> bool:
        """Whether the visitor for ``node`` has already returned."""
        return node in self._results

    def set_result(self, node: NodeIndex, value: Any) -> None:
        """Record a node's result.

        Raises:
            SearchInvariantError: If the node is unreached or already has a result
        """
        if not self._records[node].reached:
            raise SearchInvariantError(f"Cannot record a result for unreached node {node}")
        if node in self._results:
            raise SearchInvariantError(f"Result for node {node} is already finalized")
        self._results[node] = value

    def row(self, node: NodeIndex, *, current: NodeIndex) -> PathRow:
        """Build a read-only path row.

        Only finalized rows and the row of the node currently being visited
        are readable, so a visitor can never observe context that has not
        been computed yet.

        Raises:
            SearchInvariantError: If ``node`` is neither finalized nor current
        """
        record = self._records[node]
        if node == current:
            result = None
        elif node in self._results:
            result = self._results[node]
        else:
            raise SearchInvariantError(f"Path context for node {current} references node {node}, which has not been visited yet")
        return PathRow(
            node=record.node,
            rank=self.rank(node),
            parent=record.parent,
            distance=record.distance,
            predecessor=record.predecessor,
            successor=record.successor,
            rank_out=record.rank_out,
            result=result,
        )

    def results(self) -> dict[NodeIndex, Any]:
        """Results keyed by node index in node order; unvisited nodes map to None."""
        return {node: self._results.get(node) for node in self._records}
