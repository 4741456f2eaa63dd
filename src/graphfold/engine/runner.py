# src/graphfold/engine/runner.py
"""OrderedVisitorRunner: invoke a visitor over ranked nodes in order.

Forward and backward passes have a strict sequential dependency: a
visitor may read the results of every node processed earlier in the
pass, so calls are never reordered or run concurrently.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from graphfold.contracts.enums import Direction
from graphfold.contracts.errors import VisitorFailure
from graphfold.contracts.search import PathRow, SearchTable, metadata_fields
from graphfold.contracts.types import NodeIndex, Visitor
from graphfold.core.graph import NodeGraph
from graphfold.core.logging import get_logger

logger = get_logger(__name__)


class OrderedVisitorRunner:
    """Drive one forward or backward pass over a SearchTable.

    Usage:
        table = compute_search(graph, root=1, kind="bfs")
        runner = OrderedVisitorRunner(graph, visitor, table, ancestors(table), Direction.FORWARD)
        results = runner.run(scale=2)  # extra keywords reach the visitor

    The runner owns the table for the duration of the pass; visitors only
    ever see immutable PathRow snapshots of finalized rows.
    """

    def __init__(
        self,
        graph: NodeGraph,
        visitor: Visitor,
        table: SearchTable,
        context: Mapping[NodeIndex, Sequence[NodeIndex]],
        direction: Direction,
    ) -> None:
        self._graph = graph
        self._visitor = visitor
        self._table = table
        self._context = context
        self._direction = Direction(direction)

    @property
    def direction(self) -> Direction:
        return self._direction

    def run(self, **extra: Any) -> dict[NodeIndex, Any]:
        """Visit every reached node once and collect results.

        Args:
            **extra: Additional keyword arguments passed to every visitor call

        Returns:
            Results keyed by node index in ascending index order, one entry
            per node in the graph; unreached nodes map to None.

        Raises:
            TypeError: If ``extra`` reuses a keyword the runner supplies
            VisitorFailure: If the visitor raises (original chained as __cause__)
            SearchInvariantError: If a path context references an unvisited node
        """
        clash = {"graph", "path", *metadata_fields(self._table.kind)} & extra.keys()
        if clash:
            raise TypeError(f"Extra visitor arguments collide with supplied keywords: {sorted(clash)}")

        ordered = self._table.in_rank_order()
        if self._direction == Direction.BACKWARD:
            ordered = ordered[::-1]

        logger.debug(
            "pass_started",
            direction=str(self._direction),
            kind=str(self._table.kind),
            reached=len(ordered),
            order=len(self._table),
        )

        for record in ordered:
            path = self._path_for(record.node)
            try:
                value = self._visitor(
                    graph=self._graph,
                    **record.metadata(self._table.kind),
                    path=path,
                    **extra,
                )
            except Exception as exc:
                logger.warning(
                    "visitor_failed",
                    node=record.node,
                    direction=str(self._direction),
                    error_type=type(exc).__name__,
                )
                raise VisitorFailure(record.node, self._direction) from exc
            self._table.set_result(record.node, value)

        logger.debug("pass_completed", direction=str(self._direction), visited=len(ordered))
        return self._table.results()

    def _path_for(self, node: NodeIndex) -> tuple[PathRow, ...]:
        return tuple(self._table.row(member, current=node) for member in self._context[node])
