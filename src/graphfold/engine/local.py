# src/graphfold/engine/local.py
"""NeighborhoodMapper: map a visitor over each node's local neighbourhood.

Unlike the forward/backward passes there is no cross-node context, so
calls are independent and may run on a thread pool. The shared graph is
frozen and every neighbourhood is a separate copy, so concurrent visitors
only ever read shared state.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from graphfold.contracts.enums import EdgeMode
from graphfold.contracts.errors import VisitorFailure
from graphfold.contracts.types import NodeIndex, Visitor
from graphfold.core.graph import NodeGraph
from graphfold.core.logging import get_logger

logger = get_logger(__name__)

_RESERVED_KEYWORDS = frozenset({"neighborhood", "graph", "node"})


class NeighborhoodMapper:
    """Invoke a visitor once per node with that node's ego subgraph.

    Usage:
        mapper = NeighborhoodMapper(graph, radius=2, mode="all", workers=4)
        sizes = mapper.map(lambda neighborhood, **_: neighborhood.order)

    Results are keyed by node index in ascending order regardless of the
    order in which calls complete.
    """

    def __init__(
        self,
        graph: NodeGraph,
        *,
        radius: int = 1,
        mode: EdgeMode | str = EdgeMode.ALL,
        min_distance: int = 0,
        workers: int = 1,
    ) -> None:
        if radius < 0:
            raise ValueError(f"radius must be >= 0, got {radius}")
        if min_distance < 0:
            raise ValueError(f"min_distance must be >= 0, got {min_distance}")
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self._graph = graph
        self._radius = radius
        self._mode = EdgeMode(mode)
        self._min_distance = min_distance
        self._workers = workers

    def _visit(self, visitor: Visitor, node: NodeIndex, extra: dict[str, Any]) -> Any:
        neighborhood = self._graph.ego_subgraph(node, radius=self._radius, mode=self._mode, min_distance=self._min_distance)
        try:
            return visitor(neighborhood=neighborhood, graph=self._graph, node=node, **extra)
        except Exception as exc:
            logger.warning("visitor_failed", node=node, mapping="local", error_type=type(exc).__name__)
            raise VisitorFailure(node) from exc

    def map(self, visitor: Visitor, **extra: Any) -> dict[NodeIndex, Any]:
        """Run the visitor for every node.

        Raises:
            TypeError: If ``extra`` reuses a keyword the mapper supplies
            VisitorFailure: If any visitor call raises; no results are returned
        """
        clash = _RESERVED_KEYWORDS & extra.keys()
        if clash:
            raise TypeError(f"Extra visitor arguments collide with supplied keywords: {sorted(clash)}")

        nodes = self._graph.nodes()
        if self._workers == 1:
            results = {node: self._visit(visitor, node, extra) for node in nodes}
        else:
            results = self._map_concurrently(visitor, nodes, extra)

        logger.debug(
            "neighborhood_map_completed",
            order=len(nodes),
            radius=self._radius,
            mode=str(self._mode),
            workers=self._workers,
        )
        return results

    def _map_concurrently(self, visitor: Visitor, nodes: tuple[NodeIndex, ...], extra: dict[str, Any]) -> dict[NodeIndex, Any]:
        with ThreadPoolExecutor(max_workers=self._workers) as pool:
            futures: dict[NodeIndex, Future[Any]] = {node: pool.submit(self._visit, visitor, node, extra) for node in nodes}
            try:
                return {node: future.result() for node, future in futures.items()}
            except BaseException:
                for future in futures.values():
                    future.cancel()
                raise
