# src/graphfold/engine/search.py
"""Normalize a NetworkX breadth/depth-first search into a SearchTable."""

from __future__ import annotations

from typing import Any

from graphfold.contracts.enums import EdgeMode, SearchKind
from graphfold.contracts.errors import SearchInvariantError
from graphfold.contracts.search import SearchRecord, SearchTable
from graphfold.contracts.types import NodeIndex
from graphfold.core.graph import NodeGraph, RawSearch
from graphfold.core.logging import get_logger

logger = get_logger(__name__)


def compute_search(
    graph: NodeGraph,
    root: Any,
    kind: SearchKind | str,
    mode: EdgeMode | str = EdgeMode.OUT,
    unreachable: bool = False,
) -> SearchTable:
    """Search ``graph`` from ``root`` and build one record per node.

    Args:
        graph: Graph to search
        root: Node reference accepted by NodeGraph.resolve_node()
        kind: Breadth-first or depth-first
        mode: Edge direction to follow; ignored for undirected graphs
        unreachable: Start new trees from unvisited nodes once a tree is exhausted

    Returns:
        Fresh SearchTable with every node present; nodes that were never
        reached have rank None.

    Raises:
        InvalidRootError: If ``root`` does not identify exactly one node
        ValueError: If ``kind`` or ``mode`` is not a known value
    """
    kind = SearchKind(kind)
    mode = EdgeMode(mode)
    root_index = graph.resolve_node(root)
    raw = graph.search(root_index, kind=kind, mode=mode, unreachable=unreachable)

    rank = {node: position for position, node in enumerate(raw.order, start=1)}
    rank_out = {node: position for position, node in enumerate(raw.finish_order, start=1)} if raw.finish_order is not None else {}
    neighbours = _tree_neighbours(raw) if kind == SearchKind.BFS else {}

    records = []
    for node in graph.nodes():
        parent = raw.parent.get(node)
        if parent is not None and rank[parent] >= rank[node]:
            raise SearchInvariantError(f"Parent {parent} of node {node} is ranked {rank[parent]}, not before {rank[node]}")
        before, after = neighbours.get(node, (None, None))
        records.append(
            SearchRecord(
                node=node,
                rank=rank.get(node),
                parent=parent,
                distance=raw.distance.get(node),
                predecessor=before,
                successor=after,
                rank_out=rank_out.get(node),
            )
        )

    logger.debug(
        "search_computed",
        kind=str(kind),
        mode=str(mode),
        root=root_index,
        reached=len(rank),
        trees=len(raw.trees),
        order=graph.order,
    )
    return SearchTable(kind, records)


def _tree_neighbours(raw: RawSearch) -> dict[NodeIndex, tuple[NodeIndex | None, NodeIndex | None]]:
    """Visited-before and visited-after node for each node, within its own tree."""
    neighbours: dict[NodeIndex, tuple[NodeIndex | None, NodeIndex | None]] = {}
    for tree in raw.trees:
        for position, node in enumerate(tree):
            before = tree[position - 1] if position > 0 else None
            after = tree[position + 1] if position + 1 < len(tree) else None
            neighbours[node] = (before, after)
    return neighbours
