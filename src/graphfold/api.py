# src/graphfold/api.py
"""Public mapping entry points.

Three families share one calling convention: the graph, (for searches)
the root, and the visitor are positional; everything else is keyword.
Keywords the function does not recognise are forwarded to every visitor
call.

- map_bfs / map_dfs: forward pass, visitor sees its ancestor chain
- map_bfs_back / map_dfs_back: backward pass, visitor sees its descendants
- map_local: visitor sees the node's neighbourhood graph, no shared context

Each family has four typed variants (``_bool``, ``_str``, ``_int``,
``_float``) that collapse the results with collect() and raise
CollectionTypeError when that is not possible.

Untyped functions return a dict keyed by node index (1..N, ascending)
with None for nodes the search never reached.
"""

from __future__ import annotations

from typing import Any, TypeAlias

import networkx as nx
from pandas.api.extensions import ExtensionArray

from graphfold.contracts.enums import Direction, EdgeMode, ResultKind, SearchKind
from graphfold.contracts.types import NodeIndex, Visitor
from graphfold.core.config import MapSettings
from graphfold.core.graph import NodeGraph, as_node_graph
from graphfold.engine.collect import collect
from graphfold.engine.local import NeighborhoodMapper
from graphfold.engine.offspring import descendants
from graphfold.engine.paths import ancestors
from graphfold.engine.runner import OrderedVisitorRunner
from graphfold.engine.search import compute_search

GraphLike: TypeAlias = "NodeGraph | nx.Graph[Any]"


def _map_search(
    graph: GraphLike,
    root: Any,
    visitor: Visitor,
    *,
    kind: SearchKind,
    direction: Direction,
    mode: EdgeMode | str | None,
    unreachable: bool | None,
    settings: MapSettings | None,
    extra: dict[str, Any],
) -> dict[NodeIndex, Any]:
    settings = settings if settings is not None else MapSettings()
    node_graph = as_node_graph(graph)
    table = compute_search(
        node_graph,
        root,
        kind,
        mode=mode if mode is not None else settings.mode,
        unreachable=unreachable if unreachable is not None else settings.unreachable,
    )
    context = ancestors(table) if direction == Direction.FORWARD else descendants(table)
    return OrderedVisitorRunner(node_graph, visitor, table, context, direction).run(**extra)


# =============================================================================
# Breadth-first, forward
# =============================================================================


def map_bfs(
    graph: GraphLike,
    root: Any,
    visitor: Visitor,
    /,
    *,
    mode: EdgeMode | str | None = None,
    unreachable: bool | None = None,
    settings: MapSettings | None = None,
    **extra: Any,
) -> dict[NodeIndex, Any]:
    """Map a visitor over nodes in breadth-first order.

    The visitor is called with ``graph``, ``node``, ``rank``, ``parent``,
    ``predecessor``, ``successor``, ``distance``, ``path`` and ``**extra``.
    ``path`` holds a PathRow for each node from the tree root down to the
    current node, with the results already computed for the ancestors.

    Args:
        graph: NodeGraph or NetworkX graph
        root: Node to start from (index, one-element sequence, or boolean mask)
        visitor: Function called once per reached node
        mode: "out", "in" or "all"; ignored for undirected graphs (default "out")
        unreachable: Continue from unvisited nodes once a tree is exhausted (default False)
        settings: Defaults for ``mode`` and ``unreachable``
        **extra: Forwarded to every visitor call

    Raises:
        InvalidRootError: If ``root`` does not identify exactly one node
        VisitorFailure: If the visitor raises
    """
    return _map_search(
        graph,
        root,
        visitor,
        kind=SearchKind.BFS,
        direction=Direction.FORWARD,
        mode=mode,
        unreachable=unreachable,
        settings=settings,
        extra=extra,
    )


def map_bfs_bool(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_bfs(graph, root, visitor, **kwargs), ResultKind.BOOLEAN)


def map_bfs_str(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_bfs(graph, root, visitor, **kwargs), ResultKind.TEXT)


def map_bfs_int(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_bfs(graph, root, visitor, **kwargs), ResultKind.INTEGER)


def map_bfs_float(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_bfs(graph, root, visitor, **kwargs), ResultKind.REAL)


# =============================================================================
# Breadth-first, backward
# =============================================================================


def map_bfs_back(
    graph: GraphLike,
    root: Any,
    visitor: Visitor,
    /,
    *,
    mode: EdgeMode | str | None = None,
    unreachable: bool | None = None,
    settings: MapSettings | None = None,
    **extra: Any,
) -> dict[NodeIndex, Any]:
    """Map a visitor over nodes in reverse breadth-first order.

    Same keywords as map_bfs(), but ``path`` holds the current node and
    every node reached through it, each with its result already computed
    (except the current node's own row).
    """
    return _map_search(
        graph,
        root,
        visitor,
        kind=SearchKind.BFS,
        direction=Direction.BACKWARD,
        mode=mode,
        unreachable=unreachable,
        settings=settings,
        extra=extra,
    )


def map_bfs_back_bool(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_bfs_back(graph, root, visitor, **kwargs), ResultKind.BOOLEAN)


def map_bfs_back_str(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_bfs_back(graph, root, visitor, **kwargs), ResultKind.TEXT)


def map_bfs_back_int(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_bfs_back(graph, root, visitor, **kwargs), ResultKind.INTEGER)


def map_bfs_back_float(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_bfs_back(graph, root, visitor, **kwargs), ResultKind.REAL)


# =============================================================================
# Depth-first, forward
# =============================================================================


def map_dfs(
    graph: GraphLike,
    root: Any,
    visitor: Visitor,
    /,
    *,
    mode: EdgeMode | str | None = None,
    unreachable: bool | None = None,
    settings: MapSettings | None = None,
    **extra: Any,
) -> dict[NodeIndex, Any]:
    """Map a visitor over nodes in depth-first order.

    The visitor is called with ``graph``, ``node``, ``rank``, ``rank_out``,
    ``parent``, ``distance``, ``path`` and ``**extra``. ``rank_out`` is the
    position at which the node's subtree was completed. ``path`` is the
    ancestor chain, as for map_bfs().
    """
    return _map_search(
        graph,
        root,
        visitor,
        kind=SearchKind.DFS,
        direction=Direction.FORWARD,
        mode=mode,
        unreachable=unreachable,
        settings=settings,
        extra=extra,
    )


def map_dfs_bool(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_dfs(graph, root, visitor, **kwargs), ResultKind.BOOLEAN)


def map_dfs_str(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_dfs(graph, root, visitor, **kwargs), ResultKind.TEXT)


def map_dfs_int(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_dfs(graph, root, visitor, **kwargs), ResultKind.INTEGER)


def map_dfs_float(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_dfs(graph, root, visitor, **kwargs), ResultKind.REAL)


# =============================================================================
# Depth-first, backward
# =============================================================================


def map_dfs_back(
    graph: GraphLike,
    root: Any,
    visitor: Visitor,
    /,
    *,
    mode: EdgeMode | str | None = None,
    unreachable: bool | None = None,
    settings: MapSettings | None = None,
    **extra: Any,
) -> dict[NodeIndex, Any]:
    """Map a visitor over nodes in reverse depth-first order.

    Same keywords as map_dfs(); ``path`` holds the descendant set, as for
    map_bfs_back().
    """
    return _map_search(
        graph,
        root,
        visitor,
        kind=SearchKind.DFS,
        direction=Direction.BACKWARD,
        mode=mode,
        unreachable=unreachable,
        settings=settings,
        extra=extra,
    )


def map_dfs_back_bool(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_dfs_back(graph, root, visitor, **kwargs), ResultKind.BOOLEAN)


def map_dfs_back_str(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_dfs_back(graph, root, visitor, **kwargs), ResultKind.TEXT)


def map_dfs_back_int(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_dfs_back(graph, root, visitor, **kwargs), ResultKind.INTEGER)


def map_dfs_back_float(graph: GraphLike, root: Any, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_dfs_back(graph, root, visitor, **kwargs), ResultKind.REAL)


# =============================================================================
# Local neighbourhoods
# =============================================================================


def map_local(
    graph: GraphLike,
    visitor: Visitor,
    /,
    *,
    radius: int | None = None,
    mode: EdgeMode | str | None = None,
    min_distance: int | None = None,
    workers: int | None = None,
    settings: MapSettings | None = None,
    **extra: Any,
) -> dict[NodeIndex, Any]:
    """Map a visitor over the neighbourhood graph of each node.

    The visitor is called with ``neighborhood`` (a NodeGraph of the nodes
    within ``radius`` steps, minus those closer than ``min_distance``),
    ``graph``, ``node`` and ``**extra``. With ``workers`` above 1 calls
    run concurrently.
    """
    local = (settings if settings is not None else MapSettings()).local
    mapper = NeighborhoodMapper(
        as_node_graph(graph),
        radius=radius if radius is not None else local.radius,
        mode=mode if mode is not None else local.mode,
        min_distance=min_distance if min_distance is not None else local.min_distance,
        workers=workers if workers is not None else local.workers,
    )
    return mapper.map(visitor, **extra)


def map_local_bool(graph: GraphLike, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_local(graph, visitor, **kwargs), ResultKind.BOOLEAN)


def map_local_str(graph: GraphLike, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_local(graph, visitor, **kwargs), ResultKind.TEXT)


def map_local_int(graph: GraphLike, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_local(graph, visitor, **kwargs), ResultKind.INTEGER)


def map_local_float(graph: GraphLike, visitor: Visitor, /, **kwargs: Any) -> ExtensionArray:
    return collect(map_local(graph, visitor, **kwargs), ResultKind.REAL)
