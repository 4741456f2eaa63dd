# src/graphfold/core/graph.py
"""NodeGraph: indexed node table over a NetworkX graph.

The traversal engine addresses nodes by a stable 1-based index: the
position of the node in the wrapped graph's node iteration order. This
module owns the translation between those indices and NetworkX node
labels, and delegates every graph algorithm (breadth/depth-first search,
shortest-path balls, induced subgraphs) to NetworkX.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Mapping
from dataclasses import dataclass
from itertools import chain
from types import MappingProxyType
from typing import Any

import networkx as nx
import numpy as np

from graphfold.contracts.enums import EdgeMode, SearchKind
from graphfold.contracts.errors import InvalidRootError
from graphfold.contracts.types import NodeIndex


@dataclass(frozen=True, slots=True)
class RawSearch:
    """Search output before normalization into SearchRecords.

    Attributes:
        trees: Visitation order of each search tree, in the order the trees were started
        parent: Tree parent of every reached non-root node
        distance: Depth of every reached node within its tree
        finish_order: Post-order completion sequence across all trees (DFS only)
    """

    trees: tuple[tuple[NodeIndex, ...], ...]
    parent: Mapping[NodeIndex, NodeIndex]
    distance: Mapping[NodeIndex, int]
    finish_order: tuple[NodeIndex, ...] | None = None

    @property
    def order(self) -> tuple[NodeIndex, ...]:
        """Visitation order across all trees."""
        return tuple(chain.from_iterable(self.trees))


class NodeGraph:
    """Read-only graph with a 1-based node index.

    Wraps a frozen copy of the NetworkX graph so that concurrent readers
    (neighbourhood mapping fans out over threads) never observe mutation.
    """

    def __init__(self, graph: nx.Graph[Any]) -> None:
        self._graph: nx.Graph[Any] = nx.freeze(graph.copy())
        self._labels: tuple[Hashable, ...] = tuple(self._graph.nodes)
        self._index: dict[Hashable, NodeIndex] = {label: NodeIndex(i) for i, label in enumerate(self._labels, start=1)}

    def __repr__(self) -> str:
        kind = "directed" if self.is_directed else "undirected"
        return f"NodeGraph({kind}, order={self.order}, size={self.size})"

    @property
    def nx_graph(self) -> nx.Graph[Any]:
        """The frozen NetworkX graph. Mutation attempts raise nx.NetworkXError."""
        return self._graph

    @property
    def order(self) -> int:
        """Number of nodes."""
        return len(self._labels)

    @property
    def size(self) -> int:
        """Number of edges."""
        return self._graph.number_of_edges()

    @property
    def is_directed(self) -> bool:
        return self._graph.is_directed()

    def nodes(self) -> tuple[NodeIndex, ...]:
        """All node indices, ascending."""
        return tuple(NodeIndex(i) for i in range(1, self.order + 1))

    @property
    def labels(self) -> tuple[Hashable, ...]:
        """NetworkX node labels in index order."""
        return self._labels

    def label_of(self, node: NodeIndex) -> Hashable:
        """NetworkX label of a node index.

        Raises:
            KeyError: If the index is outside [1, order]
        """
        if not 1 <= node <= self.order:
            raise KeyError(f"Node index out of range: {node}")
        return self._labels[node - 1]

    def index_of(self, label: Hashable) -> NodeIndex:
        """Node index of a NetworkX label.

        Raises:
            KeyError: If the label is not in the graph
        """
        try:
            return self._index[label]
        except KeyError:
            raise KeyError(f"Node not found: {label!r}") from None

    def node_data(self, node: NodeIndex) -> Mapping[str, Any]:
        """Read-only attribute mapping of a node."""
        return MappingProxyType(self._graph.nodes[self.label_of(node)])

    def resolve_node(self, ref: Any) -> NodeIndex:
        """Resolve a node reference to exactly one node index.

        Accepts a 1-based index, a one-element sequence of indices, or a
        boolean mask over all nodes selecting exactly one. Labels must be
        translated with index_of() first, since integer labels would be
        ambiguous with indices.

        Raises:
            InvalidRootError: If the reference does not identify exactly one node
        """
        if isinstance(ref, (bool, np.bool_)):
            raise InvalidRootError(ref, self.order, "a boolean scalar is not a node index")
        if isinstance(ref, (int, np.integer)):
            index = int(ref)
            if not 1 <= index <= self.order:
                raise InvalidRootError(ref, self.order, f"index is outside [1, {self.order}]")
            return NodeIndex(index)
        if isinstance(ref, (list, tuple, np.ndarray)):
            values = np.asarray(ref)
            if values.dtype == np.bool_:
                if values.shape != (self.order,):
                    raise InvalidRootError(ref, self.order, f"boolean mask has shape {values.shape}, expected ({self.order},)")
                hits = np.flatnonzero(values)
                if len(hits) != 1:
                    raise InvalidRootError(ref, self.order, f"boolean mask selects {len(hits)} nodes")
                return NodeIndex(int(hits[0]) + 1)
            if values.size != 1:
                raise InvalidRootError(ref, self.order, f"{values.size} nodes given")
            return self.resolve_node(values.ravel()[0].item())
        raise InvalidRootError(ref, self.order, f"unsupported reference type {type(ref).__name__}; translate labels with index_of()")

    def _neighbor_order(self, visited: set[Hashable]) -> Callable[[Iterable[Hashable]], list[Hashable]]:
        """Neighbour ordering for networkx searches: ascending index, skipping ``visited``."""
        index = self._index

        def order(neighbors: Iterable[Hashable]) -> list[Hashable]:
            return sorted((label for label in neighbors if label not in visited), key=index.__getitem__)

        return order

    def _oriented(self, mode: EdgeMode) -> nx.Graph[Any]:
        """View of the graph in which following out-edges implements ``mode``."""
        if not self._graph.is_directed():
            return self._graph
        if mode == EdgeMode.ALL:
            return self._graph.to_undirected(as_view=True)
        if mode == EdgeMode.IN:
            return self._graph.reverse(copy=False)
        return self._graph

    def search(self, root: NodeIndex, *, kind: SearchKind, mode: EdgeMode, unreachable: bool) -> RawSearch:
        """Run a breadth- or depth-first search from ``root``.

        Neighbours are explored in ascending index order. With
        ``unreachable`` set, each exhausted tree is followed by a new one
        started at the lowest-indexed node not yet visited.
        """
        view = self._oriented(mode)
        trees: list[list[Hashable]] = []
        parent: dict[Hashable, Hashable] = {}
        distance: dict[Hashable, int] = {}
        finish: list[Hashable] | None = [] if kind == SearchKind.DFS else None
        visited: set[Hashable] = set()
        pending = iter(self._labels)

        # Nodes of earlier trees are skipped by the neighbour ordering, so every
        # tree searches the full view and costs only its own nodes and edges.
        neighbors = self._neighbor_order(visited)
        start: Hashable | None = self.label_of(root)
        while start is not None:
            if finish is None:
                tree = self._bfs_tree(view, start, neighbors, parent, distance)
            else:
                tree = self._dfs_tree(view, start, neighbors, parent, distance, finish)
            trees.append(tree)
            visited.update(tree)
            start = next((label for label in pending if label not in visited), None) if unreachable else None

        index = self._index
        return RawSearch(
            trees=tuple(tuple(index[label] for label in tree) for tree in trees),
            parent=MappingProxyType({index[child]: index[up] for child, up in parent.items()}),
            distance=MappingProxyType({index[label]: depth for label, depth in distance.items()}),
            finish_order=tuple(index[label] for label in finish) if finish is not None else None,
        )

    def _bfs_tree(
        self,
        view: nx.Graph[Any],
        start: Hashable,
        neighbors: Callable[[Iterable[Hashable]], list[Hashable]],
        parent: dict[Hashable, Hashable],
        distance: dict[Hashable, int],
    ) -> list[Hashable]:
        order = [start]
        distance[start] = 0
        for up, child in nx.bfs_edges(view, start, sort_neighbors=neighbors):
            parent[child] = up
            distance[child] = distance[up] + 1
            order.append(child)
        return order

    def _dfs_tree(
        self,
        view: nx.Graph[Any],
        start: Hashable,
        neighbors: Callable[[Iterable[Hashable]], list[Hashable]],
        parent: dict[Hashable, Hashable],
        distance: dict[Hashable, int],
        finish: list[Hashable],
    ) -> list[Hashable]:
        # dfs_labeled_edges opens with (start, start, "forward") and closes
        # with (start, start, "reverse"), so the root lands in both orders.
        order: list[Hashable] = []
        for up, child, label in nx.dfs_labeled_edges(view, start, sort_neighbors=neighbors):
            if label == "forward":
                order.append(child)
                if up == child:
                    distance[child] = 0
                else:
                    parent[child] = up
                    distance[child] = distance[up] + 1
            elif label == "reverse":
                finish.append(child)
        return order

    def induced_subgraph(self, nodes: Iterable[NodeIndex]) -> NodeGraph:
        """Subgraph on the given nodes and every edge between them.

        Node order (and therefore indexing) follows this graph's order.
        """
        keep = {self.label_of(node) for node in nodes}
        view = self._graph.subgraph(keep)
        # Subgraph views may iterate in set order; rebuild in index order
        sub = self._graph.__class__()
        sub.graph.update(self._graph.graph)
        sub.add_nodes_from((label, self._graph.nodes[label]) for label in self._labels if label in keep)
        if view.is_multigraph():
            sub.add_edges_from(view.edges(keys=True, data=True))
        else:
            sub.add_edges_from(view.edges(data=True))
        return NodeGraph(sub)

    def ego_subgraph(self, node: NodeIndex, *, radius: int, mode: EdgeMode, min_distance: int = 0) -> NodeGraph:
        """Induced subgraph of nodes within ``radius`` steps of ``node``.

        Steps follow edges according to ``mode``; nodes closer than
        ``min_distance`` are left out (``min_distance=1`` drops the centre).
        """
        lengths = nx.single_source_shortest_path_length(self._oriented(mode), self.label_of(node), cutoff=radius)
        return self.induced_subgraph(self._index[label] for label, steps in lengths.items() if steps >= min_distance)


def as_node_graph(graph: NodeGraph | nx.Graph[Any]) -> NodeGraph:
    """Wrap a NetworkX graph, passing NodeGraph instances through unchanged.

    Raises:
        TypeError: If ``graph`` is neither
    """
    if isinstance(graph, NodeGraph):
        return graph
    if isinstance(graph, nx.Graph):
        return NodeGraph(graph)
    raise TypeError(f"Expected NodeGraph or networkx graph, got {type(graph).__name__}")
