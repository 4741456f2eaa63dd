# tests/unit/engine/test_paths.py
"""Tests for ancestor chain construction (forward pass context)."""

from __future__ import annotations

import networkx as nx
import pytest

from graphfold.contracts.enums import SearchKind
from graphfold.contracts.errors import SearchInvariantError
from graphfold.contracts.search import SearchRecord, SearchTable
from graphfold.contracts.types import NodeIndex
from graphfold.core.graph import NodeGraph
from graphfold.engine.paths import ancestors
from graphfold.engine.search import compute_search


def _record(node: int, rank: int | None, parent: int | None) -> SearchRecord:
    return SearchRecord(
        node=NodeIndex(node),
        rank=rank,
        parent=NodeIndex(parent) if parent is not None else None,
        distance=None,
    )


class TestAncestors:
    def test_path_graph_chains(self, path_graph: NodeGraph) -> None:
        chains = ancestors(compute_search(path_graph, 1, "bfs"))

        assert chains == {1: (1,), 2: (1, 2), 3: (1, 2, 3)}

    def test_root_chain_is_root_alone(self, star_graph: NodeGraph) -> None:
        chains = ancestors(compute_search(star_graph, 1, "dfs"))

        assert chains[1] == (1,)
        assert all(chains[leaf] == (1, leaf) for leaf in range(2, 6))

    def test_unreached_nodes_are_excluded(self, two_components: NodeGraph) -> None:
        chains = ancestors(compute_search(two_components, 2, "bfs"))

        assert set(chains) == {1, 2, 3}
        assert all(4 not in chain and 5 not in chain for chain in chains.values())

    def test_each_tree_of_a_forest_has_its_own_root(self, two_components: NodeGraph) -> None:
        chains = ancestors(compute_search(two_components, 1, "bfs", unreachable=True))

        assert chains[5] == (4, 5)
        assert chains[3] == (1, 2, 3)

    def test_chain_extends_parent_chain(self) -> None:
        graph = nx.balanced_tree(2, 3, create_using=nx.DiGraph)
        table = compute_search(NodeGraph(graph), 1, "bfs")
        chains = ancestors(table)

        for record in table.in_rank_order():
            if record.parent is not None:
                assert chains[record.node] == (*chains[record.parent], record.node)

    def test_parent_ranked_after_child_is_rejected(self) -> None:
        table = SearchTable(
            SearchKind.BFS,
            [_record(1, rank=1, parent=2), _record(2, rank=2, parent=None)],
        )

        with pytest.raises(SearchInvariantError, match="not ranked before"):
            ancestors(table)
