# src/graphfold/engine/paths.py
"""Ancestor chains for the forward pass."""

from __future__ import annotations

from graphfold.contracts.errors import SearchInvariantError
from graphfold.contracts.search import SearchTable
from graphfold.contracts.types import NodeIndex


def ancestors(table: SearchTable) -> dict[NodeIndex, tuple[NodeIndex, ...]]:
    """Chain of nodes from the tree root down to each reached node.

    ``ancestors(v) == ancestors(parent(v)) + (v,)`` and a root's chain is
    just the root. Built in one pass over ascending rank: a parent always
    ranks before its children, so its chain is complete when a child needs
    it. Unreached nodes are absent from the result.

    Raises:
        SearchInvariantError: If a parent has not been processed before its child
    """
    chains: dict[NodeIndex, tuple[NodeIndex, ...]] = {}
    for record in table.in_rank_order():
        if record.parent is None:
            chains[record.node] = (record.node,)
            continue
        try:
            parent_chain = chains[record.parent]
        except KeyError:
            raise SearchInvariantError(f"Parent {record.parent} of node {record.node} is not ranked before it") from None
        chains[record.node] = (*parent_chain, record.node)
    return chains
