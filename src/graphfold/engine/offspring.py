# src/graphfold/engine/offspring.py
"""Descendant sets for the backward pass.

Two phases over an index-keyed table:

1. Group reached nodes by parent to get direct-children lists.
2. Walk reached nodes once in strictly descending rank. Every child ranks
   after its parent, so each child's set is complete by the time its
   parent is folded.

A wrong processing order would silently yield partial sets, so any child
found unfinished at fold time raises instead.
"""

from __future__ import annotations

from collections import defaultdict

from graphfold.contracts.errors import SearchInvariantError
from graphfold.contracts.search import SearchTable
from graphfold.contracts.types import NodeIndex


def descendants(table: SearchTable) -> dict[NodeIndex, tuple[NodeIndex, ...]]:
    """Each reached node together with everything below it in its search tree.

    ``descendants(v) == {v} | union(descendants(c) for c in children(v))``.
    Each set is returned sorted by ascending rank. Unreached nodes are
    absent from the result.

    Raises:
        SearchInvariantError: If a child is unfinished when its parent is folded
    """
    reached = table.in_rank_order()

    children: dict[NodeIndex, list[NodeIndex]] = defaultdict(list)
    for record in reached:
        if record.parent is not None:
            children[record.parent].append(record.node)

    collected: dict[NodeIndex, set[NodeIndex]] = {}
    for record in reversed(reached):
        members = {record.node}
        for child in children.get(record.node, ()):
            if child not in collected:
                raise SearchInvariantError(f"Descendants of node {child} were not finalized before its parent {record.node}")
            members |= collected[child]
        collected[record.node] = members

    return {node: tuple(sorted(members, key=table.rank)) for node, members in collected.items()}
