# src/graphfold/engine/__init__.py
"""Traversal engine: search normalization, path contexts, ordered visitor runs.

Components, leaves first:
- compute_search: normalizes a NetworkX search into a SearchTable
- ancestors / descendants: path context for forward and backward passes
- OrderedVisitorRunner: invokes the visitor in rank order
- collect: collapses per-node results into a typed pandas array
- NeighborhoodMapper: context-free mapping over each node's neighbourhood
"""

from graphfold.engine.collect import collect
from graphfold.engine.local import NeighborhoodMapper
from graphfold.engine.offspring import descendants
from graphfold.engine.paths import ancestors
from graphfold.engine.runner import OrderedVisitorRunner
from graphfold.engine.search import compute_search

__all__ = [
    "NeighborhoodMapper",
    "OrderedVisitorRunner",
    "ancestors",
    "collect",
    "compute_search",
    "descendants",
]
