# tests/strategies/__init__.py
"""Hypothesis strategies for property-based tests.

Re-exports commonly used strategies for convenience:
    from tests.strategies import random_forests, random_graphs, STANDARD_SETTINGS
"""

from tests.strategies.graphs import edge_modes, random_forests, random_graphs, search_kinds
from tests.strategies.settings import QUICK_SETTINGS, SLOW_SETTINGS, STANDARD_SETTINGS

__all__ = [
    "QUICK_SETTINGS",
    "SLOW_SETTINGS",
    "STANDARD_SETTINGS",
    "edge_modes",
    "random_forests",
    "random_graphs",
    "search_kinds",
]
