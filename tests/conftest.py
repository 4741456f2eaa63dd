# tests/conftest.py
"""Shared test fixtures.

Graph Fixtures:
- star_graph: directed star, centre 1 pointing at four leaves
- path_graph: directed path 1 -> 2 -> 3
- two_components: undirected graph with components {1, 2, 3} and {4, 5}

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import logging
import os
from collections.abc import Iterator

import networkx as nx
import pytest
from hypothesis import Phase, Verbosity, settings

from graphfold.core.graph import NodeGraph

# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_logging() -> Iterator[None]:
    """Tests that call configure_logging() must not leak config into others."""
    package = logging.getLogger("graphfold")
    handlers, level, propagate = list(package.handlers), package.level, package.propagate
    yield
    package.handlers = handlers
    package.setLevel(level)
    package.propagate = propagate


# =============================================================================
# Graph Fixtures
# =============================================================================


@pytest.fixture
def star_graph() -> NodeGraph:
    graph = nx.DiGraph()
    graph.add_nodes_from(range(1, 6))
    graph.add_edges_from((1, leaf) for leaf in range(2, 6))
    return NodeGraph(graph)


@pytest.fixture
def path_graph() -> NodeGraph:
    graph = nx.DiGraph()
    graph.add_edges_from([(1, 2), (2, 3)])
    return NodeGraph(graph)


@pytest.fixture
def two_components() -> NodeGraph:
    graph = nx.Graph()
    graph.add_nodes_from(range(1, 6))
    graph.add_edges_from([(1, 2), (2, 3), (4, 5)])
    return NodeGraph(graph)
