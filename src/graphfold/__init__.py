"""
graphfold: fold and scan over breadth/depth-first search forests.

Map a visitor over every node of a NetworkX graph in search order, giving
each call the already-computed results of its ancestors (forward pass) or
descendants (backward pass).
"""

from graphfold.api import (
    map_bfs,
    map_bfs_back,
    map_bfs_back_bool,
    map_bfs_back_float,
    map_bfs_back_int,
    map_bfs_back_str,
    map_bfs_bool,
    map_bfs_float,
    map_bfs_int,
    map_bfs_str,
    map_dfs,
    map_dfs_back,
    map_dfs_back_bool,
    map_dfs_back_float,
    map_dfs_back_int,
    map_dfs_back_str,
    map_dfs_bool,
    map_dfs_float,
    map_dfs_int,
    map_dfs_str,
    map_local,
    map_local_bool,
    map_local_float,
    map_local_int,
    map_local_str,
)
from graphfold.contracts import (
    CollectionTypeError,
    EdgeMode,
    InvalidRootError,
    PathRow,
    ResultKind,
    SearchInvariantError,
    VisitorFailure,
)
from graphfold.core.config import MapSettings, load_settings
from graphfold.core.graph import NodeGraph
from graphfold.core.logging import configure_logging

__version__ = "0.1.0"

__all__ = [
    "CollectionTypeError",
    "EdgeMode",
    "InvalidRootError",
    "MapSettings",
    "NodeGraph",
    "PathRow",
    "ResultKind",
    "SearchInvariantError",
    "VisitorFailure",
    "configure_logging",
    "load_settings",
    "map_bfs",
    "map_bfs_back",
    "map_bfs_back_bool",
    "map_bfs_back_float",
    "map_bfs_back_int",
    "map_bfs_back_str",
    "map_bfs_bool",
    "map_bfs_float",
    "map_bfs_int",
    "map_bfs_str",
    "map_dfs",
    "map_dfs_back",
    "map_dfs_back_bool",
    "map_dfs_back_float",
    "map_dfs_back_int",
    "map_dfs_back_str",
    "map_dfs_bool",
    "map_dfs_float",
    "map_dfs_int",
    "map_dfs_str",
    "map_local",
    "map_local_bool",
    "map_local_float",
    "map_local_int",
    "map_local_str",
]
