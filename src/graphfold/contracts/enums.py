"""All modes and kinds used across subsystem boundaries.

String-valued so that plain strings from configuration files and call
sites ("out", "bfs", "real") are accepted wherever an enum is expected.
"""

from enum import StrEnum


class SearchKind(StrEnum):
    """Which search primitive produces the visitation order."""

    BFS = "bfs"
    DFS = "dfs"


class EdgeMode(StrEnum):
    """How edges are followed during a search.

    Ignored for undirected graphs, where every edge is followed both ways.
    """

    OUT = "out"
    IN = "in"
    ALL = "all"


class Direction(StrEnum):
    """Order in which the visitor runs over ranked nodes.

    FORWARD visits ancestors before descendants (ascending rank).
    BACKWARD visits descendants before ancestors (descending rank).
    """

    FORWARD = "forward"
    BACKWARD = "backward"


class ResultKind(StrEnum):
    """Closed set of scalar kinds a result sequence can collapse to."""

    BOOLEAN = "boolean"
    TEXT = "text"
    INTEGER = "integer"
    REAL = "real"
