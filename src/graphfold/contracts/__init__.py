"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core/engine.
Settings classes are NOT re-exported here - import them from
graphfold.core.config.
"""

from graphfold.contracts.enums import Direction, EdgeMode, ResultKind, SearchKind
from graphfold.contracts.errors import (
    CollectionTypeError,
    InvalidRootError,
    SearchInvariantError,
    VisitorFailure,
)
from graphfold.contracts.search import PathRow, SearchRecord, SearchTable, metadata_fields
from graphfold.contracts.types import NodeIndex, Visitor

__all__ = [
    "CollectionTypeError",
    "Direction",
    "EdgeMode",
    "InvalidRootError",
    "NodeIndex",
    "PathRow",
    "ResultKind",
    "SearchInvariantError",
    "SearchKind",
    "SearchRecord",
    "SearchTable",
    "VisitorFailure",
    "Visitor",
    "metadata_fields",
]
