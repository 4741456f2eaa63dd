"""Semantic type aliases for compile-time type safety.

NewType creates distinct types that mypy treats as incompatible,
preventing accidental mixing of node indices with ranks or distances.
"""

from collections.abc import Callable
from typing import Any, NewType

NodeIndex = NewType("NodeIndex", int)
"""1-based position of a node in the graph's node table (stable per graph)"""

Visitor = Callable[..., Any]
"""Caller-supplied function invoked once per node with keyword arguments.

Visitors should accept the keywords they need and catch the rest with
``**kwargs``; every call passes the full keyword set for its mapping kind.
"""
