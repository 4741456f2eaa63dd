# src/graphfold/engine/collect.py
"""Collapse per-node results into a homogeneous typed array.

Output arrays are pandas nullable extension arrays so that skipped nodes
keep their position as ``pd.NA`` without changing the element kind.
Collapse is fail-fast: a caller asking for a numeric summary never gets
mixed or truncated data back.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from typing import Any

import numpy as np
import pandas as pd
from pandas.api.extensions import ExtensionArray

from graphfold.contracts.enums import ResultKind
from graphfold.contracts.errors import CollectionTypeError

_MAX_REPORTED = 5
_INT64 = np.iinfo(np.int64)

_ARRAY_DTYPES: Mapping[ResultKind, str] = {
    ResultKind.BOOLEAN: "boolean",
    ResultKind.TEXT: "string",
    ResultKind.INTEGER: "Int64",
    ResultKind.REAL: "Float64",
}

# Element kinds each requested kind accepts. Integers widen losslessly to
# real; nothing else converts.
_ACCEPTS: Mapping[ResultKind, frozenset[ResultKind]] = {
    ResultKind.BOOLEAN: frozenset({ResultKind.BOOLEAN}),
    ResultKind.TEXT: frozenset({ResultKind.TEXT}),
    ResultKind.INTEGER: frozenset({ResultKind.INTEGER}),
    ResultKind.REAL: frozenset({ResultKind.INTEGER, ResultKind.REAL}),
}

_CONVERTERS: Mapping[ResultKind, type] = {
    ResultKind.BOOLEAN: bool,
    ResultKind.TEXT: str,
    ResultKind.INTEGER: int,
    ResultKind.REAL: float,
}


def scalar_kind(value: Any) -> ResultKind | None:
    """Kind of an atomic scalar, or None for anything else.

    numpy scalars map to the kind of their Python counterpart. bool is
    checked first because it subclasses int.
    """
    if isinstance(value, (bool, np.bool_)):
        return ResultKind.BOOLEAN
    if isinstance(value, (int, np.integer)):
        return ResultKind.INTEGER
    if isinstance(value, (float, np.floating)):
        return ResultKind.REAL
    if isinstance(value, (str, np.str_)):
        return ResultKind.TEXT
    return None


def is_missing(value: Any) -> bool:
    """None and pd.NA both mark a node without a result."""
    return value is None or value is pd.NA


def collect(results: Mapping[Any, Any] | Iterable[Any], kind: ResultKind | str | None = None) -> ExtensionArray:
    """Collapse results into a typed array of the same length.

    Args:
        results: Per-node results. Mappings are read in iteration order and
            their keys name positions in error messages; other iterables are
            numbered from 1.
        kind: Requested kind. None accepts whatever single kind the
            results share (integers mixed with reals widen to real; all
            missing yields a boolean array).

    Returns:
        Nullable pandas array ("boolean", "string", "Int64" or "Float64")
        with pd.NA wherever a result was missing.

    Raises:
        CollectionTypeError: If any element is not a scalar, or the
            elements cannot collapse to the requested (or a common) kind,
            including integers outside int64 or not exact as float64
    """
    if isinstance(results, Mapping):
        positions: list[Hashable] = list(results.keys())
        values = list(results.values())
    else:
        values = list(results)
        positions = list(range(1, len(values) + 1))
    requested = ResultKind(kind) if kind is not None else None

    offending: list[str] = []
    first_seen: dict[ResultKind, Hashable] = {}
    for position, value in zip(positions, values, strict=True):
        if is_missing(value):
            continue
        value_kind = scalar_kind(value)
        if value_kind is None:
            offending.append(f"node {position} holds a non-scalar {type(value).__name__}")
            continue
        first_seen.setdefault(value_kind, position)
        if requested is not None and value_kind not in _ACCEPTS[requested]:
            offending.append(f"node {position} holds {value_kind} {value!r}")

    if offending:
        raise CollectionTypeError(requested, _truncate(offending))

    target = requested if requested is not None else _common_kind(first_seen)
    lossy = [
        f"node {position} holds {value!r}, which {target} cannot represent exactly"
        for position, value in zip(positions, values, strict=True)
        if not is_missing(value) and not _representable(value, target)
    ]
    if lossy:
        raise CollectionTypeError(requested, _truncate(lossy))

    convert = _CONVERTERS[target]
    return pd.array([None if is_missing(value) else convert(value) for value in values], dtype=_ARRAY_DTYPES[target])


def _representable(value: Any, target: ResultKind) -> bool:
    """Whether an integer element survives conversion to ``target`` unchanged.

    Integer arrays are int64. Real arrays are float64, which cannot hold
    every integer beyond 2**53 in magnitude.
    """
    if scalar_kind(value) != ResultKind.INTEGER:
        return True
    number = int(value)
    if target == ResultKind.INTEGER:
        return _INT64.min <= number <= _INT64.max
    try:
        return int(float(number)) == number
    except OverflowError:
        return False


def _common_kind(first_seen: Mapping[ResultKind, Hashable]) -> ResultKind:
    present = set(first_seen)
    if not present:
        return ResultKind.BOOLEAN
    if len(present) == 1:
        return present.pop()
    if present == _ACCEPTS[ResultKind.REAL]:
        return ResultKind.REAL
    raise CollectionTypeError(None, [f"{found} first at node {position}" for found, position in sorted(first_seen.items())])


def _truncate(offending: list[str]) -> list[str]:
    if len(offending) <= _MAX_REPORTED:
        return offending
    return [*offending[:_MAX_REPORTED], f"and {len(offending) - _MAX_REPORTED} more"]
