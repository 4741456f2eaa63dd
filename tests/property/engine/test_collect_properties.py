# tests/property/engine/test_collect_properties.py
"""Property-based tests for collect().

The collapse must never reinterpret a value as a different kind, except
for the one permitted widening of integers to reals.
"""

from __future__ import annotations

import pandas as pd
import pytest
from hypothesis import given
from hypothesis import strategies as st

from graphfold.contracts.enums import ResultKind
from graphfold.contracts.errors import CollectionTypeError
from graphfold.engine.collect import collect
from tests.strategies import STANDARD_SETTINGS

# Exactly representable as float64, so widening to real is lossless
integers = st.integers(min_value=-(2**53), max_value=2**53)
texts = st.text(max_size=10)
optional_integers = st.one_of(st.none(), integers)


class TestCollectProperties:
    @given(values=st.lists(optional_integers, max_size=50))
    @STANDARD_SETTINGS
    def test_integers_always_collapse_to_real(self, values: list[int | None]) -> None:
        result = collect(values, ResultKind.REAL)

        assert result.dtype == pd.Float64Dtype()
        assert len(result) == len(values)
        assert [value is None for value in values] == result.isna().tolist()

    @given(values=st.lists(optional_integers, max_size=50))
    @STANDARD_SETTINGS
    def test_missing_positions_survive(self, values: list[int | None]) -> None:
        result = collect(values, ResultKind.INTEGER)

        assert result.to_numpy(dtype=object, na_value=None).tolist() == values

    @given(
        numbers=st.lists(integers, min_size=1, max_size=20),
        words=st.lists(texts, min_size=1, max_size=20),
        kind=st.sampled_from([None, *ResultKind]),
    )
    @STANDARD_SETTINGS
    def test_text_and_numbers_never_mix(self, numbers: list[int], words: list[str], kind: ResultKind | None) -> None:
        with pytest.raises(CollectionTypeError):
            collect([*numbers, *words], kind)

    @given(values=st.lists(st.booleans(), min_size=1, max_size=20))
    @STANDARD_SETTINGS
    def test_booleans_never_become_integers(self, values: list[bool]) -> None:
        assert collect(values).dtype == pd.BooleanDtype()
        with pytest.raises(CollectionTypeError):
            collect(values, ResultKind.INTEGER)

    @given(value=st.one_of(st.integers(min_value=2**63), st.integers(max_value=-(2**63) - 1)))
    @STANDARD_SETTINGS
    def test_integers_beyond_int64_never_collapse(self, value: int) -> None:
        with pytest.raises(CollectionTypeError):
            collect([value], ResultKind.INTEGER)

    @given(value=st.integers())
    @STANDARD_SETTINGS
    def test_real_widening_is_exact_or_fails(self, value: int) -> None:
        try:
            result = collect([value], ResultKind.REAL)
        except CollectionTypeError:
            # every integer up to 2**53 in magnitude is exact
            assert abs(value) > 2**53
        else:
            assert int(result[0]) == value
