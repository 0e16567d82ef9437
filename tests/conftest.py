"""
Shared pytest fixtures for the n-gram featurizer suite.
"""

from __future__ import annotations

from typing import Any, Callable, Dict

import pytest

from ngramfeat import NgramConfig


def _unigram_values() -> Dict[str, Any]:
    return {
        "mode": "TF",
        "min_length": 1,
        "max_length": 1,
        "skip_count": 0,
        "use_all_lengths": False,
        "length_offsets": [0],
        "output_slots": [0, 1, 2],
        "pool_int64s": [5, 6, 7],
    }


def _skip_bigram_values() -> Dict[str, Any]:
    return {
        "mode": "TF",
        "min_length": 2,
        "max_length": 2,
        "skip_count": 1,
        "use_all_lengths": False,
        "length_offsets": [0, 0],
        "output_slots": [0],
        "pool_int64s": [1, 3],
    }


@pytest.fixture
def unigram_values() -> Dict[str, Any]:
    """Three integer unigrams 5, 6, 7 counted into slots 0, 1, 2."""
    return _unigram_values()


@pytest.fixture
def skip_bigram_values() -> Dict[str, Any]:
    """A single bigram (1, 3) matched with up to one skipped token."""
    return _skip_bigram_values()


@pytest.fixture
def make_config() -> Callable[..., NgramConfig]:
    """Build an NgramConfig from the unigram values with overrides applied."""

    def _make(base: str = "unigram", **overrides: Any) -> NgramConfig:
        values = _unigram_values() if base == "unigram" else _skip_bigram_values()
        values.update(overrides)
        return NgramConfig(**values)

    return _make
