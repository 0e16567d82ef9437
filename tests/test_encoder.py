"""
Unit tests for TF / IDF / TFIDF output encodings.
"""

from __future__ import annotations

import numpy as np
import pytest

from ngramfeat import ConfigError, InvalidArgumentError, Mode, encode


@pytest.mark.unit
def test_tf_returns_counts_as_float32():
    output = encode([2, 1, 0], Mode.TF)

    assert output.dtype == np.float32
    assert output.tolist() == [2.0, 1.0, 0.0]


@pytest.mark.unit
def test_tf_ignores_weights():
    assert encode([2, 0], "TF", weights=[5.0, 5.0]).tolist() == [2.0, 0.0]


@pytest.mark.unit
def test_idf_without_weights_marks_presence():
    assert encode([0, 3], Mode.IDF).tolist() == [0.0, 1.0]


@pytest.mark.unit
def test_idf_with_weights_uses_weight_when_present():
    assert encode([0, 3, 1], "IDF", weights=[0.5, 2.0, 0.25]).tolist() == [0.0, 2.0, 0.25]


@pytest.mark.unit
def test_tfidf_with_weights_multiplies():
    assert encode([1], Mode.TFIDF, weights=[2.0]).tolist() == [2.0]
    assert encode([2, 0], Mode.TFIDF, weights=[1.5, 4.0]).tolist() == [3.0, 0.0]


@pytest.mark.unit
def test_tfidf_without_weights_degrades_to_tf():
    assert encode([4, 0, 1], Mode.TFIDF).tolist() == [4.0, 0.0, 1.0]
    assert encode([4, 0, 1], Mode.TFIDF, weights=[]).tolist() == [4.0, 0.0, 1.0]


@pytest.mark.unit
def test_longer_weights_are_truncated_to_output_length():
    assert encode([1, 1], Mode.TFIDF, weights=[2.0, 3.0, 4.0]).tolist() == [2.0, 3.0]


@pytest.mark.unit
def test_encode_accepts_numpy_frequencies():
    output = encode(np.array([0, 2], dtype=np.int64), Mode.IDF)

    assert output.shape == (2,)
    assert output.tolist() == [0.0, 1.0]


@pytest.mark.unit
def test_unknown_mode_is_rejected():
    with pytest.raises(ConfigError):
        encode([1], "BM25")


@pytest.mark.unit
def test_short_weights_are_rejected():
    with pytest.raises(InvalidArgumentError, match="cannot cover"):
        encode([1, 2, 3], Mode.TFIDF, weights=[2.0])
