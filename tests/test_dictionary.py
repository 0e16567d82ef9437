"""
Unit tests for carving the vocabulary pool into an n-gram dictionary.
"""

from __future__ import annotations

import logging

import pytest

from ngramfeat import ConfigError, build_dictionary
from ngramfeat.featurizer.dictionary import infer_domain
from ngramfeat.featurizer.token_key import INTEGER_TOKENS, STRING_TOKENS, TokenKey


# --- Construction ---


@pytest.mark.unit
def test_unigram_pool_builds_one_entry_per_token():
    dictionary = build_dictionary([5, 6, 7], [0], [0, 1, 2])

    assert dictionary.size() == 3
    assert [e.tokens for e in dictionary.entries] == [(5,), (6,), (7,)]
    assert [e.id for e in dictionary.entries] == [0, 1, 2]
    assert dictionary.output_size == 3


@pytest.mark.unit
def test_ids_follow_length_then_pool_order():
    dictionary = build_dictionary([1, 2, 3, 1, 2, 2, 3], [0, 3], [4, 3, 2, 1, 0])

    assert len(dictionary) == 5
    entries = dictionary.entries
    assert [e.tokens for e in entries] == [(1,), (2,), (3,), (1, 2), (2, 3)]
    assert [e.output_slot for e in entries] == [4, 3, 2, 1, 0]

    hit = dictionary.lookup(TokenKey(INTEGER_TOKENS, [1, 2]))
    assert hit is not None
    assert hit.id == 3
    assert hit.length == 2


@pytest.mark.unit
def test_empty_unigram_segment_is_skipped():
    dictionary = build_dictionary([1, 3], [0, 0], [0])

    assert dictionary.size() == 1
    assert (1, 3) in dictionary
    assert (1,) not in dictionary


@pytest.mark.unit
def test_reversed_bigrams_are_distinct_entries():
    dictionary = build_dictionary([1, 2, 2, 1], [0, 0], [0, 1])

    assert dictionary.size() == 2
    assert dictionary.lookup(TokenKey(INTEGER_TOKENS, [2, 1])).output_slot == 1


@pytest.mark.unit
def test_same_tokens_at_different_lengths_are_not_duplicates():
    dictionary = build_dictionary([1, 1, 1], [0, 1], [0, 1])

    assert dictionary.size() == 2


@pytest.mark.unit
def test_string_pool():
    dictionary = build_dictionary(["a", "b", "c", "d"], [0, 2], [0, 1, 2])

    assert dictionary.domain is STRING_TOKENS
    assert ("c", "d") in dictionary
    assert dictionary.lookup(TokenKey(STRING_TOKENS, ["b"])).id == 1


@pytest.mark.unit
def test_lookup_miss_returns_none():
    dictionary = build_dictionary([5, 6, 7], [0], [0, 1, 2])

    assert dictionary.lookup(TokenKey(INTEGER_TOKENS, [8])) is None


# --- Construction failures ---


@pytest.mark.unit
def test_duplicate_bigram_is_rejected():
    with pytest.raises(ConfigError, match="Duplicate 2-grams"):
        build_dictionary([1, 3, 1, 3], [0, 0], [0, 1])


@pytest.mark.unit
def test_duplicate_unigram_is_rejected():
    with pytest.raises(ConfigError, match="Duplicate 1-grams"):
        build_dictionary([5, 5], [0], [0, 1])


@pytest.mark.unit
def test_segment_must_hold_whole_ngrams():
    with pytest.raises(ConfigError, match="whole 2-grams"):
        build_dictionary([1, 2, 3], [0, 0], [0])


@pytest.mark.unit
@pytest.mark.parametrize("offsets", [[0, 5], [2, 1], [-1]])
def test_segment_out_of_bounds(offsets):
    with pytest.raises(ConfigError, match="out of bounds"):
        build_dictionary([1, 2, 3], offsets, [0, 1, 2])


@pytest.mark.unit
def test_more_ngrams_than_output_slots():
    with pytest.raises(ConfigError, match="output_slots"):
        build_dictionary([5, 6, 7], [0], [0, 1])


@pytest.mark.unit
def test_fewer_ngrams_than_output_slots():
    with pytest.raises(ConfigError, match="do not match output_slots"):
        build_dictionary([5, 6, 7], [0], [0, 1, 2, 3])


@pytest.mark.unit
def test_mixed_pool_domain_is_rejected():
    with pytest.raises(ConfigError):
        infer_domain([1, "a"])


@pytest.mark.unit
def test_integer_pool_domain_inferred():
    assert infer_domain([1, 2]) is INTEGER_TOKENS


@pytest.mark.unit
def test_entry_counts_per_length_are_logged(caplog):
    with caplog.at_level(logging.INFO, logger="ngramfeat.featurizer.dictionary"):
        build_dictionary([1, 2, 3, 1, 2], [0, 3], [0, 1, 2, 3])

    assert "1-grams: 3 entries" in caplog.text
    assert "2-grams: 1 entries" in caplog.text
