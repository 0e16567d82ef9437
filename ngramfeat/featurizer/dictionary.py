"""
N-gram dictionary construction.

The vocabulary pool is a flat token sequence holding all configured 1-grams,
then all 2-grams, and so on. ``length_offsets[L-1]`` is where the L-grams start;
they run up to the next offset (or the end of the pool for the last length) and
are carved into consecutive, non-overlapping chunks of L tokens. Every chunk
becomes one dictionary entry, with ids assigned in pool order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from ..errors import ConfigError
from .token_key import INTEGER_TOKENS, STRING_TOKENS, TokenDomain, TokenKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DictionaryEntry:
    """One configured n-gram and the output slot its matches are counted in."""

    id: int
    tokens: Tuple[Any, ...]
    output_slot: int

    @property
    def length(self) -> int:
        return len(self.tokens)


class NgramDictionary:
    """
    Immutable lookup from token window content to dictionary entry.

    Built once by ``build_dictionary``; only read afterwards, so concurrent
    lookups from several threads are safe.
    """

    def __init__(self, domain: TokenDomain, entries: Dict[TokenKey, DictionaryEntry]):
        self._domain = domain
        self._entries = entries
        self._by_id = tuple(sorted(entries.values(), key=lambda e: e.id))

    @property
    def domain(self) -> TokenDomain:
        return self._domain

    @property
    def entries(self) -> Tuple[DictionaryEntry, ...]:
        """All entries ordered by id."""
        return self._by_id

    @property
    def output_size(self) -> int:
        if not self._by_id:
            return 0
        return max(e.output_slot for e in self._by_id) + 1

    def lookup(self, key: TokenKey) -> Optional[DictionaryEntry]:
        return self._entries.get(key)

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, tokens: object) -> bool:
        if isinstance(tokens, TokenKey):
            return tokens in self._entries
        if not isinstance(tokens, (list, tuple)):
            return False
        return TokenKey(self._domain, tokens) in self._entries

    def __repr__(self) -> str:
        return f"NgramDictionary(domain={self._domain.name}, size={len(self)})"


def infer_domain(pool: Sequence[Any]) -> TokenDomain:
    """Pick the token domain matching the pool's tokens."""
    if pool and all(isinstance(token, str) for token in pool):
        return STRING_TOKENS
    for token in pool:
        if not INTEGER_TOKENS.accepts(token):
            raise ConfigError(f"Pool must hold only text or only integers, got {token!r}")
    return INTEGER_TOKENS


def build_dictionary(
    pool: Sequence[Any],
    length_offsets: Sequence[int],
    output_slots: Sequence[int],
    domain: Optional[TokenDomain] = None
) -> NgramDictionary:
    """
    Carve the vocabulary pool into n-gram entries

    Args:
        pool: Flat vocabulary (1-grams, then 2-grams, ...)
        length_offsets: Start offset in ``pool`` of each n-gram length, 1-grams first
        output_slots: Output vector index for each entry, in id order
        domain: Token domain of the pool (inferred from its tokens when omitted)

    Returns:
        NgramDictionary with exactly ``len(output_slots)`` entries

    Raises:
        ConfigError: On out-of-bounds segments, segments that do not hold whole
            n-grams, duplicate n-grams within a length, or an entry count that
            does not match ``output_slots``
    """
    if domain is None:
        domain = infer_domain(pool)

    total_items = len(pool)
    entries: Dict[TokenKey, DictionaryEntry] = {}
    ngram_id = 0

    for index, start in enumerate(length_offsets):
        ngram_size = index + 1
        end = length_offsets[index + 1] if index + 1 < len(length_offsets) else total_items
        if not 0 <= start <= end <= total_items:
            raise ConfigError(
                f"n-gram offsets out of bounds for {ngram_size}-grams "
                f"(segment [{start}, {end}) in a pool of {total_items})"
            )

        items = end - start
        if items == 0:
            continue
        if items % ngram_size != 0:
            raise ConfigError(
                f"Number of items must compose whole {ngram_size}-grams "
                f"({items} items in segment)"
            )

        ngrams = items // ngram_size
        before_insert = len(entries)
        for first in range(start, end, ngram_size):
            if ngram_id >= len(output_slots):
                raise ConfigError(
                    f"n-grams in the pool exceed output_slots size ({len(output_slots)})"
                )
            key = TokenKey(domain, pool[first:first + ngram_size], id=ngram_id)
            entries.setdefault(
                key,
                DictionaryEntry(id=ngram_id, tokens=key.tokens, output_slot=output_slots[ngram_id])
            )
            ngram_id += 1

        if before_insert + ngrams != len(entries):
            raise ConfigError(f"Duplicate {ngram_size}-grams detected in the pool")
        logger.info("  %d-grams: %d entries", ngram_size, ngrams)

    if len(entries) != len(output_slots):
        raise ConfigError(
            f"n-grams in the pool ({len(entries)}) do not match output_slots size "
            f"({len(output_slots)})"
        )

    dictionary = NgramDictionary(domain, entries)
    logger.info(
        "Built %s n-gram dictionary: %d entries, output size %d",
        domain.name, len(dictionary), dictionary.output_size
    )
    return dictionary
