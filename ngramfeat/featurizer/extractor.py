"""
Skip-gram extraction: count dictionary n-grams found in a token sequence.

For every n-gram length in [low_length, max_length] and every stride in
[1, skip_count + 1] a window slides over the input one raw position at a time.
A window of ``length`` tokens at spacing ``stride`` spans
``stride * (length - 1) + 1`` input positions. Unigrams ignore the stride.
"""

from __future__ import annotations

import logging
from typing import Any, List, Tuple

import numpy as np

from ..config import NgramConfig
from ..errors import InvalidArgumentError
from .dictionary import NgramDictionary
from .token_key import INTEGER_TOKENS, STRING_TOKENS, TokenDomain, TokenKey

logger = logging.getLogger(__name__)

INTEGER_DTYPES = (np.dtype(np.int32), np.dtype(np.int64))


def _classify_objects(flat: np.ndarray) -> TokenDomain:
    items = flat.tolist()
    if all(STRING_TOKENS.accepts(t) for t in items):
        return STRING_TOKENS
    if all(INTEGER_TOKENS.accepts(t) for t in items):
        return INTEGER_TOKENS
    raise InvalidArgumentError("Invalid type of the input argument: expected text or integer tokens")


def flatten_input(tokens: Any) -> Tuple[List[Any], TokenDomain]:
    """
    Flatten input tokens into a linear sequence

    Args:
        tokens: numpy array (int32, int64 or text) of any shape, a Python
            sequence of tokens, or a single token

    Returns:
        Tuple of (token list in C order, token domain)

    Raises:
        InvalidArgumentError: If the tokens are neither 32/64-bit integers nor text
    """
    if isinstance(tokens, np.ndarray):
        array = tokens
    else:
        # object dtype keeps numpy from coercing mixed ints and strings to text
        array = np.asarray(tokens, dtype=object)

    flat = array.reshape(-1)
    if array.dtype in INTEGER_DTYPES:
        domain = INTEGER_TOKENS
    elif array.dtype.kind == "U":
        domain = STRING_TOKENS
    elif array.dtype == object:
        domain = _classify_objects(flat) if flat.size else INTEGER_TOKENS
    else:
        raise InvalidArgumentError(f"Invalid type of the input argument: {array.dtype}")

    return flat.tolist(), domain


def extract(tokens: Any, config: NgramConfig, dictionary: NgramDictionary) -> np.ndarray:
    """
    Count occurrences of every dictionary n-gram in ``tokens``

    Args:
        tokens: Input token sequence (see ``flatten_input``)
        config: Validated n-gram configuration
        dictionary: Dictionary built from ``config``

    Returns:
        int64 frequency vector of length ``config.output_size``
    """
    sequence, domain = flatten_input(tokens)
    if sequence and domain is not dictionary.domain:
        raise InvalidArgumentError(
            f"Input holds {domain.name} tokens but the vocabulary pool holds "
            f"{dictionary.domain.name} tokens"
        )

    frequencies = [0] * config.output_size
    total_items = len(sequence)
    probe = TokenKey(dictionary.domain)
    hits = 0

    for length in range(config.low_length, config.max_length + 1):
        # skip does not apply to unigrams
        if length == 1:
            for token in sequence:
                probe.clear()
                probe.append(token)
                entry = dictionary.lookup(probe)
                if entry is not None:
                    frequencies[entry.output_slot] += 1
                    hits += 1
            continue

        # skip count S means strides 1..S+1 between n-gram items
        for stride in range(1, config.skip_count + 2):
            span = stride * (length - 1) + 1
            for start in range(total_items - span + 1):
                probe.clear()
                for position in range(start, start + span, stride):
                    probe.append(sequence[position])
                entry = dictionary.lookup(probe)
                if entry is not None:
                    frequencies[entry.output_slot] += 1
                    hits += 1

    logger.debug("Extracted %d n-gram hits from %d tokens", hits, total_items)
    return np.array(frequencies, dtype=np.int64)
