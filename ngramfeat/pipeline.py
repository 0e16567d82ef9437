"""
N-gram featurizer facade: build the dictionary once, featurize many sequences.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd
from tqdm import tqdm

from .config import NgramConfig
from .errors import InvalidArgumentError
from .featurizer.dictionary import NgramDictionary, build_dictionary
from .featurizer.encoder import encode
from .featurizer.extractor import extract

logger = logging.getLogger(__name__)


class NgramFeaturizer:
    """
    Bag-of-n-grams featurizer over a fixed vocabulary.

    The configuration and dictionary are read-only once constructed, so one
    instance can serve concurrent ``count``/``transform`` calls from several
    threads.
    """

    def __init__(self, config: NgramConfig | Dict[str, Any]):
        if isinstance(config, NgramConfig):
            self.config = config
        elif isinstance(config, dict):
            self.config = NgramConfig.from_dict(config)
        else:
            raise TypeError(f"Expected NgramConfig or dict, got {type(config).__name__}")

        logger.info(
            "Initializing n-gram featurizer (mode=%s, lengths=%d..%d, skip=%d)",
            self.config.mode.value, self.config.low_length,
            self.config.max_length, self.config.skip_count
        )
        self._dictionary = build_dictionary(
            self.config.pool,
            self.config.length_offsets,
            self.config.output_slots,
            domain=self.config.token_domain
        )
        logger.info("✓ N-gram featurizer ready (%d features)", self.output_size)

    @property
    def dictionary(self) -> NgramDictionary:
        return self._dictionary

    @property
    def output_size(self) -> int:
        return self.config.output_size

    def count(self, tokens: Any) -> np.ndarray:
        """Frequency of every output slot in ``tokens``."""
        return extract(tokens, self.config, self._dictionary)

    def transform(self, tokens: Any) -> np.ndarray:
        """Encoded float32 feature vector for one token sequence."""
        return encode(self.count(tokens), self.config.mode, self.config.weights)

    def transform_many(
        self,
        sequences: Iterable[Any],
        show_progress: bool = False
    ) -> np.ndarray:
        """
        Featurize several token sequences

        Args:
            sequences: Iterable of token sequences
            show_progress: Display a tqdm progress bar

        Returns:
            float32 array of shape (n_sequences, output_size)
        """
        rows = [
            self.transform(tokens)
            for tokens in tqdm(sequences, desc="Extracting n-grams", disable=not show_progress)
        ]
        if not rows:
            return np.zeros((0, self.output_size), dtype=np.float32)
        return np.vstack(rows)

    def feature_names(self) -> List[str]:
        """One label per output slot, built from the n-grams counted in it."""
        labels: Dict[int, List[str]] = defaultdict(list)
        for entry in self._dictionary.entries:
            labels[entry.output_slot].append(" ".join(str(t) for t in entry.tokens))

        return [
            "|".join(labels[slot]) if slot in labels else f"slot_{slot}"
            for slot in range(self.output_size)
        ]

    def transform_frame(
        self,
        df: pd.DataFrame,
        column: str,
        show_progress: bool = False
    ) -> pd.DataFrame:
        """
        Featurize a DataFrame column of token sequences

        Args:
            df: Input rows
            column: Column holding one token sequence per row
            show_progress: Display a tqdm progress bar

        Returns:
            DataFrame of features indexed like ``df``, one column per output slot
        """
        if column not in df.columns:
            raise InvalidArgumentError(
                f"Column {column!r} not found (available: {list(df.columns)})"
            )

        features = self.transform_many(df[column].tolist(), show_progress=show_progress)
        logger.info("Featurized %d rows into %d features", len(df), self.output_size)
        return pd.DataFrame(features, columns=self.feature_names(), index=df.index)

    def __repr__(self) -> str:
        return (
            f"NgramFeaturizer(mode={self.config.mode.value}, "
            f"entries={len(self._dictionary)}, features={self.output_size})"
        )


def featurize(
    tokens: Any,
    config: NgramConfig | Dict[str, Any],
    mode: Optional[str] = None
) -> np.ndarray:
    """One-shot helper: build a featurizer and transform a single sequence."""
    if isinstance(config, dict):
        config = NgramConfig.from_dict(config)
    if mode is not None:
        config = config.replace_mode(mode)
    return NgramFeaturizer(config).transform(tokens)
