"""
Configuration objects for the n-gram featurizer.

The configuration is validated once, when it is constructed, and is treated as
read-only afterwards. Field names follow the featurizer's own vocabulary; the
Ngram operator attribute names (``M``, ``N``, ``S``, ``all``,
``ngram_counts``, ``ngram_indexes``, ``pool_int64s``, ...) are accepted by
``NgramConfig.from_dict`` as aliases.
"""

from __future__ import annotations

import json
import numbers
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

from .errors import ConfigError
from .featurizer.token_key import INTEGER_TOKENS, STRING_TOKENS, TokenDomain


class Mode(str, Enum):
    """Output weighting applied to the frequency vector."""

    TF = "TF"
    IDF = "IDF"
    TFIDF = "TFIDF"

    @classmethod
    def parse(cls, value: Any) -> "Mode":
        if isinstance(value, cls):
            return value
        if value is None:
            raise ConfigError("mode is required")
        try:
            return cls(value)
        except ValueError:
            raise ConfigError(
                f"Unrecognized mode {value!r}; expected one of TF, IDF, TFIDF"
            ) from None


# Ngram operator attribute name -> NgramConfig field
ATTRIBUTE_ALIASES: Dict[str, str] = {
    "M": "min_length",
    "N": "max_length",
    "S": "skip_count",
    "all": "use_all_lengths",
    "ngram_counts": "length_offsets",
    "ngram_indexes": "output_slots",
}


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    return int(value)


def _as_flag(name: str, value: Any) -> bool:
    # integers are accepted as flags, non-zero meaning true
    if isinstance(value, bool):
        return value
    if isinstance(value, numbers.Integral):
        return int(value) != 0
    raise ConfigError(f"{name} must be a boolean or an integer, got {value!r}")


def _as_int_tuple(name: str, values: Optional[Sequence[Any]]) -> Tuple[int, ...]:
    if values is None:
        return ()
    return tuple(_as_int(name, v) for v in values)


@dataclass
class NgramConfig:
    """
    Vocabulary and extraction settings for one featurizer.

    Attributes:
        mode: Output encoding (TF / IDF / TFIDF)
        min_length: Shortest n-gram length considered when ``use_all_lengths`` is set
        max_length: Longest n-gram length
        skip_count: Largest number of tokens skipped between n-gram items
        use_all_lengths: Enumerate every length in [min_length, max_length]
            instead of max_length only
        length_offsets: Start offset in the pool of the 1-grams, 2-grams, ...
        output_slots: Output vector index of every pool n-gram, in pool order
        weights: Optional per-slot weights used by IDF / TFIDF
        pool_strings: Text vocabulary pool
        pool_int64s: Integer vocabulary pool
    """

    mode: Mode
    min_length: int
    max_length: int
    length_offsets: Sequence[int]
    output_slots: Sequence[int]
    skip_count: int = 0
    use_all_lengths: bool = False
    weights: Optional[Sequence[float]] = None
    pool_strings: Optional[Sequence[str]] = None
    pool_int64s: Optional[Sequence[int]] = None

    def __post_init__(self):
        self.mode = Mode.parse(self.mode)

        self.min_length = _as_int("min_length", self.min_length)
        self.max_length = _as_int("max_length", self.max_length)
        self.skip_count = _as_int("skip_count", self.skip_count)
        if self.min_length <= 0:
            raise ConfigError(f"min_length must be positive, got {self.min_length}")
        if self.max_length < self.min_length:
            raise ConfigError(
                f"max_length ({self.max_length}) must be >= min_length ({self.min_length})"
            )
        if self.skip_count < 0:
            raise ConfigError(f"skip_count must be non-negative, got {self.skip_count}")
        self.use_all_lengths = _as_flag("use_all_lengths", self.use_all_lengths)

        self.length_offsets = _as_int_tuple("length_offsets", self.length_offsets)
        if not self.length_offsets:
            raise ConfigError("Non-empty length_offsets is required")

        self.output_slots = _as_int_tuple("output_slots", self.output_slots)
        if not self.output_slots:
            raise ConfigError("Non-empty output_slots is required")
        if min(self.output_slots) < 0:
            raise ConfigError("output_slots has a negative index")

        if self.weights is not None:
            self.weights = tuple(float(w) for w in self.weights)
            if len(self.weights) != len(self.output_slots):
                raise ConfigError(
                    f"weights and output_slots must have equal size "
                    f"({len(self.weights)} != {len(self.output_slots)})"
                )
            if self.output_size > len(self.weights):
                raise ConfigError(
                    f"output slot {self.output_size - 1} has no weight "
                    f"(only {len(self.weights)} weights given)"
                )

        self._validate_pool()

    def _validate_pool(self):
        if self.pool_strings is not None and self.pool_int64s is not None:
            raise ConfigError("Only one of pool_strings or pool_int64s may be given")

        if self.pool_strings is not None:
            self.pool_strings = tuple(self.pool_strings)
            if not self.pool_strings:
                raise ConfigError("pool_strings must not be empty if specified")
            for token in self.pool_strings:
                if not isinstance(token, str):
                    raise ConfigError(f"pool_strings must contain text, got {token!r}")
        elif self.pool_int64s is not None:
            self.pool_int64s = _as_int_tuple("pool_int64s", self.pool_int64s)
            if not self.pool_int64s:
                raise ConfigError("pool_int64s must not be empty if specified")
        else:
            raise ConfigError("Non-empty pool_int64s is required if pool_strings not provided")

    @property
    def pool(self) -> Tuple[Any, ...]:
        return self.pool_strings if self.pool_strings is not None else self.pool_int64s

    @property
    def token_domain(self) -> TokenDomain:
        return STRING_TOKENS if self.pool_strings is not None else INTEGER_TOKENS

    @property
    def low_length(self) -> int:
        """Shortest n-gram length the extractor enumerates."""
        return self.min_length if self.use_all_lengths else self.max_length

    @property
    def output_size(self) -> int:
        return max(self.output_slots) + 1

    def replace_mode(self, mode: Mode | str) -> "NgramConfig":
        """Return a copy of this config with a different output mode."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values["mode"] = mode
        return NgramConfig(**values)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "NgramConfig":
        if not data:
            raise ConfigError("Empty n-gram configuration")

        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = ATTRIBUTE_ALIASES.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown configuration key: {key}")
            if name in values:
                raise ConfigError(f"Configuration key given twice: {key}")
            values[name] = value

        missing = [
            name for name in ("mode", "min_length", "max_length", "length_offsets", "output_slots")
            if name not in values
        ]
        if missing:
            raise ConfigError(f"Missing required configuration keys: {', '.join(missing)}")

        return cls(**values)


def load_config(path: str | Path) -> NgramConfig:
    """
    Load an n-gram configuration from a JSON file

    Args:
        path: JSON document with NgramConfig fields (or operator attribute names)

    Returns:
        Validated NgramConfig
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"N-gram config not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Malformed n-gram config {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"N-gram config {path} must hold a JSON object")
    return NgramConfig.from_dict(data)
