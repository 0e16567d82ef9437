"""Output encodings for n-gram frequency vectors."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from ..config import Mode
from ..errors import InvalidArgumentError


def encode(
    frequencies: Sequence[int] | np.ndarray,
    mode: Mode | str,
    weights: Optional[Sequence[float]] = None
) -> np.ndarray:
    """
    Turn a frequency vector into float32 features

    TF returns the raw counts. IDF returns the slot weight (or 1.0 without
    weights) wherever the count is positive. TFIDF returns count * weight, or
    the raw counts without weights.

    Args:
        frequencies: Per-slot n-gram counts
        mode: Output encoding
        weights: Optional per-slot weights, at least as long as ``frequencies``

    Returns:
        float32 vector with the same length as ``frequencies``
    """
    mode = Mode.parse(mode)
    counts = np.asarray(frequencies, dtype=np.float32)
    w = None
    if weights is not None and len(weights) > 0:
        if len(weights) < counts.shape[0]:
            raise InvalidArgumentError(
                f"{len(weights)} weights cannot cover {counts.shape[0]} output slots"
            )
        w = np.asarray(weights, dtype=np.float32)[:counts.shape[0]]

    if mode is Mode.TF:
        return counts
    if mode is Mode.IDF:
        present = counts > 0
        if w is None:
            return present.astype(np.float32)
        return np.where(present, w, np.float32(0)).astype(np.float32)
    # TFIDF
    if w is None:
        return counts
    return (counts * w).astype(np.float32)
