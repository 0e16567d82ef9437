"""
Token keys: hashable, content-compared windows of tokens.

A ``TokenKey`` is the unit stored in the n-gram dictionary and the unit probed
against it. One key implementation serves both token domains; a ``TokenDomain``
supplies the per-token normalization and hash.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Tuple

HASH_MASK = (1 << 64) - 1
GOLDEN_RATIO = 0x9e3779b9


@dataclass(frozen=True)
class TokenDomain:
    """Normalization and hashing rules for one kind of token."""

    name: str
    accepts: Callable[[Any], bool]
    normalize: Callable[[Any], Any]
    hash_token: Callable[[Any], int] = hash

    def __repr__(self) -> str:
        return f"TokenDomain({self.name})"


def _is_integer_token(token: Any) -> bool:
    return isinstance(token, numbers.Integral) and not isinstance(token, bool)


# int32 and int64 tokens both normalize to Python ints so they compare equal
INTEGER_TOKENS = TokenDomain(name="integer", accepts=_is_integer_token, normalize=int)
STRING_TOKENS = TokenDomain(name="string", accepts=lambda t: isinstance(t, str), normalize=str)


def combine_hash(token_hashes: Iterable[int]) -> int:
    """
    Fold per-token hashes into one order-sensitive 64-bit hash

    Args:
        token_hashes: Hashes of the window's tokens, in window order

    Returns:
        Combined hash (0 for an empty window)
    """
    combined = None
    for token_hash in token_hashes:
        token_hash &= HASH_MASK
        if combined is None:
            combined = token_hash
            continue
        combined ^= (token_hash + GOLDEN_RATIO + (combined << 6) + (combined >> 2)) & HASH_MASK
        combined &= HASH_MASK
    return combined if combined is not None else 0


class TokenKey:
    """
    Window of tokens compared and hashed by content.

    Dictionary entries hold keys built once from the vocabulary pool. The
    extractor reuses a single scratch key per call: it is cleared and refilled
    for every window and never stored.
    """

    __slots__ = ("domain", "id", "_tokens", "_hash")

    def __init__(
        self,
        domain: TokenDomain,
        tokens: Iterable[Any] = (),
        id: Optional[int] = None
    ):
        self.domain = domain
        self.id = id
        self._tokens: List[Any] = [domain.normalize(t) for t in tokens]
        self._hash: Optional[int] = None

    def clear(self) -> None:
        self._tokens.clear()
        self._hash = None

    def append(self, token: Any) -> None:
        self._tokens.append(self.domain.normalize(token))
        self._hash = None

    @property
    def tokens(self) -> Tuple[Any, ...]:
        return tuple(self._tokens)

    def content_equals(self, other: "TokenKey") -> bool:
        """Same length and element-wise equal tokens, in order."""
        return self.domain is other.domain and self._tokens == other._tokens

    def content_hash(self) -> int:
        if self._hash is None:
            hash_token = self.domain.hash_token
            self._hash = combine_hash(hash_token(t) for t in self._tokens)
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TokenKey):
            return NotImplemented
        return self.content_equals(other)

    def __hash__(self) -> int:
        return self.content_hash()

    def __len__(self) -> int:
        return len(self._tokens)

    def __repr__(self) -> str:
        return f"TokenKey(id={self.id}, tokens={self._tokens!r})"
