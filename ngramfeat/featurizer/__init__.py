"""
N-gram featurizer internals.

- token_key: content-hashed token windows
- dictionary: vocabulary pool -> n-gram dictionary
- extractor: skip-gram counting over an input sequence
- encoder: TF / IDF / TFIDF output encodings
"""

from .token_key import INTEGER_TOKENS, STRING_TOKENS, TokenDomain, TokenKey

__all__ = ["INTEGER_TOKENS", "STRING_TOKENS", "TokenDomain", "TokenKey"]
