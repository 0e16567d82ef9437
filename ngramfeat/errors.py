"""
Exception types raised by the n-gram featurizer.
"""


class NgramError(Exception):
    """Base class for every error raised by ``ngramfeat``."""


class ConfigError(NgramError, ValueError):
    """Configuration is invalid; the featurizer cannot be constructed."""


class InvalidArgumentError(NgramError, TypeError):
    """An extraction call received input it cannot featurize."""
