"""
Public entry points for the skip-gram bag-of-n-grams featurizer.
"""

from .config import Mode, NgramConfig, load_config
from .errors import ConfigError, InvalidArgumentError, NgramError
from .featurizer.dictionary import NgramDictionary, build_dictionary
from .featurizer.encoder import encode
from .featurizer.extractor import extract
from .pipeline import NgramFeaturizer, featurize

__all__ = [
    "ConfigError",
    "InvalidArgumentError",
    "Mode",
    "NgramConfig",
    "NgramDictionary",
    "NgramError",
    "NgramFeaturizer",
    "build_dictionary",
    "encode",
    "extract",
    "featurize",
    "load_config",
]
