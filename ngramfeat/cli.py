#!/usr/bin/env python
"""
Featurize pre-tokenized sequences from a JSON-lines file.

Usage:
    ngramfeat --config ngram_config.json --input tokens.jsonl --output features.csv

    # Override the configured output mode
    ngramfeat --config ngram_config.json --input tokens.jsonl --mode TFIDF
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .config import Mode, load_config
from .errors import InvalidArgumentError, NgramError
from .pipeline import NgramFeaturizer

LOG = logging.getLogger("ngramfeat.cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract bag-of-n-grams features from tokenized sequences"
    )
    parser.add_argument("--config", required=True, help="JSON n-gram configuration")
    parser.add_argument("--input", required=True, help="JSON-lines file, one token sequence per row")
    parser.add_argument("--column", default="tokens", help="Row field holding the tokens (default: tokens)")
    parser.add_argument("--output", default=None, help="Output CSV (default: stdout)")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in Mode],
        default=None,
        help="Override the configured output mode"
    )
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s"
    )

    input_path = Path(args.input)
    try:
        config = load_config(args.config)
        if args.mode:
            config = config.replace_mode(args.mode)

        if not input_path.exists():
            raise FileNotFoundError(f"Input file not found: {input_path}")
        try:
            df = pd.read_json(input_path, lines=True)
        except ValueError as exc:
            raise InvalidArgumentError(f"Malformed JSON-lines input {input_path}: {exc}") from exc
        LOG.info("Loaded %d rows from %s", len(df), input_path)

        featurizer = NgramFeaturizer(config)
        features = featurizer.transform_frame(df, args.column, show_progress=args.progress)
    except (NgramError, FileNotFoundError) as exc:
        LOG.error("%s", exc)
        return 1

    if args.output:
        features.to_csv(args.output, index=False)
        LOG.info("Features saved to %s", args.output)
    else:
        features.to_csv(sys.stdout, index=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
