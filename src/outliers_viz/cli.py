"""Command line interface for the outliers explorer."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable

from .analysis.outliers import OutlierConfig
from .data.sources import CSVSource, RandomLetterSource, SampleSource
from .pipeline import OutlierExplorer
from .preprocessing import InvalidThresholdError, parse_threshold

logger = logging.getLogger(__name__)


def _threshold_arg(text: str) -> float:
    try:
        return parse_threshold(text)
    except InvalidThresholdError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _build_source(args: argparse.Namespace) -> SampleSource:
    if args.csv:
        return CSVSource(path=args.csv)
    return RandomLetterSource(seed=args.seed, low=args.low, high=args.high)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Flag z-score outliers in a labeled sample set")
    parser.add_argument("--threshold", type=_threshold_arg, default=OutlierConfig.zscore_threshold,
                        help="Absolute z-score above which a point is an outlier")
    parser.add_argument("--csv", help="CSV file with label,value columns (random letters when omitted)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for random sample generation")
    parser.add_argument("--low", type=int, default=1, help="Lowest random value")
    parser.add_argument("--high", type=int, default=100, help="Highest random value")
    parser.add_argument("--select", help="Label of a point to highlight")
    parser.add_argument("--format", choices=["text", "json"], default="text")
    parser.add_argument("--output", help="Output file instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(list(argv) if argv is not None else None)


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = OutlierConfig(zscore_threshold=args.threshold)
    try:
        explorer = OutlierExplorer(_build_source(args), config)
        if args.select:
            explorer.select(args.select)
    except KeyError as exc:
        print(f"error: {exc.args[0]}", file=sys.stderr)
        return 1
    except (ValueError, FileNotFoundError) as exc:
        logger.debug("Analysis failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.format == "json":
        payload = explorer.view().to_json()
        payload["expected_percentage"] = round(
            explorer.analyzer.expected_outlier_percentage(explorer.threshold), 1
        )
        text = json.dumps(payload, indent=2)
    else:
        text = explorer.report()

    if args.output:
        Path(args.output).write_text(text)
        logger.debug("Wrote results to %s", args.output)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
