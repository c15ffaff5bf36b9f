"""CLI entry point: compute Bollinger Bands for an OHLCV file.

Usage:
    python -m app --data data/ohlcv.json
    python -m app --data bars.csv --length 50 --mult 2.5 --source high
    python -m app --config indicators.yaml --offset 5 --tail 0 --json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from app.config import get_settings
from app.indicator_config import load_indicator_options
from app.report import BandReportFormatter
from app.services.data_loader import DataLoadError, load_observations
from core.indicators import BollingerCalculator
from core.models.config import BollingerParams

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute Bollinger Bands over OHLCV data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m app --data data/ohlcv.json
  python -m app --data bars.csv --length 50 --mult 2.5
  python -m app --offset 5 --tail 0 --json
        """,
    )
    parser.add_argument(
        "--data", "-d",
        type=str,
        default=None,
        help="OHLCV file, .json or .csv (default: BB_DATA_FILE)",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Indicator options YAML (default: BB_INDICATOR_CONFIG)",
    )

    # Indicator inputs, override the config file
    parser.add_argument("--length", type=int, default=None, help="Window length")
    parser.add_argument(
        "--source",
        type=str,
        default=None,
        help="Price field: open, high, low or close",
    )
    parser.add_argument(
        "--mult",
        type=float,
        default=None,
        help="Standard deviation multiplier",
    )
    parser.add_argument("--offset", type=int, default=None, help="Bars to shift the bands")

    # Output
    parser.add_argument(
        "--tail",
        type=int,
        default=20,
        help="Show only the last N bars, 0 for all (default: 20)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON lines instead of a table",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging",
    )
    return parser.parse_args(argv)


def resolve_params(args: argparse.Namespace, base: BollingerParams) -> BollingerParams:
    """Apply command-line overrides on top of the configured inputs.

    Raises:
        pydantic.ValidationError: If an override is invalid
    """
    overrides = {
        "length": args.length,
        "source": args.source,
        "std_dev_multiplier": args.mult,
        "offset": args.offset,
    }
    return BollingerParams.model_validate(
        {
            **base.model_dump(),
            **{k: v for k, v in overrides.items() if v is not None},
        }
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()

    level = logging.DEBUG if args.verbose else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config_path = Path(args.config or settings.indicator_config)
        options = load_indicator_options(config_path)
        params = resolve_params(args, options.inputs)
    except ValueError as e:
        logger.error("Invalid indicator options: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        observations = load_observations(args.data or settings.data_file)
    except DataLoadError as e:
        logger.error("Failed to load data: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    points = BollingerCalculator(params).calculate_all(observations)

    if args.json:
        rows = points[-args.tail:] if args.tail > 0 else points
        print(BandReportFormatter.to_json_lines(rows))
    else:
        BandReportFormatter.print_console(points, params, tail=args.tail)
    return 0


if __name__ == "__main__":
    sys.exit(main())
