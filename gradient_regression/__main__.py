"""
Command-line entry point.

Usage:

    python -m gradient_regression --csv data.csv --predict 0 --predict 10
    python -m gradient_regression --point 0,2 --point 1,5 --iterations 5000

CSV rows hold the features followed by the label; a header row is skipped.
The bias constant 1.0 is prepended to every feature vector. Results are
printed as JSON.
"""

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .config import TrainingConfig
from .exceptions import RegressionError
from .regressor import LinearRegressor

logger = logging.getLogger("gradient_regression")


def _parse_numbers(text: str) -> List[float]:
    try:
        return [float(part) for part in text.split(",")]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected comma-separated numbers, got {text!r}") from exc


def _parse_point(text: str) -> List[float]:
    values = _parse_numbers(text)
    if len(values) < 2:
        raise argparse.ArgumentTypeError(f"a point needs at least one feature and a label: {text!r}")
    return values


def load_csv(path: Path) -> List[List]:
    """Read ``x1, ..., xn, y`` rows into ``[[1, x1, ..., xn], y]`` pairs."""
    sample = []
    with path.open(newline="") as fh:
        for line_no, row in enumerate(csv.reader(fh), start=1):
            if not row or all(not cell.strip() for cell in row):
                continue
            try:
                values = [float(cell) for cell in row]
            except ValueError:
                if line_no == 1:
                    continue  # header
                raise ValueError(f"{path}:{line_no}: non-numeric value in {row!r}") from None
            if len(values) < 2:
                raise ValueError(f"{path}:{line_no}: expected features and a label")
            sample.append([[1.0] + values[:-1], values[-1]])
    return sample


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gradient_regression",
        description="Fit a linear function to labeled points with batch gradient descent.",
    )
    parser.add_argument("--csv", type=Path, default=None,
                        help="CSV file of feature columns followed by the label column.")
    parser.add_argument("--point", type=_parse_point, action="append", default=[],
                        metavar="X1,...,Y", help="Add one labeled point (repeatable).")
    parser.add_argument("--predict", type=_parse_numbers, action="append", default=[],
                        metavar="X1,...", help="Feature values to predict at (repeatable).")
    parser.add_argument("--iterations", type=int, default=None,
                        help="Gradient descent iterations (default: config).")
    parser.add_argument("--learning-rate", type=float, default=None,
                        help="Learning rate (default: config).")
    parser.add_argument("--history-interval", type=int, default=None,
                        help="Record the cost every N iterations.")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity (default: WARNING).")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    sample = []
    if args.csv is not None:
        if not args.csv.is_file():
            parser.error(f"CSV file not found: {args.csv}")
        try:
            sample.extend(load_csv(args.csv))
        except ValueError as exc:
            parser.error(str(exc))
    sample.extend([[1.0] + point[:-1], point[-1]] for point in args.point)
    logger.debug("Loaded %d points", len(sample))

    if not sample:
        parser.error("no points given; use --csv or --point")

    try:
        config = TrainingConfig.from_env().with_overrides(
            history_interval=args.history_interval,
        )
        regressor = LinearRegressor(config)
        regressor.train(sample, args.iterations, args.learning_rate)
        predictions = [
            {"x": x, "y": regressor.predict([1.0] + x)} for x in args.predict
        ]
    except RegressionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    result = {
        "samples": len(sample),
        "parameters": regressor.parameters().tolist(),
        "predictions": predictions,
    }
    if config.history_interval:
        result["cost_history"] = list(regressor.cost_history)

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
