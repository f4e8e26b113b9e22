"""Command-line entrypoints for k-means evaluation."""
from __future__ import annotations

import argparse
import json
import logging
import signal
import sys
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import EvaluationConfig, load_config, save_config
from .errors import ConfigurationError, DataError, EvaluationCancelled
from .evaluation import KMeansEvaluator
from .extractor import extract_observations, load_table
from .reports import format_curves, summarize
from .tables import centers_table, labeled_table, silhouette_table, wcss_table
from .visuals import write_charts

log = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("kmeans_evaluation")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if logger.handlers:
        return
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def _write_json(path: Path, payload: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)


def _resolve_config(args: argparse.Namespace) -> EvaluationConfig:
    config = load_config(args.config) if args.config else EvaluationConfig()
    for name in ("min_k", "max_k", "solution_k", "max_iter"):
        value = getattr(args, name)
        if value is not None:
            setattr(config, name, value)
    config.validate()
    return config


def cmd_evaluate(args: argparse.Namespace) -> None:
    config = _resolve_config(args)
    frame = load_table(args.input)
    observations = extract_observations(frame, scale=args.standardize)
    if observations.skipped:
        log.info("Skipping %d rows with missing values", len(observations.skipped))

    cancel = threading.Event()
    previous = signal.signal(signal.SIGINT, lambda *_: cancel.set())
    try:
        result = KMeansEvaluator(config).run(
            observations,
            should_cancel=cancel.is_set,
            show_progress=not args.quiet,
        )
    finally:
        signal.signal(signal.SIGINT, previous)
    if cancel.is_set():
        raise EvaluationCancelled("Evaluation cancelled while clustering the last k.")

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)
    labeled_table(frame, result).to_csv(output_dir / "labeled.csv")
    wcss_table(result).to_csv(output_dir / "wcss.csv")
    silhouette_table(result).to_csv(output_dir / "silhouette.csv")
    centers_table(result).to_csv(output_dir / "centers.csv")
    _write_json(
        output_dir / "summary.json",
        summarize(result, skipped=len(observations.skipped)),
    )
    curves = format_curves(result)
    (output_dir / "curves.txt").write_text(curves, encoding="utf-8")
    if not args.no_charts:
        write_charts(result, output_dir, observations)

    if not args.quiet:
        print(curves, end="")
    print(f"Wrote results to {output_dir}")


def cmd_init_config(args: argparse.Namespace) -> None:
    save_config(EvaluationConfig(), Path(args.output))
    print(f"Wrote default config to {args.output}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="K-means elbow and silhouette evaluation")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    evaluate = subparsers.add_parser("evaluate", help="Evaluate a k range and solve one k")
    evaluate.add_argument("--input", required=True, help="Input CSV or JSON table")
    evaluate.add_argument("--output", required=True, help="Output directory")
    evaluate.add_argument("--config", help="JSON config file")
    evaluate.add_argument("--min-k", dest="min_k", type=int)
    evaluate.add_argument("--max-k", dest="max_k", type=int)
    evaluate.add_argument("--solution-k", dest="solution_k", type=int)
    evaluate.add_argument("--max-iter", dest="max_iter", type=int)
    evaluate.add_argument(
        "--standardize",
        action="store_true",
        help=(
            "Cluster on columns scaled to zero mean and unit variance; "
            "centers are reported in the input units."
        ),
    )
    evaluate.add_argument("--no-charts", action="store_true")
    evaluate.add_argument("--quiet", action="store_true", help="Hide progress and curves")
    evaluate.set_defaults(func=cmd_evaluate)

    init_config = subparsers.add_parser("init-config", help="Write the default config")
    init_config.add_argument("--output", required=True, help="Config path")
    init_config.set_defaults(func=cmd_init_config)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        args.func(args)
    except (ConfigurationError, DataError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc
    except EvaluationCancelled as exc:
        print(f"cancelled: {exc}", file=sys.stderr)
        raise SystemExit(130) from exc


if __name__ == "__main__":
    main()
