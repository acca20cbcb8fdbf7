"""
tabeval: attribute-aware encoding and evaluation pipeline

CLI interface for running a dataset through encode/train/evaluate.

Usage:
    tabeval run <dataset.csv> [OPTIONS]
    tabeval learners
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from tabeval import (
    PRESETS,
    AttributeTypes,
    InferenceScope,
    Pipeline,
    PipelineConfig,
    ProgressUpdate,
    TabEvalError,
    UnseenCategoryPolicy,
    get_available_learners,
)
from tabeval.learners import get_default_params


def _parse_param(text: str) -> tuple[str, Any]:
    """Parse ``key=value``; the value is JSON when it parses as JSON."""
    key, sep, raw = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got '{text}'")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return key, value


def _parse_indices(text: str) -> list[int]:
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected comma-separated indices, got '{text}'"
        ) from None


def cmd_run(args: argparse.Namespace) -> int:
    """Encode, train and evaluate on a dataset."""
    dataset_path = Path(args.input)

    if args.continuous is not None:
        attribute_types = AttributeTypes.mixed(args.continuous, args.categorical)
    else:
        attribute_types = PRESETS[args.preset]

    def on_progress(update: ProgressUpdate) -> None:
        if args.verbose:
            print(f"[{update.progress * 100:5.1f}%] {update.stage.value}: {update.message}")

    try:
        config = (
            PipelineConfig.builder()
            .dataset_path(dataset_path)
            .attribute_types(attribute_types)
            .train_ratio(args.train_ratio)
            .random_seed(args.seed)
            .inference_scope(
                InferenceScope.TRAIN_ONLY if args.train_only else InferenceScope.FULL_DATASET
            )
            .unseen_category_policy(
                UnseenCategoryPolicy.IGNORE if args.ignore_unseen else UnseenCategoryPolicy.RAISE
            )
            .problem_number(args.problem_number)
            .learner(args.learner)
            .learner_params(dict(args.param))
            .delimiter(args.delimiter)
            .build()
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    pipeline = Pipeline.builder().config(config).on_progress(on_progress).build()

    try:
        result = pipeline.run_sync()
    except TabEvalError as e:
        print(f"Error: {e}")
        return 1

    print(f"Testing finished: problem {result.problem_number}")
    for key, value in result.learner_params.items():
        print(f"{key}: {value}")
    if result.node_count is not None:
        print(f"Model nodes number: {result.node_count}")
    print(f"Train/test records: {result.n_train}/{result.n_test}")
    print(f"Model accuracy: {result.accuracy}")

    if args.output:
        output_path = Path(args.output)
        result.evaluation.to_frame().to_csv(output_path, index=False)
        print(f"Results saved to: {output_path}")
    elif args.verbose:
        print(f"Number of results: {len(result.evaluation.results)}")
        print("=== Results ===")
        print(result.evaluation.to_csv(), end="")

    return 0


def cmd_learners(args: argparse.Namespace) -> int:
    """List reference learners and their default parameters."""
    for name in get_available_learners():
        params = ", ".join(f"{k}={v}" for k, v in get_default_params(name).items())
        print(f"  - {name}: {params}")
    return 0


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="tabeval: attribute-aware encoding and evaluation pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Run command
    run_parser = subparsers.add_parser("run", help="Encode, train and evaluate")
    run_parser.add_argument("input", help="Input CSV file (header row, label in last column)")
    run_parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="breast-cancer",
        help="Attribute types of a known dataset",
    )
    run_parser.add_argument(
        "--continuous", type=_parse_indices, help="Comma-separated continuous column indices"
    )
    run_parser.add_argument(
        "--categorical",
        type=_parse_indices,
        help="Comma-separated categorical column indices (with --continuous)",
    )
    run_parser.add_argument("-i", "--problem-number", type=int, default=1, help="Run identifier")
    run_parser.add_argument("--train-ratio", type=float, default=0.9, help="Training fraction")
    run_parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    run_parser.add_argument(
        "-l", "--learner", choices=get_available_learners(), default="decision_tree"
    )
    run_parser.add_argument(
        "-P",
        "--param",
        type=_parse_param,
        action="append",
        default=[],
        help="Learner parameter as key=value (repeatable)",
    )
    run_parser.add_argument("-d", "--delimiter", default=",", help="Field separator")
    run_parser.add_argument(
        "--train-only", action="store_true", help="Infer descriptors from training rows only"
    )
    run_parser.add_argument(
        "--ignore-unseen",
        action="store_true",
        help="Encode unseen feature values as zeros (with --train-only)",
    )
    run_parser.add_argument("-o", "--output", help="Write the per-record results CSV here")
    run_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    # Learners command
    subparsers.add_parser("learners", help="List reference learners")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "run" and args.categorical is not None and args.continuous is None:
        run_parser.error("--categorical requires --continuous")

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.command == "run":
        return cmd_run(args)
    elif args.command == "learners":
        return cmd_learners(args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
