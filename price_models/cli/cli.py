"""
price-models CLI - Compare linear and random forest models by cross-validation.

Usage:
    price-models run --seed 1126 --folds 5
    price-models run --data.path diamonds.csv --data.categorical cut,color,clarity \\
        --experiment experiment.yaml --output result.json
    price-models families
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from ..backends.base import backend_functions, get_registered_families
from ..backends.errors import BackendError
from ..data.errors import DataError
from ..evaluation.errors import BackendFailureError, EvaluationError
from ..evaluation.metrics import MetricsConfig
from ..resampling.errors import ResamplingError
from ..selection.errors import SelectionError
from ..selection.models import SelectorConfig, WorkflowResult
from ..selection.workflow import run_workflow
from .config import (
    add_args,
    check_config,
    config_to_dict,
    finalize_config,
    load_dataset,
    load_model_configs,
    setup_logging,
)

logger = logging.getLogger(__name__)

LIBRARY_ERRORS = (
    DataError,
    ResamplingError,
    EvaluationError,
    BackendError,
    SelectionError,
)


def print_report(result: WorkflowResult) -> None:
    """Print split sizes, the cross-validation table, and the holdout result."""
    data_split = result.split
    selection = result.selection
    final = result.final

    print(
        f"Split: {len(data_split.train)} train / {len(data_split.holdout)} holdout "
        f"(proportion={data_split.proportion}, seed={data_split.seed})"
    )
    print()
    print(f"Cross-validation ({selection.n_folds} folds):")
    width = max(len(s.config.label) for s in selection.summaries)
    for summary in selection.summaries:
        marker = "*" if summary.config == selection.best_config else " "
        print(
            f"  {marker} {summary.config.label:<{width}}  "
            f"RMSE {summary.mean_rmse:10.4f}  ±{summary.std_err:.4f}"
        )
    print()
    print(f"Selected: {selection.best_config.label}")
    print("Holdout Results:")
    print(f"  RMSE: {final.metrics.rmse:.4f}")
    print(f"  MAE:  {final.metrics.mae:.4f}")
    print(f"  R²:   {final.metrics.r2:.4f}")
    for threshold, value in sorted(final.metrics.accuracy.items()):
        print(f"  Within {threshold:.0%}: {value:.1%}")
    print(f"  n:    {final.metrics.n_samples}")


def cmd_run(args: argparse.Namespace) -> int:
    """Execute the run command."""
    check_config(args)
    setup_logging(args.log_level)
    logger.debug(f"Configuration: {config_to_dict(args)}")

    dataset = load_dataset(args)
    configs, feature_spec = load_model_configs(args, dataset)
    fit_fn, predict_fn = backend_functions(feature_spec)

    try:
        result = run_workflow(
            dataset,
            configs,
            proportion=args.proportion,
            v=args.folds,
            seed=args.seed,
            fit_fn=fit_fn,
            predict_fn=predict_fn,
            selector_config=SelectorConfig(max_concurrent=args.max_concurrent),
            metrics_config=MetricsConfig(
                accuracy_thresholds=args.metrics_accuracy_thresholds
            ),
        )
    except BackendFailureError as e:
        where = f"fold {e.fold_index}" if e.fold_index is not None else "final fit"
        label = e.config.label if e.config is not None else "unknown config"
        print(f"ERROR: {label} failed on {where}: {e}", file=sys.stderr)
        return 1

    print_report(result)

    if args.output_path is not None:
        payload = {"config": config_to_dict(args), "result": result.to_dict()}
        args.output_path.write_text(json.dumps(payload, indent=2))
        print()
        print(f"Wrote {args.output_path}")

    return 0


def cmd_families(args: argparse.Namespace) -> int:
    """Execute the families command."""
    for family in get_registered_families():
        print(family)
    return 0


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="price-models",
        description="Select a regression model by v-fold cross-validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        help="Command to execute",
    )

    run_parser = subparsers.add_parser(
        "run",
        help="Split, cross-validate, select, and score on the holdout",
        description="Run the full model selection workflow.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    add_args(run_parser)

    subparsers.add_parser(
        "families",
        help="List registered model families",
    )

    config = parser.parse_args(args)
    if config.command == "run":
        finalize_config(config)
    return config


def main(args: list[str] | None = None) -> int:
    """CLI entry point."""
    config = parse_args(args)

    try:
        if config.command == "run":
            return cmd_run(config)
        elif config.command == "families":
            return cmd_families(config)
        else:
            print(f"ERROR: Unknown command: {config.command}", file=sys.stderr)
            return 2

    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except LIBRARY_ERRORS as e:
        print(f"ERROR: {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
