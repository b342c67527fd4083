"""
Command-line configuration management.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Any

from ..backends.models import ModelConfig
from ..data.feature_encoder import FeatureSpec
from ..data.loader import load_csv
from ..data.models import DEFAULT_TARGET, Dataset
from ..data.synthetic import make_linear_dataset
from ..selection.grid import configs_from_mapping, default_configs, load_experiment


def _csv_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _float_list(value: str) -> tuple[float, ...]:
    return tuple(float(item) for item in _csv_list(value))


def add_args(parser: argparse.ArgumentParser) -> None:
    """
    Add workflow arguments to the parser.

    Arguments can be overridden by environment variables.
    """

    parser.add_argument(
        "--data.path",
        dest="data_path",
        type=str,
        help="CSV file with one record per row. Omit to use synthetic data.",
        default=os.environ.get("PRICE_MODELS_DATA_PATH", ""),
    )

    parser.add_argument(
        "--data.target",
        dest="data_target",
        type=str,
        help="Name of the target column.",
        default=os.environ.get("PRICE_MODELS_DATA_TARGET", DEFAULT_TARGET),
    )

    parser.add_argument(
        "--data.categorical",
        dest="data_categorical",
        type=_csv_list,
        help="Comma-separated columns to keep as categorical strings.",
        default=_csv_list(os.environ.get("PRICE_MODELS_DATA_CATEGORICAL", "")),
    )

    parser.add_argument(
        "--synthetic.n",
        dest="synthetic_n",
        type=int,
        help="Number of synthetic records when no CSV is given.",
        default=int(os.environ.get("PRICE_MODELS_SYNTHETIC_N", "1000")),
    )

    parser.add_argument(
        "--synthetic.noise_sd",
        dest="synthetic_noise_sd",
        type=float,
        help="Noise standard deviation of the synthetic target.",
        default=float(os.environ.get("PRICE_MODELS_SYNTHETIC_NOISE_SD", "1.0")),
    )

    parser.add_argument(
        "--experiment",
        dest="experiment_path",
        type=str,
        help="YAML file listing model configurations (and optional features).",
        default=os.environ.get("PRICE_MODELS_EXPERIMENT", ""),
    )

    parser.add_argument(
        "--proportion",
        type=float,
        help="Share of records assigned to the training subset.",
        default=float(os.environ.get("PRICE_MODELS_PROPORTION", "0.75")),
    )

    parser.add_argument(
        "--folds",
        type=int,
        help="Number of cross-validation folds.",
        default=int(os.environ.get("PRICE_MODELS_FOLDS", "5")),
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the split, the folds, and the default forest configs.",
        default=int(os.environ.get("PRICE_MODELS_SEED", "1126")),
    )

    parser.add_argument(
        "--trees",
        type=int,
        help="Trees per forest in the default grid (ignored with --experiment).",
        default=int(os.environ.get("PRICE_MODELS_TREES", "500")),
    )

    parser.add_argument(
        "--max_concurrent",
        type=int,
        help="Maximum (config, fold) cells evaluated at once.",
        default=int(os.environ.get("PRICE_MODELS_MAX_CONCURRENT", "1")),
    )

    parser.add_argument(
        "--metrics.accuracy_thresholds",
        dest="metrics_accuracy_thresholds",
        type=_float_list,
        help="Comma-separated relative error thresholds for holdout accuracy.",
        default=_float_list(
            os.environ.get("PRICE_MODELS_METRICS_ACCURACY_THRESHOLDS", "0.05,0.10,0.15")
        ),
    )

    parser.add_argument(
        "--output",
        dest="output_path",
        type=str,
        help="Write the full result as JSON to this path.",
        default=os.environ.get("PRICE_MODELS_OUTPUT", ""),
    )

    parser.add_argument(
        "--log_level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level.",
        default=os.environ.get("LOG_LEVEL", "INFO"),
    )


def finalize_config(config: argparse.Namespace) -> argparse.Namespace:
    """Convert path options to Path objects (None when unset)."""
    config.data_path = Path(config.data_path) if config.data_path else None
    config.experiment_path = (
        Path(config.experiment_path) if config.experiment_path else None
    )
    config.output_path = Path(config.output_path) if config.output_path else None
    return config


def get_config(args: list[str] | None = None) -> argparse.Namespace:
    """Parse arguments and return configuration."""
    parser = argparse.ArgumentParser(
        description="Cross-validated model selection",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    add_args(parser)
    return finalize_config(parser.parse_args(args))


def check_config(config: argparse.Namespace) -> None:
    """
    Validate configuration.

    Raises:
        ValueError: If configuration is invalid.
    """
    if not 0.0 < config.proportion < 1.0:
        raise ValueError("--proportion must be between 0 and 1 (exclusive)")

    if config.folds < 2:
        raise ValueError("--folds must be at least 2")

    if config.max_concurrent < 1:
        raise ValueError("--max_concurrent must be at least 1")

    if config.data_path is None and config.synthetic_n < 2:
        raise ValueError("--synthetic.n must be at least 2")

    if config.trees < 1:
        raise ValueError("--trees must be at least 1")

    if any(t <= 0 for t in config.metrics_accuracy_thresholds):
        raise ValueError("--metrics.accuracy_thresholds must all be positive")


def config_to_dict(config: argparse.Namespace) -> dict[str, Any]:
    """Convert config to dictionary for logging."""
    return {
        "data_path": str(config.data_path) if config.data_path else None,
        "data_target": config.data_target,
        "data_categorical": list(config.data_categorical),
        "synthetic_n": config.synthetic_n,
        "synthetic_noise_sd": config.synthetic_noise_sd,
        "experiment_path": (
            str(config.experiment_path) if config.experiment_path else None
        ),
        "proportion": config.proportion,
        "folds": config.folds,
        "seed": config.seed,
        "trees": config.trees,
        "max_concurrent": config.max_concurrent,
        "metrics_accuracy_thresholds": list(config.metrics_accuracy_thresholds),
        "output_path": str(config.output_path) if config.output_path else None,
        "log_level": config.log_level,
    }


def load_dataset(config: argparse.Namespace) -> Dataset:
    """Load the CSV named in config, or generate the synthetic dataset."""
    if config.data_path is not None:
        return load_csv(
            config.data_path,
            target=config.data_target,
            categorical=config.data_categorical,
        )
    return make_linear_dataset(
        config.synthetic_n,
        noise_sd=config.synthetic_noise_sd,
        seed=config.seed,
        target=config.data_target,
    )


def load_model_configs(
    config: argparse.Namespace, dataset: Dataset
) -> tuple[list[ModelConfig], FeatureSpec | None]:
    """
    Model configurations and feature spec for this run.

    Uses the experiment file when given, otherwise the linear model plus a
    forest grid over mtry 1..6 (capped at the feature count).
    """
    if config.experiment_path is None:
        max_mtry = max(1, min(6, len(dataset.feature_names)))
        configs = default_configs(seed=config.seed, trees=config.trees, max_mtry=max_mtry)
        return configs, None

    experiment = load_experiment(config.experiment_path)
    features = experiment.get("features")
    spec = FeatureSpec.from_mapping(features) if features else None
    return configs_from_mapping(experiment), spec


def setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
