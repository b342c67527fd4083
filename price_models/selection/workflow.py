"""End-to-end split -> cross-validated selection -> holdout evaluation."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from ..backends.base import FitFn, PredictFn, fit_model, predict_model
from ..backends.models import ModelConfig
from ..data.models import Dataset
from ..evaluation.metrics import MetricsConfig
from ..resampling.splitter import split
from .finalize import finalize
from .models import SelectorConfig, WorkflowResult
from .selector import ModelSelector, check_configs

logger = logging.getLogger(__name__)


def run_workflow(
    dataset: Dataset,
    configs: Sequence[ModelConfig],
    proportion: float = 0.75,
    v: int = 5,
    seed: int = 1126,
    fit_fn: FitFn = fit_model,
    predict_fn: PredictFn = predict_model,
    selector_config: SelectorConfig | None = None,
    metrics_config: MetricsConfig | None = None,
) -> WorkflowResult:
    """
    Split the dataset, select a configuration on the training subset, and
    report its error on the holdout subset.

    The same seed drives both the split and the fold partition. Selection
    only ever sees the training subset; the holdout is read once, by
    finalize().

    Example:
        >>> result = run_workflow(make_linear_dataset(1000), default_configs(1126))
        >>> result.final.config.label
        'linear()'
    """
    start_time = time.time()

    # Fail on an empty grid before doing any work
    configs = check_configs(configs)

    data_split = split(dataset, proportion, seed)
    selector = ModelSelector(selector_config)
    selection = selector.select_best(
        data_split.train, configs, v, seed, fit_fn, predict_fn
    )
    final = finalize(
        selection.best_config,
        data_split.train,
        data_split.holdout,
        fit_fn,
        predict_fn,
        metrics_config,
    )

    elapsed_ms = (time.time() - start_time) * 1000
    logger.info(f"Workflow complete in {elapsed_ms:.1f}ms")

    return WorkflowResult(
        split=data_split,
        selection=selection,
        final=final,
        total_time_ms=elapsed_ms,
    )
