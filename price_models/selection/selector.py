"""
Cross-validated model selection.

Every configuration is scored on the same v folds of the training subset;
the configuration with the smallest mean RMSE wins, ties going to the
configuration listed first.
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from collections.abc import Sequence

import numpy as np

from ..backends.base import FitFn, PredictFn, fit_model, predict_model
from ..backends.models import ModelConfig
from ..data.models import Dataset
from ..evaluation.evaluator import evaluate
from ..evaluation.models import FoldScore
from ..resampling.folds import make_folds
from ..resampling.models import FoldAssignment
from .errors import DuplicateConfigError, EmptyConfigSetError, SelectionError
from .models import ConfigSummary, SelectionResult, SelectorConfig

logger = logging.getLogger(__name__)


def check_configs(configs: Sequence[ModelConfig]) -> list[ModelConfig]:
    """Reject an empty or duplicated configuration list."""
    configs = list(configs)
    if not configs:
        raise EmptyConfigSetError("No model configurations to select from")

    seen: set[ModelConfig] = set()
    for config in configs:
        if config in seen:
            raise DuplicateConfigError(f"Configuration listed twice: {config.label}")
        seen.add(config)
    return configs


def summarize(
    configs: Sequence[ModelConfig],
    fold_scores: Sequence[FoldScore],
) -> tuple[ConfigSummary, ...]:
    """Aggregate fold scores into one summary per configuration, in config order."""
    by_config: dict[ModelConfig, list[FoldScore]] = {c: [] for c in configs}
    for score in fold_scores:
        by_config[score.config].append(score)

    summaries = []
    for config in configs:
        scores = sorted(by_config[config], key=lambda s: s.fold_index)
        values = np.array([s.rmse for s in scores], dtype=np.float64)
        n = len(values)
        std_err = float(np.std(values, ddof=1) / math.sqrt(n)) if n > 1 else 0.0
        summaries.append(
            ConfigSummary(
                config=config,
                mean_rmse=float(np.mean(values)),
                std_err=std_err,
                n_folds=n,
            )
        )
    return tuple(summaries)


def pick_best(summaries: Sequence[ConfigSummary]) -> ConfigSummary:
    """Smallest mean RMSE; on ties the earliest summary wins."""
    best = summaries[0]
    for summary in summaries[1:]:
        if summary.mean_rmse < best.mean_rmse:
            best = summary
    return best


def _build_result(
    configs: list[ModelConfig],
    fold_scores: list[FoldScore],
    v: int,
    seed: int,
) -> SelectionResult:
    # Restore declaration order regardless of completion order
    position = {config: i for i, config in enumerate(configs)}
    fold_scores = sorted(
        fold_scores, key=lambda s: (position[s.config], s.fold_index)
    )

    summaries = summarize(configs, fold_scores)
    for summary in summaries:
        logger.info(
            f"{summary.config.label}: mean RMSE={summary.mean_rmse:.4f} "
            f"(±{summary.std_err:.4f}, {summary.n_folds} folds)"
        )

    best = pick_best(summaries)
    logger.info(f"Selected {best.config.label} with mean RMSE {best.mean_rmse:.4f}")

    return SelectionResult(
        best_config=best.config,
        summaries=summaries,
        fold_scores=tuple(fold_scores),
        n_folds=v,
        seed=seed,
    )


def select_best(
    train: Dataset,
    configs: Sequence[ModelConfig],
    v: int,
    seed: int,
    fit_fn: FitFn = fit_model,
    predict_fn: PredictFn = predict_model,
) -> SelectionResult:
    """
    Pick the configuration with the lowest mean cross-validated RMSE.

    One fold partition is built from (train, v, seed) and shared by every
    configuration, so fit_fn and predict_fn are each called exactly
    len(configs) * v times. Cells run one after another in configuration
    order; the first failure aborts the remaining cells.

    Args:
        train: Training subset (never the holdout)
        configs: Candidate configurations in priority order
        v: Number of folds
        seed: Seed for the fold partition
        fit_fn: fit(train_records, config) -> fitted model
        predict_fn: predict(fitted_model, records) -> predictions

    Returns:
        SelectionResult with the best configuration and per-config mean RMSE

    Raises:
        EmptyConfigSetError: If configs is empty
        DuplicateConfigError: If a configuration is listed twice
        InvalidFoldCountError: If v is out of range for the training subset
        ModelFitError / PredictionError: If a backend call fails
    """
    configs = check_configs(configs)
    folds = make_folds(train, v, seed)

    logger.info(
        f"Evaluating {len(configs)} configurations on {v} folds "
        f"of {len(train)} training records"
    )

    fold_scores = [
        evaluate(config, fold, fit_fn, predict_fn)
        for config in configs
        for fold in folds
    ]
    return _build_result(configs, fold_scores, v, seed)


class ModelSelector:
    """
    Run the (configuration × fold) evaluation matrix concurrently.

    Each cell is independent and only reads the shared training records,
    so cells run in worker threads with no locking. Results are put back
    in declaration order before aggregation, so the winner (including
    tie-breaks) is identical to the sequential select_best.

    Usage:
        selector = ModelSelector(SelectorConfig(max_concurrent=4))
        result = await selector.select_best_async(train, configs, v=5, seed=1126)
        print(result.best_config.label)
    """

    def __init__(self, config: SelectorConfig | None = None):
        """
        Initialize selector.

        Args:
            config: Selector configuration. Uses defaults if None.
        """
        self._config = config or SelectorConfig()

    @property
    def max_concurrent(self) -> int:
        """Maximum number of cells evaluated at once."""
        return self._config.max_concurrent

    def select_best(
        self,
        train: Dataset,
        configs: Sequence[ModelConfig],
        v: int,
        seed: int,
        fit_fn: FitFn = fit_model,
        predict_fn: PredictFn = predict_model,
    ) -> SelectionResult:
        """
        Blocking entry point; sequential when max_concurrent is 1.

        The concurrent path starts its own event loop with asyncio.run, so
        callers already inside a running loop must await select_best_async.

        Raises:
            SelectionError: If called with max_concurrent > 1 from a running
                event loop
        """
        if self.max_concurrent <= 1:
            return select_best(train, configs, v, seed, fit_fn, predict_fn)
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            raise SelectionError(
                "ModelSelector.select_best cannot run inside an event loop; "
                "await select_best_async instead"
            )
        return asyncio.run(
            self.select_best_async(train, configs, v, seed, fit_fn, predict_fn)
        )

    async def select_best_async(
        self,
        train: Dataset,
        configs: Sequence[ModelConfig],
        v: int,
        seed: int,
        fit_fn: FitFn = fit_model,
        predict_fn: PredictFn = predict_model,
    ) -> SelectionResult:
        """
        Concurrent version of select_best with the same contract.

        The first failing cell cancels every cell still waiting for a slot
        and its exception propagates; no partial result is returned.
        """
        configs = check_configs(configs)
        folds = make_folds(train, v, seed)

        start_time = time.time()
        logger.info(
            f"Evaluating {len(configs)} configurations on {v} folds "
            f"(max_concurrent={self.max_concurrent})"
        )

        semaphore = asyncio.Semaphore(max(1, self.max_concurrent))

        async def evaluate_with_semaphore(
            config: ModelConfig, fold: FoldAssignment
        ) -> FoldScore:
            async with semaphore:
                return await asyncio.to_thread(
                    evaluate, config, fold, fit_fn, predict_fn
                )

        tasks = [
            asyncio.create_task(evaluate_with_semaphore(config, fold))
            for config in configs
            for fold in folds
        ]

        try:
            fold_scores = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Wait for cancelled tasks so none outlive this call
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        elapsed_ms = (time.time() - start_time) * 1000
        logger.info(f"Evaluated {len(tasks)} cells in {elapsed_ms:.1f}ms")

        return _build_result(configs, list(fold_scores), v, seed)
