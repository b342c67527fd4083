"""Refit the selected configuration and score it on the holdout subset."""

from __future__ import annotations

import logging

from ..backends.base import FitFn, PredictFn, fit_model, predict_model
from ..backends.models import ModelConfig
from ..data.models import Dataset
from ..evaluation.errors import MetricsError, ModelFitError, PredictionError
from ..evaluation.metrics import MetricsConfig, calculate_metrics, validate_predictions
from ..resampling.errors import EmptyDatasetError
from .models import FinalEvaluation

logger = logging.getLogger(__name__)


def finalize(
    best_config: ModelConfig,
    train: Dataset,
    holdout: Dataset,
    fit_fn: FitFn = fit_model,
    predict_fn: PredictFn = predict_model,
    metrics_config: MetricsConfig | None = None,
) -> FinalEvaluation:
    """
    Fit `best_config` on the whole training subset and score the holdout.

    This is the only step that reads the holdout records.

    Args:
        best_config: Configuration chosen by select_best
        train: Entire training subset (not a fold)
        holdout: Holdout subset from the original split
        fit_fn: fit(train_records, config) -> fitted model
        predict_fn: predict(fitted_model, records) -> predictions
        metrics_config: Accuracy thresholds for the holdout metrics

    Returns:
        FinalEvaluation with the fitted model, holdout RMSE, and the
        aligned prediction/actual arrays

    Raises:
        EmptyDatasetError: If the holdout subset has no records
        ModelFitError: If fit_fn raises
        PredictionError: If predict_fn raises or returns unusable predictions
    """
    if len(holdout) == 0:
        raise EmptyDatasetError("Cannot evaluate on an empty holdout subset")

    try:
        model = fit_fn(train, best_config)
    except Exception as e:
        raise ModelFitError(
            f"Final fit of {best_config.label} failed: {type(e).__name__}: {e}",
            config=best_config,
        ) from e

    try:
        predictions = validate_predictions(
            predict_fn(model, holdout.records), expected_length=len(holdout)
        )
    except Exception as e:
        raise PredictionError(
            f"Holdout prediction with {best_config.label} failed: "
            f"{type(e).__name__}: {e}",
            config=best_config,
        ) from e

    actuals = holdout.targets
    try:
        metrics = calculate_metrics(actuals, predictions, metrics_config)
    except MetricsError as e:
        raise PredictionError(str(e), config=best_config) from e

    logger.info(
        f"Holdout evaluation of {best_config.label}: RMSE={metrics.rmse:.4f}, "
        f"MAE={metrics.mae:.4f}, R²={metrics.r2:.4f} on {metrics.n_samples} records"
    )

    return FinalEvaluation(
        config=best_config,
        model=model,
        rmse=metrics.rmse,
        predictions=predictions,
        actuals=actuals,
        metrics=metrics,
    )
