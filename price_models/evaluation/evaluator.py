"""
Evaluate one model configuration on one cross-validation fold.

Fits on the fold's train records, predicts its validate records and
scores the predictions with RMSE.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .errors import EmptyValidationSetError, MetricsError, ModelFitError, PredictionError
from .metrics import rmse, validate_predictions
from .models import FoldScore

if TYPE_CHECKING:
    from ..backends.base import FitFn, PredictFn
    from ..backends.models import ModelConfig
    from ..resampling.models import FoldAssignment

logger = logging.getLogger(__name__)


def evaluate(
    config: ModelConfig,
    fold: FoldAssignment,
    fit_fn: FitFn,
    predict_fn: PredictFn,
) -> FoldScore:
    """
    Score a configuration on one fold.

    Args:
        config: Model configuration to fit
        fold: Train/validate pair
        fit_fn: fit(train_records, config) -> fitted model
        predict_fn: predict(fitted_model, records) -> predicted values

    Returns:
        FoldScore with the fold's RMSE

    Raises:
        EmptyValidationSetError: If fold.validate has no records
        ModelFitError: If fit_fn raises
        PredictionError: If predict_fn raises or returns unusable predictions
    """
    if len(fold.validate) == 0:
        raise EmptyValidationSetError(
            f"Fold {fold.index} has an empty validation set"
        )

    try:
        model = fit_fn(fold.train, config)
    except Exception as e:
        logger.warning(f"Fit failed for {config.label} on fold {fold.index}: {e}")
        raise ModelFitError(
            f"Fitting {config.label} on fold {fold.index} failed: "
            f"{type(e).__name__}: {e}",
            config=config,
            fold_index=fold.index,
        ) from e

    try:
        raw_predictions = predict_fn(model, fold.validate.records)
        predictions = validate_predictions(
            raw_predictions, expected_length=len(fold.validate)
        )
    except Exception as e:
        logger.warning(
            f"Prediction failed for {config.label} on fold {fold.index}: {e}"
        )
        raise PredictionError(
            f"Predicting {config.label} on fold {fold.index} failed: "
            f"{type(e).__name__}: {e}",
            config=config,
            fold_index=fold.index,
        ) from e

    try:
        score = rmse(fold.validate.targets, predictions)
    except MetricsError as e:
        raise PredictionError(str(e), config=config, fold_index=fold.index) from e

    logger.debug(f"{config.label} fold {fold.index}: RMSE={score:.4f}")

    return FoldScore(
        config=config,
        fold_index=fold.index,
        rmse=score,
        n_validate=len(fold.validate),
    )
