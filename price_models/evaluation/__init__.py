"""
Evaluation module for scoring model configurations.

This module provides:
- Prediction metrics (RMSE, MAE, R²)
- Per-fold evaluation of a configuration (fit, predict, RMSE)

Usage:
    from price_models.evaluation import calculate_metrics, evaluate

    score = evaluate(config, fold, fit_fn, predict_fn)
    print(f"Fold {score.fold_index}: RMSE={score.rmse:.2f}")

    metrics = calculate_metrics(y_true, y_pred)
"""

from .errors import (
    BackendFailureError,
    EmptyValidationSetError,
    EvaluationError,
    MetricsError,
    ModelFitError,
    PredictionError,
)
from .evaluator import evaluate
from .metrics import MetricsConfig, calculate_metrics, rmse, validate_predictions
from .models import FoldScore, PredictionMetrics

__all__ = [
    # Operations
    "evaluate",
    "calculate_metrics",
    "rmse",
    "validate_predictions",
    "MetricsConfig",
    # Models
    "FoldScore",
    "PredictionMetrics",
    # Errors
    "EvaluationError",
    "MetricsError",
    "EmptyValidationSetError",
    "BackendFailureError",
    "ModelFitError",
    "PredictionError",
]
