"""
This module provides functions to calculate prediction accuracy metrics:
- RMSE: Root Mean Squared Error (the selection criterion)
- MAE: Mean Absolute Error
- R²: Coefficient of Determination
- Accuracy@X%: Fraction of predictions within X% of actual

RMSE and MAE are in target units (e.g. dollars). Lower is better.
Accuracy is a decimal (0.0-1.0 scale) over records with a non-zero target.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import MetricsError
from .models import PredictionMetrics


@dataclass(frozen=True)
class MetricsConfig:
    """Configuration for metrics calculation."""

    accuracy_thresholds: tuple[float, ...] = (0.05, 0.10, 0.15)
    """Thresholds for accuracy metrics (as decimals). Default: 5%, 10%, 15%."""

    def __post_init__(self) -> None:
        for threshold in self.accuracy_thresholds:
            if not threshold > 0:
                raise MetricsError(
                    f"Accuracy thresholds must be positive, got {threshold}"
                )


def _as_vectors(y_true, y_pred) -> tuple[np.ndarray, np.ndarray]:
    y_true = np.asarray(y_true, dtype=np.float64).flatten()
    y_pred = np.asarray(y_pred, dtype=np.float64).flatten()

    if len(y_true) != len(y_pred):
        raise MetricsError(
            f"Array length mismatch: y_true={len(y_true)}, y_pred={len(y_pred)}"
        )

    if len(y_true) == 0:
        raise MetricsError("Empty input arrays")

    return y_true, y_pred


def rmse(y_true, y_pred) -> float:
    """
    Root Mean Squared Error: sqrt(mean((y_pred - y_true)²)).

    Raises:
        MetricsError: If arrays are empty or have different lengths

    Example:
        >>> rmse([1.0, 2.0, 3.0], [1.0, 2.0, 3.0])
        0.0
    """
    y_true, y_pred = _as_vectors(y_true, y_pred)
    return _calculate_rmse(y_true, y_pred)


def calculate_metrics(
    y_true,
    y_pred,
    config: MetricsConfig | None = None,
) -> PredictionMetrics:
    """
    Calculate all prediction metrics.

    Args:
        y_true: Ground truth values (1D array)
        y_pred: Predicted values (1D array)
        config: Metrics configuration. Uses defaults if None.

    Returns:
        PredictionMetrics with all computed values

    Raises:
        MetricsError: If arrays are empty or have different lengths

    Example:
        >>> y_true = np.array([200_000, 500_000, 1_000_000])
        >>> y_pred = np.array([205_000, 460_000, 1_200_000])
        >>> metrics = calculate_metrics(y_true, y_pred, MetricsConfig())
        >>> print(f"Within 10%: {metrics.get_accuracy(0.10):.2f}")
        Within 10%: 0.67
    """
    config = config or MetricsConfig()
    y_true, y_pred = _as_vectors(y_true, y_pred)

    accuracy = {
        threshold: _calculate_accuracy_at_threshold(y_true, y_pred, threshold)
        for threshold in config.accuracy_thresholds
    }

    return PredictionMetrics(
        rmse=_calculate_rmse(y_true, y_pred),
        mae=_calculate_mae(y_true, y_pred),
        r2=_calculate_r2(y_true, y_pred),
        n_samples=len(y_true),
        accuracy=accuracy,
    )


# --- Individual metric functions ---


def _calculate_rmse(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    return float(np.sqrt(np.mean((y_pred - y_true) ** 2)))


def _calculate_mae(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    return float(np.mean(np.abs(y_true - y_pred)))


def _calculate_r2(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """
    Calculate R² (Coefficient of Determination).

    Formula: R² = 1 - (SS_res / SS_tot)
    where SS_res = sum((y_true - y_pred)²)
    and SS_tot = sum((y_true - mean(y_true))²)

    Returns:
        R² value (can be negative if model is worse than mean)
    """
    ss_res = np.sum((y_true - y_pred) ** 2)
    ss_tot = np.sum((y_true - np.mean(y_true)) ** 2)

    if ss_tot == 0:
        # All ground truth values are identical
        return 1.0 if ss_res == 0 else 0.0

    return float(1 - (ss_res / ss_tot))


def _calculate_accuracy_at_threshold(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    threshold: float,
) -> float:
    """Fraction of predictions within threshold of actual (0.0-1.0)."""
    nonzero = y_true != 0
    if not np.any(nonzero):
        return 0.0
    pct_errors = np.abs(y_true[nonzero] - y_pred[nonzero]) / np.abs(y_true[nonzero])
    return float(np.mean(pct_errors <= threshold))


def validate_predictions(
    predictions,
    expected_length: int | None = None,
) -> np.ndarray:
    """
    Validate and normalize prediction array.

    Checks for:
    - Correct shape (1D or column vector)
    - No NaN or Inf values (these break metrics calculations)
    - Correct length if expected_length provided

    Returns:
        Validated 1D numpy array

    Raises:
        MetricsError: If predictions are invalid
    """
    try:
        predictions = np.asarray(predictions, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise MetricsError(f"Predictions are not numeric: {e}") from e

    # Flatten if needed (handle (N,1) shape)
    if predictions.ndim == 2 and predictions.shape[1] == 1:
        predictions = predictions.flatten()
    elif predictions.ndim != 1:
        raise MetricsError(
            f"Invalid prediction shape: {predictions.shape}. Expected 1D or (N,1)."
        )

    if expected_length is not None and len(predictions) != expected_length:
        raise MetricsError(
            f"Prediction count mismatch: got {len(predictions)}, expected {expected_length}"
        )

    if np.any(np.isnan(predictions)):
        nan_count = np.sum(np.isnan(predictions))
        raise MetricsError(f"Predictions contain {nan_count} NaN values")

    if np.any(np.isinf(predictions)):
        inf_count = np.sum(np.isinf(predictions))
        raise MetricsError(f"Predictions contain {inf_count} Inf values")

    return predictions
