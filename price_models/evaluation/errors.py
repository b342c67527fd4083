"""Custom exceptions for evaluation module."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..backends.models import ModelConfig


class EvaluationError(Exception):
    """Base exception for evaluation-related errors."""

    pass


# --- Metrics errors ---


class MetricsError(EvaluationError):
    """
    Raised when metrics calculation fails.

    This can happen when:
    - Input arrays have different lengths
    - Input arrays are empty
    - Predictions have an unusable shape
    """

    pass


class EmptyValidationSetError(EvaluationError):
    """
    Raised when a fold has no records to validate on.

    Happens only with a degenerate fold count; make_folds rejects v larger
    than the dataset, so this guards hand-built FoldAssignments.
    """

    pass


# --- Backend failures ---


class BackendFailureError(EvaluationError):
    """
    Base for failures raised by a fit or predict collaborator.

    Carries the configuration and fold being evaluated so the caller can
    report which cell of the evaluation matrix failed. fold_index is None
    for the final fit on the whole training subset.
    """

    def __init__(
        self,
        message: str,
        config: ModelConfig | None = None,
        fold_index: int | None = None,
    ):
        super().__init__(message)
        self.config = config
        self.fold_index = fold_index


class ModelFitError(BackendFailureError):
    """
    Raised when the fit collaborator fails.

    This can happen when:
    - Hyperparameter is invalid for the data (e.g. mtry > feature count)
    - Training records are missing a field or carry a non-numeric value
    - The underlying library raises during fitting
    """

    pass


class PredictionError(BackendFailureError):
    """
    Raised when the predict collaborator fails or returns invalid output.

    This can happen when:
    - Validation records contain an unseen category
    - Output shape doesn't match expected (N,) or (N, 1)
    - Predictions contain NaN or Inf (these break metrics calculations)
    """

    pass
