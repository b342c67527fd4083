"""Custom exceptions for resampling module."""


class ResamplingError(Exception):
    """Base exception for split and fold generation errors."""

    pass


class InvalidProportionError(ResamplingError):
    """
    Raised when a split proportion is outside the open interval (0, 1).

    A proportion of 0 or 1 would leave one side of the split empty.
    """

    pass


class EmptyDatasetError(ResamplingError):
    """Raised when a dataset to split or fold has zero records."""

    pass


class InvalidFoldCountError(ResamplingError):
    """
    Raised when the requested fold count cannot partition the dataset.

    This can happen when:
    - v < 2 (nothing left to train on)
    - v > number of records (some folds would be empty)
    """

    pass
