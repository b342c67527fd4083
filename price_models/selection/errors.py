"""Custom exceptions for selection module."""


class SelectionError(Exception):
    """Base exception for model selection errors."""

    pass


class EmptyConfigSetError(SelectionError):
    """Raised when select_best is given no configurations to compare."""

    pass


class DuplicateConfigError(SelectionError):
    """
    Raised when the same configuration is listed more than once.

    Mean scores are keyed by configuration, so a duplicate would silently
    overwrite its earlier entry.
    """

    pass


class ExperimentConfigError(SelectionError):
    """
    Raised when an experiment file cannot be turned into configurations.

    This can happen when:
    - File not found or invalid YAML
    - `configs` section missing or not a list
    - Entry without a `family`
    - `grid` values that are not lists
    """

    pass
