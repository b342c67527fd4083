"""Custom exceptions for model backends."""


class BackendError(Exception):
    """Base exception for model backend errors."""

    pass


class UnknownModelFamilyError(BackendError):
    """
    Raised when no backend is registered for a model family.

    Register one with the @model_family("name") decorator.
    """

    pass


class InvalidHyperparameterError(BackendError):
    """
    Raised when a configuration carries an unusable hyperparameter.

    This can happen when:
    - Parameter name is not supported by the family
    - Value is out of range (e.g. mtry larger than the feature count)
    - Value has the wrong type or is unhashable (e.g. a list)
    """

    pass
