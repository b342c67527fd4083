"""Custom exceptions for data module."""


class DataError(Exception):
    """Base exception for data-related errors."""

    pass


# --- Dataset construction errors ---


class MissingTargetError(DataError):
    """
    Raised when a record has no usable target value.

    This can happen when:
    - Record dict doesn't have the target field (e.g. 'price')
    - Target value is None
    - Target value cannot be converted to float
    - Target value is NaN or infinite (e.g. an empty CSV cell)
    """

    pass


class SchemaMismatchError(DataError):
    """
    Raised when records in a dataset don't share the same fields.

    Every record must carry exactly the same set of field names as the
    first record of the dataset.
    """

    pass


class DataLoadError(DataError):
    """
    Raised when a dataset file cannot be read.

    This can happen when:
    - File not found
    - File has a header but no rows
    - Target column is absent from the header
    """

    pass


# --- Feature encoding errors ---


class FeatureConfigError(DataError):
    """
    Raised when feature configuration is invalid or cannot be loaded.

    This can happen when:
    - Config file not found
    - Invalid YAML syntax
    - Field listed in feature_order but not declared numeric or categorical
    - Target field used as a feature
    """

    pass


class MissingFieldError(DataError):
    """
    Raised when a required field is missing from a record.

    This can happen when:
    - Record dict doesn't have a required numeric field
    - Record dict doesn't have a required categorical field
    """

    pass


class UnknownCategoryError(DataError):
    """
    Raised when a categorical value is not among the known levels.

    This can happen when:
    - Record has a level not declared in the feature spec
    - New level appears in holdout data that wasn't in the training records
    """

    pass
