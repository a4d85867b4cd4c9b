"""Custom exceptions for definition loading and run storage."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when JSON definition files are missing or unreadable."""


class DataValidationError(DataError):
    """Raised when JSON content fails structural validation."""


class DataReferenceError(DataError):
    """Raised when definitions reference labels or tiers that do not exist."""


class RunStoreError(DataError):
    """Raised when a saved-run file cannot be read or written."""
