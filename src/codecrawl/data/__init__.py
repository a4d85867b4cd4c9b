"""Data layer utilities for JSON definitions and saved runs."""

from .errors import DataLoadError, DataReferenceError, DataValidationError, RunStoreError
from .paths import get_definitions_path, get_repo_root

__all__ = [
    "DataLoadError",
    "DataReferenceError",
    "DataValidationError",
    "RunStoreError",
    "get_definitions_path",
    "get_repo_root",
]
