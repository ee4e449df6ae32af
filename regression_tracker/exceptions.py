"""
Exception classes for the Regression Tracker.

The store is permissive: unknown ids and missing relationships are no-ops,
so the only errors raised come from the storage medium itself or from
malformed import files.
"""


class RegressionTrackerError(Exception):
    """Base exception for tracker errors."""

    def __init__(self, detail: str, error_code: str | None = None):
        self.detail = detail
        self.error_code = error_code
        super().__init__(detail)


class StorageError(RegressionTrackerError):
    """Exception raised when a collection cannot be written."""

    def __init__(self, detail: str = "Storage error occurred"):
        super().__init__(detail=detail, error_code="STORAGE_ERROR")


class InvalidDumpError(RegressionTrackerError):
    """Exception raised when a storage dump file cannot be imported."""

    def __init__(self, detail: str):
        super().__init__(detail=detail, error_code="INVALID_DUMP")
