"""Project-wide custom exceptions."""

from __future__ import annotations


class DdlSizeError(Exception):
    """Base exception for the ddl-size tool."""


class ConfigurationError(DdlSizeError):
    """Raised when configuration loading or validation fails."""


class InvalidFilenameFormat(DdlSizeError):
    """Raised when a DDL file name does not follow the naming convention."""

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"File [{filename}] does not meet naming convention requirements: {reason}")
        self.filename = filename
        self.reason = reason


class SizeEstimationError(DdlSizeError):
    """Raised when a column's storage size cannot be estimated."""

    def __init__(self, message: str, *, data_type: str, size: int, column: str | None) -> None:
        super().__init__(message)
        self.data_type = data_type
        self.size = size
        self.column = column


class InvalidPrecision(SizeEstimationError):
    """Raised when a decimal/numeric/float precision falls outside every band."""


class UnknownDataType(SizeEstimationError):
    """Raised for SQL data types without a size rule."""
