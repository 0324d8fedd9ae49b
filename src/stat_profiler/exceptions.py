"""
Exception taxonomy for the statistical profiler.

InputError covers bad requests (missing columns, wrong column kinds, too few
groups). NumericDegeneracyError covers data that makes a formula undefined,
such as a zero standard deviation.
"""

from typing import Optional, Dict, Any


class StatProfilerError(Exception):
    """Base class for all profiler errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'error': self.__class__.__name__,
            'message': self.message,
            'details': self.details
        }


class InputError(StatProfilerError):
    """Raised when a request is missing or misuses a column selection."""


class NumericDegeneracyError(StatProfilerError):
    """Raised when the data makes a computation undefined."""

    def __init__(self, message: str, column: Optional[str] = None, operation: Optional[str] = None):
        self.column = column
        self.operation = operation
        details = {}
        if column is not None:
            details['column'] = column
        if operation is not None:
            details['operation'] = operation
        super().__init__(message, details)
