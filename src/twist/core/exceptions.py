"""
Custom exception hierarchy for the TWIST system.
Provides clear error categories and rich error information.
"""
from typing import Optional, Any, Dict, Iterable
from dataclasses import dataclass


@dataclass
class ErrorContext:
    """Context information for errors"""
    site_id: Optional[str] = None
    component: Optional[str] = None
    operation: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class TwistError(Exception):
    """Base exception for all TWIST errors"""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def __str__(self) -> str:
        context_str = ""
        if self.context.site_id:
            context_str += f" [Site: {self.context.site_id}]"
        if self.context.component:
            context_str += f" [Component: {self.context.component}]"
        if self.context.operation:
            context_str += f" [Operation: {self.context.operation}]"

        return f"{self.__class__.__name__}: {self.message}{context_str}"


# Data-related errors
class DataError(TwistError):
    """Base class for data-related errors"""
    pass


class MissingFieldError(DataError):
    """
    Required columns are absent from an input table.

    Every missing name is collected in ``missing`` so the caller can fix
    the column mapping in one go.
    """

    def __init__(
        self,
        missing: Iterable[str],
        context: Optional[ErrorContext] = None
    ):
        # Keep configured order for the message, drop duplicates
        ordered = list(dict.fromkeys(missing))
        self.missing = frozenset(ordered)
        super().__init__(
            "The following required columns are missing: "
            + ", ".join(ordered),
            context,
        )


class DataValidationError(DataError):
    """Data validation failed"""
    pass


# Configuration errors
class ConfigurationError(TwistError):
    """Configuration error"""
    pass


def handle_exception(exc: Exception, context: Optional[ErrorContext] = None) -> TwistError:
    """
    Wrap generic exceptions in TwistError hierarchy.
    Useful for catching and categorizing third-party exceptions.
    """
    if isinstance(exc, TwistError):
        return exc

    # Map common third-party exceptions
    error_map = {
        FileNotFoundError: DataError,
        ValueError: DataValidationError,
        KeyError: DataValidationError,
    }

    for exc_type, twist_exc_type in error_map.items():
        if isinstance(exc, exc_type):
            return twist_exc_type(str(exc), context)

    # Default to generic TwistError
    return TwistError(str(exc), context)
