# painmap/domain/common/errors.py

"""
Error values of the pain map.

A DomainError is not an exception. Services put it into a failed Result so
the caller can log it or show it in the status bar; the body map keeps
working either way.
"""
from enum import Enum
from typing import Optional, Dict, Any


class ErrorCategory(Enum):
    VALIDATION = "Validation"
    CONFIGURATION = "Configuration"
    RESOURCE = "Resource"
    UI = "UI"
    UNKNOWN = "Unknown"


class ErrorSeverity(Enum):
    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"
    CRITICAL = "Critical"


class DomainError:
    """
    Describes what went wrong in a service call.

    Attributes:
        message: Text for logs and the status bar
        category: Which part of the system failed
        severity: How serious the failure is
        code: Stable identifier callers can branch on, if any
        details: Values involved in the failure, e.g. the offending path
        inner_error: Exception that caused the failure, if any
    """

    def __init__(self,
                 message: str,
                 category: ErrorCategory = ErrorCategory.UNKNOWN,
                 severity: ErrorSeverity = ErrorSeverity.ERROR,
                 code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None,
                 inner_error: Optional[Exception] = None):
        self.message = message
        self.category = category
        self.severity = severity
        self.code = code
        self.details = details or {}
        self.inner_error = inner_error

    def __str__(self) -> str:
        return f"{self.category.value} Error: {self.message}"


class ValidationError(DomainError):
    """Bad input: unknown pain area id, duplicate id, non-integer intensity."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 inner_error: Optional[Exception] = None, code: Optional[str] = None):
        super().__init__(message, ErrorCategory.VALIDATION, ErrorSeverity.WARNING,
                         code, details, inner_error)


class OutOfRangeError(ValidationError):
    """
    A numeric value fell outside its allowed closed interval.

    Returned for pain intensities outside 0..10. The slider in the UI cannot
    produce one, so seeing it means a caller bypassed the slider.
    """

    CODE = "OUT_OF_RANGE"

    def __init__(self, name: str, value: Any, minimum: int, maximum: int):
        super().__init__(
            message=f"{name} must be between {minimum} and {maximum}, got {value}",
            details={"value": value, "minimum": minimum, "maximum": maximum},
            code=self.CODE
        )
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class ConfigurationError(DomainError):
    """The config file or the hotspot table could not be read or is malformed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 inner_error: Optional[Exception] = None):
        super().__init__(message, ErrorCategory.CONFIGURATION, ErrorSeverity.ERROR,
                         None, details, inner_error)


class ResourceError(DomainError):
    """A body image could not be decoded or a capture could not be written."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 inner_error: Optional[Exception] = None):
        super().__init__(message, ErrorCategory.RESOURCE, ErrorSeverity.ERROR,
                         None, details, inner_error)


class UIError(DomainError):
    """A widget could not be grabbed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 inner_error: Optional[Exception] = None):
        super().__init__(message, ErrorCategory.UI, ErrorSeverity.WARNING,
                         None, details, inner_error)
