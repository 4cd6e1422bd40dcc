"""
Custom exception hierarchy for the earnings trade scheduler.
Provides structured error handling for CLI usage, scanner input parsing,
strategy resolution and report output. Every error here is fatal for the run.
"""
from typing import Optional, Dict, Any
from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors raised while building a trade schedule."""
    USAGE = "usage"
    SCHEMA = "schema"
    DATA = "data"
    RESOLUTION = "resolution"
    CONFIGURATION = "configuration"
    IO = "io"


class BaseScheduleException(Exception):
    """Base exception for all schedule-related errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        category: ErrorCategory = ErrorCategory.DATA,
        context: Optional[Dict[str, Any]] = None,
        recoverable: bool = False
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.context = context or {}
        self.recoverable = recoverable

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "exception_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "severity": self.severity.value,
            "category": self.category.value,
            "recoverable": self.recoverable,
            "context": self.context
        }


def _at_line(message: str, line_number: Optional[int]) -> str:
    if line_number is None:
        return message
    return f"line {line_number}: {message}"


# =============================================================================
# Usage Exceptions
# =============================================================================

class UsageError(BaseScheduleException):
    """Bad flag combination or missing required argument."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('category', ErrorCategory.USAGE)
        kwargs.setdefault('severity', ErrorSeverity.MEDIUM)
        kwargs.setdefault('error_code', 'USAGE')
        super().__init__(message, **kwargs)


# =============================================================================
# Input Exceptions
# =============================================================================

class SchemaError(BaseScheduleException):
    """Scanner CSV column count or type mismatch."""

    def __init__(self, message: str, line_number: Optional[int] = None, **kwargs):
        kwargs.setdefault('category', ErrorCategory.SCHEMA)
        kwargs.setdefault('error_code', 'SCHEMA')
        kwargs.setdefault('context', {}).update({'line_number': line_number})
        super().__init__(_at_line(message, line_number), **kwargs)
        self.line_number = line_number


class DateParseError(BaseScheduleException):
    """Malformed calendar date in a CSV field or CLI flag."""

    def __init__(self, value: str, field: str, line_number: Optional[int] = None, **kwargs):
        message = f"invalid date {value!r} for {field}"
        kwargs.setdefault('category', ErrorCategory.DATA)
        kwargs.setdefault('error_code', 'DATE_PARSE')
        kwargs.setdefault('context', {}).update({
            'value': value,
            'field': field,
            'line_number': line_number
        })
        super().__init__(_at_line(message, line_number), **kwargs)
        self.value = value
        self.field = field
        self.line_number = line_number


class InputOutputError(BaseScheduleException):
    """Unreadable input or unwritable output path."""

    def __init__(self, path: Any, reason: str, **kwargs):
        message = f"{path}: {reason}"
        kwargs.setdefault('category', ErrorCategory.IO)
        kwargs.setdefault('error_code', 'IO')
        kwargs.setdefault('context', {}).update({'path': str(path), 'reason': reason})
        super().__init__(message, **kwargs)
        self.path = path
        self.reason = reason


# =============================================================================
# Resolution Exceptions
# =============================================================================

class ResolutionError(BaseScheduleException):
    """A scanner row could not be turned into a scheduled trade."""

    def __init__(self, message: str, line_number: Optional[int] = None, **kwargs):
        kwargs.setdefault('category', ErrorCategory.RESOLUTION)
        kwargs.setdefault('context', {}).update({'line_number': line_number})
        super().__init__(_at_line(message, line_number), **kwargs)
        self.line_number = line_number


class UnknownStrategy(ResolutionError):
    """Strategy id not present in the catalog."""

    def __init__(self, strategy: str, line_number: Optional[int] = None, **kwargs):
        message = f"unknown strategy {strategy!r}"
        kwargs.setdefault('error_code', 'UNKNOWN_STRATEGY')
        kwargs.setdefault('context', {}).update({'strategy': strategy})
        super().__init__(message, line_number=line_number, **kwargs)
        self.strategy = strategy


class MissingEarningsResult(ResolutionError):
    """Post-earnings row without a previous earnings result."""

    def __init__(self, symbol: str, strategy: str, line_number: Optional[int] = None, **kwargs):
        message = f"{symbol}: {strategy} requires prev_earnings_result"
        kwargs.setdefault('error_code', 'MISSING_EARNINGS_RESULT')
        kwargs.setdefault('context', {}).update({'symbol': symbol, 'strategy': strategy})
        super().__init__(message, line_number=line_number, **kwargs)
        self.symbol = symbol
        self.strategy = strategy


# =============================================================================
# Catalog Exceptions
# =============================================================================

class CatalogError(BaseScheduleException):
    """Malformed strategy catalog configuration."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('category', ErrorCategory.CONFIGURATION)
        kwargs.setdefault('severity', ErrorSeverity.CRITICAL)
        kwargs.setdefault('error_code', 'CATALOG')
        super().__init__(message, **kwargs)


class CatalogInvariantViolation(CatalogError):
    """A strategy definition would place entry after exit."""

    def __init__(self, strategy: str, entry: Any, exit: Any, **kwargs):
        message = f"{strategy}: entry {entry} is after exit {exit}"
        kwargs.setdefault('error_code', 'CATALOG_INVARIANT')
        kwargs.setdefault('context', {}).update({
            'strategy': strategy,
            'entry': str(entry),
            'exit': str(exit)
        })
        super().__init__(message, **kwargs)
        self.strategy = strategy
