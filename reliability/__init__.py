"""
Error taxonomy for the earnings trade scheduler.

This package provides the exception hierarchy shared by the scanner reader,
the strategy catalog, the schedule resolver and the CLI. There is no retry or
recovery tier: every exception aborts the run and the CLI turns it into a
non-zero exit code.

Usage:
    from reliability import BaseScheduleException, SchemaError

    try:
        records = read_scanner_csv(path)
    except BaseScheduleException as e:
        logger.error(e.to_dict())
"""

from .exceptions import (
    # Base exceptions
    BaseScheduleException,
    ErrorSeverity,
    ErrorCategory,

    # Usage and input exceptions
    UsageError,
    SchemaError,
    DateParseError,
    InputOutputError,

    # Resolution exceptions
    ResolutionError,
    UnknownStrategy,
    MissingEarningsResult,

    # Catalog exceptions
    CatalogError,
    CatalogInvariantViolation,
)

__all__ = [
    'BaseScheduleException',
    'ErrorSeverity',
    'ErrorCategory',
    'UsageError',
    'SchemaError',
    'DateParseError',
    'InputOutputError',
    'ResolutionError',
    'UnknownStrategy',
    'MissingEarningsResult',
    'CatalogError',
    'CatalogInvariantViolation',
]
