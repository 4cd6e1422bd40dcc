"""
Utilities package for the earnings schedule tool.

Provides common utilities like logging setup.
"""

from .logging_setup import setup_logging, disable_noisy_loggers

__all__ = ['setup_logging', 'disable_noisy_loggers']
