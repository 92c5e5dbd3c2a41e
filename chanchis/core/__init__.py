"""
Core utilities and configuration for Chanchis.

This package provides core functionality including logging configuration,
token primitives, database setup, and other shared utilities.
"""

from chanchis.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
