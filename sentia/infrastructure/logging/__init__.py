"""Logging setup."""

from sentia.infrastructure.logging.logger import StructuredFormatter, StructuredLogger, setup_logging

__all__ = ["StructuredFormatter", "StructuredLogger", "setup_logging"]
