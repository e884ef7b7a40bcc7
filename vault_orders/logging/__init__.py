"""
Logging configuration and utilities for the vault orders client.
"""
from .config import configure_logging, get_logger, get_remote_logger, log_remote_call

__all__ = ["configure_logging", "get_logger", "get_remote_logger", "log_remote_call"]
