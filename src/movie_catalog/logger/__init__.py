"""Logging utilities for the movie_catalog project."""

from .logging_decorator import setup_logging, log_function, default_log_file

__all__ = ["setup_logging", "log_function", "default_log_file"]
