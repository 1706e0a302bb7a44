"""
Centralized Logging Utilities and Decorators

Provides the logging setup and the function decorator shared by the ingestion
pipeline, the scheduler and the catalog store.

Usage:
    from movie_catalog.logger import setup_logging, log_function

    logger = setup_logging(logger_name="ingestion", verbose=True)

    @log_function(logger_name="ingestion", log_args=True)
    def fetch_detail(client, candidate):
        ...
"""

import functools
import logging
import os
import time
from pathlib import Path
from typing import Optional, Callable, Any


def default_log_file(logger_name: str) -> str:
    """Return logs/<logger_name>.log, rooted at $LOG_DIR when set."""
    log_dir = os.getenv("LOG_DIR", "logs")
    return str(Path(log_dir) / f"{logger_name}.log")


def setup_logging(
    logger_name: str,
    log_file: Optional[str] = None,
    verbose: bool = False,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Set up logging with file and optional console handlers.

    Args:
        logger_name: Name for the logger (e.g., "ingestion")
        log_file: Path to log file (default: $LOG_DIR/<logger_name>.log)
        verbose: If True, add console handler with DEBUG level (default: False)
        level: Base logging level (default: logging.INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Avoid adding multiple handlers if already configured
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if verbose else level)

    log_path = Path(log_file or default_log_file(logger_name))
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path)
    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(file_handler)

    if verbose:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(
            logging.Formatter("%(levelname)s [%(name)s]: %(message)s")
        )
        logger.addHandler(console_handler)

    return logger


def log_function(
    logger_name: Optional[str] = None,
    level: int = logging.INFO,
    log_args: bool = False,
    log_result: bool = False,
    log_execution_time: bool = True,
) -> Callable:
    """
    Decorator to log function entry, exit, execution time, and exceptions.

    Exceptions are logged and re-raised unchanged.

    Args:
        logger_name: Logger name (if None, uses the decorated function's module name)
        level: Log level for entry/exit messages (default: logging.INFO)
        log_args: If True, log function arguments (default: False)
        log_result: If True, log return value (default: False)
        log_execution_time: If True, log execution duration (default: True)

    Example:
        @log_function(logger_name="pipeline", log_execution_time=True)
        def run_ingestion_cycle(context):
            ...
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            name = logger_name or func.__module__
            logger = logging.getLogger(name)
            if not logger.handlers:
                logger = setup_logging(name, level=level)

            func_name = func.__name__
            log_msg = f"Calling {func_name}"
            if log_args and (args or kwargs):
                args_repr = [repr(a) for a in args]
                kwargs_repr = [f"{k}={v!r}" for k, v in kwargs.items()]
                log_msg += f" with args: {', '.join(args_repr + kwargs_repr)}"
            logger.log(level, log_msg)

            start_time = time.time()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                execution_time = time.time() - start_time
                logger.error(
                    f"Exception in {func_name} after {execution_time:.2f}s: {type(e).__name__}: {e}"
                )
                raise

            completion_msg = f"Completed {func_name}"
            if log_execution_time:
                completion_msg += f" in {time.time() - start_time:.2f}s"
            if log_result:
                completion_msg += f" with result: {result!r}"
            logger.log(level, completion_msg)

            return result

        return wrapper

    return decorator
