"""Logging configuration for reconfig.

Provides configurable logging with:
- File-based logging with rotation
- Console output for real-time debugging
- Performance timing for parse, build and set planning

Environment Variables:
    RECONFIG_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    RECONFIG_LOG_FILE: Path to log file (default: ~/.reconfig/reconfig.log)
    RECONFIG_LOG_MAX_SIZE: Max log file size in MB (default: 10)
    RECONFIG_LOG_BACKUPS: Number of backup files to keep (default: 5)

Usage:
    from reconfig.utils.logging_config import setup_logging, timed

    setup_logging()  # Call once at startup

    @timed("parse")
    def parse(self, lines):
        ...

    # Or use context manager for sections:
    with timed_section_sync("set", source="router.cfg", lines=12):
        ...
"""
import functools
import logging
import os
import time
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Callable, Any

# Performance logger - separate from main logger for easy filtering
perf_logger = logging.getLogger("reconfig.perf")
main_logger = logging.getLogger("reconfig")


def get_log_level() -> int:
    """Get log level from environment."""
    level_str = os.environ.get("RECONFIG_LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_str, logging.INFO)


def get_log_file() -> Path:
    """Get log file path from environment."""
    default_path = Path.home() / ".reconfig" / "reconfig.log"
    path_str = os.environ.get("RECONFIG_LOG_FILE", str(default_path))
    return Path(path_str)


def setup_logging() -> None:
    """Configure logging for the application.

    Sets up:
    - Console handler (INFO+ by default, respects RECONFIG_LOG_LEVEL)
    - File handler with rotation (DEBUG level - captures everything)
    - Performance logger for timing metrics
    """
    log_level = get_log_level()
    log_file = get_log_file()
    max_size_mb = int(os.environ.get("RECONFIG_LOG_MAX_SIZE", "10"))
    backup_count = int(os.environ.get("RECONFIG_LOG_BACKUPS", "5"))

    # Create log directory if needed
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Main format: timestamp - logger - level - message
    main_format = logging.Formatter(
        "%(asctime)s.%(msecs)03d | %(name)-25s | %(levelname)-7s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Performance format: focused on timing
    perf_format = logging.Formatter(
        "%(asctime)s.%(msecs)03d | PERF | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(main_format)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=max_size_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding="utf-8"
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(main_format)

    # Performance file handler - separate file for easy analysis
    perf_log_file = log_file.parent / "reconfig-perf.log"
    perf_handler = RotatingFileHandler(
        perf_log_file,
        maxBytes=max_size_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding="utf-8"
    )
    perf_handler.setLevel(logging.DEBUG)
    perf_handler.setFormatter(perf_format)

    # Repeated calls replace handlers instead of stacking them
    for handler in main_logger.handlers[:]:
        main_logger.removeHandler(handler)
        handler.close()
    for handler in perf_logger.handlers[:]:
        perf_logger.removeHandler(handler)
        handler.close()

    main_logger.setLevel(logging.DEBUG)  # Capture all, handlers filter
    main_logger.addHandler(console_handler)
    main_logger.addHandler(file_handler)

    # perf records would otherwise reach the console twice via "reconfig"
    perf_logger.setLevel(logging.DEBUG)
    perf_logger.propagate = False
    perf_logger.addHandler(perf_handler)
    perf_logger.addHandler(console_handler)

    main_logger.info(f"Logging initialized: level={logging.getLevelName(log_level)}, file={log_file}")
    perf_logger.info(f"Performance logging to: {perf_log_file}")


def _format_timing(operation: str, source: Optional[str], elapsed: float, outcome: str) -> str:
    return f"{operation:20s} | {source or 'N/A':15s} | {elapsed:8.2f}ms | {outcome}"


def timed(operation: str, source: Optional[str] = None):
    """Decorator to log execution time of a function.

    Args:
        operation: Name of the operation (e.g., "parse", "build", "set")
        source: Optional input label (can also be inferred from self.source)

    Usage:
        @timed("parse")
        def parse(self, lines):
            ...
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            label = source
            if label is None and args and hasattr(args[0], "source"):
                label = args[0].source

            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
                elapsed = (time.perf_counter() - start) * 1000
                perf_logger.info(_format_timing(operation, label, elapsed, "OK"))
                return result
            except Exception as e:
                elapsed = (time.perf_counter() - start) * 1000
                perf_logger.warning(_format_timing(operation, label, elapsed, f"FAIL: {e}"))
                raise

        return wrapper

    return decorator


@contextmanager
def timed_section_sync(operation: str, source: Optional[str] = None, **extra):
    """Context manager for timing code sections.

    Args:
        operation: Name of the operation
        source: Input label (file name, "<string>", ...)
        **extra: Additional context to log
    """
    start = time.perf_counter()
    extra_str = " | ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""

    try:
        yield
        elapsed = (time.perf_counter() - start) * 1000
        msg = _format_timing(operation, source, elapsed, "OK")
        if extra_str:
            msg += f" | {extra_str}"
        perf_logger.info(msg)
    except Exception as e:
        elapsed = (time.perf_counter() - start) * 1000
        msg = _format_timing(operation, source, elapsed, f"FAIL: {e}")
        if extra_str:
            msg += f" | {extra_str}"
        perf_logger.warning(msg)
        raise
