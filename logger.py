"""
Logging Framework for the Medical Regression Lab

This module provides the logging infrastructure with:
- Multiple output targets (rotating file, console)
- Configurable log levels and formats
- Performance tracking

Usage:
    from logger import get_logger

    logger = get_logger(__name__)
    logger.info("Application started")

    # Performance tracking
    with logger.track_time("generate_dataset"):
        df = scenarios.generate("bp_age", seed=1)
"""

import logging
import logging.handlers
import sys
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import ClassVar, Dict, Optional

from config import CONFIG


class PerformanceLogger:
    """
    Track and log performance metrics.
    """

    def __init__(self, logger: logging.Logger):
        """
        Create a PerformanceLogger bound to a standard logger.

        Initializes an empty mapping from operation names to lists of elapsed times (in seconds).
        """
        self.logger = logger
        self.timings: Dict[str, list] = {}
        self._lock = threading.Lock()

    @contextmanager
    def track_time(self, operation: str, log_level: str = "DEBUG"):
        """
        Context manager that measures and logs the elapsed time of a named operation.

        If CONFIG['logging.log_performance'] is falsy, the context yields without measuring. Otherwise the elapsed time is appended to self.timings[operation] and a message is emitted on the wrapped logger at the requested level.

        Parameters:
            operation (str): Name of the operation to record and log.
            log_level (str): Name of the logger method to call (e.g., "DEBUG", "INFO"); falls back to debug if unavailable.
        """
        if not CONFIG.get('logging.log_performance'):
            yield
            return

        start_time = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start_time

            with self._lock:
                self.timings.setdefault(operation, []).append(elapsed)

            log_method = getattr(self.logger, log_level.lower(), self.logger.debug)
            log_method("⏱️ %s completed in %.3fs", operation, elapsed)


class LoggerFactory:
    """
    Factory for creating and managing loggers.
    """

    _loggers: ClassVar[Dict[str, 'Logger']] = {}
    _perf_logger: Optional[PerformanceLogger] = None
    _configured = False
    _lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def configure(cls) -> None:
        """
        Perform one-time configuration of the logging system using values from CONFIG.

        Sets the root logger level and the enabled handlers (file/console), and quiets the web framework loggers. If CONFIG disables logging, logging is globally disabled. Idempotent. On error a warning is printed to stderr and configuration is marked complete to avoid retry loops.
        """
        if cls._configured:
            return

        try:
            if not CONFIG.get('logging.enabled'):
                logging.disable(logging.CRITICAL)
                cls._configured = True
                return

            log_level = CONFIG.get('logging.level', 'INFO')
            formatter = logging.Formatter(
                CONFIG.get('logging.format'),
                datefmt=CONFIG.get('logging.date_format'),
            )

            root_logger = logging.getLogger()
            numeric_level = getattr(logging, str(log_level).upper(), None)
            if not isinstance(numeric_level, int):
                print(f"[WARNING] Invalid log level '{log_level}', defaulting to INFO", file=sys.stderr)
                numeric_level = logging.INFO
            root_logger.setLevel(numeric_level)

            if root_logger.handlers:
                root_logger.handlers.clear()

            if CONFIG.get('logging.file_enabled'):
                cls._setup_file_logging(root_logger, formatter)

            if CONFIG.get('logging.console_enabled'):
                cls._setup_console_logging(root_logger, formatter)

            cls._setup_framework_logging()

            cls._configured = True

        except Exception as e:
            print(f"[WARNING] Logging configuration failed: {e}", file=sys.stderr)
            cls._configured = True

    @classmethod
    def _setup_file_logging(cls, root_logger: logging.Logger, formatter: logging.Formatter) -> None:
        """
        Attach a RotatingFileHandler to the root logger.

        Uses CONFIG keys 'logging.log_dir', 'logging.log_file', 'logging.max_log_size' and 'logging.backup_count'. Setup errors are reported on stderr and do not raise.
        """
        try:
            log_dir = Path(CONFIG.get('logging.log_dir', 'logs'))
            log_dir.mkdir(exist_ok=True, parents=True)

            handler = logging.handlers.RotatingFileHandler(
                log_dir / CONFIG.get('logging.log_file', 'app.log'),
                maxBytes=CONFIG.get('logging.max_log_size', 10485760),
                backupCount=CONFIG.get('logging.backup_count', 5),
            )
            handler.setFormatter(formatter)
            root_logger.addHandler(handler)

        except Exception as e:
            print(f"[WARNING] Failed to setup file logging: {e}", file=sys.stderr)

    @classmethod
    def _setup_console_logging(cls, root_logger: logging.Logger, formatter: logging.Formatter) -> None:
        """
        Attach a stdout StreamHandler at CONFIG['logging.console_level'] to the root logger.
        """
        try:
            console_handler = logging.StreamHandler(sys.stdout)
            console_level = CONFIG.get('logging.console_level', 'INFO')
            console_handler.setLevel(getattr(logging, console_level, logging.INFO))
            console_handler.setFormatter(formatter)
            root_logger.addHandler(console_handler)

        except Exception as e:
            print(f"[WARNING] Failed to setup console logging: {e}", file=sys.stderr)

    @classmethod
    def _setup_framework_logging(cls) -> None:
        """
        Reduce verbosity of the Shiny and uvicorn loggers to CONFIG['logging.framework_level'].
        """
        level_name = CONFIG.get('logging.framework_level', 'WARNING')
        level = getattr(logging, level_name, logging.WARNING)
        for name in ('shiny', 'uvicorn', 'uvicorn.access', 'websockets'):
            logging.getLogger(name).setLevel(level)

    @classmethod
    def get_logger(cls, name: str) -> 'Logger':
        """
        Retrieve a cached Logger by name, configuring the logging system on first use.

        Parameters:
            name (str): Logger name (typically __name__).
        """
        if not cls._configured:
            cls.configure()

        with cls._lock:
            if name not in cls._loggers:
                cls._loggers[name] = Logger(logging.getLogger(name))
            return cls._loggers[name]

    @classmethod
    def get_performance_logger(cls) -> PerformanceLogger:
        """
        Return the shared PerformanceLogger, creating it on first access.
        """
        if cls._perf_logger is None:
            cls._perf_logger = PerformanceLogger(logging.getLogger('performance'))
        return cls._perf_logger


class Logger:
    """
    Wrapper around standard logger with additional features.
    """

    def __init__(self, standard_logger: logging.Logger):
        self._logger = standard_logger
        self._perf_logger = LoggerFactory.get_performance_logger()

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs) -> None:
        self._logger.critical(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs) -> None:
        """Log a message at ERROR level with the active exception's traceback."""
        self._logger.exception(msg, *args, **kwargs)

    def log_dataset(self, scenario: str, shape: tuple, seed: Optional[int] = None) -> None:
        """
        Log a one-line summary of a generated synthetic dataset.

        Emitted only when CONFIG['logging.log_data_operations'] is truthy.

        Parameters:
            scenario (str): Scenario key the dataset was generated from.
            shape (tuple): (rows, columns) of the generated DataFrame.
            seed (int | None): Seed used, if any.
        """
        if CONFIG.get('logging.log_data_operations'):
            self.info(
                "📊 dataset '%s': rows=%d, columns=%d, seed=%s",
                scenario, shape[0], shape[1], seed,
            )

    def log_fit(self, estimator: str, n_samples: int, **result) -> None:
        """
        Log a concise summary of an estimator run.

        Emitted only when CONFIG['logging.log_analysis_operations'] is truthy.

        Parameters:
            estimator (str): Estimator name (e.g., "linear", "kaplan-meier").
            n_samples (int): Number of observations consumed.
            **result: Summary values to include (e.g., slope=..., intercept=...).
        """
        if CONFIG.get('logging.log_analysis_operations'):
            detail = ", ".join(f"{k}={v}" for k, v in result.items())
            self.info("📈 %s: n=%d%s", estimator, n_samples, f", {detail}" if detail else "")

    @contextmanager
    def track_time(self, operation: str, log_level: str = "DEBUG"):
        """
        Record the elapsed time of the named operation and log it at `log_level`.
        """
        with self._perf_logger.track_time(operation, log_level):
            yield


def get_logger(name: str) -> Logger:
    """
    Obtain a configured logger for the given name.

    Parameters:
        name (str): The logger name, typically `__name__`.
    """
    return LoggerFactory.get_logger(name)
