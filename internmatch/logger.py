"""
Structured logging system for internmatch.

Provides centralized logging with console and file outputs, keyword
context on every call, and run metrics for recommendation batches and
resume fetches.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for recommendation runs.
    """

    def __init__(
        self,
        name: str = "internmatch",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()
        self.logger.propagate = False

        self.metrics = {
            "runs": 0,
            "postings_scored": 0,
            "recommendations_emitted": 0,
            "postings_filtered": 0,
            "resume_fetches_attempted": 0,
            "resume_fetches_successful": 0,
            "resume_fetches_failed": 0,
            "errors_by_type": {},
        }

        if enable_console:
            # stderr keeps stdout clean for JSON output
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"internmatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if not self.logger.isEnabledFor(level):
            return
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message, stacklevel=3)

    # Metric tracking methods

    def record_run(self, postings_scored: int, recommendations_emitted: int):
        """Record one recommendation batch."""
        self.metrics["runs"] += 1
        self.metrics["postings_scored"] += postings_scored
        self.metrics["recommendations_emitted"] += recommendations_emitted
        self.metrics["postings_filtered"] += postings_scored - recommendations_emitted

    def record_resume_fetch_attempt(self):
        self.metrics["resume_fetches_attempted"] += 1

    def record_resume_fetch_success(self):
        self.metrics["resume_fetches_successful"] += 1

    def record_resume_fetch_failure(self, error_type: str):
        """Record a failed resume fetch, bucketed by error type."""
        self.metrics["resume_fetches_failed"] += 1

        if error_type not in self.metrics["errors_by_type"]:
            self.metrics["errors_by_type"][error_type] = 0
        self.metrics["errors_by_type"][error_type] += 1

    def get_metrics(self) -> dict:
        """Return current metrics, including the inclusion rate."""
        metrics_copy = dict(self.metrics)
        metrics_copy["errors_by_type"] = dict(self.metrics["errors_by_type"])

        scored = metrics_copy["postings_scored"]
        metrics_copy["inclusion_rate"] = (
            round(metrics_copy["recommendations_emitted"] / scored, 3) if scored else 0.0
        )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Recommendation Session Metrics ===")
        self.info(f"Runs: {metrics['runs']}")
        self.info(
            f"Postings: {metrics['recommendations_emitted']}/{metrics['postings_scored']} "
            f"recommended ({metrics['inclusion_rate'] * 100:.1f}%)"
        )

        if metrics["resume_fetches_attempted"]:
            self.info(
                f"Resume fetches: {metrics['resume_fetches_successful']}/"
                f"{metrics['resume_fetches_attempted']}"
            )

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "internmatch",
    level: Optional[str] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Library use gets an INFO console logger with no log file. The CLI
    replaces it from the environment settings once `.env` is loaded.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        kwargs.setdefault("enable_file", False)
        _global_logger = StructuredLogger(name=name, level=level or "INFO", **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
