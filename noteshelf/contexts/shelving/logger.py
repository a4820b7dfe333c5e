"""
Shelving context logger.

Provides logging interface for shelving context with automatic [shelf] prefix.
All shelving modules should import from this module, not from loguru directly.
"""

from loguru import logger

from noteshelf.contexts.shelving.models import BatchReport

CONTEXT_PREFIX = "[shelf]"


# Wrapper functions with automatic [shelf] prefix


def _log_info(message: str) -> None:
    """Log info message with [shelf] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [shelf] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [shelf] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [shelf] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [shelf] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level shelving-specific logging helpers


def log_batch_report(report: BatchReport) -> None:
    """Log the consolidated result of a batch add/remove."""
    if report.ok:
        _log_success(f"{report.operation}: {len(report.succeeded)} succeeded")
    else:
        _log_warning(
            f"{report.operation}: {len(report.succeeded)} succeeded, {len(report.failed)} failed"
        )
    for target, error in report.failed:
        _log_debug(f"  {target}: {error}")
