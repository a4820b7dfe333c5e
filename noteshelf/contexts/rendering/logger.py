"""
Rendering context logger.

Provides logging interface for rendering context with automatic [compile] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from typing import Sequence

from loguru import logger

CONTEXT_PREFIX = "[compile]"


# Wrapper functions with automatic [compile] prefix


def _log_info(message: str) -> None:
    """Log info message with [compile] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [compile] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [compile] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [compile] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [compile] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_compilation_start(job_count: int, thread_count: int) -> None:
    _log_info(f"Compiling {job_count} note(s) with {thread_count} thread(s)")


def log_compilation_result(result, verbose: bool = False) -> None:  # CompilationResult
    """
    Log the outcome of one compile job.

    Command output is only dumped for failures (or in verbose mode), raw so
    loguru does not prefix every line of the compiler's output.
    """
    target = result.note.path_in_shelf.as_posix()
    if result.success:
        _log_success(f"{target} ({result.elapsed:.2f}s)")
    else:
        _log_error(f"{target}: {result.reason}")
        _log_debug(f"  Command: {result.command}")

    if verbose or not result.success:
        if result.stdout:
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nSTDOUT ({target}):\n{'=' * 80}\n{result.stdout}\n"
            )
        if result.stderr:
            logger.opt(raw=True).debug(
                f"\n{'=' * 80}\nSTDERR ({target}):\n{'=' * 80}\n{result.stderr}\n"
            )


def log_compilation_summary(results: Sequence) -> None:
    failed = sum(1 for result in results if not result.success)
    if failed:
        _log_warning(f"{len(results) - failed} of {len(results)} note(s) compiled, {failed} failed")
    else:
        _log_success(f"All {len(results)} note(s) compiled")
