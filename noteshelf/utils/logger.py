"""
Generic logger setup utilities.

Provides reusable loguru configuration with provenance tracking.
Context-specific wrappers are defined in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

CONSOLE_FORMAT = "<level>{level: <7}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {thread.name} | {message}"


def setup_logger(
    context_name: str,
    log_dir: Optional[Path] = None,
    verbose: bool = False,
    extra_provenance: Optional[Dict[str, object]] = None,
) -> Optional[Path]:
    """
    Configure loguru for a noteshelf session.

    Console output goes to stderr (INFO and above, DEBUG when verbose). When
    a log directory is given, a DEBUG-level file sink is added there and the
    execution provenance is written at the top of it.

    Args:
        context_name: Session identifier used as the log file stem (e.g. "noteshelf")
        log_dir: Directory for the log file (no file sink when None)
        verbose: Show DEBUG messages on the console
        extra_provenance: Additional key-value pairs for the provenance header

    Returns:
        Path to log file, or None when logging only to the console

    Example:
        from noteshelf.utils.logger import setup_logger

        log_file = setup_logger(
            context_name="noteshelf",
            log_dir=Path("~/.config/noteshelf/logs").expanduser(),
            extra_provenance={"Shelf": "/home/me/notes"},
        )
    """
    # Remove default logger
    logger.remove()

    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level="DEBUG" if verbose else "INFO",
        colorize=True,
    )

    if log_dir is None:
        return None

    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    # File sink captures everything; enqueue keeps compile worker threads from interleaving
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", enqueue=True)

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: Optional[Dict[str, object]] = None) -> None:
    """
    Log execution provenance at DEBUG level.

    Logs standard context (command, working directory, Python version)
    plus any additional context provided.
    """
    logger.debug("=" * 80)
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")

    if extra_context:
        for key, value in extra_context.items():
            logger.debug(f"{key}: {value}")

    logger.debug("=" * 80)
