"""Unified logging for autodeploy with console and file output."""
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

console = Console()

# Log file configuration
LOG_DIR = Path.home() / ".local" / "state" / "autodeploy"
LOG_FILE = LOG_DIR / "autodeploy.log"

# Parent of every module logger; holds the effective level
PACKAGE_LOGGER = "autodeploy"

# Track if file logging has been set up
_file_logging_configured = False


def setup_file_logging(log_file: str = None, verbose: bool = False):
    """Set up file logging for deploy and rollback runs.

    Args:
        log_file: Path to log file (defaults to ~/.local/state/autodeploy/autodeploy.log)
        verbose: Enable debug-level logging

    Note:
        Creates log directory if it doesn't exist.
        Falls back to /tmp if the state directory is not writable.
    """
    global _file_logging_configured

    if _file_logging_configured:
        return

    target_log_file = Path(log_file) if log_file else LOG_FILE

    try:
        target_log_file.parent.mkdir(parents=True, exist_ok=True)
    except PermissionError:
        target_log_file = Path("/tmp/autodeploy.log")
        target_log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger(PACKAGE_LOGGER)
    file_handler = logging.FileHandler(target_log_file)
    file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

    file_formatter = logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    _file_logging_configured = True

    root_logger.info(f"autodeploy logging initialized: {target_log_file}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger with Rich console output.

    File logging must be enabled separately via setup_file_logging().
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if package_logger.level == logging.NOTSET:
        package_logger.setLevel(logging.INFO)

    # Module loggers stay at NOTSET and follow the package level
    logger = logging.getLogger(name)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
