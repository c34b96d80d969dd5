"""Leveled console logging for devsetup.

Every module logs through ``logging.getLogger(__name__)``. The CLI installs a
single handler that renders records as ``[INFO]``, ``[SUCCESS]``,
``[WARNING]`` and ``[ERROR]`` lines, colored when the stream is a terminal.
"""

import logging
import sys

import click

# Between INFO (20) and WARNING (30)
SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

LEVEL_COLORS = {
    logging.DEBUG: "white",
    logging.INFO: "blue",
    SUCCESS: "green",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "red",
}


class LevelPrefixFormatter(logging.Formatter):
    """Format records as ``[LEVEL] message`` with a colored prefix."""

    def __init__(self, color: bool = True):
        super().__init__("%(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        prefix = f"[{record.levelname}]"
        if self.color:
            prefix = click.style(prefix, fg=LEVEL_COLORS.get(record.levelno, "white"), bold=True)
        return f"{prefix} {message}"


def configure_logging(verbose: bool = False, stream=None) -> logging.Handler:
    """Install the leveled console handler on the ``devsetup`` logger.

    Args:
        verbose: Show DEBUG records (commands being run, config paths)
        stream: Output stream (default: sys.stdout)

    Returns:
        The installed handler
    """
    stream = stream or sys.stdout
    color = hasattr(stream, "isatty") and stream.isatty()

    handler = logging.StreamHandler(stream)
    handler.setFormatter(LevelPrefixFormatter(color=color))

    root = logging.getLogger("devsetup")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.propagate = False
    return handler


__all__ = ["SUCCESS", "LevelPrefixFormatter", "configure_logging"]
