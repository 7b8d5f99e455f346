import logging

from rich.console import Console
from rich.logging import RichHandler

_console: Console | None = None


def get_console() -> Console:
    """Return the shared Rich console instance for CLI output."""
    global _console  # noqa: PLW0603
    if _console is None:
        _console = Console(stderr=True)
    return _console


def setup_logging(level: str) -> None:
    """Route library logging to the console through a Rich handler.

    Args:
        level: A logging level name (e.g. "DEBUG", "WARNING"). Unknown names fall back to WARNING.
    """
    level_value = logging.getLevelName(level.upper())
    if not isinstance(level_value, int):
        level_value = logging.WARNING

    logging.basicConfig(
        level=level_value,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=get_console(), show_path=False)],
        force=True,
    )
