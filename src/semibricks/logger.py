"""Package logging with the few console helpers the CLI needs."""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


class SemiBricksLogger(logging.Logger):
    """
    A logger writing through a RichHandler, plus plain console output for the CLI.

    Records go through the handler (and propagate, so pytest's caplog sees them);
    ``success``, ``rule`` and ``key_value`` print straight to the console.
    """

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        super().__init__(name, level)
        self.console = Console()

        handler = RichHandler(
            console=self.console,
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        self.addHandler(handler)

    def success(self, message: str) -> None:
        """Print a success message in green with a checkmark."""
        self.console.print(f"[green]✓[/green] {message}")

    def rule(self, title: str, style: str = "bold blue") -> None:
        self.console.rule(f"[{style}]{title}")

    def key_value(self, key: str, value: Any, key_style: str = "dim") -> None:
        """
        Print a formatted key-value pair, e.g. "User: object".

        Args:
            key: The key/label to display
            value: The value to display
            key_style: Style for the key (default: "dim")
        """
        self.console.print(f"[{key_style}]{key}:[/{key_style}] {value}", highlight=False)


def get_logger(name: str = "semibricks") -> SemiBricksLogger:
    """
    Get or create the package logger.

    The logger class is swapped only for this lookup so that other libraries'
    loggers stay plain ``logging.Logger`` instances.
    """
    logging.setLoggerClass(SemiBricksLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        logging.setLoggerClass(logging.Logger)

    return logger  # type: ignore[return-value]
