"""Logging setup and per-run correlation ids."""

import logging
import uuid

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "dynadot_updater"
REDACTED = "***"


def setup_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Attach a timestamped rich handler to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger


class RunLogger(logging.LoggerAdapter):
    """Prefixes every message with the run's correlation id."""

    def process(self, msg, kwargs):
        return f"{{{self.extra['correlation_id']}}} {msg}", kwargs


def get_run_logger(correlation_id: str | None = None) -> RunLogger:
    """Return a logger bound to a (new, unless given) correlation id."""
    return RunLogger(
        logging.getLogger(LOGGER_NAME),
        {"correlation_id": correlation_id or str(uuid.uuid4())},
    )


def redact_params(
    params: list[tuple[str, str]], secret_names: tuple[str, ...] = ("key",)
) -> list[tuple[str, str]]:
    """Return query parameters with secret values masked."""
    return [(name, REDACTED if name in secret_names else value) for name, value in params]
