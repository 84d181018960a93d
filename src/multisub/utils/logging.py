"""structlog configuration."""

import logging

import structlog

from multisub.utils.config import get_settings


def setup_logging(level: str | None = None, *, json: bool | None = None) -> None:
    """Configure structlog for the library.

    Args:
        level: Minimum level name such as "DEBUG" or "WARNING".
            Defaults to the ``log_level`` setting.
        json: Render events as JSON lines. Defaults to the ``log_json`` setting.

    Raises:
        ValueError: If ``level`` is not a known logging level name
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    level_number = logging.getLevelNamesMapping().get(level_name)
    if level_number is None:
        raise ValueError(f"Unknown log level '{level_name}'")

    use_json = settings.log_json if json is None else json
    renderer = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_number),
        cache_logger_on_first_use=False,
    )
