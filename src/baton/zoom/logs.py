"""Logging setup shared by the CLI and library callers."""

import logging

import structlog


def resolve_level(log_level: str | int) -> int:
    # Accept both standard level names (e.g. "INFO") and numeric values.
    if isinstance(log_level, int):
        return log_level
    level = getattr(logging, str(log_level).upper(), None)
    if isinstance(level, int):
        return level
    try:
        return int(log_level)
    except ValueError:
        return logging.INFO


def configure_logging(*, log_level: str | int = "INFO", json_format: bool = False) -> None:
    level = resolve_level(log_level)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    # Quiet down httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    processors = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
