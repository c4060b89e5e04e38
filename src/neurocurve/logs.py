# src/neurocurve/logs.py
import logging

import structlog


def configure_logging(level: str = "INFO", json: bool = True) -> None:
    """
    Set up structlog for applications embedding the engine.

    level : standard level name ("DEBUG", "INFO", ...)
    json  : JSON lines when True, human-readable console output otherwise
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level '{level}'.")

    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
