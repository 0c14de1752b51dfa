import logging
import structlog
from structlog.stdlib import add_log_level, add_logger_name


def setup_logging(level: int = logging.INFO, json_logs: bool = False) -> None:
    """Configure structlog and standard logging with the given level.

    ``json_logs`` swaps the coloured console renderer for one JSON object per
    line, which is easier to collect from batch generation runs.
    """
    logging.basicConfig(level=level, format="%(message)s")
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_logger_name,
            add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=False),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def parse_log_level(name: str | int | None, default: int = logging.INFO) -> int:
    """Translate ``"DEBUG"``/``"info"``/``10`` style values into a level number."""
    if name is None:
        return default
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else default
