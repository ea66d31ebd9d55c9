import logging
import sys
from typing import List, Optional, TextIO

import structlog
from structlog.stdlib import add_log_level, add_logger_name

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_log_level(name: str, verbose: bool = False) -> int:
    """Map a level name (or the verbose flag) to a stdlib logging level."""
    if verbose:
        return logging.DEBUG
    return getattr(logging, str(name).upper(), logging.INFO)


def stream_supports_color(stream: Optional[TextIO] = None) -> bool:
    stream = stream if stream is not None else sys.stderr
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def build_processors(level: int, colors: bool) -> List:
    """Processor chain for the CLI; debug runs also record the call site."""
    processors = [
        structlog.contextvars.merge_contextvars,
        add_logger_name,
        add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=False),
    ]
    if level <= logging.DEBUG:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                {
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                }
            )
        )
    processors.append(structlog.dev.ConsoleRenderer(colors=colors))
    return processors


def setup_logging(level: int = logging.INFO, colors: Optional[bool] = None) -> None:
    """Configure structlog and standard logging with the given level.

    ``colors=None`` enables ANSI colors only when stderr is a terminal.
    """
    if colors is None:
        colors = stream_supports_color()
    logging.basicConfig(level=level, format="%(message)s")
    structlog.configure(
        processors=build_processors(level, colors),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
