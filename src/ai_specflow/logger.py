import json
import logging
import os
import sys


class JsonFormatter(logging.Formatter):
    """Single-line JSON formatter for structured debug output.

    Produces one JSON object per log record with fields: ts, level, logger, msg.
    Exception info is included as an "exc" field when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _make_formatter(debug_format: str, with_name: bool) -> logging.Formatter:
    if debug_format == "json":
        return JsonFormatter(datefmt="%Y-%m-%d %H:%M:%S")
    fmt = "[%(asctime)s] [%(levelname)s] %(message)s"
    if with_name:
        fmt = "[%(asctime)s] [%(levelname)s] %(name)s %(message)s"
    return logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(
    debug: bool = False,
    log_file: str | None = None,
    debug_format: str = "text",
    level: str | None = None,
) -> None:
    """
    Configure logging for the command line.

    Diagnostics always go to stderr so the report printed on stdout stays
    clean (and parseable with --json).

    Args:
        debug: If True, overrides every other level setting with DEBUG.
        log_file: Optional log file, written in addition to stderr.
        debug_format: "text" (default) or "json" for structured output.
        level: Level from the config file; LOG_LEVEL env var wins over it.

    Environment variables:
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR).
                   Default: WARNING.
    """
    # debug > LOG_LEVEL env > config level > WARNING
    if debug:
        log_level = logging.DEBUG
    else:
        name = os.getenv("LOG_LEVEL") or level or "WARNING"
        log_level = getattr(logging, name.upper(), logging.WARNING)

    handlers: list[logging.Handler] = []
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(_make_formatter(debug_format, False))
    handlers.append(stderr_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(_make_formatter(debug_format, True))
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
    )
