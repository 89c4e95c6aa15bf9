"""
Step logging helpers.

Every stage of a render request is reported through ``print_step`` so the
pipeline reads as a sequence of named steps in the log, e.g.::

    print_step("Cache Lookup", {"key": key, "hit": True}, "output")

The events are emitted through structlog; ``configure_logging`` picks a
console renderer for local work and a JSON renderer for deployments.
"""
import logging
import sys
from typing import Any, Optional

import structlog

_LOGGER_NAME = "shareable"

_STEP_LEVELS = {
    "input": logging.INFO,
    "output": logging.INFO,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_configured = False


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Configure structlog for the process.

    Args:
        level: Minimum level name (DEBUG, INFO, ...)
        json_output: Render events as JSON lines instead of coloured console output
    """
    global _configured
    if _configured:
        return

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str = _LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def print_step(step_name: str, data: Optional[Any] = None, step_type: str = "info") -> None:
    """
    Log one named pipeline step.

    Args:
        step_name: Human readable step title
        data: Dict of fields to attach, or any value logged as ``detail``
        step_type: One of input, output, info, warning, error
    """
    level = _STEP_LEVELS.get(step_type, logging.INFO)
    fields = {"step_type": step_type}
    if isinstance(data, dict):
        fields.update(data)
    elif data is not None:
        fields["detail"] = data
    get_logger().log(level, step_name, **fields)
