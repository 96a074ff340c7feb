"""structlog setup for layergroups.

Service events (``group.added``, ``group.moved`` ...) log at INFO and the
resolver's per-call host operations at DEBUG, so verbosity steps through
them: no ``-v`` shows warnings only, ``-v`` adds events, ``-vv`` adds the
host calls. Third-party loggers stay at WARNING.

Every record carries the style file being edited once :func:`bind_style`
has run.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)

_HANDLER_NAME = "layergroups"
_PACKAGE_PREFIX = "layergroups."


def level_for(verbosity: int) -> int:
    """Map a ``-v`` count to a logging level (extra ``-v`` flags saturate)."""
    return VERBOSITY_LEVELS[min(max(verbosity, 0), len(VERBOSITY_LEVELS) - 1)]


def bind_style(path: Path) -> None:
    """Tag subsequent records with the style file under edit."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(style=str(path))


def _short_logger_name(_logger: WrappedLogger, _name: str, event_dict: EventDict) -> EventDict:
    # "layergroups.services.groups" -> "services.groups"
    name = event_dict.get("logger")
    if isinstance(name, str) and name.startswith(_PACKAGE_PREFIX):
        event_dict["logger"] = name[len(_PACKAGE_PREFIX) :]
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _short_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _build_handler(log_json: bool) -> logging.Handler:
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if log_json
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_processors(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(*, verbosity: int = 0, log_json: bool = False) -> None:
    """Route structlog and stdlib records through one stderr handler.

    Safe to call repeatedly: only the handler installed by a previous call
    is replaced, other root handlers are left alone.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    for existing in [h for h in root_logger.handlers if h.get_name() == _HANDLER_NAME]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(_build_handler(log_json))
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("layergroups").setLevel(level_for(verbosity))
