"""structlog setup for custreg.

All output goes to stderr so stdout stays clean for results.  structlog
events and plain stdlib records (the repository logs through
``logging``) share one processor chain and one handler; the renderer is
either a console renderer or one JSON object per line.

Only the ``custreg`` logger tree follows the configured level; the root
stays at WARNING so third-party debug chatter never shows.
"""

from __future__ import annotations

import logging
import sys

import structlog

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    level: str = "warning",
) -> None:
    """Route structlog and stdlib logging to stderr.

    Args:
        verbose: Shorthand for ``level="debug"``.
        log_json: Render JSON lines instead of console text.
        level: Level name for the ``custreg`` loggers.

    Safe to call more than once; each call replaces the previous handler.
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    app_level = logging.DEBUG if verbose else _LEVELS.get(level.lower(), logging.WARNING)
    logging.getLogger("custreg").setLevel(app_level)
