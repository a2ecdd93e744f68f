from __future__ import annotations

import errno
import logging
import re
import sys
from typing import Any

import structlog

WEBHOOK_TOKEN_RE = re.compile(r"(/hooks/)[^/\s\"']+/[^/\s\"']+")


def _redact(value: str) -> str:
    return WEBHOOK_TOKEN_RE.sub(r"\1[REDACTED]", value)


def redact_webhook_processor(_, __, event_dict):
    """Processor to redact incoming-webhook tokens from log events."""
    for key, value in list(event_dict.items()):
        if not isinstance(value, str):
            continue
        redacted = _redact(value)
        if redacted != value:
            event_dict[key] = redacted
    return event_dict


class SafeStreamHandler(logging.StreamHandler):
    def handleError(self, record: logging.LogRecord) -> None:
        exc = sys.exc_info()[1]
        if isinstance(exc, BrokenPipeError) or (
            isinstance(exc, OSError) and exc.errno == errno.EPIPE
        ):
            try:
                self.stream.close()
            except OSError:
                pass
            return
        super().handleError(record)


def setup_logging(*, debug: bool = False) -> None:
    """Configure structlog with console output on stderr and token redaction.

    Hook output reaches the pusher as ``remote:`` lines, so everything goes to
    stderr and stdout stays free for debug payload dumps.
    """

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            redact_webhook_processor,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = SafeStreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logging.basicConfig(
        handlers=[handler],
        level=logging.DEBUG if debug else logging.INFO,
        force=True,
    )

    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str | None = None, **initial: Any) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name, **initial)
