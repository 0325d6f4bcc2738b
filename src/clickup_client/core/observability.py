from __future__ import annotations

import logging
import time
from typing import Any, Dict

EVENTS_LOGGER = "clickup_client.observability"

# LogRecord attributes an ``extra`` dict must not overwrite.
RESERVED_LOG_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        k: v
        for k, v in fields.items()
        if k not in RESERVED_LOG_KEYS and v is not None
    }


def elapsed_ms(start: float) -> int:
    """Milliseconds since a time.perf_counter() reading."""
    return int((time.perf_counter() - start) * 1000)


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """
    Emit one structured record named ``event``.

    Fields become LogRecord attributes (see LogfmtFormatter); None values are
    dropped so formatters only render what the caller actually knew.
    """
    log = logger or logging.getLogger(EVENTS_LOGGER)
    log.log(level, event, extra={"event": event, **_clean_fields(fields)})


__all__ = ["log_event", "elapsed_ms", "EVENTS_LOGGER"]
