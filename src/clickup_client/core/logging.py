import logging
from typing import Any, Iterator, Tuple

# Keys log_event callers commonly set, rendered first and in this order.
LOG_EXTRA_FIELDS = (
    "request_id",
    "tool",
    "method",
    "endpoint",
    "status",
    "error_type",
    "chunk",
    "chunks",
    "ids",
    "duration_ms",
)

_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "event"}


class LogfmtFormatter(logging.Formatter):
    """
    Render a record as ``level=... logger=... event=... key=value ...``.

    Any attribute passed through ``extra`` is emitted; well-known client keys
    come first, the rest follow alphabetically. None values are omitted.
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"level={record.levelname.lower()}",
            f"logger={record.name}",
        ]
        msg = record.getMessage()
        if msg:
            parts.append(f"event={quote(msg)}")
        parts.extend(f"{k}={quote(v)}" for k, v in _extras(record))
        if record.exc_info and record.exc_info[0] is not None:
            parts.append(f"exc_type={record.exc_info[0].__name__}")
        return " ".join(parts)


def _extras(record: logging.LogRecord) -> Iterator[Tuple[str, Any]]:
    attrs = record.__dict__
    for key in LOG_EXTRA_FIELDS:
        if attrs.get(key) is not None:
            yield key, attrs[key]
    for key in sorted(attrs):
        if key in _STANDARD_ATTRS or key in LOG_EXTRA_FIELDS or key.startswith("_"):
            continue
        if attrs[key] is not None:
            yield key, attrs[key]


def quote(val: Any) -> str:
    if isinstance(val, (bool, int, float)):
        return str(val).lower() if isinstance(val, bool) else str(val)
    s = str(val)
    if not s or any(c in s for c in ' ="'):
        s = '"' + s.replace('"', '\\"') + '"'
    return s


def setup_logging(level: str = "INFO", *, logger_name: str = "clickup_client") -> None:
    """Send the package's records to stderr as logfmt lines."""
    log = logging.getLogger(logger_name)
    for h in list(log.handlers):
        log.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(LogfmtFormatter())
    log.addHandler(handler)
    log.setLevel(getattr(logging, level.upper(), logging.INFO))


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]
