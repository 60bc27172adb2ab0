from __future__ import annotations

import contextvars
import json
import logging
from typing import Any

_request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("request_id", default=None)
_incident_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("incident_id", default=None)


def set_request_id(request_id: str | None) -> contextvars.Token | None:
    if request_id is None:
        return None
    return _request_id_var.set(str(request_id))


def clear_request_id(token: contextvars.Token | None) -> None:
    if token is not None:
        _request_id_var.reset(token)


def get_request_id() -> str | None:
    return _request_id_var.get()


def set_incident_id(incident_id: str | None) -> contextvars.Token | None:
    """Tag log lines with the incident being relayed; empty ids are not tagged."""
    if not incident_id:
        return None
    return _incident_id_var.set(str(incident_id))


def clear_incident_id(token: contextvars.Token | None) -> None:
    if token is not None:
        _incident_id_var.reset(token)


def get_incident_id() -> str | None:
    return _incident_id_var.get()


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        record.incident_id = get_incident_id() or "-"
        return True


def configure_logging(level_name: str = "INFO") -> None:
    root = logging.getLogger()
    level = getattr(logging, (level_name or "INFO").upper(), logging.INFO)
    if not root.handlers:
        logging.basicConfig(
            level=level,
            format=(
                "%(asctime)s %(levelname)s %(name)s "
                "[request_id=%(request_id)s incident_id=%(incident_id)s] %(message)s"
            ),
        )
    root.setLevel(level)
    for handler in root.handlers:
        if not any(isinstance(f, RequestContextFilter) for f in handler.filters):
            handler.addFilter(RequestContextFilter())


def structured_log(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Emit one JSON event line; the active incident id is added when not given."""
    incident_id = get_incident_id()
    if incident_id is not None:
        fields.setdefault("incident_id", incident_id)
    logger.log(level, json.dumps({"event": event, **fields}, ensure_ascii=False, sort_keys=True, default=str))
