import json
import logging
import os
from datetime import datetime, timezone
from typing import Any

LOG_LEVEL_ENV = "LMS_ADMIN_LOG_LEVEL"


def get_logger(name: str) -> logging.Logger:
    """Console logger with one stderr handler; the level comes from LMS_ADMIN_LOG_LEVEL."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, os.environ.get(LOG_LEVEL_ENV, "INFO").upper(), logging.INFO))
        logger.propagate = False
    return logger


def action_record(module: str, action: str, outcome: str, **context: Any) -> dict[str, Any]:
    record = {"ts": datetime.now(timezone.utc).isoformat(), "module": module, "action": action, "outcome": outcome}
    record.update(context)
    return record


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    outcome: str,
    request_id: int | None = None,
    trace_id: str | None = None,
    detail: Any = None,
) -> None:
    # one JSON line per settled thunk
    level = logging.WARNING if outcome == "rejected" else logging.INFO
    record = action_record(module, action, outcome, request_id=request_id, trace_id=trace_id, detail=detail)
    record["level"] = logging.getLevelName(level)
    logger.log(level, json.dumps(record, default=str))
