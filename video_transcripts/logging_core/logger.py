# video_transcripts/logging_core/logger.py
"""
Centralized structured logging for the transcript pipeline.

Emits JSON lines with the fields:
- timestamp (ISO)
- run_id
- stage_name (optional, filled by caller)
- event_type (start/success/failure/fallback)
- level
- message
- metadata (dict)

Every strategy receives its logger from the caller; get_logger() builds the
run-scoped default. API keys are never logged.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, MutableMapping, TextIO, Tuple, Union
from uuid import UUID

ROOT_LOGGER_NAME = "video_transcripts"

# Anything log_event accepts: a plain Logger (tests) or the run-scoped adapter.
LoggerLike = Union[logging.Logger, logging.LoggerAdapter]


class JSONFormatter(logging.Formatter):
    """Custom formatter that outputs structured JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        if hasattr(record, "run_id"):
            log_record["run_id"] = str(record.run_id)

        for field in ("stage_name", "event_type", "metadata"):
            value = getattr(record, field, None)
            if value is not None:
                log_record[field] = value

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class RunLoggerAdapter(logging.LoggerAdapter):
    """Binds run_id to every record while keeping per-call extra fields."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **kwargs.get("extra", {})}
        return msg, kwargs


def _configure_root() -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


def get_logger(run_id: UUID) -> RunLoggerAdapter:
    """
    Return a logger bound to the given extraction run.

    All runs share one underlying handler (JSON lines on stderr), so creating
    a logger per call does not accumulate handlers.
    """
    return RunLoggerAdapter(_configure_root(), {"run_id": str(run_id)})


def set_log_stream(stream: TextIO) -> None:
    """Point the shared JSON handler at another stream (the CLI keeps stdout for output)."""
    for handler in _configure_root().handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.stream = stream


def log_event(
    logger: LoggerLike,
    level: int,
    message: str,
    *,
    stage_name: str | None = None,
    event_type: str,
    metadata: Dict[str, Any] | None = None,
) -> None:
    """Structured logging call used by every strategy."""
    extra: Dict[str, Any] = {"event_type": event_type}
    if stage_name:
        extra["stage_name"] = stage_name
    if metadata:
        extra["metadata"] = metadata

    logger.log(level, message, extra=extra)


# Data Flow
# TranscriptExtractor creates one run-scoped adapter per extraction
# (get_logger(uuid4())) and passes it to each strategy, which calls log_event().
# Tests inject a plain logging.Logger instead.
