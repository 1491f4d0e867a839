# ingres/observability/logger.py

"""
JSON logging for the edge functions.

Every line is one JSON object. Fields passed with `extra=` land at the top
level; `log_function_*` add the fields every edge-function log shares
(request id, function name, outcome) so one request can be followed
through the file with a single filter.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

SERVICE_NAME = "ingres-edge-functions"

# Attributes every LogRecord carries; anything else came from `extra=`
_RECORD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}

_NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "openai", "hpack", "postgrest")


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:

        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key, value in vars(record).items():

            if key.startswith("_") or key in _RECORD_ATTRS:
                continue

            # Keep the formatter's own fields; clashing extras get a prefix
            entry[f"extra_{key}" if key in entry else key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def setup_logging(log_level: str = "INFO", log_dir: str = "logs"):
    """Console plus `<log_dir>/app.log`, both JSON."""

    os.makedirs(log_dir, exist_ok=True)

    formatter = JSONFormatter()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)

    log_file = logging.FileHandler(os.path.join(log_dir, "app.log"), encoding="utf-8")
    log_file.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root.handlers = [console, log_file]

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ============================================================
# EDGE FUNCTION EVENTS
# ============================================================

def _function_fields(request_id: str, function: str, **fields) -> Dict[str, Any]:

    # `function` is taken by the formatter (the Python function name)
    return {
        "request_id": request_id,
        "edge_function": function,
        **{k: v for k, v in fields.items() if v is not None},
    }


def log_function_start(logger, request_id: str, function: str, **fields):

    logger.info(
        "edge_function_started",
        extra=_function_fields(request_id, function, **fields),
    )


def log_function_complete(
    logger,
    request_id: str,
    function: str,
    latency_seconds: float,
    provider: Optional[str] = None,
    response_type: Optional[str] = None,
    search_type: Optional[str] = None,
    **fields,
):
    """Success line; provider/response_type/search_type only when known."""

    logger.info(
        "edge_function_completed",
        extra=_function_fields(
            request_id,
            function,
            latency_seconds=round(latency_seconds, 3),
            provider=provider,
            response_type=response_type,
            search_type=search_type,
            **fields,
        ),
    )


def log_function_error(logger, request_id: str, function: str, error: Exception, **fields):

    status_code = getattr(error, "status_code", 500)

    log = logger.warning if status_code < 500 else logger.error

    log(
        "edge_function_failed",
        extra=_function_fields(
            request_id,
            function,
            status_code=status_code,
            error=str(error),
            error_type=type(error).__name__,
            **fields,
        ),
        exc_info=status_code >= 500,
    )
