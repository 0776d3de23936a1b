"""Centralized logging utilities for catalogscope.

This module provides:
- Logging configuration from CatalogConfig
- Safe preview of caller-supplied values (search text, raw filters)
- Structured logging with request_id / tenant_id propagation
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional
from uuid import UUID, uuid4

from .config import CatalogConfig, LogLevel

# Attributes every LogRecord carries; anything else came in through `extra`.
_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName", "request_id", "tenant_id",
    }
)


def safe_preview(value: Any, limit: int = 120) -> str:
    """Create a length-bounded, single-line preview of a value for logging.

    Args:
        value: The value to preview (any type)
        limit: Maximum length of the preview (default: 120)

    Returns:
        A truncated string representation
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list, tuple)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


class CatalogFormatter(logging.Formatter):
    """Formatter that includes request context and optional JSON output.

    This formatter:
    - Extracts request_id and tenant_id from log records (if available)
    - Formats logs as JSON for structured logging, or as plain text
    - Previews extra fields so large filter payloads stay on one line
    """

    def __init__(self, json_format: bool = True, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        request_id = getattr(record, "request_id", None)
        tenant_id = getattr(record, "tenant_id", None)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if request_id:
            log_data["request_id"] = str(request_id) if isinstance(request_id, UUID) else request_id
        if tenant_id:
            log_data["tenant_id"] = tenant_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            f"{log_data['level']}",
            f"{log_data['logger']}",
        ]
        if request_id:
            parts.append(f"request_id={log_data['request_id']}")
        if tenant_id:
            parts.append(f"tenant_id={tenant_id}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class CatalogLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds request_id and tenant_id to every record.

    Usage:
        log = get_catalog_logger(__name__, tenant_id=facts.current_tenant_id)
        log.info("listing items")
    """

    def __init__(
        self,
        logger: logging.Logger,
        request_id: Optional[UUID | str] = None,
        tenant_id: Optional[str] = None,
    ):
        super().__init__(logger, {})
        self.request_id = request_id
        self.tenant_id = tenant_id

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        request_id = kwargs.pop("request_id", self.request_id)
        tenant_id = kwargs.pop("tenant_id", self.tenant_id)

        extra = kwargs.get("extra", {})
        if request_id:
            extra["request_id"] = request_id
        if tenant_id:
            extra["tenant_id"] = tenant_id
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(config: Optional[CatalogConfig] = None, json_format: Optional[bool] = None) -> None:
    """Configure the root logger from a CatalogConfig.

    Args:
        config: CatalogConfig instance (if None, loads from environment)
        json_format: Override config.log_json
    """
    if config is None:
        from .config import load_catalog_config_from_env

        config = load_catalog_config_from_env()
    if json_format is None:
        json_format = config.log_json

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(LogLevel(config.log_level), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(CatalogFormatter(json_format=json_format))
    root_logger.addHandler(console_handler)

    if config.service_name:
        logging.getLogger(config.service_name).setLevel(log_level)


def get_catalog_logger(
    name: str,
    request_id: Optional[UUID | str] = None,
    tenant_id: Optional[str] = None,
) -> CatalogLoggerAdapter:
    """Get a logger adapter bound to one request.

    A fresh request_id is generated when none is given.
    """
    logger = logging.getLogger(name)
    return CatalogLoggerAdapter(logger, request_id=request_id or uuid4().hex, tenant_id=tenant_id)


__all__ = [
    "safe_preview",
    "CatalogFormatter",
    "CatalogLoggerAdapter",
    "setup_logging",
    "get_catalog_logger",
]
