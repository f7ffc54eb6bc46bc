"""Logging setup shared by the HTTP and stdio entry points."""

from __future__ import annotations

import json
import logging
import sys
from typing import IO, Optional

from bankless_mcp.config import BanklessConfig, default_config

EXTRA_FIELDS = ("tool", "request_id", "error")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
        }
        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: BanklessConfig | None = None, stream: Optional[IO[str]] = None) -> None:
    """
    Install a root handler for the configured level and format.

    Logs always go to stderr by default: on the stdio transport stdout carries
    protocol messages only.
    """
    config = config or default_config
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    handler = logging.StreamHandler(stream or sys.stderr)
    if config.log_format.lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logging.basicConfig(level=level, handlers=[handler], force=True)
