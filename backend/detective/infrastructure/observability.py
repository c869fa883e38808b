"""Log output for the CLI: one JSON object per record, or plain text.

Invariants:
    - Every JSON record has timestamp, level, logger and message keys
    - Synthesis diagnostics (investigation_id, node/edge/path counts, fallback,
      skipped_edges, duration_ms) become top-level keys only when set
    - setup_logging is idempotent: it replaces its own handler, never stacks one

Design Decisions:
    - Only the whitelisted extras are emitted, so arbitrary LogRecord
      attributes never leak into the output
    - The CLI is the only caller of setup_logging; core and services just log
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "investigation_id", "error_code", "node_count", "edge_count",
    "candidate_count", "path_count", "fallback", "skipped_edges", "duration_ms",
)
_HANDLER_NAME = "detective"


class JSONFormatter(logging.Formatter):
    """Render a record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure root logging to stderr. Returns the installed handler."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
