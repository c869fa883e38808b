"""Error Hierarchy — typed, categorized exceptions for engine boundary failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - The nominal synthesis path never raises: degenerate graphs use fallbacks
    - Only boundary validation and the opt-in dangling-edge rejection raise
    - to_response() produces the JSON error envelope used by the CLI and callers

Design Decisions:
    - Single hierarchy with DetectiveError base: callers catch one type
    - ErrorContext as dataclass: carries the investigation id into the envelope
      without coupling errors to logging
    - Every engine error is a rejected input today, so the category and
      severity enums hold only the members actually raised
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    ERROR = "error"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"


@dataclass
class ErrorContext:
    """When, and for which investigation, the error was raised."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    investigation_id: str | None = None


class DetectiveError(Exception):
    """Base exception for all engine errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to the standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "investigation_id": self.context.investigation_id,
                },
            }
        }


# ─── Validation Errors ───────────────────────────────────────────

class GraphValidationError(DetectiveError):
    """Input graph does not match the Node/Edge contract."""
    def __init__(
        self, message: str, details: list[dict] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "GRAPH_VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.details = details or []

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response


class DanglingEdgeError(DetectiveError):
    """Edge references a node id absent from the graph (reject mode only)."""
    def __init__(
        self, source_id: str, target_id: str, missing: list[str],
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Edge {source_id} -> {target_id} references unknown node(s): "
            f"{', '.join(missing)}",
            "DANGLING_EDGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.source_id = source_id
        self.target_id = target_id
        self.missing = missing


class DuplicateNodeError(DetectiveError):
    """Two nodes share an id — the engine never deduplicates nodes."""
    def __init__(self, node_ids: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Duplicate node id(s): {', '.join(node_ids)}",
            "DUPLICATE_NODE_ID", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.node_ids = node_ids
