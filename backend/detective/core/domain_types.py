"""Domain Types — rich types that replace bare primitives across the engine.

Invariants:
    - NodeId, PathId wrap str — never pass bare ids through scoring code
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (the output contract is JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

NodeId = NewType("NodeId", str)
PathId = NewType("PathId", str)


# ─── Enums ───────────────────────────────────────────────────────

class NodeType(str, Enum):
    """Evidentiary unit kinds. Informational only — never read by scoring."""
    EVENT = "event"
    ACTOR = "actor"
    RESOURCE = "resource"
    DECISION = "decision"


class PathStatus(str, Enum):
    """Hypothesis lifecycle. DEAD paths are retained, never dropped."""
    ACTIVE = "active"
    WEAK = "weak"
    DEAD = "dead"


class Termination(str, Enum):
    """Per-visit decision of the path enumerator."""
    CONTINUE = "continue"
    EMIT_AND_STOP = "emit_and_stop"
    EMIT_AND_CONTINUE = "emit_and_continue"


class DanglingEdgeMode(str, Enum):
    """What adjacency construction does with an edge naming an unknown node."""
    SKIP = "skip"
    REJECT = "reject"


class FallbackKind(str, Enum):
    """Which degenerate-graph branch of the assembler produced the result."""
    EMPTY = "empty"
    NO_EDGES = "no_edges"
    NO_ADMISSIBLE = "no_admissible"


# ─── Constants ───────────────────────────────────────────────────

PATH_KEY_SEPARATOR = "|"
NO_EDGES_PATH_ID = PathId("path-single")
FALLBACK_PATH_ID = PathId("path-fallback")
