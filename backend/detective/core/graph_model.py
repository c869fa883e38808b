"""Graph Model — input (Node, Edge, Graph) and output (InvestigationPath) contracts.

Invariants:
    - All types are frozen: the engine never mutates its input
    - Node ids are unique within a Graph (checked at the schema boundary, not here)
    - to_dict() shapes match the JSON contract: edges serialize as "from"/"to"
    - InvestigationPath.confidence is an int in [0, 100]

Design Decisions:
    - Frozen dataclasses over pydantic in core: no validation cost inside the
      DFS hot loop, pydantic lives at the boundary (schemas/)
    - Tuples over lists: hashable, and a caller cannot append to a Graph
    - Edge.source / Edge.target: "from" is a Python keyword
"""

import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from functools import cached_property

from detective.core.domain_types import (
    NodeId, NodeType, PathId, PathStatus, PATH_KEY_SEPARATOR,
)


_PARTIAL_DATE = re.compile(r"^(\d{4})(?:-(\d{2}))?$")


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 date. Naive values are UTC; unparseable values are None.

    Reduced precision dates ("2024", "2024-03") start at the first instant
    of that year or month.
    """
    if not value:
        return None
    partial = _PARTIAL_DATE.match(value)
    if partial:
        year, month = partial.groups()
        try:
            return datetime(int(year), int(month or 1), 1, tzinfo=timezone.utc)
        except ValueError:
            return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Node:
    """One evidentiary unit: event, actor, resource or decision."""
    id: NodeId
    label: str
    type: str = NodeType.EVENT.value
    date: str | None = None
    confidence: int = 50
    sources: tuple[str, ...] = ()

    @property
    def timestamp(self) -> datetime | None:
        return parse_timestamp(self.date)

    def attribution(self) -> tuple[str, ...]:
        """Non-empty sources, or the label when no source is listed."""
        listed = tuple(s for s in self.sources if s)
        if listed:
            return listed
        return (self.label,) if self.label else ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "label": self.label,
            "date": self.date,
            "confidence": self.confidence,
            "sources": list(self.sources),
        }


@dataclass(frozen=True)
class Edge:
    """Directed, weighted relationship between two nodes."""
    source: NodeId
    target: NodeId
    relation: str = "influences"
    strength: float = 0.5
    confidence: int = 50

    def to_dict(self) -> dict:
        return {
            "from": self.source,
            "to": self.target,
            "relation": self.relation,
            "strength": self.strength,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class Graph:
    """The sole engine input. Immutable for one computation."""
    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()

    @cached_property
    def nodes_by_id(self) -> dict[NodeId, Node]:
        return {n.id: n for n in self.nodes}

    def resolve(self, node_ids: tuple[NodeId, ...]) -> list[Node]:
        """Node objects for the given ids, in order, skipping unknown ids."""
        index = self.nodes_by_id
        return [index[i] for i in node_ids if i in index]

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


@dataclass(frozen=True)
class PathCandidate:
    """A simple walk produced by the enumerator, before admission and scoring."""
    nodes: tuple[NodeId, ...]
    edges: tuple[Edge, ...] = ()

    @property
    def key(self) -> str:
        return PATH_KEY_SEPARATOR.join(self.nodes)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-signal contributions behind a path score."""
    quantity: float
    credibility: float
    source_diversity: float
    temporal: float
    convergence: float
    contradiction_penalty: float
    weak_edge_ratio: float
    raw: float
    score: float

    def to_dict(self) -> dict:
        return {
            "quantity": round(self.quantity, 4),
            "credibility": round(self.credibility, 4),
            "source_diversity": round(self.source_diversity, 4),
            "temporal": round(self.temporal, 4),
            "convergence": round(self.convergence, 4),
            "contradiction_penalty": round(self.contradiction_penalty, 4),
            "weak_edge_ratio": round(self.weak_edge_ratio, 4),
            "raw": round(self.raw, 4),
            "score": round(self.score, 4),
        }


@dataclass(frozen=True)
class InvestigationPath:
    """A ranked hypothesis. Recomputed on every call, never persisted here."""
    id: PathId
    nodes: tuple[NodeId, ...]
    status: PathStatus
    confidence: int
    hypothesis_label: str | None = None
    edges: tuple[Edge, ...] = field(default=(), compare=False)
    breakdown: ScoreBreakdown | None = field(default=None, compare=False)

    def with_label(self, label: str) -> "InvestigationPath":
        """Labelled copy — labels are attached downstream of the engine."""
        return replace(self, hypothesis_label=label)

    def to_dict(self, include_breakdown: bool = False) -> dict:
        data: dict = {
            "id": self.id,
            "nodes": list(self.nodes),
            "status": self.status.value,
            "confidence": self.confidence,
        }
        if self.hypothesis_label is not None:
            data["hypothesis_label"] = self.hypothesis_label
        if include_breakdown and self.breakdown is not None:
            data["breakdown"] = self.breakdown.to_dict()
        return data
