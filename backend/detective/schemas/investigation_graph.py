"""Investigation Graph Schemas — pydantic models for the graph in / paths out contract.

Invariants:
    - Node.confidence and Edge.confidence are ints in [0, 100]
    - Edge.strength is a float in [0, 1]
    - Edges use "from"/"to" on the wire, source/target in core
    - Unknown top-level keys (e.g. previously stored "paths") are ignored
    - Duplicate node ids are reported by duplicate_node_ids(), not silently merged

Design Decisions:
    - Duplicate detection is a query, not a validator: the service raises the
      typed DuplicateNodeError instead of burying it in a ValidationError
    - to_domain()/from_domain() keep conversion next to the wire shape
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from detective.core.domain_types import NodeId, NodeType, PathId, PathStatus
from detective.core.graph_model import Edge, Graph, InvestigationPath, Node


class NodeSchema(BaseModel):
    """One evidentiary unit as supplied by the extraction pipeline."""
    id: str = Field(min_length=1)
    type: str = NodeType.EVENT.value
    label: str = ""
    date: str | None = None
    confidence: int = Field(default=50, ge=0, le=100)
    sources: list[str] = []

    def to_domain(self) -> Node:
        return Node(
            id=NodeId(self.id),
            label=self.label,
            type=self.type,
            date=self.date,
            confidence=self.confidence,
            sources=tuple(self.sources),
        )


class EdgeSchema(BaseModel):
    """Directed relationship; `from` is aliased since it is a Python keyword."""
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from", min_length=1)
    target: str = Field(alias="to", min_length=1)
    relation: str = "influences"
    strength: float = Field(ge=0.0, le=1.0)
    confidence: int = Field(default=50, ge=0, le=100)

    def to_domain(self) -> Edge:
        return Edge(
            source=NodeId(self.source),
            target=NodeId(self.target),
            relation=self.relation,
            strength=self.strength,
            confidence=self.confidence,
        )


class GraphSchema(BaseModel):
    """Complete engine input."""
    model_config = ConfigDict(extra="ignore")

    nodes: list[NodeSchema] = []
    edges: list[EdgeSchema] = []

    def duplicate_node_ids(self) -> list[str]:
        seen: set[str] = set()
        duplicates: list[str] = []
        for node in self.nodes:
            if node.id in seen and node.id not in duplicates:
                duplicates.append(node.id)
            seen.add(node.id)
        return duplicates

    def to_domain(self) -> Graph:
        return Graph(
            nodes=tuple(n.to_domain() for n in self.nodes),
            edges=tuple(e.to_domain() for e in self.edges),
        )


class ScoreBreakdownSchema(BaseModel):
    """Per-signal contributions, rounded to 4 decimals."""
    quantity: float
    credibility: float
    source_diversity: float
    temporal: float
    convergence: float
    contradiction_penalty: float
    weak_edge_ratio: float
    raw: float
    score: float


class PathSchema(BaseModel):
    """A ranked hypothesis in the output list."""
    id: str
    nodes: list[str]
    status: Literal["active", "weak", "dead"]
    confidence: int = Field(ge=0, le=100)
    hypothesis_label: str | None = None
    breakdown: ScoreBreakdownSchema | None = None

    @classmethod
    def from_domain(
        cls, path: InvestigationPath, include_breakdown: bool = False,
    ) -> "PathSchema":
        return cls.model_validate(path.to_dict(include_breakdown=include_breakdown))

    def to_domain(self) -> InvestigationPath:
        return InvestigationPath(
            id=PathId(self.id),
            nodes=tuple(NodeId(n) for n in self.nodes),
            status=PathStatus(self.status),
            confidence=self.confidence,
            hypothesis_label=self.hypothesis_label,
        )
