"""Briefing — read-only summary of an investigation's graph and ranked paths.

Invariants:
    - Never creates, modifies, or chooses truth: inputs are read, never mutated
    - primary_path = highest-confidence path (first wins on ties); None without paths
    - At most 4 key nodes on the primary path and at most 4 turning points
    - has_contradictions = any DEAD path, or a weak edge on the primary path

Design Decisions:
    - Works on any path list, not only build_paths output, so a caller can
      brief over persisted or relabelled paths
    - Key nodes of long paths sample first / middle / three-quarter / last
      positions: an overview, not the full chain
"""

from dataclasses import dataclass, field

from detective.core.domain_types import NodeId, PathId, PathStatus
from detective.core.graph_model import Graph, InvestigationPath, Node
from detective.core.path_policy import PathPolicy, DEFAULT_POLICY

MAX_TURNING_POINTS = 4
MAX_KEY_NODES_PRIMARY = 4
LOW_CONFIDENCE_THRESHOLD = 50
DISCLAIMER = (
    "This briefing is subject to change as new signals are integrated. "
    "It reflects current paths and uncertainties, not a final conclusion."
)


@dataclass(frozen=True)
class InvestigationThread:
    """Investigation metadata supplied by the caller (persisted elsewhere)."""
    title: str = ""
    initial_hypothesis: str = ""
    status: str = "active"
    updated_at: str | None = None
    investigative_axes: tuple[str, ...] = ()
    blind_spots: tuple[str, ...] = ()


@dataclass(frozen=True)
class PrimaryPathSummary:
    path_id: PathId
    hypothesis_label: str
    confidence: int
    status: PathStatus
    key_node_ids: tuple[NodeId, ...]


@dataclass(frozen=True)
class TurningPoint:
    node_id: NodeId
    label: str
    date: str | None
    confidence: int


@dataclass(frozen=True)
class AlternativePath:
    path_id: PathId
    hypothesis_label: str
    status: PathStatus
    confidence: int


@dataclass(frozen=True)
class Uncertainty:
    blind_spots: tuple[str, ...] = ()
    low_confidence_node_ids: tuple[NodeId, ...] = ()
    has_contradictions: bool = False


@dataclass(frozen=True)
class Briefing:
    investigation: InvestigationThread
    primary_path: PrimaryPathSummary | None
    turning_points: tuple[TurningPoint, ...] = ()
    alternative_paths: tuple[AlternativePath, ...] = ()
    uncertainty: Uncertainty = field(default_factory=Uncertainty)
    disclaimer: str = DISCLAIMER


def select_primary(paths: list[InvestigationPath]) -> InvestigationPath | None:
    """Highest confidence, earliest on ties."""
    primary: InvestigationPath | None = None
    for path in paths:
        if primary is None or path.confidence > primary.confidence:
            primary = path
    return primary


def sample_key_nodes(nodes: list[Node]) -> tuple[NodeId, ...]:
    """All ids for short chains; first / middle / 3/4 / last for long ones."""
    if len(nodes) <= MAX_KEY_NODES_PRIMARY:
        return tuple(n.id for n in nodes)
    picks = [
        nodes[0].id,
        nodes[len(nodes) // 2].id,
        nodes[int(len(nodes) * 0.75)].id,
        nodes[-1].id,
    ]
    return tuple(picks[:MAX_KEY_NODES_PRIMARY])


def _primary_summary(
    graph: Graph, primary: InvestigationPath | None,
) -> PrimaryPathSummary | None:
    if primary is None:
        return None
    nodes = graph.resolve(primary.nodes)
    if not nodes:
        return None
    return PrimaryPathSummary(
        path_id=primary.id,
        hypothesis_label=primary.hypothesis_label or primary.id,
        confidence=primary.confidence,
        status=primary.status,
        key_node_ids=sample_key_nodes(nodes),
    )


def find_turning_points(graph: Graph, paths: list[InvestigationPath]) -> tuple[TurningPoint, ...]:
    """Nodes shared by >= 2 paths or branching (in/out degree > 1)."""
    path_hits: dict[NodeId, int] = {}
    for path in paths:
        for node_id in path.nodes:
            path_hits[node_id] = path_hits.get(node_id, 0) + 1
    in_degree: dict[NodeId, int] = {}
    out_degree: dict[NodeId, int] = {}
    for edge in graph.edges:
        out_degree[edge.source] = out_degree.get(edge.source, 0) + 1
        in_degree[edge.target] = in_degree.get(edge.target, 0) + 1

    points = [
        TurningPoint(node_id=n.id, label=n.label, date=n.date, confidence=n.confidence)
        for n in graph.nodes
        if path_hits.get(n.id, 0) >= 2
        or in_degree.get(n.id, 0) > 1
        or out_degree.get(n.id, 0) > 1
    ]
    points.sort(key=lambda p: p.confidence, reverse=True)
    return tuple(points[:MAX_TURNING_POINTS])


def _has_weak_link(
    graph: Graph, primary: InvestigationPath, policy: PathPolicy,
) -> bool:
    links = set(zip(primary.nodes, primary.nodes[1:]))
    return any(
        (e.source, e.target) in links and e.strength < policy.weak_edge_strength
        for e in graph.edges
    )


def assess_uncertainty(
    graph: Graph,
    paths: list[InvestigationPath],
    primary: InvestigationPath | None,
    thread: InvestigationThread,
    policy: PathPolicy = DEFAULT_POLICY,
) -> Uncertainty:
    has_contradictions = any(p.status == PathStatus.DEAD for p in paths)
    if primary is not None and _has_weak_link(graph, primary, policy):
        has_contradictions = True
    return Uncertainty(
        blind_spots=thread.blind_spots,
        low_confidence_node_ids=tuple(
            n.id for n in graph.nodes if n.confidence < LOW_CONFIDENCE_THRESHOLD
        ),
        has_contradictions=has_contradictions,
    )


def build_briefing(
    graph: Graph,
    paths: list[InvestigationPath],
    thread: InvestigationThread | None = None,
    policy: PathPolicy = DEFAULT_POLICY,
) -> Briefing:
    """Assemble the briefing. Pure; no side effects."""
    thread = thread or InvestigationThread()
    primary = select_primary(paths)
    summary = _primary_summary(graph, primary)
    primary_id = summary.path_id if summary else None
    return Briefing(
        investigation=thread,
        primary_path=summary,
        turning_points=find_turning_points(graph, paths),
        alternative_paths=tuple(
            AlternativePath(
                path_id=p.id,
                hypothesis_label=p.hypothesis_label or p.id,
                status=p.status,
                confidence=p.confidence,
            )
            for p in paths
            if p.id != primary_id
        ),
        uncertainty=assess_uncertainty(
            graph, paths, primary if summary else None, thread, policy,
        ),
    )
