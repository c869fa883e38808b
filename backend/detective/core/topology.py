"""Adjacency & Topology — out/in edge indexes, roots and outcomes of a graph.

Invariants:
    - Single pass over edges; edge order within each index follows input order
    - Roots = nodes with no incoming edge; Outcomes = nodes with no outgoing edge
    - Empty outcome set (fully cyclic graph) widens to every node id
    - Dangling edges (unknown from/to) are skipped and logged, or rejected
      with DanglingEdgeError, per PathPolicy.dangling_edges — never half-indexed

Design Decisions:
    - Frozen Topology value returned instead of a tuple: the assembler needs
      valid_edge_count for the no-edges fallback, not just the maps
    - Node order (not edge order) drives roots/outcomes, so root iteration
      order is the caller's node order and therefore deterministic
"""

import logging
from dataclasses import dataclass, field

from detective.core.domain_types import NodeId, DanglingEdgeMode
from detective.core.errors import DanglingEdgeError
from detective.core.graph_model import Edge, Graph
from detective.core.path_policy import PathPolicy, DEFAULT_POLICY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Topology:
    """Derived structure of one graph."""
    out_edges: dict[NodeId, list[Edge]] = field(default_factory=dict)
    in_edges: dict[NodeId, list[Edge]] = field(default_factory=dict)
    roots: tuple[NodeId, ...] = ()
    outcomes: frozenset[NodeId] = frozenset()
    valid_edge_count: int = 0
    skipped_edges: tuple[Edge, ...] = ()


def build_adjacency(
    graph: Graph, policy: PathPolicy = DEFAULT_POLICY,
) -> tuple[dict[NodeId, list[Edge]], dict[NodeId, list[Edge]], tuple[Edge, ...]]:
    """Index edges by source and by target. Returns (out, in, skipped)."""
    known = {n.id for n in graph.nodes}
    out_edges: dict[NodeId, list[Edge]] = {}
    in_edges: dict[NodeId, list[Edge]] = {}
    skipped: list[Edge] = []

    for edge in graph.edges:
        missing = [i for i in (edge.source, edge.target) if i not in known]
        if missing:
            if policy.dangling_edges == DanglingEdgeMode.REJECT:
                raise DanglingEdgeError(edge.source, edge.target, missing)
            logger.warning(
                f"Skipping edge {edge.source} -> {edge.target}: "
                f"unknown node(s) {missing}",
            )
            skipped.append(edge)
            continue
        out_edges.setdefault(edge.source, []).append(edge)
        in_edges.setdefault(edge.target, []).append(edge)

    return out_edges, in_edges, tuple(skipped)


def find_roots(graph: Graph, in_edges: dict[NodeId, list[Edge]]) -> tuple[NodeId, ...]:
    """Nodes absent from in_edges or mapping to an empty list."""
    return tuple(n.id for n in graph.nodes if not in_edges.get(n.id))


def find_outcomes(graph: Graph, out_edges: dict[NodeId, list[Edge]]) -> frozenset[NodeId]:
    """Nodes without outgoing edges; every node when none qualifies."""
    outcomes = frozenset(n.id for n in graph.nodes if not out_edges.get(n.id))
    if outcomes:
        return outcomes
    return frozenset(n.id for n in graph.nodes)


def build_topology(graph: Graph, policy: PathPolicy = DEFAULT_POLICY) -> Topology:
    """Adjacency maps plus roots and effective outcomes in one value."""
    out_edges, in_edges, skipped = build_adjacency(graph, policy)
    return Topology(
        out_edges=out_edges,
        in_edges=in_edges,
        roots=find_roots(graph, in_edges),
        outcomes=find_outcomes(graph, out_edges),
        valid_edge_count=len(graph.edges) - len(skipped),
        skipped_edges=skipped,
    )
