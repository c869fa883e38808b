"""Path Synthesis — turns an investigation graph into ranked, classified hypotheses.

Invariants:
    - Pure and deterministic: identical Graph + PathPolicy -> identical paths, same order
    - Empty graph -> []; any non-empty graph -> at least one path (fallbacks B/C)
    - Result sorted by confidence descending; ties keep discovery order (stable)
    - Ids assigned after sorting: path-{rank}, rank 0 = highest confidence
    - DEAD paths are returned alongside ACTIVE/WEAK ones, never filtered
    - The input graph is never mutated

Design Decisions:
    - synthesize() returns SynthesisResult with diagnostics (fallback used,
      candidate counts) so the shell can log without re-running stages;
      build_paths() is the plain contract returning only the paths
    - Chronological fallback ordering compares only pairs that are both
      dated; any pair with an undated member compares equal
"""

import math
from dataclasses import dataclass, field
from functools import cmp_to_key

from detective.core.birth_rule import dedupe_candidates, passes_birth_rule
from detective.core.domain_types import (
    FallbackKind, NodeId, PathId, PathStatus,
    NO_EDGES_PATH_ID, FALLBACK_PATH_ID,
)
from detective.core.graph_model import (
    Graph, InvestigationPath, Node, PathCandidate, ScoreBreakdown,
)
from detective.core.path_enumeration import enumerate_paths
from detective.core.path_lifecycle import classify_path
from detective.core.path_policy import PathPolicy, DEFAULT_POLICY
from detective.core.path_scoring import score_path
from detective.core.topology import build_topology


@dataclass(frozen=True)
class SynthesisResult:
    """Paths plus the counts behind them."""
    paths: list[InvestigationPath] = field(default_factory=list)
    fallback: FallbackKind | None = None
    enumerated_count: int = 0
    unique_count: int = 0
    admitted_count: int = 0
    skipped_edge_count: int = 0


def to_confidence(score: float) -> int:
    """Score in [0, 1] -> integer percentage, halves rounded up."""
    return int(math.floor(score * 100 + 0.5))


def _compare_chronologically(a: Node, b: Node) -> int:
    ta, tb = a.timestamp, b.timestamp
    if ta is None or tb is None:
        return 0
    if ta < tb:
        return -1
    if ta > tb:
        return 1
    return 0


def chronological_node_ids(graph: Graph) -> tuple[NodeId, ...]:
    """All node ids, dated nodes ordered by timestamp, stable otherwise.

    Undated nodes compare equal to everything, so a dated node separated from
    another by an undated one may keep its input order: (d3, u, d1) stays as is.
    """
    ordered = sorted(graph.nodes, key=cmp_to_key(_compare_chronologically))
    return tuple(n.id for n in ordered)


def _no_edges_path(graph: Graph, policy: PathPolicy) -> InvestigationPath:
    enough = len(graph.nodes) >= policy.min_nodes_for_birth
    return InvestigationPath(
        id=NO_EDGES_PATH_ID,
        nodes=chronological_node_ids(graph),
        status=PathStatus.ACTIVE if enough else PathStatus.WEAK,
        confidence=policy.no_edge_confidence,
    )


def _fallback_path(graph: Graph, policy: PathPolicy) -> InvestigationPath:
    enough = len(graph.nodes) >= policy.min_nodes_for_birth
    return InvestigationPath(
        id=FALLBACK_PATH_ID,
        nodes=chronological_node_ids(graph),
        status=PathStatus.WEAK if enough else PathStatus.DEAD,
        confidence=policy.fallback_confidence,
    )


def synthesize(graph: Graph, policy: PathPolicy = DEFAULT_POLICY) -> SynthesisResult:
    """Run topology -> enumeration -> dedupe -> birth rule -> score -> classify -> rank."""
    if not graph.nodes:
        return SynthesisResult(paths=[], fallback=FallbackKind.EMPTY)

    topology = build_topology(graph, policy)
    skipped = len(topology.skipped_edges)
    if topology.valid_edge_count == 0:
        return SynthesisResult(
            paths=[_no_edges_path(graph, policy)],
            fallback=FallbackKind.NO_EDGES,
            skipped_edge_count=skipped,
        )

    enumerated: list[PathCandidate] = []
    for root_id in topology.roots:
        enumerated.extend(
            enumerate_paths(root_id, topology.out_edges, topology.outcomes, policy),
        )
    unique = dedupe_candidates(enumerated)
    admitted = [c for c in unique if passes_birth_rule(c, graph, policy)]

    if not admitted:
        return SynthesisResult(
            paths=[_fallback_path(graph, policy)],
            fallback=FallbackKind.NO_ADMISSIBLE,
            enumerated_count=len(enumerated),
            unique_count=len(unique),
            skipped_edge_count=skipped,
        )

    scored: list[tuple[PathCandidate, ScoreBreakdown, int]] = []
    for candidate in admitted:
        breakdown = score_path(candidate, graph, policy)
        scored.append((candidate, breakdown, to_confidence(breakdown.score)))
    scored.sort(key=lambda item: item[2], reverse=True)

    paths = [
        InvestigationPath(
            id=PathId(f"path-{rank}"),
            nodes=candidate.nodes,
            status=classify_path(breakdown.score, candidate, policy),
            confidence=confidence,
            edges=candidate.edges,
            breakdown=breakdown,
        )
        for rank, (candidate, breakdown, confidence) in enumerate(scored)
    ]
    return SynthesisResult(
        paths=paths,
        enumerated_count=len(enumerated),
        unique_count=len(unique),
        admitted_count=len(admitted),
        skipped_edge_count=skipped,
    )


def build_paths(graph: Graph, policy: PathPolicy = DEFAULT_POLICY) -> list[InvestigationPath]:
    """Ranked, classified hypotheses for one graph. Never raises on well-formed input."""
    return synthesize(graph, policy).paths
