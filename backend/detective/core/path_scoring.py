"""Path Scoring — bounded credibility score from five signals and a penalty.

Invariants:
    - score in [0, policy.max_score]; the ceiling is never 1.0 by default (0.92)
    - Weak edge: strength < policy.weak_edge_strength
    - A candidate without edges has weak_edge_ratio 0 (no penalty, no veto)
    - Undated nodes are skipped by the temporal check, never violations
    - Fewer than 2 dated nodes -> temporally consistent

Design Decisions:
    - score_path returns the full ScoreBreakdown, not a bare float, so a rank
      can be explained downstream without re-deriving it
    - Weak-edge counting lives here and is reused by the lifecycle classifier
"""

from collections.abc import Sequence

from detective.core.birth_rule import distinct_sources
from detective.core.graph_model import Edge, Graph, Node, PathCandidate, ScoreBreakdown
from detective.core.path_policy import PathPolicy, DEFAULT_POLICY


def weak_edge_ratio(edges: Sequence[Edge], policy: PathPolicy = DEFAULT_POLICY) -> float:
    """Share of edges below the weak-strength threshold; 0 without edges."""
    if not edges:
        return 0.0
    weak = sum(1 for e in edges if e.strength < policy.weak_edge_strength)
    return weak / len(edges)


def is_temporally_consistent(nodes: Sequence[Node]) -> bool:
    """Dated nodes, in path order, never go back in time."""
    stamps = [n.timestamp for n in nodes]
    dated = [t for t in stamps if t is not None]
    return all(earlier <= later for earlier, later in zip(dated, dated[1:]))


def score_path(
    candidate: PathCandidate, graph: Graph, policy: PathPolicy = DEFAULT_POLICY,
) -> ScoreBreakdown:
    """Score one admitted candidate against the graph it came from."""
    path_nodes = graph.resolve(candidate.nodes)
    edges = candidate.edges

    quantity = min(1.0, len(path_nodes) / policy.quantity_saturation) * policy.quantity_weight

    avg_confidence = sum(n.confidence for n in path_nodes) / (len(path_nodes) or 1)
    credibility = (avg_confidence / 100) * policy.credibility_weight

    source_count = len(distinct_sources(path_nodes))
    if source_count >= policy.min_sources_for_birth:
        source_diversity = policy.source_diversity_bonus
    else:
        source_diversity = source_count * policy.source_partial_bonus

    if is_temporally_consistent(path_nodes):
        temporal = policy.temporal_consistent_bonus
    else:
        temporal = policy.temporal_inconsistent_bonus

    convergence = (
        policy.convergence_bonus
        if edges and len(path_nodes) >= policy.min_nodes_for_birth
        else 0.0
    )

    ratio = weak_edge_ratio(edges, policy)
    penalty = policy.contradiction_weight * ratio

    raw = quantity + credibility + source_diversity + temporal + convergence - penalty
    return ScoreBreakdown(
        quantity=quantity,
        credibility=credibility,
        source_diversity=source_diversity,
        temporal=temporal,
        convergence=convergence,
        contradiction_penalty=penalty,
        weak_edge_ratio=ratio,
        raw=raw,
        score=min(policy.max_score, max(0.0, raw)),
    )
