"""Birth Rule — admissibility of a candidate as a reportable hypothesis.

Invariants:
    - Fewer than policy.min_nodes_for_birth nodes -> rejected, whatever its score
    - Fewer than policy.min_sources_for_birth distinct attributions -> rejected
    - Attribution = a node's non-empty sources, or its label when it lists none
    - Dedupe keeps the FIRST candidate per node-id key, preserving discovery order

Design Decisions:
    - distinct_sources shared with the scorer so admission and the
      source-diversity signal can never disagree
"""

from collections.abc import Iterable

from detective.core.graph_model import Graph, Node, PathCandidate
from detective.core.path_policy import PathPolicy, DEFAULT_POLICY


def distinct_sources(nodes: Iterable[Node]) -> set[str]:
    """Union of attributions across nodes (sources, label as fallback)."""
    sources: set[str] = set()
    for node in nodes:
        sources.update(node.attribution())
    return sources


def dedupe_candidates(candidates: Iterable[PathCandidate]) -> list[PathCandidate]:
    """Drop candidates whose node sequence was already seen."""
    seen: set[str] = set()
    unique: list[PathCandidate] = []
    for candidate in candidates:
        if candidate.key in seen:
            continue
        seen.add(candidate.key)
        unique.append(candidate)
    return unique


def passes_birth_rule(
    candidate: PathCandidate, graph: Graph, policy: PathPolicy = DEFAULT_POLICY,
) -> bool:
    """True when the candidate is long enough and corroborated."""
    if len(candidate.nodes) < policy.min_nodes_for_birth:
        return False
    sources = distinct_sources(graph.resolve(candidate.nodes))
    return len(sources) >= policy.min_sources_for_birth
