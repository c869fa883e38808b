"""Path Lifecycle — maps a score and its edges to active / weak / dead.

Invariants:
    - DEAD if score < weak_threshold OR weak_edge_ratio > contradiction_veto_ratio
    - The contradiction veto is hard: it overrides any score
    - ACTIVE if score >= active_threshold, WEAK otherwise
    - Lower bounds inclusive; purely numeric, no ordering ambiguity
    - Classification never removes a path — DEAD paths stay in the result
"""

from detective.core.domain_types import PathStatus
from detective.core.graph_model import PathCandidate
from detective.core.path_policy import PathPolicy, DEFAULT_POLICY
from detective.core.path_scoring import weak_edge_ratio


def is_strongly_contradicted(
    candidate: PathCandidate, policy: PathPolicy = DEFAULT_POLICY,
) -> bool:
    """A majority of the candidate's links are individually weak."""
    return weak_edge_ratio(candidate.edges, policy) > policy.contradiction_veto_ratio


def classify_path(
    score: float, candidate: PathCandidate, policy: PathPolicy = DEFAULT_POLICY,
) -> PathStatus:
    if score < policy.weak_threshold or is_strongly_contradicted(candidate, policy):
        return PathStatus.DEAD
    if score >= policy.active_threshold:
        return PathStatus.ACTIVE
    return PathStatus.WEAK
