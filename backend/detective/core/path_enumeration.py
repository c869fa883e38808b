"""Path Enumeration — bounded depth-first walks from a root to outcomes or dead ends.

Invariants:
    - Walks are simple: a node appears at most once per candidate (cycles are harmless)
    - Nothing shorter than policy.min_nodes_for_birth is ever emitted
    - A prefix whose successors are all already visited is emitted exactly once
    - Depth beyond policy.max_depth is never explored (root is depth 0)
    - Emission order is DFS pre-order over out-edges in input order (deterministic)

Design Decisions:
    - Termination is a 3-way enum decided once per visit, not nested booleans
    - Explicit frame stack instead of recursion: walk length is bounded by
      max_depth only, never by the interpreter recursion limit
    - Mutable stack with push/pop on backtrack; candidates snapshot it as tuples
"""

from collections.abc import Iterator

from detective.core.domain_types import NodeId, Termination
from detective.core.graph_model import Edge, PathCandidate
from detective.core.path_policy import PathPolicy, DEFAULT_POLICY


def decide_termination(
    node_count: int,
    is_outcome: bool,
    has_unvisited_successor: bool,
    min_nodes: int,
) -> Termination:
    """Decide what the walk does at the node it just reached."""
    if node_count < min_nodes:
        return Termination.CONTINUE
    if not has_unvisited_successor:
        return Termination.EMIT_AND_STOP
    if is_outcome:
        return Termination.EMIT_AND_CONTINUE
    return Termination.CONTINUE


def enumerate_paths(
    root_id: NodeId,
    out_edges: dict[NodeId, list[Edge]],
    outcome_ids: frozenset[NodeId] | set[NodeId],
    policy: PathPolicy = DEFAULT_POLICY,
    max_depth: int | None = None,
) -> list[PathCandidate]:
    """All candidate walks starting at root_id.

    max_depth overrides policy.max_depth when given.
    """
    depth_limit = policy.max_depth if max_depth is None else max_depth
    results: list[PathCandidate] = []
    node_stack: list[NodeId] = [root_id]
    edge_stack: list[Edge] = []
    on_path: set[NodeId] = {root_id}
    # One frame per node on the walk: its remaining successors
    frames: list[Iterator[Edge]] = []

    def arrive(current: NodeId, depth: int) -> Iterator[Edge] | None:
        """Emit if due; return the successors still to explore, or None."""
        if depth > depth_limit:
            return None
        successors = [e for e in out_edges.get(current, []) if e.target not in on_path]
        decision = decide_termination(
            len(node_stack),
            current in outcome_ids,
            bool(successors),
            policy.min_nodes_for_birth,
        )
        if decision in (Termination.EMIT_AND_STOP, Termination.EMIT_AND_CONTINUE):
            results.append(PathCandidate(nodes=tuple(node_stack), edges=tuple(edge_stack)))
        if decision == Termination.EMIT_AND_STOP:
            return None
        return iter(successors)

    def retreat() -> None:
        on_path.discard(node_stack.pop())
        edge_stack.pop()

    root_frame = arrive(root_id, 0)
    if root_frame is not None:
        frames.append(root_frame)

    while frames:
        edge = next(frames[-1], None)
        if edge is None:
            frames.pop()
            if frames:
                retreat()
            continue
        node_stack.append(edge.target)
        edge_stack.append(edge)
        on_path.add(edge.target)
        frame = arrive(edge.target, len(edge_stack))
        if frame is None:
            retreat()
        else:
            frames.append(frame)

    return results
