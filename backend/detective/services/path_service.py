"""Path Service — validates caller JSON, runs synthesis, returns JSON-ready output.

Invariants:
    - Input is validated at this boundary; core only ever sees well-formed Graph values
    - Validation failures raise GraphValidationError / DuplicateNodeError, never ValidationError
    - One INFO log record per synthesis with counts, fallback and duration
    - Output is the JSON contract: list of {id, nodes, status, confidence, hypothesis_label?}

Design Decisions:
    - Policy resolved from settings only when the caller passes none, so
      library callers can pin a policy without touching the environment
    - No shared state between calls: safe to call concurrently on independent graphs
"""

import logging
import time

from pydantic import ValidationError

from detective.config import get_settings
from detective.core.briefing import build_briefing
from detective.core.errors import (
    DanglingEdgeError, DuplicateNodeError, ErrorContext, GraphValidationError,
)
from detective.core.graph_model import Graph, InvestigationPath
from detective.core.path_policy import PathPolicy
from detective.core.path_synthesis import synthesize
from detective.schemas.briefing import BriefingSchema, ThreadSchema
from detective.schemas.investigation_graph import GraphSchema, PathSchema

logger = logging.getLogger(__name__)


def _validation_details(exc: ValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]


def parse_graph(payload: object, investigation_id: str | None = None) -> Graph:
    """Validate a JSON graph and convert it to core types."""
    context = ErrorContext(investigation_id=investigation_id)
    try:
        schema = GraphSchema.model_validate(payload)
    except ValidationError as exc:
        raise GraphValidationError(
            "Invalid investigation graph", details=_validation_details(exc), context=context,
        ) from exc
    duplicates = schema.duplicate_node_ids()
    if duplicates:
        raise DuplicateNodeError(duplicates, context=context)
    return schema.to_domain()


def run_synthesis(
    graph: Graph, policy: PathPolicy, investigation_id: str | None = None,
) -> list[InvestigationPath]:
    """Run the engine on a parsed graph, logging the outcome."""
    started = time.perf_counter()
    try:
        result = synthesize(graph, policy)
    except DanglingEdgeError as exc:
        exc.context.investigation_id = investigation_id
        logger.warning(
            f"Rejected graph: {exc.message}",
            extra={"investigation_id": investigation_id, "error_code": exc.code},
        )
        raise
    duration_ms = round((time.perf_counter() - started) * 1000, 3)
    logger.info(
        "Synthesized investigation paths",
        extra={
            "investigation_id": investigation_id,
            "node_count": len(graph.nodes),
            "edge_count": len(graph.edges),
            "candidate_count": result.enumerated_count,
            "path_count": len(result.paths),
            "fallback": result.fallback.value if result.fallback else None,
            "skipped_edges": result.skipped_edge_count or None,
            "duration_ms": duration_ms,
        },
    )
    return result.paths


def synthesize_paths(
    payload: object,
    policy: PathPolicy | None = None,
    investigation_id: str | None = None,
    include_breakdown: bool = False,
) -> list[dict]:
    """Graph JSON in, ranked path JSON out."""
    policy = policy or get_settings().path_policy()
    graph = parse_graph(payload, investigation_id)
    paths = run_synthesis(graph, policy, investigation_id)
    return [
        PathSchema.from_domain(p, include_breakdown=include_breakdown).model_dump(
            exclude_none=True,
        )
        for p in paths
    ]


def brief_investigation(
    payload: object,
    thread: object | None = None,
    policy: PathPolicy | None = None,
    investigation_id: str | None = None,
) -> dict:
    """Briefing over a graph JSON.

    Uses the payload's stored "paths" when present and non-empty,
    otherwise synthesizes them.
    """
    policy = policy or get_settings().path_policy()
    graph = parse_graph(payload, investigation_id)
    context = ErrorContext(investigation_id=investigation_id)

    stored = payload.get("paths") if isinstance(payload, dict) else None
    try:
        thread_value = ThreadSchema.model_validate(thread or {}).to_domain()
        stored_paths = [PathSchema.model_validate(p).to_domain() for p in stored or []]
    except ValidationError as exc:
        raise GraphValidationError(
            "Invalid briefing input", details=_validation_details(exc), context=context,
        ) from exc

    paths = stored_paths or run_synthesis(graph, policy, investigation_id)
    briefing = build_briefing(graph, paths, thread_value, policy)
    return BriefingSchema.from_domain(briefing).model_dump()
