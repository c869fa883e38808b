"""Scoring tests — each signal, the contradiction penalty, clamping."""

import pytest

from detective.core.graph_model import Graph, PathCandidate
from detective.core.path_policy import PathPolicy
from detective.core.path_scoring import (
    is_temporally_consistent, score_path, weak_edge_ratio,
)


def _chain(make_node, make_edge, ids, strengths, **node_kwargs):
    nodes = tuple(make_node(i, **node_kwargs) for i in ids)
    edges = tuple(make_edge(a, b, s) for (a, b), s in zip(zip(ids, ids[1:]), strengths))
    return Graph(nodes=nodes, edges=edges), PathCandidate(nodes=tuple(ids), edges=edges)


# --- weak_edge_ratio ---------------------------------------------------------

def test_weak_ratio_without_edges_is_zero():
    assert weak_edge_ratio(()) == 0.0


def test_weak_ratio_counts_strictly_below_threshold(make_edge):
    edges = (make_edge("a", "b", 0.5), make_edge("b", "c", 0.49))
    assert weak_edge_ratio(edges) == 0.5


# --- temporal consistency ----------------------------------------------------

def test_non_decreasing_dates_are_consistent(make_node):
    nodes = [
        make_node("a", date="2024-01-01"),
        make_node("b", date="2024-01-01"),
        make_node("c", date="2024-01-05T10:00:00Z"),
    ]
    assert is_temporally_consistent(nodes)


def test_backwards_dates_are_inconsistent(make_node):
    nodes = [make_node("a", date="2024-02-01"), make_node("b", date="2024-01-01")]
    assert not is_temporally_consistent(nodes)


def test_undated_nodes_are_skipped(make_node):
    nodes = [
        make_node("a", date="2024-01-01"),
        make_node("org"),
        make_node("b", date="2024-01-03"),
    ]
    assert is_temporally_consistent(nodes)


def test_year_only_dates_take_part_in_ordering(make_node):
    nodes = [make_node("a", date="2024-06-01"), make_node("b", date="2023")]
    assert not is_temporally_consistent(nodes)


def test_fewer_than_two_dates_is_vacuously_consistent(make_node):
    assert is_temporally_consistent([make_node("a", date="2024-01-01"), make_node("b")])


def test_unparseable_date_is_treated_as_undated(make_node):
    nodes = [
        make_node("a", date="2024-03-01"),
        make_node("b", date="sometime in spring"),
        make_node("c", date="2024-03-02"),
    ]
    assert is_temporally_consistent(nodes)


# --- score_path --------------------------------------------------------------

def test_strong_three_node_chain_breakdown(make_node, make_edge):
    graph, candidate = _chain(
        make_node, make_edge, ["a", "b", "c"], [0.85, 0.85], confidence=70,
    )
    b = score_path(candidate, graph)
    assert b.quantity == pytest.approx(3 / 8 * 0.15)
    assert b.credibility == pytest.approx(0.175)
    assert b.source_diversity == pytest.approx(0.2)
    assert b.temporal == pytest.approx(0.2)
    assert b.convergence == pytest.approx(0.1)
    assert b.contradiction_penalty == 0.0
    assert b.score == pytest.approx(0.73125)


def test_all_weak_edges_pay_full_penalty(make_node, make_edge):
    graph, candidate = _chain(
        make_node, make_edge, ["a", "b", "c", "d"], [0.35, 0.35, 0.35], confidence=70,
    )
    b = score_path(candidate, graph)
    assert b.weak_edge_ratio == 1.0
    assert b.contradiction_penalty == pytest.approx(0.4)
    assert b.score == pytest.approx(0.35)


def test_quantity_saturates_at_eight_nodes(make_node, make_edge):
    ids = [f"n{i}" for i in range(10)]
    graph, candidate = _chain(make_node, make_edge, ids, [0.9] * 9)
    assert score_path(candidate, graph).quantity == pytest.approx(0.15)


def test_single_source_gets_partial_diversity(make_node, make_edge):
    graph, candidate = _chain(
        make_node, make_edge, ["a", "b", "c"], [0.9, 0.9], sources=("https://only.com",),
    )
    assert score_path(candidate, graph).source_diversity == pytest.approx(0.1)


def test_inconsistent_timeline_gets_reduced_bonus(make_node, make_edge):
    graph = Graph(
        nodes=(
            make_node("a", date="2024-01-03"),
            make_node("b", date="2024-01-02"),
            make_node("c", date="2024-01-01"),
        ),
        edges=(make_edge("a", "b"), make_edge("b", "c")),
    )
    candidate = PathCandidate(nodes=("a", "b", "c"), edges=graph.edges)
    assert score_path(candidate, graph).temporal == pytest.approx(0.05)


def test_candidate_without_edges_gets_no_convergence(make_node):
    graph = Graph(nodes=(make_node("a"), make_node("b"), make_node("c")))
    b = score_path(PathCandidate(nodes=("a", "b", "c")), graph)
    assert b.convergence == 0.0
    assert b.contradiction_penalty == 0.0


def test_score_is_clamped_to_ceiling(make_node, make_edge):
    graph, candidate = _chain(
        make_node, make_edge, ["a", "b", "c"], [0.9, 0.9], confidence=100,
    )
    b = score_path(candidate, graph, PathPolicy(convergence_bonus=0.5))
    assert b.raw > 0.92
    assert b.score == 0.92


def test_score_is_clamped_to_zero(make_node, make_edge):
    graph, candidate = _chain(
        make_node, make_edge, ["a", "b", "c"], [0.1, 0.1], confidence=0,
    )
    b = score_path(candidate, graph, PathPolicy(contradiction_weight=2.0))
    assert b.raw < 0
    assert b.score == 0.0
