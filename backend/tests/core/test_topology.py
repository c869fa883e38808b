"""Topology tests — adjacency indexes, roots, outcomes, dangling edges.

Tests cover:
    build_adjacency: single pass, input order kept, dangling edges skipped or rejected
    find_roots / find_outcomes: no in-edges / no out-edges, cyclic widening
    build_topology: valid_edge_count excludes skipped edges
"""

import logging

import pytest

from detective.core.domain_types import DanglingEdgeMode
from detective.core.errors import DanglingEdgeError
from detective.core.graph_model import Graph
from detective.core.path_policy import PathPolicy
from detective.core.topology import (
    build_adjacency, build_topology, find_outcomes, find_roots,
)


def _chain(make_node, make_edge, *ids):
    return Graph(
        nodes=tuple(make_node(i) for i in ids),
        edges=tuple(make_edge(a, b) for a, b in zip(ids, ids[1:])),
    )


# --- build_adjacency ---------------------------------------------------------

def test_adjacency_indexes_both_directions(make_node, make_edge):
    graph = _chain(make_node, make_edge, "a", "b", "c")
    out_edges, in_edges, skipped = build_adjacency(graph)
    assert [e.target for e in out_edges["a"]] == ["b"]
    assert [e.source for e in in_edges["c"]] == ["b"]
    assert "c" not in out_edges
    assert skipped == ()


def test_adjacency_keeps_edge_input_order(make_node, make_edge):
    graph = Graph(
        nodes=(make_node("a"), make_node("b"), make_node("c")),
        edges=(make_edge("a", "c"), make_edge("a", "b")),
    )
    out_edges, _, _ = build_adjacency(graph)
    assert [e.target for e in out_edges["a"]] == ["c", "b"]


def test_dangling_edge_skipped_and_logged(make_node, make_edge, caplog):
    graph = Graph(
        nodes=(make_node("a"), make_node("b")),
        edges=(make_edge("a", "b"), make_edge("b", "ghost")),
    )
    with caplog.at_level(logging.WARNING, logger="detective.core.topology"):
        out_edges, in_edges, skipped = build_adjacency(graph)
    assert len(skipped) == 1
    assert skipped[0].target == "ghost"
    assert "b" not in out_edges
    assert "ghost" not in in_edges
    assert "ghost" in caplog.text


def test_dangling_edge_rejected_in_reject_mode(make_node, make_edge):
    graph = Graph(
        nodes=(make_node("a"),),
        edges=(make_edge("missing", "a"),),
    )
    policy = PathPolicy(dangling_edges=DanglingEdgeMode.REJECT)
    with pytest.raises(DanglingEdgeError) as excinfo:
        build_adjacency(graph, policy)
    assert excinfo.value.code == "DANGLING_EDGE"
    assert excinfo.value.missing == ["missing"]


# --- roots / outcomes --------------------------------------------------------

def test_roots_and_outcomes_of_chain(make_node, make_edge):
    graph = _chain(make_node, make_edge, "a", "b", "c")
    out_edges, in_edges, _ = build_adjacency(graph)
    assert find_roots(graph, in_edges) == ("a",)
    assert find_outcomes(graph, out_edges) == frozenset({"c"})


def test_roots_follow_node_order(branching_graph):
    _, in_edges, _ = build_adjacency(branching_graph)
    assert find_roots(branching_graph, in_edges) == ("sanctions", "weather")


def test_isolated_node_is_root_and_outcome(make_node, make_edge):
    graph = Graph(
        nodes=(make_node("a"), make_node("b"), make_node("lonely")),
        edges=(make_edge("a", "b"),),
    )
    topology = build_topology(graph)
    assert "lonely" in topology.roots
    assert "lonely" in topology.outcomes


def test_fully_cyclic_graph_widens_outcomes_to_all_nodes(make_node, make_edge):
    graph = Graph(
        nodes=(make_node("a"), make_node("b"), make_node("c")),
        edges=(make_edge("a", "b"), make_edge("b", "c"), make_edge("c", "a")),
    )
    topology = build_topology(graph)
    assert topology.roots == ()
    assert topology.outcomes == frozenset({"a", "b", "c"})


def test_topology_counts_only_valid_edges(make_node, make_edge):
    graph = Graph(
        nodes=(make_node("a"), make_node("b")),
        edges=(make_edge("a", "b"), make_edge("x", "y")),
    )
    topology = build_topology(graph)
    assert topology.valid_edge_count == 1
    assert len(topology.skipped_edges) == 1
