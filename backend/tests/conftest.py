"""Root conftest — shared graph factories and environment isolation."""

import os

import pytest

from detective.config import get_settings
from detective.core.graph_model import Edge, Graph, Node

# Ensure tests never pick up a developer's tuned policy
for _key in [k for k in os.environ if k.upper().startswith("DETECTIVE_")]:
    del os.environ[_key]


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _node(
    node_id: str,
    label: str | None = None,
    date: str | None = None,
    confidence: int = 70,
    sources: tuple[str, ...] | None = None,
) -> Node:
    return Node(
        id=node_id,
        label=label if label is not None else node_id.replace("_", " ").title(),
        date=date,
        confidence=confidence,
        sources=sources if sources is not None else (f"https://source-{node_id}.com",),
    )


def _edge(source: str, target: str, strength: float = 0.85, confidence: int = 80) -> Edge:
    return Edge(
        source=source, target=target, relation="influences",
        strength=strength, confidence=confidence,
    )


@pytest.fixture
def make_node():
    return _node


@pytest.fixture
def make_edge():
    return _edge


@pytest.fixture
def branching_graph() -> Graph:
    """Two disjoint chains converging on price_spike."""
    return Graph(
        nodes=(
            _node("sanctions", date="2024-01-01", sources=("https://a.com",)),
            _node("supply_cut", date="2024-01-02", sources=("https://b.com",)),
            _node("price_spike", date="2024-01-03", sources=("https://c.com",)),
            _node("weather", date="2024-01-01", sources=("https://d.com",)),
            _node("storage_stress", date="2024-01-02", sources=("https://e.com",)),
        ),
        edges=(
            _edge("sanctions", "supply_cut", 0.85),
            _edge("supply_cut", "price_spike", 0.85),
            _edge("weather", "storage_stress", 0.7),
            _edge("storage_stress", "price_spike", 0.7),
        ),
    )


@pytest.fixture
def scenario_graph() -> Graph:
    """Sanctions vs weather vs speculation, all reaching price_spike."""
    return Graph(
        nodes=(
            _node("sanctions", date="2024-01-01", confidence=85, sources=("https://a.com",)),
            _node("supply_cut", date="2024-01-02", confidence=80, sources=("https://b.com",)),
            _node("price_spike", date="2024-01-03", confidence=80, sources=("https://c.com",)),
            _node("weather", date="2024-01-01", confidence=60, sources=("https://d.com",)),
            _node("storage_stress", date="2024-01-02", confidence=55, sources=("https://e.com",)),
            _node("spec", label="speculation-only", date="2024-01-02",
                  confidence=35, sources=("https://f.com",)),
        ),
        edges=(
            _edge("sanctions", "supply_cut", 0.85, 82),
            _edge("supply_cut", "price_spike", 0.85, 80),
            _edge("weather", "storage_stress", 0.6, 58),
            _edge("storage_stress", "price_spike", 0.55, 55),
            _edge("spec", "price_spike", 0.35, 35),
        ),
    )


@pytest.fixture
def scenario_payload(scenario_graph) -> dict:
    """The scenario graph as caller JSON."""
    return scenario_graph.to_dict()
