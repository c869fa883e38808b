"""PathPolicy tests — defaults and construction-time validation."""

import pytest

from detective.core.domain_types import DanglingEdgeMode
from detective.core.path_policy import DEFAULT_POLICY, PathPolicy


def test_defaults_match_tuned_engine():
    assert DEFAULT_POLICY.min_nodes_for_birth == 3
    assert DEFAULT_POLICY.min_sources_for_birth == 2
    assert DEFAULT_POLICY.max_depth == 15
    assert DEFAULT_POLICY.max_score == 0.92
    assert DEFAULT_POLICY.active_threshold == 0.65
    assert DEFAULT_POLICY.weak_threshold == 0.40
    assert DEFAULT_POLICY.dangling_edges == DanglingEdgeMode.SKIP


def test_string_dangling_mode_is_normalized():
    assert PathPolicy(dangling_edges="reject").dangling_edges == DanglingEdgeMode.REJECT


def test_negative_depth_rejected():
    with pytest.raises(ValueError, match="max_depth"):
        PathPolicy(max_depth=-1)


def test_threshold_outside_unit_interval_rejected():
    with pytest.raises(ValueError, match="active_threshold"):
        PathPolicy(active_threshold=1.5)


def test_inverted_thresholds_rejected():
    with pytest.raises(ValueError, match="weak_threshold"):
        PathPolicy(active_threshold=0.3, weak_threshold=0.5)


def test_unknown_dangling_mode_rejected():
    with pytest.raises(ValueError):
        PathPolicy(dangling_edges="ignore")


def test_fallback_confidence_bounds():
    with pytest.raises(ValueError, match="fallback_confidence"):
        PathPolicy(fallback_confidence=101)
