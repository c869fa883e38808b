"""Path Policy — every tunable constant of path synthesis in one frozen value.

Invariants:
    - Defaults reproduce the hand-tuned engine exactly
    - Thresholds live in [0, 1]; weak_threshold <= active_threshold
    - max_depth >= 0, min_nodes_for_birth >= 1, min_sources_for_birth >= 1
    - Invalid policies fail at construction, never mid-synthesis

Design Decisions:
    - Frozen dataclass in core, not pydantic-settings: core stays free of
      env/config imports; config.Settings builds one via path_policy()
    - One value passed through every stage instead of module-level literals,
      so recalibration against real investigations needs no code change
"""

from dataclasses import dataclass

from detective.core.domain_types import DanglingEdgeMode


@dataclass(frozen=True)
class PathPolicy:
    """Numeric knobs for enumeration, admission, scoring and lifecycle."""

    # === Enumeration / birth rule ===
    min_nodes_for_birth: int = 3
    min_sources_for_birth: int = 2
    max_depth: int = 15

    # === Scoring ===
    weak_edge_strength: float = 0.5
    quantity_saturation: int = 8
    quantity_weight: float = 0.15
    credibility_weight: float = 0.25
    source_diversity_bonus: float = 0.2
    source_partial_bonus: float = 0.1
    temporal_consistent_bonus: float = 0.2
    temporal_inconsistent_bonus: float = 0.05
    convergence_bonus: float = 0.1
    contradiction_weight: float = 0.4
    max_score: float = 0.92

    # === Lifecycle ===
    active_threshold: float = 0.65
    weak_threshold: float = 0.40
    contradiction_veto_ratio: float = 0.5

    # === Fallbacks ===
    no_edge_confidence: int = 50
    fallback_confidence: int = 45

    # === Malformed input ===
    dangling_edges: DanglingEdgeMode = DanglingEdgeMode.SKIP

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.min_nodes_for_birth < 1:
            raise ValueError("min_nodes_for_birth must be >= 1")
        if self.min_sources_for_birth < 1:
            raise ValueError("min_sources_for_birth must be >= 1")
        if self.quantity_saturation < 1:
            raise ValueError("quantity_saturation must be >= 1")
        for name in (
            "weak_edge_strength", "max_score", "active_threshold",
            "weak_threshold", "contradiction_veto_ratio",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.weak_threshold > self.active_threshold:
            raise ValueError(
                f"weak_threshold ({self.weak_threshold}) exceeds "
                f"active_threshold ({self.active_threshold})"
            )
        for name in ("no_edge_confidence", "fallback_confidence"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be within [0, 100], got {value}")
        # Accepts the plain string from settings; normalizes to the enum
        object.__setattr__(self, "dangling_edges", DanglingEdgeMode(self.dangling_edges))


DEFAULT_POLICY = PathPolicy()
