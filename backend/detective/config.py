"""Engine Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every path-synthesis constant is overridable with a DETECTIVE_PATH_* variable
    - Defaults reproduce the hand-tuned engine (PathPolicy defaults)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Settings builds a core PathPolicy instead of core reading settings:
      core stays import-free of configuration
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from detective.core.path_policy import PathPolicy


class Settings(BaseSettings):
    """Engine settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DETECTIVE_", env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    # Enumeration / birth rule
    path_min_nodes_for_birth: int = 3
    path_min_sources_for_birth: int = 2
    path_max_depth: int = 15

    # Scoring
    path_weak_edge_strength: float = 0.5
    path_quantity_saturation: int = 8
    path_quantity_weight: float = 0.15
    path_credibility_weight: float = 0.25
    path_source_diversity_bonus: float = 0.2
    path_source_partial_bonus: float = 0.1
    path_temporal_consistent_bonus: float = 0.2
    path_temporal_inconsistent_bonus: float = 0.05
    path_convergence_bonus: float = 0.1
    path_contradiction_weight: float = 0.4
    path_max_score: float = 0.92

    # Lifecycle
    path_active_threshold: float = 0.65
    path_weak_threshold: float = 0.40
    path_contradiction_veto_ratio: float = 0.5

    # Fallbacks
    path_no_edge_confidence: int = 50
    path_fallback_confidence: int = 45

    # Malformed edges: "skip" drops and logs, "reject" raises DanglingEdgeError
    path_dangling_edges: Literal["skip", "reject"] = "skip"

    def path_policy(self) -> PathPolicy:
        """Core policy built from the path_* fields."""
        prefix = "path_"
        knobs = {
            name[len(prefix):]: getattr(self, name)
            for name in type(self).model_fields
            if name.startswith(prefix)
        }
        return PathPolicy(**knobs)


@lru_cache
def get_settings() -> Settings:
    return Settings()
