"""Briefing Schemas — pydantic models for the investigation thread in / briefing out.

Invariants:
    - BriefingSchema mirrors core.briefing.Briefing field-for-field
    - Missing thread fields default to empty values, never to None lists
"""

from typing import Literal

from pydantic import BaseModel

from detective.core.briefing import Briefing, InvestigationThread

_Status = Literal["active", "weak", "dead"]


class ThreadSchema(BaseModel):
    """Investigation metadata accompanying a graph."""
    title: str = ""
    initial_hypothesis: str = ""
    status: str = "active"
    updated_at: str | None = None
    investigative_axes: list[str] = []
    blind_spots: list[str] = []

    def to_domain(self) -> InvestigationThread:
        return InvestigationThread(
            title=self.title,
            initial_hypothesis=self.initial_hypothesis,
            status=self.status,
            updated_at=self.updated_at,
            investigative_axes=tuple(self.investigative_axes),
            blind_spots=tuple(self.blind_spots),
        )


class InvestigationSection(BaseModel):
    hypothesis: str
    title: str
    status: str
    updated_at: str | None = None
    investigative_axes: list[str] = []


class PrimaryPathSection(BaseModel):
    path_id: str
    hypothesis_label: str
    confidence: int
    status: _Status
    key_node_ids: list[str]


class TurningPointSection(BaseModel):
    node_id: str
    label: str
    date: str | None = None
    confidence: int


class AlternativePathSection(BaseModel):
    path_id: str
    hypothesis_label: str
    status: _Status
    confidence: int


class UncertaintySection(BaseModel):
    blind_spots: list[str] = []
    low_confidence_node_ids: list[str] = []
    has_contradictions: bool = False


class BriefingSchema(BaseModel):
    """Complete briefing payload."""
    investigation: InvestigationSection
    primary_path: PrimaryPathSection | None = None
    turning_points: list[TurningPointSection] = []
    alternative_paths: list[AlternativePathSection] = []
    uncertainty: UncertaintySection
    disclaimer: str

    @classmethod
    def from_domain(cls, briefing: Briefing) -> "BriefingSchema":
        thread = briefing.investigation
        primary = briefing.primary_path
        return cls(
            investigation=InvestigationSection(
                hypothesis=thread.initial_hypothesis,
                title=thread.title,
                status=thread.status,
                updated_at=thread.updated_at,
                investigative_axes=list(thread.investigative_axes),
            ),
            primary_path=PrimaryPathSection(
                path_id=primary.path_id,
                hypothesis_label=primary.hypothesis_label,
                confidence=primary.confidence,
                status=primary.status.value,
                key_node_ids=list(primary.key_node_ids),
            ) if primary else None,
            turning_points=[
                TurningPointSection(
                    node_id=t.node_id, label=t.label,
                    date=t.date, confidence=t.confidence,
                )
                for t in briefing.turning_points
            ],
            alternative_paths=[
                AlternativePathSection(
                    path_id=a.path_id, hypothesis_label=a.hypothesis_label,
                    status=a.status.value, confidence=a.confidence,
                )
                for a in briefing.alternative_paths
            ],
            uncertainty=UncertaintySection(
                blind_spots=list(briefing.uncertainty.blind_spots),
                low_confidence_node_ids=list(briefing.uncertainty.low_confidence_node_ids),
                has_contradictions=briefing.uncertainty.has_contradictions,
            ),
            disclaimer=briefing.disclaimer,
        )
