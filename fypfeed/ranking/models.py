"""Ranking models."""

from pydantic import BaseModel, Field

from ..models import ContentItem


class ScoreBreakdown(BaseModel):
    """Sub-scores behind a composite score."""

    relevance: float = Field(0.0, description="Content relevance score", ge=0.0, le=1.0)
    performance: float = Field(0.0, description="Engagement performance score", ge=0.0, le=1.0)
    relationship: float = Field(0.0, description="Creator relationship score", ge=0.0, le=1.0)
    freshness: float = Field(0.0, description="Freshness score", ge=0.0, le=1.0)
    diversity: float = Field(0.0, description="Anti-bubble diversity score", ge=0.0, le=1.0)


class ScoredCandidate(BaseModel):
    """A content item with its composite score. Internal to ranking."""

    item: ContentItem = Field(..., description="Scored content item")
    score: float = Field(..., description="Composite score", ge=0.0, le=1.0)
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    reason: str = Field("", description="Human-readable scoring reason")

    @property
    def creator_id(self) -> str:
        return self.item.creator_id
