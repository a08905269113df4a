"""Pipeline state and result models."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..models import ContentItem
from ..ranking import ScoredCandidate


class PipelineState(str, Enum):
    """States of one feed request."""

    EXTRACTING_PREFS = "extracting_prefs"
    SOURCING_CANDIDATES = "sourcing_candidates"
    SCORING = "scoring"
    SELECTING = "selecting"
    DONE = "done"
    FALLBACK = "fallback"


class StageReport(BaseModel):
    """Timing and stats of one pipeline stage."""

    name: str = Field(..., description="Stage name")
    success: bool = Field(False, description="Whether the stage completed")
    duration: float = Field(0.0, description="Duration in seconds")
    error: Optional[str] = Field(None, description="Error message if failed")
    stats: Dict[str, Any] = Field(default_factory=dict, description="Stage statistics")


class FeedResult(BaseModel):
    """Outcome of one feed request."""

    user_id: str = Field(..., description="Requesting user")
    limit: int = Field(..., description="Requested feed size")
    items: List[ContentItem] = Field(default_factory=list, description="Ranked feed")
    state: PipelineState = Field(..., description="Terminal state")
    error: Optional[str] = Field(None, description="Error that caused the fallback")
    stages: List[StageReport] = Field(default_factory=list, description="Per-stage reports")
    candidates: List[ScoredCandidate] = Field(
        default_factory=list, description="Scored candidate pool, for explain output"
    )
    generated_at: datetime = Field(..., description="When the feed was produced")

    @property
    def fallback_used(self) -> bool:
        return self.state == PipelineState.FALLBACK
