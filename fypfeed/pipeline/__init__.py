"""Feed pipeline orchestration."""

from .models import FeedResult, PipelineState, StageReport
from .orchestrator import FeedPipeline, StageTracker

__all__ = ["FeedPipeline", "FeedResult", "PipelineState", "StageReport", "StageTracker"]
