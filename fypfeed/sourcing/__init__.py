"""Candidate sourcing."""

from .sourcer import SOURCE_ORDER, CandidateSourcer, dedupe_by_id

__all__ = ["CandidateSourcer", "SOURCE_ORDER", "dedupe_by_id"]
