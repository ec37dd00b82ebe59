"""Candidate discovery pipeline."""
from .aggregator import CandidateAggregator
from .candidate import Candidate, build_candidate
from .decoration import Decorator
from .search import CandidateSearch, SearchResult

__all__ = [
    "Candidate",
    "CandidateAggregator",
    "CandidateSearch",
    "Decorator",
    "SearchResult",
    "build_candidate",
]
