"""Keyword extraction, candidate scoring and repository matching."""
from .keyword_extractor import KeywordExtractor
from .repo_matcher import RepoMatcher
from .scorer import MatchScorer, calculate_match_score
from .scorer_protocol import Scorer

__all__ = ["KeywordExtractor", "MatchScorer", "RepoMatcher", "Scorer", "calculate_match_score"]
