"""Profile deep dive and single repository assessment."""
from .analyzer import ProfileAnalysis, ProfileAnalyzer
from .repository import RepositoryAssessment, RepositoryAssessor, parse_github_url

__all__ = [
    "ProfileAnalysis",
    "ProfileAnalyzer",
    "RepositoryAssessment",
    "RepositoryAssessor",
    "parse_github_url",
]
