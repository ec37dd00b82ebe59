"""Scorer protocol for pluggable candidate scoring engines.

MatchScorer is the heuristic implementation; any object with the same
two methods can be handed to CandidateAggregator instead.
"""
from typing import Protocol, runtime_checkable

from talent_radar.github.models import GitHubUser, RepositorySummary


@runtime_checkable
class Scorer(Protocol):
    """Protocol for candidate scoring engines."""

    def score(
        self,
        repos: list[RepositorySummary],
        user: GitHubUser,
        keywords: list[str],
    ) -> int:
        """Score a candidate 0-100 from their repositories and profile."""
        ...

    def admits(self, score: int) -> bool:
        """Whether a score clears the admission threshold."""
        ...
