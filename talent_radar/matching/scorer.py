"""Candidate match scoring."""
import logging
import math
from typing import Iterable

from talent_radar.github.models import GitHubUser, RepositorySummary
from talent_radar.github.utils import is_recent

logger = logging.getLogger(__name__)

BASE_SCORE = 60
KEYWORD_MATCH_POINTS = 5
RECENT_REPO_POINTS = 2
RECENT_REPO_CAP = 10
STARS_PER_POINT = 10
STARS_CAP = 15
FOLLOWERS_PER_POINT = 50
FOLLOWERS_CAP = 10
BIO_KEYWORD_POINTS = 3


def technology_entries(repos: Iterable[RepositorySummary]) -> list[str]:
    """Flatten repository languages and topics into lowercase entries.

    One entry per occurrence; a language used by three repositories
    appears three times.
    """
    entries: list[str] = []
    for repo in repos:
        if repo.language:
            entries.append(repo.language.lower())
        entries.extend(topic.lower() for topic in repo.topics if topic)
    return entries


def fuzzy_match(keyword: str, tech: str) -> bool:
    """Bidirectional substring containment (both inputs lowercase)."""
    return tech in keyword or keyword in tech


def calculate_match_score(
    user: GitHubUser,
    repos: list[RepositorySummary],
    keywords: list[str],
) -> int:
    """
    Score how well a developer's repositories fit the keywords.

    Returns 0 when keywords are given but none of them overlaps the
    candidate's technologies. Otherwise starts at 60 and adds points for
    technology overlap, recent activity, stars, followers and bio mentions,
    clamped to [0, 100] and rounded half up.
    """
    tech = technology_entries(repos)
    lowered = [k.lower() for k in keywords if k]

    if lowered and not any(fuzzy_match(k, t) for k in lowered for t in tech):
        return 0

    score = float(BASE_SCORE)

    for keyword in lowered:
        matches = sum(1 for t in tech if fuzzy_match(keyword, t))
        score += matches * KEYWORD_MATCH_POINTS

    recent = sum(1 for repo in repos if is_recent(repo.updated_at))
    score += min(recent * RECENT_REPO_POINTS, RECENT_REPO_CAP)

    total_stars = sum(repo.stars for repo in repos)
    score += min(total_stars / STARS_PER_POINT, STARS_CAP)

    score += min(user.followers / FOLLOWERS_PER_POINT, FOLLOWERS_CAP)

    bio = user.bio.lower()
    if bio:
        score += sum(BIO_KEYWORD_POINTS for k in lowered if k in bio)

    clamped = max(0.0, min(100.0, score))
    return int(math.floor(clamped + 0.5))


class MatchScorer:
    """Score candidates and apply the admission threshold."""

    def __init__(self, min_score: int = 70):
        """
        Initialize match scorer.

        Args:
            min_score: Minimum score for a candidate to be admitted (0-100)
        """
        self.min_score = min_score

    def score(
        self,
        repos: list[RepositorySummary],
        user: GitHubUser,
        keywords: list[str],
    ) -> int:
        return calculate_match_score(user, repos, keywords)

    def admits(self, score: int) -> bool:
        return score >= self.min_score
