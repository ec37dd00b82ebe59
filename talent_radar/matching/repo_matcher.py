"""Best-matching repository selection for the profile deep dive."""
import logging
from typing import Optional

from talent_radar.github.models import RepositorySummary
from talent_radar.github.utils import is_recent

from .keyword_extractor import KeywordExtractor

logger = logging.getLogger(__name__)


class RepoMatcher:
    """Pick the repository that best represents a candidate for a role."""

    KEYWORD_HIT_POINTS = 10
    STARS_CAP = 20
    RECENT_POINTS = 10
    LANGUAGE_POINTS = 15

    def __init__(self, extractor: KeywordExtractor):
        self.extractor = extractor

    def score_repo(
        self,
        repo: RepositorySummary,
        keywords: list[str],
        lowered_requirements: str,
    ) -> float:
        """Heuristic relevance of one repository."""
        text = f"{repo.name} {repo.description} {' '.join(repo.topics)}".lower()

        score = float(sum(self.KEYWORD_HIT_POINTS for k in keywords if k.lower() in text))
        score += min(repo.stars / 10, self.STARS_CAP)
        if is_recent(repo.updated_at):
            score += self.RECENT_POINTS
        if repo.language and repo.language.lower() in lowered_requirements:
            score += self.LANGUAGE_POINTS
        return score

    def pick_best(
        self,
        repos: list[RepositorySummary],
        requirements: str,
    ) -> Optional[RepositorySummary]:
        """
        Return the highest-scoring repository.

        Ties keep the first repository seen. Returns None for an empty list
        or when no repository scores above zero.
        """
        keywords = self.extractor.extract(requirements)
        lowered = (requirements or "").lower()

        best: Optional[RepositorySummary] = None
        best_score = 0.0
        for repo in repos:
            score = self.score_repo(repo, keywords, lowered)
            if score > best_score:
                best, best_score = repo, score

        if best is not None:
            logger.debug("Best matching repository: %s (%.1f)", best.name, best_score)
        return best
