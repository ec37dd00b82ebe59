"""Candidate discovery: search, dedupe, enrich and score repository owners."""
import logging
from typing import Optional

from talent_radar.github.client import GitHubClient
from talent_radar.github.models import RepositorySummary
from talent_radar.github.throttle import Throttle
from talent_radar.matching.scorer_protocol import Scorer

from .candidate import Candidate, build_candidate

logger = logging.getLogger(__name__)


class CandidateAggregator:
    """Turn keyword searches into a deduplicated, scored candidate list."""

    def __init__(
        self,
        client: GitHubClient,
        scorer: Scorer,
        *,
        max_candidates: int = 100,
        repo_limit: int = 10,
        throttle: Optional[Throttle] = None,
    ):
        """
        Initialize candidate aggregator.

        Args:
            client: GitHub client (or any object with the same methods)
            scorer: Scoring engine with score() and admits()
            max_candidates: Global cap on admitted candidates
            repo_limit: Repositories (by stars) used per candidate
            throttle: Spacing policy for per-candidate enrichment calls
        """
        self.client = client
        self.scorer = scorer
        self.max_candidates = max_candidates
        self.repo_limit = repo_limit
        self.throttle = throttle or Throttle(0)

    async def aggregate(self, keywords: list[str], requirements: str = "") -> list[Candidate]:
        """
        Search each keyword and collect admitted candidates.

        Keywords and their result pages are processed sequentially. Owners
        already examined, organization accounts, failed fetches and
        low-scoring candidates are skipped. The whole pass stops once the
        cap is reached.

        Args:
            keywords: Search keywords, in priority order
            requirements: Original requirements text (for logging)

        Returns:
            Candidates sorted by match score descending (discovery order
            on ties), at most max_candidates
        """
        candidates: list[Candidate] = []
        examined: set[str] = set()

        logger.info(
            "Aggregating candidates for %d keywords (%d chars of requirements)",
            len(keywords), len(requirements or ""),
        )

        for keyword in keywords:
            if len(candidates) >= self.max_candidates:
                break

            try:
                repos = await self.client.search_repositories(keyword)
            except Exception as e:
                logger.error("Repository search error for keyword '%s': %s", keyword, e)
                continue
            logger.info("Keyword '%s': %d repositories", keyword, len(repos))

            for repo in repos:
                if len(candidates) >= self.max_candidates:
                    break
                try:
                    candidate = await self._examine_owner(repo, keywords, examined)
                except Exception as e:
                    logger.warning("Error examining owner of %s: %s", repo.full_name or repo.name, e)
                    continue
                if candidate is not None:
                    candidates.append(candidate)

        if len(candidates) >= self.max_candidates:
            logger.info("Candidate cap of %d reached", self.max_candidates)

        candidates.sort(key=lambda c: c.match_score, reverse=True)
        logger.info("Admitted %d candidates from %d examined owners", len(candidates), len(examined))
        return candidates[: self.max_candidates]

    async def _examine_owner(
        self,
        repo: RepositorySummary,
        keywords: list[str],
        examined: set[str],
    ) -> Optional[Candidate]:
        """Fetch, score and build the owner of one search hit, or None to skip.

        Owners are only marked as examined once a decision about them has
        been made. A failed profile or repository fetch leaves the owner
        eligible for a later search hit.
        """
        login = repo.owner_login
        if not login or login in examined:
            return None

        if repo.owned_by_organization:
            logger.debug("Skipping organization %s", login)
            examined.add(login)
            return None

        await self.throttle.wait()

        user = await self.client.get_user(login)
        if user is None:
            logger.debug("Profile fetch failed for %s", login)
            return None
        if user.is_organization:
            logger.debug("Skipping non-person account %s (%s)", login, user.type)
            examined.add(login)
            return None

        repos = await self.client.list_user_repos(user.login)
        if repos is None:
            logger.debug("Repository listing failed for %s", login)
            return None
        examined.add(login)
        top_repos = sorted(repos, key=lambda r: r.stars, reverse=True)[: self.repo_limit]

        score = self.scorer.score(top_repos, user, keywords)
        if not self.scorer.admits(score):
            logger.debug("Rejected %s with score %d", login, score)
            return None

        logger.debug("Admitted %s with score %d", login, score)
        return build_candidate(user, top_repos, score)
