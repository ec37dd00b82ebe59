"""End-to-end candidate search: summarize, aggregate, decorate."""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from talent_radar.oracle.summarizer import RequirementsSummarizer, RequirementsSummary

from .aggregator import CandidateAggregator
from .candidate import Candidate
from .decoration import Decorator

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str, float], None]


@dataclass
class SearchResult:
    """Ranked candidates plus the context they were found with."""

    candidates: list[Candidate]
    query: str
    summary: RequirementsSummary
    total_analyzed: int = 0
    keywords: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "developers": [c.to_dict() for c in self.candidates],
            "query": self.query,
            "summary": self.summary.to_dict(),
            "totalAnalyzed": self.total_analyzed,
        }


class CandidateSearch:
    """Run one bounded search-and-score pass for a requirements text."""

    def __init__(
        self,
        summarizer: RequirementsSummarizer,
        aggregator: CandidateAggregator,
        decorator: Optional[Decorator] = None,
    ):
        self.summarizer = summarizer
        self.aggregator = aggregator
        self.decorator = decorator or Decorator()

    async def run(
        self,
        requirements: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SearchResult:
        """
        Search for candidates matching the requirements.

        Args:
            requirements: Free-text hiring requirements
            on_progress: Optional callback(step: str, detail: str, pct: float)
                         for reporting progress to a UI. pct is 0.0-1.0.

        Returns:
            SearchResult with candidates sorted by match score descending
        """
        def _progress(step, detail="", pct=0.0):
            if on_progress:
                on_progress(step, detail, pct)

        logger.info("=" * 60)
        logger.info("Starting candidate search at %s", datetime.now().strftime("%Y-%m-%d %H:%M:%S"))
        logger.info("=" * 60)

        _progress("Analyzing", "Extracting skills from requirements...", 0.0)
        summary = await self.summarizer.summarize(requirements)
        keywords = list(summary.essential_skills)
        logger.info("Search keywords: %s", keywords)

        if not keywords:
            logger.info("No technology keywords recognized, returning empty result")

        _progress("Searching", f"Searching GitHub for {len(keywords)} keywords...", 0.1)
        candidates = await self.aggregator.aggregate(keywords, requirements)

        _progress("Ranking", f"Ranking {len(candidates)} candidates...", 0.95)
        self.decorator.decorate(candidates)
        result = SearchResult(
            candidates=candidates,
            query=requirements,
            summary=summary,
            total_analyzed=self.decorator.total_analyzed(),
            keywords=keywords,
        )

        _progress("Complete", f"Found {len(candidates)} candidates.", 1.0)
        logger.info("Search complete: %d candidates", len(candidates))
        return result
