"""Requirements summarization with an oracle and a keyword fallback."""
import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

from pydantic import ValidationError

from talent_radar.matching.keyword_extractor import KeywordExtractor

from .client import OracleClient
from .schemas import RequirementsAnalysis

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert technical recruiter assistant. Your task is to extract key "
    "information from job requirements and respond with a clean JSON object."
)

PROMPT_TEMPLATE = """
You are an expert technical recruiter. Analyze the following job requirements and extract the key information in a structured JSON format.

Job Requirements:
"{requirements}"

Extract the following information:
- essentialSkills: An array of the most important technical skills, languages, and frameworks.
- techStack: A broader array of all mentioned technologies.
- expertise: An array of expertise areas (e.g., "Frontend", "Backend", "DevOps", "AI/ML").
- role: The job role (e.g., "Senior Software Engineer", "Data Scientist").

Respond with only the JSON object.
"""


@dataclass
class RequirementsSummary:
    """Structured view of hiring requirements."""

    essential_skills: list[str] = field(default_factory=list)
    tech_stack: list[str] = field(default_factory=list)
    expertise: list[str] = field(default_factory=list)
    role: str = "Developer"

    def to_dict(self) -> dict:
        return {
            "essentialSkills": list(self.essential_skills),
            "techStack": list(self.tech_stack),
            "expertise": list(self.expertise),
            "role": self.role,
        }


@runtime_checkable
class SummaryProvider(Protocol):
    """Anything that can structure requirements text, or give up with None."""

    async def summarize(self, text: str) -> Optional[RequirementsSummary]:
        ...


class KeywordSummaryProvider:
    """Deterministic summary built from vocabulary keywords."""

    def __init__(self, extractor: KeywordExtractor):
        self.extractor = extractor

    async def summarize(self, text: str) -> RequirementsSummary:
        return self.build(text)

    def build(self, text: str) -> RequirementsSummary:
        keywords = self.extractor.extract(text)
        return RequirementsSummary(
            essential_skills=list(keywords),
            tech_stack=list(keywords),
            expertise=[],
            role="Developer",
        )


class OracleSummaryProvider:
    """Ask the oracle to structure the requirements."""

    def __init__(self, oracle: OracleClient, temperature: float = 0.1):
        self.oracle = oracle
        self.temperature = temperature

    async def summarize(self, text: str) -> Optional[RequirementsSummary]:
        """Return the oracle's summary, or None when the reply is unusable."""
        obj = await self.oracle.complete_json(
            SYSTEM_PROMPT,
            PROMPT_TEMPLATE.format(requirements=text),
            temperature=self.temperature,
        )
        if obj is None:
            return None

        try:
            analysis = RequirementsAnalysis.model_validate(obj)
        except ValidationError as e:
            logger.warning("Oracle summary failed validation: %s", e.error_count())
            return None

        return RequirementsSummary(
            essential_skills=analysis.essential_skills,
            tech_stack=analysis.tech_stack,
            expertise=analysis.expertise,
            role=analysis.role,
        )


class RequirementsSummarizer:
    """Structure requirements via the oracle, falling back to keywords."""

    def __init__(
        self,
        extractor: KeywordExtractor,
        oracle: Optional[SummaryProvider] = None,
    ):
        """
        Initialize summarizer.

        Args:
            extractor: Keyword extractor backing the fallback
            oracle: Oracle-backed provider; None skips straight to the fallback
        """
        self.fallback = KeywordSummaryProvider(extractor)
        self.oracle = oracle

    async def summarize(self, text: str) -> RequirementsSummary:
        """Summarize requirements. Never raises for oracle failures."""
        if self.oracle is not None:
            try:
                summary = await self.oracle.summarize(text)
            except Exception as e:
                logger.warning("Oracle summarization error: %s", e)
                summary = None
            if summary is not None:
                logger.info("Oracle summary: %d essential skills", len(summary.essential_skills))
                return summary
            logger.warning(
                "Could not parse requirements analysis from oracle, "
                "falling back to keyword extraction"
            )
        else:
            logger.info("Oracle not configured, using keyword extraction")

        return self.fallback.build(text)
