"""Profile deep dive: best repository, code quality, skills and projects."""
import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from talent_radar.exceptions import ProfileAnalysisError, ProfileNotFoundError
from talent_radar.github.client import GitHubClient
from talent_radar.github.models import GitHubUser, RepositorySummary
from talent_radar.matching.repo_matcher import RepoMatcher
from talent_radar.oracle.client import OracleClient
from talent_radar.oracle.schemas import CodeQualityReport

logger = logging.getLogger(__name__)

PROFILE_REPO_LIMIT = 30
README_EXCERPT_CHARS = 2000
MAX_TECHNICAL_SKILLS = 10
MAX_SPECIALIZATIONS = 5
MAX_NOTABLE_PROJECTS = 5

NO_MATCH_REPO_NAME = "No matching repository found"

# Used when the oracle could not review the best repository
REVIEWED_FALLBACK = {
    "overallScore": 80,
    "codeStructure": "Well-organized project structure with clear separation of concerns",
    "documentation": "Good documentation practices with comprehensive README",
    "testCoverage": "Adequate testing coverage with unit and integration tests",
    "bestPractices": "Follows modern development practices and coding standards",
}

# Used when no repository matched at all
UNREVIEWED_FALLBACK = {
    "overallScore": 75,
    "codeStructure": "Well-organized with clear separation of concerns",
    "documentation": "Good documentation with README and inline comments",
    "testCoverage": "Moderate test coverage with unit tests",
    "bestPractices": "Follows industry best practices and coding standards",
}

CODE_REVIEW_SYSTEM_PROMPT = (
    "You are an expert code reviewer and technical recruiter. Provide detailed, "
    "accurate assessments of code quality and technical skills."
)

CODE_REVIEW_PROMPT = """
Analyze this GitHub repository for a job position with the following requirements:
{requirements}

Repository README:
{readme}

File structure:
{files}

Provide a detailed code quality analysis in JSON format:
{{
  "overallScore": <number 0-100>,
  "codeStructure": "<assessment of code organization>",
  "documentation": "<assessment of documentation quality>",
  "testCoverage": "<assessment of testing practices>",
  "bestPractices": "<assessment of coding standards>"
}}
"""


@dataclass
class ProfileAnalysis:
    """Result of a profile deep dive."""

    developer: dict
    best_matching_repo: dict
    code_quality: dict
    skills_assessment: dict
    project_summary: dict

    def to_dict(self) -> dict:
        return {
            "developer": self.developer,
            "bestMatchingRepo": self.best_matching_repo,
            "codeQualityAnalysis": self.code_quality,
            "skillsAssessment": self.skills_assessment,
            "projectSummary": self.project_summary,
        }


def project_complexity(total_stars: int, language_entries: int) -> str:
    """Coarse complexity bucket from star totals and language breadth."""
    if total_stars > 100 or language_entries > 5:
        return "Advanced"
    if total_stars > 20 or language_entries > 3:
        return "Intermediate"
    return "Beginner"


def assess_skills(repos: list[RepositorySummary], user: GitHubUser) -> dict:
    """Skills view across all of a user's repositories."""
    languages = [repo.language for repo in repos if repo.language]
    topics = [topic for repo in repos for topic in repo.topics]
    total_stars = sum(repo.stars for repo in repos)

    return {
        "technicalSkills": list(dict.fromkeys(languages + topics))[:MAX_TECHNICAL_SKILLS],
        "projectComplexity": project_complexity(total_stars, len(languages)),
        "experienceLevel": (
            f"{user.public_repos} public repositories with {total_stars} total stars"
        ),
        "specializations": list(dict.fromkeys(languages))[:MAX_SPECIALIZATIONS],
    }


def summarize_projects(repos: list[RepositorySummary]) -> dict:
    """Project count plus the first few starred or described repositories."""
    notable = [repo for repo in repos if repo.stars > 5 or repo.description]
    return {
        "totalProjects": len(repos),
        "notableProjects": [
            {
                "name": repo.name,
                "description": repo.description or "No description available",
                "impact": f"{repo.stars} stars, {repo.forks} forks",
                "technologies": [t for t in [repo.language, *repo.topics] if t],
            }
            for repo in notable[:MAX_NOTABLE_PROJECTS]
        ],
    }


def _developer_dict(user: GitHubUser) -> dict:
    return {
        "name": user.display_name,
        "username": user.login,
        "avatar": user.avatar_url,
        "bio": user.bio,
        "location": user.location,
        "github": user.html_url,
    }


def _placeholder_repo() -> dict:
    return {
        "name": NO_MATCH_REPO_NAME,
        "description": "",
        "language": "",
        "stars": 0,
        "url": "",
        "topics": [],
    }


class ProfileAnalyzer:
    """Deep dive into one developer's GitHub profile."""

    def __init__(
        self,
        client: GitHubClient,
        matcher: RepoMatcher,
        oracle: Optional[OracleClient] = None,
    ):
        """
        Initialize profile analyzer.

        Args:
            client: GitHub client
            matcher: Picks the repository to review
            oracle: Oracle for the code review; None uses the fixed fallback
        """
        self.client = client
        self.matcher = matcher
        self.oracle = oracle

    async def analyze(self, username: str, requirements: str) -> ProfileAnalysis:
        """
        Analyze a developer profile against hiring requirements.

        Raises:
            ProfileNotFoundError: The user does not exist or could not be fetched
            ProfileAnalysisError: The user's repositories could not be listed
        """
        logger.info("Analyzing profile %s", username)

        user = await self.client.get_user(username)
        if user is None:
            raise ProfileNotFoundError(username)

        listed = await self.client.list_user_repos(user.login)
        if listed is None:
            raise ProfileAnalysisError("Repositories not found")
        repos = sorted(listed, key=lambda r: r.stars, reverse=True)[:PROFILE_REPO_LIMIT]

        best = self.matcher.pick_best(repos, requirements)
        if best is not None:
            code_quality = await self.review_repository(user.login, best, requirements)
        else:
            logger.info("No matching repository for %s", username)
            code_quality = dict(UNREVIEWED_FALLBACK)

        return ProfileAnalysis(
            developer=_developer_dict(user),
            best_matching_repo=best.to_dict() if best else _placeholder_repo(),
            code_quality=code_quality,
            skills_assessment=assess_skills(repos, user),
            project_summary=summarize_projects(repos),
        )

    async def review_repository(
        self,
        owner: str,
        repo: RepositorySummary,
        requirements: str,
    ) -> dict:
        """Code-quality report for one repository, falling back to fixed text."""
        if self.oracle is None:
            logger.info("Oracle not configured, using fallback code review")
            return dict(REVIEWED_FALLBACK)

        try:
            contents = await self.client.list_contents(owner, repo.name)
            readme = await self.client.get_readme(owner, repo.name)
            prompt = CODE_REVIEW_PROMPT.format(
                requirements=requirements,
                readme=readme[:README_EXCERPT_CHARS],
                files=", ".join(item.get("name", "") for item in contents),
            )
            obj = await self.oracle.complete_json(CODE_REVIEW_SYSTEM_PROMPT, prompt)
        except Exception as e:
            logger.warning("Code review of %s/%s failed: %s", owner, repo.name, e)
            obj = None

        if obj is not None:
            try:
                return CodeQualityReport.model_validate(obj).to_dict()
            except ValidationError as e:
                logger.warning("Code review failed validation: %d errors", e.error_count())

        logger.warning("Using fallback code review for %s/%s", owner, repo.name)
        return dict(REVIEWED_FALLBACK)
