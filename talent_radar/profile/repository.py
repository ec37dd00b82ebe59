"""Single repository assessment against job requirements."""
import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from pydantic import ValidationError

from talent_radar.exceptions import InvalidRepositoryUrl, RepositoryFetchError
from talent_radar.github.client import GitHubClient
from talent_radar.oracle.client import OracleClient
from talent_radar.oracle.schemas import RepositoryAssessmentReport

logger = logging.getLogger(__name__)

GITHUB_URL_PATTERN = re.compile(r"github\.com/([^/]+)/([^/]+)")

# Manifest files probed for, with the ecosystem each implies
KEY_FILES = {
    "package.json": "JavaScript/Node.js",
    "requirements.txt": "Python",
    "Cargo.toml": "Rust",
    "go.mod": "Go",
    "pom.xml": "Java",
    "Gemfile": "Ruby",
}

POPULAR_LANGUAGES = {"JavaScript", "TypeScript", "Python", "Java", "Go", "Rust"}

COMMIT_LIMIT = 5
README_PREVIEW_CHARS = 1000

ASSESSMENT_SYSTEM_PROMPT = (
    "You are an expert technical recruiter and software engineer. Provide detailed, "
    "accurate assessments of candidates based on their GitHub repositories. Always "
    "respond with valid JSON in the exact format requested."
)

ASSESSMENT_PROMPT = """
You are an expert technical recruiter and software engineer. Analyze the following GitHub repository against the job requirements and provide a detailed assessment.

REPOSITORY DATA:
- Name: {name}
- Description: {description}
- Primary Language: {language}
- Languages Used: {languages}
- Topics/Tags: {topics}
- Stars: {stars}
- Forks: {forks}
- README Preview: {readme}...
- Recent Commits: {commits}
- Key Files: {files}

JOB REQUIREMENTS:
{requirements}

Please provide a comprehensive analysis in the following JSON format:
{{
  "matchScore": <number between 0-100>,
  "strengths": [<array of candidate's strengths based on the repo>],
  "gaps": [<array of skills/requirements not evident in the repo>],
  "recommendations": [<array of suggestions for improvement>],
  "summary": "<brief overall assessment>",
  "technicalSkills": [<array of technical skills demonstrated>],
  "projectComplexity": "<Beginner|Intermediate|Advanced>"
}}

If the repository does not demonstrate experience with the core technologies mentioned in the JOB REQUIREMENTS, the matchScore must be below 20 and the gaps and summary must say so.
"""


def parse_github_url(url: str) -> tuple[str, str]:
    """
    Extract (owner, repo) from a GitHub repository URL.

    Raises:
        InvalidRepositoryUrl: The URL has no github.com/<owner>/<repo> part
    """
    match = GITHUB_URL_PATTERN.search(url or "")
    if not match:
        raise InvalidRepositoryUrl(url)
    owner, repo = match.group(1), match.group(2)
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    return owner, repo


@dataclass
class RepositoryData:
    """Everything fetched about one repository."""

    name: str
    description: str = ""
    language: str = ""
    languages: dict[str, int] = field(default_factory=dict)
    topics: list[str] = field(default_factory=list)
    stars: int = 0
    forks: int = 0
    readme: str = ""
    files: list[str] = field(default_factory=list)
    commits: list[dict] = field(default_factory=list)

    def overview(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "language": self.language,
            "stars": self.stars,
            "forks": self.forks,
        }


@dataclass
class RepositoryAssessment:
    repository: RepositoryData
    report: dict
    from_oracle: bool = False


def fallback_assessment(data: RepositoryData) -> dict:
    """Deterministic assessment from languages, stars and manifest files."""
    languages = list(data.languages)
    has_popular = any(lang in POPULAR_LANGUAGES for lang in languages)

    score = 60
    score += 15 if has_popular else 5
    score += 10 if data.stars > 10 else 5
    score += 10 if data.files else 0
    score = min(100, score)

    if score >= 75:
        strength = "strong"
    elif score >= 60:
        strength = "good"
    else:
        strength = "basic"
    plural = "" if len(languages) == 1 else "s"
    described = (
        "Project has clear purpose and documentation."
        if data.description
        else "Could benefit from more detailed project description."
    )

    if len(languages) >= 3:
        complexity = "Advanced"
    elif len(languages) >= 2:
        complexity = "Intermediate"
    else:
        complexity = "Beginner"

    return {
        "matchScore": score,
        "strengths": [
            "Active GitHub presence with documented projects",
            f"Experience with {', '.join(languages)}",
            "Community engagement (starred repository)"
            if data.stars > 0
            else "Consistent development activity",
            "Good documentation practices" if data.readme else "Project organization skills",
        ],
        "gaps": [
            "Detailed analysis requires manual review",
            "Consider adding more comprehensive documentation",
            "Portfolio could benefit from more diverse projects",
        ],
        "recommendations": [
            "Add detailed README files to showcase project scope",
            "Include live demos or deployment links",
            "Consider contributing to open source projects",
            "Document your development process and decisions",
        ],
        "summary": (
            f"Repository shows {strength} technical foundation with {len(languages)} "
            f"programming language{plural} demonstrated. {described}"
        ),
        "technicalSkills": languages,
        "projectComplexity": complexity,
    }


class RepositoryAssessor:
    """Assess a single repository for a role."""

    def __init__(self, client: GitHubClient, oracle: Optional[OracleClient] = None):
        self.client = client
        self.oracle = oracle

    async def fetch(self, owner: str, repo: str) -> RepositoryData:
        """
        Collect metadata, languages, README, recent commits and key files.

        Raises:
            RepositoryFetchError: Repository metadata could not be fetched
        """
        meta = await self.client.get_repository(owner, repo)
        if meta is None:
            raise RepositoryFetchError(f"{owner}/{repo}")

        languages = await self.client.get_languages(owner, repo)
        readme = await self.client.get_readme(owner, repo)
        commits = await self.client.list_commits(owner, repo)

        files = []
        for name in KEY_FILES:
            if await self.client.get_file_text(owner, repo, name) is not None:
                files.append(name)

        return RepositoryData(
            name=meta.get("name", repo),
            description=meta.get("description") or "",
            language=meta.get("language") or "",
            languages=languages,
            topics=meta.get("topics") or [],
            stars=meta.get("stargazers_count", 0) or 0,
            forks=meta.get("forks_count", 0) or 0,
            readme=readme,
            files=files,
            commits=[_commit_summary(c) for c in commits[:COMMIT_LIMIT]],
        )

    async def assess(self, github_url: str, requirements: str) -> RepositoryAssessment:
        """
        Assess the repository at github_url against the requirements.

        Raises:
            InvalidRepositoryUrl: The URL is not a GitHub repository URL
            RepositoryFetchError: Repository metadata could not be fetched
        """
        owner, repo = parse_github_url(github_url)
        logger.info("Assessing repository %s/%s", owner, repo)

        data = await self.fetch(owner, repo)

        report = await self._oracle_assessment(data, requirements)
        if report is not None:
            return RepositoryAssessment(repository=data, report=report, from_oracle=True)

        logger.warning("Using fallback assessment for %s/%s", owner, repo)
        return RepositoryAssessment(repository=data, report=fallback_assessment(data))

    async def _oracle_assessment(self, data: RepositoryData, requirements: str) -> Optional[dict]:
        if self.oracle is None:
            return None

        prompt = ASSESSMENT_PROMPT.format(
            name=data.name,
            description=data.description,
            language=data.language,
            languages=", ".join(data.languages),
            topics=", ".join(data.topics),
            stars=data.stars,
            forks=data.forks,
            readme=data.readme[:README_PREVIEW_CHARS],
            commits="; ".join(c["message"] for c in data.commits),
            files=", ".join(data.files),
            requirements=requirements,
        )
        try:
            obj = await self.oracle.complete_json(
                ASSESSMENT_SYSTEM_PROMPT, prompt, max_tokens=2000
            )
        except Exception as e:
            logger.warning("Oracle assessment error: %s", e)
            return None
        if obj is None:
            return None

        try:
            return RepositoryAssessmentReport.model_validate(obj).to_dict()
        except ValidationError as e:
            logger.warning("Oracle assessment failed validation: %d errors", e.error_count())
            return None


def _commit_summary(item: dict) -> dict:
    commit = item.get("commit") or {}
    author = commit.get("author") or {}
    return {"message": commit.get("message", ""), "date": author.get("date", "")}
