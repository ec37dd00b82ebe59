"""Candidate data structure and profile-derived fields."""
from collections import Counter
from dataclasses import dataclass, field

from talent_radar.github.models import GitHubUser, RepositorySummary

MAX_SKILLS = 10
MAX_TOP_LANGUAGES = 5
MAX_TOP_REPOS = 3

PLACEHOLDER_EMAIL_DOMAIN = "github.local"
LINKEDIN_URL = "https://linkedin.com/in/{handle}"


@dataclass
class Candidate:
    """A discovered developer with a computed match score."""

    id: str
    name: str
    username: str
    avatar: str
    bio: str
    location: str
    email: str
    email_verified: bool
    linkedin: str
    github: str
    repositories: int
    followers: int
    following: int
    match_score: int
    skills: list[str] = field(default_factory=list)
    top_languages: list[str] = field(default_factory=list)
    top_repos: list[dict] = field(default_factory=list)
    # Cosmetic, filled in by the decoration step
    status: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "avatar": self.avatar,
            "bio": self.bio,
            "location": self.location,
            "email": self.email,
            "emailVerified": self.email_verified,
            "linkedin": self.linkedin,
            "linkedinVerified": False,
            "github": self.github,
            "repositories": self.repositories,
            "followers": self.followers,
            "following": self.following,
            "matchScore": self.match_score,
            "skills": list(self.skills),
            "topLanguages": list(self.top_languages),
            "status": self.status,
            "topRepos": [dict(r) for r in self.top_repos],
        }


def extract_skills(repos: list[RepositorySummary], limit: int = MAX_SKILLS) -> list[str]:
    """Unique languages and topics in repository order."""
    skills: dict[str, None] = {}
    for repo in repos:
        if repo.language:
            skills.setdefault(repo.language, None)
        for topic in repo.topics:
            skills.setdefault(topic, None)
    return list(skills)[:limit]


def top_languages(repos: list[RepositorySummary], limit: int = MAX_TOP_LANGUAGES) -> list[str]:
    """Languages ranked by repository count; ties keep first-seen order."""
    counts = Counter(repo.language for repo in repos if repo.language)
    return [lang for lang, _ in counts.most_common(limit)]


def placeholder_email(login: str) -> str:
    """Unverified stand-in contact for profiles without a public email."""
    return f"{login}@{PLACEHOLDER_EMAIL_DOMAIN}"


def guess_linkedin_url(login: str) -> str:
    """Best-effort professional-network URL guess; never verified."""
    return LINKEDIN_URL.format(handle=login)


def build_candidate(
    user: GitHubUser,
    repos: list[RepositorySummary],
    match_score: int,
) -> Candidate:
    """
    Assemble a Candidate from a profile and its star-ranked repositories.

    Args:
        user: GitHub profile
        repos: The candidate's repositories, most-starred first
        match_score: Score from the scorer

    Returns:
        Candidate with an empty cosmetic status
    """
    return Candidate(
        id=str(user.id),
        name=user.display_name,
        username=user.login,
        avatar=user.avatar_url,
        bio=user.bio,
        location=user.location,
        email=user.email or placeholder_email(user.login),
        email_verified=bool(user.email),
        linkedin=guess_linkedin_url(user.login),
        github=user.html_url,
        repositories=user.public_repos,
        followers=user.followers,
        following=user.following,
        match_score=match_score,
        skills=extract_skills(repos),
        top_languages=top_languages(repos),
        top_repos=[
            {
                "name": repo.name,
                "description": repo.description,
                "language": repo.language,
                "stars": repo.stars,
            }
            for repo in repos[:MAX_TOP_REPOS]
        ],
    )
