"""Standardized GitHub data structures."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .utils import parse_date_iso


@dataclass
class RepositorySummary:
    """A repository as returned by search or user listings."""

    name: str
    url: str
    full_name: str = ""
    description: str = ""
    language: str = ""
    topics: list[str] = field(default_factory=list)
    stars: int = 0
    forks: int = 0
    updated_at: Optional[datetime] = None
    owner_login: str = ""
    owner_type: str = "User"

    def __post_init__(self):
        """Normalize nullable API fields."""
        self.description = self.description or ""
        self.language = self.language or ""
        self.topics = [t for t in (self.topics or []) if t]
        self.stars = int(self.stars or 0)
        self.forks = int(self.forks or 0)

    @classmethod
    def from_api(cls, data: dict) -> "RepositorySummary":
        """Build from a /search/repositories item or /users/{u}/repos item."""
        owner = data.get("owner") or {}
        return cls(
            name=data.get("name", ""),
            url=data.get("html_url", ""),
            full_name=data.get("full_name", ""),
            description=data.get("description"),
            language=data.get("language"),
            topics=data.get("topics") or [],
            stars=data.get("stargazers_count", 0),
            forks=data.get("forks_count", 0),
            updated_at=parse_date_iso(data.get("updated_at")),
            owner_login=owner.get("login", ""),
            owner_type=owner.get("type", "User"),
        )

    @property
    def owned_by_organization(self) -> bool:
        return self.owner_type == "Organization"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "language": self.language,
            "stars": self.stars,
            "url": self.url,
            "topics": list(self.topics),
        }


@dataclass
class GitHubUser:
    """A GitHub account profile from /users/{login}."""

    id: int
    login: str
    html_url: str
    name: str = ""
    avatar_url: str = ""
    bio: str = ""
    location: str = ""
    email: str = ""
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    type: str = "User"

    def __post_init__(self):
        """Normalize nullable API fields."""
        self.name = self.name or ""
        self.bio = self.bio or ""
        self.location = self.location or ""
        self.email = self.email or ""
        self.avatar_url = self.avatar_url or ""

    @classmethod
    def from_api(cls, data: dict) -> "GitHubUser":
        return cls(
            id=data.get("id", 0),
            login=data.get("login", ""),
            html_url=data.get("html_url", ""),
            name=data.get("name"),
            avatar_url=data.get("avatar_url"),
            bio=data.get("bio"),
            location=data.get("location"),
            email=data.get("email"),
            public_repos=data.get("public_repos", 0) or 0,
            followers=data.get("followers", 0) or 0,
            following=data.get("following", 0) or 0,
            type=data.get("type", "User") or "User",
        )

    @property
    def is_organization(self) -> bool:
        """True for any non-person account."""
        return self.type != "User"

    @property
    def display_name(self) -> str:
        return self.name or self.login
