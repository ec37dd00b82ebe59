"""Pytest fixtures for Talent Radar tests."""
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.settings import Settings
from talent_radar.github.models import GitHubUser, RepositorySummary
from talent_radar.matching.keyword_extractor import KeywordExtractor


# =============================================================================
# PAYLOAD FACTORIES
# =============================================================================


def repo_payload(
    name="project",
    owner="alice",
    owner_type="User",
    language="Go",
    topics=None,
    stars=10,
    forks=0,
    description="",
    updated_at="2024-03-01T12:00:00Z",
):
    """GitHub repository JSON as returned by search and listings."""
    return {
        "name": name,
        "full_name": f"{owner}/{name}",
        "html_url": f"https://github.com/{owner}/{name}",
        "description": description,
        "language": language,
        "topics": topics or [],
        "stargazers_count": stars,
        "forks_count": forks,
        "updated_at": updated_at,
        "owner": {"login": owner, "type": owner_type},
    }


def user_payload(
    login="alice",
    user_id=1,
    name="Alice Example",
    bio="",
    email=None,
    followers=0,
    following=0,
    public_repos=5,
    account_type="User",
):
    """GitHub /users/{login} JSON."""
    return {
        "id": user_id,
        "login": login,
        "html_url": f"https://github.com/{login}",
        "name": name,
        "avatar_url": f"https://avatars.githubusercontent.com/u/{user_id}",
        "bio": bio,
        "location": "Berlin",
        "email": email,
        "public_repos": public_repos,
        "followers": followers,
        "following": following,
        "type": account_type,
    }


def make_repo(**kwargs) -> RepositorySummary:
    return RepositorySummary.from_api(repo_payload(**kwargs))


def make_user(**kwargs) -> GitHubUser:
    return GitHubUser.from_api(user_payload(**kwargs))


# =============================================================================
# FAKE CLIENTS
# =============================================================================


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient.

    Args:
        search: keyword -> list of RepositorySummary (or an Exception to raise)
        users: login -> GitHubUser (missing logins return None)
        repos: login -> list of RepositorySummary (missing logins return None)
    """

    def __init__(self, search=None, users=None, repos=None):
        self.search = search or {}
        self.users = users or {}
        self.repos = repos or {}
        self.searched: list[str] = []
        self.user_calls: list[str] = []
        self.repo_calls: list[str] = []

    async def search_repositories(self, keyword):
        self.searched.append(keyword)
        result = self.search.get(keyword, [])
        if isinstance(result, Exception):
            raise result
        return list(result)

    async def get_user(self, login):
        self.user_calls.append(login)
        return self.users.get(login)

    async def list_user_repos(self, login, per_page=100):
        self.repo_calls.append(login)
        repos = self.repos.get(login)
        return list(repos) if repos is not None else None


@pytest.fixture
def fake_github():
    """Factory for FakeGitHubClient instances."""
    return FakeGitHubClient


@pytest.fixture
def mock_oracle():
    """Oracle client mock; set complete_json.return_value per test."""
    oracle = MagicMock()
    oracle.complete = AsyncMock(return_value=None)
    oracle.complete_json = AsyncMock(return_value=None)
    return oracle


# =============================================================================
# CONFIG FIXTURES
# =============================================================================


@pytest.fixture
def extractor():
    """Keyword extractor backed by the shipped vocabulary."""
    return KeywordExtractor()


@pytest.fixture
def test_settings():
    """Settings with a fake token, no oracle and no throttling."""
    return Settings(
        _env_file=None,
        github_token="ghp_test",
        openrouter_api_key=None,
        enrichment_delay_seconds=0,
        http_retries=1,
    )


@pytest.fixture
def unconfigured_settings():
    """Settings with no GitHub token."""
    return Settings(_env_file=None, github_token=None, openrouter_api_key=None)


# =============================================================================
# HELPERS
# =============================================================================


class _async_context:
    """Helper to create an async context manager from a mock response."""

    def __init__(self, resp):
        self.resp = resp

    async def __aenter__(self):
        return self.resp

    async def __aexit__(self, *args):
        pass


@pytest.fixture
def async_context():
    return _async_context
