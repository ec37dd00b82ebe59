"""GitHub REST API client."""
import base64
import binascii
import logging
from typing import Optional
from urllib.parse import quote

import aiohttp

from .models import GitHubUser, RepositorySummary
from .utils import http_get_json

logger = logging.getLogger(__name__)


class GitHubClient:
    """Thin async wrapper over the GitHub REST endpoints the pipeline uses.

    API docs: https://docs.github.com/en/rest
    Every method degrades to an empty/None result on a non-success response
    instead of raising; callers decide whether that is fatal.
    """

    API_URL = "https://api.github.com"
    SEARCH_QUALIFIERS = "stars:>5 pushed:>2023-01-01"

    def __init__(
        self,
        session: aiohttp.ClientSession,
        token: str,
        *,
        api_url: Optional[str] = None,
        timeout: float = 30,
        retries: int = 3,
        results_per_keyword: int = 30,
    ):
        """
        Initialize GitHub client.

        Args:
            session: aiohttp client session owned by the caller
            token: GitHub personal access token
            api_url: API base URL override (GitHub Enterprise)
            timeout: Total timeout per request in seconds
            retries: Attempts per request on transient failures
            results_per_keyword: Repositories requested per keyword search
        """
        self.session = session
        self.api_url = (api_url or self.API_URL).rstrip("/")
        self.timeout = timeout
        self.retries = retries
        self.results_per_keyword = results_per_keyword
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "TalentRadar/1.0",
        }

    async def _get(self, path: str, params: Optional[dict] = None) -> dict | list | None:
        return await http_get_json(
            self.session,
            f"{self.api_url}{path}",
            params=params,
            headers=self.headers,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            retries=self.retries,
        )

    @classmethod
    def build_search_query(cls, keyword: str) -> str:
        """Repository search query for one keyword."""
        return f"{keyword} language:{keyword} {cls.SEARCH_QUALIFIERS}"

    async def search_repositories(self, keyword: str) -> list[RepositorySummary]:
        """Search repositories for a keyword, most-starred first.

        Restricted to repositories with more than 5 stars pushed after
        2023-01-01 whose primary language matches the keyword.
        """
        params = {
            "q": self.build_search_query(keyword),
            "sort": "stars",
            "order": "desc",
            "per_page": self.results_per_keyword,
        }
        data = await self._get("/search/repositories", params)
        if not isinstance(data, dict):
            logger.warning("Repository search failed for keyword '%s'", keyword)
            return []

        items = data.get("items", [])
        if not isinstance(items, list):
            logger.warning("GitHub search returned unexpected format: %s", type(items))
            return []

        return [
            RepositorySummary.from_api(item)
            for item in items[: self.results_per_keyword]
            if isinstance(item, dict)
        ]

    async def search_users(self, query: str, per_page: int = 30) -> list[dict]:
        """Search users by attribute qualifiers (e.g. "language:go followers:>50")."""
        params = {"q": query, "per_page": min(per_page, 100)}
        data = await self._get("/search/users", params)
        if not isinstance(data, dict):
            logger.warning("User search failed for query '%s'", query)
            return []
        return [
            {
                "login": item.get("login", ""),
                "type": item.get("type", "User"),
                "html_url": item.get("html_url", ""),
                "avatar_url": item.get("avatar_url", ""),
            }
            for item in data.get("items", [])
            if isinstance(item, dict)
        ]

    async def get_user(self, login: str) -> Optional[GitHubUser]:
        """Fetch a user profile, or None when the fetch fails."""
        data = await self._get(f"/users/{quote(login)}")
        if not isinstance(data, dict):
            return None
        return GitHubUser.from_api(data)

    async def list_user_repos(
        self, login: str, per_page: int = 100
    ) -> Optional[list[RepositorySummary]]:
        """List repositories owned by a user.

        The listing endpoint cannot sort by stars; callers rank locally.

        Returns:
            List of repositories, or None when the fetch fails
        """
        params = {"type": "owner", "sort": "updated", "per_page": min(per_page, 100)}
        data = await self._get(f"/users/{quote(login)}/repos", params)
        if not isinstance(data, list):
            return None
        return [RepositorySummary.from_api(item) for item in data if isinstance(item, dict)]

    async def get_repository(self, owner: str, repo: str) -> Optional[dict]:
        data = await self._get(f"/repos/{quote(owner)}/{quote(repo)}")
        return data if isinstance(data, dict) else None

    async def get_languages(self, owner: str, repo: str) -> dict[str, int]:
        """Byte counts per language, empty on failure."""
        data = await self._get(f"/repos/{quote(owner)}/{quote(repo)}/languages")
        return data if isinstance(data, dict) else {}

    async def get_readme(self, owner: str, repo: str) -> str:
        """Decoded README text, empty when missing."""
        data = await self._get(f"/repos/{quote(owner)}/{quote(repo)}/readme")
        if not isinstance(data, dict):
            return ""
        return decode_content(data.get("content"))

    async def list_commits(self, owner: str, repo: str, per_page: int = 10) -> list[dict]:
        data = await self._get(
            f"/repos/{quote(owner)}/{quote(repo)}/commits", {"per_page": per_page}
        )
        return data if isinstance(data, list) else []

    async def list_contents(self, owner: str, repo: str) -> list[dict]:
        """Top-level directory listing, empty on failure."""
        data = await self._get(f"/repos/{quote(owner)}/{quote(repo)}/contents")
        return data if isinstance(data, list) else []

    async def get_file_text(self, owner: str, repo: str, path: str) -> Optional[str]:
        """Decoded text of a single file, or None when it does not exist."""
        data = await self._get(f"/repos/{quote(owner)}/{quote(repo)}/contents/{quote(path)}")
        if not isinstance(data, dict) or data.get("type", "file") != "file":
            return None
        return decode_content(data.get("content"))


def decode_content(content: Optional[str]) -> str:
    """Decode the base64 payload GitHub uses for file contents."""
    if not content:
        return ""
    try:
        return base64.b64decode(content).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError) as e:
        logger.debug("Could not decode file content: %s", e)
        return ""
