"""GitHub API access."""
from .client import GitHubClient
from .models import GitHubUser, RepositorySummary
from .throttle import Throttle

__all__ = ["GitHubClient", "GitHubUser", "RepositorySummary", "Throttle"]
