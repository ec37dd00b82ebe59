"""Exceptions for Talent Radar."""


class TalentRadarError(Exception):
    """Base exception for errors surfaced to the caller."""

    pass


class ConfigurationError(TalentRadarError):
    """Raised when a required credential or setting is missing."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"{setting} not configured")


class ProfileAnalysisError(TalentRadarError):
    """Raised when a profile deep dive cannot be completed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to analyze profile: {reason}")


class ProfileNotFoundError(ProfileAnalysisError):
    """Raised when the requested GitHub user does not exist."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"User not found: {username}")


class RepositoryAnalysisError(TalentRadarError):
    """Base exception for single-repository assessment errors."""

    pass


class InvalidRepositoryUrl(RepositoryAnalysisError):
    """Raised when a URL does not point at a GitHub repository."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid GitHub URL format: {url}")


class RepositoryFetchError(RepositoryAnalysisError):
    """Raised when repository metadata cannot be fetched."""

    def __init__(self, full_name: str):
        self.full_name = full_name
        super().__init__(f"Failed to fetch GitHub data for {full_name}")
