"""Request handlers and command-line entry point for Talent Radar.

Each handler takes a plain request body dict and returns a response dict,
so a web routing layer can wrap them directly.

Usage:
    python -m talent_radar.main search "Senior Go engineer with Kubernetes"
    python -m talent_radar.main profile octocat "React and TypeScript"
    python -m talent_radar.main repo https://github.com/octocat/hello-world "Python"
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

import aiohttp

from config.settings import Settings, settings
from talent_radar.exceptions import ConfigurationError, TalentRadarError
from talent_radar.github.client import GitHubClient
from talent_radar.github.throttle import Throttle
from talent_radar.logging_config import setup_logging
from talent_radar.matching.keyword_extractor import KeywordExtractor
from talent_radar.matching.repo_matcher import RepoMatcher
from talent_radar.matching.scorer import MatchScorer
from talent_radar.oracle.client import OracleClient
from talent_radar.oracle.summarizer import OracleSummaryProvider, RequirementsSummarizer
from talent_radar.pipeline.aggregator import CandidateAggregator
from talent_radar.pipeline.search import CandidateSearch
from talent_radar.profile.analyzer import ProfileAnalyzer
from talent_radar.profile.repository import RepositoryAssessor

logger = logging.getLogger(__name__)


def _error(message: str) -> dict:
    return {"success": False, "error": message}


def _request_body(body) -> dict:
    """Treat a missing or non-object request body as empty."""
    return body if isinstance(body, dict) else {}


def _require_token(cfg: Settings) -> str:
    """Return the GitHub token or fail before any network call."""
    if not cfg.github_token:
        raise ConfigurationError("GitHub token")
    return cfg.github_token


def build_github_client(session: aiohttp.ClientSession, cfg: Settings) -> GitHubClient:
    return GitHubClient(
        session,
        _require_token(cfg),
        api_url=cfg.github_api_url,
        timeout=cfg.request_timeout_seconds,
        retries=cfg.http_retries,
        results_per_keyword=cfg.search_results_per_keyword,
    )


def build_oracle_client(session: aiohttp.ClientSession, cfg: Settings) -> Optional[OracleClient]:
    """Oracle client, or None when no API key is configured."""
    if not cfg.openrouter_api_key:
        return None
    return OracleClient(
        session,
        cfg.openrouter_api_key,
        model=cfg.oracle_model,
        api_url=cfg.oracle_url,
        referer=cfg.oracle_referer,
        title=cfg.oracle_title,
        max_tokens=cfg.oracle_max_tokens,
        timeout=cfg.request_timeout_seconds,
    )


def build_search(session: aiohttp.ClientSession, cfg: Settings) -> CandidateSearch:
    """Wire the search pipeline from settings."""
    extractor = KeywordExtractor(vocabulary_path=cfg.vocabulary_path)
    oracle = build_oracle_client(session, cfg)
    summarizer = RequirementsSummarizer(
        extractor,
        oracle=OracleSummaryProvider(oracle) if oracle else None,
    )
    aggregator = CandidateAggregator(
        build_github_client(session, cfg),
        MatchScorer(min_score=cfg.min_match_score),
        max_candidates=cfg.max_candidates,
        repo_limit=cfg.candidate_repo_limit,
        throttle=Throttle(cfg.enrichment_delay_seconds),
    )
    return CandidateSearch(summarizer, aggregator)


def build_profile_analyzer(session: aiohttp.ClientSession, cfg: Settings) -> ProfileAnalyzer:
    extractor = KeywordExtractor(vocabulary_path=cfg.vocabulary_path)
    return ProfileAnalyzer(
        build_github_client(session, cfg),
        RepoMatcher(extractor),
        oracle=build_oracle_client(session, cfg),
    )


def build_repository_assessor(session: aiohttp.ClientSession, cfg: Settings) -> RepositoryAssessor:
    return RepositoryAssessor(
        build_github_client(session, cfg),
        oracle=build_oracle_client(session, cfg),
    )


async def handle_search(body: dict, cfg: Optional[Settings] = None) -> dict:
    """
    Search GitHub for developers matching free-text requirements.

    Args:
        body: {"requirements": str}
        cfg: Settings override (defaults to the global settings)

    Returns:
        {"success": True, "developers", "query", "summary", "totalAnalyzed"}
        or {"success": False, "error"}
    """
    cfg = cfg or settings
    body = _request_body(body)
    requirements = body.get("requirements")
    if not isinstance(requirements, str) or not requirements.strip():
        return _error("Requirements are required")

    try:
        _require_token(cfg)
        async with aiohttp.ClientSession() as session:
            search = build_search(session, cfg)
            result = await search.run(requirements)
        return {"success": True, **result.to_dict()}
    except TalentRadarError as e:
        logger.error("Search failed: %s", e)
        return _error(str(e))
    except Exception as e:
        logger.error("Search error: %s", e, exc_info=True)
        return _error(str(e) or "Failed to search for developers")


async def handle_profile_analysis(body: dict, cfg: Optional[Settings] = None) -> dict:
    """
    Deep dive into one developer's profile.

    Args:
        body: {"username": str, "requirements": str}
        cfg: Settings override

    Returns:
        {"success": True, "analysis"} or {"success": False, "error"}
    """
    cfg = cfg or settings
    body = _request_body(body)
    username = body.get("username")
    requirements = body.get("requirements")
    if not username or not requirements:
        return _error("Username and requirements are required")

    try:
        _require_token(cfg)
        async with aiohttp.ClientSession() as session:
            analyzer = build_profile_analyzer(session, cfg)
            analysis = await analyzer.analyze(username, requirements)
        return {"success": True, "analysis": analysis.to_dict()}
    except TalentRadarError as e:
        logger.error("Profile analysis failed: %s", e)
        return _error(str(e))
    except Exception as e:
        logger.error("Profile analysis error: %s", e, exc_info=True)
        return _error(str(e) or "Analysis failed")


async def handle_repository_analysis(body: dict, cfg: Optional[Settings] = None) -> dict:
    """
    Assess one repository against job requirements.

    Args:
        body: {"githubUrl": str, "jobRequirements": str}
        cfg: Settings override

    Returns:
        {"success": True, "data", "repository"} or {"success": False, "error"}
    """
    cfg = cfg or settings
    body = _request_body(body)
    github_url = body.get("githubUrl")
    requirements = body.get("jobRequirements")
    if not github_url or not requirements:
        return _error("GitHub URL and job requirements are required")

    try:
        _require_token(cfg)
        async with aiohttp.ClientSession() as session:
            assessor = build_repository_assessor(session, cfg)
            assessment = await assessor.assess(github_url, requirements)
        return {
            "success": True,
            "data": assessment.report,
            "repository": assessment.repository.overview(),
        }
    except TalentRadarError as e:
        logger.error("Repository analysis failed: %s", e)
        return _error(str(e))
    except Exception as e:
        logger.error("Repository analysis error: %s", e, exc_info=True)
        return _error(str(e) or "Analysis failed")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="talent-radar",
        description="Find and assess developers on GitHub",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Search for matching developers")
    search.add_argument("requirements", help="Free-text hiring requirements")

    profile = subparsers.add_parser("profile", help="Analyze one developer profile")
    profile.add_argument("username", help="GitHub login")
    profile.add_argument("requirements", help="Free-text hiring requirements")

    repo = subparsers.add_parser("repo", help="Assess one repository")
    repo.add_argument("github_url", help="https://github.com/<owner>/<repo>")
    repo.add_argument("requirements", help="Free-text job requirements")

    return parser


async def async_main(argv: Optional[list[str]] = None) -> dict:
    """Dispatch a CLI invocation to the matching handler."""
    args = build_parser().parse_args(argv)

    if args.command == "search":
        return await handle_search({"requirements": args.requirements})
    if args.command == "profile":
        return await handle_profile_analysis(
            {"username": args.username, "requirements": args.requirements}
        )
    return await handle_repository_analysis(
        {"githubUrl": args.github_url, "jobRequirements": args.requirements}
    )


def main(argv: Optional[list[str]] = None) -> int:
    setup_logging(settings.log_level, settings.log_file)
    try:
        response = asyncio.run(async_main(argv))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        return 1
    print(json.dumps(response, indent=2))
    return 0 if response.get("success") else 1


if __name__ == "__main__":
    sys.exit(main())
