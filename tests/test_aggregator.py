"""Tests for candidate aggregation, decoration and the search pass."""
import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from conftest import make_repo, make_user
from talent_radar.github.throttle import Throttle
from talent_radar.matching.scorer import MatchScorer
from talent_radar.oracle.summarizer import RequirementsSummarizer
from talent_radar.pipeline.aggregator import CandidateAggregator
from talent_radar.pipeline.candidate import build_candidate, extract_skills, top_languages
from talent_radar.pipeline.decoration import AVAILABILITY_STATUSES, Decorator
from talent_radar.pipeline.search import CandidateSearch


def _strong_repos(language="Go", count=3):
    """Repositories that push a matching candidate well over 70."""
    return [
        make_repo(name=f"{language.lower()}-{i}", language=language, topics=["kubernetes"], stars=50)
        for i in range(count)
    ]


def _aggregator(client, **kwargs):
    kwargs.setdefault("throttle", Throttle(0))
    return CandidateAggregator(client, MatchScorer(min_score=70), **kwargs)


class TestCandidateAggregator:
    """Tests for CandidateAggregator.aggregate."""

    @pytest.mark.asyncio
    async def test_admits_and_sorts(self, fake_github):
        client = fake_github(
            search={"go": [make_repo(owner="low"), make_repo(owner="high")]},
            users={
                "low": make_user(login="low", followers=0),
                "high": make_user(login="high", followers=500),
            },
            repos={"low": _strong_repos(count=1), "high": _strong_repos(count=3)},
        )

        candidates = await _aggregator(client).aggregate(["go"], "Go developer")

        assert [c.username for c in candidates] == ["high", "low"]
        assert candidates[0].match_score >= candidates[1].match_score

    @pytest.mark.asyncio
    async def test_dedupes_owners_across_keywords(self, fake_github):
        client = fake_github(
            search={
                "go": [make_repo(name="a", owner="alice"), make_repo(name="b", owner="alice")],
                "kubernetes": [make_repo(name="c", owner="alice")],
            },
            users={"alice": make_user(login="alice")},
            repos={"alice": _strong_repos()},
        )

        candidates = await _aggregator(client).aggregate(["go", "kubernetes"])

        assert [c.username for c in candidates] == ["alice"]
        assert client.user_calls == ["alice"]

    @pytest.mark.asyncio
    async def test_organizations_excluded(self, fake_github):
        client = fake_github(
            search={"go": [
                make_repo(owner="acme", owner_type="Organization"),
                make_repo(owner="sneaky"),
                make_repo(owner="alice"),
            ]},
            users={
                "sneaky": make_user(login="sneaky", account_type="Organization"),
                "alice": make_user(login="alice"),
            },
            repos={"sneaky": _strong_repos(), "alice": _strong_repos()},
        )

        candidates = await _aggregator(client).aggregate(["go"])

        assert [c.username for c in candidates] == ["alice"]
        assert "acme" not in client.user_calls
        assert "sneaky" not in client.repo_calls

    @pytest.mark.asyncio
    async def test_skips_failed_fetches(self, fake_github):
        client = fake_github(
            search={"go": [
                make_repo(owner="ghost"),
                make_repo(owner="norepos"),
                make_repo(owner="alice"),
            ]},
            users={"norepos": make_user(login="norepos"), "alice": make_user(login="alice")},
            repos={"alice": _strong_repos()},
        )

        candidates = await _aggregator(client).aggregate(["go"])

        assert [c.username for c in candidates] == ["alice"]

    @pytest.mark.asyncio
    async def test_failed_profile_fetch_retried_on_later_hit(self, fake_github):
        client = fake_github(
            search={
                "go": [make_repo(name="a", owner="alice")],
                "kubernetes": [make_repo(name="b", owner="alice")],
            },
            users={"alice": make_user(login="alice")},
            repos={"alice": _strong_repos()},
        )
        fetch_user = client.get_user
        failures = {"alice": 1}

        async def flaky_get_user(login):
            if failures.get(login):
                failures[login] -= 1
                client.user_calls.append(login)
                return None
            return await fetch_user(login)

        client.get_user = flaky_get_user

        candidates = await _aggregator(client).aggregate(["go", "kubernetes"])

        assert [c.username for c in candidates] == ["alice"]
        assert client.user_calls == ["alice", "alice"]

    @pytest.mark.asyncio
    async def test_failed_repo_listing_retried_on_later_hit(self, fake_github):
        client = fake_github(
            search={"go": [make_repo(name="a", owner="alice"), make_repo(name="b", owner="alice")]},
            users={"alice": make_user(login="alice")},
            repos={"alice": _strong_repos()},
        )
        list_repos = client.list_user_repos
        calls = []

        async def flaky_list_user_repos(login, per_page=100):
            calls.append(login)
            if len(calls) == 1:
                return None
            return await list_repos(login, per_page)

        client.list_user_repos = flaky_list_user_repos

        candidates = await _aggregator(client).aggregate(["go"])

        assert [c.username for c in candidates] == ["alice"]
        assert calls == ["alice", "alice"]

    @pytest.mark.asyncio
    async def test_rejected_owner_not_refetched(self, fake_github):
        client = fake_github(
            search={
                "go": [make_repo(owner="pythonista")],
                "kubernetes": [make_repo(owner="pythonista")],
            },
            users={"pythonista": make_user(login="pythonista")},
            repos={"pythonista": [make_repo(language="Python", stars=1)]},
        )

        assert await _aggregator(client).aggregate(["go", "kubernetes"]) == []
        assert client.user_calls == ["pythonista"]

    @pytest.mark.asyncio
    async def test_search_error_skips_keyword(self, fake_github):
        client = fake_github(
            search={
                "go": RuntimeError("search exploded"),
                "kubernetes": [make_repo(owner="alice")],
            },
            users={"alice": make_user(login="alice")},
            repos={"alice": _strong_repos()},
        )

        candidates = await _aggregator(client).aggregate(["go", "kubernetes"])

        assert [c.username for c in candidates] == ["alice"]
        assert client.searched == ["go", "kubernetes"]

    @pytest.mark.asyncio
    async def test_threshold_rejects_low_scores(self, fake_github):
        client = fake_github(
            search={"go": [make_repo(owner="pythonista")]},
            users={"pythonista": make_user(login="pythonista")},
            repos={"pythonista": [make_repo(language="Python", stars=1)]},
        )

        assert await _aggregator(client).aggregate(["go"]) == []

    @pytest.mark.asyncio
    async def test_cap_stops_entire_pass(self, fake_github):
        owners = [f"dev{i}" for i in range(5)]
        client = fake_github(
            search={
                "go": [make_repo(owner=o) for o in owners],
                "kubernetes": [make_repo(owner="late")],
            },
            users={o: make_user(login=o) for o in owners + ["late"]},
            repos={o: _strong_repos() for o in owners + ["late"]},
        )

        candidates = await _aggregator(client, max_candidates=2).aggregate(["go", "kubernetes"])

        assert len(candidates) == 2
        assert client.user_calls == ["dev0", "dev1"]
        assert client.searched == ["go"]

    @pytest.mark.asyncio
    async def test_uses_top_repos_by_stars(self, fake_github):
        repos = [make_repo(name=f"r{i}", language="Go", stars=i) for i in range(15)]
        client = fake_github(
            search={"go": [make_repo(owner="alice")]},
            users={"alice": make_user(login="alice")},
            repos={"alice": repos},
        )
        scorer = MagicMock()
        scorer.score = MagicMock(return_value=90)
        scorer.admits = MagicMock(return_value=True)

        aggregator = CandidateAggregator(client, scorer, throttle=Throttle(0), repo_limit=10)
        candidates = await aggregator.aggregate(["go"])

        scored_repos = scorer.score.call_args.args[0]
        assert [r.stars for r in scored_repos] == list(range(14, 4, -1))
        assert [r["name"] for r in candidates[0].top_repos] == ["r14", "r13", "r12"]

    @pytest.mark.asyncio
    async def test_throttle_awaited_per_enrichment(self, fake_github):
        client = fake_github(
            search={"go": [make_repo(owner="a"), make_repo(owner="b"), make_repo(owner="a")]},
            users={"a": make_user(login="a"), "b": make_user(login="b")},
            repos={"a": _strong_repos(), "b": _strong_repos()},
        )
        throttle = MagicMock()
        throttle.wait = AsyncMock()

        await _aggregator(client, throttle=throttle).aggregate(["go"])

        assert throttle.wait.await_count == 2

    @pytest.mark.asyncio
    async def test_no_keywords_no_calls(self, fake_github):
        client = fake_github()
        assert await _aggregator(client).aggregate([]) == []
        assert client.searched == []


class TestCandidateFields:
    """Tests for candidate assembly."""

    def test_placeholder_email_flagged(self):
        user = make_user(login="alice", email=None)
        candidate = build_candidate(user, _strong_repos(), 80)

        assert candidate.email == "alice@github.local"
        assert candidate.email_verified is False
        assert candidate.to_dict()["emailVerified"] is False

    def test_public_email_verified(self):
        user = make_user(email="alice@example.com")
        candidate = build_candidate(user, [], 80)

        assert candidate.email == "alice@example.com"
        assert candidate.email_verified is True

    def test_linkedin_guess_unverified(self):
        candidate = build_candidate(make_user(login="alice"), [], 80)
        data = candidate.to_dict()

        assert data["linkedin"] == "https://linkedin.com/in/alice"
        assert data["linkedinVerified"] is False

    def test_wire_keys(self):
        data = build_candidate(make_user(), _strong_repos(), 75).to_dict()
        assert set(data) == {
            "id", "name", "username", "avatar", "bio", "location", "email",
            "emailVerified", "linkedin", "linkedinVerified", "github",
            "repositories", "followers", "following", "matchScore", "skills",
            "topLanguages", "status", "topRepos",
        }
        assert data["id"] == "1"
        assert data["matchScore"] == 75

    def test_skills_languages_then_topics_unique(self):
        repos = [
            make_repo(language="Go", topics=["cli", "kubernetes"]),
            make_repo(language="Go", topics=["cli"]),
            make_repo(language="Rust", topics=[]),
        ]
        assert extract_skills(repos) == ["Go", "cli", "kubernetes", "Rust"]

    def test_skills_capped(self):
        repos = [make_repo(language=f"L{i}", topics=[f"t{i}"]) for i in range(8)]
        assert len(extract_skills(repos)) == 10

    def test_top_languages_by_count_first_seen_ties(self):
        repos = [
            make_repo(language="Rust"),
            make_repo(language="Go"),
            make_repo(language="Go"),
            make_repo(language="Python"),
            make_repo(language=None),
        ]
        assert top_languages(repos) == ["Go", "Rust", "Python"]


class TestDecorator:
    def test_status_assigned(self):
        candidates = [build_candidate(make_user(login=f"u{i}"), [], 80) for i in range(5)]
        Decorator(random.Random(7)).decorate(candidates)
        assert all(c.status in AVAILABILITY_STATUSES for c in candidates)

    def test_total_analyzed_range(self):
        decorator = Decorator(random.Random(1))
        for _ in range(20):
            assert 10000 <= decorator.total_analyzed() <= 59999

    def test_seeded_is_reproducible(self):
        assert Decorator(random.Random(3)).total_analyzed() == Decorator(random.Random(3)).total_analyzed()


class TestCandidateSearch:
    """Tests for the end-to-end search pass with fakes."""

    @pytest.mark.asyncio
    async def test_run_returns_wire_shape(self, fake_github, extractor):
        client = fake_github(
            search={"go": [make_repo(owner="alice")]},
            users={"alice": make_user(login="alice")},
            repos={"alice": _strong_repos()},
        )
        search = CandidateSearch(
            RequirementsSummarizer(extractor),
            _aggregator(client),
            Decorator(random.Random(0)),
        )
        progress = []

        result = await search.run(
            "Go engineer with Kubernetes",
            on_progress=lambda step, detail, pct: progress.append((step, pct)),
        )
        data = result.to_dict()

        assert set(data) == {"developers", "query", "summary", "totalAnalyzed"}
        assert data["query"] == "Go engineer with Kubernetes"
        assert data["developers"][0]["username"] == "alice"
        assert data["developers"][0]["status"] in AVAILABILITY_STATUSES
        assert "go" in data["summary"]["essentialSkills"]
        assert progress[-1] == ("Complete", 1.0)

    @pytest.mark.asyncio
    async def test_no_keywords_is_empty_success(self, fake_github, extractor):
        client = fake_github()
        search = CandidateSearch(RequirementsSummarizer(extractor), _aggregator(client))

        result = await search.run("Looking for a kind person")

        assert result.candidates == []
        assert client.searched == []
