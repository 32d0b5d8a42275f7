"""Tests for job boosting and ranking."""

from datetime import datetime, timedelta, timezone

import pytest

from skillgap.config.models import RankingConfig
from skillgap.domain.models import ScoredJob
from skillgap.ranking import JobRanker, RecentPostingPredicate

NOW = datetime(2025, 11, 10, 12, 0, 0, tzinfo=timezone.utc)


def make_scored(job_id="job-1", score=50.0, **overrides) -> ScoredJob:
    data = {
        "id": job_id,
        "title": f"Job {job_id}",
        "source": "test",
        "relevance_score": score,
    }
    data.update(overrides)
    return ScoredJob(**data)


@pytest.fixture
def ranker():
    """Create a JobRanker with default boosts and a fixed clock."""
    return JobRanker(RankingConfig(), RecentPostingPredicate(days=7, now=NOW))


class TestBoosts:
    """Tests for the boost rules."""

    def test_match_count_and_few_missing(self, ranker):
        """Test +5 +3 = +8 for six matches and one missing skill."""
        job = make_scored(
            score=50.0,
            match_count=6,
            matched_skills=["a", "b", "c", "d", "e", "f"],
            missing_skills=["g"],
        )
        assert ranker.boost_for(job) == 8.0
        assert ranker.apply_boost(job).relevance_score == 58.0

    def test_match_count_only(self, ranker):
        """Test +5 when too many skills are missing for the +3."""
        job = make_scored(match_count=5, missing_skills=["x", "y", "z"])
        assert ranker.boost_for(job) == 5.0

    def test_few_missing_only(self, ranker):
        """Test +3 when at most two skills are missing."""
        job = make_scored(match_count=2, matched_skills=["a", "b"], missing_skills=["c", "d"])
        assert ranker.boost_for(job) == 3.0

    def test_job_without_skills_gets_no_boost(self, ranker):
        """Test that a job with no skills does not earn the few-missing boost."""
        job = make_scored(score=0.0)
        assert ranker.boost_for(job) == 0.0
        assert ranker.apply_boost(job) is job

    def test_recent_posting(self, ranker):
        """Test +2 for a posting from the last week."""
        job = make_scored(posted_at=NOW - timedelta(days=2))
        assert ranker.boost_for(job) == 2.0

    def test_old_posting(self, ranker):
        """Test that old postings get no recency boost."""
        job = make_scored(posted_at=NOW - timedelta(days=30))
        assert ranker.boost_for(job) == 0.0

    def test_custom_recency_predicate(self):
        """Test that the recency decision is pluggable."""
        ranker = JobRanker(recency_predicate=lambda job: job.source == "fresh")
        assert ranker.boost_for(make_scored(source="fresh")) == 2.0
        assert ranker.boost_for(make_scored(source="stale")) == 0.0

    def test_missing_score_treated_as_zero(self, ranker):
        """Test boosting a job that carries no score."""
        job = make_scored(score=None, match_count=1, matched_skills=["a"])
        assert ranker.apply_boost(job).relevance_score == 3.0

    def test_boost_returns_copy(self, ranker):
        """Test that the input job is not modified."""
        job = make_scored(score=40.0, match_count=1, matched_skills=["a"])
        boosted = ranker.apply_boost(job)

        assert boosted.relevance_score == 43.0
        assert job.relevance_score == 40.0


class TestRecentPostingPredicate:
    """Tests for the default recency predicate."""

    @pytest.mark.parametrize(
        "posted_at,expected",
        [
            (NOW - timedelta(days=1), True),
            (NOW - timedelta(days=7), True),
            (NOW - timedelta(days=8), False),
            (NOW + timedelta(days=1), True),
        ],
    )
    def test_posting_age(self, posted_at, expected):
        """Test postings around the window edge."""
        predicate = RecentPostingPredicate(days=7, now=NOW)
        assert predicate(make_scored(posted_at=posted_at)) is expected

    def test_undated_posting(self):
        """Test that undated postings yield no opinion."""
        predicate = RecentPostingPredicate(days=7, now=NOW)
        assert predicate(make_scored()) is None


class TestRank:
    """Tests for ordering."""

    def test_sorted_by_score(self, ranker):
        """Test descending order by boosted score."""
        jobs = [make_scored("a", 40.0), make_scored("b", 70.0), make_scored("c", 55.0)]
        assert [job.id for job in ranker.rank(jobs)] == ["b", "c", "a"]

    def test_boost_changes_order(self, ranker):
        """Test that boosts are applied before sorting."""
        jobs = [
            make_scored("plain", 52.0),
            make_scored("boosted", 50.0, match_count=1, matched_skills=["a"]),
        ]
        ranked = ranker.rank(jobs)

        assert [job.id for job in ranked] == ["boosted", "plain"]
        assert ranked[0].relevance_score == 53.0

    def test_ties_keep_input_order(self, ranker):
        """Test that the sort is stable."""
        jobs = [make_scored("first", 60.0), make_scored("second", 60.0), make_scored("third", 60.0)]
        assert [job.id for job in ranker.rank(jobs)] == ["first", "second", "third"]

    def test_unscored_jobs_last(self, ranker):
        """Test that jobs without a score sort after scored ones."""
        jobs = [make_scored("none", None), make_scored("scored", 10.0)]
        assert [job.id for job in ranker.rank(jobs)] == ["scored", "none"]

    def test_empty(self, ranker):
        """Test that ranking nothing yields nothing."""
        assert ranker.rank([]) == []
