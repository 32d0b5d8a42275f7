"""End-to-end tests over the sample analysis fixture.

Runs both engine contracts on tests/fixtures/sample_analysis.yaml, the same
input the sample analysis script uses, and checks ranking, gaps and the
serialized payloads together.
"""

import json
from pathlib import Path

import pytest
import yaml

from skillgap import (
    ScoringConfig,
    SkillGapEngine,
    compute_skill_gaps,
    score_and_rank_jobs,
    to_payload,
)
from skillgap.domain.models import Priority

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def sample():
    """Load the sample fixture (candidate skills plus five camelCase job payloads)."""
    with open(FIXTURES_DIR / "sample_analysis.yaml", "r") as f:
        return yaml.safe_load(f)


@pytest.fixture
def engine():
    """Engine with default configuration."""
    return SkillGapEngine(ScoringConfig())


class TestSampleRanking:
    """Ranking of the sample jobs."""

    def test_ranking_order(self, engine, sample):
        """Test the final ranking of the five jobs."""
        ranked = engine.score_and_rank_jobs(sample["candidateSkills"], sample["jobs"])

        assert [job.id for job in ranked] == ["fe-005", "fs-002", "fe-001", "be-003", "de-004"]
        scores = [job.relevance_score for job in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_description_only_job(self, engine, sample):
        """Test that skills are derived from the description when none are listed."""
        ranked = engine.score_and_rank_jobs(sample["candidateSkills"], sample["jobs"])
        full_stack = next(job for job in ranked if job.id == "fs-002")

        assert full_stack.skills_required == ["docker", "nodejs", "postgresql", "react", "typescript"]
        assert full_stack.matched_skills == ["nodejs", "postgresql", "react"]
        assert full_stack.missing_skills == ["docker", "typescript"]

    def test_structured_job(self, engine, sample):
        """Test a job with a structured skill list."""
        ranked = engine.score_and_rank_jobs(sample["candidateSkills"], sample["jobs"])
        frontend = next(job for job in ranked if job.id == "fe-001")

        assert frontend.matched_skills == ["react"]
        assert frontend.missing_skills == ["typescript", "docker"]
        assert frontend.relevance_score == 34.0

    def test_every_job_scored(self, engine, sample):
        """Test that every job carries a score and a breakdown."""
        ranked = engine.score_and_rank_jobs(sample["candidateSkills"], sample["jobs"])

        for job in ranked:
            assert job.relevance_score is not None
            assert job.score_breakdown is not None
            assert set(job.matched_skills).isdisjoint(job.missing_skills)

    def test_section_aware_extraction(self, sample):
        """Test that section-aware extraction finds bullet-only skills."""
        engine = SkillGapEngine(ScoringConfig(extraction={"section_aware": True}))
        ranked = engine.score_and_rank_jobs(sample["candidateSkills"], sample["jobs"])
        full_stack = next(job for job in ranked if job.id == "fs-002")

        assert "express" in full_stack.skills_required
        assert "express" in full_stack.missing_skills

    def test_deterministic(self, engine, sample):
        """Test that repeated runs produce identical output."""
        first = to_payload(engine.score_and_rank_jobs(sample["candidateSkills"], sample["jobs"]))
        second = to_payload(engine.score_and_rank_jobs(sample["candidateSkills"], sample["jobs"]))
        assert first == second


class TestSampleGaps:
    """Skill gaps for the sample candidate."""

    def test_gaps_from_ranked_jobs(self, engine, sample):
        """Test the top gaps computed from the ranked jobs."""
        ranked = engine.score_and_rank_jobs(sample["candidateSkills"], sample["jobs"])
        gaps = engine.compute_skill_gaps(sample["candidateSkills"], ranked)
        skills = [gap.skill for gap in gaps]

        assert len(gaps) == 5
        assert set(skills[:2]) == {"docker", "typescript"}
        assert set(skills[2:4]) == {"html", "css"}
        assert skills[4] == "aws"
        assert gaps[0].priority == Priority.HIGH.value
        assert gaps[1].priority == Priority.HIGH.value

    def test_gaps_exclude_candidate_skills(self, engine, sample):
        """Test that no gap is a skill the candidate already has."""
        ranked = engine.score_and_rank_jobs(sample["candidateSkills"], sample["jobs"])
        gaps = engine.compute_skill_gaps(sample["candidateSkills"], ranked, top_n=20)
        skills = {gap.skill for gap in gaps}

        assert skills.isdisjoint({"react", "javascript", "nodejs", "postgresql", "git"})

    def test_gaps_sorted_by_importance(self, engine, sample):
        """Test that importance never increases down the list."""
        ranked = engine.score_and_rank_jobs(sample["candidateSkills"], sample["jobs"])
        gaps = engine.compute_skill_gaps(sample["candidateSkills"], ranked, top_n=20)
        importances = [gap.importance for gap in gaps]

        assert importances == sorted(importances, reverse=True)

    def test_reason_quotes_titles(self, engine, sample):
        """Test that reasons weight job counts by relevance and name the roles.

        docker is missing in fs-002 (59) and fe-001 (34): 0.59 + 0.34 = 0.93
        relevant jobs, 18.6% of the five positions.
        """
        ranked = engine.score_and_rank_jobs(sample["candidateSkills"], sample["jobs"])
        gaps = engine.compute_skill_gaps(sample["candidateSkills"], ranked)
        docker = next(gap for gap in gaps if gap.skill == "docker")

        assert docker.reason == (
            "Missing in 1 relevant job(s) (18.6% of positions). "
            "Required for roles like: Full Stack Developer, Frontend Engineer."
        )
        assert docker.example_titles == ["Full Stack Developer", "Frontend Engineer"]

    def test_analyze_matches_two_calls(self, engine, sample):
        """Test that analyze equals ranking followed by gap computation."""
        result = engine.analyze(sample["candidateSkills"], sample["jobs"], top_n=3)
        ranked = engine.score_and_rank_jobs(sample["candidateSkills"], sample["jobs"])

        assert [job.id for job in result.jobs] == [job.id for job in ranked]
        assert result.gaps == engine.compute_skill_gaps(sample["candidateSkills"], ranked, top_n=3)


class TestJsonRoundTrip:
    """Tests for the request/response contract through JSON."""

    def test_module_functions_over_json(self, sample):
        """Test passing payloads that went through json.dumps/json.loads."""
        ranked = score_and_rank_jobs(sample["candidateSkills"], sample["jobs"])
        ranked_payload = json.loads(json.dumps(to_payload(ranked)))

        gaps = compute_skill_gaps(sample["candidateSkills"], ranked_payload, top_n=5)
        direct = compute_skill_gaps(sample["candidateSkills"], ranked, top_n=5)

        assert to_payload(gaps) == to_payload(direct)
        assert ranked_payload[0]["id"] == "fe-005"
        assert "relevanceScore" in ranked_payload[0]
