"""Tests for seniority detection and the level signals."""

import pytest

from skillgap.domain.models import JobPosting
from skillgap.scoring import (
    ExperienceLevel,
    ExperienceLevelDetector,
    NeutralLevelSignal,
    SeniorityLevelSignal,
)


@pytest.fixture
def detector():
    """Create an ExperienceLevelDetector."""
    return ExperienceLevelDetector()


def make_job(title="Software Engineer", description=None):
    return JobPosting(id="job-1", title=title, description=description, source="test")


class TestDetect:
    """Tests for level detection."""

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Senior Software Engineer", ExperienceLevel.SENIOR),
            ("Sr. Backend Developer", ExperienceLevel.SENIOR),
            ("Junior Web Developer", ExperienceLevel.JUNIOR),
            ("Graduate Developer", ExperienceLevel.ENTRY),
            ("Team Lead, Payments", ExperienceLevel.LEAD),
            ("Staff Engineer", ExperienceLevel.PRINCIPAL),
        ],
    )
    def test_title_keywords(self, detector, title, expected):
        """Test that title keywords decide the level with high confidence."""
        info = detector.detect(title)
        assert info.level == expected
        assert info.confidence == 0.9

    def test_years_required(self, detector):
        """Test that stated years decide the level when the title is neutral."""
        info = detector.detect("Software Engineer", "Requires 3+ years of experience with Python")

        assert info.level == ExperienceLevel.MID
        assert info.confidence == 0.7
        assert info.years_required == 3

    def test_years_recorded_with_title_level(self, detector):
        """Test that years are still captured when the title decides."""
        info = detector.detect("Senior Engineer", "7 years experience")
        assert info.level == ExperienceLevel.SENIOR
        assert info.years_required == 7

    def test_entry_prose(self, detector):
        """Test entry-level hints in the description."""
        info = detector.detect("Developer", "No experience required, recent graduate welcome")
        assert info.level == ExperienceLevel.ENTRY
        assert info.confidence == 0.6

    def test_leadership_prose(self, detector):
        """Test leadership hints in the description."""
        info = detector.detect("Engineer", "You will mentor others")
        assert info.level == ExperienceLevel.SENIOR
        assert info.confidence == 0.5

    def test_default_mid(self, detector):
        """Test the low-confidence mid-level fallback."""
        info = detector.detect("Engineer", "Build things")
        assert info.level == ExperienceLevel.MID
        assert info.confidence == 0.3

    def test_empty_input(self, detector):
        """Test that no text yields an unknown level."""
        info = detector.detect("", None)
        assert info.level == ExperienceLevel.UNKNOWN
        assert info.confidence == 0.0


class TestCompatibility:
    """Tests for candidate/job fit."""

    @pytest.mark.parametrize(
        "years,required,expected",
        [(5, 5, 1.0), (5, 4, 0.9), (5, 3, 0.7), (5, 2, 0.5), (10, 2, 0.3)],
    )
    def test_with_years_required(self, detector, years, required, expected):
        """Test compatibility against stated years."""
        assert detector.calculate_compatibility(years, ExperienceLevel.MID, required) == expected

    @pytest.mark.parametrize(
        "years,level,expected",
        [
            (3, ExperienceLevel.MID, 1.0),
            (5, ExperienceLevel.MID, 0.8),
            (2, ExperienceLevel.SENIOR, 0.6),
            (0, ExperienceLevel.SENIOR, 0.4),
            (10, ExperienceLevel.JUNIOR, 0.2),
        ],
    )
    def test_with_level(self, detector, years, level, expected):
        """Test compatibility against typical years for the level."""
        assert detector.calculate_compatibility(years, level) == expected

    @pytest.mark.parametrize(
        "years,expected",
        [
            (0, ExperienceLevel.ENTRY),
            (2, ExperienceLevel.JUNIOR),
            (4, ExperienceLevel.MID),
            (7, ExperienceLevel.SENIOR),
            (10, ExperienceLevel.LEAD),
            (15, ExperienceLevel.PRINCIPAL),
        ],
    )
    def test_recommended_level(self, detector, years, expected):
        """Test the level a candidate should target."""
        assert detector.get_recommended_level(years) == expected


class TestLevelSignals:
    """Tests for the pluggable level signals."""

    def test_neutral_signal_abstains(self):
        """Test that the neutral signal never scores."""
        assert NeutralLevelSignal().score(make_job("Senior Engineer")) is None

    def test_seniority_signal_scores_fit(self):
        """Test a perfect fit scores 100."""
        signal = SeniorityLevelSignal(candidate_years=6)
        assert signal.score(make_job("Senior Engineer")) == 100.0

    def test_seniority_signal_scores_mismatch(self):
        """Test a poor fit scores low."""
        signal = SeniorityLevelSignal(candidate_years=0)
        assert signal.score(make_job("Principal Engineer")) == pytest.approx(20.0)

    def test_seniority_signal_abstains_on_weak_detection(self):
        """Test that low-confidence detection yields no score."""
        signal = SeniorityLevelSignal(candidate_years=3)
        assert signal.score(make_job("Engineer", "Build things")) is None

    def test_negative_years_rejected(self):
        """Test that negative experience is rejected."""
        with pytest.raises(ValueError):
            SeniorityLevelSignal(candidate_years=-1)
