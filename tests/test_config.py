"""Integration tests for configuration module."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from skillgap.config import (
    ConfigurationError,
    GapConfig,
    LogFormat,
    ScoringConfig,
    load_config,
    load_environment_config,
)

# Test fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"
REPO_ROOT = Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove SKILLGAP_* variables so the host environment cannot leak in."""
    for var in (
        "SKILLGAP_CONFIG",
        "SKILLGAP_CATALOG",
        "SKILLGAP_LOG_LEVEL",
        "SKILLGAP_LOG_FORMAT",
        "SKILLGAP_FUZZY_THRESHOLD",
    ):
        monkeypatch.delenv(var, raising=False)


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self):
        """Test loading a configuration file with every section."""
        config = load_config(FIXTURES_DIR / "valid_config.yaml")

        assert config.matching.fuzzy_threshold == 0.9
        assert config.matching.fuzzy_weight == 0.7
        assert config.matching.cache_size == 128
        assert config.scoring.weights.match == 0.4
        assert config.scoring.variety_target == 4
        assert config.scoring.neutral_level_score == 60
        assert config.ranking.recent_days == 14
        assert config.ranking.match_count_boost == 5
        assert config.gaps.default_top_n == 3
        assert config.extraction.section_aware is True
        assert config.concurrency.max_workers == 2
        assert config.logging.level == "DEBUG"
        assert config.logging.format == "json"

    def test_load_minimal_config(self):
        """Test that omitted sections fall back to defaults."""
        config = load_config(FIXTURES_DIR / "minimal_config.yaml")

        assert config.gaps.default_top_n == 8
        assert config.gaps.position_factor == 1.5
        assert config.matching.fuzzy_threshold == 0.85
        assert config.logging.format == LogFormat.KEY_VALUE.value

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        """Test built-in defaults when no config file can be found."""
        monkeypatch.chdir(tmp_path)
        config = load_config()

        assert config == ScoringConfig()
        assert config.scoring.weights.total == pytest.approx(1.0)
        assert config.catalog_path is None

    def test_default_file_discovered(self, tmp_path, monkeypatch):
        """Test that ./skillgap.yaml is picked up automatically."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "skillgap.yaml").write_text("matching:\n  fuzzy_weight: 0.5\n")

        assert load_config().matching.fuzzy_weight == 0.5

    def test_example_config_is_valid(self):
        """Test that the shipped example configuration loads cleanly."""
        assert load_config(REPO_ROOT / "skillgap.example.yaml") == ScoringConfig()

    def test_empty_file(self, tmp_path):
        """Test that an empty file means defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == ScoringConfig()


class TestConfigurationErrors:
    """Test configuration error reporting."""

    def test_missing_file(self, tmp_path):
        """Test that an explicit missing file is an error."""
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test that YAML syntax errors are reported."""
        path = tmp_path / "bad.yaml"
        path.write_text("matching:\n  fuzzy_threshold: [0.8\n")
        with pytest.raises(ConfigurationError, match="Failed to parse"):
            load_config(path)

    def test_top_level_not_mapping(self, tmp_path):
        """Test that a list document is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- matching\n- scoring\n")
        with pytest.raises(ConfigurationError, match="YAML mapping"):
            load_config(path)

    def test_out_of_range_value(self, tmp_path):
        """Test that values outside their range are reported with the field path."""
        path = tmp_path / "bad.yaml"
        path.write_text("matching:\n  fuzzy_threshold: 1.5\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        error = exc_info.value
        assert error.message == "Configuration validation failed"
        assert any("matching -> fuzzy_threshold" in e for e in error.errors)
        assert error.suggestions

    def test_invalid_log_level(self, tmp_path):
        """Test that unknown enum values are reported."""
        path = tmp_path / "bad.yaml"
        path.write_text("logging:\n  level: VERBOSE\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert any("logging -> level" in e for e in exc_info.value.errors)

    def test_error_message_format(self):
        """Test the formatted message with errors and suggestions."""
        error = ConfigurationError("Broken", errors=["first", "second"], suggestions=["fix it"])
        text = str(error)

        assert text.startswith("Broken")
        assert "  1. first" in text
        assert "  2. second" in text
        assert "  - fix it" in text

    def test_validation_error_names_source_file(self, tmp_path):
        """Test that a schema failure reports the file it came from."""
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("matching:\n  fuzzy_threshold: 2.0\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file, use_environment=False)

        assert exc_info.value.source == config_file
        assert f"File: {config_file}" in str(exc_info.value)


class TestModelValidation:
    """Test cross-field validation on the models."""

    def test_priority_cutoffs_ordered(self):
        """Test that the medium cutoff cannot precede the high cutoff."""
        with pytest.raises(ValidationError):
            GapConfig(high_rank_cutoff=5, medium_rank_cutoff=2)

    def test_frequency_ratios_ordered(self):
        """Test that the medium ratio cannot exceed the high ratio."""
        with pytest.raises(ValidationError):
            GapConfig(high_frequency_ratio=0.3, medium_frequency_ratio=0.6)

    def test_reason_titles_within_context(self):
        """Test that the reason cannot quote more titles than are kept."""
        with pytest.raises(ValidationError):
            GapConfig(max_context_titles=2, reason_titles=3)

    def test_all_weights_zero(self):
        """Test that at least one weight must be positive."""
        with pytest.raises(ValidationError):
            ScoringConfig(
                scoring={"weights": {"match": 0, "completeness": 0, "variety": 0, "level": 0}}
            )


class TestConfigurationWarnings:
    """Test soft warnings for suspicious values."""

    def test_weights_not_summing_to_one(self, tmp_path):
        """Test a warning when weights do not sum to 1."""
        path = tmp_path / "weights.yaml"
        path.write_text("scoring:\n  weights:\n    match: 0.9\n")
        with pytest.warns(UserWarning, match="sum to"):
            load_config(path)

    def test_low_threshold(self, tmp_path):
        """Test a warning for a permissive fuzzy threshold."""
        path = tmp_path / "threshold.yaml"
        path.write_text("matching:\n  fuzzy_threshold: 0.5\n")
        with pytest.warns(UserWarning, match="fuzzy_threshold"):
            load_config(path)


class TestEnvironmentOverrides:
    """Test SKILLGAP_* environment variables."""

    def test_threshold_override(self, monkeypatch):
        """Test that the environment wins over the file."""
        monkeypatch.setenv("SKILLGAP_FUZZY_THRESHOLD", "0.95")
        config = load_config(FIXTURES_DIR / "valid_config.yaml")
        assert config.matching.fuzzy_threshold == 0.95
        assert config.matching.cache_size == 128

    def test_logging_override(self, monkeypatch):
        """Test log level and format overrides (case-insensitive)."""
        monkeypatch.setenv("SKILLGAP_LOG_LEVEL", "warning")
        monkeypatch.setenv("SKILLGAP_LOG_FORMAT", "KEY-VALUE")
        config = load_config(FIXTURES_DIR / "valid_config.yaml")

        assert config.logging.level == "WARNING"
        assert config.logging.format == "key-value"

    def test_config_path_from_environment(self, monkeypatch):
        """Test that SKILLGAP_CONFIG selects the file."""
        monkeypatch.setenv("SKILLGAP_CONFIG", str(FIXTURES_DIR / "minimal_config.yaml"))
        assert load_config().gaps.default_top_n == 8

    def test_catalog_path_from_environment(self, monkeypatch, tmp_path):
        """Test that SKILLGAP_CATALOG sets catalog_path."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SKILLGAP_CATALOG", "/opt/catalog.yaml")
        assert load_config().catalog_path == "/opt/catalog.yaml"

    def test_environment_ignored_when_disabled(self, monkeypatch):
        """Test use_environment=False."""
        monkeypatch.setenv("SKILLGAP_FUZZY_THRESHOLD", "0.95")
        config = load_config(FIXTURES_DIR / "minimal_config.yaml", use_environment=False)
        assert config.matching.fuzzy_threshold == 0.85

    @pytest.mark.parametrize(
        "var,value",
        [
            ("SKILLGAP_LOG_LEVEL", "LOUD"),
            ("SKILLGAP_LOG_FORMAT", "xml"),
            ("SKILLGAP_FUZZY_THRESHOLD", "high"),
            ("SKILLGAP_FUZZY_THRESHOLD", "1.5"),
        ],
    )
    def test_invalid_environment(self, monkeypatch, var, value):
        """Test that invalid variables are rejected."""
        monkeypatch.setenv(var, value)
        with pytest.raises(ConfigurationError, match="Environment variable validation failed"):
            load_environment_config()

    def test_missing_config_from_environment(self, monkeypatch, tmp_path):
        """Test that SKILLGAP_CONFIG must point at an existing file."""
        monkeypatch.setenv("SKILLGAP_CONFIG", str(tmp_path / "missing.yaml"))
        with pytest.raises(ConfigurationError, match="not found"):
            load_config()

    def test_override_on_malformed_section(self, monkeypatch, tmp_path):
        """Test that an override onto a scalar section still fails validation cleanly."""
        path = tmp_path / "scalar.yaml"
        path.write_text("logging: verbose\n")
        monkeypatch.setenv("SKILLGAP_LOG_LEVEL", "debug")

        with pytest.raises(ConfigurationError, match="Configuration validation failed") as exc_info:
            load_config(path)
        assert any(e.startswith("logging") for e in exc_info.value.errors)
