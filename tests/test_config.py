"""
Unit tests for config module
Tests defaults, environment overrides and report constants
"""
import pytest
import importlib
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from review_report import config


ENV_VARS = [
    "REVIEW_REPORT_DATE_PATTERN",
    "REVIEW_REPORT_UNKNOWN_PREMISE",
    "REVIEW_REPORT_OUTPUT_DIR",
]


@pytest.fixture
def reload_config(monkeypatch):
    """Reload config under patched env, then restore it"""
    yield lambda: importlib.reload(config)

    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    importlib.reload(config)


# =========================
# Configuration Tests
# =========================
@pytest.mark.unit
class TestConfigLoading:
    """Test configuration loading and environment variables"""

    def test_project_root_path(self):
        assert config.PROJECT_ROOT.exists()
        assert (config.PROJECT_ROOT / "src" / "review_report").is_dir()

    def test_directories_defined(self):
        assert isinstance(config.OUTPUT_DIR, Path)
        assert isinstance(config.LOGS_DIR, Path)

    def test_env_overrides(self, monkeypatch, reload_config, temp_dir):
        monkeypatch.setenv("REVIEW_REPORT_DATE_PATTERN", "yyyy-MM-dd")
        monkeypatch.setenv("REVIEW_REPORT_UNKNOWN_PREMISE", "unknown")
        monkeypatch.setenv("REVIEW_REPORT_OUTPUT_DIR", str(temp_dir))
        reload_config()

        assert config.DATE_PATTERN == "yyyy-MM-dd"
        assert config.UNKNOWN_PREMISE == "unknown"
        assert config.OUTPUT_DIR == temp_dir

    def test_invalid_unknown_premise(self, monkeypatch, reload_config):
        monkeypatch.setenv("REVIEW_REPORT_UNKNOWN_PREMISE", "sometimes")
        with pytest.raises(RuntimeError, match="REVIEW_REPORT_UNKNOWN_PREMISE"):
            reload_config()


@pytest.mark.unit
class TestReportConstants:
    """Test colors, labels and containers"""

    def test_premise_keys(self):
        assert set(config.PREMISE_COLORS) == {"on", "off", "any", "unknown"}
        assert set(config.PREMISE_LABELS) == set(config.PREMISE_COLORS)

    def test_premise_labels(self):
        assert config.PREMISE_LABELS["on"] == "On Premise"
        assert config.PREMISE_LABELS["off"] == "Off Premise"
        assert config.PREMISE_LABELS["any"] == "Any Premise"

    def test_colors_are_hex(self):
        colors = list(config.PREMISE_COLORS.values()) + [config.DEFAULT_SERIES_COLOR]
        for color in colors:
            assert color.startswith("#") and len(color) == 7

    def test_containers(self):
        assert set(config.CONTAINERS) == {
            "publisher_doughnut", "publisher_legend", "publisher_line",
            "providers",
            "premise_doughnut", "premise_legend", "premise_line",
        }
        assert len(set(config.CONTAINERS.values())) == 7

    def test_rating_axis(self):
        assert config.RATING_RANGE == (1, 5)
        assert config.RATING_STEP == 0.5

    def test_unknown_premise_values(self):
        assert config.UnknownPremise.ALL == ("off", "unknown")

    def test_log_config_has_package_logger(self):
        assert "review_report" in config.LOG_CONFIG["loggers"]
        assert config.LOG_CONFIG["disable_existing_loggers"] is False

    def test_print_config_summary(self, capsys):
        config.print_config_summary()
        out = capsys.readouterr().out
        assert "Date Pattern" in out
        assert "Unknown Premise Bucket" in out
