"""
Central configuration for the Review Analysis report
Handles environment variables, paths, colors and logging settings
"""
import os
from pathlib import Path
from typing import Dict
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# =========================
# Base Paths
# =========================
PROJECT_ROOT = Path(__file__).resolve().parents[2]

OUTPUT_DIR = Path(
    os.getenv("REVIEW_REPORT_OUTPUT_DIR", str(PROJECT_ROOT / "output"))
)
LOGS_DIR = Path(os.getenv("REVIEW_REPORT_LOGS_DIR", str(PROJECT_ROOT / "logs")))

# =========================
# Date Settings
# =========================
# date-fns style tokens, translated by transformers.dates
DATE_PATTERN = os.getenv("REVIEW_REPORT_DATE_PATTERN", "MM-dd-yyyy")

# =========================
# Premise Settings
# =========================
class UnknownPremise:
    """Where publishers missing from the provider registry are bucketed"""
    OFF = "off"
    UNKNOWN = "unknown"

    ALL = (OFF, UNKNOWN)


UNKNOWN_PREMISE = os.getenv("REVIEW_REPORT_UNKNOWN_PREMISE", UnknownPremise.OFF)
if UNKNOWN_PREMISE not in UnknownPremise.ALL:
    raise RuntimeError(
        f"REVIEW_REPORT_UNKNOWN_PREMISE must be one of {UnknownPremise.ALL}, "
        f"got '{UNKNOWN_PREMISE}'"
    )

PREMISE_COLORS: Dict[str, str] = {
    "on": "#4A35A3",
    "off": "#F6BA79",
    "any": "#F4737E",
    "unknown": "#BFBFBF",
}

PREMISE_LABELS: Dict[str, str] = {
    "on": "On Premise",
    "off": "Off Premise",
    "any": "Any Premise",
    "unknown": "Unknown Premise",
}

# Line color for publishers without registry metadata
DEFAULT_SERIES_COLOR = "#3b82f6"

# =========================
# Chart Settings
# =========================
RATING_RANGE = (1, 5)
RATING_STEP = 0.5
GAP_COLOR = "rgba(0,0,0,0.2)"

# Container ids used by the report page
CONTAINERS: Dict[str, str] = {
    "publisher_doughnut": "total-review-doughnut-publisher-chart",
    "publisher_legend": "total-review-doughnut-legend",
    "publisher_line": "rating-trends-over-time-line-chart-publisher",
    "providers": "providers",
    "premise_doughnut": "total-review-doughnut-premise-chart",
    "premise_legend": "total-review-doughnut-premise-legend",
    "premise_line": "rating-trends-over-time-line-chart-premise",
}

# =========================
# Logging Configuration
# =========================
LOG_LEVEL = os.getenv("REVIEW_REPORT_LOG_LEVEL", "INFO").upper()

LOG_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        },
        "detailed": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": LOG_LEVEL,
            "formatter": "standard",
            "stream": "ext://sys.stderr",
        },
        "file": {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "detailed",
            "filename": str(LOGS_DIR / "report.log"),
            "mode": "a",
            "delay": True,
        },
    },
    "loggers": {
        "review_report": {
            "level": "DEBUG",
            "handlers": ["console", "file"],
            "propagate": False,
        }
    },
    "root": {"level": LOG_LEVEL, "handlers": ["console"]},
}


# =========================
# Environment Info
# =========================
def print_config_summary():
    """Print configuration summary for debugging"""
    print("=" * 60)
    print("Review Report Configuration")
    print("=" * 60)
    print(f"Project Root: {PROJECT_ROOT}")
    print(f"Output Directory: {OUTPUT_DIR}")
    print(f"Logs Directory: {LOGS_DIR}")
    print(f"\nDate Pattern: {DATE_PATTERN}")
    print(f"Unknown Premise Bucket: {UNKNOWN_PREMISE}")
    print(f"Log Level: {LOG_LEVEL}")
    print("=" * 60)


if __name__ == "__main__":
    print_config_summary()
