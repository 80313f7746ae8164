"""
Shared utilities for the Review Analysis report
Contains file helpers, snapshot loading and logging setup
"""
import json
import logging
import logging.config
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

from . import config

logger = logging.getLogger(__name__)


# =========================
# Custom Exceptions
# =========================
class ReportError(Exception):
    """Base exception for report errors"""
    pass


class SnapshotError(ReportError):
    """Raised when a snapshot file cannot be read or has no review list"""
    pass


# =========================
# Logging
# =========================
def setup_logging(debug: bool = False, log_to_file: bool = True):
    """
    Configure logging from config.LOG_CONFIG

    Args:
        debug: Force DEBUG level on the console handler
        log_to_file: Keep the file handler (creates LOGS_DIR)
    """
    log_config = json.loads(json.dumps(config.LOG_CONFIG))

    if debug:
        log_config["handlers"]["console"]["level"] = "DEBUG"
        log_config["root"]["level"] = "DEBUG"

    if log_to_file:
        Path(log_config["handlers"]["file"]["filename"]).parent.mkdir(
            parents=True, exist_ok=True
        )
    else:
        del log_config["handlers"]["file"]
        log_config["loggers"]["review_report"]["handlers"] = ["console"]

    logging.config.dictConfig(log_config)


# =========================
# JSON Utilities
# =========================
def read_json(file_path: Path) -> Any:
    """
    Read JSON file safely

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed JSON (None if file doesn't exist or is invalid)
    """
    if not file_path.exists():
        return None

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to read JSON {file_path}: {e}")
        return None


def write_json(file_path: Path, data: Any, atomic: bool = True):
    """
    Write JSON file safely

    Args:
        file_path: Path to output file
        data: Data to write
        atomic: Use atomic write (write to temp, then rename)
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)

    if atomic:
        temp_path = file_path.with_suffix(file_path.suffix + ".tmp")
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2, default=str)
        temp_path.replace(file_path)
    else:
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2, default=str)


def write_text(file_path: Path, text: str):
    """Write a UTF-8 text file, creating parent directories"""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(text, encoding="utf-8")


# =========================
# Snapshot Loading
# =========================
def extract_reviews(payload: Union[List, Dict, None]) -> List[Any]:
    """
    Pull the review list out of a decoded payload

    Accepts a bare list or an object holding it under 'reviews' or 'data'.
    Anything else yields an empty list.
    """
    if isinstance(payload, list):
        return payload

    if isinstance(payload, dict):
        for key in ("reviews", "data"):
            value = payload.get(key)
            if isinstance(value, list):
                return value

    return []


def load_snapshot(file_path: Union[str, Path]) -> List[Any]:
    """
    Load a review snapshot from a JSON file

    Args:
        file_path: Path to snapshot JSON

    Returns:
        List of raw review records

    Raises:
        SnapshotError: If the file is missing or not valid JSON
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise SnapshotError(f"Snapshot not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except ValueError as e:
        raise SnapshotError(f"Invalid JSON in {file_path}: {e}") from e

    reviews = extract_reviews(payload)
    if not reviews and payload:
        logger.warning(f"No review list found in {file_path}")

    logger.info(f"Loaded {len(reviews)} review records from {file_path}")
    return reviews


def resolve_output_dir(output_dir: Optional[Path] = None) -> Path:
    """Return output_dir (or config.OUTPUT_DIR), created if missing"""
    output_dir = Path(output_dir) if output_dir else config.OUTPUT_DIR
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir
