"""
Pytest configuration and shared fixtures
"""
import pytest
from pathlib import Path
import tempfile
import shutil
import json
import sys
from unittest.mock import Mock

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# =========================
# Pytest Configuration
# =========================
def pytest_configure(config):
    """Configure pytest markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no I/O)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (file system, full report)"
    )
    config.addinivalue_line(
        "markers", "slow: Slow tests (large datasets)"
    )


# =========================
# Directory Fixtures
# =========================
@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


# =========================
# Sample Data Fixtures
# =========================
@pytest.fixture
def sample_snapshot():
    """Two publishers over two days"""
    return [
        {"publisher": "Google", "date": "2025-07-01T00:00:00.000Z", "rating": 4, "locationId": 1},
        {"publisher": "Google", "date": "2025-07-01T00:00:00.000Z", "rating": 5, "locationId": 2},
        {"publisher": "Yelp", "date": "2025-07-02T00:00:00.000Z", "rating": 3, "locationId": 1},
    ]


@pytest.fixture
def messy_snapshot():
    """Snapshot with malformed records, dates and ratings"""
    return [
        {"publisher": "Yelp", "date": "2025-07-03T00:00:00.000Z", "rating": "4", "locationId": "A"},
        {"publisher": "Google", "date": "not-a-date", "rating": 5, "locationId": "B"},
        {"publisher": "Google", "date": "2025-07-01T00:00:00.000Z", "rating": "great", "locationId": "A"},
        {"publisher": "Google", "date": "2025-07-02T00:00:00.000Z", "rating": 2, "locationId": None},
        {"publisher": "", "date": "2025-07-01T00:00:00.000Z", "rating": 1, "locationId": "C"},
        {"publisher": None, "date": "2025-07-01T00:00:00.000Z", "rating": 1},
        "not a record",
        None,
        {"publisher": "Local Blog", "date": "2025-07-02T00:00:00.000Z", "rating": 1, "locationId": "A"},
        {"publisher": "DoorDash", "date": "2025-07-03T00:00:00.000Z", "rating": None, "locationId": "D"},
    ]


@pytest.fixture
def exported_snapshot():
    """Records using the capitalized field names of exported payloads"""
    return [
        {"Publisher": "OpenTable", "Date": "2025-07-02T00:00:00.000Z", "Rating": 5, "LocationId": 10},
        {"Publisher": "UberEats", "Date": "2025-07-01T00:00:00.000Z", "Rating": 3, "LocationId": 11},
    ]


@pytest.fixture
def production_snapshot():
    """Larger snapshot simulating a month of reviews across publishers"""
    publishers = ["Google", "Yelp", "DoorDash", "GrubHub", "TripAdvisor", "Neighborhood Blog"]

    data = []
    for i in range(600):
        data.append({
            "publisher": publishers[i % len(publishers)],
            "date": f"2025-07-{1 + i % 30:02d}T00:00:00.000Z",
            "rating": 1 + (i % 5),
            "locationId": i % 25,
        })
    return data


# =========================
# File Fixtures
# =========================
@pytest.fixture
def snapshot_file(temp_dir, sample_snapshot):
    """Sample snapshot saved as a bare JSON list"""
    path = temp_dir / "snapshot.json"
    with open(path, "w") as f:
        json.dump(sample_snapshot, f)
    return path


@pytest.fixture
def wrapped_snapshot_file(temp_dir, sample_snapshot):
    """Sample snapshot saved under a 'reviews' key"""
    path = temp_dir / "wrapped.json"
    with open(path, "w") as f:
        json.dump({"reviews": sample_snapshot, "generated_at": "2025-07-03"}, f)
    return path


# =========================
# Renderer Mock Fixtures
# =========================
@pytest.fixture
def renderer_mocks():
    """Chart and legend collaborators sharing one parent to record call order"""
    parent = Mock()
    return parent, parent.charts, parent.legends
