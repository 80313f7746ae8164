"""
Unit tests for the provider registry
"""
import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from review_report import providers
from review_report.providers import ProviderMeta, lookup, normalize_label_key, registry_order


@pytest.mark.unit
class TestNormalizeLabelKey:
    """Test label key normalization"""

    def test_lowercases_and_strips_whitespace(self):
        assert normalize_label_key("Uber Eats ") == "ubereats"
        assert normalize_label_key("  Trip\tAdvisor\n") == "tripadvisor"

    def test_none_is_empty(self):
        assert normalize_label_key(None) == ""

    def test_non_string_is_stringified(self):
        assert normalize_label_key(123) == "123"


@pytest.mark.unit
class TestLookup:
    """Test case/whitespace-insensitive lookup"""

    def test_same_meta_for_spelling_variants(self):
        expected = lookup("Google")
        assert expected is not None
        for label in ["google", "Google", "GOOGLE ", " g o o g l e"]:
            assert lookup(label) == expected

    def test_meta_fields(self):
        meta = lookup("doordash")
        assert isinstance(meta, ProviderMeta)
        assert meta.label == "DoorDash"
        assert meta.color == "#F799A1"
        assert meta.on_premises is False

    def test_multi_word_label(self):
        assert lookup("Uber Eats").label == "UberEats"
        assert lookup("open table").on_premises is True

    def test_unknown_publisher_returns_none(self):
        assert lookup("Neighborhood Blog") is None

    def test_empty_and_none_return_none(self):
        assert lookup("") is None
        assert lookup("   ") is None
        assert lookup(None) is None

    def test_meta_is_read_only(self):
        meta = lookup("Yelp")
        with pytest.raises(AttributeError):
            meta.color = "#000000"


@pytest.mark.unit
class TestRegistryOrder:
    """Test ordering helpers"""

    def test_known_labels_in_registry_order(self):
        labels = providers.known_labels()
        assert labels[0] == "Google"
        assert labels[-1] == "UberEats"
        assert len(labels) == len(providers.PROVIDERS) == 9

    def test_registry_order_sorts_known_first(self):
        ordered = registry_order(["Local Blog", "UberEats", "yelp", "Google", "Another Blog"])
        assert ordered == ["Google", "yelp", "UberEats", "Local Blog", "Another Blog"]

    def test_registry_order_empty(self):
        assert registry_order([]) == []
