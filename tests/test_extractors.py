"""Tests for extractors."""

import json
import shutil

import pytest

from civic_share.extractors.json_file import JsonFileExtractor, load_jurisdiction_file
from tests.factories import DATA_DIR


class TestLoadJurisdictionFile:
    def test_loads_camel_case_document(self):
        data = load_jurisdiction_file(DATA_DIR / "liberty-township.json")

        assert data.jurisdiction.total_budget == 2850000
        assert data.jurisdiction.config.daily_rounding == 0.25
        assert data.revenue_sources[0].property_class == "real_estate"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ValueError, match="is not valid JSON"):
            load_jurisdiction_file(path)

    def test_schema_mismatch(self, tmp_path):
        """Empty category lists are rejected."""
        document = json.loads((DATA_DIR / "liberty-township.json").read_text())
        document["budgetCategories"] = []
        path = tmp_path / "empty.json"
        path.write_text(json.dumps(document))

        with pytest.raises(ValueError, match="does not match the jurisdiction data format"):
            load_jurisdiction_file(path)


class TestJsonFileExtractor:
    """Tests for JsonFileExtractor."""

    @pytest.fixture
    def config(self):
        """Create test configuration."""
        return {
            "data_dir": "data",
            "jurisdictions": {
                "liberty-township": {"name": "Liberty Township", "file": "liberty-township.json"},
                "riverside-city": None,
            },
        }

    @pytest.fixture
    def base_dir(self, tmp_path):
        shutil.copytree(DATA_DIR, tmp_path / "data")
        return tmp_path

    def test_init_requires_jurisdictions_config(self):
        """Test that initialization fails without a jurisdictions section."""
        with pytest.raises(ValueError, match="must include 'jurisdictions' section"):
            JsonFileExtractor({"data_dir": "data"})

    def test_available_jurisdictions(self, config, base_dir):
        extractor = JsonFileExtractor(config, base_dir=base_dir)
        assert extractor.available_jurisdictions() == ["liberty-township", "riverside-city"]

    def test_path_defaults_to_id(self, config, base_dir):
        extractor = JsonFileExtractor(config, base_dir=base_dir)
        assert extractor.path_for("riverside-city") == base_dir / "data" / "riverside-city.json"

    def test_extract_success(self, config, base_dir):
        extractor = JsonFileExtractor(config, base_dir=base_dir)
        data = extractor.extract("riverside-city")

        assert data.jurisdiction.name == "City of Riverside"
        assert len(data.budget_categories) > 0

    def test_extract_unknown_jurisdiction(self, config, base_dir):
        extractor = JsonFileExtractor(config, base_dir=base_dir)

        with pytest.raises(ValueError, match="Available: liberty-township, riverside-city"):
            extractor.extract("springfield")

    def test_extract_missing_file(self, config, base_dir):
        (base_dir / "data" / "riverside-city.json").unlink()
        extractor = JsonFileExtractor(config, base_dir=base_dir)

        with pytest.raises(ValueError, match="Data file for 'riverside-city' not found"):
            extractor.extract("riverside-city")

    def test_extract_id_mismatch(self, config, base_dir):
        config["jurisdictions"]["riverside-city"] = {"file": "liberty-township.json"}
        extractor = JsonFileExtractor(config, base_dir=base_dir)

        with pytest.raises(ValueError, match="expected 'riverside-city'"):
            extractor.extract("riverside-city")
