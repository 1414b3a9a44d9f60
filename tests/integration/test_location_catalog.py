"""Integration tests for the bundled location catalog."""

import json

import pytest

from plus_shipping.db.location_catalog import JsonLocationRepository
from plus_shipping.utils.error_handler import ConfigurationException, ErrorCode, NotFoundException, ValidationException

EXPECTED_AREAS = [
    "hokkaido",
    "kita-tohoku",
    "minami-tohoku",
    "kanto",
    "shinetsu",
    "hokuriku",
    "chubu",
    "kansai",
    "chugoku",
    "shikoku",
    "kita-kyushu",
    "minami-kyushu",
    "okinawa",
]


@pytest.fixture
def catalog():
    return JsonLocationRepository()


class TestBundledCatalog:
    """Tests against the packaged locations.json."""

    def test_thirteen_areas_in_order(self, catalog):
        assert [location.area for location in catalog.find_all()] == EXPECTED_AREAS

    def test_every_location_is_a_distribution_center(self, catalog):
        locations = catalog.find_all()

        assert all("配送センター" in location.name for location in locations)
        assert len({location.area for location in locations}) == 13

    def test_hokkaido(self, catalog):
        location = catalog.find_by_area("hokkaido")

        assert location.name == "北海道配送センター"
        assert str(location.postal_code) == "060-8588"
        assert str(location.prefecture) == "北海道"
        assert location.city == "札幌市中央区"
        assert str(location.phone) == "011-231-4111"
        assert location.address2 == ""

    def test_kanto_and_okinawa(self, catalog):
        assert str(catalog.find_by_area("kanto").postal_code) == "163-8001"
        assert str(catalog.find_by_area("okinawa").prefecture) == "沖縄県"

    def test_unknown_area(self, catalog):
        with pytest.raises(NotFoundException, match="Location not found for area: tokyo") as exc_info:
            catalog.find_by_area("tokyo")

        assert exc_info.value.error_code == ErrorCode.LOCATION_NOT_FOUND

    def test_find_all_returns_a_copy(self, catalog):
        catalog.find_all().clear()
        assert len(catalog.find_all()) == 13


class TestCatalogFiles:
    """Tests with custom catalog files."""

    def test_custom_file(self, locations_json):
        catalog = JsonLocationRepository(locations_json)
        assert [location.area for location in catalog.find_all()] == ["hokkaido", "kanto"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationException, match="Locations file not found"):
            JsonLocationRepository(tmp_path / "missing.json").find_all()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "locations.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(ConfigurationException, match="Invalid JSON"):
            JsonLocationRepository(path).find_all()

    def test_missing_field_fails_whole_load(self, tmp_path):
        path = tmp_path / "locations.json"
        path.write_text(json.dumps([{"area": "hokkaido", "name": "北海道配送センター"}]), encoding="utf-8")

        with pytest.raises(ConfigurationException, match="Invalid locations file"):
            JsonLocationRepository(path).find_all()

    def test_invalid_postal_code_fails_whole_load(self, tmp_path):
        record = {
            "area": "hokkaido",
            "name": "北海道配送センター",
            "address1": "北3条西6丁目",
            "address2": None,
            "city": "札幌市中央区",
            "province": "北海道",
            "zip": "06-08588",
            "phone": "011-231-4111",
        }
        path = tmp_path / "locations.json"
        path.write_text(json.dumps([record], ensure_ascii=False), encoding="utf-8")

        with pytest.raises(ValidationException, match="hyphen must be at position 3"):
            JsonLocationRepository(path).find_all()
