"""
Tests for country location resolution.
"""

import pytest

from preprocessing.coordinates import CountryLocation, load_location_table, parse_dms_pair, resolve_location, validate


class TestParseDms:
    """CIA 'DD MM N, DDD MM E' strings."""

    def test_basic(self):
        assert parse_dms_pair("33 00 N, 65 00 E") == (33.0, 65.0)

    def test_minutes_and_hemispheres(self):
        lat, lon = parse_dms_pair("1 22 S, 103 48 W")
        assert lat == pytest.approx(-1 - 22 / 60)
        assert lon == pytest.approx(-103.8)

    def test_first_pair_wins(self):
        text = "metropolitan France: 46 00 N, 2 00 E; French Guiana: 4 00 N, 53 00 W"
        assert parse_dms_pair(text) == (46.0, 2.0)

    def test_unparseable(self):
        assert parse_dms_pair("somewhere warm") is None
        assert parse_dms_pair("") is None
        assert parse_dms_pair(None) is None

    def test_validate(self):
        assert validate(10, 20) == (10.0, 20.0)
        assert validate(95, 0) is None
        assert validate(0, -181) is None
        assert validate(None, 0) is None


class TestLocationTable:
    """Companion lookup CSV."""

    def test_load(self, tmp_path):
        path = tmp_path / "locations.csv"
        path.write_text(
            "Country,Code,Latitude,Longitude\n"
            "Norway,NO,60.47,8.47\n"
            "Nowhere,NW,abc,10\n"
            "Chile,,-35.68,-71.54\n"
        )
        table = load_location_table(path)
        assert set(table) == {"NORWAY", "CHILE"}
        assert table["NORWAY"] == CountryLocation(60.47, 8.47, "NO")
        assert table["CHILE"].code is None

    def test_missing_file(self, tmp_path):
        assert load_location_table(tmp_path / "absent.csv") == {}

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "locations.csv"
        path.write_text("Country,Code,Latitude,Longitude\nChile,CL,-35.68,-71.54\nNorway,NO,60.47,8.47,1,2,3\n")
        assert load_location_table(path) == {}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "locations.csv"
        path.write_text("")
        assert load_location_table(path) == {}

    def test_resolve_prefers_lookup(self):
        lookup = {"NORWAY": CountryLocation(60.0, 8.0, "NO")}
        assert resolve_location(" norway ", lookup, "10 00 N, 10 00 E") == ((60.0, 8.0), "NO")

    def test_resolve_falls_back_to_dms(self):
        assert resolve_location("Iceland", {}, "65 00 N, 18 00 W") == ((65.0, -18.0), None)
        assert resolve_location("Iceland", {}, None) == (None, None)
