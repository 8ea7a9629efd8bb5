"""Unit tests for dataset ingestion."""

import json

import pytest

from scentlocker.infrastructure.dataset.loader import (
    derive_id,
    extract_rows,
    load_dataset_file,
    parse_accords,
    parse_image_url,
    parse_count,
    parse_notes,
    parse_price,
    parse_rating,
    parse_records,
    parse_year,
    resolve_field,
    row_to_fragrance,
)
from scentlocker.utils.exceptions import DatasetFormatError, DatasetLoadError


class TestFieldParsers:
    """Test tolerant scalar parsing."""

    @pytest.mark.parametrize(
        "value, expected",
        [("2019.0", 2019), ("2006", 2006), (2015, 2015), (2010.0, 2010), ("n/a", None), (None, None)],
    )
    def test_parse_year(self, value, expected):
        assert parse_year(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [("4,12", 4.12), ("3.9", 3.9), (4, 4.0), ("7.5", None), ("-1", None), ("abc", None)],
    )
    def test_parse_rating(self, value, expected):
        assert parse_rating(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [("1234", 1234), ("1.234", 1234), ("1234.0", 1234), (987, 987), ("", None)],
    )
    def test_parse_count(self, value, expected):
        assert parse_count(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [("$120.00", 120.0), ("85", 85.0), (99.5, 99.5), ("free", None)],
    )
    def test_parse_price(self, value, expected):
        assert parse_price(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("https://img.example.com/a.jpg", "https://img.example.com/a.jpg"),
            (" http://img.example.com/b.png ", "http://img.example.com/b.png"),
            ("N/A", None),
            ("/images/c.jpg", None),
            ("ftp://img.example.com/d.jpg", None),
            ("https://", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse_image_url(self, value, expected):
        assert parse_image_url(value) == expected

    def test_parse_notes_from_string(self):
        assert parse_notes("bergamot, lemon ,, neroli") == ("bergamot", "lemon", "neroli")

    def test_parse_notes_from_list(self):
        assert parse_notes(["vanilla", " ", "musk"]) == ("vanilla", "musk")

    def test_parse_notes_other(self):
        assert parse_notes(42) == ()

    def test_parse_accords_levels(self):
        accords = parse_accords(
            {"woody": "Dominant", "amber": "Prominent", "citrus": "Moderate", "musky": "Faint"}
        )
        assert accords == {"woody": 100, "amber": 75, "citrus": 50, "musky": 25}

    def test_parse_accords_numeric_clamped(self):
        assert parse_accords({"sweet": 130, "fresh": 40}) == {"sweet": 100.0, "fresh": 40.0}

    def test_parse_accords_not_a_mapping(self):
        assert parse_accords(["woody"]) == {}


class TestRowConversion:
    """Test alias resolution and row mapping."""

    def test_first_non_empty_alias_wins(self):
        row = {"Perfume": "  ", "name": "Sauvage", "Name": "Other"}
        assert resolve_field(row, "name") == "Sauvage"

    def test_unknown_field(self):
        with pytest.raises(KeyError):
            resolve_field({}, "colour")

    def test_csv_export_row(self):
        row = {
            "url": "https://www.fragrantica.com/perfume/Tom-Ford/Black-Orchid-1018.html",
            "Perfume": "Black Orchid",
            "Brand": "Tom Ford",
            "Country": "USA",
            "Gender": "women",
            "Rating Value": "3,91",
            "Rating Count": "12.345",
            "Year": "2006.0",
            "Top": "truffle, black currant",
            "Middle": "orchid",
            "Base": "patchouli, vanilla",
            "mainaccord1": "oriental",
            "mainaccord2": "sweet",
            "mainaccord3": "",
        }

        fragrance = row_to_fragrance(row)

        assert fragrance.id == "Black-Orchid-1018"
        assert fragrance.name == "Black Orchid"
        assert fragrance.brand == "Tom Ford"
        assert fragrance.year == 2006
        assert fragrance.rating == pytest.approx(3.91)
        assert fragrance.rating_count == 12345
        assert fragrance.top == ("truffle", "black currant")
        assert fragrance.accords == {"oriental": 100.0, "sweet": 80.0}
        assert fragrance.image == row["url"]
        assert fragrance.gender == "women"

    def test_json_style_row(self):
        row = {
            "name": "Light Blue",
            "brand": "Dolce & Gabbana",
            "top_notes": ["lemon", "apple"],
            "accords": {"citrus": "Dominant"},
            "image_url": "https://img.example.com/lb.jpg",
            "price": "$90",
            "oilType": "Eau de Toilette",
        }

        fragrance = row_to_fragrance(row)

        assert fragrance.id == "light-blue"
        assert fragrance.top == ("lemon", "apple")
        assert fragrance.accords == {"citrus": 100.0}
        assert fragrance.image == "https://img.example.com/lb.jpg"
        assert fragrance.price == 90.0
        assert fragrance.oil_type == "Eau de Toilette"

    def test_main_accords_take_precedence(self):
        row = {"name": "X", "mainaccord1": "woody", "accords": {"floral": 100}}
        assert row_to_fragrance(row).accords == {"woody": 100.0}

    def test_row_without_name_dropped(self):
        assert row_to_fragrance({"brand": "Dior"}) is None

    def test_explicit_id(self):
        assert derive_id({"id": 42}, "Anything") == "42"

    def test_placeholder_image_dropped(self):
        fragrance = row_to_fragrance({"Perfume": "X", "image": "N/A"})
        assert fragrance.image is None
        assert not fragrance.has_image

    def test_out_of_range_rating_is_none(self):
        assert row_to_fragrance({"name": "X", "rating": "9"}).rating is None


class TestExtractRows:
    """Test accepted top-level shapes."""

    def test_array(self):
        assert extract_rows([{"name": "A"}, "junk"]) == [{"name": "A"}]

    def test_wrapped_object(self):
        assert extract_rows({"fragrances": [{"name": "A"}]}) == [{"name": "A"}]

    @pytest.mark.parametrize("data", [{"items": []}, "text", 3])
    def test_other_shapes_rejected(self, data):
        with pytest.raises(DatasetFormatError):
            extract_rows(data)

    def test_parse_records_skips_nameless(self):
        fragrances = parse_records([{"name": "A"}, {"brand": "B"}, {"Perfume": "C"}])
        assert [f.name for f in fragrances] == ["A", "C"]


class TestLoadDatasetFile:
    """Test file loading."""

    def test_loads_in_file_order(self, temp_data_dir):
        path = temp_data_dir / "perfumes.json"
        path.write_text(
            json.dumps({"fragrances": [{"name": "B"}, {"name": "A"}]}), encoding="utf-8"
        )

        assert [f.name for f in load_dataset_file(path)] == ["B", "A"]

    def test_missing_file(self, temp_data_dir):
        with pytest.raises(DatasetLoadError) as exc_info:
            load_dataset_file(temp_data_dir / "missing.json")

        assert "scentlocker convert" in exc_info.value.message
        assert exc_info.value.context["path"].endswith("missing.json")

    def test_invalid_json(self, temp_data_dir):
        path = temp_data_dir / "perfumes.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(DatasetLoadError):
            load_dataset_file(path)

    def test_unsupported_shape(self, temp_data_dir):
        path = temp_data_dir / "perfumes.json"
        path.write_text(json.dumps({"data": []}), encoding="utf-8")

        with pytest.raises(DatasetFormatError):
            load_dataset_file(path)
