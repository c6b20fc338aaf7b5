"""
Unit tests for the Record Normalizer.
"""

import pytest
from src.models.review import NormalizedRecord, ReviewRecord
from src.agents.normalization import (
    RecordNormalizer,
    parse_coordinate,
    parse_count,
    parse_rating,
)


def _raw(record_id, rating="4 stars", count="10", lat="47.6", lon="-122.3", text="ok"):
    return ReviewRecord(
        record_id=record_id,
        store_location="Seattle",
        rating_text=rating,
        rating_count_text=count,
        latitude_text=lat,
        longitude_text=lon,
        review_text=text,
    )


@pytest.mark.parametrize("text,expected", [
    ("1 star", 1.0),
    ("3 stars", 3.0),
    ("5 Stars", 5.0),
    ("4.5 stars", 4.5),
    ("  2 stars  ", 2.0),
    ("4", 4.0),
])
def test_parse_rating(text, expected):
    assert parse_rating(text) == expected


@pytest.mark.parametrize("text", [None, "", "stars", "four stars", "nan stars", "inf"])
def test_parse_rating_failure_is_missing(text):
    assert parse_rating(text) is None


@pytest.mark.parametrize("text,expected", [
    ("10", 10),
    ("1,200", 1200),
    ("350", 350),
    ("12,345,678", 12345678),
    (" 0 ", 0),
])
def test_parse_count(text, expected):
    assert parse_count(text) == expected


@pytest.mark.parametrize("text", [None, "", "many", "1.5", "-3", "+5", "1_000", "١٢٣", "1 000"])
def test_parse_count_failure_is_missing(text):
    assert parse_count(text) is None


def test_parse_count_rejects_values_beyond_float_range():
    assert parse_count("9" * 400) is None
    assert parse_count("9" * 5000) is None
    assert parse_count("9" * 300) == int("9" * 300)


def test_parse_coordinate_bounds():
    assert parse_coordinate("47.6062", 90.0) == pytest.approx(47.6062)
    assert parse_coordinate("-180", 180.0) == -180.0
    assert parse_coordinate("91", 90.0) is None
    assert parse_coordinate("abc", 90.0) is None
    assert parse_coordinate(None, 90.0) is None
    assert parse_coordinate("nan", 90.0) is None


def test_drops_rows_with_missing_coordinates():
    """Only rows with both coordinates survive, in input order."""
    records = [
        _raw("r0"),
        _raw("r1", lat=None),
        _raw("r2", lon=""),
        _raw("r3", lat="not a number"),
        _raw("r4"),
    ]

    normalizer = RecordNormalizer()
    normalized = normalizer.normalize(records)

    assert [r.record_id for r in normalized] == ["r0", "r4"]
    assert normalizer.last_dropped_count == 3
    assert normalizer.last_dropped_ids == ["r1", "r2", "r3"]
    for record in normalized:
        assert record.latitude is not None
        assert record.longitude is not None


def test_bad_rating_or_count_keeps_row():
    """Parse failures become missing values without dropping the row."""
    records = [_raw("r0", rating="great"), _raw("r1", count="lots")]

    normalized = RecordNormalizer().normalize(records)

    assert len(normalized) == 2
    assert normalized[0].avg_rating is None
    assert normalized[0].rating_count == 10
    assert normalized[1].avg_rating == 4.0
    assert normalized[1].rating_count is None


def test_missing_review_text_becomes_empty_string():
    normalized = RecordNormalizer().normalize([_raw("r0", text=None)])
    assert normalized[0].review_text == ""


def test_normalized_record_validates_coordinates():
    with pytest.raises(ValueError):
        NormalizedRecord(
            record_id="x",
            store_location=None,
            avg_rating=3.0,
            rating_count=1,
            latitude=95.0,
            longitude=0.0,
        )


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
