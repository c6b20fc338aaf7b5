"""
Unit tests for the Ingestion Agent.
"""

import os
import tempfile

import pandas as pd
import pytest
from src.agents.ingestion import ReviewIngestionAgent
from src.utils.errors import InputSchemaError

CSV_TEXT = """store_location,rating,rating_count,latitude,longitude,review
"Seattle, WA",4 stars,"1,200",47.6,-122.3,Great coffee
Portland,1 star,10,,,Slow service
Denver,5 stars,350,39.7,-104.9,
"""


def test_load_reads_all_columns_as_text():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "reviews.csv")
        with open(path, "w") as f:
            f.write(CSV_TEXT)

        records = ReviewIngestionAgent().load(path)

    assert len(records) == 3
    assert records[0].store_location == "Seattle, WA"
    assert records[0].rating_text == "4 stars"
    assert records[0].rating_count_text == "1,200"
    assert records[0].latitude_text == "47.6"
    assert records[1].latitude_text is None
    assert records[1].longitude_text is None
    assert records[2].review_text is None


def test_record_ids_are_unique_and_ordered():
    df = pd.DataFrame({
        "store_location": ["a"] * 12,
        "rating": ["3 stars"] * 12,
        "rating_count": ["1"] * 12,
        "latitude": ["0"] * 12,
        "longitude": ["0"] * 12,
        "review": ["same text"] * 12,
    })

    records = ReviewIngestionAgent().from_frame(df)
    ids = [r.record_id for r in records]

    assert len(set(ids)) == 12
    assert ids == sorted(ids)


def test_missing_column_is_fatal():
    df = pd.DataFrame({"store_location": ["a"], "rating": ["3 stars"]})

    with pytest.raises(InputSchemaError):
        ReviewIngestionAgent().from_frame(df)


def test_column_names_are_case_insensitive():
    df = pd.DataFrame({
        "Store_Location": ["a"],
        "Rating": ["3 stars"],
        "Rating_Count": ["1"],
        "Latitude": ["0"],
        "Longitude": ["0"],
        "Review": ["ok"],
    })

    assert len(ReviewIngestionAgent().from_frame(df)) == 1


def test_mock_reviews_are_deterministic():
    first = ReviewIngestionAgent(use_mock_data=True, mock_count=20).load()
    second = ReviewIngestionAgent(use_mock_data=True, mock_count=20).load()

    assert first == second
    assert len(first) == 20
    assert any(r.latitude_text is None for r in first)


def test_file_mode_requires_path():
    with pytest.raises(ValueError):
        ReviewIngestionAgent().load(None)


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
