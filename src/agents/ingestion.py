"""
Ingestion Agent.

Reads the raw review table into ReviewRecord objects.
Supports both a CSV file and mock data for demos and tests.
"""

import logging
from typing import List, Optional

import pandas as pd

from src.models.review import ReviewRecord
from src.utils.errors import InputSchemaError
import config.settings as settings

logger = logging.getLogger(__name__)


class ReviewIngestionAgent:
    """
    Loads the review table once at process start.

    Every column is read as text; numeric parsing belongs to the
    Record Normalizer. Each row receives a stable record_id derived from
    its position, used later to join sentiment back one-to-one.
    """

    def __init__(self, use_mock_data: bool = False, mock_count: int = settings.MOCK_REVIEW_COUNT):
        """
        Initialize ingestion agent.

        Args:
            use_mock_data: If True, generate synthetic reviews instead of reading a file
            mock_count: Number of synthetic reviews to generate in mock mode
        """
        self.use_mock_data = use_mock_data
        self.mock_count = mock_count

        if use_mock_data:
            logger.info("Initialized ReviewIngestionAgent in MOCK mode")
        else:
            logger.info("Initialized ReviewIngestionAgent in FILE mode")

    def load(self, path: Optional[str] = None) -> List[ReviewRecord]:
        """
        Load raw review records.

        Args:
            path: CSV path (ignored in mock mode)

        Returns:
            List of ReviewRecord objects in input order

        Raises:
            InputSchemaError: If required columns are missing
            FileNotFoundError: If the CSV does not exist
        """
        if self.use_mock_data:
            return self._generate_mock_reviews(self.mock_count)

        if path is None:
            raise ValueError("A CSV path is required when mock mode is off")

        df = pd.read_csv(path, dtype=str, keep_default_na=True)
        records = self.from_frame(df)
        logger.info(f"Loaded {len(records)} raw reviews from {path}")
        return records

    def from_frame(self, df: pd.DataFrame) -> List[ReviewRecord]:
        """
        Convert a string-typed DataFrame into ReviewRecord objects.

        Raises:
            InputSchemaError: If required columns are missing
        """
        df = df.rename(columns=lambda c: str(c).strip().lower())
        missing = [c for c in settings.REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise InputSchemaError(f"Review table is missing required columns: {missing}")

        width = max(len(str(len(df))), 1)
        records = []
        for position, row in enumerate(df[list(settings.REQUIRED_COLUMNS)].itertuples(index=False)):
            values = [_cell(v) for v in row]
            records.append(
                ReviewRecord(
                    record_id=f"r{position:0{width}d}",
                    store_location=values[0],
                    rating_text=values[1],
                    rating_count_text=values[2],
                    latitude_text=values[3],
                    longitude_text=values[4],
                    review_text=values[5],
                )
            )
        return records

    def _generate_mock_reviews(self, count: int) -> List[ReviewRecord]:
        """
        Generate a deterministic synthetic review table.

        Creates realistic review patterns:
        - Mix of ratings and grouped review counts
        - Positive, negative and neutral texts
        - Some rows without coordinates (to exercise dropping)
        """
        templates = [
            ("Great coffee and friendly staff!", "5 stars", "1,204"),
            ("Love this location, always clean.", "5 stars", "856"),
            ("Good drinks but slow service.", "4 stars", "2,310"),
            ("Nice place to work, fast wifi.", "4 stars", "312"),
            ("Okay. Nothing special.", "3 stars", "97"),
            ("Wrong order twice, rude barista.", "2 stars", "445"),
            ("Terrible wait, cold drink, dirty tables!", "1 star", "1,870"),
            ("Slow and disappointing.", "2 stars", "63"),
            ("Excellent pastries, perfect latte?", "5 stars", "3,015"),
            ("Crowded and noisy but the coffee is fine.", "3 stars", "728"),
        ]
        cities = [
            ("Seattle, WA", 47.6062, -122.3321),
            ("Portland, OR", 45.5152, -122.6784),
            ("Denver, CO", 39.7392, -104.9903),
            ("Austin, TX", 30.2672, -97.7431),
            ("Chicago, IL", 41.8781, -87.6298),
        ]

        width = max(len(str(count)), 1)
        reviews = []
        for i in range(count):
            text, rating, rating_count = templates[i % len(templates)]
            city, lat, lon = cities[(i // len(templates) + i) % len(cities)]

            # Every 7th row lacks coordinates
            if i % 7 == 6:
                lat_text, lon_text = None, None
            else:
                lat_text = f"{lat + 0.01 * (i % 5):.4f}"
                lon_text = f"{lon - 0.01 * (i % 3):.4f}"

            reviews.append(
                ReviewRecord(
                    record_id=f"r{i:0{width}d}",
                    store_location=f"Store #{i + 1}, {city}",
                    rating_text=rating,
                    rating_count_text=rating_count,
                    latitude_text=lat_text,
                    longitude_text=lon_text,
                    review_text=text,
                )
            )

        logger.info(f"Generated {len(reviews)} mock reviews")
        return reviews


def _cell(value) -> Optional[str]:
    """Convert a pandas cell to str, mapping NaN/None to None."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    return str(value)
