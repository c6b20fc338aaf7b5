"""
Review data models.

Represents a review row at each stage of the pipeline:
raw (as ingested), normalized (typed fields), and scored (with sentiment).
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class ReviewRecord:
    """
    Raw review row, exactly as read from the input table.
    Every field except record_id may be missing.
    """
    record_id: str  # Stable identifier assigned at ingestion
    store_location: Optional[str] = None
    rating_text: Optional[str] = None  # e.g. "4 stars"
    rating_count_text: Optional[str] = None  # e.g. "1,200"
    latitude_text: Optional[str] = None
    longitude_text: Optional[str] = None
    review_text: Optional[str] = None


@dataclass(frozen=True)
class NormalizedRecord:
    """
    Review with typed numeric fields and a valid WGS84 coordinate pair.
    avg_rating and rating_count are None when their raw text did not parse.
    """
    record_id: str
    store_location: Optional[str]
    avg_rating: Optional[float]
    rating_count: Optional[int]
    latitude: float
    longitude: float
    review_text: str = ""

    def __post_init__(self):
        # Validate coordinates
        if not (math.isfinite(self.latitude) and -90.0 <= self.latitude <= 90.0):
            raise ValueError(f"Invalid latitude: {self.latitude}. Must be within [-90, 90]")
        if not (math.isfinite(self.longitude) and -180.0 <= self.longitude <= 180.0):
            raise ValueError(f"Invalid longitude: {self.longitude}. Must be within [-180, 180]")


@dataclass(frozen=True)
class ScoredRecord:
    """
    Normalized review joined with its lexicon sentiment score.
    """
    record: NormalizedRecord
    sentiment_score: int
    positive_count: int = 0
    negative_count: int = 0

    @property
    def record_id(self) -> str:
        return self.record.record_id

    @property
    def avg_rating(self) -> Optional[float]:
        return self.record.avg_rating

    @property
    def rating_count(self) -> Optional[int]:
        return self.record.rating_count

    def feature_vector(self) -> Optional[Tuple[float, float, float]]:
        """
        Fixed-order (avg_rating, rating_count, sentiment_score) tuple.

        Returns:
            The tuple, or None if any component is missing
        """
        values = (self.record.avg_rating, self.record.rating_count, self.sentiment_score)
        if any(v is None for v in values):
            return None
        return tuple(float(v) for v in values)
