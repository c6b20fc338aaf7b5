"""
Record Normalizer.

Parses raw string fields into typed values and drops rows
without a valid coordinate pair.
"""

import logging
import math
import re
from typing import List, Optional, Sequence

from src.models.review import NormalizedRecord, ReviewRecord
import config.settings as settings

logger = logging.getLogger(__name__)


def _suffix_pattern(suffixes: Sequence[str]) -> "re.Pattern":
    alternatives = "|".join(re.escape(s) for s in sorted(suffixes, key=len, reverse=True))
    return re.compile(rf"\s*(?:{alternatives})\s*$", re.IGNORECASE)


_RATING_SUFFIX = _suffix_pattern(settings.RATING_SUFFIXES)


def parse_rating(text: Optional[str]) -> Optional[float]:
    """
    Parse a rating string such as "4 stars" or "1 star".

    Returns:
        The rating as float, or None if it cannot be parsed
    """
    if text is None:
        return None

    stripped = _RATING_SUFFIX.sub("", text.strip())
    try:
        value = float(stripped)
    except ValueError:
        return None

    if not math.isfinite(value):
        return None
    return value


def parse_count(text: Optional[str]) -> Optional[int]:
    """
    Parse a comma-grouped integer such as "1,200".

    Returns:
        Non-negative int, or None if it cannot be parsed
    """
    if text is None:
        return None

    cleaned = text.strip()
    for separator in settings.COUNT_GROUPING_SEPARATORS:
        cleaned = cleaned.replace(separator, "")

    # Plain ASCII digits only: no sign, underscores or other numerals
    if not (cleaned.isascii() and cleaned.isdigit()):
        return None

    try:
        value = int(cleaned)
        float(value)
    except (ValueError, OverflowError):
        return None
    return value


def parse_coordinate(text: Optional[str], limit: float) -> Optional[float]:
    """
    Parse a latitude (limit=90) or longitude (limit=180).

    Returns:
        Finite float within [-limit, limit], or None
    """
    if text is None:
        return None

    try:
        value = float(str(text).strip())
    except ValueError:
        return None

    if not math.isfinite(value) or abs(value) > limit:
        return None
    return value


class RecordNormalizer:
    """
    Converts ReviewRecords into NormalizedRecords.

    Unparseable rating or count fields become None and the row is kept.
    Rows with a missing or invalid latitude/longitude are dropped.
    """

    def __init__(self):
        self.last_dropped_count = 0
        self.last_dropped_ids: List[str] = []

    def normalize(self, records: Sequence[ReviewRecord]) -> List[NormalizedRecord]:
        """
        Normalize a batch of raw records, preserving order.

        Args:
            records: Raw review records

        Returns:
            Normalized records (size <= input size)
        """
        normalized = []
        dropped = []

        for record in records:
            result = self.normalize_one(record)
            if result is None:
                dropped.append(record.record_id)
                continue
            normalized.append(result)

        self.last_dropped_count = len(dropped)
        self.last_dropped_ids = dropped

        if dropped:
            logger.info(f"Dropped {len(dropped)} of {len(records)} records with missing coordinates")
        logger.info(f"Normalized {len(normalized)} records")
        return normalized

    def normalize_one(self, record: ReviewRecord) -> Optional[NormalizedRecord]:
        """Normalize a single record, or return None if its coordinates are invalid."""
        latitude = parse_coordinate(record.latitude_text, 90.0)
        longitude = parse_coordinate(record.longitude_text, 180.0)
        if latitude is None or longitude is None:
            logger.debug(
                f"Dropping {record.record_id}: invalid coordinates "
                f"({record.latitude_text!r}, {record.longitude_text!r})"
            )
            return None

        avg_rating = parse_rating(record.rating_text)
        if avg_rating is None and record.rating_text is not None:
            logger.debug(f"Unparseable rating for {record.record_id}: {record.rating_text!r}")
        elif avg_rating is not None:
            low, high = settings.RATING_EXPECTED_RANGE
            if not (low <= avg_rating <= high):
                logger.debug(f"Rating outside expected range for {record.record_id}: {avg_rating}")

        rating_count = parse_count(record.rating_count_text)
        if rating_count is None and record.rating_count_text is not None:
            logger.debug(f"Unparseable rating count for {record.record_id}: {record.rating_count_text!r}")

        return NormalizedRecord(
            record_id=record.record_id,
            store_location=record.store_location,
            avg_rating=avg_rating,
            rating_count=rating_count,
            latitude=latitude,
            longitude=longitude,
            review_text=record.review_text or "",
        )
