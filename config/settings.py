"""
Configuration settings for StoreLens.

Centralized configuration for all pipeline stages.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"
OUTPUT_ROOT = PROJECT_ROOT / "output"

# Input resources
REVIEWS_CSV_PATH = os.getenv("STORELENS_REVIEWS_CSV", str(DATA_ROOT / "reviews.csv"))
LEXICON_PATH = os.getenv("STORELENS_LEXICON", str(DATA_ROOT / "sentiment_lexicon.csv"))

# Input schema (column names of the raw review table)
COLUMN_STORE_LOCATION = "store_location"
COLUMN_RATING = "rating"
COLUMN_RATING_COUNT = "rating_count"
COLUMN_LATITUDE = "latitude"
COLUMN_LONGITUDE = "longitude"
COLUMN_REVIEW = "review"
REQUIRED_COLUMNS = (
    COLUMN_STORE_LOCATION,
    COLUMN_RATING,
    COLUMN_RATING_COUNT,
    COLUMN_LATITUDE,
    COLUMN_LONGITUDE,
    COLUMN_REVIEW,
)

# Record Normalizer
RATING_SUFFIXES = ("stars", "star")  # Longest first
COUNT_GROUPING_SEPARATORS = (",",)
RATING_EXPECTED_RANGE = (1.0, 5.0)  # Logged when outside, not enforced

# Feature Assembler
FEATURE_NAMES = ("avg_rating", "rating_count", "sentiment_score")
ZERO_VARIANCE_TOLERANCE = 1e-12

# PCA Engine
EIGENVALUE_RELATIVE_TOLERANCE = 1e-10

# Geospatial Scaler (rendering weight domain)
WEIGHT_RANGE = (1.0, 10.0)

# Ingestion
USE_MOCK_DATA = os.getenv("STORELENS_USE_MOCK_DATA", "false").lower() == "true"
MOCK_REVIEW_COUNT = 40

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "storelens.log"
