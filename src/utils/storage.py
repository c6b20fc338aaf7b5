"""
Storage utility.

Writes the run's output tables for the rendering collaborator.
"""

import json
import os
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

import pandas as pd

from src.models.analysis import PCAResult
from src.models.review import NormalizedRecord

logger = logging.getLogger(__name__)

LOCATIONS_FILE = "locations.csv"
RATING_HISTOGRAM_FILE = "rating_histogram.csv"
PCA_SCORES_FILE = "pca_scores.csv"
PCA_LOADINGS_FILE = "pca_loadings.csv"
PCA_VARIANCE_FILE = "pca_variance.csv"
METADATA_FILE = "run_metadata.json"


def locations_frame(
    records: Sequence[NormalizedRecord],
    weights: Sequence[Optional[float]],
    sentiment: Optional[Dict[str, int]] = None
) -> pd.DataFrame:
    """Per-record geographic table: coordinates, rating, weight, sentiment."""
    sentiment = sentiment or {}
    rows = [
        {
            "record_id": r.record_id,
            "store_location": r.store_location,
            "avg_rating": r.avg_rating,
            "rating_count": r.rating_count,
            "latitude": r.latitude,
            "longitude": r.longitude,
            "weight": w,
            "sentiment_score": sentiment.get(r.record_id),
        }
        for r, w in zip(records, weights)
    ]
    columns = [
        "record_id", "store_location", "avg_rating", "rating_count",
        "latitude", "longitude", "weight", "sentiment_score",
    ]
    df = pd.DataFrame(rows, columns=columns)
    # Keep integer columns nullable instead of float
    df["rating_count"] = df["rating_count"].astype("Int64")
    df["sentiment_score"] = df["sentiment_score"].astype("Int64")
    return df


def rating_histogram_frame(records: Sequence[NormalizedRecord]) -> pd.DataFrame:
    """Count of records per avg_rating value, ascending; missing ratings excluded."""
    ratings = pd.Series([r.avg_rating for r in records], dtype="float64").dropna()
    counts = ratings.value_counts().sort_index()
    return pd.DataFrame({"avg_rating": counts.index.astype(float), "count": counts.values.astype(int)})


class StorageManager:
    """
    Manages file output for one pipeline run.

    Handles:
    - Geographic table (locations.csv)
    - Rating histogram input (rating_histogram.csv)
    - PCA scores, loadings and explained variance (pca_*.csv)
    - Run metadata (run_metadata.json)
    """

    def __init__(self, output_dir: str):
        """
        Initialize storage manager.

        Args:
            output_dir: Directory for output tables
        """
        self.output_dir = str(output_dir)
        os.makedirs(self.output_dir, exist_ok=True)
        logger.info(f"Initialized StorageManager with output_dir={self.output_dir}")

    def path_for(self, filename: str) -> str:
        return os.path.join(self.output_dir, filename)

    def save_frame(self, df: pd.DataFrame, filename: str) -> str:
        """
        Save a DataFrame as CSV.

        Returns:
            Path of the written file
        """
        filepath = self.path_for(filename)
        try:
            df.to_csv(filepath, index=False)
            logger.info(f"Saved {len(df)} rows to {filepath}")
        except OSError as e:
            logger.error(f"Failed to save {filename}: {e}")
            raise
        return filepath

    def save_locations(
        self,
        records: Sequence[NormalizedRecord],
        weights: Sequence[Optional[float]],
        sentiment: Optional[Dict[str, int]] = None
    ) -> str:
        return self.save_frame(locations_frame(records, weights, sentiment), LOCATIONS_FILE)

    def save_rating_histogram(self, records: Sequence[NormalizedRecord]) -> str:
        return self.save_frame(rating_histogram_frame(records), RATING_HISTOGRAM_FILE)

    def save_pca(self, result: PCAResult) -> List[str]:
        """Save scores, loadings and explained variance tables."""
        return [
            self.save_frame(result.scores_frame(), PCA_SCORES_FILE),
            self.save_frame(result.loadings_frame(), PCA_LOADINGS_FILE),
            self.save_frame(result.variance_frame(), PCA_VARIANCE_FILE),
        ]

    def save_metadata(self, metadata: Dict) -> str:
        """Save run metadata JSON, stamped with generated_at."""
        filepath = self.path_for(METADATA_FILE)
        payload = dict(metadata)
        payload["generated_at"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

        try:
            with open(filepath, 'w') as f:
                json.dump(payload, f, indent=2)
            logger.info(f"Metadata saved to {filepath}")
        except OSError as e:
            logger.error(f"Failed to save run metadata: {e}")
            raise
        return filepath
