"""
Feature Assembler & Standardizer.

Joins sentiment onto normalized records, applies the complete-case
policy and z-score normalizes the (avg_rating, rating_count,
sentiment_score) feature set.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Mapping, Sequence

import numpy as np

from src.agents.sentiment import SentimentBreakdown
from src.models.analysis import FeatureMatrix
from src.models.review import NormalizedRecord, ScoredRecord
from src.utils.errors import DegenerateFeatureError, InsufficientDataError
import config.settings as settings

logger = logging.getLogger(__name__)


class FeatureAssembler:
    """
    Builds the standardized feature matrix used by the PCA Engine.
    """

    def __init__(
        self,
        feature_names: Sequence[str] = settings.FEATURE_NAMES,
        zero_variance_tolerance: float = settings.ZERO_VARIANCE_TOLERANCE
    ):
        """
        Args:
            feature_names: Column names for the three features, in order
            zero_variance_tolerance: Standard deviations at or below this are degenerate
        """
        self.feature_names = tuple(feature_names)
        self.zero_variance_tolerance = zero_variance_tolerance
        self.last_unscored_ids: List[str] = []

    def join(
        self,
        records: Sequence[NormalizedRecord],
        scores: Mapping[str, SentimentBreakdown]
    ) -> List[ScoredRecord]:
        """
        Attach each record's sentiment by record_id (one-to-one).

        Records without a score are dropped and counted.
        """
        scored = []
        unscored = []

        for record in records:
            breakdown = scores.get(record.record_id)
            if breakdown is None:
                unscored.append(record.record_id)
                continue
            scored.append(
                ScoredRecord(
                    record=record,
                    sentiment_score=breakdown.score,
                    positive_count=breakdown.positive,
                    negative_count=breakdown.negative,
                )
            )

        self.last_unscored_ids = unscored
        if unscored:
            logger.warning(f"{len(unscored)} records had no sentiment score and were dropped")
        return scored

    def assemble(self, scored: Sequence[ScoredRecord]) -> FeatureMatrix:
        """
        Select features, drop incomplete rows, standardize.

        Args:
            scored: Records with sentiment attached

        Returns:
            FeatureMatrix (row order preserved)

        Raises:
            InsufficientDataError: If fewer than 2 complete records remain
            DegenerateFeatureError: If a feature has zero variance
        """
        record_ids = []
        avg_ratings = []
        rows = []
        dropped = []

        for record in scored:
            vector = record.feature_vector()
            if vector is None:
                dropped.append(record.record_id)
                continue
            record_ids.append(record.record_id)
            avg_ratings.append(vector[0])
            rows.append(vector)

        if dropped:
            logger.info(
                f"Complete-case filter dropped {len(dropped)} "
                f"of {len(scored)} records with missing features"
            )

        if len(rows) < 2:
            raise InsufficientDataError(
                f"Standardization needs at least 2 complete records, got {len(rows)}"
            )

        raw = np.asarray(rows, dtype=float)
        means, stds = self._column_statistics(raw)
        standardized = (raw - means) / stds

        logger.info(
            f"Assembled feature matrix: {raw.shape[0]} records x {raw.shape[1]} features"
        )
        for name, mean, std in zip(self.feature_names, means, stds):
            logger.debug(f"  {name}: mean={mean:.4f}, std={std:.4f}")

        return FeatureMatrix(
            record_ids=tuple(record_ids),
            feature_names=self.feature_names,
            raw=raw,
            standardized=standardized,
            means=means,
            stds=stds,
            avg_ratings=tuple(avg_ratings),
            dropped_record_ids=tuple(dropped),
        )

    def _column_statistics(self, raw: np.ndarray):
        """Sample mean and sample standard deviation per column."""
        with np.errstate(over="ignore", invalid="ignore"):
            means = raw.mean(axis=0)
            stds = raw.std(axis=0, ddof=1)

        for name, mean, std in zip(self.feature_names, means, stds):
            if not (np.isfinite(mean) and np.isfinite(std)):
                logger.error(f"Feature '{name}' statistics overflowed (mean={mean}, std={std})")
                raise DegenerateFeatureError(
                    name,
                    f"Feature '{name}' has non-finite mean or variance (values too large "
                    f"to standardize)"
                )
            if std <= self.zero_variance_tolerance:
                logger.error(f"Feature '{name}' has zero variance (std={std})")
                raise DegenerateFeatureError(name)

        return means, stds

    def build(
        self,
        records: Sequence[NormalizedRecord],
        scores: Mapping[str, SentimentBreakdown]
    ) -> FeatureMatrix:
        """
        Join then assemble; dropped_record_ids covers both unscored
        and incomplete records.
        """
        matrix = self.assemble(self.join(records, scores))
        if not self.last_unscored_ids:
            return matrix
        return replace(
            matrix,
            dropped_record_ids=tuple(self.last_unscored_ids) + matrix.dropped_record_ids,
        )


def standardization_report(matrix: FeatureMatrix) -> Dict[str, Dict[str, float]]:
    """Mean and std of each standardized column (≈0 and ≈1)."""
    z = matrix.standardized
    return {
        name: {"mean": float(z[:, i].mean()), "std": float(z[:, i].std(ddof=1))}
        for i, name in enumerate(matrix.feature_names)
    }
