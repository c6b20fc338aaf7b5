"""
PCA Engine.

Eigen-decomposition of the feature correlation matrix, explained
variance, scores and loadings.
"""

import logging
from typing import List

import numpy as np

from src.models.analysis import ExplainedVariance, FeatureMatrix, PCAResult
from src.utils.errors import InsufficientDataError, SingularMatrixError
import config.settings as settings

logger = logging.getLogger(__name__)


class PCAEngine:
    """
    Principal component analysis over standardized features.

    The covariance of standardized data is the correlation matrix, so
    eigenvalues sum to the number of features.
    """

    def __init__(self, relative_tolerance: float = settings.EIGENVALUE_RELATIVE_TOLERANCE):
        """
        Args:
            relative_tolerance: Eigenvalues at or below relative_tolerance * max
                eigenvalue count as zero when checking rank
        """
        self.relative_tolerance = relative_tolerance

    def fit(self, matrix: FeatureMatrix) -> PCAResult:
        """
        Compute the PCA result for a full standardized feature matrix.

        Args:
            matrix: Output of FeatureAssembler.assemble()

        Returns:
            PCAResult with one component per feature

        Raises:
            SingularMatrixError: If the correlation matrix is singular or ill-conditioned
        """
        z = np.asarray(matrix.standardized, dtype=float)
        n_records, n_features = z.shape
        if n_records < 2:
            raise InsufficientDataError(f"PCA needs at least 2 records, got {n_records}")

        correlation = self.correlation_matrix(z)
        eigenvalues, eigenvectors = self._decompose(correlation, n_records)

        scores = z @ eigenvectors
        component_names = tuple(f"PC{i + 1}" for i in range(n_features))
        variance = self._variance_table(component_names, eigenvalues)

        logger.info(
            "PCA complete: "
            + ", ".join(f"{v.component}={v.proportion:.1%}" for v in variance)
        )

        return PCAResult(
            feature_names=tuple(matrix.feature_names),
            component_names=component_names,
            eigenvalues=eigenvalues,
            variance=variance,
            scores=scores,
            loadings=eigenvectors,
            record_ids=tuple(matrix.record_ids),
            avg_ratings=tuple(matrix.avg_ratings),
        )

    @staticmethod
    def correlation_matrix(z: np.ndarray) -> np.ndarray:
        """Covariance of standardized data, Z^T Z / (n - 1)."""
        return (z.T @ z) / (z.shape[0] - 1)

    def _decompose(self, correlation: np.ndarray, n_records: int):
        """
        Symmetric eigen-decomposition, sorted by descending eigenvalue.

        Each eigenvector is oriented so its largest-magnitude entry is positive.
        """
        if not np.all(np.isfinite(correlation)):
            raise SingularMatrixError("Correlation matrix contains non-finite values")

        eigenvalues, eigenvectors = np.linalg.eigh(correlation)
        order = np.argsort(eigenvalues)[::-1]
        eigenvalues = eigenvalues[order]
        eigenvectors = eigenvectors[:, order]

        largest = eigenvalues[0]
        if largest <= 0:
            raise SingularMatrixError("Correlation matrix has zero total variance")

        # Round-off can leave tiny negative eigenvalues
        eigenvalues = np.where(eigenvalues < 0, 0.0, eigenvalues)

        # With n records the centered data has rank at most n - 1. A single
        # null direction is unique up to sign; a wider null space is not.
        n_features = correlation.shape[0]
        expected_rank = min(n_features, n_records - 1)
        rank = int(np.sum(eigenvalues > self.relative_tolerance * largest))
        if n_features - rank > 1:
            logger.error(
                f"Correlation matrix is singular: {n_features - rank} null directions, "
                f"eigenvalues={eigenvalues.tolist()}"
            )
            raise SingularMatrixError(
                f"Correlation matrix has {n_features - rank} zero eigenvalues; trailing "
                f"components are not uniquely defined ({n_records} records)"
            )
        if rank < expected_rank:
            logger.error(
                f"Correlation matrix is singular: rank {rank} < {expected_rank}, "
                f"eigenvalues={eigenvalues.tolist()}"
            )
            raise SingularMatrixError(
                f"Correlation matrix is singular or near-singular (rank {rank} of "
                f"{expected_rank}); features are collinear"
            )

        for j in range(eigenvectors.shape[1]):
            pivot = np.argmax(np.abs(eigenvectors[:, j]))
            if eigenvectors[pivot, j] < 0:
                eigenvectors[:, j] = -eigenvectors[:, j]

        return eigenvalues, eigenvectors

    @staticmethod
    def _variance_table(component_names, eigenvalues: np.ndarray) -> List[ExplainedVariance]:
        total = float(eigenvalues.sum())
        proportions = eigenvalues / total
        cumulative = np.cumsum(proportions)
        return [
            ExplainedVariance(
                component=name,
                eigenvalue=float(eigenvalues[i]),
                proportion=float(proportions[i]),
                cumulative_proportion=float(cumulative[i]),
            )
            for i, name in enumerate(component_names)
        ]
