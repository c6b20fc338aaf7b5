"""
Analysis data models.

Represents the standardized feature matrix and the PCA result
handed to the rendering collaborator.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np
import pandas as pd


@dataclass(frozen=True, eq=False)
class FeatureMatrix:
    """
    Complete-case feature matrix, raw and standardized.
    Row i of every array belongs to record_ids[i].
    """
    record_ids: Tuple[str, ...]
    feature_names: Tuple[str, ...]
    raw: np.ndarray  # shape (n_records, n_features)
    standardized: np.ndarray  # shape (n_records, n_features)
    means: np.ndarray  # shape (n_features,)
    stds: np.ndarray  # shape (n_features,), sample std (ddof=1)
    avg_ratings: Tuple[float, ...]  # Record-aligned, for color-coding
    dropped_record_ids: Tuple[str, ...] = ()

    @property
    def n_records(self) -> int:
        return len(self.record_ids)

    @property
    def n_features(self) -> int:
        return len(self.feature_names)

    def summary(self) -> dict:
        """Per-feature mean and standard deviation, JSON-serializable."""
        return {
            name: {"mean": float(self.means[i]), "std": float(self.stds[i])}
            for i, name in enumerate(self.feature_names)
        }


@dataclass(frozen=True)
class ExplainedVariance:
    """Variance captured by a single principal component."""
    component: str  # "PC1", "PC2", ...
    eigenvalue: float
    proportion: float  # eigenvalue / sum(eigenvalues)
    cumulative_proportion: float


@dataclass(frozen=True, eq=False)
class PCAResult:
    """
    Read-only PCA artifact for one pipeline run.

    scores:   (n_records, n_components), same row order as the feature matrix
    loadings: (n_features, n_components), column j is the unit eigenvector of PCj
    """
    feature_names: Tuple[str, ...]
    component_names: Tuple[str, ...]
    eigenvalues: np.ndarray
    variance: List[ExplainedVariance]
    scores: np.ndarray
    loadings: np.ndarray
    record_ids: Tuple[str, ...]
    avg_ratings: Tuple[float, ...] = field(default_factory=tuple)

    @property
    def n_components(self) -> int:
        return len(self.component_names)

    def loading(self, feature: str, component: str) -> float:
        """Loading of one original feature on one component."""
        return float(
            self.loadings[self.feature_names.index(feature), self.component_names.index(component)]
        )

    def scores_frame(self) -> pd.DataFrame:
        """Scores table with record-aligned avg_rating for color-coding."""
        df = pd.DataFrame(self.scores, columns=list(self.component_names))
        ratings = list(self.avg_ratings) if self.avg_ratings else [None] * len(df)
        df.insert(0, "avg_rating", ratings)
        df.insert(0, "record_id", list(self.record_ids))
        return df

    def loadings_frame(self) -> pd.DataFrame:
        """Loadings table keyed by feature name."""
        df = pd.DataFrame(self.loadings, columns=list(self.component_names))
        df.insert(0, "feature", list(self.feature_names))
        return df

    def variance_frame(self) -> pd.DataFrame:
        """Explained-variance-by-component table."""
        return pd.DataFrame(
            [
                {
                    "component": v.component,
                    "eigenvalue": v.eigenvalue,
                    "proportion": v.proportion,
                    "cumulative_proportion": v.cumulative_proportion,
                }
                for v in self.variance
            ],
            columns=["component", "eigenvalue", "proportion", "cumulative_proportion"],
        )
