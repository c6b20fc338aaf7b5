"""
Error taxonomy for StoreLens.

Per-record problems (unparseable fields, missing coordinates, incomplete
features) never raise; they are handled where they occur. Everything here is
fatal and aborts the run.
"""

from typing import Optional


class StoreLensError(Exception):
    """Base class for all fatal pipeline errors."""


class LexiconLoadError(StoreLensError):
    """The sentiment lexicon could not be loaded or is invalid."""


class InputSchemaError(StoreLensError):
    """The review table is missing required columns."""


class AnalysisError(StoreLensError):
    """Degenerate statistics make the analysis undefined."""


class InsufficientDataError(AnalysisError):
    """Too few complete records to estimate sample statistics."""


class DegenerateFeatureError(AnalysisError):
    """A feature column has zero or non-finite variance, so it cannot be standardized."""

    def __init__(self, feature: str, message: Optional[str] = None):
        self.feature = feature
        super().__init__(
            message or f"Feature '{feature}' has zero variance across all records; "
                       f"standardization is undefined"
        )


class SingularMatrixError(AnalysisError):
    """The feature correlation matrix is singular or ill-conditioned."""
