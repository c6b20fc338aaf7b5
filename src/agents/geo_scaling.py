"""
Geospatial Scaler.

Linearly rescales rating_count into a bounded rendering weight.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from src.models.review import NormalizedRecord
import config.settings as settings

logger = logging.getLogger(__name__)


class GeospatialScaler:
    """
    Maps [input_min, input_max] onto [output_min, output_max].

    The input domain is learned from the non-missing counts passed to fit().
    When every count is equal, all values map to output_min.
    """

    def __init__(self, output_range: Tuple[float, float] = settings.WEIGHT_RANGE):
        low, high = output_range
        if low > high:
            raise ValueError(f"Invalid output range: {output_range}. Minimum exceeds maximum")
        self.output_range = (float(low), float(high))
        self.input_range: Optional[Tuple[float, float]] = None

    def fit(self, counts: Sequence[Optional[int]]) -> "GeospatialScaler":
        values = [c for c in counts if c is not None]
        if not values:
            logger.warning("No rating counts available; weights will be empty")
            self.input_range = None
            return self

        self.input_range = (float(min(values)), float(max(values)))
        logger.debug(f"Geospatial scaler input range: {self.input_range}")
        return self

    def transform(self, count: Optional[int]) -> Optional[float]:
        if count is None or self.input_range is None:
            return None

        in_min, in_max = self.input_range
        out_min, out_max = self.output_range
        if in_max == in_min or count <= in_min:
            return out_min
        if count >= in_max:
            return out_max

        weight = out_min + (count - in_min) * (out_max - out_min) / (in_max - in_min)
        return min(max(weight, out_min), out_max)

    def scale(self, records: Sequence[NormalizedRecord]) -> List[Optional[float]]:
        """
        Fit on the records' counts and return one weight per record.

        Returns:
            Weights aligned with records; None where rating_count is missing
        """
        counts = [r.rating_count for r in records]
        self.fit(counts)
        weights = [self.transform(c) for c in counts]
        logger.info(
            f"Scaled {sum(w is not None for w in weights)} rating counts "
            f"from {self.input_range} to {self.output_range}"
        )
        return weights

    def domains(self) -> Dict[str, Optional[List[float]]]:
        """Input and output ranges, for the rendering collaborator."""
        return {
            "input_range": list(self.input_range) if self.input_range else None,
            "output_range": list(self.output_range),
        }
