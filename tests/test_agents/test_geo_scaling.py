"""
Unit tests for the Geospatial Scaler.
"""

import pytest
from src.models.review import NormalizedRecord
from src.agents.geo_scaling import GeospatialScaler


def _record(record_id, count):
    return NormalizedRecord(record_id, None, 3.0, count, 0.0, 0.0, "")


def test_endpoints_map_exactly():
    scaler = GeospatialScaler(output_range=(1.0, 10.0)).fit([10, 1200, 350])

    assert scaler.transform(10) == 1.0
    assert scaler.transform(1200) == 10.0


def test_linear_and_monotonic():
    scaler = GeospatialScaler(output_range=(0.0, 100.0)).fit([0, 50, 200])

    assert scaler.transform(50) == pytest.approx(25.0)
    assert scaler.transform(100) == pytest.approx(50.0)

    counts = [0, 3, 17, 50, 120, 199, 200]
    weights = [scaler.transform(c) for c in counts]
    assert weights == sorted(weights)


def test_outputs_stay_in_range():
    scaler = GeospatialScaler(output_range=(2.0, 6.0))
    weights = scaler.scale([_record(str(i), c) for i, c in enumerate([5, 7, 11, 13, 999])])

    assert min(weights) == 2.0
    assert max(weights) == 6.0
    assert all(2.0 <= w <= 6.0 for w in weights)

    # Values outside the fitted domain are clipped
    assert scaler.transform(10_000) == 6.0
    assert scaler.transform(0) == 2.0


def test_missing_counts_have_no_weight():
    weights = GeospatialScaler().scale([_record("a", None), _record("b", 5), _record("c", 15)])

    assert weights[0] is None
    assert weights[1] == 1.0
    assert weights[2] == 10.0


def test_constant_counts_map_to_minimum():
    weights = GeospatialScaler(output_range=(1.0, 6.0)).scale([_record("a", 7), _record("b", 7)])
    assert weights == [1.0, 1.0]


def test_domains_are_exposed():
    scaler = GeospatialScaler(output_range=(1.0, 10.0))
    scaler.scale([_record("a", 10), _record("b", 1200)])

    assert scaler.domains() == {"input_range": [10.0, 1200.0], "output_range": [1.0, 10.0]}


def test_invalid_output_range():
    with pytest.raises(ValueError):
        GeospatialScaler(output_range=(5.0, 1.0))


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
