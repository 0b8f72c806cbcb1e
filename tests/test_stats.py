"""Tests for statistics helpers."""

import pytest

from style_consistency_analyzer.style.stats import (
    MetricStatistics,
    assess_significance,
    calculate_mean,
    calculate_std_dev,
    calculate_z_score,
    clamp,
    detect_outliers,
)


class TestMetricStatistics:
    """Test the per-metric baseline summary."""

    def test_from_values(self):
        stats = MetricStatistics.from_values([2, 4, 4, 4, 5, 5, 7, 9])
        assert stats.mean == pytest.approx(5)
        assert stats.median == pytest.approx(4.5)
        assert stats.std_dev == pytest.approx(2)  # population deviation
        assert stats.min == 2
        assert stats.max == 9
        assert stats.count == 8

    @pytest.mark.parametrize("value", [2.5, 0.1, 1/3, 17.241379310344826])
    def test_identical_values_have_no_spread(self, value):
        stats = MetricStatistics.from_values([value] * 3)
        assert stats.std_dev == 0
        assert stats.mean == value
        assert stats.min <= stats.mean <= stats.max

    def test_mean_stays_within_range(self):
        values = [0.1, 0.2, 0.3, 0.1, 0.7]
        stats = MetricStatistics.from_values(values)
        assert stats.min <= stats.mean <= stats.max
        assert calculate_mean(values) == pytest.approx(0.28)

    def test_std_dev_of_integers(self):
        assert calculate_std_dev([3, 3, 3, 3]) == 0
        assert calculate_std_dev([1, 3]) == pytest.approx(1)

    def test_single_value(self):
        stats = MetricStatistics.from_values([7])
        assert stats.mean == 7
        assert stats.std_dev == 0

    def test_empty(self):
        assert MetricStatistics.from_values([]) == MetricStatistics()

    def test_to_dict(self):
        data = MetricStatistics.from_values([1, 2]).to_dict()
        assert data["values"] == [1.0, 2.0]
        assert set(data) == {"mean", "median", "std_dev", "min", "max", "values"}


class TestZScore:
    """Test z-scores and significance tiers."""

    def test_zero_spread(self):
        assert calculate_z_score(10, 5, 0) == 0

    def test_symmetry(self):
        assert calculate_z_score(13, 10, 2) == pytest.approx(-calculate_z_score(7, 10, 2))

    @pytest.mark.parametrize("diff,level,significant,label", [
        (0.5, "none", False, "OK"),
        (-1.2, "low", False, "NOTICE"),
        (1.5, "medium", True, "WARNING"),
        (-2.0, "high", True, "ALERT"),
        (3.7, "high", True, "ALERT"),
    ])
    def test_significance(self, diff, level, significant, label):
        result = assess_significance(diff, 1.0)
        assert result.level == level
        assert result.significant is significant
        assert result.label == label
        assert result.z_score == pytest.approx(abs(diff))

    def test_significance_without_spread(self):
        result = assess_significance(50, 0)
        assert result.level == "none"
        assert not result.significant


class TestOutliers:
    """Test outlier detection."""

    def test_iqr(self):
        samples = list(enumerate([100, 110, 105, 95, 1000]))
        assert detect_outliers(samples, "iqr") == [4]

    def test_zscore(self):
        samples = list(enumerate([100] * 9 + [1000]))
        assert detect_outliers(samples, "zscore") == [9]

    def test_too_few_samples(self):
        assert detect_outliers(list(enumerate([1, 2, 1000])), "iqr") == []

    def test_order_invariance(self):
        values = [100, 110, 105, 95, 1000, 102]
        forward = detect_outliers(list(enumerate(values)))
        backward = detect_outliers(list(reversed(list(enumerate(values)))))
        assert set(forward) == set(backward) == {4}

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            detect_outliers(list(enumerate([1, 2, 3, 4])), "mad")


class TestHelpers:
    """Test the remaining helpers."""

    def test_clamp(self):
        assert clamp(-5) == 0
        assert clamp(150) == 100
        assert clamp(42.5) == 42.5
