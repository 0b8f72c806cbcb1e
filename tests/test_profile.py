"""Tests for the baseline profile builder."""

import logging

import pytest

from style_consistency_analyzer.config import Settings
from style_consistency_analyzer.style.metrics import METRIC_KEYS
from style_consistency_analyzer.style.profile import build_baseline_profile, classify_variance, sample_sufficiency


class TestBaselineProfile:
    """Test building the profile from samples."""

    def test_no_samples(self, settings):
        assert build_baseline_profile([], settings=settings) is None

    def test_all_metrics_present(self, baseline_samples, settings):
        profile = build_baseline_profile(baseline_samples, settings=settings)
        assert set(profile.metrics) == set(METRIC_KEYS)
        assert profile.sample_count == len(baseline_samples)
        assert profile.vocabulary.total_words > 0
        assert profile.syntactic.sample_count == len(baseline_samples)
        assert profile.errors.sample_count == len(baseline_samples)

    def test_values_follow_sample_order(self, baseline_samples, settings):
        profile = build_baseline_profile(baseline_samples, settings=settings)
        reversed_profile = build_baseline_profile(baseline_samples[::-1], settings=settings)
        assert profile.metrics["grade"].values == reversed_profile.metrics["grade"].values[::-1]
        assert profile.metrics["grade"].mean == pytest.approx(reversed_profile.metrics["grade"].mean)

    def test_identical_samples(self, baseline_samples, settings):
        profile = build_baseline_profile([baseline_samples[0]] * 3, settings=settings)
        assert all(m.std_dev == 0 for m in profile.metrics.values())
        assert profile.reliability.overall_variance == 0
        assert profile.reliability.variance_level == "low"
        assert profile.reliability.confidence == 100
        assert profile.reliability.outlier_count == 0

    def test_length_outlier(self, settings):
        short = "The river runs past the old mill. " * 3
        long = "The river runs past the old mill. " * 30
        profile = build_baseline_profile([short, short, short, short, long], settings=settings)

        assert profile.reliability.outlier_ids == (4,)
        assert profile.reliability.outlier_count == 1
        expected = max(0.0, min(100.0, 100 - profile.reliability.overall_variance * 10 - 5))
        assert profile.reliability.confidence == pytest.approx(expected)

    def test_parallel_matches_serial(self, baseline_samples):
        serial = build_baseline_profile(baseline_samples, settings=Settings(_env_file=None, parallel_workers=1))
        parallel = build_baseline_profile(baseline_samples, settings=Settings(_env_file=None, parallel_workers=4))
        assert serial.metrics == parallel.metrics
        assert serial.reliability == parallel.reliability

    def test_on_sample_callback(self, baseline_samples, settings):
        seen = []
        build_baseline_profile(baseline_samples, settings=settings, on_sample=seen.append)
        assert seen == list(range(len(baseline_samples)))

    def test_short_sample_warning(self, settings, caplog):
        with caplog.at_level(logging.WARNING):
            build_baseline_profile(["Too short to count.", "Also short."], settings=settings)
        assert "Baseline sample 1 has only" in caplog.text

    def test_to_json(self, baseline_samples, settings):
        import json

        data = json.loads(build_baseline_profile(baseline_samples, settings=settings).to_json())
        assert data["reliability"]["sample_count"] == len(baseline_samples)
        assert data["reliability"]["variance_level"] in ("low", "moderate", "high", "very high")
        assert set(data["metrics"]) == set(METRIC_KEYS)


class TestSufficiency:
    """Test sample-count labels."""

    @pytest.mark.parametrize("count,label", [
        (1, "insufficient"),
        (2, "insufficient"),
        (3, "minimum"),
        (5, "recommended"),
        (6, "recommended"),
        (7, "strong"),
    ])
    def test_labels(self, count, label, settings):
        assert sample_sufficiency(count, settings) == label


class TestVarianceLevel:
    """Test baseline variance bands."""

    @pytest.mark.parametrize("variance,level", [
        (0.0, "low"),
        (0.149, "low"),
        (0.15, "moderate"),
        (0.35, "high"),
        (0.5, "very high"),
        (1.2, "very high"),
    ])
    def test_bands(self, variance, level):
        assert classify_variance(variance) == level
