"""Tests for calculation explanations."""

import pytest

from style_consistency_analyzer.style.explain import (
    TEXT_METRIC_KEYS,
    consistency_band,
    explain_metric,
    explain_text_metric,
    interpret_z_score,
)
from style_consistency_analyzer.style.metrics import extract_metrics
from style_consistency_analyzer.style.stats import MetricStatistics, calculate_z_score


@pytest.fixture
def grade_stats():
    return MetricStatistics.from_values([10.0, 12.0, 14.0])


class TestExplainMetric:
    """Test z-score explanations against the baseline."""

    def test_four_steps(self, grade_stats):
        z = calculate_z_score(16.0, grade_stats.mean, grade_stats.std_dev)
        steps = explain_metric("grade", "Grade Level", "", grade_stats, 16.0, z, sample_count=5)

        assert [s.title for s in steps] == [
            "Collect Baseline Values",
            "Calculate Baseline Mean (Average)",
            "Calculate Standard Deviation",
            "Calculate Z-Score",
        ]
        assert steps[1].substitution == "(10.0 + 12.0 + 14.0) / 3"
        assert steps[1].result == "12.00"
        assert steps[3].result == f"z = {z:.2f}"
        assert "significantly higher" in steps[3].interpretation

    def test_limited_baseline_warning(self, grade_stats):
        steps = explain_metric("grade", "Grade Level", "", grade_stats, 12.0, 0.0, sample_count=3)
        assert len(steps) == 5
        assert steps[-1].title == "Limited Baseline"
        assert steps[-1].substitution == "3 of 5 recommended samples"

    def test_custom_recommended_count(self, grade_stats):
        steps = explain_metric(
            "grade", "Grade Level", "", grade_stats, 12.0, 0.0, sample_count=3, recommended_samples=3
        )
        assert len(steps) == 4

    def test_long_value_lists_are_summarized(self):
        stats = MetricStatistics.from_values([float(v) for v in range(8)])
        steps = explain_metric("cv", "Sentence Variation", "%", stats, 3.0, 0.0, sample_count=8)
        assert steps[1].substitution == "sum of 8 values / 8"
        assert steps[0].result == "Range: 0.0% to 7.0%"


class TestInterpretation:
    """Test plain-language readings."""

    @pytest.mark.parametrize("score,band", [
        (95, "excellent"),
        (90, "excellent"),
        (75, "good"),
        (55, "moderate"),
        (30, "concerning"),
        (10, "critical"),
    ])
    def test_bands(self, score, band):
        assert consistency_band(score) == band

    def test_z_score_direction(self):
        assert "lower" in interpret_z_score(-1.2, "Grade Level", False)
        assert "within normal variation" in interpret_z_score(0.3, "Grade Level", True)


class TestTextMetricExplanations:
    """Test single-document explanations."""

    @pytest.mark.parametrize("key", TEXT_METRIC_KEYS)
    def test_every_key(self, key, baseline_samples):
        steps = explain_text_metric(key, extract_metrics(baseline_samples[0]))
        assert steps
        assert all(s.title and s.result for s in steps)

    def test_grade_counts(self):
        steps = explain_text_metric("grade", extract_metrics("The cat sat. The cat sat. The cat sat."))
        assert steps[0].substitution == "9 words / 3 sentences"
        assert steps[0].result == "3.0 words/sentence"

    def test_unknown_key(self, baseline_samples):
        with pytest.raises(KeyError):
            explain_text_metric("coherence", extract_metrics(baseline_samples[0]))
