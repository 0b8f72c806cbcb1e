"""Tests for syntactic profiling."""

import pytest

from style_consistency_analyzer.style.patterns import OPENING_CATEGORIES
from style_consistency_analyzer.style.syntax import (
    SyntacticComparison,
    analyze_punctuation_density,
    analyze_sentence_structure,
    build_syntactic_profile,
    calculate_variety,
    classify_opening,
    classify_syntactic_deviation,
    compare_syntactic_profiles,
    count_clauses,
    sentence_complexity,
)


class TestOpenings:
    """Test sentence opening classification."""

    @pytest.mark.parametrize("sentence,category", [
        ("The dog ran home.", "subject"),
        ("But nobody came.", "conjunction"),
        ("However, it rained.", "adverb"),
        ("In the morning we left.", "prepositional"),
        ("After dinner we walked.", "prepositional"),
        ("Although tired, she kept going.", "subordinate"),
        ("Because it rained, we stayed.", "subordinate"),
        ("Why not?", "interrogative"),
        ("Running fast, he won.", "participial"),
        ("Quickly, he left.", "other"),
    ])
    def test_first_match_wins(self, sentence, category):
        assert classify_opening(sentence) == category


class TestClauses:
    """Test clause counting and sentence complexity."""

    def test_count_clauses(self):
        assert count_clauses("I ran and she walked because it rained.") == 3
        assert count_clauses("Birds sing.") == 1
        assert count_clauses("We paused; then we ran.") == 2

    def test_complexity(self):
        sentence = "I ran and she walked because it rained."
        assert sentence_complexity(sentence, count_clauses(sentence)) == 8

    def test_complexity_is_capped(self):
        sentence = "If we go and they stay; because it rains: then we wait—and they leave."
        assert sentence_complexity(sentence, count_clauses(sentence)) == 10


class TestVariety:
    """Test structural variety."""

    def test_single_category(self):
        assert calculate_variety([100.0]) == 0

    def test_even_spread_over_eight(self):
        assert calculate_variety([12.5] * 8) == pytest.approx(100)

    def test_empty(self):
        assert calculate_variety([]) == 0


class TestSentenceStructure:
    """Test analysis of a single document."""

    def test_empty_text_has_every_category(self):
        analysis = analyze_sentence_structure("")
        assert set(analysis.opening_patterns) == set(OPENING_CATEGORIES)
        assert all(v == 0 for v in analysis.opening_patterns.values())
        assert analysis.sentence_count == 0

    def test_uniform_openings(self):
        analysis = analyze_sentence_structure("The cat sat. The dog ran.")
        assert analysis.opening_patterns["subject"] == 100
        assert analysis.structural_variety == 0
        assert analysis.avg_clauses_per_sentence == 1
        assert analysis.sentence_count == 2

    def test_openings_sum_to_hundred(self, baseline_samples):
        analysis = analyze_sentence_structure(baseline_samples[2])
        assert sum(analysis.opening_patterns.values()) == pytest.approx(100)

    def test_punctuation_density(self):
        density = analyze_punctuation_density("Wait; then go, now.")
        assert density["semicolon"].count == 1
        assert density["semicolon"].per_thousand_words == pytest.approx(250)
        assert density["semicolon"].weight == 2
        assert density["comma"].count == 1
        assert density["colon"].count == 0


class TestSyntacticComparison:
    """Test baseline profiles and comparison."""

    def test_profile_sample_order(self, baseline_samples):
        profile = build_syntactic_profile(baseline_samples)
        first = analyze_sentence_structure(baseline_samples[0])
        assert profile.sample_count == len(baseline_samples)
        assert profile.complexity_score.values[0] == pytest.approx(first.complexity_score)

    def test_identical_samples_have_no_deviation(self, baseline_samples):
        text = baseline_samples[0]
        profile = build_syntactic_profile([text, text, text])
        comparison = compare_syntactic_profiles(profile, analyze_sentence_structure(text))
        assert comparison.overall_deviation == 0
        assert all(d.z_score == 0 for d in comparison.opening_deviations.values())

    def test_deviations_are_absolute(self, baseline_samples, formulaic_text):
        profile = build_syntactic_profile(baseline_samples)
        comparison = compare_syntactic_profiles(profile, analyze_sentence_structure(formulaic_text))
        assert comparison.clause_deviation >= 0
        assert comparison.complexity_deviation >= 0
        assert comparison.variety_deviation >= 0
        assert comparison.overall_deviation > 0

    def test_missing_inputs(self):
        assert compare_syntactic_profiles(None, None) == SyntacticComparison()

    def test_empty_profile(self):
        assert build_syntactic_profile([]).sample_count == 0

    @pytest.mark.parametrize("deviation,level", [
        (0.0, "normal"),
        (0.99, "normal"),
        (1.0, "minor"),
        (1.5, "moderate"),
        (2.0, "major"),
        (3.4, "major"),
    ])
    def test_deviation_bands(self, deviation, level):
        assert classify_syntactic_deviation(deviation) == level
