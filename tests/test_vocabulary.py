"""Tests for vocabulary fingerprinting."""

from collections import Counter

import pytest

from style_consistency_analyzer.style.vocabulary import (
    VocabularyComparison,
    build_vocabulary_profile,
    calculate_entropy,
    calculate_signature_words,
    calculate_vocabulary_overlap,
    compare_vocabulary_profiles,
    extract_vocabulary_profile,
)


class TestVocabularyProfile:
    """Test single-text profiles."""

    def test_signature_words_skip_function_words(self):
        profile = extract_vocabulary_profile(
            "The garden was green. The garden had roses. The garden was quiet and the roses were red."
        )
        words = [s.word for s in profile.signature_words]
        assert words[0] == "garden"
        assert "roses" in words
        assert "the" not in words
        assert "was" not in words

    def test_signature_ranking_formula(self):
        frequency = Counter({"river": 3, "stone": 1, "the": 10})
        signature = calculate_signature_words(frequency, 14)
        assert [s.word for s in signature] == ["river", "stone"]
        assert signature[0].score > signature[1].score

    def test_word_length_buckets(self):
        profile = extract_vocabulary_profile("cat house elephant")
        assert profile.word_length_distribution == pytest.approx(
            {"short": 100 / 3, "medium": 100 / 3, "long": 100 / 3}
        )

    def test_entropy(self):
        assert calculate_entropy(Counter({"a": 1, "b": 1}), 2) == pytest.approx(1.0)
        assert calculate_entropy(Counter({"a": 4}), 4) == 0

    def test_empty(self):
        profile = extract_vocabulary_profile("")
        assert profile.total_words == 0
        assert profile.signature_words == ()

    def test_baseline_counts_are_pooled(self, baseline_samples):
        pooled = build_vocabulary_profile(baseline_samples)
        separate = [extract_vocabulary_profile(t) for t in baseline_samples]
        assert pooled.total_words == sum(p.total_words for p in separate)


class TestVocabularyComparison:
    """Test comparing a text against the baseline vocabulary."""

    @pytest.mark.parametrize("text", [
        None,
        "Gardens flourish beautifully. Sunlight warms petals.",
    ])
    def test_self_overlap_is_complete(self, baseline_samples, text):
        profile = extract_vocabulary_profile(text or baseline_samples[0])
        comparison = compare_vocabulary_profiles(profile, profile)
        assert comparison.overlap_score == pytest.approx(100)
        assert comparison.function_overlap_score == pytest.approx(100)
        assert comparison.content_overlap_score == pytest.approx(100)
        assert comparison.new_words == ()
        assert comparison.missing_signature_words == ()

    def test_function_words_missing_on_one_side_is_neutral(self):
        empty = extract_vocabulary_profile("")
        current = extract_vocabulary_profile("Gardens flourish beautifully. Sunlight warms petals.")
        assert compare_vocabulary_profiles(empty, current).function_overlap_score == 50

    def test_member_of_baseline_beats_foreign_text(self, baseline_samples, formulaic_text):
        baseline = build_vocabulary_profile(baseline_samples)
        member = compare_vocabulary_profiles(baseline, extract_vocabulary_profile(baseline_samples[0]))
        foreign = compare_vocabulary_profiles(baseline, extract_vocabulary_profile(formulaic_text))
        assert member.overlap_score > foreign.overlap_score
        assert foreign.new_words

    def test_missing_profile(self, baseline_samples):
        profile = extract_vocabulary_profile(baseline_samples[0])
        assert compare_vocabulary_profiles(None, profile) == VocabularyComparison()
        assert compare_vocabulary_profiles(profile, None) == VocabularyComparison()

    def test_to_dict(self, baseline_samples):
        profile = extract_vocabulary_profile(baseline_samples[0])
        data = compare_vocabulary_profiles(profile, profile).to_dict()
        assert data["new_words"] == []
        assert "style_shift_score" in data


class TestVocabularyOverlap:
    """Test simple content-word overlap."""

    def test_partial_overlap(self):
        assert calculate_vocabulary_overlap(["The garden grows tall"], "garden plants") == 50

    def test_empty_inputs(self):
        assert calculate_vocabulary_overlap([], "garden") == 0
        assert calculate_vocabulary_overlap(["garden"], "") == 0
