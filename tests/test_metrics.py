"""Tests for single-document metrics."""

import pytest

from style_consistency_analyzer.style.metrics import (
    METRIC_KEYS,
    TextMetrics,
    analyze_connectives,
    analyze_formal_register,
    analyze_ngrams,
    analyze_paragraphs,
    analyze_passive_voice,
    analyze_sentences,
    calculate_msttr,
    calculate_variation,
    count_syllables,
    create_smart_regex,
    extract_metrics,
)


class TestSyllables:
    """Test syllable estimation."""

    @pytest.mark.parametrize("word,expected", [
        ("cat", 1),
        ("the", 1),
        ("make", 1),
        ("table", 2),
        ("running", 2),
        ("", 1),
    ])
    def test_counts(self, word, expected):
        assert count_syllables(word) == expected


class TestSmartRegex:
    """Test catalog phrase matching."""

    def test_single_word_matches_inflections(self):
        pattern = create_smart_regex("delve")
        assert len(pattern.findall("We delve, she delves, they delved.")) == 3

    def test_phrase_matches_exactly(self):
        pattern = create_smart_regex("in order to")
        assert pattern.search("In order to win")
        assert not pattern.search("in orders to win")


class TestRepeatedSentence:
    """'The cat sat.' three times."""

    @pytest.fixture
    def metrics(self):
        return extract_metrics("The cat sat. The cat sat. The cat sat.")

    def test_sentence_stats(self, metrics):
        assert metrics.sentence_stats.total == 3
        assert metrics.sentence_stats.mean == pytest.approx(3.0)
        assert metrics.sentence_stats.std_dev == 0
        assert metrics.cv == 0

    def test_vocabulary(self, metrics):
        assert metrics.vocabulary.total_words == 9
        assert metrics.vocabulary.unique_words == 3
        assert metrics.vocabulary.ttr == pytest.approx(1 / 3)
        # Shorter than one MSTTR window, so MSTTR falls back to TTR
        assert metrics.vocabulary.msttr == pytest.approx(1 / 3)

    def test_readability_is_clamped(self, metrics):
        assert metrics.readability.score == 100
        assert metrics.readability.grade == 0


class TestEmptyText:
    """Degenerate input yields defaults, never an exception."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\n"])
    def test_defaults(self, text):
        metrics = extract_metrics(text)
        assert metrics == TextMetrics()
        assert all(v == 0 for v in metrics.metric_values().values())

    def test_punctuation_only(self):
        metrics = extract_metrics("... !!! ???")
        assert metrics.vocabulary.total_words == 0
        assert metrics.sentence_stats.total == 0


class TestMsttr:
    """Test mean-segmental type-token ratio."""

    def test_segments_are_averaged(self):
        words = ["x"] * 50 + [f"w{i}" for i in range(50)]
        assert calculate_msttr(words, 50) == pytest.approx((1 / 50 + 1) / 2)

    def test_partial_segment_ignored(self):
        words = ["x"] * 50 + [f"w{i}" for i in range(50)] + ["y"] * 20
        assert calculate_msttr(words, 50) == pytest.approx((1 / 50 + 1) / 2)

    def test_bounds(self, baseline_samples):
        for text in baseline_samples:
            msttr = extract_metrics(text).vocabulary.msttr
            assert 0 < msttr <= 1

    def test_empty(self):
        assert calculate_msttr([], 50) == 0


class TestFormalRegister:
    """Test formulaic phrase detection."""

    def test_weights_and_severity(self):
        text = "It is important to note that we delve deeper. Furthermore, we delve again."
        register = analyze_formal_register(text)

        assert register.total_weight == 3 + 2 * 3 + 2
        assert register.total_count == 4
        assert register.severity == {"high": 3, "medium": 1, "low": 0}
        assert register.phrases[0].phrase == "delve"

    def test_plain_text_has_no_phrases(self, clean_text):
        assert analyze_formal_register(clean_text).total_weight == 0


class TestNgrams:
    """Test n-gram predictability."""

    def test_short_text_is_skipped(self):
        assert analyze_ngrams("It is important.").predictability == 0

    def test_template_text_is_capped(self):
        text = "It is important to see that it is important to act and it is important to wait."
        ngrams = analyze_ngrams(text)
        assert ngrams.bigrams.count == 6
        assert ngrams.trigrams.count == 6
        assert ngrams.predictability == 100

    def test_natural_text_is_low(self, clean_text):
        assert analyze_ngrams(clean_text).predictability < 30


class TestParagraphs:
    """Test paragraph coherence."""

    def test_shared_words_and_transition(self):
        text = (
            "Gardens need water every morning. Gardens grow quickly.\n\n"
            "However, gardens also need sunlight."
        )
        analysis = analyze_paragraphs(text)

        assert analysis.count == 2
        assert analysis.details[1].has_transition
        assert analysis.transition_rate == 100
        assert analysis.coherence == pytest.approx(90)
        assert analysis.topic_shift == pytest.approx(10)

    def test_single_paragraph(self):
        analysis = analyze_paragraphs("Just one paragraph here.")
        assert analysis.count == 1
        assert analysis.coherence == 0
        assert analysis.topic_shift == 0


class TestSentenceShape:
    """Test passive voice and variation."""

    def test_passive_ratio(self):
        passive = analyze_passive_voice("The cake was eaten. The door was opened. He ran.")
        assert passive.count == 2
        assert passive.ratio == pytest.approx(200 / 3)

    def test_variation(self):
        sentences = analyze_sentences("Go now. I will walk to the store.")
        assert [s.word_count for s in sentences] == [2, 6]
        assert calculate_variation(sentences) == pytest.approx(50)

    def test_single_sentence_has_no_variation(self):
        assert calculate_variation(analyze_sentences("Only one sentence here.")) == 0


class TestConnectives:
    """Test connective counting."""

    def test_categories(self):
        analysis = analyze_connectives("However, we left. Therefore we slept. For example, cats.")
        assert dict(analysis.by_category["contrast"]) == {"however": 1}
        assert dict(analysis.by_category["cause"]) == {"therefore": 1}
        assert dict(analysis.by_category["example"]) == {"for example": 1}
        assert analysis.total == 3


class TestExtractMetrics:
    """Test the full extraction."""

    def test_quoted_text_excluded_from_vocabulary(self):
        metrics = extract_metrics('She said "alpha beta gamma delta" today.')
        assert metrics.vocabulary.total_words == 3

    def test_metric_values_keys(self, baseline_samples):
        values = extract_metrics(baseline_samples[0]).metric_values()
        assert tuple(values) == METRIC_KEYS

    def test_msttr_reported_as_percentage(self, baseline_samples):
        metrics = extract_metrics(baseline_samples[0])
        assert metrics.metric_values()["msttr"] == pytest.approx(metrics.vocabulary.msttr * 100)

    def test_deterministic(self, baseline_samples):
        assert extract_metrics(baseline_samples[1]) == extract_metrics(baseline_samples[1])

    def test_style_markers(self):
        markers = extract_metrics("I don't know. You're gonna love it.").style_markers
        assert markers.contractions == 2
        assert markers.first_person == 1
        assert markers.colloquial == 1
        assert markers.formality < 100

    def test_to_json(self, baseline_samples):
        import json

        data = json.loads(extract_metrics(baseline_samples[0]).to_json())
        assert data["vocabulary"]["total_words"] > 0
