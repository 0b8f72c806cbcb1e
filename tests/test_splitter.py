"""Tests for sentence, paragraph and word splitting."""

import pytest
from style_consistency_analyzer.ingest.splitter import (
    count_words,
    exclude_quoted_text,
    extract_words,
    split_into_paragraphs,
    split_into_sentences,
)


class TestSentences:
    """Sentence boundaries."""

    def test_terminators(self):
        sentences = split_into_sentences("The draft is done. Send it today. Or wait until Monday!")
        assert sentences == ["The draft is done.", "Send it today.", "Or wait until Monday!"]

    def test_titles_do_not_end_sentences(self):
        sentences = split_into_sentences("Mrs. Hale met Prof. Ward at noon. The meeting ran long.")
        assert len(sentences) == 2
        assert sentences[0].startswith("Mrs. Hale met Prof. Ward")

    def test_decimal_numbers(self):
        sentences = split_into_sentences("Prices rose 3.5 percent. Sales fell.")
        assert sentences == ["Prices rose 3.5 percent.", "Sales fell."]

    def test_mixed_punctuation(self):
        assert len(split_into_sentences("Is it late? Yes! Go home now.")) == 3

    def test_terminator_runs_stay_together(self):
        assert split_into_sentences("Wait!!! Really?") == ["Wait!!!", "Really?"]

    def test_trailing_text_without_terminator(self):
        assert split_into_sentences("First one. second part") == ["First one.", "second part"]

    @pytest.mark.parametrize("text", ["", "   ", "\n\n"])
    def test_blank_input(self, text):
        assert split_into_sentences(text) == []


class TestParagraphs:
    """Paragraph boundaries."""

    @pytest.mark.parametrize("text", [
        "Opening line.\n\nClosing line.",
        "Opening line.\n\n\n\nClosing line.",
        "Opening line.\n\n   \n\nClosing line.",
    ])
    def test_blank_lines_separate_paragraphs(self, text):
        assert split_into_paragraphs(text) == ["Opening line.", "Closing line."]

    def test_single_newline_is_not_a_break(self):
        assert len(split_into_paragraphs("One line.\nNext line.")) == 1


class TestWords:
    """Test word extraction."""

    def test_lowercased_with_apostrophes(self):
        words = extract_words("Don't STOP the author's 3 dogs")
        assert words == ["don't", "stop", "the", "author's", "dogs"]

    def test_count_matches_extract(self):
        text = "It's a long, long way to go."
        assert count_words(text) == len(extract_words(text)) == 7


class TestQuoteExclusion:
    """Test removal of quoted material."""

    def test_double_quotes_removed(self):
        cleaned = exclude_quoted_text('He said "hello there" and left.')
        assert extract_words(cleaned) == ["he", "said", "and", "left"]

    def test_curly_quotes_removed(self):
        cleaned = exclude_quoted_text("She wrote “never again” twice.")
        assert extract_words(cleaned) == ["she", "wrote", "twice"]

    def test_single_quotes_removed(self):
        cleaned = exclude_quoted_text("She called it 'magic' once.")
        assert extract_words(cleaned) == ["she", "called", "it", "once"]

    def test_contractions_and_possessives_kept(self):
        text = "It's the author's book."
        assert exclude_quoted_text(text) == text

    def test_empty(self):
        assert exclude_quoted_text("") == ""
