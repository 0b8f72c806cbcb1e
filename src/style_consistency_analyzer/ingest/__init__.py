"""Sample loading and text splitting."""

from style_consistency_analyzer.ingest.loader import load_sample, load_samples
from style_consistency_analyzer.ingest.splitter import (
    exclude_quoted_text,
    extract_words,
    split_into_paragraphs,
    split_into_sentences,
)

__all__ = [
    "load_sample",
    "load_samples",
    "exclude_quoted_text",
    "extract_words",
    "split_into_paragraphs",
    "split_into_sentences",
]
