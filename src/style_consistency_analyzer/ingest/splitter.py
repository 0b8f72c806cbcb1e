"""Split text into sentences, paragraphs and words."""

import re

# Letters with an optional internal apostrophe ("don't", "author's")
WORD_RE = re.compile(r"[a-z]+(?:['’][a-z]+)?", re.IGNORECASE)

# A run of non-terminators closed by a run of terminators, or trailing content
SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+|[^.!?]+\Z")

PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")

# Abbreviations that don't end sentences
ABBREVIATIONS = (
    "Mr", "Mrs", "Ms", "Dr", "Prof", "Sr", "Jr", "vs", "etc",
    "i.e", "e.g", "cf", "al", "St", "Mt", "Ft",
)

_ABBREVIATION_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(abbr) for abbr in ABBREVIATIONS) + r")\.",
    re.IGNORECASE,
)
_DECIMAL_POINT_RE = re.compile(r"(?<=\d)\.(?=\d)")
_PROTECTED_DOT = "\x00"

_DOUBLE_QUOTED_RE = re.compile(r'"[^"]*"')
# Single quotes count as quotation marks only when they sit between
# whitespace/punctuation, which leaves contractions and possessives alone
_SINGLE_QUOTED_RE = re.compile(r"(^|[\s,.:;!?(])'([^']*)'(?=[\s,.:;!?)]|\Z)")


def split_into_sentences(text: str) -> list[str]:
    """
    Split text into sentences.

    Sentences end at a run of ``.``, ``!`` or ``?``; whatever follows the last
    terminator is kept as a final sentence. Periods inside common
    abbreviations and decimal numbers are not treated as terminators.
    """
    if not text:
        return []

    protected = _ABBREVIATION_RE.sub(
        lambda m: m.group(0).replace(".", _PROTECTED_DOT), text
    )
    protected = _DECIMAL_POINT_RE.sub(_PROTECTED_DOT, protected)

    sentences = []
    for match in SENTENCE_RE.finditer(protected):
        sentence = match.group(0).strip().replace(_PROTECTED_DOT, ".")
        if sentence:
            sentences.append(sentence)

    return sentences


def split_into_paragraphs(text: str) -> list[str]:
    """Split text into paragraphs on blank lines."""
    paragraphs = PARAGRAPH_BREAK_RE.split(text)

    # Clean up and filter empty
    paragraphs = [p.strip() for p in paragraphs]
    paragraphs = [p for p in paragraphs if p]

    return paragraphs


def extract_words(text: str) -> list[str]:
    """Return the lowercased words of a text in order of appearance."""
    return [m.group(0) for m in WORD_RE.finditer(text.lower())]


def count_words(text: str) -> int:
    """Count words using the same definition as :func:`extract_words`."""
    return sum(1 for _ in WORD_RE.finditer(text))


def exclude_quoted_text(text: str) -> str:
    """
    Remove quoted material (text the author didn't write).

    Curly quotes are normalized to straight quotes first. Each quoted span is
    replaced by a single space so word boundaries survive.
    """
    if not text:
        return ""

    normalized = re.sub("[“”]", '"', text)
    normalized = re.sub("[‘’]", "'", normalized)

    normalized = _DOUBLE_QUOTED_RE.sub(" ", normalized)
    normalized = _SINGLE_QUOTED_RE.sub(r"\1 ", normalized)

    return normalized
