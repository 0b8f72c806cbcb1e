"""
Text Metrics

Document-level stylometric metrics: readability, sentence statistics,
vocabulary diversity, formulaic register, n-gram predictability, paragraph
coherence and passive voice.

Every function here is total: empty or malformed text yields zeroed
results rather than an exception.
"""

from collections import Counter
from dataclasses import dataclass, asdict, field
import json
import re

from ..ingest.splitter import (
    exclude_quoted_text,
    extract_words,
    split_into_paragraphs,
    split_into_sentences,
)
from .errors import StyleMarkers, analyze_style_markers
from .patterns import PASSIVE_VOICE_RE
from .phrases import (
    ALL_CONNECTIVES,
    CONNECTIVES,
    FORMAL_REGISTER_PHRASES,
    FORMULAIC_NGRAMS,
    HIGH_FREQUENCY_SET,
    is_content_word,
)
from .stats import calculate_mean, calculate_std_dev, clamp
from .thresholds import EngineConfig, DEFAULT_CONFIG


# Keys of the per-document values tracked across a baseline
METRIC_KEYS = (
    "grade",
    "cv",
    "msttr",
    "sophistication",
    "formal_weight",
    "predictability",
    "coherence",
    "passive_ratio",
    "avg_sentence_length",
    "total_words",
)


@dataclass(frozen=True)
class SentenceInfo:
    """One sentence with its word and syllable counts."""
    index: int
    text: str
    word_count: int
    syllable_count: int


@dataclass(frozen=True)
class SentenceStats:
    mean: float = 0.0
    min: int = 0
    max: int = 0
    std_dev: float = 0.0
    total: int = 0


@dataclass(frozen=True)
class Readability:
    score: float = 0.0  # Flesch reading ease, 0-100
    grade: float = 0.0  # Flesch-Kincaid grade level


@dataclass(frozen=True)
class VocabularyStats:
    total_words: int = 0
    unique_words: int = 0
    ttr: float = 0.0  # 0-1
    msttr: float = 0.0  # 0-1
    sophistication_ratio: float = 0.0  # % of long, uncommon words


@dataclass(frozen=True)
class PhraseMatch:
    phrase: str
    weight: int
    suggestion: str
    count: int
    weighted_score: int


@dataclass(frozen=True)
class FormalRegister:
    phrases: tuple[PhraseMatch, ...] = ()
    total_weight: int = 0
    total_count: int = 0
    severity: dict[str, int] = field(
        default_factory=lambda: {"high": 0, "medium": 0, "low": 0}
    )


@dataclass(frozen=True)
class NgramStats:
    found: tuple[tuple[str, int], ...] = ()
    count: int = 0
    rate: float = 0.0  # per 100 words
    excess: float = 0.0  # above the human baseline rate


@dataclass(frozen=True)
class NgramAnalysis:
    bigrams: NgramStats = field(default_factory=NgramStats)
    trigrams: NgramStats = field(default_factory=NgramStats)
    predictability: float = 0.0


@dataclass(frozen=True)
class ParagraphDetail:
    index: int
    sentence_count: int
    word_count: int
    content_words: tuple[str, ...]
    opening_words: str
    has_transition: bool


@dataclass(frozen=True)
class ParagraphAnalysis:
    count: int = 0
    avg_sentences: float = 0.0
    avg_words: float = 0.0
    coherence: float = 0.0
    topic_shift: float = 0.0
    transition_rate: float = 0.0
    details: tuple[ParagraphDetail, ...] = ()


@dataclass(frozen=True)
class PassiveVoice:
    count: int = 0
    ratio: float = 0.0  # matches per 100 sentences


@dataclass(frozen=True)
class ConnectiveAnalysis:
    by_category: dict[str, tuple[tuple[str, int], ...]] = field(default_factory=dict)
    total: int = 0


@dataclass(frozen=True)
class TextMetrics:
    """All metrics derived from one document."""
    sentences: tuple[SentenceInfo, ...] = ()
    sentence_stats: SentenceStats = field(default_factory=SentenceStats)
    readability: Readability = field(default_factory=Readability)
    vocabulary: VocabularyStats = field(default_factory=VocabularyStats)
    formal_register: FormalRegister = field(default_factory=FormalRegister)
    ngrams: NgramAnalysis = field(default_factory=NgramAnalysis)
    paragraphs: ParagraphAnalysis = field(default_factory=ParagraphAnalysis)
    passive: PassiveVoice = field(default_factory=PassiveVoice)
    connectives: ConnectiveAnalysis = field(default_factory=ConnectiveAnalysis)
    style_markers: StyleMarkers = field(default_factory=StyleMarkers)
    cv: float = 0.0  # sentence length coefficient of variation, %

    def metric_values(self) -> dict[str, float]:
        """The values tracked across a baseline, keyed by METRIC_KEYS."""
        return {
            "grade": self.readability.grade,
            "cv": self.cv,
            "msttr": self.vocabulary.msttr * 100,
            "sophistication": self.vocabulary.sophistication_ratio,
            "formal_weight": float(self.formal_register.total_weight),
            "predictability": self.ngrams.predictability,
            "coherence": self.paragraphs.coherence,
            "passive_ratio": self.passive.ratio,
            "avg_sentence_length": self.sentence_stats.mean,
            "total_words": float(self.vocabulary.total_words),
        }

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def count_syllables(word: str) -> int:
    """
    Estimate syllable count for a word.

    Words of three letters or fewer count as one syllable. Otherwise silent
    endings ("-es", "-ed", "-e") and a leading "y" are dropped and runs of
    one or two vowels are counted.
    """
    word = re.sub(r"[^a-z]", "", word.lower())
    if len(word) <= 3:
        return 1
    word = re.sub(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$", "", word)
    word = re.sub(r"^y", "", word)
    return max(1, len(re.findall(r"[aeiouy]{1,2}", word)))


def create_smart_regex(keyword: str) -> re.Pattern:
    """
    Build a pattern for a catalog phrase.

    Multi-word phrases match exactly; single words also match their
    -s, -d, -ed and -ing forms.
    """
    escaped = re.escape(keyword)
    if " " in keyword:
        return re.compile(rf"\b{escaped}\b", re.IGNORECASE)
    return re.compile(rf"\b{escaped}(?:s|d|ed|ing)?\b", re.IGNORECASE)


def analyze_sentences(text: str) -> list[SentenceInfo]:
    """Split text into sentences, dropping segments without words."""
    result = []
    for i, sentence in enumerate(split_into_sentences(text)):
        words = extract_words(sentence)
        if not words:
            continue
        result.append(SentenceInfo(
            index=i + 1,
            text=sentence,
            word_count=len(words),
            syllable_count=sum(count_syllables(w) for w in words),
        ))
    return result


def calculate_sentence_stats(sentences: list[SentenceInfo]) -> SentenceStats:
    if not sentences:
        return SentenceStats()

    lengths = [s.word_count for s in sentences]
    mean = calculate_mean(lengths)
    return SentenceStats(
        mean=mean,
        min=min(lengths),
        max=max(lengths),
        std_dev=calculate_std_dev(lengths),
        total=len(sentences),
    )


def calculate_readability(sentences: list[SentenceInfo]) -> Readability:
    """Flesch reading ease (clamped to 0-100) and Flesch-Kincaid grade (>= 0)."""
    total_words = sum(s.word_count for s in sentences)
    if not sentences or total_words == 0:
        return Readability()

    total_syllables = sum(s.syllable_count for s in sentences)
    asl = total_words / len(sentences)
    asw = total_syllables / total_words

    score = 206.835 - 1.015 * asl - 84.6 * asw
    grade = 0.39 * asl + 11.8 * asw - 15.59

    return Readability(score=clamp(score), grade=max(0.0, grade))


def calculate_msttr(words: list[str], segment_size: int = 50) -> float:
    """
    Mean-segmental type-token ratio.

    Averages the TTR of consecutive non-overlapping windows of
    ``segment_size`` words; a trailing partial window is ignored. Texts
    shorter than one window fall back to the plain TTR.
    """
    if not words:
        return 0.0
    if len(words) < segment_size:
        return len(set(words)) / len(words)

    ratios = [
        len(set(words[i:i + segment_size])) / segment_size
        for i in range(0, len(words) - segment_size + 1, segment_size)
    ]
    return sum(ratios) / len(ratios)


def analyze_vocabulary(text: str, config: EngineConfig = DEFAULT_CONFIG) -> VocabularyStats:
    words = extract_words(text)
    if not words:
        return VocabularyStats()

    unique = set(words)
    sophisticated = [
        w for w in words
        if len(w) >= config.sophisticated_word_length and w not in HIGH_FREQUENCY_SET
    ]

    return VocabularyStats(
        total_words=len(words),
        unique_words=len(unique),
        ttr=len(unique) / len(words),
        msttr=calculate_msttr(words, config.msttr_segment_size),
        sophistication_ratio=len(sophisticated) / len(words) * 100,
    )


def analyze_formal_register(text: str) -> FormalRegister:
    """Count catalog phrases, weighted by how strongly each marks template prose."""
    found = []
    for rule in FORMAL_REGISTER_PHRASES:
        count = len(create_smart_regex(rule.phrase).findall(text))
        if count:
            found.append(PhraseMatch(
                phrase=rule.phrase,
                weight=rule.weight,
                suggestion=rule.suggestion,
                count=count,
                weighted_score=count * rule.weight,
            ))

    severity = {
        "high": sum(f.count for f in found if f.weight == 3),
        "medium": sum(f.count for f in found if f.weight == 2),
        "low": sum(f.count for f in found if f.weight == 1),
    }

    return FormalRegister(
        phrases=tuple(sorted(found, key=lambda f: -f.weighted_score)),
        total_weight=sum(f.weighted_score for f in found),
        total_count=sum(f.count for f in found),
        severity=severity,
    )


def _ngram_stats(
    table: Counter,
    catalog: tuple[str, ...],
    total_words: int,
    human_rate: float,
) -> NgramStats:
    counts = {gram: table[gram] for gram in catalog if table[gram] > 0}
    total = sum(counts.values())
    rate = total / total_words * 100
    found = sorted(counts.items(), key=lambda item: -item[1])
    return NgramStats(
        found=tuple(found),
        count=total,
        rate=rate,
        excess=max(0.0, rate - human_rate),
    )


def analyze_ngrams(text: str, config: EngineConfig = DEFAULT_CONFIG) -> NgramAnalysis:
    """
    Measure how much of the text is built from stock word sequences.

    Catalog bigram and trigram occurrences are converted to a rate per 100
    words; only the excess over typical human rates adds to predictability.
    """
    words = extract_words(text)
    if len(words) < config.min_ngram_words:
        return NgramAnalysis()

    bigrams = Counter(" ".join(words[i:i + 2]) for i in range(len(words) - 1))
    trigrams = Counter(" ".join(words[i:i + 3]) for i in range(len(words) - 2))

    bigram_stats = _ngram_stats(
        bigrams, FORMULAIC_NGRAMS["bigrams"], len(words), config.human_bigram_baseline
    )
    trigram_stats = _ngram_stats(
        trigrams, FORMULAIC_NGRAMS["trigrams"], len(words), config.human_trigram_baseline
    )

    predictability = min(
        100.0,
        bigram_stats.excess * config.bigram_excess_weight
        + trigram_stats.excess * config.trigram_excess_weight,
    )

    return NgramAnalysis(bigrams=bigram_stats, trigrams=trigram_stats, predictability=predictability)


def _starts_with_connective(sentence: str) -> bool:
    opening = sentence.lower().strip()
    return any(
        opening.startswith(c + " ") or opening.startswith(c + ",")
        for c in ALL_CONNECTIVES
    )


def analyze_paragraphs(text: str, config: EngineConfig = DEFAULT_CONFIG) -> ParagraphAnalysis:
    """
    Score how well consecutive paragraphs hang together.

    Coherence rewards content words shared with the previous paragraph and
    paragraphs that open with a connective.
    """
    paragraphs = split_into_paragraphs(text)
    if not paragraphs:
        return ParagraphAnalysis()

    details = []
    for i, para in enumerate(paragraphs):
        sentences = split_into_sentences(para)
        words = extract_words(para)
        content_words = [w for w in words if is_content_word(w)]
        first_sentence = sentences[0] if sentences else ""

        details.append(ParagraphDetail(
            index=i + 1,
            sentence_count=len(sentences),
            word_count=len(words),
            content_words=tuple(content_words[:config.coherence_content_words]),
            opening_words=" ".join(first_sentence.split()[:3]),
            has_transition=_starts_with_connective(first_sentence),
        ))

    shared_total = 0
    transitions = 0
    for prev, curr in zip(details, details[1:]):
        prev_words = set(prev.content_words)
        shared_total += sum(1 for w in curr.content_words if w in prev_words)
        if curr.has_transition:
            transitions += 1

    pairs = len(details) - 1
    avg_shared = shared_total / pairs if pairs else 0.0
    transition_rate = transitions / pairs * 100 if pairs else 0.0

    coherence = min(100.0, avg_shared * 20 + transition_rate * 0.5)
    topic_shift = max(0.0, 100 - coherence) if pairs else 0.0

    return ParagraphAnalysis(
        count=len(details),
        avg_sentences=sum(d.sentence_count for d in details) / len(details),
        avg_words=sum(d.word_count for d in details) / len(details),
        coherence=coherence,
        topic_shift=topic_shift,
        transition_rate=transition_rate,
        details=tuple(details),
    )


def calculate_variation(sentences: list[SentenceInfo]) -> float:
    """Coefficient of variation of sentence length, in % (0 below two sentences)."""
    if len(sentences) < 2:
        return 0.0
    lengths = [s.word_count for s in sentences]
    mean = calculate_mean(lengths)
    if mean <= 0:
        return 0.0
    return calculate_std_dev(lengths) / mean * 100


def analyze_passive_voice(text: str) -> PassiveVoice:
    count = len(PASSIVE_VOICE_RE.findall(text))
    sentences = split_into_sentences(text)
    if not sentences:
        return PassiveVoice(count=count)
    return PassiveVoice(count=count, ratio=count / len(sentences) * 100)


def analyze_connectives(text: str) -> ConnectiveAnalysis:
    by_category = {}
    total = 0
    for category, words in CONNECTIVES.items():
        found = []
        for word in words:
            count = len(re.findall(rf"\b{re.escape(word)}\b", text, re.IGNORECASE))
            if count:
                found.append((word, count))
                total += count
        by_category[category] = tuple(found)
    return ConnectiveAnalysis(by_category=by_category, total=total)


def extract_metrics(text: str, config: EngineConfig = DEFAULT_CONFIG) -> TextMetrics:
    """
    Compute every document metric for a text.

    Quoted material is excluded from vocabulary, register, n-gram, passive,
    connective and style-marker analysis. Sentence, readability, variation
    and paragraph analysis run on the original text, where structure
    matters.
    """
    if not text or not text.strip():
        return TextMetrics()

    clean_text = exclude_quoted_text(text)

    sentences = analyze_sentences(text)

    return TextMetrics(
        sentences=tuple(sentences),
        sentence_stats=calculate_sentence_stats(sentences),
        readability=calculate_readability(sentences),
        vocabulary=analyze_vocabulary(clean_text, config),
        formal_register=analyze_formal_register(clean_text),
        ngrams=analyze_ngrams(clean_text, config),
        paragraphs=analyze_paragraphs(text, config),
        passive=analyze_passive_voice(clean_text),
        connectives=analyze_connectives(clean_text),
        style_markers=analyze_style_markers(clean_text),
        cv=calculate_variation(sentences),
    )
