"""
Vocabulary Fingerprint

Word-choice profile of a text or of a whole baseline: word frequencies,
signature (characteristic content) words, word length mix, lexical
density and entropy.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional
import math

from ..ingest.splitter import extract_words
from .phrases import HIGH_FREQUENCY_WORDS, is_content_word
from .stats import clamp
from .thresholds import EngineConfig, DEFAULT_CONFIG


@dataclass(frozen=True)
class SignatureWord:
    word: str
    frequency: int
    score: float


@dataclass(frozen=True)
class VocabularyProfile:
    """Vocabulary analysis for a text, or for all baseline texts combined."""
    word_frequency: Counter = field(default_factory=Counter)
    signature_words: tuple[SignatureWord, ...] = ()
    word_length_distribution: dict[str, float] = field(
        default_factory=lambda: {"short": 0.0, "medium": 0.0, "long": 0.0}
    )
    avg_word_length: float = 0.0
    lexical_density: float = 0.0  # share of content words, 0-1
    entropy: float = 0.0  # bits
    unique_word_count: int = 0
    total_words: int = 0

    def to_dict(self, top_words: int = 50) -> dict:
        """Convert to dictionary; only the most frequent words are kept."""
        return {
            "word_frequency": dict(self.word_frequency.most_common(top_words)),
            "signature_words": [
                {"word": s.word, "frequency": s.frequency, "score": s.score}
                for s in self.signature_words
            ],
            "word_length_distribution": dict(self.word_length_distribution),
            "avg_word_length": self.avg_word_length,
            "lexical_density": self.lexical_density,
            "entropy": self.entropy,
            "unique_word_count": self.unique_word_count,
            "total_words": self.total_words,
        }


@dataclass(frozen=True)
class VocabularyComparison:
    overlap_score: float = 0.0
    function_overlap_score: float = 0.0
    content_overlap_score: float = 0.0
    new_words: tuple[str, ...] = ()
    missing_signature_words: tuple[str, ...] = ()
    avg_word_length_diff: float = 0.0
    lexical_density_diff: float = 0.0
    entropy_diff: float = 0.0
    style_shift_score: float = 0.0

    def to_dict(self) -> dict:
        return {
            "overlap_score": self.overlap_score,
            "function_overlap_score": self.function_overlap_score,
            "content_overlap_score": self.content_overlap_score,
            "new_words": list(self.new_words),
            "missing_signature_words": list(self.missing_signature_words),
            "avg_word_length_diff": self.avg_word_length_diff,
            "lexical_density_diff": self.lexical_density_diff,
            "entropy_diff": self.entropy_diff,
            "style_shift_score": self.style_shift_score,
        }


def calculate_signature_words(
    frequency: Counter,
    total_words: int,
    limit: int = 20,
) -> tuple[SignatureWord, ...]:
    """
    Rank content words by ``tf * (1 + ln(count + 1))``.

    Ties keep first-occurrence order.
    """
    candidates = [
        SignatureWord(word=word, frequency=count, score=count / total_words * (1 + math.log(count + 1)))
        for word, count in frequency.items()
        if is_content_word(word)
    ]
    candidates.sort(key=lambda s: -s.score)
    return tuple(candidates[:limit])


def calculate_entropy(frequency: Counter, total_words: int) -> float:
    """Shannon entropy (base 2) of the word distribution."""
    entropy = 0.0
    for count in frequency.values():
        p = count / total_words
        entropy -= p * math.log2(p)
    return entropy


def _profile_from_words(words: list[str], config: EngineConfig) -> VocabularyProfile:
    total = len(words)
    if total == 0:
        return VocabularyProfile()

    frequency = Counter(words)
    buckets = {"short": 0, "medium": 0, "long": 0}
    for word in words:
        if len(word) <= 4:
            buckets["short"] += 1
        elif len(word) <= 7:
            buckets["medium"] += 1
        else:
            buckets["long"] += 1

    content_count = sum(1 for w in words if is_content_word(w))

    return VocabularyProfile(
        word_frequency=frequency,
        signature_words=calculate_signature_words(frequency, total, config.signature_word_count),
        word_length_distribution={k: v / total * 100 for k, v in buckets.items()},
        avg_word_length=sum(len(w) for w in words) / total,
        lexical_density=content_count / total,
        entropy=calculate_entropy(frequency, total),
        unique_word_count=len(frequency),
        total_words=total,
    )


def extract_vocabulary_profile(text: str, config: EngineConfig = DEFAULT_CONFIG) -> VocabularyProfile:
    """Build the vocabulary profile of one text."""
    return _profile_from_words(extract_words(text or ""), config)


def build_vocabulary_profile(texts: list[str], config: EngineConfig = DEFAULT_CONFIG) -> VocabularyProfile:
    """
    Build one vocabulary profile from all baseline texts.

    Word counts are pooled across samples before signature words are
    ranked, so frequent words in long samples weigh more.
    """
    words = []
    for text in texts:
        words.extend(extract_words(text or ""))
    return _profile_from_words(words, config)


def _function_word_similarity(
    baseline: VocabularyProfile,
    current: VocabularyProfile,
    config: EngineConfig,
) -> float:
    baseline_total = baseline.total_words or 1
    current_total = current.total_words or 1

    similarity_sum = 0.0
    weight_sum = 0.0
    for word in HIGH_FREQUENCY_WORDS:
        base_count = baseline.word_frequency.get(word, 0)
        curr_count = current.word_frequency.get(word, 0)
        if base_count == 0 and curr_count == 0:
            continue

        # Rates per 1000 words
        base_rate = base_count / baseline_total * 1000
        curr_rate = curr_count / current_total * 1000
        diff = abs(base_rate - curr_rate)
        scale = max(base_rate, curr_rate) * config.function_word_damping or 1

        similarity = 100 / (1 + diff / scale)
        weight = math.log(base_count + curr_count + 1)

        similarity_sum += similarity * weight
        weight_sum += weight

    if weight_sum > 0:
        return similarity_sum / weight_sum
    # Neither side uses a function word: they agree on absence
    if baseline.total_words and current.total_words:
        return 100.0
    return 50.0


def _style_shift_score(
    overlap: float,
    length_diff: float,
    density_diff: float,
    entropy_diff: float,
    new_count: int,
    missing_count: int,
    current_total: int,
    baseline_total: int,
) -> float:
    shift = (
        max(0.0, 100 - overlap) * 0.30
        + abs(length_diff) * 10 * 0.15
        + abs(density_diff) * 100 * 0.20
        + abs(entropy_diff) * 5 * 0.15
        + new_count / current_total * 100 * 2 * 0.10
        + missing_count / baseline_total * 100 * 3 * 0.10
    )
    return clamp(shift)


def compare_vocabulary_profiles(
    baseline: Optional[VocabularyProfile],
    current: Optional[VocabularyProfile],
    config: EngineConfig = DEFAULT_CONFIG,
) -> VocabularyComparison:
    """
    Compare a document's vocabulary with the baseline.

    The overlap score blends function-word usage (style, 70%) with signature
    word overlap (topic, 30%), so a change of subject alone does not sink
    the score.
    """
    if baseline is None or current is None:
        return VocabularyComparison()

    baseline_words = [s.word for s in baseline.signature_words]
    current_words = [s.word for s in current.signature_words]
    baseline_set = set(baseline_words)
    current_set = set(current_words)

    shared = sum(1 for w in current_words if w in baseline_set)
    if not baseline_words and not current_words:
        content_overlap = 100.0 if baseline.total_words and current.total_words else 0.0
    else:
        current_coverage = shared / len(current_words) * 100 if current_words else 0.0
        baseline_coverage = shared / len(baseline_words) * 100 if baseline_words else 0.0
        content_overlap = (current_coverage + baseline_coverage) / 2

    function_overlap = _function_word_similarity(baseline, current, config)
    overlap = function_overlap * config.function_word_share + content_overlap * config.content_word_share

    new_words = tuple(w for w in current_words if w not in baseline_set)[:10]
    missing = tuple(w for w in baseline_words[:10] if w not in current_set)

    length_diff = current.avg_word_length - baseline.avg_word_length
    density_diff = current.lexical_density - baseline.lexical_density
    entropy_diff = current.entropy - baseline.entropy

    return VocabularyComparison(
        overlap_score=overlap,
        function_overlap_score=function_overlap,
        content_overlap_score=content_overlap,
        new_words=new_words,
        missing_signature_words=missing,
        avg_word_length_diff=length_diff,
        lexical_density_diff=density_diff,
        entropy_diff=entropy_diff,
        style_shift_score=_style_shift_score(
            overlap,
            length_diff,
            density_diff,
            entropy_diff,
            len(new_words),
            len(missing),
            current.total_words or 1,
            baseline.total_words or 1,
        ),
    )


def calculate_vocabulary_overlap(baseline_texts: list[str], current_text: str) -> float:
    """Percentage of the text's distinct content words seen anywhere in the baseline."""
    if not baseline_texts or not current_text:
        return 0.0

    baseline_words = {
        w for text in baseline_texts for w in extract_words(text) if is_content_word(w)
    }
    current_words = {w for w in extract_words(current_text) if is_content_word(w)}
    if not current_words:
        return 0.0

    return sum(1 for w in current_words if w in baseline_words) / len(current_words) * 100
