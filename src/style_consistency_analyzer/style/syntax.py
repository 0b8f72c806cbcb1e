"""
Syntactic Profile

How sentences are built: what they open with, how many clauses they
carry, how complex they are and how punctuation is used.
"""

from dataclasses import dataclass, asdict, field
from typing import Optional
import math
import re

from ..ingest.splitter import split_into_sentences
from .patterns import (
    COMPLEX_PUNCTUATION_RE,
    COORDINATING_PATTERNS,
    OPENING_CATEGORIES,
    OTHER_OPENING,
    PUNCTUATION_PATTERNS,
    SENTENCE_OPENINGS,
    SUBORDINATING_PATTERNS,
)
from .stats import MetricStatistics, calculate_z_score
from .thresholds import EngineConfig, DEFAULT_CONFIG


_TOKEN_RE = re.compile(r"\b\w+\b")


@dataclass(frozen=True)
class PunctuationDensity:
    count: int
    per_thousand_words: float
    weight: float


@dataclass(frozen=True)
class SyntacticAnalysis:
    """Sentence structure of one document."""
    opening_patterns: dict[str, float] = field(
        default_factory=lambda: {category: 0.0 for category in OPENING_CATEGORIES}
    )  # category -> % of sentences
    avg_clauses_per_sentence: float = 0.0
    complexity_score: float = 0.0  # 0-10
    structural_variety: float = 0.0  # 0-100
    punctuation_density: dict[str, PunctuationDensity] = field(default_factory=dict)
    sentence_count: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class SyntacticProfile:
    """Sentence structure habits across the baseline samples."""
    opening_patterns: dict[str, MetricStatistics] = field(default_factory=dict)
    avg_clauses_per_sentence: MetricStatistics = field(default_factory=MetricStatistics)
    complexity_score: MetricStatistics = field(default_factory=MetricStatistics)
    structural_variety: MetricStatistics = field(default_factory=MetricStatistics)
    sample_count: int = 0

    def to_dict(self) -> dict:
        return {
            "opening_patterns": {k: v.to_dict() for k, v in self.opening_patterns.items()},
            "avg_clauses_per_sentence": self.avg_clauses_per_sentence.to_dict(),
            "complexity_score": self.complexity_score.to_dict(),
            "structural_variety": self.structural_variety.to_dict(),
            "sample_count": self.sample_count,
        }


@dataclass(frozen=True)
class OpeningDeviation:
    baseline: float
    current: float
    z_score: float


@dataclass(frozen=True)
class SyntacticComparison:
    opening_deviations: dict[str, OpeningDeviation] = field(default_factory=dict)
    clause_deviation: float = 0.0
    complexity_deviation: float = 0.0
    variety_deviation: float = 0.0
    overall_deviation: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


def classify_opening(sentence: str) -> str:
    """Return the first opening category whose pattern matches, or "other"."""
    for rule in SENTENCE_OPENINGS:
        if rule.pattern.search(sentence):
            return rule.name
    return OTHER_OPENING


def count_clauses(sentence: str) -> int:
    """One clause plus one per coordinating or subordinating marker and semicolon."""
    clauses = 1
    for pattern in COORDINATING_PATTERNS + SUBORDINATING_PATTERNS:
        clauses += len(pattern.findall(sentence))
    clauses += sentence.count(";")
    return clauses


def sentence_complexity(sentence: str, clause_count: int) -> float:
    """Complexity of one sentence on a 0-10 scale."""
    score = min(clause_count * 2, 6)
    if any(pattern.search(sentence) for pattern in SUBORDINATING_PATTERNS):
        score += 2
    score += min(len(COMPLEX_PUNCTUATION_RE.findall(sentence)), 2)
    return min(score, 10)


def calculate_variety(shares: list[float]) -> float:
    """Entropy of the non-zero opening shares (in %) relative to eight categories."""
    if not shares:
        return 0.0
    entropy = 0.0
    for share in shares:
        p = share / 100
        if p > 0:
            entropy -= p * math.log2(p)
    return entropy / math.log2(8) * 100


def analyze_punctuation_density(text: str) -> dict[str, PunctuationDensity]:
    word_count = len(_TOKEN_RE.findall(text))
    density = {}
    for rule in PUNCTUATION_PATTERNS:
        count = len(rule.pattern.findall(text))
        density[rule.name] = PunctuationDensity(
            count=count,
            per_thousand_words=count / word_count * 1000 if word_count else 0.0,
            weight=rule.weight,
        )
    return density


def analyze_sentence_structure(text: str) -> SyntacticAnalysis:
    """Analyze the sentence structure of one document."""
    if not text or not text.strip():
        return SyntacticAnalysis()

    sentences = split_into_sentences(text)
    if not sentences:
        return SyntacticAnalysis()

    opening_counts = {category: 0 for category in OPENING_CATEGORIES}
    total_clauses = 0
    complexity_sum = 0.0

    for sentence in sentences:
        opening_counts[classify_opening(sentence)] += 1
        clauses = count_clauses(sentence)
        total_clauses += clauses
        complexity_sum += sentence_complexity(sentence, clauses)

    n = len(sentences)
    opening_patterns = {category: count / n * 100 for category, count in opening_counts.items()}

    return SyntacticAnalysis(
        opening_patterns=opening_patterns,
        avg_clauses_per_sentence=total_clauses / n,
        complexity_score=complexity_sum / n,
        structural_variety=calculate_variety([v for v in opening_patterns.values() if v > 0]),
        punctuation_density=analyze_punctuation_density(text),
        sentence_count=n,
    )


def build_syntactic_profile(
    texts: list[str],
    analyses: Optional[list[SyntacticAnalysis]] = None,
) -> SyntacticProfile:
    """Aggregate sentence structure over baseline samples, in sample order."""
    if not texts:
        return SyntacticProfile()

    if analyses is None:
        analyses = [analyze_sentence_structure(text) for text in texts]

    opening_patterns = {
        category: MetricStatistics.from_values([a.opening_patterns.get(category, 0.0) for a in analyses])
        for category in OPENING_CATEGORIES
    }

    return SyntacticProfile(
        opening_patterns=opening_patterns,
        avg_clauses_per_sentence=MetricStatistics.from_values([a.avg_clauses_per_sentence for a in analyses]),
        complexity_score=MetricStatistics.from_values([a.complexity_score for a in analyses]),
        structural_variety=MetricStatistics.from_values([a.structural_variety for a in analyses]),
        sample_count=len(analyses),
    )


def _abs_z(value: float, stats: MetricStatistics) -> float:
    return abs(calculate_z_score(value, stats.mean, stats.std_dev))


def classify_syntactic_deviation(deviation: float, config: EngineConfig = DEFAULT_CONFIG) -> str:
    """Band an overall syntactic deviation: "normal", "minor", "moderate" or "major"."""
    if deviation >= config.syntactic_deviation_major:
        return "major"
    if deviation >= config.syntactic_deviation_moderate:
        return "moderate"
    if deviation >= config.syntactic_deviation_minor:
        return "minor"
    return "normal"

def compare_syntactic_profiles(
    baseline: Optional[SyntacticProfile],
    current: Optional[SyntacticAnalysis],
) -> SyntacticComparison:
    """
    Measure how far a document's sentence structure sits from the baseline.

    Every deviation is an absolute z-score (0 where the baseline has no
    spread). The overall deviation averages the mean opening deviation with
    the clause, complexity and variety deviations.
    """
    if baseline is None or current is None:
        return SyntacticComparison()

    opening_deviations = {}
    for category, stats in baseline.opening_patterns.items():
        value = current.opening_patterns.get(category, 0.0)
        opening_deviations[category] = OpeningDeviation(
            baseline=stats.mean,
            current=value,
            z_score=_abs_z(value, stats),
        )

    opening_z = [d.z_score for d in opening_deviations.values()]
    avg_opening = sum(opening_z) / len(opening_z) if opening_z else 0.0

    clause = _abs_z(current.avg_clauses_per_sentence, baseline.avg_clauses_per_sentence)
    complexity = _abs_z(current.complexity_score, baseline.complexity_score)
    variety = _abs_z(current.structural_variety, baseline.structural_variety)

    return SyntacticComparison(
        opening_deviations=opening_deviations,
        clause_deviation=clause,
        complexity_deviation=complexity,
        variety_deviation=variety,
        overall_deviation=(avg_opening + clause + complexity + variety) / 4,
    )
