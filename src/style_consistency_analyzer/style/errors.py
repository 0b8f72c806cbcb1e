"""
Error Pattern Detection

Habitual errors are part of a writer's fingerprint. A document that
suddenly loses the errors its author always makes is as notable as one
that gains new ones.
"""

from dataclasses import dataclass, asdict, field
from typing import Optional
import math
import re

from .patterns import ERROR_RULES, STYLE_MARKERS
from .stats import clamp
from .thresholds import EngineConfig, DEFAULT_CONFIG


_TOKEN_RE = re.compile(r"\b\w+\b")

MAX_EXAMPLES = 3


@dataclass(frozen=True)
class DetectedError:
    """One error pattern found in a document."""
    id: str
    type: str
    severity: int
    count: int
    description: str
    examples: tuple[str, ...] = ()


@dataclass(frozen=True)
class ErrorAnalysis:
    """Error patterns found in a single document."""
    errors: tuple[DetectedError, ...] = ()
    total_error_score: float = 0.0
    cleanliness: float = 100.0
    errors_by_type: dict[str, tuple[DetectedError, ...]] = field(default_factory=dict)
    error_rate: float = 0.0  # weighted errors per 100 words

    @property
    def error_ids(self) -> set[str]:
        return {e.id for e in self.errors}

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ErrorPatternSummary:
    """How often one error pattern shows up across the baseline."""
    id: str
    type: str
    severity: int
    description: str
    occurrences: int
    samples_with_error: int


@dataclass(frozen=True)
class ErrorProfile:
    """Aggregated error habits of a baseline."""
    common_patterns: tuple[ErrorPatternSummary, ...] = ()
    consistent_errors: tuple[str, ...] = ()
    patterns: tuple[ErrorPatternSummary, ...] = ()
    avg_error_rate: float = 0.0
    avg_cleanliness: float = 100.0
    sample_count: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ErrorComparison:
    error_reduction: float = 0.0  # % drop in error rate relative to the baseline
    suspiciously_clean: bool = False
    missing_consistent_errors: tuple[str, ...] = ()
    new_errors: tuple[DetectedError, ...] = ()
    cleanliness_change: float = 0.0
    baseline_rate_level: str = "clean"
    current_rate_level: str = "clean"
    confidence_note: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class StyleMarkers:
    """Register signals: contractions, personal pronouns and colloquialisms."""
    contractions: int = 0
    first_person: int = 0
    second_person: int = 0
    colloquial: int = 0
    formality: float = 100.0


def _count_tokens(text: str) -> int:
    return len(_TOKEN_RE.findall(text))


def classify_error_rate(rate: float, config: EngineConfig = DEFAULT_CONFIG) -> str:
    """Band a weighted error rate: "clean", "typical", "elevated" or "high"."""
    if rate < config.error_rate_low:
        return "clean"
    if rate < config.error_rate_moderate:
        return "typical"
    if rate < config.error_rate_high:
        return "elevated"
    return "high"


def detect_error_patterns(text: str, config: EngineConfig = DEFAULT_CONFIG) -> ErrorAnalysis:
    """
    Find every catalogued error pattern in a text.

    Errors are returned heaviest first (count times severity weight), with
    up to three matched examples each.
    """
    if not text or not text.strip():
        return ErrorAnalysis()

    word_count = _count_tokens(text)

    errors = []
    for rule in ERROR_RULES:
        matches = [m.group(0) for m in rule.pattern.finditer(text)]
        if matches:
            errors.append(DetectedError(
                id=rule.id,
                type=rule.type,
                severity=rule.severity,
                count=len(matches),
                description=rule.description,
                examples=tuple(matches[:MAX_EXAMPLES]),
            ))

    by_type: dict[str, list[DetectedError]] = {}
    for error in errors:
        by_type.setdefault(error.type, []).append(error)

    total_score = sum(e.count * config.severity_weight(e.severity) for e in errors)
    error_rate = total_score / word_count * 100 if word_count else 0.0

    errors.sort(key=lambda e: -(e.count * config.severity_weight(e.severity)))

    return ErrorAnalysis(
        errors=tuple(errors),
        total_error_score=total_score,
        cleanliness=clamp(100 - error_rate * 10),
        errors_by_type={t: tuple(errs) for t, errs in by_type.items()},
        error_rate=error_rate,
    )


def analyze_style_markers(text: str) -> StyleMarkers:
    """
    Count informal register markers.

    Formality starts at 100 and loses points per 100 words: 0.5 per
    contraction, 2 per colloquialism, 0.3 per first-person and 0.4 per
    second-person pronoun.
    """
    if not text or not text.strip():
        return StyleMarkers()

    word_count = _count_tokens(text)
    counts = {rule.id: len(rule.pattern.findall(text)) for rule in STYLE_MARKERS}

    informality = (
        counts["contractions"] * 0.5
        + counts["colloquial"] * 2.0
        + counts["first_person"] * 0.3
        + counts["second_person"] * 0.4
    ) / word_count * 100 if word_count else 0.0

    return StyleMarkers(
        contractions=counts["contractions"],
        first_person=counts["first_person"],
        second_person=counts["second_person"],
        colloquial=counts["colloquial"],
        formality=clamp(100 - informality),
    )


def build_error_profile(
    texts: list[str],
    config: EngineConfig = DEFAULT_CONFIG,
    analyses: Optional[list[ErrorAnalysis]] = None,
) -> ErrorProfile:
    """
    Aggregate error habits over baseline samples.

    A pattern is *common* when it appears in at least half the samples and
    *consistent* when it appears in at least 70% of them.
    """
    if not texts:
        return ErrorProfile()

    if analyses is None:
        analyses = [detect_error_patterns(text, config) for text in texts]

    occurrences: dict[str, int] = {}
    coverage: dict[str, int] = {}
    first_seen: dict[str, DetectedError] = {}
    for analysis in analyses:
        for error in analysis.errors:
            first_seen.setdefault(error.id, error)
            occurrences[error.id] = occurrences.get(error.id, 0) + error.count
            coverage[error.id] = coverage.get(error.id, 0) + 1

    patterns = [
        ErrorPatternSummary(
            id=error_id,
            type=error.type,
            severity=error.severity,
            description=error.description,
            occurrences=occurrences[error_id],
            samples_with_error=coverage[error_id],
        )
        for error_id, error in first_seen.items()
    ]

    n = len(texts)
    common_min = math.ceil(n * config.common_error_share)
    consistent_min = math.ceil(n * config.consistent_error_share)

    common = sorted(
        (p for p in patterns if p.samples_with_error >= common_min),
        key=lambda p: -p.samples_with_error,
    )
    consistent = [p.id for p in patterns if p.samples_with_error >= consistent_min]

    return ErrorProfile(
        common_patterns=tuple(common),
        consistent_errors=tuple(consistent),
        patterns=tuple(patterns),
        avg_error_rate=sum(a.error_rate for a in analyses) / n,
        avg_cleanliness=sum(a.cleanliness for a in analyses) / n,
        sample_count=n,
    )


def compare_error_profiles(
    baseline: Optional[ErrorProfile],
    current: Optional[ErrorAnalysis],
    config: EngineConfig = DEFAULT_CONFIG,
) -> ErrorComparison:
    """
    Compare a document's errors with the baseline habits.

    The document is *suspiciously clean* when it is very clean, the
    baseline is not, and at least one habitual error has disappeared.
    """
    if baseline is None or current is None:
        return ErrorComparison()

    reduction = baseline.avg_error_rate - current.error_rate
    reduction_pct = reduction / baseline.avg_error_rate * 100 if baseline.avg_error_rate > 0 else 0.0

    current_ids = current.error_ids
    missing = tuple(e for e in baseline.consistent_errors if e not in current_ids)

    known = set(baseline.consistent_errors) | {p.id for p in baseline.common_patterns}
    new_errors = tuple(e for e in current.errors if e.id not in known)

    cleanliness_change = current.cleanliness - baseline.avg_cleanliness

    suspiciously_clean = (
        current.cleanliness > config.suspicious_current_cleanliness
        and baseline.avg_cleanliness < config.suspicious_baseline_cleanliness
        and len(missing) > 0
    )

    if suspiciously_clean:
        note = (
            "Text is unusually clean compared to baseline. "
            f"{len(missing)} consistent error pattern(s) are missing."
        )
    elif reduction_pct > 50 and baseline.avg_error_rate > 2:
        note = "Significant error reduction detected. This could indicate improvement or assistance."
    elif reduction_pct < -50:
        note = "Error rate has increased significantly compared to baseline."
    elif abs(cleanliness_change) < 5:
        note = "Error patterns are consistent with baseline."
    else:
        note = ""

    return ErrorComparison(
        error_reduction=reduction_pct,
        suspiciously_clean=suspiciously_clean,
        missing_consistent_errors=missing,
        new_errors=new_errors,
        cleanliness_change=cleanliness_change,
        baseline_rate_level=classify_error_rate(baseline.avg_error_rate, config),
        current_rate_level=classify_error_rate(current.error_rate, config),
        confidence_note=note,
    )
