"""
Baseline Profile

Aggregate an author's known samples into the reference profile that new
documents are compared against.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence
import json
import logging

from ..config import Settings, get_settings
from .errors import ErrorAnalysis, ErrorProfile, build_error_profile, detect_error_patterns
from .metrics import METRIC_KEYS, TextMetrics, extract_metrics
from .stats import MetricStatistics, clamp, detect_outliers
from .syntax import SyntacticAnalysis, SyntacticProfile, analyze_sentence_structure, build_syntactic_profile
from .thresholds import EngineConfig, DEFAULT_CONFIG
from .vocabulary import VocabularyProfile, build_vocabulary_profile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SampleAnalysis:
    """Everything extracted from one baseline sample."""
    metrics: TextMetrics
    syntax: SyntacticAnalysis
    errors: ErrorAnalysis


@dataclass(frozen=True)
class Reliability:
    """How far the baseline can be trusted."""
    sample_count: int
    overall_variance: float
    variance_level: str  # "low", "moderate", "high" or "very high"
    confidence: float  # 0-100
    outlier_count: int
    outlier_ids: tuple[int, ...]  # sample indexes
    sufficiency: str  # "insufficient", "minimum", "recommended" or "strong"


@dataclass(frozen=True)
class BaselineProfile:
    """The author's reference profile built from baseline samples."""
    metrics: dict[str, MetricStatistics]
    vocabulary: VocabularyProfile
    syntactic: SyntacticProfile
    errors: ErrorProfile
    reliability: Reliability
    samples: tuple[SampleAnalysis, ...] = field(default=(), repr=False)

    @property
    def sample_count(self) -> int:
        return self.reliability.sample_count

    def to_dict(self) -> dict:
        return {
            "metrics": {k: v.to_dict() for k, v in self.metrics.items()},
            "vocabulary": self.vocabulary.to_dict(),
            "syntactic": self.syntactic.to_dict(),
            "errors": self.errors.to_dict(),
            "reliability": {
                "sample_count": self.reliability.sample_count,
                "overall_variance": self.reliability.overall_variance,
                "variance_level": self.reliability.variance_level,
                "confidence": self.reliability.confidence,
                "outlier_count": self.reliability.outlier_count,
                "outlier_ids": list(self.reliability.outlier_ids),
                "sufficiency": self.reliability.sufficiency,
            },
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def analyze_sample(text: str, config: EngineConfig = DEFAULT_CONFIG) -> SampleAnalysis:
    return SampleAnalysis(
        metrics=extract_metrics(text, config),
        syntax=analyze_sentence_structure(text),
        errors=detect_error_patterns(text, config),
    )


def sample_sufficiency(count: int, settings: Settings) -> str:
    """Label how well the number of samples supports statistics."""
    if count >= settings.strong_baseline_samples:
        return "strong"
    if count >= settings.recommended_baseline_samples:
        return "recommended"
    if count >= settings.min_baseline_samples:
        return "minimum"
    return "insufficient"


def classify_variance(overall_variance: float, config: EngineConfig = DEFAULT_CONFIG) -> str:
    """Band the mean coefficient of variation of a baseline."""
    percent = overall_variance * 100
    if percent < config.variance_low:
        return "low"
    if percent < config.variance_moderate:
        return "moderate"
    if percent < config.variance_high:
        return "high"
    return "very high"

def _analyze_all(
    samples: Sequence[str],
    config: EngineConfig,
    workers: int,
    on_sample: Optional[Callable[[int], None]],
) -> list[SampleAnalysis]:
    if workers > 1 and len(samples) > 1:
        logger.debug(f"Analyzing {len(samples)} samples on {workers} threads")
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # map() yields in submission order, so sample order is kept
            analyses = []
            for i, analysis in enumerate(pool.map(lambda t: analyze_sample(t, config), samples)):
                analyses.append(analysis)
                if on_sample:
                    on_sample(i)
            return analyses

    analyses = []
    for i, text in enumerate(samples):
        analyses.append(analyze_sample(text, config))
        if on_sample:
            on_sample(i)
    return analyses


def build_baseline_profile(
    samples: Sequence[str],
    config: EngineConfig = DEFAULT_CONFIG,
    settings: Optional[Settings] = None,
    on_sample: Optional[Callable[[int], None]] = None,
) -> Optional[BaselineProfile]:
    """
    Build the baseline profile from an ordered sequence of sample texts.

    Args:
        samples: Baseline sample texts, in the caller's order
        config: Engine configuration
        settings: Runtime settings (defaults to the cached settings)
        on_sample: Called with each sample's index once it is analyzed

    Returns:
        BaselineProfile, or None when there are no samples
    """
    if not samples:
        return None

    settings = settings or get_settings()
    analyses = _analyze_all(samples, config, settings.parallel_workers, on_sample)

    for i, analysis in enumerate(analyses):
        words = analysis.metrics.vocabulary.total_words
        if words < settings.min_words:
            logger.warning(
                f"Baseline sample {i + 1} has only {words} words "
                f"(fewer than {settings.min_words}); it may skew the baseline"
            )

    values = [a.metrics.metric_values() for a in analyses]
    metrics = {
        key: MetricStatistics.from_values([v[key] for v in values])
        for key in METRIC_KEYS
    }

    outliers = detect_outliers(
        [(i, float(a.metrics.vocabulary.total_words)) for i, a in enumerate(analyses)],
        method="iqr",
        config=config,
    )

    overall_variance = sum(
        m.std_dev / (m.mean or 1) for m in metrics.values()
    ) / len(metrics)
    confidence = clamp(100 - overall_variance * 10 - len(outliers) * 5)

    if outliers:
        logger.info(f"Outlier samples by word count: {[i + 1 for i in outliers]}")

    texts = list(samples)
    profile = BaselineProfile(
        metrics=metrics,
        vocabulary=build_vocabulary_profile(texts, config),
        syntactic=build_syntactic_profile(texts, [a.syntax for a in analyses]),
        errors=build_error_profile(texts, config, [a.errors for a in analyses]),
        reliability=Reliability(
            sample_count=len(analyses),
            overall_variance=overall_variance,
            variance_level=classify_variance(overall_variance, config),
            confidence=confidence,
            outlier_count=len(outliers),
            outlier_ids=tuple(outliers),
            sufficiency=sample_sufficiency(len(analyses), settings),
        ),
        samples=tuple(analyses),
    )

    logger.debug(
        f"Built baseline from {len(analyses)} samples "
        f"(variance {overall_variance:.2f}, confidence {confidence:.0f})"
    )
    return profile
