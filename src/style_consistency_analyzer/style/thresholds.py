"""
Engine Configuration

Every numeric threshold, baseline rate and weight the engine uses, gathered
in one immutable object. Pass an alternate ``EngineConfig`` (built with
``dataclasses.replace``) to the analyzer to experiment with the tuning.
"""

from dataclasses import dataclass, field
import math


@dataclass(frozen=True)
class CompositeWeights:
    """Weights of the composite consistency score components."""

    metric: float = 0.40
    vocabulary: float = 0.10
    syntax: float = 0.30
    error: float = 0.15
    # Held back for the subtracted penalties; caps the weighted sum at 95
    special: float = 0.05

    def __post_init__(self):
        total = self.metric + self.vocabulary + self.syntax + self.error + self.special
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Composite weights must sum to 1.0, got {total:.4f}")


@dataclass(frozen=True)
class FlagRules:
    """Trigger levels for the style change flags."""

    vocabulary_shift_overlap: float = 40.0
    multiple_deviations_count: int = 3
    syntactic_shift_deviation: float = 2.0
    sophistication_jump_z: float = 1.8
    formulaic_increase_z: float = 1.5


@dataclass(frozen=True)
class EngineConfig:
    """Thresholds and constants for metric extraction and scoring."""

    # Single-document interpretation
    low_cv: float = 25.0
    high_predictability: float = 30.0
    high_formulaic: float = 10.0

    # Text metrics
    msttr_segment_size: int = 50
    sophisticated_word_length: int = 6
    min_ngram_words: int = 10
    human_bigram_baseline: float = 15.0
    human_trigram_baseline: float = 3.0
    bigram_excess_weight: float = 2.0
    trigram_excess_weight: float = 5.0
    coherence_content_words: int = 10

    # Outliers
    outlier_z_threshold: float = 2.5
    outlier_iqr_multiplier: float = 1.5
    outlier_min_samples: int = 4

    # Baseline variance levels (% coefficient of variation)
    variance_low: float = 15.0
    variance_moderate: float = 30.0
    variance_high: float = 50.0

    # Consistency score bands
    consistency_excellent: float = 90.0
    consistency_good: float = 70.0
    consistency_moderate: float = 50.0
    consistency_concerning: float = 30.0

    # Vocabulary overlap bands and comparison
    vocab_overlap_high: float = 70.0
    vocab_overlap_moderate: float = 50.0
    vocab_overlap_low: float = 30.0
    signature_word_count: int = 20
    function_word_damping: float = 0.5
    function_word_share: float = 0.7
    content_word_share: float = 0.3

    # Error rate bands (errors per 100 words)
    error_rate_low: float = 1.0
    error_rate_moderate: float = 3.0
    error_rate_high: float = 5.0
    # (severity, weight) pairs
    error_severity_weights: tuple[tuple[int, float], ...] = (
        (0, 0.5), (1, 1.0), (2, 2.0), (3, 3.0),
    )
    common_error_share: float = 0.5
    consistent_error_share: float = 0.7
    suspicious_current_cleanliness: float = 90.0
    suspicious_baseline_cleanliness: float = 75.0

    # Syntactic deviation bands (mean |z| across structure features)
    syntactic_deviation_minor: float = 1.0
    syntactic_deviation_moderate: float = 1.5
    syntactic_deviation_major: float = 2.0

    # Significance tiers for |z|
    significance_low: float = 1.0
    significance_medium: float = 1.5
    significance_high: float = 2.0

    # Composite score
    weights: CompositeWeights = field(default_factory=CompositeWeights)
    suspicious_clean_penalty: float = 10.0
    deviation_penalty_min_count: int = 3
    deviation_penalty_per_metric: float = 5.0
    deviation_penalty_cap: float = 20.0
    suspicious_error_floor: float = 40.0
    suspicious_error_factor: float = 1.5
    error_change_factor: float = 0.8
    neutral_vocab_score: float = 50.0

    flags: FlagRules = field(default_factory=FlagRules)

    def severity_weight(self, severity: int) -> float:
        """Weight of an error severity (1.0 for unlisted severities)."""
        for level, weight in self.error_severity_weights:
            if level == severity:
                return weight
        return 1.0


DEFAULT_CONFIG = EngineConfig()
