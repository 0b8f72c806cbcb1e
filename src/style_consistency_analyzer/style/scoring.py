"""
Deviation and Composite Scoring

Turn baseline statistics and a new document's measurements into
per-metric deviations, one 0-100 consistency score and categorical style
change flags.
"""

from dataclasses import dataclass, asdict
from typing import Optional
import math

from .errors import ErrorComparison
from .explain import (
    ExplanationStep,
    consistency_band,
    interpret_composite_score,
    interpret_rms_z_score,
)
from .metrics import TextMetrics
from .stats import MetricStatistics, assess_significance, calculate_z_score, clamp
from .syntax import SyntacticComparison, classify_syntactic_deviation
from .thresholds import EngineConfig, DEFAULT_CONFIG
from .vocabulary import VocabularyComparison


# key -> (label, suffix) for the metrics compared against the baseline
METRIC_LABELS: dict[str, tuple[str, str]] = {
    "grade": ("Grade Level", ""),
    "cv": ("Sentence Variation", "%"),
    "msttr": ("Vocabulary Variety", "%"),
    "sophistication": ("Sophistication", "%"),
    "formal_weight": ("Formulaic Weight", ""),
    "predictability": ("Predictability", "%"),
    "coherence": ("Coherence", "%"),
    "passive_ratio": ("Passive Voice", "%"),
    "avg_sentence_length": ("Avg Sentence Length", ""),
}

DEVIATION_KEYS = tuple(METRIC_LABELS)


@dataclass(frozen=True)
class Deviation:
    """How far one metric of the document sits from the baseline."""
    key: str
    label: str
    suffix: str
    baseline_mean: float
    baseline_std_dev: float
    baseline_min: float
    baseline_max: float
    current_value: float
    diff: float
    z_score: float
    significance: str  # "none", "low", "medium" or "high"
    is_significant: bool
    significance_label: str  # OK, NOTICE, WARNING or ALERT

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class StyleChangeFlag:
    type: str
    severity: str  # "low", "medium" or "high"
    message: str
    detail: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class CompositeScore:
    """The consistency score and every intermediate value behind it."""
    score: float
    rms_z_score: float
    metric_score: float
    vocab_score: float
    syntax_score: float
    error_score: float
    weighted_sum: float
    penalty: float
    penalties: tuple[str, ...]
    band: str
    steps: tuple[ExplanationStep, ...]

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "rms_z_score": self.rms_z_score,
            "metric_score": self.metric_score,
            "vocab_score": self.vocab_score,
            "syntax_score": self.syntax_score,
            "error_score": self.error_score,
            "weighted_sum": self.weighted_sum,
            "penalty": self.penalty,
            "penalties": list(self.penalties),
            "band": self.band,
            "steps": [s.to_dict() for s in self.steps],
        }


def calculate_metric_deviations(
    baseline_metrics: dict[str, MetricStatistics],
    current: TextMetrics,
    config: EngineConfig = DEFAULT_CONFIG,
) -> list[Deviation]:
    """Compute the z-score and significance of each compared metric."""
    values = current.metric_values()
    deviations = []

    for key, (label, suffix) in METRIC_LABELS.items():
        baseline = baseline_metrics.get(key)
        if baseline is None:
            continue

        value = values[key]
        diff = value - baseline.mean
        significance = assess_significance(diff, baseline.std_dev, config)

        deviations.append(Deviation(
            key=key,
            label=label,
            suffix=suffix,
            baseline_mean=baseline.mean,
            baseline_std_dev=baseline.std_dev,
            baseline_min=baseline.min,
            baseline_max=baseline.max,
            current_value=value,
            diff=diff,
            z_score=calculate_z_score(value, baseline.mean, baseline.std_dev),
            significance=significance.level,
            is_significant=significance.significant,
            significance_label=significance.label,
        ))

    return deviations


def _decay(z: float) -> float:
    """Score 100 at z = 0, 50 at z = 2, about 30 at z = 3."""
    return 100 / (1 + (z / 2) ** 2)


def _vocab_interpretation(score: float, config: EngineConfig) -> str:
    if score >= config.vocab_overlap_high:
        return "Strong vocabulary consistency with baseline."
    if score >= config.vocab_overlap_moderate:
        return "Moderate vocabulary overlap."
    if score >= config.vocab_overlap_low:
        return "Low vocabulary overlap; word choices differ noticeably from baseline."
    return (
        "Very low vocabulary overlap suggests different word choices. The symmetric "
        "calculation does not penalize vocabulary expansion on its own."
    )


def calculate_composite_score(
    deviations: list[Deviation],
    vocab: Optional[VocabularyComparison],
    syntax: Optional[SyntacticComparison],
    errors: Optional[ErrorComparison],
    config: EngineConfig = DEFAULT_CONFIG,
) -> CompositeScore:
    """
    Combine all comparisons into one 0-100 consistency score.

    The explanation steps are built here from the same intermediate values
    as the score, so the trace always matches the number.
    """
    weights = config.weights
    syntax = syntax or SyntacticComparison()
    errors = errors or ErrorComparison()
    steps = []

    # 1. RMS of the metric z-scores
    z_scores = [d.z_score for d in deviations]
    rms = math.sqrt(sum(z * z for z in z_scores) / len(z_scores)) if z_scores else 0.0
    steps.append(ExplanationStep(
        title="Calculate RMS (Root Mean Square) Z-Score",
        formula="RMS = √(Σz² / n)",
        substitution=(
            f"√(({' + '.join(f'{z:.1f}²' for z in z_scores)}) / {len(z_scores)})"
            if z_scores else "No metrics compared"
        ),
        result=f"RMS = {rms:.2f}",
        interpretation=interpret_rms_z_score(rms),
    ))

    # 2. Metric deviation component
    metric_score = _decay(rms)
    steps.append(ExplanationStep(
        title="Metric Deviation Component",
        formula="metricScore = 100 / (1 + (RMS/2)²)",
        substitution=(
            f"100 / (1 + ({rms:.2f}/2)²) = 100 / (1 + {(rms / 2) ** 2:.2f}) = {metric_score:.1f}"
        ),
        result=(
            f"{metric_score:.1f} × {weights.metric * 100:.0f}% weight = "
            f"{metric_score * weights.metric:.1f} points"
        ),
        interpretation="Decay function: Z=0→100pts, Z=2→50pts, Z=3→30pts.",
    ))

    # 3. Vocabulary component
    vocab_score = vocab.overlap_score if vocab is not None else config.neutral_vocab_score
    steps.append(ExplanationStep(
        title="Vocabulary Overlap Component",
        formula="70% function-word similarity + 30% symmetric signature-word overlap",
        substitution=f"{vocab_score:.1f}% vocabulary overlap",
        result=(
            f"{vocab_score:.1f} × {weights.vocabulary * 100:.0f}% weight = "
            f"{vocab_score * weights.vocabulary:.1f} points"
        ),
        interpretation=_vocab_interpretation(vocab_score, config),
    ))

    # 4. Syntax component
    syntax_score = _decay(syntax.overall_deviation)
    steps.append(ExplanationStep(
        title="Syntactic Patterns Component",
        formula="syntaxScore = 100 / (1 + (deviation/2)²)",
        substitution=f"100 / (1 + ({syntax.overall_deviation:.2f}/2)²) = {syntax_score:.1f}",
        result=(
            f"{syntax_score:.1f} × {weights.syntax * 100:.0f}% weight = "
            f"{syntax_score * weights.syntax:.1f} points"
        ),
        interpretation=(
            f"{classify_syntactic_deviation(syntax.overall_deviation, config).capitalize()} "
            "deviation in sentence openings, clause usage, complexity and structural variety."
        ),
    ))

    # 5. Error component
    change = abs(errors.cleanliness_change)
    if errors.suspiciously_clean:
        error_score = max(config.suspicious_error_floor, 100 - change * config.suspicious_error_factor)
        error_formula = (
            f"max({config.suspicious_error_floor:.0f}, 100 - |cleanlinessChange| × "
            f"{config.suspicious_error_factor})"
        )
        error_substitution = (
            f"max({config.suspicious_error_floor:.0f}, 100 - {change:.1f} × "
            f"{config.suspicious_error_factor}) = {error_score:.1f}"
        )
        error_note = (
            "Writing is suspiciously cleaner than baseline; the penalty is proportional "
            "to the size of the change, which leaves room for genuine improvement."
        )
    else:
        error_score = max(0.0, 100 - change * config.error_change_factor)
        error_formula = f"max(0, 100 - |cleanlinessChange| × {config.error_change_factor})"
        error_substitution = f"100 - {change:.1f} × {config.error_change_factor} = {error_score:.1f}"
        error_note = "Error patterns are consistent with baseline writing."
    steps.append(ExplanationStep(
        title="Error Consistency Component",
        formula=error_formula,
        substitution=error_substitution,
        result=(
            f"{error_score:.1f} × {weights.error * 100:.0f}% weight = "
            f"{error_score * weights.error:.1f} points"
        ),
        interpretation=error_note,
    ))

    # 6. Weighted sum
    parts = (
        metric_score * weights.metric,
        vocab_score * weights.vocabulary,
        syntax_score * weights.syntax,
        error_score * weights.error,
    )
    weighted_sum = sum(parts)
    steps.append(ExplanationStep(
        title="Sum Weighted Components",
        formula="sum of all weighted scores",
        substitution=" + ".join(f"{p:.1f}" for p in parts),
        result=f"{weighted_sum:.1f} points",
        interpretation=(
            f"At most {(1 - weights.special) * 100:.0f} points; the remaining "
            f"{weights.special * 100:.0f}% is held back for special penalties."
        ),
    ))

    # 7. Penalties
    penalty = 0.0
    penalties = []
    if errors.suspiciously_clean:
        penalty += config.suspicious_clean_penalty
        penalties.append(f"Suspiciously clean text: -{config.suspicious_clean_penalty:.0f} points")

    significant = sum(1 for d in deviations if d.is_significant)
    if significant >= config.deviation_penalty_min_count:
        deviation_penalty = min(config.deviation_penalty_cap, significant * config.deviation_penalty_per_metric)
        penalty += deviation_penalty
        penalties.append(
            f"{significant} significant deviations: -{deviation_penalty:.0f} points "
            f"(scaled: {significant}×{config.deviation_penalty_per_metric:.0f}, "
            f"capped at {config.deviation_penalty_cap:.0f})"
        )

    if penalty > 0:
        steps.append(ExplanationStep(
            title="Apply Special Penalties",
            formula=None,
            substitution="; ".join(penalties),
            result=f"-{penalty:.0f} points",
            interpretation="Additional penalties for patterns that suggest style inconsistency.",
        ))

    # 8. Final score
    score = clamp(weighted_sum - penalty)
    steps.append(ExplanationStep(
        title="Final Consistency Score",
        formula="clamp(weightedSum - penalties, 0, 100)",
        substitution=(
            f"{weighted_sum:.1f} - {penalty:.0f} = {score:.1f}" if penalty > 0 else f"{weighted_sum:.1f}"
        ),
        result=f"{score:.0f} / 100",
        interpretation=interpret_composite_score(score, config),
    ))

    return CompositeScore(
        score=score,
        rms_z_score=rms,
        metric_score=metric_score,
        vocab_score=vocab_score,
        syntax_score=syntax_score,
        error_score=error_score,
        weighted_sum=weighted_sum,
        penalty=penalty,
        penalties=tuple(penalties),
        band=consistency_band(score, config),
        steps=tuple(steps),
    )


def generate_style_change_flags(
    deviations: list[Deviation],
    vocab: Optional[VocabularyComparison],
    syntax: Optional[SyntacticComparison],
    errors: Optional[ErrorComparison],
    config: EngineConfig = DEFAULT_CONFIG,
) -> list[StyleChangeFlag]:
    """Evaluate each flag rule independently; flags come out in rule order."""
    rules = config.flags
    flags = []

    if errors is not None and errors.suspiciously_clean:
        flags.append(StyleChangeFlag(
            type="SUSPICIOUSLY_CLEAN",
            severity="high",
            message="Error rate suspiciously low compared to baseline",
            detail=errors.confidence_note,
        ))

    if vocab is not None and vocab.overlap_score < rules.vocabulary_shift_overlap:
        flags.append(StyleChangeFlag(
            type="VOCABULARY_SHIFT",
            severity="medium",
            message="Vocabulary overlap significantly lower than expected",
            detail=f"Vocabulary overlap: {vocab.overlap_score:.0f}%",
        ))

    significant = sum(1 for d in deviations if d.is_significant)
    if significant >= rules.multiple_deviations_count:
        flags.append(StyleChangeFlag(
            type="MULTIPLE_DEVIATIONS",
            severity="high",
            message="Multiple metrics showing simultaneous significant deviations",
            detail=f"{significant} metrics showing significant deviations",
        ))

    if syntax is not None and syntax.overall_deviation >= rules.syntactic_shift_deviation:
        flags.append(StyleChangeFlag(
            type="SYNTACTIC_SHIFT",
            severity="medium",
            message="Sentence structure patterns differ significantly from baseline",
            detail=f"Syntactic deviation score: {syntax.overall_deviation:.2f}",
        ))

    by_key = {d.key: d for d in deviations}

    sophistication = by_key.get("sophistication")
    if sophistication and sophistication.z_score >= rules.sophistication_jump_z:
        flags.append(StyleChangeFlag(
            type="SOPHISTICATION_JUMP",
            severity="medium",
            message="Vocabulary sophistication increased significantly",
            detail=f"Z-score: {sophistication.z_score:.2f}",
        ))

    formulaic = by_key.get("formal_weight")
    if formulaic and formulaic.z_score >= rules.formulaic_increase_z:
        flags.append(StyleChangeFlag(
            type="FORMULAIC_INCREASE",
            severity="low",
            message="Increase in formulaic language usage",
            detail=f"Formulaic weight increased by {formulaic.diff:.1f}",
        ))

    return flags
