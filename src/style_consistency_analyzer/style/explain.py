"""
Calculation Explanations

Step-by-step breakdowns of how a number was computed, with a plain
language reading of the result. Used by the composite scorer, by
``ComparisonResult.explain_metric`` and for single-document metrics.
"""

from dataclasses import dataclass
from typing import Optional

from .metrics import TextMetrics
from .phrases import FORMAL_REGISTER_PHRASES
from .stats import MetricStatistics
from .thresholds import EngineConfig, DEFAULT_CONFIG


@dataclass(frozen=True)
class ExplanationStep:
    """One step of a calculation trace."""
    title: str
    formula: Optional[str]
    substitution: str
    result: str
    interpretation: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "formula": self.formula,
            "substitution": self.substitution,
            "result": self.result,
            "interpretation": self.interpretation,
        }


# === Interpretation helpers ===

def interpret_std_dev(std_dev: float, mean: float, label: str) -> str:
    name = label.lower()
    if mean == 0:
        cv = 0.0 if std_dev == 0 else float("inf")
    else:
        cv = abs(std_dev / mean) * 100

    if cv < 10:
        return f"Very consistent baseline: the author's {name} varies by only {std_dev:.1f} on average."
    if cv < 20:
        return f"Moderately consistent baseline: typical variation of {std_dev:.1f} in {name}."
    return f"Variable baseline: {name} shows considerable natural variation (σ = {std_dev:.1f})."


def interpret_z_score(z_score: float, label: str, is_higher: bool) -> str:
    name = label.lower()
    abs_z = abs(z_score)
    direction = "higher" if is_higher else "lower"

    if abs_z < 1.0:
        return (
            f"This {name} is within normal variation for this author. "
            "The difference is not statistically significant."
        )
    if abs_z < 1.5:
        return (
            f"This {name} is slightly {direction} than usual ({abs_z:.1f} standard deviations), "
            "but still within an expected range."
        )
    if abs_z < 2.0:
        return (
            f"This {name} is notably {direction} than the author's baseline "
            f"({abs_z:.1f} standard deviations). This warrants attention."
        )
    return (
        f"This {name} is significantly {direction} than baseline ({abs_z:.1f} standard deviations). "
        "This is a strong statistical indicator of style change."
    )


def interpret_rms_z_score(rms: float) -> str:
    if rms < 1.0:
        return (
            "Overall metrics are statistically consistent with baseline writing patterns. "
            "Most measurements fall within normal variation."
        )
    if rms < 1.5:
        return (
            "Some metrics show minor deviations from baseline, but nothing highly unusual. "
            "This could reflect natural variation or topic differences."
        )
    if rms < 2.0:
        return (
            "Several metrics show notable deviations from established patterns. "
            "This suggests the writing style has changed in measurable ways."
        )
    return (
        "Multiple metrics show significant deviations, suggesting substantial style "
        "changes across different dimensions of writing."
    )


def consistency_band(score: float, config: EngineConfig = DEFAULT_CONFIG) -> str:
    """Name the band a consistency score falls in."""
    if score >= config.consistency_excellent:
        return "excellent"
    if score >= config.consistency_good:
        return "good"
    if score >= config.consistency_moderate:
        return "moderate"
    if score >= config.consistency_concerning:
        return "concerning"
    return "critical"


_BAND_TEXT = {
    "excellent": (
        "Highly Consistent: writing is very well aligned with the author's "
        "established patterns across all measures."
    ),
    "good": (
        "Generally Consistent: writing shows good alignment with baseline with some "
        "minor variations that could be natural."
    ),
    "moderate": (
        "Noticeable Deviation: clear differences from baseline patterns detected. "
        "This may warrant a conversation about the writing process."
    ),
    "concerning": (
        "Significant Deviation: substantial stylistic differences suggest possible "
        "external influence or assistance."
    ),
    "critical": (
        "Dramatic Change: very large style changes detected across multiple dimensions "
        "of writing."
    ),
}


def interpret_composite_score(score: float, config: EngineConfig = DEFAULT_CONFIG) -> str:
    return _BAND_TEXT[consistency_band(score, config)]


# === Metric explanation ===

def explain_metric(
    key: str,
    label: str,
    suffix: str,
    statistics: MetricStatistics,
    current_value: float,
    z_score: float,
    sample_count: int,
    recommended_samples: int = 5,
) -> list[ExplanationStep]:
    """
    Explain how a metric's z-score against the baseline was computed.

    When the baseline has fewer than ``recommended_samples`` samples, a final
    step warns that the z-score rests on too little history.
    """
    values = list(statistics.values)
    n = len(values)

    if n <= 5:
        sum_formula = f"({' + '.join(f'{v:.1f}' for v in values)}) / {n}"
    else:
        sum_formula = f"sum of {n} values / {n}"

    steps = [
        ExplanationStep(
            title="Collect Baseline Values",
            formula=None,
            substitution=f"{n} baseline samples",
            result=f"Range: {statistics.min:.1f}{suffix} to {statistics.max:.1f}{suffix}",
            interpretation=f"These values come from {n} earlier samples by the same author.",
        ),
        ExplanationStep(
            title="Calculate Baseline Mean (Average)",
            formula="μ = Σx / n",
            substitution=sum_formula,
            result=f"{statistics.mean:.2f}{suffix}",
            interpretation=f"The author's typical {label} is {statistics.mean:.1f}{suffix}.",
        ),
        ExplanationStep(
            title="Calculate Standard Deviation",
            formula="σ = √(Σ(x - μ)² / n)",
            substitution="Measures how much variation exists in the baseline",
            result=f"σ = {statistics.std_dev:.2f}{suffix}",
            interpretation=interpret_std_dev(statistics.std_dev, statistics.mean, label),
        ),
        ExplanationStep(
            title="Calculate Z-Score",
            formula="z = (x - μ) / σ",
            substitution=(
                f"({current_value:.2f} - {statistics.mean:.2f}) / "
                f"{statistics.std_dev:.2f} = {z_score:.2f}"
            ),
            result=f"z = {z_score:.2f}",
            interpretation=interpret_z_score(z_score, label, current_value > statistics.mean),
        ),
    ]

    if sample_count < recommended_samples:
        steps.append(ExplanationStep(
            title="Limited Baseline",
            formula=None,
            substitution=f"{sample_count} of {recommended_samples} recommended samples",
            result="z-score less reliable",
            interpretation=(
                f"With fewer than {recommended_samples} baseline samples the standard "
                "deviation is a rough estimate, so treat this z-score with caution."
            ),
        ))

    return steps


# === Single-document explanations ===

def _explain_grade(metrics: TextMetrics, config: EngineConfig) -> list[ExplanationStep]:
    total_words = sum(s.word_count for s in metrics.sentences)
    total_sentences = len(metrics.sentences)
    total_syllables = sum(s.syllable_count for s in metrics.sentences)
    asl = total_words / total_sentences if total_sentences else 0.0
    asw = total_syllables / total_words if total_words else 0.0

    if asl < 15:
        asl_note = "Short sentences, easier to read."
    elif asl > 25:
        asl_note = "Long sentences, more complex."
    else:
        asl_note = "Moderate sentence length."

    if asw < 1.5:
        asw_note = "Simple vocabulary."
    elif asw > 2.0:
        asw_note = "Complex vocabulary."
    else:
        asw_note = "Moderate vocabulary complexity."

    grade = metrics.readability.grade
    return [
        ExplanationStep(
            title="Calculate Average Sentence Length",
            formula="ASL = total words / total sentences",
            substitution=f"{total_words} words / {total_sentences} sentences",
            result=f"{asl:.1f} words/sentence",
            interpretation=asl_note,
        ),
        ExplanationStep(
            title="Calculate Average Syllables Per Word",
            formula="ASW = total syllables / total words",
            substitution=f"{total_syllables} syllables / {total_words} words",
            result=f"{asw:.2f} syllables/word",
            interpretation=asw_note,
        ),
        ExplanationStep(
            title="Apply Flesch-Kincaid Formula",
            formula="Grade = 0.39×ASL + 11.8×ASW - 15.59",
            substitution=f"0.39×{asl:.1f} + 11.8×{asw:.2f} - 15.59",
            result=f"Grade {grade:.1f}",
            interpretation=(
                f"This text is at approximately a grade {round(grade)} reading level "
                "according to the Flesch-Kincaid formula."
            ),
        ),
    ]


def _explain_cv(metrics: TextMetrics, config: EngineConfig) -> list[ExplanationStep]:
    mean = metrics.sentence_stats.mean
    std_dev = metrics.sentence_stats.std_dev
    cv = metrics.cv

    if std_dev < 5:
        spread_note = "Low variation: sentences are similar in length."
    elif std_dev > 10:
        spread_note = "High variation: diverse sentence lengths."
    else:
        spread_note = "Moderate variation in sentence lengths."

    if cv < config.low_cv:
        cv_note = (
            f"CV < {config.low_cv:.0f}% suggests uniform sentence lengths, which can "
            "indicate algorithmic or templated writing."
        )
    else:
        cv_note = (
            f"CV ≥ {config.low_cv:.0f}% indicates natural variation in sentence "
            "structure typical of human writing."
        )

    return [
        ExplanationStep(
            title="Calculate Mean Sentence Length",
            formula="μ = Σx / n",
            substitution=f"Sum of all sentence lengths / {len(metrics.sentences)} sentences",
            result=f"μ = {mean:.1f} words",
            interpretation="Average sentence length across the text.",
        ),
        ExplanationStep(
            title="Calculate Standard Deviation",
            formula="σ = √(Σ(x - μ)² / n)",
            substitution="Measure of spread in sentence lengths",
            result=f"σ = {std_dev:.1f} words",
            interpretation=spread_note,
        ),
        ExplanationStep(
            title="Calculate Coefficient of Variation",
            formula="CV = (σ / μ) × 100",
            substitution=f"({std_dev:.1f} / {mean:.1f}) × 100",
            result=f"CV = {cv:.1f}%",
            interpretation=cv_note,
        ),
    ]


def _explain_msttr(metrics: TextMetrics, config: EngineConfig) -> list[ExplanationStep]:
    msttr = metrics.vocabulary.msttr * 100
    size = config.msttr_segment_size

    if msttr < 60:
        note = "Lower variety: more repetitive vocabulary."
    elif msttr > 75:
        note = "High variety: diverse vocabulary usage."
    else:
        note = "Moderate vocabulary variety."

    return [
        ExplanationStep(
            title=f"Split Text into {size}-Word Segments",
            formula=None,
            substitution=f"Text divided into segments of {size} words each",
            result="Non-overlapping segments created",
            interpretation=(
                f"MSTTR uses {size}-word segments to account for text length effects "
                "on vocabulary diversity."
            ),
        ),
        ExplanationStep(
            title="Calculate TTR for Each Segment",
            formula="TTR = (unique words / total words) × 100",
            substitution=f"For each {size}-word segment",
            result="Individual TTR values calculated",
            interpretation="Type-Token Ratio measures vocabulary diversity within each segment.",
        ),
        ExplanationStep(
            title="Calculate Mean-Segmental TTR",
            formula="MSTTR = (Σ segment_TTR) / n_segments",
            substitution="Average of all segment TTRs",
            result=f"MSTTR = {msttr:.1f}%",
            interpretation=note,
        ),
    ]


def _explain_formal_weight(metrics: TextMetrics, config: EngineConfig) -> list[ExplanationStep]:
    register = metrics.formal_register
    weight = register.total_weight

    if weight < 5:
        note = "Low formulaic score: minimal use of stock phrases."
    elif weight > config.high_formulaic:
        note = "High formulaic score: heavy reliance on template language."
    else:
        note = "Moderate use of formulaic phrases."

    return [
        ExplanationStep(
            title="Detect Formulaic Phrases",
            formula=None,
            substitution=(
                f"Scanned text against a catalog of {len(FORMAL_REGISTER_PHRASES)} "
                "known formulaic phrases"
            ),
            result=f"Found {register.total_count} formulaic phrases in this text",
            interpretation=(
                "Formulaic phrases include clichés, heavy transitions and template "
                "language common in machine-generated text."
            ),
        ),
        ExplanationStep(
            title="Apply Severity Weights",
            formula="weight = Σ(phrase_count × severity_weight)",
            substitution=(
                f"High (×3): {register.severity['high']}, "
                f"Medium (×2): {register.severity['medium']}, "
                f"Low (×1): {register.severity['low']}"
            ),
            result=f"Total weight = {weight:.1f}",
            interpretation=note,
        ),
    ]


def _explain_predictability(metrics: TextMetrics, config: EngineConfig) -> list[ExplanationStep]:
    ngrams = metrics.ngrams
    bigram_base = config.human_bigram_baseline
    trigram_base = config.human_trigram_baseline
    bigram_rate = ngrams.bigrams.rate
    trigram_rate = ngrams.trigrams.rate
    bigram_excess = ngrams.bigrams.excess
    trigram_excess = ngrams.trigrams.excess
    score = ngrams.predictability

    if score < 20:
        note = "Low predictability: natural, varied language."
    elif score > config.high_predictability:
        note = "High predictability: may indicate template-driven or machine-generated patterns."
    else:
        note = "Moderate predictability score."

    return [
        ExplanationStep(
            title="Calculate N-gram Rates",
            formula="rate = (formulaic_ngrams / total_words) × 100",
            substitution=f"Bigrams: {bigram_rate:.1f}%, Trigrams: {trigram_rate:.1f}%",
            result=(
                f"Baseline rates: {bigram_base:.0f}% bigrams, "
                f"{trigram_base:.0f}% trigrams (human writing)"
            ),
            interpretation=(
                "Formulaic n-grams are common word sequences that appear frequently "
                "in template-driven text."
            ),
        ),
        ExplanationStep(
            title="Calculate Excess N-grams",
            formula="excess = max(0, rate - baseline)",
            substitution=(
                f"Bigram excess: max(0, {bigram_rate:.1f} - {bigram_base:.0f}) = {bigram_excess:.1f}; "
                f"Trigram excess: max(0, {trigram_rate:.1f} - {trigram_base:.0f}) = {trigram_excess:.1f}"
            ),
            result=f"Bigram: {bigram_excess:.1f}%, Trigram: {trigram_excess:.1f}%",
            interpretation="Excess measures how much this text exceeds typical human writing patterns.",
        ),
        ExplanationStep(
            title="Calculate Predictability Score",
            formula="score = min(100, excess_bigram×2 + excess_trigram×5)",
            substitution=f"min(100, {bigram_excess:.1f}×2 + {trigram_excess:.1f}×5)",
            result=f"{score:.0f}%",
            interpretation=note,
        ),
    ]


_TEXT_EXPLAINERS = {
    "grade": _explain_grade,
    "cv": _explain_cv,
    "msttr": _explain_msttr,
    "formal_weight": _explain_formal_weight,
    "predictability": _explain_predictability,
}

TEXT_METRIC_KEYS = tuple(_TEXT_EXPLAINERS)


def explain_text_metric(
    key: str,
    metrics: TextMetrics,
    config: EngineConfig = DEFAULT_CONFIG,
) -> list[ExplanationStep]:
    """
    Explain one metric of a single document.

    Raises:
        KeyError: if the metric has no single-document explanation
    """
    if key not in _TEXT_EXPLAINERS:
        raise KeyError(f"No explanation for metric '{key}'; choose from {', '.join(TEXT_METRIC_KEYS)}")
    return _TEXT_EXPLAINERS[key](metrics, config)
