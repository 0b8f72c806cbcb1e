"""
Style Consistency Analyzer

Main entry point. Builds a baseline profile from an author's samples and
scores how consistent a new document is with it.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, Optional, Sequence
import json
import logging

from ..config import Settings, get_settings
from .errors import ErrorAnalysis, ErrorComparison, compare_error_profiles, detect_error_patterns
from .explain import ExplanationStep, explain_metric
from .metrics import TextMetrics, extract_metrics
from .profile import BaselineProfile, build_baseline_profile
from .scoring import (
    CompositeScore,
    Deviation,
    StyleChangeFlag,
    calculate_composite_score,
    calculate_metric_deviations,
    generate_style_change_flags,
)
from .syntax import SyntacticComparison, analyze_sentence_structure, compare_syntactic_profiles
from .thresholds import EngineConfig, DEFAULT_CONFIG
from .vocabulary import VocabularyComparison, compare_vocabulary_profiles, extract_vocabulary_profile

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to analyze text. Please check your input."


class StyleAnalysisError(Exception):
    """Base class for errors raised by the analyzer."""


class AnalysisError(StyleAnalysisError):
    """Analysis failed unexpectedly; no partial result is available."""


class InsufficientBaselineError(StyleAnalysisError):
    """Too few baseline samples to compare against."""

    def __init__(self, sample_count: int, required: int):
        self.sample_count = sample_count
        self.required = required
        super().__init__(
            f"At least {required} baseline samples are required for comparison, got {sample_count}"
        )


@dataclass
class AnalysisProgress:
    """Progress tracking for style analysis."""
    phase: str
    current: int
    total: int
    message: str = ""


@dataclass(frozen=True)
class ComparisonResult:
    """Everything produced by comparing one document with a baseline."""
    profile: BaselineProfile
    current: TextMetrics
    current_errors: ErrorAnalysis
    vocabulary: VocabularyComparison
    syntax: SyntacticComparison
    errors: ErrorComparison
    deviations: tuple[Deviation, ...]
    composite: CompositeScore
    flags: tuple[StyleChangeFlag, ...]
    recommended_baseline_samples: int = field(default=5, compare=False)

    @property
    def consistency_score(self) -> float:
        return self.composite.score

    @property
    def significant_deviations(self) -> list[Deviation]:
        return [d for d in self.deviations if d.is_significant]

    def deviation(self, key: str) -> Deviation:
        for d in self.deviations:
            if d.key == key:
                return d
        raise KeyError(f"Unknown metric '{key}'")

    def explain_metric(self, key: str) -> list[ExplanationStep]:
        """Step-by-step z-score calculation for one metric."""
        d = self.deviation(key)
        return explain_metric(
            key=d.key,
            label=d.label,
            suffix=d.suffix,
            statistics=self.profile.metrics[key],
            current_value=d.current_value,
            z_score=d.z_score,
            sample_count=self.profile.sample_count,
            recommended_samples=self.recommended_baseline_samples,
        )

    def explain_composite(self) -> list[ExplanationStep]:
        """Step-by-step calculation of the consistency score."""
        return list(self.composite.steps)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "consistency_score": self.consistency_score,
            "band": self.composite.band,
            "flags": [f.to_dict() for f in self.flags],
            "deviations": [d.to_dict() for d in self.deviations],
            "composite": self.composite.to_dict(),
            "vocabulary": self.vocabulary.to_dict(),
            "syntax": self.syntax.to_dict(),
            "errors": self.errors.to_dict(),
            "current_errors": self.current_errors.to_dict(),
            "current": self.current.to_dict(),
            "profile": self.profile.to_dict(),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class StyleConsistencyAnalyzer:
    """
    Compares documents against an author's baseline writing.

    Usage:
        analyzer = StyleConsistencyAnalyzer()
        result = analyzer.compare(baseline_texts, new_text)
        print(result.consistency_score)
        for step in result.explain_composite():
            print(step.title, step.result)
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        settings: Optional[Settings] = None,
        progress_callback: Optional[Callable[[AnalysisProgress], None]] = None,
    ):
        """
        Initialize the analyzer.

        Args:
            config: Engine thresholds and weights (defaults to DEFAULT_CONFIG)
            settings: Runtime settings (defaults to the cached environment settings)
            progress_callback: Optional callback for progress updates
        """
        self.settings = settings or get_settings()
        self.config = config or replace(DEFAULT_CONFIG, msttr_segment_size=self.settings.msttr_segment_size)
        self.progress_callback = progress_callback

    def _report_progress(self, phase: str, current: int, total: int, message: str = ""):
        """Report progress via callback if set."""
        if self.progress_callback:
            self.progress_callback(AnalysisProgress(phase, current, total, message))

    def analyze_text(self, text: str) -> TextMetrics:
        """Compute the document metrics of a single text."""
        try:
            return extract_metrics(text, self.config)
        except Exception as e:
            logger.exception("Error during text analysis")
            raise AnalysisError(GENERIC_FAILURE) from e

    def build_profile(self, samples: Sequence[str]) -> Optional[BaselineProfile]:
        """
        Build a baseline profile from sample texts.

        Returns:
            BaselineProfile, or None when no samples are given
        """
        total = len(samples)

        def on_sample(i: int):
            self._report_progress("baseline", i + 1, total, f"Analyzed sample {i + 1}/{total}")

        try:
            return build_baseline_profile(samples, self.config, self.settings, on_sample)
        except Exception as e:
            logger.exception("Error while building baseline profile")
            raise AnalysisError(GENERIC_FAILURE) from e

    def compare(self, samples: Sequence[str], text: str) -> ComparisonResult:
        """
        Compare a text against baseline samples.

        Args:
            samples: Baseline sample texts, in order
            text: The document to check

        Returns:
            ComparisonResult with score, deviations, flags and explanations

        Raises:
            ValueError: if ``text`` is empty
            InsufficientBaselineError: if there are too few samples
            AnalysisError: if the analysis fails unexpectedly
        """
        if not text or not text.strip():
            raise ValueError("Comparison text is empty")

        required = self.settings.min_baseline_samples
        if len(samples) < required:
            raise InsufficientBaselineError(len(samples), required)

        profile = self.build_profile(samples)
        if profile is None:
            raise AnalysisError(GENERIC_FAILURE)

        try:
            return self._compare_with_profile(profile, text)
        except Exception as e:
            logger.exception("Error during comparison")
            raise AnalysisError(GENERIC_FAILURE) from e

    def _compare_with_profile(self, profile: BaselineProfile, text: str) -> ComparisonResult:
        config = self.config

        self._report_progress("metrics", 0, 4, "Analyzing document...")
        current = extract_metrics(text, config)

        self._report_progress("vocabulary", 1, 4, "Comparing vocabulary...")
        vocabulary = compare_vocabulary_profiles(
            profile.vocabulary, extract_vocabulary_profile(text, config), config
        )

        self._report_progress("syntax", 2, 4, "Comparing sentence structure...")
        syntax = compare_syntactic_profiles(profile.syntactic, analyze_sentence_structure(text))

        self._report_progress("errors", 3, 4, "Comparing error patterns...")
        current_errors = detect_error_patterns(text, config)
        errors = compare_error_profiles(profile.errors, current_errors, config)

        deviations = calculate_metric_deviations(profile.metrics, current, config)
        composite = calculate_composite_score(deviations, vocabulary, syntax, errors, config)
        flags = generate_style_change_flags(deviations, vocabulary, syntax, errors, config)

        logger.info(
            f"Consistency score {composite.score:.1f} ({composite.band}), "
            f"{len(flags)} flag(s), {sum(1 for d in deviations if d.is_significant)} significant deviation(s)"
        )
        self._report_progress("complete", 4, 4, "Analysis complete!")

        return ComparisonResult(
            profile=profile,
            current=current,
            current_errors=current_errors,
            vocabulary=vocabulary,
            syntax=syntax,
            errors=errors,
            deviations=tuple(deviations),
            composite=composite,
            flags=tuple(flags),
            recommended_baseline_samples=self.settings.recommended_baseline_samples,
        )

    def save_result(self, result: ComparisonResult, output_path: str | Path):
        """Save a comparison result to a JSON file."""
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            f.write(result.to_json())
