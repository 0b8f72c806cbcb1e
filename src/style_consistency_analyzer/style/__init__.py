"""
Style Analysis Module

Measure an author's writing across baseline samples and score how
consistent a new document is with it.
"""

from .metrics import (
    METRIC_KEYS,
    TextMetrics,
    extract_metrics,
)
from .vocabulary import (
    VocabularyComparison,
    VocabularyProfile,
    build_vocabulary_profile,
    compare_vocabulary_profiles,
    extract_vocabulary_profile,
)
from .syntax import (
    SyntacticAnalysis,
    SyntacticComparison,
    SyntacticProfile,
    analyze_sentence_structure,
    build_syntactic_profile,
    compare_syntactic_profiles,
)
from .errors import (
    ErrorAnalysis,
    ErrorComparison,
    ErrorProfile,
    build_error_profile,
    compare_error_profiles,
    detect_error_patterns,
)
from .profile import BaselineProfile, build_baseline_profile
from .scoring import (
    CompositeScore,
    Deviation,
    StyleChangeFlag,
    calculate_composite_score,
    calculate_metric_deviations,
    generate_style_change_flags,
)
from .explain import ExplanationStep, explain_metric, explain_text_metric
from .thresholds import EngineConfig, DEFAULT_CONFIG
from .analyzer import (
    AnalysisError,
    AnalysisProgress,
    ComparisonResult,
    InsufficientBaselineError,
    StyleAnalysisError,
    StyleConsistencyAnalyzer,
)

__all__ = [
    # Metrics
    "METRIC_KEYS",
    "TextMetrics",
    "extract_metrics",
    # Vocabulary
    "VocabularyComparison",
    "VocabularyProfile",
    "build_vocabulary_profile",
    "compare_vocabulary_profiles",
    "extract_vocabulary_profile",
    # Syntax
    "SyntacticAnalysis",
    "SyntacticComparison",
    "SyntacticProfile",
    "analyze_sentence_structure",
    "build_syntactic_profile",
    "compare_syntactic_profiles",
    # Errors
    "ErrorAnalysis",
    "ErrorComparison",
    "ErrorProfile",
    "build_error_profile",
    "compare_error_profiles",
    "detect_error_patterns",
    # Baseline
    "BaselineProfile",
    "build_baseline_profile",
    # Scoring
    "CompositeScore",
    "Deviation",
    "StyleChangeFlag",
    "calculate_composite_score",
    "calculate_metric_deviations",
    "generate_style_change_flags",
    # Explanations
    "ExplanationStep",
    "explain_metric",
    "explain_text_metric",
    # Configuration
    "EngineConfig",
    "DEFAULT_CONFIG",
    # Analyzer
    "AnalysisError",
    "AnalysisProgress",
    "ComparisonResult",
    "InsufficientBaselineError",
    "StyleAnalysisError",
    "StyleConsistencyAnalyzer",
]
