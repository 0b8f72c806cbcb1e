"""Style Consistency Analyzer - check new writing against an author's baseline."""

__version__ = "0.1.0"

from style_consistency_analyzer.style import (
    AnalysisError,
    ComparisonResult,
    InsufficientBaselineError,
    StyleAnalysisError,
    StyleConsistencyAnalyzer,
)

__all__ = [
    "__version__",
    "AnalysisError",
    "ComparisonResult",
    "InsufficientBaselineError",
    "StyleAnalysisError",
    "StyleConsistencyAnalyzer",
]
