"""
Statistics Helpers

Descriptive statistics over baseline samples, z-scores and significance
tiers. Standard deviations are population deviations (divide by n) because
the baseline is the author's entire known history, not a sample of it.
"""

from dataclasses import dataclass, asdict, field
import statistics

from .thresholds import EngineConfig, DEFAULT_CONFIG


SIGNIFICANCE_LABELS = {
    "none": "OK",
    "low": "NOTICE",
    "medium": "WARNING",
    "high": "ALERT",
}


@dataclass(frozen=True)
class MetricStatistics:
    """Statistical summary of one metric across the baseline samples."""
    mean: float = 0.0
    median: float = 0.0
    std_dev: float = 0.0
    min: float = 0.0
    max: float = 0.0
    values: tuple[float, ...] = field(default_factory=tuple)

    @classmethod
    def from_values(cls, values: list[float]) -> "MetricStatistics":
        """Create statistics from a list of values."""
        if not values:
            return cls()

        values = [float(v) for v in values]
        mean = calculate_mean(values)
        return cls(
            mean=mean,
            median=calculate_median(values),
            std_dev=calculate_std_dev(values),
            min=min(values),
            max=max(values),
            values=tuple(values),
        )

    @property
    def count(self) -> int:
        return len(self.values)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["values"] = list(self.values)
        return d


@dataclass(frozen=True)
class Significance:
    """How far a value sits from the baseline, in tiers."""
    significant: bool
    level: str  # "none", "low", "medium" or "high"
    z_score: float

    @property
    def label(self) -> str:
        return SIGNIFICANCE_LABELS[self.level]


def calculate_mean(values: list[float]) -> float:
    if not values:
        return 0.0
    return float(statistics.mean(values))


def calculate_median(values: list[float]) -> float:
    if not values:
        return 0.0
    return float(statistics.median(values))


def calculate_std_dev(values: list[float]) -> float:
    """Population standard deviation; 0 for fewer than two values."""
    if len(values) <= 1:
        return 0.0
    return statistics.pstdev(values)


def calculate_z_score(value: float, mean: float, std_dev: float) -> float:
    """Signed distance from the mean in standard deviations (0 if std_dev is 0)."""
    if std_dev == 0:
        return 0.0
    return (value - mean) / std_dev


def detect_outliers(
    samples: list[tuple[int, float]],
    method: str = "iqr",
    config: EngineConfig = DEFAULT_CONFIG,
) -> list[int]:
    """
    Find outlying samples.

    Args:
        samples: (id, value) pairs
        method: "iqr" (Tukey fences) or "zscore" (|z| above the threshold)
        config: Engine configuration

    Returns:
        Ids of the outlying samples, in input order. Fewer than four
        samples never produce outliers.
    """
    if len(samples) < config.outlier_min_samples:
        return []

    values = [value for _, value in samples]

    if method == "zscore":
        mean = calculate_mean(values)
        std_dev = calculate_std_dev(values)
        return [
            sample_id for sample_id, value in samples
            if abs(calculate_z_score(value, mean, std_dev)) > config.outlier_z_threshold
        ]

    if method != "iqr":
        raise ValueError(f"Unknown outlier method: {method}")

    ordered = sorted(values)
    n = len(ordered)
    q1 = ordered[int(n * 0.25)]
    q3 = ordered[int(n * 0.75)]
    iqr = q3 - q1
    lower = q1 - config.outlier_iqr_multiplier * iqr
    upper = q3 + config.outlier_iqr_multiplier * iqr

    return [sample_id for sample_id, value in samples if value < lower or value > upper]


def assess_significance(
    diff: float,
    baseline_std_dev: float,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Significance:
    """
    Classify a difference from the baseline mean.

    |z| < 1.0 is "none", >= 1.0 "low" (not significant), >= 1.5 "medium" and
    >= 2.0 "high". A baseline with no spread gives z = 0 and no significance.
    """
    if baseline_std_dev == 0:
        return Significance(significant=False, level="none", z_score=0.0)

    z = abs(diff / baseline_std_dev)

    if z >= config.significance_high:
        return Significance(True, "high", z)
    if z >= config.significance_medium:
        return Significance(True, "medium", z)
    if z >= config.significance_low:
        return Significance(False, "low", z)
    return Significance(False, "none", z)


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))
