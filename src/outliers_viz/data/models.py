"""Data models for the outliers visualization package."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Sample:
    """A single labeled numeric observation.

    Attributes
    ----------
    label:
        Caller supplied identifier, unique within a sample set (e.g. a letter).
    value:
        Any finite real number.
    """

    label: str
    value: float

    def to_json(self) -> Dict[str, object]:
        return {"label": self.label, "value": self.value}


@dataclass(frozen=True)
class SummaryStatistics:
    """Mean and sample standard deviation of a sample set."""

    mean: float
    std_dev: float

    def to_json(self) -> Dict[str, object]:
        return {
            "mean": round(self.mean, 4),
            "std_dev": round(self.std_dev, 4),
        }


@dataclass(frozen=True)
class AnalysisResult:
    """A sample together with its z-score and classification."""

    label: str
    value: float
    zscore: float
    is_outlier: bool

    @property
    def status_label(self) -> str:
        """Human-readable classification."""
        return "OUTLIER" if self.is_outlier else "NORMAL"

    def to_json(self) -> Dict[str, object]:
        return {
            "label": self.label,
            "value": self.value,
            "zscore": round(self.zscore, 4),
            "is_outlier": self.is_outlier,
        }


@dataclass(frozen=True)
class OutlierSummary:
    """Aggregate view over the points currently classified as outliers.

    ``min`` and ``max`` are ``0`` when there are no outliers; this is a
    sentinel, not a computed extremum. ``percentage`` keeps full precision,
    use :attr:`percentage_display` for the one-decimal rendering.
    """

    count: int
    total: int
    percentage: float
    min: float
    max: float

    @property
    def percentage_display(self) -> str:
        return f"{self.percentage:.1f}"

    def to_json(self) -> Dict[str, object]:
        return {
            "count": self.count,
            "total": self.total,
            "percentage": round(self.percentage, 1),
            "min": self.min,
            "max": self.max,
        }
