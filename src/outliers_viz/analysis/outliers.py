"""Outlier detection using z-scores.

This module implements the statistics behind the outliers demo:
- Mean and sample standard deviation (Bessel's correction, divisor n - 1)
- Per-point z-scores and classification against a threshold
- Aggregate statistics over the points flagged as outliers

The three module level functions are pure. Statistics are computed once per
sample set; changing only the threshold requires just :func:`classify`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
import pandas as pd
from scipy.stats import norm

from ..data.models import AnalysisResult, OutlierSummary, Sample, SummaryStatistics


class InsufficientDataError(ValueError):
    """Raised when fewer than two samples are supplied."""


@dataclass
class OutlierConfig:
    """Configuration for outlier detection."""

    # |z| strictly above this value marks a point as an outlier
    zscore_threshold: float = 1.0


@dataclass
class OutlierAnalysis:
    """Statistics, per-point results and outlier summary for one threshold."""

    threshold: float
    stats: SummaryStatistics
    results: List[AnalysisResult]
    summary: OutlierSummary

    @property
    def outliers(self) -> List[AnalysisResult]:
        return [r for r in self.results if r.is_outlier]

    def to_json(self) -> dict:
        return {
            "threshold": self.threshold,
            "stats": self.stats.to_json(),
            "summary": self.summary.to_json(),
            "points": [r.to_json() for r in self.results],
        }


def compute_summary_statistics(samples: Sequence[Sample]) -> SummaryStatistics:
    """Compute the mean and sample standard deviation of ``samples``.

    Raises:
        InsufficientDataError: if fewer than two samples are given
    """
    # Sample standard deviation needs n - 1 >= 1 degrees of freedom
    if len(samples) < 2:
        raise InsufficientDataError(f"At least 2 samples are required, got {len(samples)}")
    values = np.array([s.value for s in samples], dtype=float)
    # Rounding in the mean must not turn identical values into a tiny spread
    if values.min() == values.max():
        return SummaryStatistics(mean=float(values[0]), std_dev=0.0)
    mean = float(values.mean())
    # Deviations are rescaled by a power of two before squaring so extreme
    # magnitudes neither underflow to 0 nor overflow to inf; the rescaling
    # itself is exact
    _, exponent = np.frexp(np.abs(values - mean).max())
    deviations = np.ldexp(values - mean, -exponent)
    std_dev = float(np.ldexp(np.sqrt(np.sum(deviations ** 2) / (len(values) - 1)), exponent))
    return SummaryStatistics(mean=mean, std_dev=std_dev)


def classify(
    samples: Sequence[Sample],
    stats: SummaryStatistics,
    threshold: float,
) -> List[AnalysisResult]:
    """Classify each sample as outlier when ``abs(zscore) > threshold``.

    With zero variance every z-score is ``0.0`` and no point is an outlier,
    whatever the threshold. Input order is preserved.
    """
    if stats.std_dev == 0:
        return [
            AnalysisResult(label=s.label, value=s.value, zscore=0.0, is_outlier=False)
            for s in samples
        ]

    results: List[AnalysisResult] = []
    for sample in samples:
        zscore = (sample.value - stats.mean) / stats.std_dev
        results.append(AnalysisResult(
            label=sample.label,
            value=sample.value,
            zscore=zscore,
            is_outlier=abs(zscore) > threshold,
        ))
    return results


def summarize_outliers(results: Sequence[AnalysisResult]) -> OutlierSummary:
    """Count, share and value range of the outlier results.

    ``min``/``max`` are ``0`` when nothing is flagged.
    """
    total = len(results)
    outlier_values = [r.value for r in results if r.is_outlier]
    count = len(outlier_values)
    percentage = 100.0 * count / total if total else 0.0
    return OutlierSummary(
        count=count,
        total=total,
        percentage=percentage,
        min=min(outlier_values) if outlier_values else 0,
        max=max(outlier_values) if outlier_values else 0,
    )


class OutlierAnalyzer:
    """Detects outliers by z-score against the sample mean.

    Usage:
        analyzer = OutlierAnalyzer()

        analysis = analyzer.analyze(samples)

        # Same samples, different threshold: only reclassification happens
        stricter = analyzer.reclassify(analysis, 2.0)

        print(analyzer.generate_report(stricter))
    """

    def __init__(self, config: OutlierConfig | None = None) -> None:
        self.config = config or OutlierConfig()

    def analyze(self, samples: Sequence[Sample], threshold: float | None = None) -> OutlierAnalysis:
        """Compute statistics and classify ``samples``.

        Args:
            samples: Ordered sample set, at least two samples
            threshold: Overrides ``config.zscore_threshold`` when given

        Returns:
            OutlierAnalysis for the effective threshold
        """
        stats = compute_summary_statistics(samples)
        return self._build(samples, stats, self._threshold(threshold))

    def reclassify(self, analysis: OutlierAnalysis, threshold: float) -> OutlierAnalysis:
        """Apply a new threshold to an existing analysis, reusing its statistics."""
        samples = [Sample(label=r.label, value=r.value) for r in analysis.results]
        return self._build(samples, analysis.stats, threshold)

    def _threshold(self, threshold: float | None) -> float:
        return self.config.zscore_threshold if threshold is None else threshold

    @staticmethod
    def _build(samples: Sequence[Sample], stats: SummaryStatistics, threshold: float) -> OutlierAnalysis:
        results = classify(samples, stats, threshold)
        return OutlierAnalysis(
            threshold=threshold,
            stats=stats,
            results=results,
            summary=summarize_outliers(results),
        )

    @staticmethod
    def expected_outlier_percentage(threshold: float) -> float:
        """Share (in percent) of normally distributed points with ``|z| > threshold``."""
        if threshold < 0:
            return 100.0
        return float(200.0 * norm.sf(threshold))

    @staticmethod
    def to_frame(analysis: OutlierAnalysis) -> pd.DataFrame:
        """Tabular view of the results.

        ``normal`` and ``outlier`` hold the value for points of that class and
        NaN otherwise, one column per plotted series.
        """
        df = pd.DataFrame({
            "label": [r.label for r in analysis.results],
            "value": [float(r.value) for r in analysis.results],
            "zscore": [r.zscore for r in analysis.results],
            "is_outlier": np.array([r.is_outlier for r in analysis.results], dtype=bool),
        })
        df["normal"] = df["value"].where(~df["is_outlier"])
        df["outlier"] = df["value"].where(df["is_outlier"])
        return df

    def generate_report(self, analysis: OutlierAnalysis, selected: AnalysisResult | None = None) -> str:
        """Generate human-readable outlier analysis report.

        Args:
            analysis: Result of :meth:`analyze` or :meth:`reclassify`
            selected: Optional point to highlight

        Returns:
            Formatted report string
        """
        stats = analysis.stats
        summary = analysis.summary
        expected = self.expected_outlier_percentage(analysis.threshold)

        report_lines = [
            "=" * 60,
            "OUTLIER ANALYSIS REPORT",
            "=" * 60,
            "",
            "BASIC STATISTICS:",
            f"   Samples: {len(analysis.results)}",
            f"   Mean: {stats.mean:.2f}",
            f"   Standard deviation: {stats.std_dev:.2f}",
            "",
            "OUTLIER STATISTICS:",
            f"   Count: {summary.count} ({summary.percentage_display}%)",
        ]
        if summary.count > 0:
            report_lines.append(f"   Range: {_fmt(summary.min)} - {_fmt(summary.max)}")
        report_lines.append(f"   Expected under normality: {expected:.1f}%")

        if selected is not None:
            report_lines.extend([
                "",
                "SELECTED POINT:",
                f"   {selected.label}: value {_fmt(selected.value)}, "
                f"z-score {selected.zscore:.2f} ({selected.status_label})",
            ])

        report_lines.extend([
            "",
            f"{'Label':<8} {'Value':>10} {'Z-score':>10} {'Status':<10}",
            "-" * 60,
        ])
        for result in analysis.results:
            report_lines.append(
                f"{result.label:<8} {_fmt(result.value):>10} {result.zscore:>10.2f} {result.status_label:<10}"
            )

        report_lines.extend([
            "",
            f"Values with |z-score| greater than {_fmt(analysis.threshold)} are flagged as outliers",
            "=" * 60,
        ])
        return "\n".join(report_lines)


def _fmt(value: float) -> str:
    return f"{value:g}"
