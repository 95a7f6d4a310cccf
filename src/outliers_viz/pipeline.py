"""High level orchestration of sample source, threshold and selection state."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Set, Union

from .analysis.outliers import OutlierAnalysis, OutlierAnalyzer, OutlierConfig
from .data.models import AnalysisResult, Sample
from .data.sources import SampleSource
from .preprocessing import parse_threshold

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExplorerView:
    """Snapshot of everything a display layer needs to render."""

    analysis: OutlierAnalysis
    selected: Optional[AnalysisResult]

    @property
    def threshold(self) -> float:
        return self.analysis.threshold

    def to_json(self) -> dict:
        payload = self.analysis.to_json()
        payload["selected"] = self.selected.to_json() if self.selected else None
        return payload


class OutlierExplorer:
    """Caller-held state tying together a sample source and the analyzer.

    Statistics are recomputed only when the sample set changes; a threshold
    change reclassifies the current statistics.
    """

    def __init__(self, source: SampleSource, config: OutlierConfig | None = None) -> None:
        self.source = source
        self.config = config or OutlierConfig()
        self.analyzer = OutlierAnalyzer(self.config)
        self.threshold: float = self.config.zscore_threshold
        self.selected_label: Optional[str] = None
        self.samples: List[Sample] = []
        self._analysis: Optional[OutlierAnalysis] = None
        self.regenerate()

    def regenerate(self) -> OutlierAnalysis:
        """Load a fresh sample set from the source and recompute statistics."""
        samples = self.source.load()
        analysis = self.analyzer.analyze(samples, self.threshold)
        self.samples = list(samples)
        self._analysis = analysis
        if self.selected_label is not None and self.selected_label not in self._labels():
            logger.debug("Selected point %s no longer present, clearing selection", self.selected_label)
            self.selected_label = None
        logger.debug(
            "Loaded %d samples: mean=%.4f std=%.4f",
            len(samples), analysis.stats.mean, analysis.stats.std_dev,
        )
        return analysis

    def set_threshold(self, value: Union[str, float]) -> OutlierAnalysis:
        """Set the threshold from a number or free-form text.

        Invalid text raises :class:`InvalidThresholdError` and keeps the
        previous threshold.
        """
        threshold = parse_threshold(value)
        self._analysis = self.analyzer.reclassify(self.analysis, threshold)
        self.threshold = threshold
        logger.debug("Threshold set to %s: %d outliers", threshold, self._analysis.summary.count)
        return self._analysis

    def select(self, label: str) -> Optional[AnalysisResult]:
        """Toggle selection of the point with ``label``."""
        if label not in self._labels():
            raise KeyError(f"Unknown sample label: {label}")
        self.selected_label = None if self.selected_label == label else label
        return self.selected

    def clear_selection(self) -> None:
        self.selected_label = None

    @property
    def analysis(self) -> OutlierAnalysis:
        if self._analysis is None:
            raise RuntimeError("No sample set loaded")
        return self._analysis

    @property
    def selected(self) -> Optional[AnalysisResult]:
        if self.selected_label is None:
            return None
        for result in self.analysis.results:
            if result.label == self.selected_label:
                return result
        return None

    def view(self) -> ExplorerView:
        return ExplorerView(analysis=self.analysis, selected=self.selected)

    def report(self) -> str:
        return self.analyzer.generate_report(self.analysis, self.selected)

    def _labels(self) -> Set[str]:
        return {s.label for s in self.samples}
