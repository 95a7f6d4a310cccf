"""Statistical analysis and outlier detection."""
from .outliers import (
    InsufficientDataError,
    OutlierAnalysis,
    OutlierAnalyzer,
    OutlierConfig,
    classify,
    compute_summary_statistics,
    summarize_outliers,
)

__all__ = [
    "InsufficientDataError",
    "OutlierAnalysis",
    "OutlierAnalyzer",
    "OutlierConfig",
    "classify",
    "compute_summary_statistics",
    "summarize_outliers",
]
