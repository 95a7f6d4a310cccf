"""Outliers visualization package."""
from .analysis import InsufficientDataError, OutlierAnalyzer, OutlierConfig
from .cli import main
from .pipeline import ExplorerView, OutlierExplorer
from .preprocessing import InvalidThresholdError

__all__ = [
    "main",
    "ExplorerView",
    "InsufficientDataError",
    "InvalidThresholdError",
    "OutlierAnalyzer",
    "OutlierConfig",
    "OutlierExplorer",
]
