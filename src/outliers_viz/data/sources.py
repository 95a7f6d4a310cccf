"""Sample source abstractions for loading or generating sample sets."""
from __future__ import annotations

import logging
import string
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from ..preprocessing import build_samples
from .models import Sample

logger = logging.getLogger(__name__)


class SampleSource:
    """Abstract base class for sample providers."""

    def load(self) -> List[Sample]:
        raise NotImplementedError


@dataclass
class RandomLetterSource(SampleSource):
    """Generate one random integer sample per letter.

    Parameters
    ----------
    seed:
        Seed for :func:`numpy.random.default_rng`. ``None`` draws fresh
        entropy from the OS.
    low, high:
        Inclusive bounds of the generated integer values. ``1`` and ``100``
        by default.
    letters:
        Labels to generate, ``A`` to ``Z`` by default.
    """

    seed: Optional[int] = None
    low: int = 1
    high: int = 100
    letters: Sequence[str] = tuple(string.ascii_uppercase)
    _rng: np.random.Generator = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.low > self.high:
            raise ValueError(f"low ({self.low}) must not exceed high ({self.high})")
        self._rng = np.random.default_rng(self.seed)

    def load(self) -> List[Sample]:
        values = self._rng.integers(self.low, self.high, size=len(self.letters), endpoint=True)
        logger.debug("Generated %d random samples in [%d, %d]", len(values), self.low, self.high)
        return [Sample(label=letter, value=float(value)) for letter, value in zip(self.letters, values)]


@dataclass
class CSVSource(SampleSource):
    """Load samples from a CSV file with ``label`` and ``value`` columns.

    Every row needs both a label and a finite value.
    """

    path: str

    def load(self) -> List[Sample]:
        path = Path(self.path)
        if not path.exists():
            raise FileNotFoundError(f"Sample file not found: {path}")
        df = pd.read_csv(path)
        df = df.rename(columns=lambda c: str(c).strip().lower())
        for column in ("label", "value"):
            if column not in df.columns:
                raise ValueError(f"Missing required column: {column}")
        missing = df["label"].isna()
        if missing.any():
            rows = ", ".join(str(i + 2) for i in df.index[missing])
            raise ValueError(f"Missing label on line(s) {rows} of {path}")
        logger.debug("Loaded %d rows from %s", len(df), path)
        return build_samples(zip(df["label"].astype(str), df["value"].astype(float)))
