"""Input validation applied before data reaches the statistics core."""
from __future__ import annotations

import math
from typing import Iterable, List, Mapping, Tuple, Union

from .data.models import Sample

SampleRecord = Union[Sample, Mapping[str, object], Tuple[object, object]]


class InvalidThresholdError(ValueError):
    """Raised when a threshold cannot be parsed as a finite real number."""


def parse_threshold(text: Union[str, float, int]) -> float:
    """Parse free-form threshold input such as ``"1.5"`` or ``" -2 "``."""
    if isinstance(text, bool):
        raise InvalidThresholdError(f"Invalid z-score threshold: {text!r}")
    if isinstance(text, (int, float)):
        value = float(text)
    else:
        stripped = str(text).strip()
        if not stripped:
            raise InvalidThresholdError("Z-score threshold must not be empty")
        try:
            value = float(stripped)
        except ValueError as exc:
            raise InvalidThresholdError(f"Invalid z-score threshold: {text!r}") from exc
    if not math.isfinite(value):
        raise InvalidThresholdError(f"Z-score threshold must be finite, got {text!r}")
    return value


def _coerce(record: SampleRecord) -> Tuple[str, float]:
    if isinstance(record, Sample):
        return record.label, record.value
    if isinstance(record, Mapping):
        try:
            return str(record["label"]), float(record["value"])
        except KeyError as exc:
            raise ValueError(f"Sample record missing key {exc.args[0]!r}: {record!r}") from exc
    label, value = record
    return str(label), float(value)


def build_samples(records: Iterable[SampleRecord]) -> List[Sample]:
    """Build an ordered list of :class:`Sample` from mappings or pairs.

    Labels must be unique and values finite.
    """
    samples: List[Sample] = []
    seen = set()
    for record in records:
        label, value = _coerce(record)
        if label in seen:
            raise ValueError(f"Duplicate sample label: {label}")
        if not math.isfinite(value):
            raise ValueError(f"Sample {label} has non-finite value {value}")
        seen.add(label)
        samples.append(Sample(label=label, value=value))
    return samples
