import pytest

from outliers_viz.data.models import Sample
from outliers_viz.preprocessing import InvalidThresholdError, build_samples, parse_threshold


@pytest.mark.parametrize(
    "text, expected",
    [("1.5", 1.5), (" -2 ", -2.0), ("0", 0.0), ("3", 3.0), (2, 2.0), (0.5, 0.5)],
)
def test_parse_threshold(text, expected):
    """Numeric text and numbers are accepted."""
    assert parse_threshold(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "1,5", "nan", "inf", "-inf", float("nan"), True])
def test_parse_threshold_rejects_invalid(text):
    """Empty, non-numeric and non-finite input is rejected."""
    with pytest.raises(InvalidThresholdError):
        parse_threshold(text)


def test_build_samples_from_mixed_records():
    """Mappings, pairs and samples are all accepted."""
    samples = build_samples([
        {"label": "A", "value": 1},
        ("B", "2.5"),
        Sample(label="C", value=3.0),
    ])

    assert samples == [Sample("A", 1.0), Sample("B", 2.5), Sample("C", 3.0)]


def test_build_samples_rejects_duplicates():
    """Labels must be unique."""
    with pytest.raises(ValueError, match="Duplicate"):
        build_samples([("A", 1), ("A", 2)])


def test_build_samples_rejects_non_finite():
    """Infinite values are rejected."""
    with pytest.raises(ValueError, match="non-finite"):
        build_samples([("A", float("inf"))])


def test_build_samples_rejects_missing_key():
    """Mappings must carry a value."""
    with pytest.raises(ValueError, match="value"):
        build_samples([{"label": "A"}])
