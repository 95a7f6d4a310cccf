import string

import pytest

from outliers_viz.data.sources import CSVSource, RandomLetterSource


def test_random_letter_source_covers_alphabet():
    """One integer sample in [1, 100] per letter."""
    samples = RandomLetterSource(seed=1).load()

    assert [s.label for s in samples] == list(string.ascii_uppercase)
    assert all(1 <= s.value <= 100 for s in samples)
    assert all(float(s.value).is_integer() for s in samples)


def test_random_letter_source_is_reproducible_with_seed():
    """Same seed, same samples."""
    first = RandomLetterSource(seed=42).load()
    second = RandomLetterSource(seed=42).load()

    assert first == second


def test_random_letter_source_draws_fresh_data():
    """Successive loads draw new values."""
    source = RandomLetterSource(seed=42, low=1, high=1_000_000)

    assert source.load() != source.load()


def test_random_letter_source_rejects_inverted_bounds():
    """low above high is rejected."""
    with pytest.raises(ValueError):
        RandomLetterSource(low=10, high=1)


def test_csv_source(tmp_path):
    """Column names are matched case-insensitively."""
    path = tmp_path / "samples.csv"
    path.write_text("Label,Value\nx,1.5\ny,2\nz,-4\n")

    samples = CSVSource(path=str(path)).load()

    assert [(s.label, s.value) for s in samples] == [("x", 1.5), ("y", 2.0), ("z", -4.0)]


def test_csv_source_missing_file(tmp_path):
    """A missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        CSVSource(path=str(tmp_path / "missing.csv")).load()


def test_csv_source_missing_column(tmp_path):
    """A missing value column is rejected."""
    path = tmp_path / "samples.csv"
    path.write_text("label,amount\na,1\n")

    with pytest.raises(ValueError, match="value"):
        CSVSource(path=str(path)).load()


def test_csv_source_duplicate_labels(tmp_path):
    """Duplicate labels are rejected."""
    path = tmp_path / "samples.csv"
    path.write_text("label,value\na,1\na,2\n")

    with pytest.raises(ValueError, match="Duplicate"):
        CSVSource(path=str(path)).load()


def test_csv_source_missing_label(tmp_path):
    """A row without a label is rejected, not skipped."""
    path = tmp_path / "samples.csv"
    path.write_text("label,value\na,1\n,2\nc,3\n")

    with pytest.raises(ValueError, match="Missing label on line"):
        CSVSource(path=str(path)).load()


def test_csv_source_missing_value(tmp_path):
    """A row without a value is rejected."""
    path = tmp_path / "samples.csv"
    path.write_text("label,value\na,1\nb,\n")

    with pytest.raises(ValueError, match="non-finite"):
        CSVSource(path=str(path)).load()
