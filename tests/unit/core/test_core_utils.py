from pathlib import Path

import pytest

from logistic_analysis.core.data import load_csv_to_frame
from logistic_analysis.core.utils import get_rng


def test_rng_reproducibility() -> None:
    rng1 = get_rng(42)
    rng2 = get_rng(42)
    assert rng1.random() == rng2.random()


class TestLoadCsvToFrame:
    def test_parses_boolean_columns(self, tmp_path: Path) -> None:
        path = tmp_path / "data.csv"
        path.write_text("y,x,group\nTRUE,1.5,a\nFALSE,2.0,b\nTRUE,0.5,a\n")

        df = load_csv_to_frame(path)

        assert df["y"].dtype == bool
        assert df["y"].tolist() == [True, False, True]
        assert df["x"].tolist() == [1.5, 2.0, 0.5]
        assert df["group"].tolist() == ["a", "b", "a"]

    def test_text_column_kept_as_text(self, tmp_path: Path) -> None:
        path = tmp_path / "data.csv"
        path.write_text("y,x\nyes,1\nno,2\n")

        df = load_csv_to_frame(path)

        assert df["y"].tolist() == ["yes", "no"]

    def test_no_rows_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.csv"
        path.write_text("y,x\n")
        with pytest.raises(ValueError, match="CSV has no rows"):
            load_csv_to_frame(path)
