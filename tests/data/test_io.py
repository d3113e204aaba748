"""
Tests for reading input tables and writing output tables.
"""
import pandas as pd
import pytest

from twist.core.exceptions import DataError
from twist.core.types import ColumnNames
from twist.data.io import read_timeseries, write_results


class TestReadWrite:
    """Test suite for table I/O"""

    def test_csv_round_trip_parses_time(self, tmp_path, two_step_frame):
        path = write_results(two_step_frame, tmp_path / "nested" / "input.csv")
        assert path.exists()

        df = read_timeseries(path)
        assert pd.api.types.is_datetime64_any_dtype(df["datetime"])
        assert list(df.columns) == list(two_step_frame.columns)
        assert df["transpiration"].tolist() == [10.0, 0.0]

    def test_custom_time_column(self, tmp_path, custom_columns):
        path = tmp_path / "input.csv"
        pd.DataFrame({"timestamp": ["2022-07-01 10:00", "2022-07-01 11:00"]}).to_csv(path, index=False)
        df = read_timeseries(path, custom_columns)
        assert pd.api.types.is_datetime64_any_dtype(df["timestamp"])

    def test_row_order_kept(self, tmp_path):
        path = tmp_path / "input.csv"
        times = ["2022-07-01 12:00", "2022-07-01 10:00", "2022-07-01 11:00"]
        pd.DataFrame({"datetime": times}).to_csv(path, index=False)
        df = read_timeseries(path, ColumnNames())
        assert df["datetime"].dt.hour.tolist() == [12, 10, 11]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_timeseries(tmp_path / "absent.csv")

    def test_unsupported_suffix(self, tmp_path, two_step_frame):
        with pytest.raises(DataError):
            write_results(two_step_frame, tmp_path / "output.xlsx")
        (tmp_path / "input.rds").write_bytes(b"")
        with pytest.raises(DataError):
            read_timeseries(tmp_path / "input.rds")
