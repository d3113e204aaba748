"""
TWIST Data Package.

Input table checks and table reading/writing.
"""

from twist.data.validation import require_columns, check_input_domains
from twist.data.io import read_timeseries, write_results

__all__ = [
    "require_columns",
    "check_input_domains",
    "read_timeseries",
    "write_results",
]
