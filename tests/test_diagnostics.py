"""
Tests for run diagnostics.
"""
import math

import numpy as np
import pandas as pd
import pytest

from twist.core.exceptions import MissingFieldError
from twist.physics.twist_model import TwistModel
from twist.validation.diagnostics import summarize_run


class TestSummarizeRun:
    """Test suite for summarize_run"""

    def test_two_step_run(self, fagus_params, two_step_frame):
        output = TwistModel(fagus_params).run(two_step_frame)
        d = summarize_run(output)

        assert d.n_steps == 2
        assert d.twd_min == pytest.approx(3.4)
        assert d.twd_max == pytest.approx(4.0)
        assert d.twd_final == pytest.approx(3.4)
        assert d.rwc_min == pytest.approx(0.96)
        assert d.n_non_finite == 0
        assert d.n_over_recharged == 0
        assert d.n_depleted == 0

    def test_counts_special_states(self, caplog):
        output = pd.DataFrame({
            "TWD": [-50.0, 150.0, 10.0, 5.0],
            "RWC": [1.5, 0.0, -np.inf, 0.95],
        })
        with caplog.at_level("WARNING"):
            d = summarize_run(output)

        assert d.n_over_recharged == 1
        assert d.n_depleted == 1
        assert d.n_non_finite == 1
        assert d.rwc_min == 0.0
        assert d.rwc_max == 1.5
        assert "non-finite" in caplog.text

    def test_empty_output(self):
        d = summarize_run(pd.DataFrame({"TWD": [], "RWC": []}))
        assert d.n_steps == 0
        assert math.isnan(d.twd_final)
        assert math.isnan(d.rwc_min)

    def test_requires_output_columns(self):
        with pytest.raises(MissingFieldError):
            summarize_run(pd.DataFrame({"TWD": [1.0]}))

    def test_to_dict(self, fagus_params, two_step_frame):
        d = summarize_run(TwistModel(fagus_params).run(two_step_frame)).to_dict()
        assert d["n_steps"] == 2
        assert set(d) >= {"twd_final", "rwc_min", "n_non_finite"}
