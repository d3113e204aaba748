"""Shared fixtures for the TWIST test suite."""
import numpy as np
import pandas as pd
import pytest

from twist.core.config import set_config
from twist.core.types import ColumnNames, DeficitParameters, WaterPoolParameters


@pytest.fixture
def fagus_params():
    """Deficit parameters of the Štítná Fagus sylvatica setup"""
    return DeficitParameters(F_E=0.6, F_TWD=0.3, F_theta=0.7)


@pytest.fixture
def pool_params():
    """Wood densities of the Štítná Fagus sylvatica setup"""
    return WaterPoolParameters(rho_sat=1.07, rho_dry=0.58)


@pytest.fixture
def two_step_frame():
    """Two hourly steps: transpiration under wet soil, then no flux under drier soil"""
    return pd.DataFrame({
        "datetime": pd.date_range("2022-07-01 10:00", periods=2, freq="h"),
        "transpiration": [10.0, 0.0],
        "theta_rel": [1.0, 0.35],
        "W": [100.0, 100.0],
    })


@pytest.fixture
def hourly_frame():
    """Three days of hourly synthetic forcing with a diurnal transpiration cycle"""
    n = 72
    hours = np.arange(n)
    E = np.clip(np.sin((hours % 24 - 6) / 12 * np.pi), 0, None) * 0.4
    theta = np.linspace(0.9, 0.3, n)
    return pd.DataFrame({
        "datetime": pd.date_range("2022-07-01", periods=n, freq="h"),
        "transpiration": E,
        "theta_rel": theta,
        "m_wood_dry": np.full(n, 50.0),
    })


@pytest.fixture
def custom_columns():
    """Column mapping with non-default names, as in manuscript input data"""
    return ColumnNames(
        time="timestamp",
        transpiration="transpiration_l.m2",
        theta="theta_rel",
        wood_mass="m_dry_wood_kg.m2",
        pool="W",
    )


@pytest.fixture(autouse=True)
def reset_global_config():
    """Keep the configuration singleton isolated between tests"""
    set_config(None)
    yield
    set_config(None)
