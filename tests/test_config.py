"""
Tests for configuration loading, overrides and conversion to model types.
"""
from pathlib import Path

import pytest
import yaml

from twist.core.config import TwistConfig, get_config, set_config
from twist.core.exceptions import ConfigurationError
from twist.core.types import ColumnNames, DeficitParameters, WaterPoolParameters


class TestTwistConfig:
    """Test suite for TwistConfig"""

    def test_defaults_match_fagus_setup(self):
        config = TwistConfig()
        assert config.deficit_parameters() == DeficitParameters(F_E=0.6, F_TWD=0.3, F_theta=0.7)
        assert config.water_pool_parameters() == WaterPoolParameters(rho_sat=1.07, rho_dry=0.58)
        assert config.column_names() == ColumnNames()
        assert config.run.twd_initial == 0.0

    def test_yaml_round_trip(self, tmp_path):
        config = TwistConfig(
            deficit={"f_e": 0.5},
            columns={"transpiration": "transpiration_l.m2", "wood_mass": "m_dry_wood_kg.m2"},
            run={"twd_initial": 1.5},
        )
        path = tmp_path / "config" / "twist.yaml"
        config.to_yaml(path)

        loaded = TwistConfig.from_yaml(path)
        assert loaded.deficit.f_e == 0.5
        assert loaded.columns.transpiration == "transpiration_l.m2"
        assert loaded.column_names().wood_mass == "m_dry_wood_kg.m2"
        assert loaded.run.twd_initial == 1.5

    def test_partial_yaml(self, tmp_path):
        path = tmp_path / "twist.yaml"
        path.write_text(yaml.safe_dump({"water_pool": {"rho_dry": 0.6}}), encoding="utf-8")
        config = TwistConfig.from_yaml(path)
        assert config.water_pool.rho_dry == 0.6
        assert config.water_pool.rho_sat == 1.07

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "twist.yaml"
        path.write_text("", encoding="utf-8")
        assert TwistConfig.from_yaml(path).deficit.f_theta == 0.7

    def test_missing_yaml(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TwistConfig.from_yaml(tmp_path / "absent.yaml")

    def test_invalid_yaml_value(self, tmp_path):
        path = tmp_path / "twist.yaml"
        path.write_text(yaml.safe_dump({"deficit": {"f_e": "not a number"}}), encoding="utf-8")
        with pytest.raises(ConfigurationError):
            TwistConfig.from_yaml(path)

    def test_out_of_range_accepted_with_warning(self, caplog):
        """Degenerate values are kept so they propagate numerically"""
        with caplog.at_level("WARNING"):
            config = TwistConfig(deficit={"f_e": 1.5, "f_theta": 0.0}, water_pool={"rho_dry": 0.0})
        assert config.deficit_parameters().F_theta == 0.0
        assert "f_e=1.5" in caplog.text
        assert "F_theta=0.0" in caplog.text
        assert "rho_dry is zero" in caplog.text

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("TWIST_RUN__TWD_INITIAL", "2.5")
        monkeypatch.setenv("TWIST_SITE_ID", "stitna")
        config = TwistConfig()
        assert config.run.twd_initial == 2.5
        assert config.site_id == "stitna"


class TestConfigSingleton:
    """Test suite for the global configuration accessors"""

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_set_config(self):
        custom = TwistConfig(site_id="custom")
        set_config(custom)
        assert get_config() is custom

    def test_get_config_from_yaml(self, tmp_path):
        path = tmp_path / "twist.yaml"
        TwistConfig(site_id="from_file").to_yaml(path)
        assert get_config(path).site_id == "from_file"

    def test_shipped_example_config(self):
        path = Path(__file__).resolve().parents[1] / "config" / "twist_example.yaml"
        config = TwistConfig.from_yaml(path)
        assert config.site_id == "stitna"
        assert config.deficit_parameters() == DeficitParameters(F_E=0.6, F_TWD=0.3, F_theta=0.7)
        assert config.column_names().wood_mass == "m_dry_wood_kg.m2"
