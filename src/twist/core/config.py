"""
Configuration system with validation and environment awareness.
Based on Pydantic Settings for robust configuration management.
"""
import logging
from pathlib import Path
from typing import Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from twist.core.constants import (
    DEFAULT_COLUMN_NAMES,
    DEFAULT_DEFICIT_PARAMETERS,
    DEFAULT_TWD_INITIAL,
    DEFAULT_WATER_POOL_PARAMETERS,
    UPTAKE_FRACTION_RANGE,
)
from twist.core.exceptions import ConfigurationError, ErrorContext
from twist.core.types import ColumnNames, DeficitParameters, WaterPoolParameters

logger = logging.getLogger(__name__)


class DeficitConfig(BaseModel):
    """
    Configuration for the tree water deficit recurrence.

    Values outside the documented ranges are accepted with a warning;
    the model propagates them arithmetically.
    """

    f_e: float = Field(
        DEFAULT_DEFICIT_PARAMETERS["F_E"],
        description="Fraction of transpiration directly supplied by uptake [0-1]"
    )
    f_twd: float = Field(
        DEFAULT_DEFICIT_PARAMETERS["F_TWD"],
        description="Fraction of current TWD refilled per timestep [0-1]"
    )
    f_theta: float = Field(
        DEFAULT_DEFICIT_PARAMETERS["F_theta"],
        description="Relative soil water threshold for uptake downregulation (>0)"
    )

    @model_validator(mode="after")
    def warn_out_of_range(self):
        """Flag values outside documented ranges without rejecting them"""
        low, high = UPTAKE_FRACTION_RANGE
        for name in ("f_e", "f_twd"):
            value = getattr(self, name)
            if not low <= value <= high:
                logger.warning(f"{name}={value} outside documented range [{low}, {high}]")
        if self.f_theta <= 0:
            logger.warning(
                f"F_theta={self.f_theta} is not positive; "
                "soil limitation will be non-finite"
            )
        return self

    def to_parameters(self) -> DeficitParameters:
        return DeficitParameters(F_E=self.f_e, F_TWD=self.f_twd, F_theta=self.f_theta)


class WaterPoolConfig(BaseModel):
    """Configuration for the tree water pool estimate"""

    rho_sat: float = Field(
        DEFAULT_WATER_POOL_PARAMETERS["rho_sat"],
        description="Fully saturated wood density [kg dm-3]"
    )
    rho_dry: float = Field(
        DEFAULT_WATER_POOL_PARAMETERS["rho_dry"],
        description="Oven-dry wood density [kg dm-3]"
    )

    @model_validator(mode="after")
    def warn_degenerate_pool(self):
        if self.rho_dry == 0:
            logger.warning("rho_dry is zero; water pool size will be non-finite")
        elif self.rho_sat <= self.rho_dry:
            logger.warning(
                f"rho_sat={self.rho_sat} <= rho_dry={self.rho_dry}; "
                "water pool size will be non-positive"
            )
        return self

    def to_parameters(self) -> WaterPoolParameters:
        return WaterPoolParameters(rho_sat=self.rho_sat, rho_dry=self.rho_dry)


class ColumnConfig(BaseModel):
    """Input table column names for each model variable"""

    time: str = Field(DEFAULT_COLUMN_NAMES["time"], description="Timestamp column")
    transpiration: str = Field(
        DEFAULT_COLUMN_NAMES["transpiration"],
        description="Transpirational water loss per timestep"
    )
    theta: str = Field(DEFAULT_COLUMN_NAMES["theta"], description="Relative soil water content")
    wood_mass: str = Field(
        DEFAULT_COLUMN_NAMES["wood_mass"],
        description="Oven-dry wood biomass contributing to storage"
    )
    pool: str = Field(DEFAULT_COLUMN_NAMES["pool"], description="Tree water pool size")

    def to_column_names(self) -> ColumnNames:
        return ColumnNames(**self.model_dump())


class RunConfig(BaseModel):
    """Runtime options for a timeseries run"""

    twd_initial: float = Field(
        DEFAULT_TWD_INITIAL,
        description="TWD before the first timestep (0 = fully hydrated)"
    )
    compute_water_pool: bool = Field(
        True,
        description="Derive the pool column from wood mass before running"
    )
    check_input_domains: bool = Field(
        True,
        description="Log warnings for inputs outside their physical domain"
    )


class LoggingConfig(BaseModel):
    """Configuration for logging"""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


class TwistConfig(BaseSettings):
    """Main configuration for the TWIST system"""

    # System
    site_id: Optional[str] = Field(None, description="Optional site label for logs and errors")

    # Component configurations
    deficit: DeficitConfig = Field(default_factory=DeficitConfig)
    water_pool: WaterPoolConfig = Field(default_factory=WaterPoolConfig)
    columns: ColumnConfig = Field(default_factory=ColumnConfig)
    run: RunConfig = Field(default_factory=RunConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="TWIST_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "TwistConfig":
        """Load configuration from YAML file"""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        try:
            return cls(**yaml_config)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration in {yaml_path}: {e}",
                ErrorContext(component="config", operation="from_yaml"),
            ) from e

    def to_yaml(self, yaml_path: Union[str, Path]):
        """Save configuration to YAML file"""
        yaml_path = Path(yaml_path)
        yaml_path.parent.mkdir(parents=True, exist_ok=True)

        with open(yaml_path, "w", encoding="utf-8") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False, sort_keys=False)

    def deficit_parameters(self) -> DeficitParameters:
        return self.deficit.to_parameters()

    def water_pool_parameters(self) -> WaterPoolParameters:
        return self.water_pool.to_parameters()

    def column_names(self) -> ColumnNames:
        return self.columns.to_column_names()


# Global configuration instance
_config: Optional[TwistConfig] = None


def get_config(config_path: Optional[Path] = None) -> TwistConfig:
    """Get or create configuration instance (singleton pattern)"""
    global _config

    if _config is None:
        if config_path and Path(config_path).exists():
            _config = TwistConfig.from_yaml(config_path)
        else:
            # Try to load from environment
            _config = TwistConfig()

    return _config


def set_config(config: Optional[TwistConfig]):
    """Set configuration (useful for testing)"""
    global _config
    _config = config
