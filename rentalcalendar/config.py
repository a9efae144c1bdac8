"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import Dict, List

import pendulum
import yaml
from pendulum.tz.exceptions import InvalidTimezone
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.hourly_pricing import FALLBACK_HOURLY_RATE, PRESET_TIERS, TierPreset
from .domain.models import TierKind, format_hour


class OperatingHoursConfig(BaseModel):
    """Window of hours offered when editing a weekly schedule."""
    start_hour: int = 6
    end_hour: int = 22

    @field_validator("start_hour", "end_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 24."""
        if not 0 <= v <= 24:
            raise ValueError(f"Hour must be between 0 and 24, got {v}")
        return v

    @model_validator(mode="after")
    def validate_hours_order(self) -> "OperatingHoursConfig":
        """Ensure the window opens before it closes."""
        if self.end_hour <= self.start_hour:
            raise ValueError("end_hour must be later than start_hour")
        return self

    def get_start(self) -> str:
        """Get start as an ``HH:00`` string."""
        return format_hour(self.start_hour)

    def get_end(self) -> str:
        """Get end as an ``HH:00`` string."""
        return format_hour(self.end_hour)


class TierPresetConfig(BaseModel):
    """Seed hours and price multiplier for a peak or off-peak tier."""
    label: str
    hours: List[int]
    multiplier: float

    @field_validator("hours")
    @classmethod
    def validate_hours(cls, value: List[int]) -> List[int]:
        """Ensure hours are within a day and deduplicated."""
        invalid = [hour for hour in value if not 0 <= hour <= 23]
        if invalid:
            raise ValueError(f"Preset hours must be between 0 and 23, got {invalid}")
        return sorted(set(value))

    @field_validator("multiplier")
    @classmethod
    def validate_multiplier(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("multiplier must be greater than zero")
        return value

    def to_preset(self) -> TierPreset:
        return TierPreset(label=self.label, hours=tuple(self.hours), multiplier=self.multiplier)


def _default_preset(kind: TierKind) -> TierPresetConfig:
    preset = PRESET_TIERS[kind]
    return TierPresetConfig(label=preset.label, hours=list(preset.hours), multiplier=preset.multiplier)


class PricingConfig(BaseModel):
    """Defaults for hourly tier pricing."""
    fallback_hourly_rate: float = FALLBACK_HOURLY_RATE
    peak: TierPresetConfig = Field(default_factory=lambda: _default_preset(TierKind.PEAK))
    offpeak: TierPresetConfig = Field(default_factory=lambda: _default_preset(TierKind.OFFPEAK))

    @field_validator("fallback_hourly_rate")
    @classmethod
    def validate_rate(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("fallback_hourly_rate must be greater than zero")
        return value

    def presets(self) -> Dict[TierKind, TierPreset]:
        """Presets keyed by tier kind, ready for the pricing operations."""
        return {
            TierKind.PEAK: self.peak.to_preset(),
            TierKind.OFFPEAK: self.offpeak.to_preset(),
        }


class StorageConfig(BaseModel):
    """Where asset configurations and bookings are read from."""
    data_dir: Path = Path("data/assets")
    bookings_file: Path = Path("data/bookings.json")


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "America/Los_Angeles"
    operating_hours: OperatingHoursConfig = Field(default_factory=OperatingHoursConfig)
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except (InvalidTimezone, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
