"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.models import TIME_OF_DAY_PATTERN, DayOfWeek, Interval
from .schemas import CreateOffice, dedupe_days


class DefaultsConfig(BaseModel):
    """Defaults applied to offices created without explicit hours or days."""
    work_start_time: str = Field(default="09:00", pattern=TIME_OF_DAY_PATTERN)
    work_end_time: str = Field(default="17:00", pattern=TIME_OF_DAY_PATTERN)
    working_days: List[DayOfWeek] = Field(
        default_factory=lambda: [
            DayOfWeek.MONDAY,
            DayOfWeek.TUESDAY,
            DayOfWeek.WEDNESDAY,
            DayOfWeek.THURSDAY,
            DayOfWeek.FRIDAY,
        ]
    )

    @field_validator("working_days")
    @classmethod
    def validate_working_days(cls, value: List[DayOfWeek]) -> List[DayOfWeek]:
        """Deduplicate weekdays."""
        return dedupe_days(value)

    @model_validator(mode="after")
    def validate_hours_order(self) -> "DefaultsConfig":
        """Ensure the default window opens before it closes."""
        self.get_work_interval()
        return self

    def get_work_interval(self) -> Interval:
        """Get the default working window as an interval."""
        return Interval.parse(self.work_start_time, self.work_end_time)


class AppConfig(BaseModel):
    """Application configuration."""
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    offices: List[CreateOffice] = Field(default_factory=list)

    @field_validator("offices")
    @classmethod
    def validate_offices(cls, value: List[CreateOffice]) -> List[CreateOffice]:
        """Ensure office names are unique."""
        seen_names: set[str] = set()
        for office in value:
            name_key = office.name.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate office name detected: {office.name}")
            seen_names.add(name_key)
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
    config_path = Path.cwd() / "config.yaml"

    if not config_path.exists():
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
