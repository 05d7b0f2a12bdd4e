"""
Centralized settings and path configuration for the contact pricing tool.

Every field can be overridden from the environment (or a .env file) with the
CONTACT_PRICING_ prefix, e.g. CONTACT_PRICING_SCHEDULE_STEP=250.
"""
from pathlib import Path
from typing import Optional

from pydantic import Field, PositiveInt, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


ENV_PREFIX = "CONTACT_PRICING_"


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    # Walk up from this file to find the project root
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


class Settings(BaseSettings):
    """Application settings with sensible defaults."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_file=".env", extra="ignore")

    # Project paths
    project_root: Path = Field(default_factory=get_project_root)

    # Output files (default under src/contact_pricing/data/outputs)
    price_schedule: Optional[Path] = None
    build_report: Optional[Path] = None

    # Currency display (single currency, Brazilian real by default)
    currency_symbol: str = "R$"
    decimal_separator: str = ","
    thousands_separator: str = "."

    log_level: str = "INFO"

    # Price schedule sampling
    schedule_step: PositiveInt = 100
    schedule_max_volume: PositiveInt = 10500

    # API server
    api_host: str = "0.0.0.0"
    api_port: PositiveInt = 8000

    @model_validator(mode="after")
    def _fill_output_paths(self) -> 'Settings':
        outputs = self.project_root / 'src' / 'contact_pricing' / 'data' / 'outputs'
        if self.price_schedule is None:
            self.price_schedule = outputs / 'price_schedule.csv'
        if self.build_report is None:
            self.build_report = outputs / 'build_report.json'
        self.log_level = self.log_level.upper()
        return self

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the environment, optionally pinning the project root."""
        if project_root is not None:
            return cls(project_root=project_root)
        return cls()


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reset_settings():
    """Drop the cached settings so the next access reloads them."""
    global _settings
    _settings = None
