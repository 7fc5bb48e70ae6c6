from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from booker.domain.constants import DEFAULT_DURATION
from booker.domain.models import Category, Language, parse_category, parse_language


class AppConfig(BaseSettings):
    """
    Configuration model for booker.
    Supports loading from:
    1. Environment variables (BOOKER_*)
    2. Config file (~/.config/booker/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="BOOKER_",
        extra="ignore",
    )

    # Paths
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".config/booker")
    primary_file: str = "items.json"
    fallback_file: str = "items.yaml"
    state_file: str = "state.json"

    # Defaults for `booker log`
    default_duration: int = Field(default=DEFAULT_DURATION, gt=0)
    default_language: Language = Language.SPANISH
    default_category: Category = Category.GRAMMAR

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        toml_files = [
            Path.home() / ".config/booker/config.toml",
            Path.home() / ".booker.toml",
        ]

        # First existing file wins
        toml_file = next((f for f in toml_files if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("data_dir", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()

    @field_validator("default_language", mode="before")
    @classmethod
    def resolve_language(cls, v: Any) -> Language:
        return parse_language(v)

    @field_validator("default_category", mode="before")
    @classmethod
    def resolve_category(cls, v: Any) -> Category:
        return parse_category(v)

    @property
    def primary_path(self) -> Path:
        return self.data_dir / self.primary_file

    @property
    def fallback_path(self) -> Path:
        return self.data_dir / self.fallback_file

    @property
    def state_path(self) -> Path:
        return self.data_dir / self.state_file


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/booker/config.toml (if exists)
    3. Environment variables (BOOKER_*)
    4. cli_overrides (passed from Typer), None values ignored
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
