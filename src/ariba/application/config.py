from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from ariba.domain.constants import DEFAULT_EASINESS, MIN_EASINESS

def config_files() -> list[Path]:
    return [
        Path.home() / ".config/ariba/config.toml",
        Path.home() / ".ariba.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for ariba.
    Supports loading from:
    1. Environment variables (ARIBA_*)
    2. Config file (~/.config/ariba/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="ARIBA_",
        extra="ignore",
    )

    # Paths
    deck_path: Path = Field(default_factory=lambda: Path.home() / ".config/ariba/deck.json")

    # Scheduling
    default_easiness: float = Field(default=DEFAULT_EASINESS, ge=MIN_EASINESS)

    # Export
    export_format: Literal["json", "yaml"] = "json"

    # Server
    host: str = "127.0.0.1"
    port: int = 8778

    verbose: int = 1

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

        toml_file = next((f for f in config_files() if f.exists()), None)

        # Earlier sources win: CLI overrides, then env, then the file.
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("deck_path", mode="before")
    @classmethod
    def resolve_deck_path(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/ariba/config.toml (if exists)
    3. Environment variables (ARIBA_*)
    4. cli_overrides (passed from Typer); None values are ignored
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
