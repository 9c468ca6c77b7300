import tomllib
from logging import getLevelNamesMapping
from pathlib import Path

import tomlkit
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from pairswap.logging import logger

CONFIG_DIR = Path.home() / ".config" / "pairswap"
CONFIG_FILE = CONFIG_DIR / "config.toml"


class LoggingSettings(BaseModel):
    level: str = "INFO"

    @field_validator("level", mode="before")
    def validate_level(
        cls,  # noqa: N805
        level: str,
    ) -> str:
        """
        Accept any standard level name, regardless of case.
        """

        level = str(level).upper()
        if level not in getLevelNamesMapping():
            raise ValueError(f"Unknown log level {level}")
        return level


class DisplaySettings(BaseModel):
    # Digits shown after the decimal point when printing scaled prices
    price_decimals: int = Field(default=6, ge=0, le=18)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PAIRSWAP_",
        env_nested_delimiter="__",
    )

    logging: LoggingSettings = LoggingSettings()
    display: DisplaySettings = DisplaySettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment variables take priority over values read from the config file
        return env_settings, init_settings


def load_config_from_file(config_path: Path) -> Settings:
    return Settings(
        **tomllib.loads(
            config_path.read_text(),
        ),
    )


def save_config_to_file(config: Settings, config_path: Path = CONFIG_FILE) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        tomlkit.dumps(
            config.model_dump(),
        ),
    )


if CONFIG_FILE.exists():
    settings = load_config_from_file(CONFIG_FILE)
else:
    settings = Settings()

logger.setLevel(settings.logging.level)
