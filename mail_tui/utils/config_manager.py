"""Configuration loading: defaults, TOML files and environment variables."""

import tomllib
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError, InvalidConfigError, MailTuiError
from .logging import get_logger
from .paths import LOCAL_CONFIG_PATH, LOGS_DIR, USER_CONFIG_PATH

logger = get_logger(__name__)

ENV_PREFIX = "MAIL_TUI_"


class ExchangeConfig(BaseModel):
    """Pydantic model for the Exchange account."""

    email: str = ""
    password: str = ""
    server: str = "outlook.office365.com"

    def has_credentials(self) -> bool:
        return bool(self.email and self.password)


class UIConfig(BaseModel):
    """Pydantic model for UI timing settings."""

    tick_rate: int = Field(default=250, gt=0)  # in milliseconds
    status_timeout: float = Field(default=5.0, gt=0)  # in seconds
    fetch_timeout: Optional[float] = Field(default=None, gt=0)  # in seconds

    @property
    def tick_seconds(self) -> float:
        return self.tick_rate / 1000


class LoggingConfig(BaseModel):
    """Pydantic model for logging settings."""

    log_level: str = "INFO"
    log_dir: str = str(LOGS_DIR)
    max_file_size: int = 5_242_880  # 5 MB
    backup_count: int = 5

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class AppConfig(BaseSettings):
    """Overall application configuration.

    Keyword arguments (the merged TOML files) sit below environment
    variables, so ``MAIL_TUI_EXCHANGE__EMAIL`` overrides ``[exchange] email``.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        extra="ignore",
    )

    exchange: ExchangeConfig = Field(default_factory=ExchangeConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return env_settings, init_settings


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``override`` into a copy of ``base``, descending into tables."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def candidate_paths(config_path: Optional[Path] = None) -> list[Path]:
    """Config files to read, lowest priority first."""
    if config_path is not None:
        return [Path(config_path)]
    return [LOCAL_CONFIG_PATH, USER_CONFIG_PATH]


def read_toml(path: Path) -> Dict[str, Any]:
    """Read one TOML config file."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise InvalidConfigError(
            f"Configuration file {path} is not valid TOML: {e}",
            details={"path": str(path)},
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file {path}: {e}",
            details={"path": str(path)},
        ) from e


def load_config(
    config_path: Optional[Path] = None, paths: Optional[Iterable[Path]] = None
) -> AppConfig:
    """Build the validated configuration record.

    An explicit path that does not exist is skipped, leaving defaults and
    environment variables in effect.
    """
    data: Dict[str, Any] = {}

    for path in paths if paths is not None else candidate_paths(config_path):
        if not path.exists():
            logger.debug(f"Config file not found, skipping: {path}")
            continue
        data = deep_merge(data, read_toml(path))
        logger.info(f"Configuration loaded from {path}")

    try:
        config = AppConfig(**data)
    except ValidationError as e:
        raise InvalidConfigError(
            f"Configuration data does not match expected schema: {e}"
        ) from e
    except MailTuiError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}") from e

    logger.debug("Configuration successfully loaded and validated.")
    return config
