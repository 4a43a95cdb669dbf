from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ta_binding.utils.logger import LOGGER as logger

DEFAULT_CONFIG_PATH = "config/config.yaml"
DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


# Base model for all configuration classes to enforce strict validation
class StrictBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class LoggingConfig(StrictBaseModel):
    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    file: Optional[str] = None
    rotation: str = "10 MB"
    retention: str = "30 days"
    compression: str = "zip"
    colorize: bool = True


class IndicatorConfiguration(StrictBaseModel):
    """One configured indicator: which binding to run, with what parameters, over which columns."""

    name: str = Field(min_length=1)
    function: str = Field(min_length=1)
    category: Optional[str] = None
    enabled: bool = True
    # "default" holds the base parameters, keys such as "15m" hold per-timeframe overrides
    params: dict[str, dict[str, Any]] = Field(default_factory=dict)
    columns: dict[str, str] = Field(default_factory=dict)


class IndicatorsConfig(StrictBaseModel):
    configurations: list[IndicatorConfiguration] = Field(default_factory=list)
    disabled_indicators: list[str] = Field(default_factory=list)
    categories: dict[str, bool] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_unique_names(self) -> "IndicatorsConfig":
        names = [cfg.name for cfg in self.configurations]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate indicator names: {duplicates}")
        return self


class AppConfig(StrictBaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    indicators: IndicatorsConfig = Field(default_factory=IndicatorsConfig)


class RuntimeSettings(BaseSettings):
    """Environment overrides, read with the ``TA_BINDING_`` prefix."""

    model_config = SettingsConfigDict(env_prefix="TA_BINDING_", extra="ignore")
    config_path: str = DEFAULT_CONFIG_PATH
    log_level: Optional[Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None


def _format_validation_error(e: ValidationError) -> str:
    error_messages = []
    for error in e.errors():
        loc = " -> ".join(map(str, error["loc"]))
        msg = error["msg"]
        error_messages.append(f"  - In section '{loc}': {msg}")
    return "\n".join(error_messages)


class ConfigLoader:
    def __init__(self, config_path: Optional[str] = None) -> None:
        self.settings = RuntimeSettings()
        self.config_path = config_path or self.settings.config_path
        self._config: Optional[AppConfig] = None

    def get_config(self) -> AppConfig:
        if self._config is None:
            try:
                with open(self.config_path, encoding="utf-8") as f:
                    config_data = yaml.safe_load(f)
                if config_data is None:
                    logger.error(f"ConfigurationError: Config file '{self.config_path}' is empty or invalid.")
                    raise ValueError(f"Config file '{self.config_path}' is empty or invalid")
                if not isinstance(config_data, dict):
                    raise ValueError(f"Config file '{self.config_path}' must contain a mapping at the top level")

                if self.settings.log_level is not None:
                    config_data.setdefault("logging", {})["level"] = self.settings.log_level

                self._config = AppConfig(**config_data)
            except FileNotFoundError:
                logger.error(f"ConfigurationError: Config file '{self.config_path}' not found.")
                raise FileNotFoundError(f"Configuration file '{self.config_path}' not found.") from None
            except ValidationError as e:
                error_str = _format_validation_error(e)
                logger.error(
                    f"ConfigurationValidationError: Configuration validation failed for '{self.config_path}':\n{error_str}"
                )
                raise ValueError(f"Configuration validation failed:\n{error_str}") from e
            except yaml.YAMLError as e:
                logger.error(f"ConfigurationError: Error parsing config file '{self.config_path}': {e}")
                raise ValueError(f"Error parsing config file '{self.config_path}': {e}") from e
        return self._config

    def get_config_section(self, section: str) -> dict[str, Any]:
        """Get a specific configuration section as dict"""
        config = self.get_config()

        if section not in AppConfig.model_fields:
            raise ValueError(f"Unknown configuration section: {section}")

        result = getattr(config, section).model_dump()
        return result if isinstance(result, dict) else {}

    def reload_config(self) -> AppConfig:
        """Reload configuration from file"""
        self._config = None
        return self.get_config()
