"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class MongoConfig(BaseModel):
    """MongoDB connection and collection settings."""

    url: str = "mongodb://localhost:27017"
    database: str = "MoviesLibrary"
    collection: str = "movies"
    server_selection_timeout_ms: int = 2000
    test_database_prefix: str = "MoviesLibraryTestDb"  # Suffixed with a uuid per test run

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Reject URLs that are not MongoDB connection strings."""
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("MongoDB URL must start with mongodb:// or mongodb+srv://")
        return v


class Settings(BaseSettings):
    """Main configuration class."""

    config_path: Path = Path("config.yaml")
    log_level: str = "INFO"
    logfire_token: str = ""

    mongodb: MongoConfig = Field(default_factory=MongoConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    def load_yaml_config(self) -> None:
        """Load and merge the YAML configuration file over the defaults."""
        config_path = self.config_path

        if not config_path.exists():
            logger.warning(f"Config file not found: {config_path}. Using defaults.")
            return

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)

            if not yaml_config:
                logger.warning(f"Empty config file: {config_path}")
                return

            if "mongodb" in yaml_config:
                section_dict = self.mongodb.model_dump()
                section_dict.update(yaml_config["mongodb"])
                self.mongodb = MongoConfig(**section_dict)

            logger.info(f"Loaded configuration from {config_path}")

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise


def load_settings() -> Settings:
    """Build Settings from the environment merged with the YAML config file."""
    settings = Settings()
    settings.load_yaml_config()
    return settings


@lru_cache()
def get_settings() -> Settings:
    """Get singleton Settings instance."""
    return load_settings()
