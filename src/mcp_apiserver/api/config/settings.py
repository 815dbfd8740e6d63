"""Application settings."""

import os
from typing import Dict, Any, List, Literal, Optional

import yaml
from loguru import logger
from pydantic import BaseModel, Field


DEFAULT_CONFIG_PATH = os.path.join("config", "config.yaml")
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class ServiceSettings(BaseModel):
    """HTTP service settings."""
    host: str = Field("0.0.0.0", description="Bind address")
    port: int = Field(5234, description="Bind port")
    log_level: str = Field("INFO", description="Uvicorn log level")
    max_upload_bytes: int = Field(
        DEFAULT_MAX_UPLOAD_BYTES, gt=0, description="Largest accepted OpenAPI upload in bytes"
    )


class StorageSettings(BaseModel):
    """Configuration store settings."""
    type: Literal["memory", "file"] = Field("file", description="Store backend")
    base_path: str = Field(os.path.join("data", "mcp_configs"), description="Directory for the file backend")


class NotifierSettings(BaseModel):
    """Gateway notifier settings."""
    type: Literal["messaging", "api"] = Field("messaging", description="Notifier backend")
    topic: str = Field("config/update", description="Topic for the messaging backend")
    targets: List[str] = Field(default_factory=list, description="Gateway reload URLs for the api backend")
    timeout: float = Field(5.0, description="Per-request timeout for the api backend in seconds")


class LoggingSettings(BaseModel):
    """Logging settings."""
    level: str = Field("INFO", description="Console log level")
    log_dir: Optional[str] = Field("logs", description="Directory for the rotating log file")


class AppSettings(BaseModel):
    """Top-level application settings."""
    version: str = Field("1.0.0", description="Service version")
    service: ServiceSettings = Field(default_factory=ServiceSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    notifier: NotifierSettings = Field(default_factory=NotifierSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load raw configuration from file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Dict[str, Any]: Configuration dictionary, empty if loading fails
    """
    try:
        if os.path.exists(config_path):
            with open(config_path, "r") as f:
                data = yaml.safe_load(f)
            if isinstance(data, dict):
                return data
            logger.warning(f"Ignoring config {config_path}: top level is not a mapping")
        else:
            logger.warning(f"Config file not found at {config_path}, using defaults")
    except Exception as e:
        logger.warning(f"Failed to load config: {e}")

    return {}


def load_settings(config_path: str = DEFAULT_CONFIG_PATH) -> AppSettings:
    """Load and validate application settings.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        AppSettings: Validated settings with defaults filled in
    """
    return AppSettings.model_validate(load_config(config_path))
