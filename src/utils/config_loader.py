"""
Configuration loader for the catalogue service
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class RemoteConfig(BaseModel):
    """Remote collection API"""

    base_url: str = "http://localhost:3001"
    timeout_seconds: float = Field(default=3.0, gt=0, le=60)


class StorageConfig(BaseModel):
    """On-device fallback storage"""

    backend: Literal["memory", "file", "redis"] = "file"
    path: str = "data/local_storage.json"
    redis_url: Optional[str] = None
    products_key: str = "shopApp_products"
    comments_key: str = "shopApp_comments"


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


class CatalogConfig(BaseModel):
    """Complete catalogue configuration"""

    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# env var -> (section, key)
_ENV_OVERRIDES = {
    "CATALOG_API_URL": ("remote", "base_url"),
    "CATALOG_API_TIMEOUT": ("remote", "timeout_seconds"),
    "CATALOG_STORAGE_BACKEND": ("storage", "backend"),
    "CATALOG_STORAGE_PATH": ("storage", "path"),
    "REDIS_URL": ("storage", "redis_url"),
    "CATALOG_LOG_LEVEL": ("logging", "level"),
}


def _apply_env_overrides(data: Dict[str, Any], environ: Mapping[str, str]) -> Dict[str, Any]:
    for env_name, (section, key) in _ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None or not value.strip():
            continue
        data.setdefault(section, {})
        data[section][key] = value.strip()

    # REDIS_URL alone switches local storage to Redis
    redis_url = environ.get("REDIS_URL", "").strip()
    if redis_url and not environ.get("CATALOG_STORAGE_BACKEND", "").strip():
        data["storage"]["backend"] = "redis"
    return data


def load_catalog_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CatalogConfig:
    """
    Load and validate catalogue configuration from YAML file

    Args:
        config_path: Path to config file. Defaults to config/catalog_config.yml
        environ: Environment used for overrides. Defaults to os.environ

    Returns:
        Validated CatalogConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config" / "catalog_config.yml"

    if not config_path.exists():
        raise FileNotFoundError(f"Catalog config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    data = _apply_env_overrides(data, os.environ if environ is None else environ)

    try:
        cfg = CatalogConfig(**data)
        logger.info("Successfully loaded catalog config from %s", config_path)
        return cfg
    except ValidationError as e:
        logger.error("Catalog config validation failed: %s", e)
        raise
