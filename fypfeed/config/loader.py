"""Configuration loader."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .models import ConfigModel


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = Path.home() / ".config" / "fypfeed" / "config.yaml"
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config, falling back to defaults when no file exists."""
        if self._config is None:
            if self.config_path.exists():
                self._config = load_config(self.config_path)
            else:
                self._config = ConfigModel()
        return self._config

    def get_db_config(self) -> Dict[str, Any]:
        """Get database configuration dict."""
        db_config = self.config.postgres.model_dump()

        # Handle password from environment if specified
        if db_config.get("password_env"):
            password = os.environ.get(db_config["password_env"])
            if password:
                db_config["password"] = password

        return db_config

    def get_supabase_config(self) -> Dict[str, Any]:
        """Get Supabase configuration dict."""
        supabase_config = self.config.supabase.model_dump()

        # Handle API key from environment if specified
        if supabase_config.get("api_key_env"):
            api_key = os.environ.get(supabase_config["api_key_env"])
            if api_key:
                supabase_config["api_key"] = api_key

        return supabase_config


# Inline secrets are never written back; use the *_env fields instead
SECRET_FIELDS = {"postgres": {"password"}, "supabase": {"api_key"}}


def load_config(config_path: Path) -> ConfigModel:
    """
    Load configuration from YAML file.

    Raises:
        FileNotFoundError: No file at ``config_path``
        ValueError: Malformed YAML, a non-mapping document or invalid values
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        config_data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}")

    if not isinstance(config_data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    try:
        return ConfigModel.model_validate(config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {config_path}: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Write configuration as YAML, leaving out inline secrets."""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json", exclude=SECRET_FIELDS)
    config_path.write_text(
        yaml.safe_dump(data, default_flow_style=False, sort_keys=False),
        encoding="utf-8",
    )
