"""
Hierarchical configuration management.

Loads configuration from multiple sources with this precedence (highest wins):
    1. Environment variables (JOURNAL_CHAT_SECTION__KEY)
    2. Config file (YAML or JSON)
    3. Built-in defaults

Usage:
    config = Config(config_file="~/.journal-chat/config.yaml")

    config.get("journal.path")       # folder of YYYY-MM-DD notes, relative to the vault
    config.get("llm.model")          # litellm model string
"""

import json
import os
from typing import Any

import yaml

from journal_chat.core.exceptions import ConfigurationError

_DEFAULT_ENV_PREFIX = "JOURNAL_CHAT_"
_DEFAULT_DATA_DIR_NAME = ".journal-chat"
_FILE_FORMATS = (".yaml", ".yml", ".json")

DEFAULT_MODEL = "ollama/llama3.2:latest"
DEFAULT_API_BASE = "http://localhost:11434"
DEFAULT_JOURNAL_PATH = "Journal"


class Config:
    """
    Central configuration manager.

    Loads and merges configuration from defaults, a config file, and
    environment variables. Env vars use double-underscore to denote nesting:
    JOURNAL_CHAT_JOURNAL__PATH=Daily -> config["journal"]["path"] = "Daily"
    """

    def __init__(
        self,
        config_file: str | None = None,
        env_prefix: str = _DEFAULT_ENV_PREFIX,
        data_dir: str | None = None,
        defaults: dict[str, Any] | None = None,
    ):
        """
        Args:
            config_file: Path to YAML or JSON configuration file.
            env_prefix: Prefix for environment variable overrides.
            data_dir: Base directory for logs and state. Defaults to ~/.journal-chat.
            defaults: Additional default values to merge.
        """
        self.config_file = os.path.expanduser(config_file) if config_file else None
        self.env_prefix = env_prefix or ""
        self._data_dir = data_dir or os.path.join("~", _DEFAULT_DATA_DIR_NAME)
        self._extra_defaults = defaults or {}
        self.config_data: dict[str, Any] = {}
        self.file_loaded = False

        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from all sources."""
        self.config_data = self._get_default_config()

        if self._extra_defaults:
            self._update_dict(self.config_data, self._extra_defaults)

        if self.config_file and os.path.exists(self.config_file):
            file_config = self._load_file(self.config_file)
            self._update_dict(self.config_data, file_config)
            self.file_loaded = os.path.splitext(self.config_file)[1].lower() in _FILE_FORMATS

        # Env vars override everything
        self._load_from_env()

    def _get_default_config(self) -> dict[str, Any]:
        data_dir = os.path.expanduser(self._data_dir)
        return {
            "paths": {
                "data_dir": data_dir,
                "log_dir": os.path.join(data_dir, "logs"),
            },
            "vault": {
                "path": ".",
            },
            "journal": {
                "path": DEFAULT_JOURNAL_PATH,
            },
            "llm": {
                "model": DEFAULT_MODEL,
                "api_base": DEFAULT_API_BASE,
                "temperature": 0.7,
            },
            "logging": {
                "level": "WARNING",
                "to_file": False,
            },
        }

    @staticmethod
    def _load_file(path: str) -> dict[str, Any]:
        """Load a YAML or JSON config file."""
        ext = os.path.splitext(path)[1].lower()
        try:
            with open(path) as f:
                if ext in (".yaml", ".yml"):
                    data = yaml.safe_load(f) or {}
                elif ext == ".json":
                    data = json.load(f)
                else:
                    return {}
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Invalid config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping at the top level")
        return data

    def _update_dict(self, target: dict, source: dict) -> None:
        """Recursively merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._update_dict(target[key], value)
            else:
                target[key] = value

    def _load_from_env(self) -> None:
        """Override config values from environment variables."""
        if not self.env_prefix:
            return
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(self.env_prefix):
                continue
            config_key = env_key[len(self.env_prefix) :].lower()
            key_parts = config_key.split("__")

            current = self.config_data
            for part in key_parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]
            current[key_parts[-1]] = env_value

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dot-notation path.

        Args:
            key_path: e.g. "journal.path", "llm.model"
            default: Returned when key is not found.
        """
        current = self.config_data
        for part in key_path.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def set(self, key_path: str, value: Any) -> None:
        """Set a config value by dot-notation path, creating intermediate dicts."""
        self._set_in(self.config_data, key_path, value)

    @staticmethod
    def _set_in(target: dict[str, Any], key_path: str, value: Any) -> None:
        parts = key_path.split(".")
        current = target
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[parts[-1]] = value

    def get_vault_path(self) -> str:
        """Return the resolved vault root directory."""
        return os.path.abspath(os.path.expanduser(self.get("vault.path", ".")))

    def save_value(self, key_path: str, value: Any) -> str:
        """Set one value and write only that key back to the loaded config file.

        The rest of the file is kept as written; defaults, env vars and
        values changed with ``set`` are not copied into it. Returns the path
        written.

        Raises:
            ConfigurationError: If no config file was loaded.
        """
        if not self.file_loaded or not self.config_file:
            raise ConfigurationError("No config file was loaded, nothing to save to")

        self.set(key_path, value)
        file_data = self._load_file(self.config_file)
        self._set_in(file_data, key_path, value)
        with open(self.config_file, "w") as f:
            if self.config_file.lower().endswith(".json"):
                json.dump(file_data, f, indent=2)
            else:
                yaml.safe_dump(file_data, f, default_flow_style=False, sort_keys=False)
        return self.config_file


# Module-level singleton
_config_instance: Config | None = None


def get_config(
    config_file: str | None = None,
    env_prefix: str = _DEFAULT_ENV_PREFIX,
    data_dir: str | None = None,
) -> Config:
    """Get or create the global Config singleton."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config(config_file=config_file, env_prefix=env_prefix, data_dir=data_dir)
    return _config_instance


def reset_config() -> None:
    """Reset the global Config singleton (useful for testing)."""
    global _config_instance
    _config_instance = None
