import os
from typing import Any

import yaml

DEFAULT_CONFIG_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "config.yaml"))


class ConfigLoader:
    _instance = None
    _config = None

    def __new__(cls):
        """
        Create a singleton instance of ConfigLoader.
        Loads settings from the YAML file named by COMMERCE_CONFIG_PATH
        (default: config.yaml at the repository root) on first instantiation.
        """
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._load_config()
        return cls._instance

    @classmethod
    def _load_config(cls):
        config_path = os.environ.get("COMMERCE_CONFIG_PATH", DEFAULT_CONFIG_PATH)
        with open(config_path, "r", encoding="utf-8") as f:
            cls._config = yaml.safe_load(f) or {}

    @classmethod
    def reset(cls):
        """Forget the loaded settings so the next access re-reads the file."""
        cls._instance = None
        cls._config = None

    def get_config(self) -> dict[str, Any]:
        return self._config


def get_config() -> dict[str, Any]:
    """
    Helper function to get the singleton configuration instance's config dictionary.
    """
    return ConfigLoader().get_config()


def get_setting(path: str, default: Any = None) -> Any:
    """Look up a dotted key such as ``token.host``; missing keys yield ``default``."""
    node: Any = get_config()
    for part in path.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node
