import json
import os
from typing import Dict, Any

from dotenv import load_dotenv

from core.dendrogram import DEFAULT_LINKAGE, SUPPORTED_LINKAGES


class ConfigManager:
    """Centralized configuration management"""

    def __init__(self, config_file: str = 'config.json', env_file: str = '.env'):
        self.config_file = config_file
        self.env_file = env_file
        if os.path.exists(env_file):
            load_dotenv(env_file)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration file, empty if missing or broken"""
        try:
            with open(self.config_file) as f:
                cfg = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            cfg = {}

        if not isinstance(cfg, dict):
            cfg = {}
        return cfg

    def get_grouping_config(self) -> Dict[str, Any]:
        """Grouping parameters with environment overrides, clamped to valid ranges"""
        max_size = max(1, int(os.getenv("BUS_MAX_SIZE", self._config.get("max_size", 59))))
        min_size = max(1, int(os.getenv("BUS_MIN_SIZE", self._config.get("min_size", 30))))

        # A band with min above max can never be satisfied
        min_size = min(min_size, max_size)

        linkage_method = os.getenv("BUS_LINKAGE_METHOD", self._config.get("linkage_method", DEFAULT_LINKAGE))
        if linkage_method not in SUPPORTED_LINKAGES:
            linkage_method = DEFAULT_LINKAGE

        return {
            'max_size': max_size,
            'min_size': min_size,
            'linkage_method': linkage_method,
            # 0 means unbounded
            'max_iterations': max(0, int(os.getenv("BUS_MAX_ITERATIONS", self._config.get("max_iterations", 0)))),
            'log_dir': os.getenv("BUS_LOG_DIR", self._config.get("log_dir", "logs")),
        }


# Global config manager instance
config_manager = ConfigManager()


def get_config() -> Dict[str, Any]:
    """Get grouping configuration"""
    return config_manager.get_grouping_config()
