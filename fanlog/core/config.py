"""
Configuration management for fanlog
"""

import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from fanlog.utils.logger import get_logger
from fanlog.utils.paths import get_default_config_path, get_project_root


logger = get_logger(__name__)


class Config:
    """Configuration manager for fanlog"""

    DEFAULT_CONFIG = {
        'logging': {
            'log_dir': str(get_project_root() / 'logs'),
            'file_name': 'log_%Y-%m-%d_%H-%M-%S.%f.log',
            'rotation_size': 10 * 1024 * 1024,
            'rotation_time': '00:00:00',
            'channel': 'fanlog.records',
            'process_name': None,
        },
        'database': {
            'path': None,
            'timeout': 60.0,
            'pragmas': {},
        },
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration

        Args:
            config_path: Optional path to config file. If None, uses
                $FANLOG_CONFIG or the project's config/fanlog.yaml.
        """
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file or use defaults"""
        config_file = None

        if self.config_path:
            config_file = Path(self.config_path)
            if not config_file.exists():
                logger.warning(f"Config file not found: {self.config_path}")
                config_file = None
        else:
            default_path = get_default_config_path()
            if default_path.exists():
                config_file = default_path
                logger.info(f"Using config file: {config_file}")

        if config_file:
            try:
                with open(config_file, 'r') as f:
                    loaded_config = yaml.safe_load(f) or {}
                # Merge with defaults (loaded config takes precedence)
                return self._deep_merge(copy.deepcopy(self.DEFAULT_CONFIG), loaded_config)
            except (OSError, yaml.YAMLError) as e:
                logger.error(f"Error loading config file {config_file}: {e}")

        logger.info("Using default configuration")
        return copy.deepcopy(self.DEFAULT_CONFIG)

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        """Overlay override on a copy of base; sections present in both merge key by key"""
        merged = dict(base)
        for key, value in override.items():
            section = merged.get(key)
            if isinstance(section, dict) and isinstance(value, dict):
                value = self._deep_merge(section, value)
            merged[key] = value
        return merged

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Look up a value by dot-separated path, e.g. 'logging.rotation_size'

        Returns default when any segment is missing or a non-section is
        reached before the last segment.
        """
        node = self.config
        for part in key_path.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_logging_config(self) -> Dict[str, Any]:
        """Get log facade configuration"""
        return self.config.get('logging', {})

    def get_database_config(self) -> Dict[str, Any]:
        """Get database configuration"""
        return self.config.get('database', {})
