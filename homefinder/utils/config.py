"""
Configuration Management

Load configuration from YAML and environment variables.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union
import yaml
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent.parent

DEFAULTS: Dict[str, Dict[str, Any]] = {
    'storage': {'backend': 'file', 'path': './data'},
    'latency': {'scale': 1.0},
    'auth': {'reset_token_ttl_minutes': 60},
    'logging': {'level': 'INFO', 'file': None},
}


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    env_path: Optional[Union[str, Path]] = None
) -> Dict[str, Any]:
    """
    Load configuration from YAML file and environment variables.

    Environment variables override YAML values.

    Args:
        config_path: Path to YAML config file (default: $HOMEFINDER_CONFIG
            or config/config.yaml)
        env_path: Path to .env file (default: .env at the project root)

    Returns:
        Configuration dictionary
    """
    env_path = Path(env_path) if env_path else PROJECT_ROOT / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    if config_path is None:
        config_path = os.environ.get('HOMEFINDER_CONFIG') or PROJECT_ROOT / "config" / "config.yaml"
    config_path = Path(config_path)

    config = {}
    if config_path.exists():
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

    config = _expand_env_vars(config)
    config = _apply_env_overrides(config)
    return _apply_defaults(config)


def _apply_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    for section, values in DEFAULTS.items():
        config.setdefault(section, {})
        if config[section] is None:
            config[section] = {}
        for key, value in values.items():
            config[section].setdefault(key, value)
    return config


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand ${VAR} references in config values."""
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str) and obj.startswith('${') and obj.endswith('}'):
        var_name = obj[2:-1]
        return os.environ.get(var_name, obj)
    return obj


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply direct environment variable overrides."""

    # Storage
    if os.environ.get('HOMEFINDER_DATA_DIR'):
        config.setdefault('storage', {})['path'] = os.environ['HOMEFINDER_DATA_DIR']
    if os.environ.get('HOMEFINDER_STORAGE_BACKEND'):
        config.setdefault('storage', {})['backend'] = os.environ['HOMEFINDER_STORAGE_BACKEND']

    # Simulated latency
    if os.environ.get('HOMEFINDER_LATENCY_SCALE'):
        config.setdefault('latency', {})['scale'] = float(os.environ['HOMEFINDER_LATENCY_SCALE'])

    # Auth
    if os.environ.get('HOMEFINDER_RESET_TOKEN_TTL'):
        config.setdefault('auth', {})['reset_token_ttl_minutes'] = int(os.environ['HOMEFINDER_RESET_TOKEN_TTL'])

    # Logging
    if os.environ.get('HOMEFINDER_LOG_LEVEL'):
        config.setdefault('logging', {})['level'] = os.environ['HOMEFINDER_LOG_LEVEL']

    return config


def get_data_dir(config: Dict[str, Any]) -> Path:
    """Get the storage directory from config, relative paths resolved against the project root."""
    path = Path(config.get('storage', {}).get('path', './data'))
    return path if path.is_absolute() else PROJECT_ROOT / path
