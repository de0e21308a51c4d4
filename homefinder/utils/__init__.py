"""
Homefinder Utilities Package

Shared utilities:
- Configuration management
- Logging setup
"""

from homefinder.utils.config import load_config
from homefinder.utils.logging import setup_logging

__all__ = ["load_config", "setup_logging"]
