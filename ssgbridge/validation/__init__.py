"""
SSGBridge validation module.

This module provides configuration loading and schema enforcement.
"""

from ssgbridge.validation.config import Config, ConfigError

__all__ = ["Config", "ConfigError"]
