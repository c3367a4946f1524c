"""Configuration module."""

from .config import Config, ForgeConfig, GitConfig, LoggingConfig

__all__ = ['Config', 'ForgeConfig', 'GitConfig', 'LoggingConfig']
