"""Configuration management for private-fork."""

from typing import Optional, Dict, Any
from pathlib import Path
import os

from pydantic import BaseModel, Field, validator
import yaml
from dotenv import load_dotenv

DEFAULT_CONFIG_FILES = ('.private-fork.yaml', '.private-fork.yml')


class ForgeConfig(BaseModel):
    """Forge (gh CLI) configuration."""

    host: str = Field(default='github.com', description='Forge host name')
    executable: str = Field(default='gh', description='Forge CLI executable')
    user_config_key: str = Field(
        default='github.user',
        description='Local forge CLI config key holding the username fallback',
    )
    timeout: Optional[float] = Field(
        default=None, description='Forge command timeout in seconds (none by default)'
    )

    @validator('host')
    def validate_host(cls, v):
        """Validate host is a bare host name."""
        v = v.strip().rstrip('/')
        if not v:
            raise ValueError('host must not be empty')
        if '://' in v:
            raise ValueError('host must not include a scheme')
        return v

    @validator('timeout')
    def validate_timeout(cls, v):
        """Validate timeout is positive."""
        if v is not None and v <= 0:
            raise ValueError('Forge timeout must be positive')
        return v


class GitConfig(BaseModel):
    """Git operations configuration."""

    executable: str = Field(default='git', description='Git executable')
    upstream_remote: str = Field(
        default='upstream', description='Remote name used for the original repository'
    )
    timeout: Optional[float] = Field(
        default=None, description='Git operation timeout in seconds (none by default)'
    )

    @validator('upstream_remote')
    def validate_upstream_remote(cls, v):
        """Validate remote name is usable."""
        if not v or any(c.isspace() for c in v):
            raise ValueError('upstream_remote must be a non-empty name without spaces')
        return v

    @validator('timeout')
    def validate_timeout(cls, v):
        """Validate timeout is positive."""
        if v is not None and v <= 0:
            raise ValueError('Git timeout must be positive')
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default='INFO', description='Log level')
    file: Optional[str] = Field(default=None, description='Log file path')
    format: Optional[str] = Field(default=None, description='Log format')

    @validator('level')
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of: {valid_levels}')
        return v.upper()


class Config(BaseModel):
    """Main configuration class for private-fork."""

    forge: ForgeConfig = Field(
        default_factory=ForgeConfig, description='Forge CLI settings'
    )
    git: GitConfig = Field(default_factory=GitConfig, description='Git settings')
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description='Logging settings'
    )

    class Config:
        """Pydantic configuration."""

        extra = 'forbid'  # Don't allow extra fields

    @classmethod
    def from_file(cls, config_path: str) -> 'Config':
        """Load configuration from YAML file."""
        config_file = Path(config_path)

        if not config_file.exists():
            raise FileNotFoundError(f'Configuration file not found: {config_path}')

        with open(config_file, 'r', encoding='utf-8') as f:
            try:
                config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f'Invalid YAML in {config_path}: {e}') from e

        if not isinstance(config_data, dict):
            raise ValueError(f'Configuration file {config_path} must contain a mapping')

        return cls(**config_data)

    @classmethod
    def from_env(cls) -> 'Config':
        """Load configuration from environment variables."""
        # Load .env file if it exists
        load_dotenv()

        config_data = {
            'forge': {
                'host': os.getenv('PRIVATE_FORK_HOST'),
                'executable': os.getenv('PRIVATE_FORK_GH'),
            },
            'git': {
                'executable': os.getenv('PRIVATE_FORK_GIT'),
                'upstream_remote': os.getenv('PRIVATE_FORK_UPSTREAM_REMOTE'),
            },
            'logging': {
                'level': os.getenv('LOG_LEVEL'),
                'file': os.getenv('LOG_FILE'),
            },
        }

        # Remove None values
        config_data = cls._remove_none_values(config_data)

        return cls(**config_data)

    @classmethod
    def load(cls, config_path: Optional[str] = None, cwd: Optional[Path] = None) -> 'Config':
        """Load configuration from an explicit file, a default file, or the environment."""
        if config_path:
            return cls.from_file(config_path)

        base = cwd or Path.cwd()
        for name in DEFAULT_CONFIG_FILES:
            candidate = base / name
            if candidate.exists():
                return cls.from_file(str(candidate))

        return cls.from_env()

    @staticmethod
    def _remove_none_values(data: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively remove None values from dictionary."""
        if isinstance(data, dict):
            return {
                k: Config._remove_none_values(v)
                for k, v in data.items()
                if v is not None
            }
        return data
