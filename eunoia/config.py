#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Configuration
Centralized environment configuration with validation

Version: 1.0.0
"""

import os
import sys
import logging
from pathlib import Path
from typing import Optional, Dict, Any, List
from dataclasses import dataclass, field
from enum import Enum

import pytz


class Environment(Enum):
    """Runtime environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class LogLevel(Enum):
    """Logging levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class StorageConfig:
    """Per-user JSON storage"""
    data_dir: Path


@dataclass
class AIConfig:
    """Generative model settings"""
    openai_api_key: Optional[str]
    openai_model: str = "gpt-4o-mini"
    openai_max_tokens: int = 1500
    temperature: float = 0.7
    ai_enabled: bool = False
    request_timeout: int = 30


@dataclass
class ServerConfig:
    """HTTP server settings"""
    host: str = "0.0.0.0"
    port: int = 8000
    debug_mode: bool = False
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


def _env_flag(key: str, default: str) -> bool:
    return os.getenv(key, default).lower() == 'true'


class AppConfig:
    """Main configuration class"""

    def __init__(self):
        self.environment = Environment(os.getenv('ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Read configuration from environment variables"""
        self.data_dir = Path(os.getenv('DATA_DIR', 'data'))
        self.log_dir = Path(os.getenv('LOG_DIR', 'logs'))

        self.storage = StorageConfig(data_dir=self.data_dir)

        openai_key = os.getenv('OPENAI_API_KEY') or None
        self.ai = AIConfig(
            openai_api_key=openai_key,
            openai_model=os.getenv('OPENAI_MODEL', 'gpt-4o-mini'),
            openai_max_tokens=int(os.getenv('OPENAI_MAX_TOKENS', 1500)),
            temperature=float(os.getenv('OPENAI_TEMPERATURE', 0.7)),
            ai_enabled=bool(openai_key) and _env_flag('AI_ENABLED', 'true'),
            request_timeout=int(os.getenv('AI_TIMEOUT', 30))
        )

        origins = os.getenv('CORS_ORIGINS', '*')
        self.server = ServerConfig(
            host=os.getenv('HOST', '0.0.0.0'),
            port=int(os.getenv('PORT', 8000)),
            debug_mode=_env_flag('DEBUG_MODE', 'false'),
            cors_origins=[o.strip() for o in origins.split(',') if o.strip()]
        )

        self.timezone = os.getenv('TIMEZONE', 'UTC')

        self.log_level = LogLevel(os.getenv('LOG_LEVEL', 'INFO').upper())
        self.log_to_file = _env_flag('LOG_TO_FILE', 'false')
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _validate_config(self):
        """Collect configuration errors and fail on any"""
        errors = []

        if not 1 <= self.server.port <= 65535:
            errors.append(f"Port {self.server.port} is outside 1-65535")

        if self.timezone not in pytz.all_timezones_set:
            errors.append(f"Unknown timezone: {self.timezone}")

        if self.ai.openai_max_tokens <= 0:
            errors.append("OPENAI_MAX_TOKENS must be positive")

        if not 0.0 <= self.ai.temperature <= 2.0:
            errors.append("OPENAI_TEMPERATURE must be between 0 and 2")

        if errors:
            raise ValueError("Configuration errors:\n" + "\n".join(f"• {error}" for error in errors))

        if self.ai.openai_api_key and not self.ai.ai_enabled:
            logging.getLogger(__name__).info("OPENAI_API_KEY set but AI_ENABLED=false, using fallbacks")

    def ensure_directories(self):
        """Create data and log directories"""
        directories = [self.data_dir]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """dictConfig for the root logger"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        logging_config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stdout
                }
            },
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers
                },
                'httpx': {'level': 'WARNING'},
                'openai': {'level': 'WARNING'},
                'uvicorn.access': {'level': 'WARNING'}
            }
        }

        if self.log_to_file:
            logging_config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"eunoia_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return logging_config

    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration with secrets masked"""
        key = self.ai.openai_api_key
        return {
            'environment': self.environment.value,
            'server': {
                'host': self.server.host,
                'port': self.server.port,
                'debug_mode': self.server.debug_mode
            },
            'ai': {
                'enabled': self.ai.ai_enabled,
                'model': self.ai.openai_model,
                'api_key': (key[:6] + "...") if key else None
            },
            'data_dir': str(self.data_dir),
            'timezone': self.timezone,
            'log_level': self.log_level.value
        }


# Global configuration instance
config = AppConfig()

__all__ = [
    'config',
    'AppConfig',
    'Environment',
    'LogLevel',
    'StorageConfig',
    'AIConfig',
    'ServerConfig'
]
