#!/usr/bin/env python3
"""
JD Snapshot Diff Configuration & Logging Module
===============================================
Centralized configuration, structured logging, and error types.

The diff constants (character budget, line threshold) live in
snapshot_diff.differ and are intentionally not configurable here.
"""

import os
import sys
import json
import logging
import uuid
import time
from datetime import datetime, timezone
from typing import Optional, Dict, Any
from pathlib import Path
from dataclasses import dataclass, field
from contextlib import contextmanager
import threading

# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================
DEFAULT_PORT = 5060
MIN_SECRET_KEY_LENGTH = 32          # Minimum secret key length
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024  # 5MB max per log file
LOG_BACKUP_COUNT = 5                # Number of log backup files to keep
DEFAULT_MAX_UPLOAD_MB = 2           # Request body cap in megabytes
DEFAULT_MAX_UPLOAD_BYTES = DEFAULT_MAX_UPLOAD_MB * 1024 * 1024

APP_NAME = "JDSnapshotDiff"


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == 'true'


# =============================================================================
# ENVIRONMENT CONFIGURATION
# =============================================================================

@dataclass
class AppConfig:
    """Application configuration with secure defaults."""

    # Server settings
    host: str = "127.0.0.1"  # Localhost only by default
    port: int = DEFAULT_PORT
    debug: bool = False

    # Security settings
    secret_key: str = field(default_factory=lambda: os.environ.get('JDS_SECRET_KEY', ''))
    csrf_enabled: bool = True
    max_content_length: int = DEFAULT_MAX_UPLOAD_BYTES

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # Options: json, text
    log_to_file: bool = False
    log_to_console: bool = True
    log_dir: Path = field(default_factory=lambda: Path.cwd() / 'logs')

    def __post_init__(self):
        """Normalize and secure configuration."""
        self.log_dir = Path(self.log_dir)
        if self.log_to_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        if not self.secret_key:
            self.secret_key = self._generate_secret_key()

        # Force debug=False in production environment
        if os.environ.get('JDS_ENV', 'development').lower() == 'production':
            self.debug = False
            self.log_level = "WARNING"

    @staticmethod
    def _generate_secret_key() -> str:
        """Generate a secure secret key."""
        import secrets
        return secrets.token_hex(32)

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """Load configuration from environment variables."""
        return cls(
            host=os.environ.get('JDS_HOST', '127.0.0.1'),
            port=int(os.environ.get('JDS_PORT', str(DEFAULT_PORT))),
            debug=_env_flag('JDS_DEBUG', 'false'),
            secret_key=os.environ.get('JDS_SECRET_KEY', ''),
            csrf_enabled=_env_flag('JDS_CSRF', 'true'),
            max_content_length=int(os.environ.get('JDS_MAX_UPLOAD', str(DEFAULT_MAX_UPLOAD_BYTES))),
            log_level=os.environ.get('JDS_LOG_LEVEL', 'INFO'),
            log_format=os.environ.get('JDS_LOG_FORMAT', 'json'),
            log_to_file=_env_flag('JDS_LOG_TO_FILE', 'false'),
            log_dir=Path(os.environ.get('JDS_LOG_DIR', str(Path.cwd() / 'logs'))),
        )

    def validate(self) -> tuple:
        """Validate configuration and return (is_valid, errors)."""
        errors = []

        if self.debug and os.environ.get('JDS_ENV') == 'production':
            errors.append("Debug mode cannot be enabled in production")

        if len(self.secret_key) < MIN_SECRET_KEY_LENGTH:
            errors.append(f"Secret key must be at least {MIN_SECRET_KEY_LENGTH} characters")

        if self.max_content_length <= 0:
            errors.append(f"max_content_length must be positive, got {self.max_content_length}")

        if self.log_format not in ('json', 'text'):
            errors.append(f"Invalid log_format: {self.log_format}. Must be 'json' or 'text'")

        if not hasattr(logging, self.log_level.upper()):
            errors.append(f"Invalid log_level: {self.log_level}")

        return (len(errors) == 0, errors)


# Global config instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get or create the global configuration."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config():
    """Reset the global configuration (for testing)."""
    global _config
    _config = None


# =============================================================================
# STRUCTURED LOGGING
# =============================================================================

class StructuredLogger:
    """Thread-safe structured logger with correlation IDs."""

    _local = threading.local()

    def __init__(self, name: str, config: Optional[AppConfig] = None):
        self.name = name
        self.config = config or get_config()
        self._setup_logger()

    def _setup_logger(self):
        """Configure the underlying Python logger."""
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(getattr(logging, self.config.log_level.upper(), logging.INFO))
        self.logger.handlers.clear()
        self.logger.propagate = False

        if self.config.log_format == 'json':
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(
                '%(asctime)s [%(levelname)s] %(name)s - %(message)s'
            )

        if self.config.log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        # Rotating file handler keeps log_dir bounded
        if self.config.log_to_file:
            from logging.handlers import RotatingFileHandler
            log_file = self.config.log_dir / f"{self.name.lower()}.log"
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    @classmethod
    def set_correlation_id(cls, correlation_id: str):
        """Set correlation ID for current thread."""
        cls._local.correlation_id = correlation_id

    @classmethod
    def get_correlation_id(cls) -> str:
        """Get correlation ID for current thread."""
        return getattr(cls._local, 'correlation_id', None) or str(uuid.uuid4())[:8]

    @classmethod
    def new_correlation_id(cls) -> str:
        """Generate and set a new correlation ID."""
        correlation_id = str(uuid.uuid4())[:12]
        cls.set_correlation_id(correlation_id)
        return correlation_id

    def _extra(self, **kwargs) -> Dict[str, Any]:
        return {'correlation_id': self.get_correlation_id(), **kwargs}

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self.logger.debug(message, extra=self._extra(**kwargs))

    def info(self, message: str, **kwargs):
        """Log info message."""
        self.logger.info(message, extra=self._extra(**kwargs))

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self.logger.warning(message, extra=self._extra(**kwargs))

    def error(self, message: str, exc_info: bool = False, **kwargs):
        """Log error message with optional exception info."""
        self.logger.error(message, exc_info=exc_info, extra=self._extra(**kwargs))

    def exception(self, message: str, **kwargs):
        """Log exception with full traceback."""
        self.error(message, exc_info=True, **kwargs)

    @contextmanager
    def log_operation(self, operation: str, **context):
        """Context manager for logging operation start/end with timing."""
        start_time = time.time()
        self.debug(f"{operation} started", operation=operation, status='started', **context)
        try:
            yield
            duration_ms = (time.time() - start_time) * 1000
            self.info(f"{operation} completed", operation=operation, status='completed',
                      duration_ms=round(duration_ms, 2), **context)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self.error(f"{operation} failed: {e}", operation=operation, status='failed',
                       duration_ms=round(duration_ms, 2), exc_info=True, **context)
            raise


# LogRecord attributes that are not user-supplied extras
_RESERVED_RECORD_KEYS = frozenset((
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'pathname', 'process', 'processName', 'relativeCreated',
    'stack_info', 'thread', 'threadName', 'exc_info', 'exc_text',
    'message', 'taskName',
))


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log_data['traceback'] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name, get_config())


# =============================================================================
# ERROR HANDLING
# =============================================================================

class SnapshotDiffError(Exception):
    """Base exception for JD snapshot comparison."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR",
                 status_code: int = 500, details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API response dict."""
        return {
            'success': False,
            'error': {
                'code': self.code,
                'message': self.message,
                'details': self.details
            }
        }


class ValidationError(SnapshotDiffError):
    """Input validation error."""
    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400,
                         details={'field': field, **kwargs})
