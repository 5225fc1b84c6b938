"""
Configuration module for the result export tool.

Centralizes all settings and environment variables for easy configuration.
The export engine itself only takes its per-call parameters (document, role,
language, format); these settings feed the CLI, the web UI and renderer
construction.

Usage:
    from config import config

    print(config.output_dir)
    print(config.excel_constant_memory)
"""

import os
from dataclasses import dataclass


TRUE_VALUES = ("1", "true", "yes", "on")


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES


@dataclass
class Config:
    """
    Application configuration loaded from environment variables.

    All settings can be overridden via environment variables.
    """

    # Export Settings
    default_language: str = "en"
    output_dir: str = "exports"
    excel_constant_memory: bool = True

    # Source Loading Settings
    source_fetch_timeout: int = 30  # seconds
    source_max_bytes: int = 50 * 1024 * 1024  # 50MB

    # Web UI Settings
    web_ui_host: str = "127.0.0.1"
    web_ui_port: int = 7860

    # Logging Settings
    log_level: str = "INFO"

    def __post_init__(self):
        """Load configuration from environment variables."""
        # Export
        self.default_language = os.environ.get("EXPORT_DEFAULT_LANGUAGE", "en")
        self.output_dir = os.environ.get("EXPORT_OUTPUT_DIR", "exports")
        self.excel_constant_memory = _env_bool("EXCEL_CONSTANT_MEMORY", True)

        # Source loading
        self.source_fetch_timeout = int(os.environ.get("SOURCE_FETCH_TIMEOUT", "30"))
        self.source_max_bytes = int(os.environ.get("SOURCE_MAX_BYTES", str(50 * 1024 * 1024)))

        # Web UI
        self.web_ui_host = os.environ.get("WEB_UI_HOST", "127.0.0.1")
        self.web_ui_port = int(os.environ.get("WEB_UI_PORT", "7860"))

        # Logging
        self.log_level = os.environ.get("LOG_LEVEL", "INFO")

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of issues.

        Returns:
            List of configuration issues (empty if valid)
        """
        issues = []

        if self.default_language.strip().lower() not in ("en", "ar"):
            issues.append(
                f"EXPORT_DEFAULT_LANGUAGE should be 'en' or 'ar', got {self.default_language!r} (falls back to en)"
            )

        if self.source_fetch_timeout < 1:
            issues.append(f"SOURCE_FETCH_TIMEOUT must be at least 1 second, got {self.source_fetch_timeout}")

        if self.source_max_bytes < 1:
            issues.append(f"SOURCE_MAX_BYTES must be positive, got {self.source_max_bytes}")

        if not 0 < self.web_ui_port < 65536:
            issues.append(f"WEB_UI_PORT must be between 1 and 65535, got {self.web_ui_port}")

        return issues

    def to_dict(self) -> dict:
        """Convert configuration to dictionary (safe for logging)."""
        return {
            "default_language": self.default_language,
            "output_dir": self.output_dir,
            "excel_constant_memory": self.excel_constant_memory,
            "source_fetch_timeout": self.source_fetch_timeout,
            "source_max_bytes": self.source_max_bytes,
            "web_ui_host": self.web_ui_host,
            "web_ui_port": self.web_ui_port,
            "log_level": self.log_level,
        }


# Global configuration instance
config = Config()


def get_config() -> Config:
    """Get the global configuration instance."""
    return config


def reload_config() -> Config:
    """Reload configuration from environment variables."""
    global config
    config = Config()
    return config
