"""
Design Toolkit
Configuration classes.

Only the ambient helpers (logging setup, guidance display defaults) read
these values. The evaluators take explicit arguments and never consult the
environment.

Usage:
    from design_toolkit.config import get_config
    cfg = get_config()             # APP_ENV, defaults to "development"
    cfg = get_config("testing")
"""

import os

from design_toolkit.core.exceptions import ConfigError


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer", details={name: raw}) from None


class Config:
    """Base configuration shared across all environments."""

    DEBUG = False
    TESTING = False

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT = os.getenv("LOG_FORMAT", "json")  # json | readable

    # Guidance display
    DEFAULT_GUIDANCE_EXCERPT_LENGTH = 300
    GUIDANCE_STORAGE_BASE_URL = os.getenv(
        "GUIDANCE_STORAGE_BASE_URL", "https://storage.googleapis.com"
    )

    def __init__(self):
        # Read on instantiation; importing this module never parses it
        self.GUIDANCE_EXCERPT_LENGTH = _int_env(
            "GUIDANCE_EXCERPT_LENGTH", self.DEFAULT_GUIDANCE_EXCERPT_LENGTH
        )


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    LOG_FORMAT = os.getenv("LOG_FORMAT", "readable")


class TestingConfig(Config):
    """Testing environment configuration."""

    TESTING = True
    LOG_LEVEL = "WARNING"
    LOG_FORMAT = "readable"


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG = False

    def __init__(self):
        super().__init__()
        if self.GUIDANCE_EXCERPT_LENGTH <= 0:
            raise ConfigError(
                "GUIDANCE_EXCERPT_LENGTH must be positive in production",
                details={"GUIDANCE_EXCERPT_LENGTH": self.GUIDANCE_EXCERPT_LENGTH},
            )


# Configuration mapping: environment name -> config class
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(name: str | None = None) -> Config:
    """Instantiate the config class for ``name`` (or APP_ENV)."""
    name = name or os.getenv("APP_ENV", "default")
    try:
        return config[name]()
    except KeyError:
        raise ConfigError(
            f"Unknown configuration '{name}'",
            details={"name": name, "allowed": sorted(config)},
        ) from None
