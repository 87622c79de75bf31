"""Configuration management for retrolambda-runner."""

from retrolambda_runner.core.config.loader import ConfigLoader
from retrolambda_runner.core.config.settings import (
    LoggingSettings,
    RunnerSettings,
    Settings,
    ToolchainSettings,
    get_settings,
)

__all__ = [
    "ConfigLoader",
    "Settings",
    "RunnerSettings",
    "ToolchainSettings",
    "LoggingSettings",
    "get_settings",
]
