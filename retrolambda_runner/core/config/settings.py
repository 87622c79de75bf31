"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from retrolambda_runner.core.config.loader import DEFAULT_CONFIG_PATH, ConfigLoader


def _optional_path(v: str | Path | None) -> Path | None:
    if v is None or v == "":
        return None
    return Path(v).expanduser()


class RunnerSettings(BaseSettings):
    """How Retrolambda is obtained and invoked."""

    model_config = SettingsConfigDict(
        env_prefix="RETROLAMBDA_RUNNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    embedded_entry_point: str = Field(
        default="retrolambda:run",
        description="module:callable invoked when processing in-process",
    )
    artifact_source: Literal["local", "maven"] = Field(
        default="local",
        description="Where retrolambda.jar is copied from",
    )
    local_repository: Path = Field(
        default_factory=lambda: Path.home() / ".m2" / "repository",
        description="Maven local repository used by the 'local' source",
    )
    maven_executable: str = Field(
        default="mvn",
        description="Maven command used by the 'maven' source",
    )
    retrolambda_version: str | None = Field(
        default=None,
        description="Override for the Retrolambda version to retrieve",
    )

    @field_validator("local_repository", mode="before")
    @classmethod
    def validate_local_repository(cls, v: str | Path) -> Path:
        """Expand '~' in the repository path."""
        return Path(v).expanduser()


class ToolchainSettings(BaseSettings):
    """Managed JDK toolchain settings."""

    model_config = SettingsConfigDict(
        env_prefix="RETROLAMBDA_TOOLCHAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    toolchains_file: Path | None = Field(
        default_factory=lambda: Path.home() / ".m2" / "toolchains.xml",
        description="Maven toolchains.xml to read JDK toolchains from",
    )
    build_context_version: str | None = Field(
        default=None,
        description="JDK version selected as the build-context toolchain",
    )

    @field_validator("toolchains_file", mode="before")
    @classmethod
    def validate_toolchains_file(cls, v: str | Path | None) -> Path | None:
        """Validate and convert toolchains_file to Path."""
        return _optional_path(v)


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="RETROLAMBDA_LOGGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Log level",
    )
    format: str = Field(
        default="[%(name)s] %(message)s",
        description="Log format string",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    use_rich: bool = Field(
        default=True,
        description="Use Rich console for output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v: str | None) -> Path | None:
        """Validate and convert file to Path."""
        return _optional_path(v)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="RETROLAMBDA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    runner: RunnerSettings = Field(default_factory=RunnerSettings)
    toolchain: ToolchainSettings = Field(default_factory=ToolchainSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Settings instance with values from YAML.
        """
        loader = ConfigLoader(path)
        loader.load()

        return cls(
            runner=RunnerSettings(**loader.get_section("runner")),
            toolchain=ToolchainSettings(**loader.get_section("toolchain")),
            logging=LoggingSettings(**loader.get_section("logging")),
        )

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from default locations.

        Values from config/default.yaml take precedence over environment
        variables and .env, which take precedence over defaults.

        Returns:
            Settings instance.
        """
        if DEFAULT_CONFIG_PATH.exists():
            return cls.from_yaml(DEFAULT_CONFIG_PATH)

        return cls()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings singleton.
    """
    return Settings.load()
