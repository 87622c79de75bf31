"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import pytest

from retrolambda_runner.core.config.settings import (
    LoggingSettings,
    RunnerSettings,
    Settings,
    ToolchainSettings,
)
from retrolambda_runner.models.project import ProjectLayout
from retrolambda_runner.models.runtime import HostRuntime


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test.

    Yields:
        Path to the temporary directory.
    """
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def make_jdk(temp_dir: Path) -> Callable[..., Path]:
    """Return a factory creating fake JDK homes with a bin/java launcher.

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        Factory taking a directory name and optional JAVA_VERSION.
    """

    def factory(name: str, version: str | None = None, launcher: bool = True) -> Path:
        home = temp_dir / name
        (home / "bin").mkdir(parents=True)
        if launcher:
            (home / "bin" / "java").write_text("#!/bin/sh\n")
        if version:
            (home / "release").write_text(f'JAVA_VERSION="{version}"\nOS_NAME="Linux"\n')
        return home

    return factory


@pytest.fixture
def java8_host(temp_dir: Path) -> HostRuntime:
    """Host runtime that can run Retrolambda in-process."""
    return HostRuntime(java_home=temp_dir / "host-jdk", version="1.8.0_292")


@pytest.fixture
def java7_host(temp_dir: Path) -> HostRuntime:
    """Host runtime too old to run Retrolambda in-process."""
    return HostRuntime(java_home=temp_dir / "host-jdk7", version="1.7.0_80")


@pytest.fixture
def project(temp_dir: Path) -> ProjectLayout:
    """Project layout rooted in the temporary directory."""
    return ProjectLayout(
        base_dir=temp_dir / "project",
        compile_classpath=["/repo/guava.jar", "/repo/commons-lang.jar"],
        test_classpath=["/repo/junit.jar"],
    )


@pytest.fixture
def settings(temp_dir: Path) -> Settings:
    """Settings isolated from the user's ~/.m2 and environment.

    Args:
        temp_dir: Temporary directory fixture.

    Returns:
        Settings instance.
    """
    return Settings(
        runner=RunnerSettings(
            embedded_entry_point="retrolambda:run",
            artifact_source="local",
            local_repository=temp_dir / "m2",
            retrolambda_version="2.5.8",
        ),
        toolchain=ToolchainSettings(toolchains_file=None, build_context_version=None),
        logging=LoggingSettings(level="DEBUG", use_rich=False),
    )
