"""Tests for Java runtime resolution."""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from retrolambda_runner.models.runtime import (
    HostRuntime,
    RuntimeCandidate,
    RuntimeSource,
    Toolchain,
)
from retrolambda_runner.process.resolver import (
    JDK,
    ResolutionContext,
    explicit_java_home,
    resolve_java_command,
)
from retrolambda_runner.process.toolchains import ToolchainRegistry

IGNORED_WARNING = "Toolchains are ignored"


def jdk_toolchain(home: Path, version: str) -> Toolchain:
    return Toolchain(type=JDK, provides={"version": version}, home=home)


class TestPriority:
    """Tests for the order in which runtime sources are consulted."""

    def test_explicit_override_beats_toolchain(
        self,
        make_jdk: Callable[..., Path],
        java8_host: HostRuntime,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test that java8home wins over a matching toolchain and warns."""
        registry = ToolchainRegistry([jdk_toolchain(make_jdk("tc-jdk8"), "1.8")])
        explicit = Path("/opt/explicit-jdk")
        context = ResolutionContext(
            java8home=explicit,
            toolchains=registry,
            host=java8_host,
            platform="linux",
        )

        with caplog.at_level(logging.WARNING):
            candidate = resolve_java_command(context)

        assert candidate.source == RuntimeSource.EXPLICIT
        assert candidate.executable == str(explicit / "bin" / "java")
        assert IGNORED_WARNING in caplog.text
        assert str(explicit) in caplog.text

    def test_toolchain_beats_host(
        self,
        make_jdk: Callable[..., Path],
        java8_host: HostRuntime,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test that a matching toolchain is used when there is no override."""
        home = make_jdk("tc-jdk8")
        context = ResolutionContext(
            toolchains=ToolchainRegistry([jdk_toolchain(home, "1.8")]),
            host=java8_host,
            platform="linux",
        )

        with caplog.at_level(logging.INFO):
            candidate = resolve_java_command(context)

        assert candidate.source == RuntimeSource.TOOLCHAIN
        assert candidate.executable == str(home / "bin" / "java")
        assert candidate.toolchain == f"JDK[{home}]"
        assert "Toolchain in retrolambda-runner" in caplog.text
        assert IGNORED_WARNING not in caplog.text

    def test_host_when_nothing_else(self, java8_host: HostRuntime) -> None:
        """Test the host runtime fallback."""
        context = ResolutionContext(host=java8_host, platform="linux")

        candidate = resolve_java_command(context)

        assert candidate.source == RuntimeSource.HOST
        assert candidate.executable == str(java8_host.java_home / "bin" / "java")

    def test_host_without_home(self) -> None:
        """Test that resolution still succeeds without any known runtime."""
        candidate = resolve_java_command(ResolutionContext(host=HostRuntime()))

        assert candidate == RuntimeCandidate(executable="java", source=RuntimeSource.HOST)

    def test_exact_version_beats_alias(
        self,
        make_jdk: Callable[..., Path],
        java8_host: HostRuntime,
    ) -> None:
        """Test that a '1.8' toolchain is preferred over an '8' one."""
        alias_home = make_jdk("alias-jdk")
        exact_home = make_jdk("exact-jdk")
        registry = ToolchainRegistry(
            [jdk_toolchain(alias_home, "8"), jdk_toolchain(exact_home, "1.8")]
        )

        candidate = resolve_java_command(
            ResolutionContext(toolchains=registry, host=java8_host, platform="linux")
        )

        assert candidate.executable == str(exact_home / "bin" / "java")

    def test_alias_version(self, make_jdk: Callable[..., Path], java8_host: HostRuntime) -> None:
        """Test toolchains registered as version '8'."""
        home = make_jdk("alias-jdk")
        registry = ToolchainRegistry([jdk_toolchain(home, "8")])

        candidate = resolve_java_command(
            ResolutionContext(toolchains=registry, host=java8_host, platform="linux")
        )

        assert candidate.source == RuntimeSource.TOOLCHAIN
        assert candidate.executable == str(home / "bin" / "java")

    def test_toolchain_without_launcher_is_skipped(
        self,
        make_jdk: Callable[..., Path],
        java8_host: HostRuntime,
    ) -> None:
        """Test that a toolchain lacking bin/java falls through to the host."""
        registry = ToolchainRegistry([jdk_toolchain(make_jdk("broken", launcher=False), "1.8")])

        candidate = resolve_java_command(
            ResolutionContext(toolchains=registry, host=java8_host, platform="linux")
        )

        assert candidate.source == RuntimeSource.HOST

    def test_build_context_toolchain(
        self,
        make_jdk: Callable[..., Path],
        java8_host: HostRuntime,
    ) -> None:
        """Test the toolchain selected for the build."""
        home = make_jdk("jdk11")
        registry = ToolchainRegistry([jdk_toolchain(home, "11")])
        registry.select_for_build(JDK, {"version": "11"})

        candidate = resolve_java_command(
            ResolutionContext(toolchains=registry, host=java8_host, platform="linux")
        )

        assert candidate.source == RuntimeSource.BUILD_CONTEXT
        assert candidate.executable == str(home / "bin" / "java")

    def test_override_beats_build_context(
        self,
        make_jdk: Callable[..., Path],
        java8_host: HostRuntime,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test that java8home wins over the build-context toolchain."""
        registry = ToolchainRegistry([jdk_toolchain(make_jdk("jdk11"), "11")])
        registry.select_for_build(JDK, {"version": "11"})

        with caplog.at_level(logging.WARNING):
            candidate = resolve_java_command(
                ResolutionContext(
                    java8home=Path("/opt/jdk8"),
                    toolchains=registry,
                    host=java8_host,
                    platform="linux",
                )
            )

        assert candidate.source == RuntimeSource.EXPLICIT
        assert IGNORED_WARNING in caplog.text


class TestExplicitOverride:
    """Tests for the java8home resolver."""

    def test_no_warning_without_toolchains(
        self,
        java8_host: HostRuntime,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test that the override alone logs no warning."""
        with caplog.at_level(logging.WARNING):
            candidate = explicit_java_home(
                ResolutionContext(java8home=Path("/opt/jdk8"), host=java8_host, platform="linux")
            )

        assert candidate is not None
        assert IGNORED_WARNING not in caplog.text

    def test_unset(self, java8_host: HostRuntime) -> None:
        """Test that no candidate is produced without java8home."""
        assert explicit_java_home(ResolutionContext(host=java8_host)) is None

    def test_windows_launcher(self) -> None:
        """Test the launcher name on Windows."""
        candidate = explicit_java_home(
            ResolutionContext(java8home=Path("C:/jdk8"), platform="win32")
        )

        assert candidate is not None
        assert candidate.executable.endswith("java.exe")


class TestCustomChain:
    """Tests for supplying a custom resolver chain."""

    def test_first_match_wins(self, java8_host: HostRuntime) -> None:
        """Test that resolvers run in order and stop at the first match."""
        calls: list[str] = []

        def first(context: ResolutionContext) -> RuntimeCandidate | None:
            calls.append("first")
            return None

        def second(context: ResolutionContext) -> RuntimeCandidate | None:
            calls.append("second")
            return RuntimeCandidate(executable="/custom/java", source=RuntimeSource.EXPLICIT)

        def third(context: ResolutionContext) -> RuntimeCandidate | None:
            calls.append("third")
            return None

        candidate = resolve_java_command(
            ResolutionContext(host=java8_host),
            resolvers=[first, second, third],
        )

        assert candidate.executable == "/custom/java"
        assert calls == ["first", "second"]

    def test_empty_chain_falls_back_to_host(self, java8_host: HostRuntime) -> None:
        """Test that an empty chain still resolves to the host runtime."""
        candidate = resolve_java_command(ResolutionContext(host=java8_host), resolvers=[])
        assert candidate.source == RuntimeSource.HOST
