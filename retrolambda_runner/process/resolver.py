"""Selection of the Java runtime used for forked Retrolambda runs.

Resolution walks an ordered chain of resolver functions; the first one that
returns a candidate wins:

1. the explicit ``java8home`` parameter
2. a managed JDK toolchain providing version ``1.8``
3. a managed JDK toolchain providing version ``8``
4. the JDK toolchain selected for the build
5. the host runtime

The chain always ends with the host runtime, so resolution never fails.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from retrolambda_runner.core.logger.logger import get_logger
from retrolambda_runner.models.runtime import (
    HostRuntime,
    RuntimeCandidate,
    RuntimeSource,
    Toolchain,
    java_executable,
)
from retrolambda_runner.process.toolchains import ToolchainRegistry

logger = get_logger(__name__)

JDK = "jdk"
TOOLCHAIN_VERSIONS = ("1.8", "8")


@dataclass(frozen=True)
class ResolutionContext:
    """Everything runtime resolution depends on."""

    java8home: Path | None = None
    toolchains: ToolchainRegistry = field(default_factory=ToolchainRegistry)
    host: HostRuntime = field(default_factory=HostRuntime)
    platform: str | None = None


Resolver = Callable[[ResolutionContext], RuntimeCandidate | None]


def _toolchain_candidate(
    tc: Toolchain,
    source: RuntimeSource,
    platform: str | None,
) -> RuntimeCandidate | None:
    java = tc.find_tool("java", platform)
    if java is None:
        return None
    return RuntimeCandidate(executable=str(java), source=source, toolchain=str(tc))


def _managed_toolchain(version: str) -> Resolver:
    def resolve(context: ResolutionContext) -> RuntimeCandidate | None:
        for tc in context.toolchains.find(JDK, {"version": version}):
            candidate = _toolchain_candidate(tc, RuntimeSource.TOOLCHAIN, context.platform)
            if candidate is not None:
                return candidate
        return None

    resolve.__name__ = f"managed_toolchain_{version.replace('.', '_')}"
    return resolve


def build_context_toolchain(context: ResolutionContext) -> RuntimeCandidate | None:
    """Use the JDK toolchain selected for the build."""
    tc = context.toolchains.build_context(JDK)
    if tc is None:
        return None
    return _toolchain_candidate(tc, RuntimeSource.BUILD_CONTEXT, context.platform)


TOOLCHAIN_RESOLVERS: tuple[Resolver, ...] = (
    *(_managed_toolchain(version) for version in TOOLCHAIN_VERSIONS),
    build_context_toolchain,
)


def explicit_java_home(context: ResolutionContext) -> RuntimeCandidate | None:
    """Use the ``java8home`` parameter, overriding any toolchain."""
    if context.java8home is None:
        return None

    if any(resolver(context) is not None for resolver in TOOLCHAIN_RESOLVERS):
        logger.warning(f"Toolchains are ignored, 'java8home' parameter is set to {context.java8home}")

    return RuntimeCandidate(
        executable=str(java_executable(context.java8home, context.platform)),
        source=RuntimeSource.EXPLICIT,
    )


def host_runtime(context: ResolutionContext) -> RuntimeCandidate:
    """Use the runtime the build itself runs on."""
    if context.host.java_home is None:
        return RuntimeCandidate(executable="java", source=RuntimeSource.HOST)
    return RuntimeCandidate(
        executable=str(java_executable(context.host.java_home, context.platform)),
        source=RuntimeSource.HOST,
    )


DEFAULT_RESOLVERS: tuple[Resolver, ...] = (
    explicit_java_home,
    *TOOLCHAIN_RESOLVERS,
)


def resolve_java_command(
    context: ResolutionContext,
    resolvers: Sequence[Resolver] = DEFAULT_RESOLVERS,
) -> RuntimeCandidate:
    """Return the Java executable to fork Retrolambda with.

    Args:
        context: Parameters, toolchains and host runtime to resolve from.
        resolvers: Resolver chain tried before the host runtime fallback.

    Returns:
        The first candidate found, or the host runtime.
    """
    for resolver in resolvers:
        candidate = resolver(context)
        if candidate is not None:
            if candidate.toolchain:
                logger.info(f"Toolchain in retrolambda-runner: {candidate.toolchain}")
            return candidate

    return host_runtime(context)
