"""Data models module."""

from retrolambda_runner.models.execution import ExecutionResult, InvocationPlan
from retrolambda_runner.models.parameters import (
    REQUIRED_JAVA_MAJOR,
    TARGET_BYTECODE_VERSIONS,
    BuildConfig,
    ProcessParameters,
    RetrolambdaProperty,
)
from retrolambda_runner.models.project import Goal, ProjectLayout
from retrolambda_runner.models.runtime import (
    HostRuntime,
    RuntimeCandidate,
    RuntimeSource,
    Toolchain,
)

__all__ = [
    "BuildConfig",
    "ProcessParameters",
    "RetrolambdaProperty",
    "TARGET_BYTECODE_VERSIONS",
    "REQUIRED_JAVA_MAJOR",
    "Goal",
    "ProjectLayout",
    "HostRuntime",
    "Toolchain",
    "RuntimeCandidate",
    "RuntimeSource",
    "ExecutionResult",
    "InvocationPlan",
]
