"""Retrolambda processing.

This module provides:
- Validation of build parameters
- Java runtime resolution from toolchains and the host
- Retrieval of the Retrolambda jar
- In-process and forked execution
"""

from retrolambda_runner.process.artifacts import (
    AcquisitionStatus,
    ArtifactAcquirer,
    ArtifactCoordinates,
    ArtifactRepository,
    LocalRepository,
    MavenDependencyCopier,
)
from retrolambda_runner.process.backends import (
    EmbeddedBackend,
    ForkedBackend,
    ProcessingBackend,
)
from retrolambda_runner.process.resolver import ResolutionContext, resolve_java_command
from retrolambda_runner.process.runner import RetrolambdaRunner
from retrolambda_runner.process.toolchains import ToolchainRegistry
from retrolambda_runner.process.validation import validate

__all__ = [
    "validate",
    "ToolchainRegistry",
    "ResolutionContext",
    "resolve_java_command",
    "AcquisitionStatus",
    "ArtifactAcquirer",
    "ArtifactCoordinates",
    "ArtifactRepository",
    "LocalRepository",
    "MavenDependencyCopier",
    "ProcessingBackend",
    "EmbeddedBackend",
    "ForkedBackend",
    "RetrolambdaRunner",
]
