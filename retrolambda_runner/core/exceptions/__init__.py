"""Exception definitions module."""

from retrolambda_runner.core.exceptions.errors import (
    ArtifactNotPublishedError,
    ArtifactRetrievalError,
    ClasspathFileError,
    ConfigurationError,
    ConfigValidationError,
    EmbeddedInvocationError,
    ForkedProcessError,
    RetrolambdaError,
    ToolchainError,
)

__all__ = [
    "RetrolambdaError",
    "ConfigurationError",
    "ConfigValidationError",
    "ToolchainError",
    "ArtifactRetrievalError",
    "ArtifactNotPublishedError",
    "ClasspathFileError",
    "ForkedProcessError",
    "EmbeddedInvocationError",
]
