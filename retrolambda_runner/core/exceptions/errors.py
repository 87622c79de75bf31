"""Custom exception definitions for retrolambda-runner."""

from typing import Any


class RetrolambdaError(Exception):
    """Base exception for all retrolambda-runner errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(RetrolambdaError):
    """Exception raised for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message.
            config_key: Configuration key that caused the error.
            details: Additional error details.
        """
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)


class ConfigValidationError(ConfigurationError):
    """Raised when build parameters are rejected before any execution."""


class ToolchainError(RetrolambdaError):
    """Exception raised when managed toolchains cannot be read."""

    def __init__(
        self,
        message: str,
        toolchains_file: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if toolchains_file:
            details["toolchains_file"] = toolchains_file
        super().__init__(message, details)


class ArtifactRetrievalError(RetrolambdaError):
    """Exception raised when the Retrolambda jar cannot be retrieved."""

    def __init__(
        self,
        message: str,
        coordinates: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize artifact retrieval error.

        Args:
            message: Error message.
            coordinates: groupId:artifactId:version of the artifact.
            details: Additional error details.
        """
        details = details or {}
        if coordinates:
            details["coordinates"] = coordinates
        super().__init__(message, details)


class ArtifactNotPublishedError(ArtifactRetrievalError):
    """The artifact does not exist yet for this version of the build."""


class ForkedProcessError(RetrolambdaError):
    """Exception raised when the forked Retrolambda process fails."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        return_code: int | None = None,
        stdout: str = "",
        stderr: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize forked process error.

        Args:
            message: Error message.
            command: Command line that was executed.
            return_code: Exit code of the process, None if it never started.
            stdout: Captured standard output.
            stderr: Captured standard error.
            details: Additional error details.
        """
        details = details or {}
        if return_code is not None:
            details["return_code"] = return_code
        super().__init__(message, details)
        self.command = command or []
        self.return_code = return_code
        self.stdout = stdout
        self.stderr = stderr


class EmbeddedInvocationError(RetrolambdaError):
    """Exception raised when the in-process entry point fails."""

    def __init__(
        self,
        message: str,
        entry_point: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if entry_point:
            details["entry_point"] = entry_point
        super().__init__(message, details)


class ClasspathFileError(RetrolambdaError):
    """Exception raised when the classpath file for a forked run cannot be written."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, details)
