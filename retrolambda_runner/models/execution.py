"""Execution-related data models."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class InvocationPlan(BaseModel):
    """Command line for one forked Retrolambda run."""

    executable: str = Field(description="Java launcher to run")
    arguments: list[str] = Field(default_factory=list, description="Launcher arguments")
    classpath_file: Path = Field(description="Temporary file listing the classpath")
    retrolambda_jar: Path = Field(description="Retrolambda jar used as agent and main jar")

    @property
    def command(self) -> list[str]:
        """Return the full command line."""
        return [self.executable, *self.arguments]


class ExecutionResult(BaseModel):
    """Outcome of a processing run.

    Failures are raised as exceptions, so a result is either a success or a
    skip.
    """

    success: bool = Field(default=True, description="Whether processing completed")
    skipped: bool = Field(default=False, description="Whether processing was skipped")
    skip_reason: str | None = Field(default=None, description="Why processing was skipped")
    backend: str | None = Field(default=None, description="Backend that did the work")
    command: list[str] | None = Field(default=None, description="Forked command line")
    return_code: int | None = Field(default=None, description="Exit code of the forked process")
    stdout: str = Field(default="", description="Captured standard output")
    stderr: str = Field(default="", description="Captured standard error")
    duration_seconds: float = Field(default=0.0, description="Wall time of the run")

    @classmethod
    def success_result(
        cls,
        backend: str,
        duration_seconds: float = 0.0,
        **fields: Any,
    ) -> "ExecutionResult":
        """Create a successful execution result."""
        return cls(success=True, backend=backend, duration_seconds=duration_seconds, **fields)

    @classmethod
    def skipped_result(cls, reason: str, backend: str | None = None) -> "ExecutionResult":
        """Create a result for a run that did nothing."""
        return cls(success=True, skipped=True, skip_reason=reason, backend=backend)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "success": self.success,
            "skipped": self.skipped,
            "skip_reason": self.skip_reason,
            "backend": self.backend,
            "command": self.command,
            "return_code": self.return_code,
            "duration_seconds": self.duration_seconds,
        }
