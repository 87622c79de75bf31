"""
Base Backend - Abstract base class for Retrolambda processing backends.

A backend receives a validated BuildConfig and transforms the classes of its
input directory, either inside this process or in a forked JVM.
"""

from abc import ABC, abstractmethod

from retrolambda_runner.models.execution import ExecutionResult
from retrolambda_runner.models.parameters import BuildConfig


class ProcessingBackend(ABC):
    """
    Abstract base class for processing backends.

    Implementations raise a RetrolambdaError subclass on failure and return
    an ExecutionResult otherwise.
    """

    # Backend metadata (override in subclasses)
    name: str = "base"
    description: str = "Base processing backend"

    @abstractmethod
    def run(self, config: BuildConfig) -> ExecutionResult:
        """
        Process the classes described by ``config``.

        Args:
            config: Validated build configuration.

        Returns:
            ExecutionResult describing the run.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name={self.name!r})>"
