"""In-process Retrolambda backend."""

import importlib
import time
from collections.abc import Callable, Mapping
from typing import Any

from retrolambda_runner.core.exceptions.errors import EmbeddedInvocationError
from retrolambda_runner.core.logger.logger import get_logger
from retrolambda_runner.models.execution import ExecutionResult
from retrolambda_runner.models.parameters import BuildConfig
from retrolambda_runner.process.backends.base import ProcessingBackend

logger = get_logger(__name__)

EntryPoint = Callable[[dict[str, str]], Any]


def load_entry_point(spec: str) -> EntryPoint:
    """Load a ``module:attribute`` entry point.

    Raises:
        ImportError: If the module cannot be imported.
        AttributeError: If the attribute does not exist.
        TypeError: If the spec is malformed or the attribute is not callable.
    """
    module_name, sep, attribute = spec.partition(":")
    if not sep or not module_name or not attribute:
        raise TypeError(f"Entry point must look like 'module:callable', got {spec!r}")

    target: Any = importlib.import_module(module_name)
    for part in attribute.split("."):
        target = getattr(target, part)

    if not callable(target):
        raise TypeError(f"Entry point {spec!r} is not callable")
    return target


class EmbeddedBackend(ProcessingBackend):
    """Runs Retrolambda through an entry point loaded at run time.

    The entry point is called with a plain dict of Retrolambda properties and
    transforms the input directory in place.
    """

    name = "embedded"
    description = "Runs Retrolambda inside the current process"

    def __init__(self, entry_point: str | EntryPoint) -> None:
        """Initialize the backend.

        Args:
            entry_point: A callable, or a 'module:callable' string resolved
                when the backend runs.
        """
        self.entry_point = entry_point

    @property
    def entry_point_name(self) -> str:
        if isinstance(self.entry_point, str):
            return self.entry_point
        module = getattr(self.entry_point, "__module__", None) or "?"
        return f"{module}:{getattr(self.entry_point, '__qualname__', repr(self.entry_point))}"

    def _invoke(self, properties: Mapping[str, str]) -> None:
        if isinstance(self.entry_point, str):
            function = load_entry_point(self.entry_point)
        else:
            function = self.entry_point
        function(dict(properties))

    def run(self, config: BuildConfig) -> ExecutionResult:
        logger.info("Processing classes with Retrolambda")
        start_time = time.time()

        try:
            self._invoke(config.to_properties())
        except Exception as e:
            raise EmbeddedInvocationError(
                f"Failed to run Retrolambda: {e}",
                entry_point=self.entry_point_name,
            ) from e

        return ExecutionResult.success_result(
            backend=self.name,
            duration_seconds=time.time() - start_time,
        )
