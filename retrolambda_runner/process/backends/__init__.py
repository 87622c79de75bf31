"""Processing backends: in-process and forked JVM."""

from retrolambda_runner.process.backends.base import ProcessingBackend
from retrolambda_runner.process.backends.embedded import EmbeddedBackend, load_entry_point
from retrolambda_runner.process.backends.forked import ForkedBackend, build_invocation_plan

__all__ = [
    "ProcessingBackend",
    "EmbeddedBackend",
    "ForkedBackend",
    "build_invocation_plan",
    "load_entry_point",
]
