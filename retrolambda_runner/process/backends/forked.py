"""Forked-JVM Retrolambda backend."""

import subprocess
import time
from collections.abc import Callable
from pathlib import Path

from retrolambda_runner.core.exceptions.errors import ForkedProcessError
from retrolambda_runner.core.logger.logger import get_logger
from retrolambda_runner.models.execution import ExecutionResult, InvocationPlan
from retrolambda_runner.models.parameters import BuildConfig, RetrolambdaProperty
from retrolambda_runner.process.artifacts import AcquisitionStatus, ArtifactAcquirer
from retrolambda_runner.process.backends.base import ProcessingBackend
from retrolambda_runner.process.classpath import classpath_file

logger = get_logger(__name__)


def build_invocation_plan(
    config: BuildConfig,
    java_command: str,
    retrolambda_jar: Path,
    classpath_path: Path,
) -> InvocationPlan:
    """Build the command line for a forked run.

    The classpath property is replaced by a pointer to ``classpath_path`` so
    the command line stays short.
    """
    arguments: list[str] = []
    for key, value in config.to_properties().items():
        if key == RetrolambdaProperty.CLASSPATH:
            key, value = RetrolambdaProperty.CLASSPATH_FILE, str(classpath_path)
        arguments.append(f"-D{key}={value}")

    arguments.extend(
        [
            f"-javaagent:{retrolambda_jar}",
            "-jar",
            str(retrolambda_jar),
        ]
    )
    return InvocationPlan(
        executable=java_command,
        arguments=arguments,
        classpath_file=classpath_path,
        retrolambda_jar=retrolambda_jar,
    )


class ForkedBackend(ProcessingBackend):
    """Runs retrolambda.jar in a separate JVM with a Java agent attached.

    This class handles:
    - Retrieving the Retrolambda jar into the build directory
    - Writing the classpath to a temporary file
    - Running the JVM and capturing its output
    - Removing the classpath file afterwards
    """

    name = "forked"
    description = "Runs Retrolambda in a forked JVM"

    def __init__(
        self,
        acquirer: ArtifactAcquirer,
        java_command: str | Callable[[], str],
        retrolambda_version: str,
        temp_dir: Path | None = None,
    ) -> None:
        """Initialize the backend.

        Args:
            acquirer: Provides retrolambda.jar.
            java_command: Java launcher to run, or a function returning it.
                A function is only called once the jar is present.
            retrolambda_version: Version of Retrolambda to retrieve.
            temp_dir: Directory for the classpath file (default: system temp dir).
        """
        self.acquirer = acquirer
        self._java_command = java_command
        self.retrolambda_version = retrolambda_version
        self.temp_dir = temp_dir

    @property
    def java_command(self) -> str:
        """Return the Java launcher, resolving it on first use."""
        if callable(self._java_command):
            self._java_command = self._java_command()
        return self._java_command

    def run(self, config: BuildConfig) -> ExecutionResult:
        status = self.acquirer.ensure_present(self.retrolambda_version)
        if status == AcquisitionStatus.NOT_PUBLISHED:
            return ExecutionResult.skipped_result(
                f"Retrolambda {self.retrolambda_version} has not been packaged yet",
                backend=self.name,
            )

        logger.info("Processing classes with Retrolambda")
        with classpath_file(config.classpath, self.temp_dir) as path:
            plan = build_invocation_plan(
                config,
                self.java_command,
                self.acquirer.jar_path,
                path,
            )
            return self._execute(plan)

    def _execute(self, plan: InvocationPlan) -> ExecutionResult:
        command = plan.command
        logger.debug(f"Executing: {' '.join(command)}")
        start_time = time.time()

        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise ForkedProcessError(
                f"Failed to start {plan.executable}: {e}",
                command=command,
            ) from e

        duration = time.time() - start_time
        for line in completed.stdout.splitlines():
            logger.info(line)
        for line in completed.stderr.splitlines():
            logger.warning(line)

        if completed.returncode != 0:
            raise ForkedProcessError(
                f"Retrolambda failed with exit code {completed.returncode}",
                command=command,
                return_code=completed.returncode,
                stdout=completed.stdout,
                stderr=completed.stderr,
            )

        return ExecutionResult.success_result(
            backend=self.name,
            duration_seconds=duration,
            command=command,
            return_code=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
