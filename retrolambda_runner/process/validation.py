"""Validation of build parameters into an immutable BuildConfig."""

from pathlib import Path

from retrolambda_runner.core.exceptions.errors import ConfigValidationError
from retrolambda_runner.core.logger.logger import get_logger
from retrolambda_runner.models.parameters import (
    REQUIRED_JAVA_MAJOR,
    TARGET_BYTECODE_VERSIONS,
    BuildConfig,
    ProcessParameters,
)
from retrolambda_runner.models.project import Goal, ProjectLayout
from retrolambda_runner.models.runtime import HostRuntime

logger = get_logger(__name__)


def validate_target(target: str) -> int:
    """Return the bytecode version for ``target``.

    Raises:
        ConfigValidationError: If the target is not supported.
    """
    try:
        return TARGET_BYTECODE_VERSIONS[target]
    except KeyError:
        possible_values = ", ".join(sorted(TARGET_BYTECODE_VERSIONS))
        raise ConfigValidationError(
            f"Unrecognized target '{target}'. Possible values are {possible_values}",
            config_key="target",
        ) from None


def resolve_fork(fork: bool, host: HostRuntime) -> bool:
    """Force forking when the host runtime cannot run Retrolambda in-process."""
    if not fork and not host.is_at_least(REQUIRED_JAVA_MAJOR):
        logger.warning(
            f"Host JVM is not running under Java {REQUIRED_JAVA_MAJOR} - forced to fork the process"
        )
        return True
    return fork


def _absolute(path: Path) -> Path:
    return path if path.is_absolute() else Path.cwd() / path


def validate(
    parameters: ProcessParameters,
    project: ProjectLayout,
    host: HostRuntime,
    goal: Goal = Goal.PROCESS_MAIN,
) -> BuildConfig:
    """Validate raw parameters for ``goal`` and build the run configuration.

    Args:
        parameters: User supplied parameters.
        project: Layout of the project being processed.
        host: The host Java runtime.
        goal: Which class directory to process.

    Returns:
        Immutable BuildConfig.

    Raises:
        ConfigValidationError: If the target is not supported.
    """
    bytecode_version = validate_target(parameters.target)
    fork = resolve_fork(parameters.fork, host)

    input_dir = parameters.input_dir or project.default_input_dir(goal)
    output_dir = parameters.output_dir or input_dir
    classpath = (
        parameters.classpath
        if parameters.classpath is not None
        else project.default_classpath(goal)
    )

    return BuildConfig(
        target=parameters.target,
        bytecode_version=bytecode_version,
        default_methods=parameters.default_methods,
        quiet=parameters.quiet,
        javac_hacks=parameters.javac_hacks,
        fix_java8_classpath=parameters.fix_java8_classpath,
        input_dir=_absolute(input_dir),
        output_dir=_absolute(output_dir),
        classpath=tuple(classpath),
        fork=fork,
        java8home=parameters.java8home,
    )
