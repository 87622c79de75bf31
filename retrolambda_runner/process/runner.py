"""Entry point tying validation, runtime resolution and backends together."""

from retrolambda_runner.core.config.settings import Settings, get_settings
from retrolambda_runner.core.logger.logger import get_logger
from retrolambda_runner.models.execution import ExecutionResult
from retrolambda_runner.models.parameters import BuildConfig, ProcessParameters
from retrolambda_runner.models.project import Goal, ProjectLayout
from retrolambda_runner.models.runtime import HostRuntime, RuntimeCandidate
from retrolambda_runner.process.artifacts import (
    ArtifactAcquirer,
    ArtifactRepository,
    LocalRepository,
    MavenDependencyCopier,
    detect_retrolambda_version,
)
from retrolambda_runner.process.backends import EmbeddedBackend, ForkedBackend, ProcessingBackend
from retrolambda_runner.process.resolver import JDK, ResolutionContext, resolve_java_command
from retrolambda_runner.process.toolchains import ToolchainRegistry
from retrolambda_runner.process.validation import validate

logger = get_logger(__name__)


def create_artifact_repository(settings: Settings, project: ProjectLayout) -> ArtifactRepository:
    """Create the artifact repository configured in ``settings``."""
    if settings.runner.artifact_source == "maven":
        return MavenDependencyCopier(
            maven_executable=settings.runner.maven_executable,
            project_dir=project.base_dir,
        )
    return LocalRepository(settings.runner.local_repository)


def load_toolchains(settings: Settings) -> ToolchainRegistry:
    """Load managed toolchains and select the build-context JDK, if configured."""
    registry = ToolchainRegistry.from_file(settings.toolchain.toolchains_file)
    if settings.toolchain.build_context_version:
        registry.select_for_build(JDK, {"version": settings.toolchain.build_context_version})
    return registry


class RetrolambdaRunner:
    """Processes a project's classes with Retrolambda.

    Collaborators not passed in are created from settings: toolchains from
    the configured toolchains.xml, the artifact repository from
    ``runner.artifact_source`` and the host runtime from the environment.
    """

    def __init__(
        self,
        project: ProjectLayout,
        settings: Settings | None = None,
        toolchains: ToolchainRegistry | None = None,
        repository: ArtifactRepository | None = None,
        host: HostRuntime | None = None,
    ) -> None:
        self.project = project
        self.settings = settings or get_settings()
        self._toolchains = toolchains
        self._repository = repository
        self._host = host

    @property
    def toolchains(self) -> ToolchainRegistry:
        if self._toolchains is None:
            self._toolchains = load_toolchains(self.settings)
        return self._toolchains

    @property
    def repository(self) -> ArtifactRepository:
        if self._repository is None:
            self._repository = create_artifact_repository(self.settings, self.project)
        return self._repository

    @property
    def host(self) -> HostRuntime:
        if self._host is None:
            self._host = HostRuntime.detect()
        return self._host

    def resolve_java(self, parameters: ProcessParameters) -> RuntimeCandidate:
        """Return the Java runtime a forked run would use."""
        return resolve_java_command(
            ResolutionContext(
                java8home=parameters.java8home,
                toolchains=self.toolchains,
                host=self.host,
            )
        )

    def create_backend(self, config: BuildConfig) -> ProcessingBackend:
        """Choose the backend for ``config``."""
        if not config.fork:
            return EmbeddedBackend(self.settings.runner.embedded_entry_point)

        context = ResolutionContext(
            java8home=config.java8home,
            toolchains=self.toolchains,
            host=self.host,
        )
        return ForkedBackend(
            acquirer=ArtifactAcquirer(self.repository, self.project.build_dir),
            java_command=lambda: resolve_java_command(context).executable,
            retrolambda_version=detect_retrolambda_version(self.settings.runner.retrolambda_version),
        )

    def execute(
        self,
        parameters: ProcessParameters,
        goal: Goal = Goal.PROCESS_MAIN,
    ) -> ExecutionResult:
        """Run Retrolambda for ``goal``.

        Args:
            parameters: User supplied parameters.
            goal: Which class directory to process.

        Returns:
            ExecutionResult of the run, skipped when ``skip`` is set.

        Raises:
            RetrolambdaError: If validation, retrieval or processing fails.
        """
        if parameters.skip:
            logger.info("Skipping execution (skip=true)")
            return ExecutionResult.skipped_result("skip=true")

        config = validate(parameters, self.project, self.host, goal)
        backend = self.create_backend(config)
        logger.debug(f"Using {backend.name} backend for {goal.value}")

        result = backend.run(config)
        logger.debug(f"Retrolambda result: {result.to_dict()}")
        return result
