"""Retrieval of the Retrolambda jar into the build directory."""

import shutil
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from importlib.metadata import PackageNotFoundError, version as distribution_version
from pathlib import Path

from retrolambda_runner.core.exceptions.errors import (
    ArtifactNotPublishedError,
    ArtifactRetrievalError,
)
from retrolambda_runner.core.logger.logger import get_logger

logger = get_logger(__name__)

DISTRIBUTION_NAME = "retrolambda-runner"
RETROLAMBDA_GROUP_ID = "com.kohlschutter.retrolambda"
RETROLAMBDA_ARTIFACT_ID = "retrolambda"
RETROLAMBDA_JAR_DIR = "retrolambda"
RETROLAMBDA_JAR_NAME = "retrolambda.jar"

# Maven reports this for a module of the current reactor that is not built yet.
NOT_PACKAGED_MARKER = "has not been packaged yet"


@dataclass(frozen=True)
class ArtifactCoordinates:
    """groupId, artifactId and version of an artifact."""

    group_id: str
    artifact_id: str
    version: str

    @classmethod
    def retrolambda(cls, version: str) -> "ArtifactCoordinates":
        return cls(RETROLAMBDA_GROUP_ID, RETROLAMBDA_ARTIFACT_ID, version)

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


class AcquisitionStatus(str, Enum):
    """Outcome of ArtifactAcquirer.ensure_present."""

    PRESENT = "present"
    NOT_PUBLISHED = "not_published"


def detect_retrolambda_version(override: str | None = None) -> str:
    """Return the Retrolambda version matching this package's own version.

    Raises:
        ArtifactRetrievalError: If the version cannot be determined.
    """
    if override:
        return override
    try:
        return distribution_version(DISTRIBUTION_NAME)
    except PackageNotFoundError as e:
        raise ArtifactRetrievalError("Failed to detect the Retrolambda version") from e


def classify_failure(message: str, coordinates: ArtifactCoordinates) -> ArtifactRetrievalError:
    """Turn a retrieval failure message into the matching error type."""
    if NOT_PACKAGED_MARKER in message:
        return ArtifactNotPublishedError(message, coordinates=str(coordinates))
    return ArtifactRetrievalError(message, coordinates=str(coordinates))


class ArtifactRepository(ABC):
    """Something that can copy an artifact to a local file."""

    @abstractmethod
    def copy(self, coordinates: ArtifactCoordinates, destination: Path) -> None:
        """Copy the artifact to ``destination``, overwriting it.

        Raises:
            ArtifactNotPublishedError: If the artifact does not exist yet.
            ArtifactRetrievalError: For any other failure.
        """


class LocalRepository(ArtifactRepository):
    """Copies jars out of a Maven local repository (~/.m2/repository)."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def artifact_path(self, coordinates: ArtifactCoordinates) -> Path:
        """Return where ``coordinates`` live inside the repository."""
        return (
            self.root.joinpath(*coordinates.group_id.split("."))
            / coordinates.artifact_id
            / coordinates.version
            / f"{coordinates.artifact_id}-{coordinates.version}.jar"
        )

    def copy(self, coordinates: ArtifactCoordinates, destination: Path) -> None:
        source = self.artifact_path(coordinates)
        if not source.is_file():
            raise ArtifactRetrievalError(
                f"Artifact {coordinates} not found in local repository {self.root}",
                coordinates=str(coordinates),
                details={"path": str(source)},
            )
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, destination)
        except OSError as e:
            raise ArtifactRetrievalError(
                f"Failed to copy {source} to {destination}",
                coordinates=str(coordinates),
                details={"error": str(e)},
            ) from e


class MavenDependencyCopier(ArtifactRepository):
    """Copies artifacts by running ``mvn dependency:copy``."""

    def __init__(
        self,
        maven_executable: str = "mvn",
        project_dir: Path | None = None,
        plugin_version: str = "2.8",
    ) -> None:
        self.maven_executable = maven_executable
        self.project_dir = project_dir
        self.plugin_version = plugin_version

    def build_command(self, coordinates: ArtifactCoordinates, destination: Path) -> list[str]:
        """Return the Maven command line copying ``coordinates`` to ``destination``."""
        return [
            self.maven_executable,
            "--batch-mode",
            f"org.apache.maven.plugins:maven-dependency-plugin:{self.plugin_version}:copy",
            f"-Dartifact={coordinates}",
            f"-DoutputDirectory={destination.parent}",
            "-Dmdep.stripVersion=true",
            "-Dmdep.overWriteReleases=true",
            "-Dmdep.overWriteSnapshots=true",
        ]

    def copy(self, coordinates: ArtifactCoordinates, destination: Path) -> None:
        command = self.build_command(coordinates, destination)
        logger.debug(f"Running: {' '.join(command)}")

        try:
            completed = subprocess.run(
                command,
                cwd=self.project_dir,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise ArtifactRetrievalError(
                f"Failed to run {self.maven_executable}: {e}",
                coordinates=str(coordinates),
            ) from e

        if completed.returncode != 0:
            output = completed.stdout + completed.stderr
            raise classify_failure(
                f"Failed to copy {coordinates}: {output.strip() or 'exit code ' + str(completed.returncode)}",
                coordinates,
            )

        # dependency:copy names the file <artifactId>.<ext> with stripVersion
        copied = destination.parent / f"{coordinates.artifact_id}.jar"
        if copied != destination:
            copied.replace(destination)


class ArtifactAcquirer:
    """Keeps <build-dir>/retrolambda/retrolambda.jar up to date."""

    def __init__(self, repository: ArtifactRepository, build_directory: Path) -> None:
        self.repository = repository
        self.build_directory = build_directory

    @property
    def jar_path(self) -> Path:
        """Return the cached Retrolambda jar location."""
        return self.build_directory / RETROLAMBDA_JAR_DIR / RETROLAMBDA_JAR_NAME

    def ensure_present(self, version: str) -> AcquisitionStatus:
        """Copy Retrolambda ``version`` into the build directory.

        Returns:
            PRESENT once the jar is in place, NOT_PUBLISHED if the artifact
            does not exist yet for this build.

        Raises:
            ArtifactRetrievalError: For any other retrieval failure.
        """
        coordinates = ArtifactCoordinates.retrolambda(version)
        logger.info(f"Retrieving Retrolambda {version}")

        try:
            self.repository.copy(coordinates, self.jar_path)
        except ArtifactNotPublishedError as e:
            logger.info(e.message)
            return AcquisitionStatus.NOT_PUBLISHED
        except ArtifactRetrievalError as e:
            if NOT_PACKAGED_MARKER in e.message:
                logger.info(e.message)
                return AcquisitionStatus.NOT_PUBLISHED
            raise

        return AcquisitionStatus.PRESENT
