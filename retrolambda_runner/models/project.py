"""Project layout models."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class Goal(str, Enum):
    """Which class output directory a run processes."""

    PROCESS_MAIN = "process-main"
    PROCESS_TEST = "process-test"


class ProjectLayout(BaseModel):
    """Directories and classpaths of the project being built."""

    base_dir: Path = Field(default_factory=Path.cwd, description="Project root")
    build_directory: Path | None = Field(
        default=None,
        description="Build output directory (default: <base_dir>/target)",
    )
    output_directory: Path | None = Field(
        default=None,
        description="Main classes directory (default: <build_directory>/classes)",
    )
    test_output_directory: Path | None = Field(
        default=None,
        description="Test classes directory (default: <build_directory>/test-classes)",
    )
    compile_classpath: list[str] = Field(
        default_factory=list,
        description="Classpath of the main classes",
    )
    test_classpath: list[str] = Field(
        default_factory=list,
        description="Classpath of the test classes",
    )

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.base_dir / path

    @property
    def build_dir(self) -> Path:
        """Return the absolute build output directory."""
        return self._resolve(self.build_directory or Path("target"))

    @property
    def classes_dir(self) -> Path:
        """Return the absolute main classes directory."""
        if self.output_directory is not None:
            return self._resolve(self.output_directory)
        return self.build_dir / "classes"

    @property
    def test_classes_dir(self) -> Path:
        """Return the absolute test classes directory."""
        if self.test_output_directory is not None:
            return self._resolve(self.test_output_directory)
        return self.build_dir / "test-classes"

    def default_input_dir(self, goal: Goal) -> Path:
        """Return the directory processed by ``goal`` when none is given."""
        return self.test_classes_dir if goal == Goal.PROCESS_TEST else self.classes_dir

    def default_classpath(self, goal: Goal) -> list[str]:
        """Return the classpath used by ``goal`` when none is given."""
        return list(self.test_classpath if goal == Goal.PROCESS_TEST else self.compile_classpath)
