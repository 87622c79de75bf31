"""Java runtime and toolchain models."""

import os
import re
import shutil
import sys
from collections.abc import Mapping
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

_VERSION_PREFIX = re.compile(r"(\d+)(?:\.(\d+))?")
_RANGE = re.compile(r"^([\[(])\s*([^,]*?)\s*,\s*([^,]*?)\s*([\])])$")


def is_windows(platform: str | None = None) -> bool:
    """Return True if ``platform`` (default: the current one) is Windows."""
    return (platform or sys.platform).startswith("win")


def java_executable(home: Path, platform: str | None = None) -> Path:
    """Return the path of the java launcher inside a JDK or JRE home."""
    return home / "bin" / ("java.exe" if is_windows(platform) else "java")


def parse_major_version(version: str | None) -> int | None:
    """Return the Java major version of a version string.

    Handles both the legacy ``1.x`` scheme (``1.8.0_292`` -> 8) and the
    current one (``11.0.2`` -> 11).
    """
    if not version:
        return None
    match = _VERSION_PREFIX.match(version.strip())
    if not match:
        return None
    major = int(match.group(1))
    if major == 1 and match.group(2) is not None:
        return int(match.group(2))
    return major


_NUMERIC_VERSION = re.compile(r"^\d+(?:[._-]\d+)*$")


def _version_key(version: str) -> tuple[int, ...]:
    """Numeric parts of ``version`` without trailing zeros, so 1.8 == 1.8.0."""
    parts = [int(part) for part in re.findall(r"\d+", version)]
    while parts and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


def version_matches(requirement: str, provided: str) -> bool:
    """Check a provided toolchain version against a requirement.

    A requirement is either an exact version or a range such as ``[1.8,9)``.
    """
    match = _RANGE.match(requirement.strip())
    if not match:
        required, actual = requirement.strip(), provided.strip()
        if _NUMERIC_VERSION.match(required) and _NUMERIC_VERSION.match(actual):
            return _version_key(required) == _version_key(actual)
        return required == actual

    low_bracket, low, high, high_bracket = match.groups()
    key = _version_key(provided)
    if low:
        low_key = _version_key(low)
        if key < low_key or (key == low_key and low_bracket == "("):
            return False
    if high:
        high_key = _version_key(high)
        if key > high_key or (key == high_key and high_bracket == ")"):
            return False
    return True


class RuntimeSource(str, Enum):
    """Where a resolved Java runtime came from."""

    EXPLICIT = "explicit"
    TOOLCHAIN = "toolchain"
    BUILD_CONTEXT = "build_context"
    HOST = "host"


class Toolchain(BaseModel):
    """A managed toolchain entry, e.g. one <toolchain> of toolchains.xml."""

    type: str = Field(default="jdk", description="Toolchain type")
    provides: dict[str, str] = Field(
        default_factory=dict,
        description="Descriptors such as version and vendor",
    )
    home: Path = Field(description="Installation directory")

    def matches(self, requirements: Mapping[str, str]) -> bool:
        """Return True if every requirement is provided by this toolchain."""
        for key, required in requirements.items():
            provided = self.provides.get(key)
            if provided is None:
                return False
            if key == "version":
                if not version_matches(required, provided):
                    return False
            elif provided.lower() != required.lower():
                return False
        return True

    def find_tool(self, tool: str, platform: str | None = None) -> Path | None:
        """Return the path of ``tool`` in this toolchain, or None if absent."""
        if tool == "java":
            candidate = java_executable(self.home, platform)
        else:
            suffix = ".exe" if is_windows(platform) else ""
            candidate = self.home / "bin" / f"{tool}{suffix}"
        return candidate if candidate.is_file() else None

    def __str__(self) -> str:
        return f"{self.type.upper()}[{self.home}]"


class HostRuntime(BaseModel):
    """The Java runtime available to the build by default."""

    java_home: Path | None = Field(default=None, description="JAVA_HOME of the host runtime")
    version: str | None = Field(default=None, description="Full version string, e.g. 1.8.0_292")

    @property
    def major_version(self) -> int | None:
        """Return the Java major version, None if unknown."""
        return parse_major_version(self.version)

    def is_at_least(self, major: int) -> bool:
        """Return True if the host runtime is known to be Java ``major`` or newer."""
        current = self.major_version
        return current is not None and current >= major

    @classmethod
    def detect(cls, environ: Mapping[str, str] | None = None) -> "HostRuntime":
        """Detect the host runtime from JAVA_HOME or the java found on PATH.

        The version is read from the ``release`` file of the runtime home.
        """
        environ = os.environ if environ is None else environ

        java_home: Path | None = None
        if environ.get("JAVA_HOME"):
            java_home = Path(environ["JAVA_HOME"])
        else:
            found = shutil.which("java", path=environ.get("PATH"))
            if found:
                java_home = Path(found).resolve().parent.parent

        return cls(java_home=java_home, version=read_release_version(java_home))


def read_release_version(java_home: Path | None) -> str | None:
    """Read JAVA_VERSION from the ``release`` file of a runtime home."""
    if java_home is None:
        return None
    release = java_home / "release"
    try:
        lines = release.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError:
        return None
    for line in lines:
        key, sep, value = line.partition("=")
        if sep and key.strip() == "JAVA_VERSION":
            return value.strip().strip('"')
    return None


class RuntimeCandidate(BaseModel):
    """The Java executable selected for a forked run."""

    executable: str = Field(description="Path or command of the java launcher")
    source: RuntimeSource = Field(description="Where the runtime came from")
    toolchain: str | None = Field(default=None, description="Toolchain description, if any")

    def __str__(self) -> str:
        return f"{self.executable} ({self.source.value})"
