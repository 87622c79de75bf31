"""Managed JDK toolchains read from a Maven toolchains.xml."""

import xml.etree.ElementTree as ET
from collections.abc import Iterable, Mapping
from pathlib import Path

from retrolambda_runner.core.exceptions.errors import ToolchainError
from retrolambda_runner.core.logger.logger import get_logger
from retrolambda_runner.models.runtime import Toolchain

logger = get_logger(__name__)

# configuration element holding the installation directory, per toolchain type
HOME_ELEMENTS = {"jdk": "jdkHome"}


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _text(element: ET.Element | None) -> str | None:
    if element is None or element.text is None:
        return None
    return element.text.strip() or None


class ToolchainRegistry:
    """Registry of managed toolchains plus the one selected for the build."""

    def __init__(self, toolchains: Iterable[Toolchain] = ()) -> None:
        self._toolchains = list(toolchains)
        self._build_context: dict[str, Toolchain] = {}

    @property
    def toolchains(self) -> list[Toolchain]:
        """Return all registered toolchains."""
        return list(self._toolchains)

    @classmethod
    def from_file(cls, path: Path | None) -> "ToolchainRegistry":
        """Load toolchains from a toolchains.xml file.

        A missing file gives an empty registry.

        Raises:
            ToolchainError: If the file exists but cannot be parsed.
        """
        if path is None or not path.exists():
            logger.debug(f"No toolchains file at {path}")
            return cls()

        try:
            root = ET.parse(path).getroot()
        except (ET.ParseError, OSError) as e:
            raise ToolchainError(
                f"Failed to read toolchains from {path}",
                toolchains_file=str(path),
                details={"error": str(e)},
            ) from e

        return cls(cls._parse(root, path))

    @staticmethod
    def _parse(root: ET.Element, path: Path) -> list[Toolchain]:
        toolchains: list[Toolchain] = []
        for element in root:
            if _local_name(element.tag) != "toolchain":
                continue

            toolchain_type = _text(_child(element, "type"))
            if not toolchain_type:
                logger.warning(f"Ignoring toolchain without <type> in {path}")
                continue

            provides: dict[str, str] = {}
            provides_element = _child(element, "provides")
            if provides_element is not None:
                for item in provides_element:
                    value = _text(item)
                    if value is not None:
                        provides[_local_name(item.tag)] = value

            home_name = HOME_ELEMENTS.get(toolchain_type, "home")
            configuration = _child(element, "configuration")
            home = _text(_child(configuration, home_name)) if configuration is not None else None
            if not home:
                logger.warning(f"Ignoring {toolchain_type} toolchain without <{home_name}> in {path}")
                continue

            toolchains.append(Toolchain(type=toolchain_type, provides=provides, home=Path(home)))

        logger.debug(f"Loaded {len(toolchains)} toolchain(s) from {path}")
        return toolchains

    def find(self, toolchain_type: str, requirements: Mapping[str, str]) -> list[Toolchain]:
        """Return toolchains of ``toolchain_type`` matching all ``requirements``."""
        return [
            tc
            for tc in self._toolchains
            if tc.type == toolchain_type and tc.matches(requirements)
        ]

    def select_for_build(
        self,
        toolchain_type: str,
        requirements: Mapping[str, str],
    ) -> Toolchain | None:
        """Select the first matching toolchain as the build-context toolchain."""
        matches = self.find(toolchain_type, requirements)
        if not matches:
            logger.warning(f"No {toolchain_type} toolchain matches {dict(requirements)}")
            return None
        self._build_context[toolchain_type] = matches[0]
        return matches[0]

    def build_context(self, toolchain_type: str) -> Toolchain | None:
        """Return the toolchain selected for the build, if any."""
        return self._build_context.get(toolchain_type)
