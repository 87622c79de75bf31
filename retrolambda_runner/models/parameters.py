"""Build parameter models for Retrolambda processing."""

import os
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

# Supported --target values and the class file major version each one produces.
TARGET_BYTECODE_VERSIONS: Mapping[str, int] = MappingProxyType(
    {
        "1.5": 49,
        "1.6": 50,
        "1.7": 51,
        "1.8": 52,
    }
)

# Java major version that the embedded backend requires from the host runtime.
REQUIRED_JAVA_MAJOR = 8


class RetrolambdaProperty:
    """System property names understood by Retrolambda."""

    PREFIX = "net.orfjackal.retrolambda."
    BYTECODE_VERSION = PREFIX + "bytecodeVersion"
    DEFAULT_METHODS = PREFIX + "defaultMethods"
    QUIET = PREFIX + "quiet"
    INPUT_DIR = PREFIX + "inputDir"
    OUTPUT_DIR = PREFIX + "outputDir"
    CLASSPATH = PREFIX + "classpath"
    CLASSPATH_FILE = PREFIX + "classpathFile"
    JAVAC_HACKS = PREFIX + "javacHacks"
    FIX_JAVA8_CLASSPATH = PREFIX + "fixJava8Classpath"


def _java_bool(value: bool) -> str:
    return "true" if value else "false"


class ProcessParameters(BaseModel):
    """Raw, user supplied parameters for one processing run.

    ``target`` is kept as a plain string so that ``skip`` can short-circuit
    before it is checked.
    """

    skip: bool = Field(default=False, description="Skip execution entirely")
    target: str = Field(default="1.7", description="Targeted Java version")
    default_methods: bool = Field(
        default=False,
        description="Backport default methods and static methods on interfaces",
    )
    javac_hacks: bool = Field(
        default=False,
        description="Apply experimental javac issue workarounds",
    )
    quiet: bool = Field(default=False, description="Reduce Retrolambda logging")
    fork: bool = Field(default=False, description="Run Retrolambda in a separate JVM")
    fix_java8_classpath: bool = Field(
        default=False,
        description="Replace '/classes' classpath entries with '/classes-java8' when present",
    )
    java8home: Path | None = Field(
        default=None,
        description="JDK home used to run a forked Retrolambda",
    )
    input_dir: Path | None = Field(default=None, description="Override for the input directory")
    output_dir: Path | None = Field(default=None, description="Override for the output directory")
    classpath: list[str] | None = Field(default=None, description="Override for the classpath")


class BuildConfig(BaseModel):
    """Validated, immutable configuration for one Retrolambda invocation."""

    model_config = ConfigDict(frozen=True)

    target: str
    bytecode_version: int
    default_methods: bool = False
    quiet: bool = False
    javac_hacks: bool = False
    fix_java8_classpath: bool = False
    input_dir: Path
    output_dir: Path
    classpath: tuple[str, ...] = ()
    fork: bool = False
    java8home: Path | None = None

    def classpath_string(self) -> str:
        """Return the classpath joined with the platform path separator."""
        return os.pathsep.join(self.classpath)

    def to_properties(self) -> Mapping[str, str]:
        """Return the read-only property map handed to Retrolambda."""
        return MappingProxyType(
            {
                RetrolambdaProperty.BYTECODE_VERSION: str(self.bytecode_version),
                RetrolambdaProperty.DEFAULT_METHODS: _java_bool(self.default_methods),
                RetrolambdaProperty.QUIET: _java_bool(self.quiet),
                RetrolambdaProperty.INPUT_DIR: str(self.input_dir),
                RetrolambdaProperty.OUTPUT_DIR: str(self.output_dir),
                RetrolambdaProperty.CLASSPATH: self.classpath_string(),
                RetrolambdaProperty.JAVAC_HACKS: _java_bool(self.javac_hacks),
                RetrolambdaProperty.FIX_JAVA8_CLASSPATH: _java_bool(self.fix_java8_classpath),
            }
        )
