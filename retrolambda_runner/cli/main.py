"""Main CLI entry point for retrolambda-runner."""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from retrolambda_runner.cli.display import (
    format_cause_chain,
    show_error,
    show_result,
    show_runtime,
)
from retrolambda_runner.core.config.settings import Settings, get_settings
from retrolambda_runner.core.exceptions.errors import RetrolambdaError
from retrolambda_runner.core.logger.logger import setup_logging
from retrolambda_runner.models.parameters import ProcessParameters
from retrolambda_runner.models.project import Goal, ProjectLayout
from retrolambda_runner.process.runner import RetrolambdaRunner


def _optional_path(value: str | None) -> Path | None:
    return Path(value) if value else None


def project_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options describing the project layout."""
    options = [
        click.option(
            "--project-dir",
            type=click.Path(file_okay=False),
            default=".",
            show_default=True,
            help="Project root directory",
        ),
        click.option("--build-dir", type=click.Path(file_okay=False), help="Build output directory"),
        click.option(
            "--classpath",
            "-cp",
            "classpath",
            multiple=True,
            help="Classpath entry (repeatable)",
        ),
        click.option("--java8home", type=click.Path(file_okay=False), help="JDK home for forked runs"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def processing_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options mirroring ProcessParameters."""
    options = [
        click.option("--skip", is_flag=True, help="Skip execution"),
        click.option("--target", "-t", default="1.7", show_default=True, help="Targeted Java version"),
        click.option("--default-methods", is_flag=True, help="Backport default and static interface methods"),
        click.option("--javac-hacks", is_flag=True, help="Apply experimental javac workarounds"),
        click.option("--quiet", "-q", is_flag=True, help="Reduce Retrolambda logging"),
        click.option(
            "--fork",
            is_flag=True,
            help=(
                "Run Retrolambda in a separate JVM. Without it, a Java 8 host calls "
                "the in-process entry point (runner.embedded_entry_point), "
                "which must be importable"
            ),
        ),
        click.option("--fix-java8-classpath", is_flag=True, help="Prefer '/classes-java8' classpath entries"),
        click.option("--input-dir", type=click.Path(file_okay=False), help="Directory with classes to process"),
        click.option("--output-dir", type=click.Path(file_okay=False), help="Directory to write processed classes"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_runner(
    ctx: click.Context,
    project_dir: str,
    build_dir: str | None,
    classpath: tuple[str, ...],
    goal: Goal,
) -> RetrolambdaRunner:
    entries = list(classpath)
    project = ProjectLayout(
        base_dir=Path(project_dir).absolute(),
        build_directory=_optional_path(build_dir),
        compile_classpath=entries if goal == Goal.PROCESS_MAIN else [],
        test_classpath=entries if goal == Goal.PROCESS_TEST else [],
    )
    return RetrolambdaRunner(project, settings=ctx.obj["settings"])


def _run_goal(ctx: click.Context, goal: Goal, **options: Any) -> None:
    runner = _build_runner(
        ctx,
        options.pop("project_dir"),
        options.pop("build_dir"),
        options.pop("classpath"),
        goal,
    )
    parameters = ProcessParameters(
        skip=options["skip"],
        target=options["target"],
        default_methods=options["default_methods"],
        javac_hacks=options["javac_hacks"],
        quiet=options["quiet"],
        fork=options["fork"],
        fix_java8_classpath=options["fix_java8_classpath"],
        java8home=_optional_path(options["java8home"]),
        input_dir=_optional_path(options["input_dir"]),
        output_dir=_optional_path(options["output_dir"]),
    )

    try:
        result = runner.execute(parameters, goal)
    except RetrolambdaError as e:
        show_error("Retrolambda Failed", format_cause_chain(e))
        sys.exit(1)

    show_result(result)


@click.group()
@click.version_option(package_name="retrolambda-runner", prog_name="retrolambda-runner")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """retrolambda-runner - backport Java 8 bytecode with Retrolambda."""
    try:
        settings = Settings.from_yaml(Path(config_path)) if config_path else get_settings()
    except RetrolambdaError as e:
        show_error("Configuration Error", format_cause_chain(e))
        sys.exit(1)

    logging_settings = settings.logging
    if verbose:
        logging_settings = logging_settings.model_copy(update={"level": "DEBUG"})
    setup_logging(logging_settings)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@main.command("process-main")
@project_options
@processing_options
@click.pass_context
def process_main(ctx: click.Context, **options: Any) -> None:
    """Process the main classes (target/classes by default).

    Example:
        retrolambda-runner process-main --target 1.7 -cp lib/guava.jar
    """
    _run_goal(ctx, Goal.PROCESS_MAIN, **options)


@main.command("process-test")
@project_options
@processing_options
@click.pass_context
def process_test(ctx: click.Context, **options: Any) -> None:
    """Process the test classes (target/test-classes by default)."""
    _run_goal(ctx, Goal.PROCESS_TEST, **options)


@main.command("resolve-java")
@click.option("--java8home", type=click.Path(file_okay=False), help="JDK home override")
@click.pass_context
def resolve_java(ctx: click.Context, java8home: str | None) -> None:
    """Show which Java runtime a forked run would use."""
    runner = RetrolambdaRunner(ProjectLayout(), settings=ctx.obj["settings"])
    try:
        candidate = runner.resolve_java(ProcessParameters(java8home=_optional_path(java8home)))
    except RetrolambdaError as e:
        show_error("Resolution Failed", format_cause_chain(e))
        sys.exit(1)

    show_runtime(candidate)


if __name__ == "__main__":
    main()
