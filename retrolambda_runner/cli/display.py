"""Display components for CLI using Rich."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from retrolambda_runner.models.execution import ExecutionResult
from retrolambda_runner.models.runtime import RuntimeCandidate

console = Console()


def show_success(title: str, message: str) -> None:
    """Display a success message."""
    console.print()
    console.print(
        Panel(
            f"[bold green]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="green",
        )
    )


def show_error(title: str, message: str) -> None:
    """Display an error message."""
    console.print()
    console.print(
        Panel(
            f"[bold red]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="red",
        )
    )


def show_info(title: str, message: str) -> None:
    """Display an info message."""
    console.print()
    console.print(
        Panel(
            escape(message),
            title=f"[bold]{escape(title)}[/]",
            border_style="blue",
        )
    )


def format_cause_chain(error: BaseException) -> str:
    """Return the message of ``error`` followed by each of its causes."""
    lines = [str(error)]
    cause = error.__cause__
    while cause is not None:
        lines.append(f"Caused by: {type(cause).__name__}: {cause}")
        cause = cause.__cause__
    return "\n".join(lines)


def show_runtime(candidate: RuntimeCandidate) -> None:
    """Display the Java runtime selected for forked runs."""
    console.print()
    table = Table(title="[bold]Java Runtime[/]", show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Executable", escape(candidate.executable))
    table.add_row("Source", candidate.source.value)
    if candidate.toolchain:
        table.add_row("Toolchain", escape(candidate.toolchain))

    console.print(Panel(table, border_style="blue"))


def show_result(result: ExecutionResult) -> None:
    """Display the outcome of a run."""
    if result.skipped:
        show_info("Skipped", result.skip_reason or "Nothing to do")
        return
    show_success(
        "Success",
        f"Classes processed with the {result.backend} backend in {result.duration_seconds:.1f}s",
    )
