"""Rich output formatting helpers for the classforge CLI."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from classforge.core.actions.models import ModuleActions
from classforge.core.modules.registry import ModuleKindRegistry
from classforge.core.pipeline.planner import BuildPlan
from classforge.exceptions import ClassforgeError

console = Console()


def print_plan_summary(plan: BuildPlan) -> None:
    """Print one row per planned module-variant."""
    if not plan.modules:
        console.print("[dim]No modules to plan.[/dim]")
        return

    table = Table(title="classforge Build Plan", show_header=True, header_style="bold")
    table.add_column("Module", style="bold")
    table.add_column("Variant", style="dim")
    table.add_column("Kind")
    table.add_column("Bootclasspath", justify="right")
    table.add_column("Classpath", justify="right")
    table.add_column("Actions", justify="right")

    for result in plan.modules:
        cp = result.classpaths
        table.add_row(
            result.module,
            result.variant,
            result.kind,
            str(len(cp.bootclasspath)) if cp else "-",
            str(len(cp.classpath)) if cp else "-",
            str(len(result.actions)),
        )

    console.print(table)
    console.print(
        f"\n[bold]{len(plan.modules)}[/bold] module variants, "
        f"[bold]{len(plan.actions)}[/bold] actions"
    )


def print_module_classpaths(result: ModuleActions) -> None:
    """Print the resolved lists of one module, one path per line."""
    console.print(Text(f"{result.module} ({result.variant})", style="bold"))

    def _section(title: str, entries: Sequence[str]) -> None:
        console.print(f"[cyan]{title}[/cyan]")
        if not entries:
            console.print("  [dim](empty)[/dim]")
        for entry in entries:
            console.print(Text(f"  {entry}"), soft_wrap=True)

    if result.classpaths is None:
        _section("artifacts", result.artifacts)
        return
    _section("bootclasspath", result.classpaths.bootclasspath)
    _section("classpath", result.classpaths.classpath)
    _section("implicits", result.classpaths.implicits)
    _section("artifacts", result.artifacts)


def print_errors(errors: Sequence[ClassforgeError]) -> None:
    """Print every collected error."""
    noun = "error" if len(errors) == 1 else "errors"
    console.print(f"[bold red]{len(errors)} {noun}:[/bold red]")
    for error in errors:
        console.print(Text(f"  {error}", style="red"), soft_wrap=True)


def print_kinds(registry: ModuleKindRegistry) -> None:
    """Print the registered module kinds."""
    table = Table(title="Module Kinds", show_header=True, header_style="bold")
    table.add_column("Tag", style="bold")
    table.add_column("Description")
    for kind in registry.kinds:
        table.add_row(kind.tag, kind.description)
    console.print(table)
