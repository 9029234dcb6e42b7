"""``classforge classpath <file> <module>`` -- Show one module's resolved lists.

Exit Codes:
    0 -- Module found and printed.
    1 -- Resolution errors, or no such module-variant.
"""

from __future__ import annotations

import sys

import click

from classforge.cli.output import console, print_module_classpaths
from classforge.cli.plan_cmd import run_planner


@click.command("classpath")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.argument("module")
@click.option(
    "--variant", type=str, default=None,
    help="Variant name (default: the device variant).",
)
@click.option("--build-root", type=str, default=None, help="Override config.build_root.")
def classpath_command(
    path: str, module: str, variant: str | None, build_root: str | None
) -> None:
    """Print the bootclasspath, classpath and implicit inputs of MODULE."""
    plan = run_planner(path, build_root)
    try:
        result = plan.get(module, variant)
    except KeyError:
        console.print(f"[red]No module {module!r} in variant {variant or plan.config.device_variant}[/red]")
        sys.exit(1)
    print_module_classpaths(result)
