"""``classforge plan <file>`` -- Resolve every module and emit the action graph.

Loads the YAML declaration document, runs both resolution phases and prints
a summary table, or the full action graph as JSON with ``--json``.

Exit Codes:
    0 -- Plan computed.
    1 -- Declaration or resolution errors (all of them are listed).
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from classforge.cli.output import print_errors, print_plan_summary
from classforge.core.pipeline import BuildPlan, BuildPlanner
from classforge.exceptions import BuildAbortedError, ClassforgeError
from classforge.loader import load


def run_planner(path: str, build_root: str | None, jobs: int = 1) -> BuildPlan:
    """Load ``path`` and plan it, exiting with code 1 on any error."""
    try:
        document = load(Path(path))
        config = document.build_config(build_root=build_root)
        return BuildPlanner(config, jobs=jobs).plan(document.declarations)
    except BuildAbortedError as exc:
        print_errors(exc.errors)
    except (ClassforgeError, ValueError) as exc:
        print_errors([exc])
    sys.exit(1)


@click.command("plan")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--build-root", type=str, default=None, help="Override config.build_root.")
@click.option("--json", "as_json", is_flag=True, help="Print the action graph as JSON.")
@click.option("--jobs", "-j", type=click.IntRange(min=1), default=1, help="Worker threads.")
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write the JSON action graph to this file.",
)
def plan_command(
    path: str,
    build_root: str | None,
    as_json: bool,
    jobs: int,
    output: str | None,
) -> None:
    """Resolve classpaths and synthesize build actions for every module in PATH."""
    plan = run_planner(path, build_root, jobs)
    data = plan.to_dict()

    if output:
        Path(output).write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")

    if as_json:
        click.echo(json.dumps(data, indent=2))
    else:
        print_plan_summary(plan)
        if output:
            click.echo(f"\nAction graph written to: {output}")
