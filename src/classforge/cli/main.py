"""classforge CLI -- Classpath resolution and build action synthesis.

Entry point for the ``classforge`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    plan       -- Plan every module and print the action graph.
    classpath  -- Show one module's bootclasspath, classpath and implicits.
    kinds      -- List the registered module kinds.

Usage::

    classforge plan Modules.yaml
    classforge plan Modules.yaml --json --build-root out
    classforge classpath Modules.yaml foo --variant linux_common
    classforge kinds
"""

from __future__ import annotations

import logging

import click

from classforge import __version__
from classforge.cli.classpath_cmd import classpath_command
from classforge.cli.output import print_kinds
from classforge.cli.plan_cmd import plan_command
from classforge.core.modules.registry import default_registry


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log resolution details.")
def cli(verbose: bool) -> None:
    """classforge: Variant-aware classpath resolution for library modules."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.command("kinds")
def kinds_command() -> None:
    """List the module kinds a declaration may use."""
    print_kinds(default_registry())


# Register all subcommands
cli.add_command(plan_command)
cli.add_command(classpath_command)
cli.add_command(kinds_command)
