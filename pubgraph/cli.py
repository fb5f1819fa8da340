"""Command line entry point that prints the package graph of a directory."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import click

from .domain.errors import PackageGraphError
from .services.graph_builder import find_cycles
from .settings import get_settings
from .wiring import provide_graph_builder

logger = logging.getLogger(__name__)


@click.command(name="pubgraph")
@click.argument(
    "package_dir",
    required=False,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--sdk-path",
    type=click.Path(file_okay=False, path_type=Path),
    help="Toolchain installation backing the $sdk package.",
)
@click.option("--check-cycles", is_flag=True, help="Report dependency cycles.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(
    package_dir: Optional[Path],
    sdk_path: Optional[Path],
    check_cycles: bool,
    verbose: bool,
) -> None:
    """Print the dependency graph of the package rooted at PACKAGE_DIR."""

    settings = get_settings()
    if sdk_path is not None:
        settings = settings.model_copy(update={"sdk_path": sdk_path})
    logging.basicConfig(level=logging.DEBUG if verbose else settings.log_level.upper())

    root = package_dir or settings.package_dir
    try:
        graph = provide_graph_builder(settings).build_from_path(root)
    except PackageGraphError as exc:
        logger.error("Unable to build package graph for %s", root)
        raise click.ClickException(str(exc)) from exc

    click.echo(str(graph), nl=False)

    if check_cycles:
        cycles = find_cycles(graph)
        if not cycles:
            click.echo("No dependency cycles.")
        for cycle in cycles:
            click.echo("cycle: " + " -> ".join(cycle + cycle[:1]))


def main(argv: Sequence[str] | None = None) -> int:
    """Invoke the click command and return its exit code."""
    args = list(argv) if argv is not None else None

    try:
        cli.main(args=args, prog_name="pubgraph", standalone_mode=False)
    except click.exceptions.Exit as exc:  # pragma: no cover - click handles sys.exit
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    return 0


if __name__ == "__main__":  # pragma: no cover - convenience execution path
    sys.exit(main(sys.argv[1:]))
