"""
Command-line interface for ceres
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape as rich_escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ceres import __version__
from ceres.constants import DEFAULT_OUTPUT_DIR, INDEX_PAGE
from ceres.extractor import process_files
from ceres.generator import HTMLGenerator
from ceres.models import ModuleDoc
from ceres.project import ProjectInfo
from ceres.scanner import NoSourceFilesError, collect_source_files
from ceres.serializer import save_modules

# Create a console instance for all output
console = Console()


def title_case(name: str) -> str:
    """
    Capitalize each whitespace-separated word.

    Examples:
        'my cool lib' -> 'My Cool Lib'
        'DPARSER'     -> 'Dparser'
    """
    return " ".join(word.capitalize() for word in name.split())


def configure_logging(verbosity: int) -> None:
    """Route library logging through Rich; -v shows INFO, -vv shows DEBUG."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def print_target(target: Path, project: Optional[ProjectInfo], file_count: int) -> None:
    """Print what is being documented."""
    summary = Text()
    if project is None:
        summary.append("Documenting single file: ", style="bold")
        summary.append(f"{target}\n", style="cyan")
    else:
        summary.append("Documenting: ", style="bold")
        summary.append(f"{target}\n", style="cyan")
        if project.is_dub_project:
            summary.append("Detected dub project\n", style="green")
        if project.project_name:
            summary.append("Project name: ", style="bold")
            summary.append(f"{project.project_name}\n", style="magenta")
        if project.license_type:
            summary.append("License: ", style="bold")
            summary.append(f"{project.license_type}\n", style="dim")
    summary.append("Found ", style="bold")
    summary.append(f"{file_count}", style="cyan bold")
    summary.append(" D file(s)", style="bold")

    console.print(Panel(summary, title="[bold blue]ceres[/]", border_style="blue"))


def print_module_summary(modules: Sequence[ModuleDoc]) -> None:
    """Print one table row per parsed module."""
    table = Table(title="Modules", show_header=True, header_style="bold magenta")
    table.add_column("Module", style="cyan")
    table.add_column("Classes", justify="right")
    table.add_column("Enums", justify="right")
    table.add_column("Functions", justify="right")

    for module in modules:
        table.add_row(
            rich_escape(module.name),
            str(len(module.classes)),
            str(len(module.enums)),
            str(len(module.functions)),
        )

    console.print(table)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ceres",
        description="Generate HTML documentation from D source files",
    )
    parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=Path("."),
        help="D file or project directory (default: current directory)"
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=Path(DEFAULT_OUTPUT_DIR),
        help=f"Output directory for HTML pages (default: {DEFAULT_OUTPUT_DIR})"
    )
    parser.add_argument(
        "--json",
        type=Path,
        metavar="FILE",
        help="Also save the extracted modules to a JSON file"
    )
    parser.add_argument(
        "--no-html",
        action="store_true",
        help="Skip HTML generation"
    )
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        default=1,
        help="Parse files with this many worker processes (default: 1)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Show progress (-v) or debug output (-vv)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if args.jobs < 1:
        console.print("[bold red]Error:[/] --jobs must be at least 1")
        return 1

    target: Path = args.path
    if not target.exists():
        console.print(f"[bold red]Error:[/] Path does not exist: {rich_escape(str(target))}")
        return 1

    try:
        project, files = collect_source_files(target)
    except NoSourceFilesError as e:
        console.print(f"[bold red]Error:[/] {rich_escape(str(e))}")
        return 1

    print_target(target, project, len(files))

    modules = process_files(files, jobs=args.jobs)
    if not modules:
        console.print(
            f"[bold red]Error:[/] None of the {len(files)} D file(s) could be read"
        )
        return 1

    print_module_summary(modules)

    if args.json:
        save_modules(modules, args.json)
        console.print(f"[bold green]✓[/] Modules saved to [underline]{rich_escape(str(args.json))}[/]")

    if not args.no_html:
        project_name = title_case(project.project_name) if project else ""
        license_type = project.license_type if project else ""

        console.print(f"Generating documentation in [blue]{rich_escape(str(args.output))}[/]")
        HTMLGenerator(modules, args.output, project_name, license_type).generate()

        console.print("[bold green]✓[/] Documentation generated successfully.")
        console.print(f"Open [underline]{rich_escape(str(args.output / INDEX_PAGE))}[/] to view")

    return 0


if __name__ == "__main__":
    exit(main())
