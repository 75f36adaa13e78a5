"""
Command-line interface for extended family summaries.

Reads a GEDCOM file and prints the extended family of one person.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.table import Table

from extended_family import __version__
from extended_family.config import EmptyBlockPolicy, ExtendedFamilyConfig
from extended_family.core.extended_family import ExtendedFamilyFinder
from extended_family.core.gedcom import GedcomManager, from_xref
from extended_family.core.graph import FamilyGraph
from extended_family.core.models import Category
from extended_family.reports.summary import ExtendedFamilySummary

console = Console()


def _load_gedcom(path: Path) -> GedcomManager:
    manager = GedcomManager()
    manager.load(path)
    return manager


def _find_by_name(manager: GedcomManager, query: str) -> list[str]:
    """Xrefs of persons matching "Given" or "Given Surname"."""
    words = query.split()
    if not words:
        return []
    if len(words) == 1:
        return manager.find_person_by_name(given=words[0])
    return manager.find_person_by_name(given=" ".join(words[:-1]), surname=words[-1])


@click.group()
@click.version_option(version=__version__, prog_name="extended-family")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx, verbose):
    """
    Extended family of a person in a GEDCOM file.

    Lists grandparents, parents, uncles and aunts, siblings, partners,
    cousins, nephews and nieces, children and grandchildren.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@cli.command("show")
@click.argument("gedcom_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("person_id")
@click.option("--config", "-c", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Settings YAML (defaults to the bundled settings)")
@click.option("--only", "-o", multiple=True, type=click.Choice([c.value for c in Category]),
              help="Compute only these categories")
@click.option("--policy", "-p", type=click.Choice([p.value for p in EmptyBlockPolicy]),
              help="How to show empty categories")
@click.option("--raw", is_flag=True, help="Print Markdown source instead of rendering it")
def show(gedcom_file: Path, person_id: str, config_path: Optional[Path],
         only: tuple[str, ...], policy: Optional[str], raw: bool):
    """
    Show the extended family of PERSON_ID.

    PERSON_ID is the GEDCOM xref of the person, with or without @ signs,
    or a name such as "Lena" or "Lena Mueller" matching exactly one person.
    """
    try:
        config = ExtendedFamilyConfig.from_yaml(config_path)
    except (FileNotFoundError, ValidationError) as e:
        raise click.BadParameter(str(e), param_hint="--config")

    if only:
        config = ExtendedFamilyConfig.only(*only, empty_block_policy=config.empty_block_policy)
    if policy:
        config = config.model_copy(update={"empty_block_policy": EmptyBlockPolicy(policy)})

    manager = _load_gedcom(gedcom_file)
    finder = ExtendedFamilyFinder(FamilyGraph.from_gedcom(manager), config)
    family = finder.find(person_id.strip("@"))

    if family is None:
        matches = _find_by_name(manager, person_id)
        if len(matches) > 1:
            console.print(f"[red]Error: {person_id} matches {len(matches)} people: {', '.join(matches)}[/red]")
            sys.exit(1)
        if matches:
            family = finder.find(from_xref(matches[0]))

    if family is None:
        console.print(f"[red]Error: person {person_id} not found in {gedcom_file}[/red]")
        sys.exit(1)

    report = ExtendedFamilySummary(family, config.empty_block_policy).generate()
    if raw:
        click.echo(report)
    else:
        console.print(Markdown(report))


@cli.command("validate")
@click.argument("gedcom_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(gedcom_file: Path):
    """Check the family links of a GEDCOM file."""
    manager = _load_gedcom(gedcom_file)
    issues = manager.validate()

    if not issues:
        console.print("[green]No problems found.[/green]")
        return

    table = Table(title=f"Problems in {gedcom_file.name}")
    table.add_column("Severity")
    table.add_column("Record")
    table.add_column("Message")
    for issue in issues:
        color = "red" if issue.severity == "error" else "yellow"
        table.add_row(f"[{color}]{issue.severity}[/{color}]", issue.record_id or "-", issue.message)
    console.print(table)

    if manager.errors:
        sys.exit(1)


@cli.command("stats")
@click.argument("gedcom_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def stats(gedcom_file: Path):
    """Show record counts of a GEDCOM file."""
    manager = _load_gedcom(gedcom_file)
    manager.validate()

    table = Table(title=gedcom_file.name)
    table.add_column("Records")
    table.add_column("Count", justify="right")
    for key, value in manager.get_statistics().items():
        table.add_row(key.replace("_", " ").capitalize(), str(value))
    console.print(table)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
