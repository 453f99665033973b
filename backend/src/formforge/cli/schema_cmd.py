"""Schema CLI commands: check schema documents."""

from pathlib import Path

import click

from formforge.schemas.loader import SCHEMA_SUFFIXES
from formforge.schemas.validator import validate_schema_file


@click.group()
def schema():
    """Form schema commands."""
    pass


@schema.command()
@click.argument("target_path", metavar="PATH", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
def check(target_path: Path, strict: bool):
    """Check a schema file, or every schema file in a directory."""
    if target_path.is_dir():
        files = sorted(p for p in target_path.iterdir() if p.suffix in SCHEMA_SUFFIXES)
    else:
        files = [target_path]

    issues = []
    for path in files:
        issues.extend(validate_schema_file(path, strict=strict))

    errors = [i for i in issues if i.severity == "error"]
    warnings = [i for i in issues if i.severity == "warning"]

    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} schema error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    if warnings:
        click.echo(click.style(f"{len(warnings)} warning(s) found.", fg="yellow"))

    click.echo(click.style(f"\nChecked {len(files)} schema file(s), all valid.", fg="green", bold=True))
