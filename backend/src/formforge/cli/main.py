"""FormForge CLI entry point."""

import logging

import click

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="FORMFORGE_LOG_LEVEL",
    show_default=True,
    help="Logging level for engine diagnostics.",
)
def cli(log_level: str):
    """FormForge: schema-driven form validation CLI."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
from formforge.cli.rules_cmd import rules  # noqa: E402
from formforge.cli.schema_cmd import schema  # noqa: E402
from formforge.cli.templates_cmd import templates  # noqa: E402
from formforge.cli.validate_cmd import validate  # noqa: E402

cli.add_command(validate)
cli.add_command(schema)
cli.add_command(rules)
cli.add_command(templates)
