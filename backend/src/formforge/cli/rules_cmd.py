"""Rule catalogue commands."""

import click

from formforge.validation.engine import ValidationEngine


@click.group()
def rules():
    """Validation rule commands."""
    pass


@rules.command("list")
def list_rules():
    """List the built-in validation rules and their messages."""
    engine = ValidationEngine()
    for name, definition in engine.registry.items():
        click.echo(f"  {name:<20} {definition.message_template}")
    click.echo(f"\n{len(engine.registry)} rule(s) registered")
