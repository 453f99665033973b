"""Template CLI commands: list and show bundled templates."""

import click
import yaml

from formforge.schemas.templates import list_templates, load_template
from formforge.validation.errors import TemplateNotFoundError


@click.group()
def templates():
    """Bundled form template commands."""
    pass


@templates.command("list")
def list_cmd():
    """List bundled form templates."""
    for template in list_templates():
        field_count = len(template.document.get("fields") or [])
        click.echo(
            f"  {template.template_id:<20} {template.name} "
            f"({template.category}, {field_count} fields)"
        )


@templates.command()
@click.argument("template_id")
def show(template_id: str):
    """Print the schema of a bundled template as YAML."""
    try:
        template = load_template(template_id)
    except TemplateNotFoundError as e:
        raise click.ClickException(str(e))

    click.echo(f"# {template.name}: {template.description}")
    click.echo(yaml.safe_dump(template.document, sort_keys=False), nl=False)
