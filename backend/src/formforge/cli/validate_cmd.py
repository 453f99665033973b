"""Validate a submission file against a form schema."""

import json
from dataclasses import replace
from pathlib import Path

import click
import yaml

from formforge.config import EngineConfig
from formforge.schemas.loader import load_schema
from formforge.schemas.templates import load_template
from formforge.validation.engine import ValidationEngine
from formforge.validation.errors import FormForgeError


def _load_data(data_path: Path) -> dict:
    try:
        with open(data_path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise click.ClickException(f"Cannot read submission data from {data_path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise click.ClickException(f"Submission data in {data_path} must be a mapping")
    return data


@click.command()
@click.argument("schema_ref", metavar="SCHEMA")
@click.argument("data_path", metavar="DATA", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strict", is_flag=True, default=False, help="Fail on unknown rules and warn on conditions that cannot be evaluated.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as JSON.")
def validate(schema_ref: str, data_path: Path, strict: bool, as_json: bool):
    """Validate submission DATA against SCHEMA.

    SCHEMA is a YAML/JSON schema file, or ``template:<id>`` for a bundled
    template. Exits with status 1 when the submission is invalid.
    """
    try:
        if schema_ref.startswith("template:"):
            form_schema = load_template(schema_ref.split(":", 1)[1]).schema
        else:
            form_schema = load_schema(Path(schema_ref))
    except FormForgeError as e:
        raise click.ClickException(str(e))

    data = _load_data(data_path)

    config = EngineConfig.from_env()
    if strict:
        config = replace(config, strict=True)

    engine = ValidationEngine(config)
    try:
        result = engine.validate(form_schema, data)
    finally:
        engine.close()

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.valid:
        click.echo(click.style("Submission is valid.", fg="green", bold=True))
    else:
        for field_id, messages in result.errors.items():
            for message in messages:
                click.echo(click.style(f"  ✗ {field_id}: {message}", fg="red"))
        count = sum(len(m) for m in result.errors.values())
        click.echo(click.style(f"\n{count} error(s) found", fg="red", bold=True))

    if not result.valid:
        raise SystemExit(1)
