"""Load form schemas from YAML or JSON documents."""

import logging
from pathlib import Path
from typing import Any

import yaml

from formforge.validation.errors import SchemaLoadError
from formforge.validation.types import FormSchema

logger = logging.getLogger(__name__)

SCHEMA_SUFFIXES = (".yaml", ".yml", ".json")


def load_document(path: Path) -> dict[str, Any]:
    """Read a schema document into a plain dict.

    JSON is a subset of YAML, so both formats go through ``yaml.safe_load``.

    Raises:
        SchemaLoadError: If the file is missing, unparseable, or not a mapping
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise SchemaLoadError(str(path), e.strerror or str(e)) from e
    except yaml.YAMLError as e:
        raise SchemaLoadError(str(path), f"parse error: {e}") from e

    if data is None:
        raise SchemaLoadError(str(path), "file is empty")
    if not isinstance(data, dict):
        raise SchemaLoadError(str(path), "top level must be a mapping")
    return data


def schema_from_dict(data: dict[str, Any], source: str = "<dict>") -> FormSchema:
    """Build a FormSchema from a parsed document.

    When a ``field_id`` appears more than once the last definition wins and
    keeps the position of the first.

    Raises:
        SchemaLoadError: If a field entry is not a mapping or has no field_id
    """
    if not isinstance(data, dict):
        raise SchemaLoadError(source, "top level must be a mapping")

    raw_fields = data.get("fields") or []
    if not isinstance(raw_fields, list):
        raise SchemaLoadError(source, "'fields' must be a list")

    by_id: dict[str, dict[str, Any]] = {}
    for index, raw in enumerate(raw_fields):
        if not isinstance(raw, dict):
            raise SchemaLoadError(source, f"fields[{index}] must be a mapping")
        if not raw.get("field_id"):
            raise SchemaLoadError(source, f"fields[{index}] has no field_id")
        field_id = str(raw["field_id"])
        if field_id in by_id:
            logger.warning("Duplicate field_id '%s' in %s, keeping the last definition", field_id, source)
        by_id[field_id] = raw

    raw_rules = data.get("cross_field_rules") or []
    if not isinstance(raw_rules, list) or not all(isinstance(r, dict) for r in raw_rules):
        raise SchemaLoadError(source, "'cross_field_rules' must be a list of mappings")

    return FormSchema.from_dict(
        {
            "title": data.get("title"),
            "fields": list(by_id.values()),
            "cross_field_rules": raw_rules,
        }
    )


def load_schema(path: Path | str) -> FormSchema:
    """Load a FormSchema from a ``.yaml``, ``.yml`` or ``.json`` file."""
    path = Path(path)
    return schema_from_dict(load_document(path), source=str(path))
