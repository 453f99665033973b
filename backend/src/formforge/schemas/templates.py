"""Bundled form templates.

Each template is a YAML file under ``form_templates/`` holding catalogue
metadata and a ``schema`` document.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from formforge.schemas.loader import SCHEMA_SUFFIXES, load_document, schema_from_dict
from formforge.validation.errors import SchemaLoadError, TemplateNotFoundError
from formforge.validation.types import FormSchema

TEMPLATES_DIR = Path(__file__).parent / "form_templates"


@dataclass
class FormTemplate:
    template_id: str
    name: str
    description: str
    category: str
    document: dict[str, Any]

    @property
    def schema(self) -> FormSchema:
        return schema_from_dict(self.document, source=f"template:{self.template_id}")


def _template_files(directory: Path) -> dict[str, Path]:
    return {
        path.stem: path
        for path in sorted(directory.iterdir())
        if path.suffix in SCHEMA_SUFFIXES
    }


def list_templates(directory: Path = TEMPLATES_DIR) -> list[FormTemplate]:
    """Load every template in ``directory``, ordered by id."""
    return [load_template(template_id, directory) for template_id in _template_files(directory)]


def load_template(template_id: str, directory: Path = TEMPLATES_DIR) -> FormTemplate:
    """Load one template by id.

    Raises:
        TemplateNotFoundError: If no template file has that id
        SchemaLoadError: If the template file is malformed
    """
    files = _template_files(directory)
    path = files.get(template_id)
    if path is None:
        raise TemplateNotFoundError(template_id, sorted(files))

    data = load_document(path)
    document = data.get("schema")
    if not isinstance(document, dict):
        raise SchemaLoadError(str(path), "template has no 'schema' mapping")

    return FormTemplate(
        template_id=str(data.get("template_id") or template_id),
        name=str(data.get("name") or template_id),
        description=str(data.get("description") or ""),
        category=str(data.get("category") or "general"),
        document=document,
    )
