"""Exceptions raised outside the validation path.

Validating a submission never raises for bad data or bad schema
configuration; these exceptions cover loading schema documents and
templates.
"""


class FormForgeError(Exception):
    """Base class for FormForge errors."""


class SchemaLoadError(FormForgeError):
    """A schema document could not be read or parsed."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot load form schema from {source}: {reason}")


class TemplateNotFoundError(FormForgeError):
    """No bundled form template exists with the requested id."""

    def __init__(self, template_id: str, available: list[str]):
        self.template_id = template_id
        self.available = available
        super().__init__(
            f"Form template '{template_id}' does not exist. "
            "Available templates: " + ", ".join(available)
        )
