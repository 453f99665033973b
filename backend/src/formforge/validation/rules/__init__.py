"""Built-in rule implementations, grouped by category."""

from formforge.validation.rules.builtins import register_builtin_rules

__all__ = ["register_builtin_rules"]
