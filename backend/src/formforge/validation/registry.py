"""Rule registry for FormForge.

Maps a rule name to its RuleDefinition (message template + predicate).
Each ValidationEngine owns one registry, populated with the built-in
catalogue at construction and extended by custom registrations.
"""

import logging
import threading
from typing import Any, Callable

from formforge.validation.types import RuleDefinition, RuleValidator

logger = logging.getLogger(__name__)


class _NotFound:
    """Sentinel returned by RuleRegistry.lookup for unknown names."""

    _instance: "_NotFound | None" = None

    def __new__(cls) -> "_NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFound()


class RuleRegistry:
    """Registry of validation rules.

    Registration is additive: entries are never removed, and registering a
    name that already exists replaces the previous definition (last writer
    wins), which is how built-ins are overridden.

    Writers take a lock and publish a fresh dict, so readers can look up
    rules concurrently with a late registration without locking.

    Example:
        registry = RuleRegistry()
        registry.register("even", "Value must be even", lambda v, p, d: int(v) % 2 == 0)

        definition = registry.lookup("even")
        if definition is not NOT_FOUND:
            definition.validator("4", True, {})
    """

    def __init__(self) -> None:
        self._rules: dict[str, RuleDefinition] = {}
        self._builtin_names: frozenset[str] = frozenset()
        self._lock = threading.RLock()

    def register(
        self,
        name: str,
        message_template: str,
        validator: RuleValidator | Callable[..., Any],
    ) -> None:
        """Register a rule, replacing any existing rule with the same name.

        Args:
            name: Rule name as referenced from ``validation_rules``
            message_template: Failure message; may contain ``{param}`` or ``{key}``
            validator: Callable ``(value, param, all_values) -> bool``

        Raises:
            ValueError: If the name is empty or the validator is not callable
        """
        if not name:
            raise ValueError("Rule name must be a non-empty string")
        if not callable(validator):
            raise ValueError(f"Validator for rule '{name}' must be callable")

        with self._lock:
            if name in self._builtin_names and name in self._rules:
                logger.warning("Overriding built-in validation rule '%s'", name)
            rules = dict(self._rules)
            rules[name] = RuleDefinition(message_template=message_template, validator=validator)
            self._rules = rules

    def mark_builtins(self) -> None:
        """Record the currently registered names as the built-in catalogue."""
        with self._lock:
            self._builtin_names = frozenset(self._rules)

    def lookup(self, name: str) -> RuleDefinition | _NotFound:
        """Get a rule definition by name, or NOT_FOUND. Never raises."""
        return self._rules.get(name, NOT_FOUND)

    def is_registered(self, name: str) -> bool:
        return name in self._rules

    def is_builtin(self, name: str) -> bool:
        return name in self._builtin_names

    def list_registered(self) -> list[str]:
        """List all registered rule names."""
        return sorted(self._rules)

    def items(self) -> list[tuple[str, RuleDefinition]]:
        rules = self._rules
        return [(name, rules[name]) for name in sorted(rules)]

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)
