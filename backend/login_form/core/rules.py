"""
rules.py – the single table of field constraints
────────────────────────────────────────────────
Both tiers read their rules from here:

• the server validator through StaticRuleSource
• the browser script through the `pattern` / `title` attributes that
  services/markup.py writes into the login form

so a pattern is never spelled out twice.
"""
from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from ..models.rules import FieldRule


class RuleConfigError(ValueError):
    """Raised when a rule table cannot be loaded."""


class RuleSet(Mapping[str, FieldRule]):
    """
    Read-only `field name → FieldRule` table. Iteration follows the order
    the rules were given in, which is also the order of the form fields.
    """

    def __init__(self, rules: Iterable[FieldRule]):
        self._rules: dict[str, FieldRule] = {}
        for rule in rules:
            if rule.name in self._rules:
                raise RuleConfigError(f"duplicate rule for field {rule.name!r}")
            self._rules[rule.name] = rule

    def __getitem__(self, name: str) -> FieldRule:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({list(self._rules)})"


# hyphens are escaped so browsers compiling `pattern` with the `v` flag accept it
DEFAULT_RULES = RuleSet(
    [
        FieldRule(
            name="email",
            pattern=r"^[_a-z0-9\-]+(\.[_a-z0-9\-]+)*@[a-z0-9\-]+(\.[a-z0-9\-]+)*(\.[a-z]{2,4})$",
            help_text="Type a valid email address, e.g. you@yourdomain.com",
            placement="prepend",
        ),
        FieldRule(
            name="password",
            pattern=r"^(?=[\s\S]*[0-9])[\s\S]{4,8}$",
            help_text="Password must be 4 to 8 characters long and contain at least one digit",
            placement="append",
        ),
    ]
)


class RuleSource(Protocol):
    def rule_for(self, field_name: str) -> FieldRule | None: ...


class StaticRuleSource:
    """RuleSource backed by an in-memory RuleSet."""

    def __init__(self, rules: RuleSet = DEFAULT_RULES):
        self.rules = rules

    def rule_for(self, field_name: str) -> FieldRule | None:
        return self.rules.get(field_name)


def load_rules(path: Path) -> RuleSet:
    """
    Load a rule table from JSON shaped like

        {"email": {"pattern": "...", "help_text": "...", "placement": "prepend"}}

    Any problem (unreadable file, bad JSON, bad regex) surfaces as
    RuleConfigError so the app refuses to start with a broken table.
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise RuleConfigError(f"cannot read rules from {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise RuleConfigError(f"{path}: expected an object of field rules")

    try:
        return RuleSet(FieldRule(name=name, **entry) for name, entry in raw.items())
    except (TypeError, ValidationError) as exc:
        raise RuleConfigError(f"{path}: {exc}") from exc
