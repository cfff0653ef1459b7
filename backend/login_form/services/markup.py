"""
markup.py – login form markup helpers
──────────────────────────────────────
render_login_form() writes every rule of a RuleSet into the `pattern`,
`title` and `data-help-placement` attributes of its <input>. The browser
script (static/js/login.js) reads its rules back from exactly those
attributes; MarkupRuleSource does the same on the Python side so the two
can be compared.
"""
from html import escape

from bs4 import BeautifulSoup

from ..core.rules import RuleSet
from ..models.rules import FieldRule

_INPUT_TYPES = {"email": "email", "password": "password"}


def _attr(value: str) -> str:
    return escape(value, quote=True)


def _render_input(rule: FieldRule) -> str:
    attrs = [
        f'type="{_INPUT_TYPES.get(rule.name, "text")}"',
        f'id="{_attr(rule.name)}"',
        f'name="{_attr(rule.name)}"',
    ]
    if rule.pattern is not None:
        attrs.append(f'pattern="{_attr(rule.pattern)}"')
    if rule.help_text:
        attrs.append(f'title="{_attr(rule.help_text)}"')
    attrs.append(f'data-help-placement="{rule.placement}"')
    return (
        f'    <label for="{_attr(rule.name)}">{_attr(rule.name.capitalize())}</label>\n'
        f"    <input {' '.join(attrs)}>\n"
    )


def render_login_form(rules: RuleSet, title: str = "Login form") -> str:
    inputs = "".join(_render_input(rules[name]) for name in rules)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '  <meta charset="utf-8">\n'
        f"  <title>{_attr(title)}</title>\n"
        "</head>\n"
        "<body>\n"
        '  <form id="login-form" method="post" action="/login">\n'
        f"{inputs}"
        '    <button type="submit" id="login-submit">Login</button>\n'
        "  </form>\n"
        '  <script src="/static/js/login.js"></script>\n'
        "</body>\n"
        "</html>\n"
    )


class MarkupRuleSource:
    """
    RuleSource backed by form markup: a field's rule is whatever its
    <input> declares. Missing `pattern` → no constraint.
    """

    def __init__(self, markup: str):
        soup = BeautifulSoup(markup, "html.parser")
        self._rules: dict[str, FieldRule] = {}
        for field in soup.find_all("input", attrs={"name": True}):
            name = field.get("name")
            if not name or name in self._rules:
                continue
            placement = field.get("data-help-placement")
            self._rules[name] = FieldRule(
                name=name,
                pattern=field.get("pattern"),
                help_text=field.get("title") or "",
                placement=placement if placement in ("prepend", "append") else "append",
            )

    def rule_for(self, field_name: str) -> FieldRule | None:
        return self._rules.get(field_name)
