"""
Server-side form validation:
• FormValidator.validate      – check one field against its rule
• FormValidator.authenticate  – produce the POST /login message
• get_rule_set / get_validator – cached FastAPI dependencies
"""
import logging
import re
from functools import lru_cache

from ..core.config import get_settings
from ..core.rules import DEFAULT_RULES, RuleSet, RuleSource, StaticRuleSource, load_rules
from ..models.auth import AuthenticationResponse, AuthOutcome, ValidationResult

log = logging.getLogger("validation")

INCOMPLETE_MESSAGE = "Please complete the form"
PASSED_TEMPLATE = "{email} and {password} passed the formal validation, but you still have to be authenticated"
INVALID_TEMPLATE = "Invalid input: {fields}"

LOGIN_FIELDS = ("email", "password")


class FormValidator:
    def __init__(self, source: RuleSource):
        self._source = source
        self._compiled: dict[str, re.Pattern[str] | None] = {}

    def _pattern_for(self, field: str) -> re.Pattern[str] | None:
        if field not in self._compiled:
            rule = self._source.rule_for(field)
            self._compiled[field] = re.compile(rule.pattern) if rule and rule.pattern else None
        return self._compiled[field]

    def validate(self, field: str, value: str) -> ValidationResult:
        """
        Whole-value match, same as the HTML5 `pattern` attribute.
        A field without a pattern always passes.
        """
        pattern = self._pattern_for(field)
        if pattern is None or pattern.fullmatch(value):
            return ValidationResult(field=field, valid=True)
        rule = self._source.rule_for(field)
        return ValidationResult(field=field, valid=False, help_text=rule.help_text if rule else None)

    def authenticate(self, email: str, password: str) -> AuthenticationResponse:
        if not email or not password:
            log.info("Login rejected: form incomplete")
            return AuthenticationResponse(outcome=AuthOutcome.INCOMPLETE, message=INCOMPLETE_MESSAGE)

        values = dict(zip(LOGIN_FIELDS, (email, password)))
        failed = [name for name in LOGIN_FIELDS if not self.validate(name, values[name]).valid]
        if failed:
            log.info("Login rejected: %s failed validation", ", ".join(failed))
            return AuthenticationResponse(
                outcome=AuthOutcome.INVALID,
                message=INVALID_TEMPLATE.format(fields=", ".join(failed)),
            )

        log.info("Login form passed formal validation")
        return AuthenticationResponse(
            outcome=AuthOutcome.PASSED,
            message=PASSED_TEMPLATE.format(email=email, password=password),
        )


@lru_cache
def get_rule_set() -> RuleSet:
    settings = get_settings()
    if settings.rules_file is None:
        return DEFAULT_RULES
    log.info("Loading field rules from %s", settings.rules_file)
    return load_rules(settings.rules_file)


@lru_cache
def get_validator() -> FormValidator:
    return FormValidator(StaticRuleSource(get_rule_set()))
