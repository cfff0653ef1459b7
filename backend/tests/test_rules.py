from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path

from login_form.core.config import get_settings
from login_form.core.rules import DEFAULT_RULES, RuleConfigError, RuleSet, StaticRuleSource, load_rules
from login_form.models.rules import FieldRule
from login_form.services.markup import MarkupRuleSource, render_login_form
from login_form.services.validation import get_rule_set, get_validator


class RuleSetTests(unittest.TestCase):
    def test_default_rules_in_form_order(self):
        self.assertEqual(list(DEFAULT_RULES), ["email", "password"])
        self.assertEqual(DEFAULT_RULES["email"].placement, "prepend")
        self.assertEqual(DEFAULT_RULES["password"].placement, "append")

    def test_duplicate_field_rejected(self):
        with self.assertRaises(RuleConfigError):
            RuleSet([FieldRule(name="email"), FieldRule(name="email")])

    def test_invalid_regex_rejected(self):
        with self.assertRaises(ValueError):
            FieldRule(name="email", pattern="([a-z")

    def test_static_source_unknown_field(self):
        self.assertIsNone(StaticRuleSource().rule_for("username"))


class LoadRulesTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "rules.json"

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, payload: str) -> Path:
        self.path.write_text(payload, encoding="utf-8")
        return self.path

    def test_load_valid_file(self):
        rules = load_rules(
            self._write(
                json.dumps(
                    {
                        "email": {"pattern": "[a-z]+@[a-z]+\\.org", "help_text": "org only", "placement": "prepend"},
                        "password": {"pattern": "[0-9]{6}", "help_text": "six digits"},
                    }
                )
            )
        )
        self.assertEqual(list(rules), ["email", "password"])
        self.assertEqual(rules["email"].help_text, "org only")
        self.assertEqual(rules["password"].placement, "append")

    def test_missing_file(self):
        with self.assertRaises(RuleConfigError):
            load_rules(self.path)

    def test_bad_json(self):
        with self.assertRaises(RuleConfigError):
            load_rules(self._write("{not json"))

    def test_not_an_object(self):
        with self.assertRaises(RuleConfigError):
            load_rules(self._write("[]"))

    def test_bad_regex(self):
        with self.assertRaises(RuleConfigError):
            load_rules(self._write(json.dumps({"email": {"pattern": "(unclosed"}})))

    def test_bad_placement(self):
        with self.assertRaises(RuleConfigError):
            load_rules(self._write(json.dumps({"email": {"placement": "sideways"}})))


class MarkupRuleSourceTests(unittest.TestCase):
    def test_rendered_markup_round_trips_every_rule(self):
        source = MarkupRuleSource(render_login_form(DEFAULT_RULES))
        for name, rule in DEFAULT_RULES.items():
            with self.subTest(field=name):
                self.assertEqual(source.rule_for(name), rule)

    def test_markup_escaping_preserves_pattern(self):
        rules = RuleSet([FieldRule(name="email", pattern='[^"<>&]+', help_text='No "quotes" & <tags>')])
        source = MarkupRuleSource(render_login_form(rules))
        self.assertEqual(source.rule_for("email"), rules["email"])

    def test_input_without_pattern_has_no_constraint(self):
        source = MarkupRuleSource('<form><input name="email" title="help"></form>')
        rule = source.rule_for("email")
        self.assertIsNone(rule.pattern)
        self.assertEqual(rule.help_text, "help")
        self.assertIsNone(source.rule_for("password"))

    def test_unnamed_inputs_are_ignored(self):
        source = MarkupRuleSource(
            '<form><input pattern="[0-9]+"><input name="email" pattern="[a-z]+"><input name="email"></form>'
        )
        self.assertEqual(source.rule_for("email").pattern, "[a-z]+")


class SettingsRulesTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self._env_backup = os.environ.get("LOGIN_FORM_RULES_FILE")
        self.path = Path(self._tmp.name) / "rules.json"
        self.path.write_text(json.dumps({"email": {"pattern": "[a-z]+"}}), encoding="utf-8")
        os.environ["LOGIN_FORM_RULES_FILE"] = str(self.path)
        self._clear_caches()

    def tearDown(self):
        if self._env_backup is None:
            os.environ.pop("LOGIN_FORM_RULES_FILE", None)
        else:
            os.environ["LOGIN_FORM_RULES_FILE"] = self._env_backup
        self._clear_caches()
        self._tmp.cleanup()

    @staticmethod
    def _clear_caches():
        get_settings.cache_clear()
        get_rule_set.cache_clear()
        get_validator.cache_clear()

    def test_rules_file_setting_replaces_defaults(self):
        self.assertEqual(get_settings().rules_file, self.path)
        self.assertEqual(list(get_rule_set()), ["email"])
        self.assertTrue(get_validator().validate("email", "joe").valid)
        self.assertTrue(get_validator().validate("password", "").valid)


if __name__ == "__main__":
    unittest.main()
