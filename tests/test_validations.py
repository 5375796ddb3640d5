"""
tests/test_validations.py
Unit tests for extmodel.validations.
"""

from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

from extmodel.dialects import EXTJS4, EXTJS5, TOUCH2
from extmodel.exceptions import ConfigurationError, UnsupportedFeatureError
from extmodel.models import (
    CustomValidation,
    EmailValidation,
    ExclusionValidation,
    FormatValidation,
    InclusionValidation,
    LengthValidation,
    PresenceValidation,
    RangeValidation,
)
from extmodel.utils import JsCode
from extmodel.validations import serialize_validations, validation_node


class TestValidationNode:
    """Single validator entries."""

    def test_presence(self) -> None:
        node = validation_node(PresenceValidation(field="email"), EXTJS4)
        assert node == {"type": "presence", "field": "email"}

    def test_length_bounds(self) -> None:
        node = validation_node(LengthValidation(field="name", min=2, max=64), TOUCH2)
        assert node == {"type": "length", "field": "name", "min": 2, "max": 64}

    def test_length_open_bound(self) -> None:
        node = validation_node(LengthValidation(field="name", max=10), EXTJS4)
        assert node == {"type": "length", "field": "name", "max": 10}

    def test_format_matcher_is_regex_literal(self) -> None:
        node = validation_node(FormatValidation(field="zip", matcher=r"^\d{5}$"), EXTJS4)
        assert node["matcher"] == JsCode(r"/^\d{5}$/")

    def test_inclusion_and_exclusion(self) -> None:
        inc = validation_node(InclusionValidation(field="g", list=["m", "f"]), EXTJS4)
        exc = validation_node(ExclusionValidation(field="u", list=["admin"]), EXTJS4)
        assert inc == {"type": "inclusion", "field": "g", "list": ["m", "f"]}
        assert exc == {"type": "exclusion", "field": "u", "list": ["admin"]}

    def test_email(self) -> None:
        node = validation_node(EmailValidation(field="email"), TOUCH2)
        assert node == {"type": "email", "field": "email"}

    def test_custom_uses_name_and_options(self) -> None:
        rule = CustomValidation(
            field="code", name="checksum", options={"algorithm": "luhn", "strict": True}
        )
        assert validation_node(rule, EXTJS4) == {
            "type": "checksum",
            "field": "code",
            "algorithm": "luhn",
            "strict": True,
        }

    @pytest.mark.parametrize("key", ["type", "field"])
    def test_custom_options_cannot_redefine_reserved_keys(self, key: str) -> None:
        rule = CustomValidation(field="code", name="checksum", options={key: "x"})
        with pytest.raises(ConfigurationError):
            validation_node(rule, EXTJS5)

    @pytest.mark.parametrize("profile", [EXTJS4, TOUCH2])
    def test_range_unsupported_before_extjs5(self, profile) -> None:
        with pytest.raises(UnsupportedFeatureError, match="range"):
            validation_node(RangeValidation(field="age", min=0), profile)

    def test_range_extjs5(self) -> None:
        rule = RangeValidation(field="age", min=0, max=130)
        assert validation_node(rule, EXTJS5, include_field=False) == {
            "type": "range",
            "min": 0,
            "max": 130,
        }

    def test_unknown_variant_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="bogus"):
            validation_node(SimpleNamespace(type="bogus", field="x"), EXTJS4)


class TestSerializeValidations:
    """Whole validation lists."""

    @pytest.fixture()
    def rules(self):
        return [
            PresenceValidation(field="email"),
            LengthValidation(field="name", min=2),
            EmailValidation(field="email"),
        ]

    def test_flat_list_keeps_order(self, rules) -> None:
        assert serialize_validations(rules, EXTJS4) == [
            {"type": "presence", "field": "email"},
            {"type": "length", "field": "name", "min": 2},
            {"type": "email", "field": "email"},
        ]

    def test_extjs5_grouped_by_field(self, rules) -> None:
        grouped = serialize_validations(rules, EXTJS5)
        assert grouped == {
            "email": [{"type": "presence"}, {"type": "email"}],
            "name": [{"type": "length", "min": 2}],
        }
        assert list(grouped) == ["email", "name"]

    def test_empty(self) -> None:
        assert serialize_validations([], EXTJS4) == []
        assert serialize_validations([], EXTJS5) == {}

    def test_unknown_field_emitted(self, caplog: pytest.LogCaptureFixture) -> None:
        rules = [PresenceValidation(field="ghost")]
        with caplog.at_level(logging.DEBUG, logger="extmodel.validations"):
            result = serialize_validations(rules, TOUCH2, frozenset({"id"}))
        assert result == [{"type": "presence", "field": "ghost"}]
        assert "ghost" in caplog.text

    def test_unsupported_rule_fails_whole_list(self) -> None:
        rules = [PresenceValidation(field="a"), RangeValidation(field="b", max=1)]
        with pytest.raises(UnsupportedFeatureError):
            serialize_validations(rules, EXTJS4)
