from pathlib import Path

import pytest

from cmdhelp.parser.base import ALL_PARAMETER_SETS, LegacyParameterAttributes
from cmdhelp.parser.legacy import (
    BY_PROPERTY_NAME_RULES,
    BY_VALUE_RULES,
    apply_rules,
    classify_pipeline_input,
    load_legacy_attributes,
    normalize,
)

FIXTURES = Path(__file__).parent / "fixtures"


class TestClassifyPipelineInput:
    @pytest.mark.parametrize(
        "text, by_value, by_name",
        [
            ("True", True, True),
            ("  true ", True, True),
            ("False", False, False),
            ("True (ByPropertyName, ByValue)", True, True),
            ("True (ByPropertyName)", False, True),
            ("True (ByValue)", True, False),
            ("ByValue (False), ByName (True)", False, True),
            ("ByValue (True), ByName (False)", True, False),
            ("byvalue (TRUE), byname (true)", True, True),
            ("ByValue (System.Object[]), ByName (System.Object[])", False, False),
            ("", False, False),
            (None, False, False),
            ("sometimes", False, False),
        ],
    )
    def test_classification(self, text, by_value, by_name):
        result = classify_pipeline_input(text)
        assert result.by_value is by_value
        assert result.by_property_name is by_name

    def test_by_value_rule_order(self):
        # the exact "false" rule wins before any later pattern is tried
        assert apply_rules(BY_VALUE_RULES, "FALSE") is False
        assert len(BY_VALUE_RULES) == 4

    def test_by_property_rule_matches_prefix(self):
        assert apply_rules(BY_PROPERTY_NAME_RULES, "true (ByPropertyName) extra") is True

    @pytest.mark.parametrize(
        "index, text, expected",
        [
            (0, "TRUE", True),
            (1, "false", False),
            (2, "true (ByPropertyName, ByValue)", True),
            (3, "ByValue (True), ByName (False)", True),
            (3, "ByValue (False), ByName (True)", False),
        ],
    )
    def test_each_by_value_rule(self, index, text, expected):
        pattern, resolve = BY_VALUE_RULES[index]
        match = pattern.match(text)
        assert match is not None
        assert resolve(match) is expected
        assert all(p.match(text) is None for p, _ in BY_VALUE_RULES[:index])
        assert apply_rules(BY_VALUE_RULES, text) is expected

    @pytest.mark.parametrize(
        "index, text, expected",
        [
            (0, "True", True),
            (1, "FALSE", False),
            (2, "True (ByPropertyName)", True),
            (3, "ByValue (True), ByName (False)", False),
            (3, "ByValue (False), ByName (True)", True),
        ],
    )
    def test_each_by_property_name_rule(self, index, text, expected):
        pattern, resolve = BY_PROPERTY_NAME_RULES[index]
        match = pattern.match(text)
        assert match is not None
        assert resolve(match) is expected
        assert all(p.match(text) is None for p, _ in BY_PROPERTY_NAME_RULES[:index])
        assert apply_rules(BY_PROPERTY_NAME_RULES, text) is expected

    def test_true_by_value_does_not_set_property_name(self):
        assert apply_rules(BY_PROPERTY_NAME_RULES, "True (ByValue)") is False


class TestNormalize:
    def _attrs(self, **kwargs) -> LegacyParameterAttributes:
        defaults = dict(
            type="String",
            parameter_sets="Path, LiteralPath",
            aliases="PSPath, LP",
            required=True,
            position="0",
            default_value="None",
            accept_pipeline_input="True (ByPropertyName, ByValue)",
            accept_wildcard_characters=True,
        )
        defaults.update(kwargs)
        return LegacyParameterAttributes(**defaults)

    def test_one_set_per_name_with_shared_flags(self):
        param = normalize(self._attrs())
        assert [ps.name for ps in param.parameter_sets] == ["Path", "LiteralPath"]
        for ps in param.parameter_sets:
            assert ps.position == "0"
            assert ps.is_required is True
            assert ps.value_by_pipeline is True
            assert ps.value_by_pipeline_by_property_name is True
            assert ps.value_from_remaining_arguments is False

    def test_scalar_fields(self):
        param = normalize(self._attrs())
        assert param.type == "String"
        assert param.default_value == "None"
        assert param.globbing is True
        assert param.dont_show is False
        assert param.aliases == {"PSPath", "LP"}

    def test_empty_parameter_sets_give_all(self):
        param = normalize(self._attrs(parameter_sets=""))
        assert len(param.parameter_sets) == 1
        assert param.parameter_sets[0].name == ALL_PARAMETER_SETS

    def test_blank_pieces_are_dropped(self):
        param = normalize(self._attrs(parameter_sets=" , Path ,,"))
        assert [ps.name for ps in param.parameter_sets] == ["Path"]

    def test_empty_aliases(self):
        assert normalize(self._attrs(aliases="")).aliases == set()

    def test_pipeline_by_name_only(self):
        param = normalize(self._attrs(accept_pipeline_input="ByValue (False), ByName (True)"))
        ps = param.parameter_sets[0]
        assert ps.value_by_pipeline is False
        assert ps.value_by_pipeline_by_property_name is True

    def test_idempotent(self):
        attrs = self._attrs()
        assert normalize(attrs) == normalize(attrs)
        assert normalize(attrs) is not normalize(attrs)

    def test_membership_is_case_insensitive(self):
        attrs = self._attrs()
        assert attrs.parameter_set_includes("literalpath")
        assert not attrs.parameter_set_includes("Other")
        assert normalize(attrs).parameter_set_includes("PATH")

    def test_aliases_serialize_sorted(self):
        data = normalize(self._attrs()).model_dump(mode="json")
        assert data["aliases"] == ["LP", "PSPath"]


class TestLegacyYaml:
    def test_load_fixture(self):
        attrs = load_legacy_attributes((FIXTURES / "path-parameter.yaml").read_text())
        assert attrs is not None
        assert attrs.type == "String[]"
        assert attrs.parameter_sets == "Path, LiteralPath"
        assert attrs.required is True
        assert attrs.position == "0"
        assert attrs.accept_wildcard_characters is True

    def test_yaml_scalars_become_text(self):
        attrs = load_legacy_attributes(
            "Type: Int32\nPosition: 1\nDefault value:\nAccept pipeline input: False\n"
        )
        assert attrs.position == "1"
        assert attrs.default_value == ""
        assert attrs.accept_pipeline_input == "False"
        assert normalize(attrs).parameter_sets[0].value_by_pipeline is False

    def test_fenced_block(self):
        attrs = load_legacy_attributes("```yaml\nType: String\nRequired: False\n```\n")
        assert attrs.type == "String"
        assert attrs.required is False

    def test_not_a_mapping(self):
        assert load_legacy_attributes("- a\n- b\n") is None

    def test_invalid_yaml(self):
        assert load_legacy_attributes("Type: [unclosed") is None

    def test_yaml_string_uses_legacy_keys(self):
        attrs = LegacyParameterAttributes(type="String", parameter_sets="Path")
        text = attrs.to_yaml_string()
        assert text.startswith("```yaml\n")
        assert text.endswith("```\n")
        assert "Parameter Sets: Path" in text
        assert load_legacy_attributes(text) == attrs
