"""Legacy parameter metadata normalizer.

Older help files describe each parameter with a small YAML block::

    Type: String
    Parameter Sets: Path, LiteralPath
    Aliases: PSPath
    Required: True
    Position: 0
    Default value: None
    Accept pipeline input: True (ByPropertyName, ByValue)
    Accept wildcard characters: False

There's no consistency across documentation repositories in how
"Accept pipeline input" is written, so it is classified by an ordered
list of patterns. Unrecognized text means no pipeline input; normalization
never fails.
"""

import logging
import re
from typing import Callable, NamedTuple

import yaml
from pydantic import ValidationError

from .base import LegacyParameterAttributes, NormalizedParameter, NormalizedParameterSet

logger = logging.getLogger(__name__)


class PipelineInput(NamedTuple):
    by_value: bool
    by_property_name: bool


Rule = tuple[re.Pattern, Callable[[re.Match], bool]]

# Observed forms:
#   True | False
#   True (ByPropertyName, ByValue) | True (ByPropertyName) | True (ByValue)
#   ByValue (True), ByName (False) | ByValue (System.Object[]), ByName (System.Object[])
_TRUE = re.compile(r"true$", re.IGNORECASE)
_FALSE = re.compile(r"false$", re.IGNORECASE)
_TRUE_BY_VALUE = re.compile(r"true \(.*ByValue", re.IGNORECASE)
_TRUE_BY_PROPERTY = re.compile(r"true \(.*ByProperty", re.IGNORECASE)
_BY_VALUE_BY_NAME = re.compile(r"ByValue \((?P<value>\w+)\), ByName \((?P<name>\w+)\)", re.IGNORECASE)

BY_VALUE_RULES: list[Rule] = [
    (_TRUE, lambda m: True),
    (_FALSE, lambda m: False),
    (_TRUE_BY_VALUE, lambda m: True),
    (_BY_VALUE_BY_NAME, lambda m: m.group("value").lower() == "true"),
]

BY_PROPERTY_NAME_RULES: list[Rule] = [
    (_TRUE, lambda m: True),
    (_FALSE, lambda m: False),
    (_TRUE_BY_PROPERTY, lambda m: True),
    (_BY_VALUE_BY_NAME, lambda m: m.group("name").lower() == "true"),
]


def apply_rules(rules: list[Rule], text: str | None) -> bool:
    """Return the result of the first rule whose pattern matches the start of text."""
    if not text:
        return False
    value = text.strip()
    for pattern, resolve in rules:
        match = pattern.match(value)
        if match:
            return resolve(match)
    logger.debug("Unrecognized pipeline input text %r", value)
    return False


def classify_pipeline_input(text: str | None) -> PipelineInput:
    return PipelineInput(
        by_value=apply_rules(BY_VALUE_RULES, text),
        by_property_name=apply_rules(BY_PROPERTY_NAME_RULES, text),
    )


def normalize(attrs: LegacyParameterAttributes) -> NormalizedParameter:
    """Convert a legacy record into the canonical parameter model.

    Every parameter set gets the same position, required flag and pipeline
    flags because the legacy format does not vary them per set.
    """
    pipeline = classify_pipeline_input(attrs.accept_pipeline_input)

    parameter_sets = [
        NormalizedParameterSet(
            name=set_name,
            position=attrs.position,
            is_required=attrs.required,
            value_by_pipeline=pipeline.by_value,
            value_by_pipeline_by_property_name=pipeline.by_property_name,
        )
        for set_name in attrs.parameter_set_list()
    ]

    return NormalizedParameter(
        type=attrs.type,
        default_value=attrs.default_value,
        globbing=attrs.accept_wildcard_characters,
        aliases=set(attrs.alias_list()),
        dont_show=False,
        parameter_sets=parameter_sets,
    )


def load_legacy_attributes(text: str) -> LegacyParameterAttributes | None:
    """Load a legacy YAML block. Returns None when it is not a usable record."""
    text = _strip_fence(text)
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        logger.debug("Legacy metadata is not YAML: %s", e)
        return None

    if not isinstance(data, dict):
        logger.debug("Legacy metadata is not a mapping: %r", type(data).__name__)
        return None

    try:
        return LegacyParameterAttributes.model_validate(data)
    except ValidationError as e:
        logger.debug("Legacy metadata failed validation: %s", e)
        return None


def _strip_fence(text: str) -> str:
    """Extract the YAML from a ```yaml fenced block, if the text is one."""
    match = re.search(r"```(?:yaml)?\s*\n(.*?)```", text, re.DOTALL)
    if match:
        return match.group(1)
    return text
