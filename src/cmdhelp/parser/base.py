"""Canonical data models for parsed command help.

The syntax parser, the legacy metadata normalizer and the module page
reader all produce these models for downstream renderers.
"""

from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

SWITCH_PARAMETER_TYPE = "SwitchParameter"
ALL_PARAMETER_SETS = "(All)"
NAMED = "Named"


class ParameterDeclaration(BaseModel):
    """A single parameter occurrence in a syntax summary."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    position: int | None = None  # None means Named
    is_mandatory: bool

    @property
    def is_positional(self) -> bool:
        return self.position is not None

    @property
    def is_switch(self) -> bool:
        return self.type == SWITCH_PARAMETER_TYPE

    @property
    def position_label(self) -> str:
        return NAMED if self.position is None else str(self.position)


class ParsedSyntax(BaseModel):
    """One parsed syntax summary line."""

    command_name: str
    has_common_parameters: bool = False
    parameters: list[ParameterDeclaration] = []
    raw_source: str = ""

    def positional_parameters(self) -> list[ParameterDeclaration]:
        return [p for p in self.parameters if p.is_positional]

    def get_parameter(self, name: str) -> ParameterDeclaration | None:
        """Case-insensitive lookup; returns the first declaration with that name."""
        wanted = name.lower()
        for p in self.parameters:
            if p.name.lower() == wanted:
                return p
        return None


def _split_list(raw: str) -> list[str]:
    return [piece.strip() for piece in raw.split(",") if piece.strip()]


class LegacyParameterAttributes(BaseModel):
    """A legacy parameter metadata record, as written in older help files.

    Fields can be populated either by attribute name or by the keys used
    in the legacy YAML block (``Parameter Sets``, ``Accept pipeline input``...).
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(default="", alias="Type")
    parameter_sets: str = Field(default="", alias="Parameter Sets")
    aliases: str = Field(default="", alias="Aliases")
    required: bool = Field(default=False, alias="Required")
    position: str = Field(default="", alias="Position")
    default_value: str = Field(default="", alias="Default value")
    accept_pipeline_input: str = Field(default="", alias="Accept pipeline input")
    accept_wildcard_characters: bool = Field(default=False, alias="Accept wildcard characters")

    @field_validator(
        "type",
        "parameter_sets",
        "aliases",
        "position",
        "default_value",
        "accept_pipeline_input",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value):
        # YAML turns `Position: 0` or `Accept pipeline input: False` into non-strings
        if value is None:
            return ""
        if isinstance(value, list):
            return ", ".join(str(v) for v in value)
        return str(value)

    @field_validator("required", "accept_wildcard_characters", mode="before")
    @classmethod
    def _coerce_flag(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return False
        return value

    def parameter_set_list(self) -> list[str]:
        return _split_list(self.parameter_sets) or [ALL_PARAMETER_SETS]

    def parameter_set_includes(self, name: str) -> bool:
        wanted = name.lower()
        return any(p.lower() == wanted for p in _split_list(self.parameter_sets))

    def alias_list(self) -> list[str]:
        return _split_list(self.aliases)

    def to_yaml_string(self) -> str:
        """Render the record back as a fenced legacy YAML block."""
        body = yaml.safe_dump(self.model_dump(by_alias=True), sort_keys=False)
        return f"```yaml\n{body}```\n"


class NormalizedParameterSet(BaseModel):
    """Per parameter set behaviour of a normalized parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    position: str = ""
    is_required: bool = False
    value_by_pipeline: bool = False
    value_by_pipeline_by_property_name: bool = False
    value_from_remaining_arguments: bool = False


class NormalizedParameter(BaseModel):
    """Canonical parameter metadata, independent of the source format."""

    type: str = ""
    default_value: str = ""
    globbing: bool = False
    aliases: set[str] = set()
    dont_show: bool = False
    parameter_sets: list[NormalizedParameterSet] = []

    @field_serializer("aliases")
    def _serialize_aliases(self, aliases: set[str]) -> list[str]:
        return sorted(aliases)

    def parameter_set_includes(self, name: str) -> bool:
        wanted = name.lower()
        return any(ps.name.lower() == wanted for ps in self.parameter_sets)


class Block(BaseModel):
    """A heading or paragraph from a Markdown document."""

    kind: Literal["heading", "paragraph"]
    level: int = 0  # heading level, 0 for paragraphs
    text: str

    @property
    def is_heading(self) -> bool:
        return self.kind == "heading"


class ParsedMarkdownContent(BaseModel):
    """Front matter plus the flat block sequence of a Markdown document."""

    metadata: dict | None = None  # None when the document has no front matter
    metadata_error: str | None = None
    blocks: list[Block] = []
    source: str = ""


class DiagnosticMessage(BaseModel):
    source: str
    message: str
    severity: Literal["warning", "error", "information"] = "warning"


class Diagnostics(BaseModel):
    file_name: str = ""
    messages: list[DiagnosticMessage] = []

    def warn(self, source: str, message: str) -> None:
        self.messages.append(DiagnosticMessage(source=source, message=message))


class ModuleCommandInfo(BaseModel):
    name: str = ""
    link: str = ""
    description: str = ""


class ModuleFileInfo(BaseModel):
    """Content of a module landing page."""

    metadata: dict = {}
    title: str = ""
    module: str = ""
    description: str = ""
    optional_element: str = ""
    commands: list[ModuleCommandInfo] = []
    diagnostics: Diagnostics = Field(default_factory=Diagnostics, exclude=True)


class ValidationResult(BaseModel):
    path: str = ""
    is_valid: bool = True
    messages: list[str] = []
