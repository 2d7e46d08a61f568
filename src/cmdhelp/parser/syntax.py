"""Syntax summary parser.

Parses the one-line invocation summary printed for a command, e.g.::

    Get-Item [-Path] <string[]> [-Filter <string>] [-Force] [<CommonParameters>]

into a ParsedSyntax with one ParameterDeclaration per parameter, in source order.
"""

import logging
import re

from .base import SWITCH_PARAMETER_TYPE, ParameterDeclaration, ParsedSyntax
from .errors import EmptyInputError, MalformedParameterError

logger = logging.getLogger(__name__)

COMMON_PARAMETERS_MARKER = "CommonParameters"

# Only space, CR and LF separate tokens; tabs are part of a token.
_TOKEN_SEPARATOR = re.compile(r"[ \r\n]+")


def tokenize(line: str | None) -> list[str]:
    """Split a syntax summary into non-empty tokens."""
    if not line:
        return []
    return [t for t in _TOKEN_SEPARATOR.split(line) if t]


def parse_syntax(line: str | None) -> ParsedSyntax:
    """Parse a syntax summary string.

    Raises EmptyInputError for empty or blank input and
    MalformedParameterError for any token outside the grammar.
    """
    tokens = tokenize(line)
    if not tokens:
        raise EmptyInputError()

    syntax = ParsedSyntax(command_name=tokens[0], raw_source=line)
    position = 0

    i = 1
    while i < len(tokens):
        token = tokens[i]
        if COMMON_PARAMETERS_MARKER in token:
            syntax.has_common_parameters = True
            i += 1
            continue

        if i + 1 < len(tokens) and tokens[i + 1].startswith("<"):
            param = _parse_typed(token, tokens[i + 1], position)
            i += 2
        else:
            param = _parse_switch(token)
            i += 1

        if param.is_positional:
            position += 1
        logger.debug("%s: %s -> %s", syntax.command_name, token, param.position_label)
        syntax.parameters.append(param)

    return syntax


def _strip_name(token: str) -> str:
    return token.lstrip("[").rstrip("]").lstrip("-")


def _strip_type(token: str) -> str:
    return token.rstrip("]").lstrip("<").rstrip(">")


def _parse_typed(token: str, type_token: str, position: int) -> ParameterDeclaration:
    if token.startswith("[[") and token.endswith("]"):
        # [[-Name] <type>]
        name, pos, mandatory = _strip_name(token), position, False
    elif token.startswith("[") and token.endswith("]"):
        # [-Name] <type>
        name, pos, mandatory = _strip_name(token), position, True
    elif token.startswith("[") and type_token.endswith("]"):
        # [-Name <type>]
        name, pos, mandatory = token.lstrip("[").lstrip("-"), None, False
    elif type_token.startswith("<") and type_token.endswith(">"):
        # -Name <type>
        name, pos, mandatory = token.lstrip("-"), None, True
    else:
        raise MalformedParameterError(f"{token} {type_token}")

    if not name:
        raise MalformedParameterError(f"{token} {type_token}")

    return ParameterDeclaration(
        name=name,
        type=_strip_type(type_token),
        position=pos,
        is_mandatory=mandatory,
    )


def _parse_switch(token: str) -> ParameterDeclaration:
    if token.startswith("-"):
        name, mandatory = token.lstrip("-"), True
    elif token.startswith("[") and token.endswith("]"):
        name, mandatory = _strip_name(token), False
    else:
        raise MalformedParameterError(token)

    if not name:
        raise MalformedParameterError(token)

    return ParameterDeclaration(name=name, type=SWITCH_PARAMETER_TYPE, is_mandatory=mandatory)
