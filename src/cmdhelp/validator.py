"""Validates parsed and normalized command help models.

Parsing and normalization accept whatever they can; these checks are an
optional second step for callers that want to reject questionable output.
"""

from collections import Counter

from cmdhelp.parser.base import ModuleFileInfo, NormalizedParameter, ParsedSyntax, ValidationResult


def validate_syntax(syntax: ParsedSyntax) -> list[str]:
    """Check a parsed syntax summary for duplicate names and position gaps.

    Returns a list of error messages, empty when the syntax is valid.
    """
    errors = []
    counts = Counter(p.name.lower() for p in syntax.parameters)
    for p in syntax.parameters:
        if counts[p.name.lower()] > 1:
            errors.append(f"{syntax.command_name}: parameter '{p.name}' is declared {counts[p.name.lower()]} times")
            counts[p.name.lower()] = 0

    positions = [p.position for p in syntax.positional_parameters()]
    if positions != list(range(len(positions))):
        errors.append(f"{syntax.command_name}: positional indices {positions} are not sequential")
    return errors


def validate_parameter(parameter: NormalizedParameter) -> list[str]:
    """Check a normalized parameter.

    Returns a list of error messages, empty when the parameter is valid.
    """
    errors = []
    if not parameter.type.strip():
        errors.append("Parameter has no type")
    if not parameter.parameter_sets:
        errors.append("Parameter belongs to no parameter set")

    seen = set()
    for ps in parameter.parameter_sets:
        if not ps.name.strip():
            errors.append("Parameter set with an empty name")
            continue
        key = ps.name.lower()
        if key in seen:
            errors.append(f"Parameter set '{ps.name}' is listed more than once")
        seen.add(key)
    return errors


def validate_module_file(info: ModuleFileInfo, path: str = "") -> ValidationResult:
    """Check that a module page has a title, a description and named commands."""
    messages = [f"{m.severity}: {m.source}: {m.message}" for m in info.diagnostics.messages]
    is_valid = True

    if not info.title:
        messages.append("error: Title is empty")
        is_valid = False
    if not info.description:
        messages.append("error: Description is empty")
        is_valid = False
    for i, command in enumerate(info.commands):
        if not command.name:
            messages.append(f"error: Command {i + 1} has no name")
            is_valid = False

    return ValidationResult(path=path or info.diagnostics.file_name, is_valid=is_valid, messages=messages)
