"""CLI entry point for cmdhelp."""

import json
import logging
from pathlib import Path

import click
import yaml
from pydantic import BaseModel

from cmdhelp.parser.base import ParsedSyntax
from cmdhelp.parser.detect import detect_format
from cmdhelp.parser.errors import InvalidDocumentError, SyntaxParseError
from cmdhelp.parser.legacy import load_legacy_attributes, normalize
from cmdhelp.parser.module_file import read_module_file_path
from cmdhelp.parser.syntax import parse_syntax
from cmdhelp.validator import validate_module_file, validate_parameter, validate_syntax

DEFAULT_FORMAT = "yaml"

logger = logging.getLogger(__name__)

format_option = click.option(
    "--format", "fmt", default=DEFAULT_FORMAT, type=click.Choice(["yaml", "json"]), help="Output format."
)
output_option = click.option(
    "-o", "--output", default=None, type=click.Path(path_type=Path), help="Write to this file instead of stdout."
)


def _render(data, fmt: str) -> str:
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    elif isinstance(data, list):
        data = [d.model_dump(mode="json") if isinstance(d, BaseModel) else d for d in data]

    if fmt == "json":
        return json.dumps(data, indent=2) + "\n"
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        click.echo(text, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"Saved to {output}")


def _parse_syntaxes(lines: list[str]) -> list[ParsedSyntax]:
    results = []
    for line in lines:
        try:
            parsed = parse_syntax(line)
        except SyntaxParseError as e:
            raise click.ClickException(f"{line!r}: {e}") from e
        for error in validate_syntax(parsed):
            logger.warning(error)
        results.append(parsed)
    return results


def _convert_metadata(file_path: Path):
    attrs = load_legacy_attributes(file_path.read_text(encoding="utf-8-sig"))
    if attrs is None:
        raise click.ClickException(f"{file_path} is not a legacy parameter metadata block.")
    parameter = normalize(attrs)
    for error in validate_parameter(parameter):
        logger.warning("%s: %s", file_path, error)
    return parameter


def _read_module(file_path: Path):
    try:
        return read_module_file_path(file_path)
    except InvalidDocumentError as e:
        raise click.ClickException(f"{file_path}: {e}") from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """cmdhelp: normalize command syntax and parameter metadata for help documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command("parse-syntax")
@click.argument("syntax", nargs=-1)
@click.option("-f", "--file", "file_path", default=None, type=click.Path(exists=True, path_type=Path), help="Read one syntax summary per line from a file.")
@format_option
@output_option
def parse_syntax_cmd(syntax: tuple[str, ...], file_path: Path | None, fmt: str, output: Path | None):
    """Parse syntax summaries into parameter declarations."""
    lines = list(syntax)
    if file_path is not None:
        lines.extend(line for line in file_path.read_text(encoding="utf-8-sig").splitlines() if line.strip())
    if not lines:
        raise click.UsageError("Provide at least one syntax string or --file.")

    _emit(_render(_parse_syntaxes(lines), fmt), output)


@main.command()
@click.argument("metadata_path", type=click.Path(exists=True, path_type=Path))
@format_option
@output_option
def convert_metadata(metadata_path: Path, fmt: str, output: Path | None):
    """Convert a legacy parameter metadata block to the normalized model."""
    _emit(_render(_convert_metadata(metadata_path), fmt), output)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@format_option
@output_option
def read_module(doc_path: Path, fmt: str, output: Path | None):
    """Read a module page into title, description and commands."""
    info = _read_module(doc_path)
    for message in info.diagnostics.messages:
        click.echo(f"Warning: {message.source}: {message.message}", err=True)
    _emit(_render(info, fmt), output)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
def validate(doc_path: Path):
    """Validate a module page."""
    result = validate_module_file(_read_module(doc_path), str(doc_path))
    for message in result.messages:
        click.echo(f"  {message}")
    click.echo(f"Path: {result.path}, IsValid: {result.is_valid}")
    if not result.is_valid:
        raise SystemExit(1)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@format_option
def inspect(doc_path: Path, fmt: str):
    """Detect the kind of input file and print its normalized form."""
    kind = detect_format(doc_path)
    click.echo(f"Detected {kind} input.", err=True)

    if kind == "legacy":
        result = _convert_metadata(doc_path)
    elif kind == "module":
        result = _read_module(doc_path)
    else:
        lines = [line for line in doc_path.read_text(encoding="utf-8-sig").splitlines() if line.strip()]
        result = _parse_syntaxes(lines)
    _emit(_render(result, fmt), None)

