"""Module landing page reader.

A module page looks like::

    ---
    Module Name: Contoso.Tools
    ---
    # Contoso.Tools Module
    ## Description
    Tools for Contoso.
    ## Contoso.Tools Cmdlets
    ### [Get-Widget](Get-Widget.md)
    Gets widgets.
"""

import logging
import re
from pathlib import Path

from .base import ModuleCommandInfo, ModuleFileInfo, ParsedMarkdownContent
from .blocks import parse_markdown, parse_markdown_file
from .errors import InvalidDocumentError
from .walker import DocumentWalker

logger = logging.getLogger(__name__)

LINK_RE = re.compile(r"^\[(?P<name>[^\]]*)\]\((?P<link>[^)]*)\)$")


def read_module_file(content: ParsedMarkdownContent | str) -> ModuleFileInfo:
    """Build a ModuleFileInfo from a parsed (or raw) module page."""
    if isinstance(content, str):
        content = parse_markdown(content)
    if content.metadata_error:
        raise InvalidDocumentError(f"Module page metadata block is unreadable: {content.metadata_error}")
    if content.metadata is None:
        raise InvalidDocumentError("Module page has no metadata block.")

    info = ModuleFileInfo(metadata=content.metadata)
    info.module = str(content.metadata.get("Module Name") or "")

    walker = DocumentWalker(content.blocks)
    info.title = _read_title(walker, info)
    info.description = _read_description(walker, info)
    info.commands = _read_commands(walker)
    return info


def read_module_file_path(file_path: Path) -> ModuleFileInfo:
    info = read_module_file(parse_markdown_file(file_path))
    info.diagnostics.file_name = str(file_path)
    return info


def _read_title(walker: DocumentWalker, info: ModuleFileInfo) -> str:
    index = walker.find_heading(1)
    if index is None:
        logger.warning("Module page has no title")
        info.diagnostics.warn("Title", "Level 1 heading not found.")
        return ""
    walker.seek(index + 1)
    return walker.blocks[index].text


def _read_description(walker: DocumentWalker, info: ModuleFileInfo) -> str:
    index = walker.find_heading(2, "Description")
    if index is None:
        logger.warning("Module page has no description")
        info.diagnostics.warn("Description", "'## Description' heading not found.")
        return ""
    walker.seek(index + 1)

    # the description ends at the command list heading, or at the first
    # command when the page has no second level 2 heading
    max_level = 2 if walker.find_heading(2) is not None else 3
    description = walker.collect_until_next_heading(max_level, index + 1)

    walker.seek(walker.find_heading(max_level))
    return description


def _read_commands(walker: DocumentWalker) -> list[ModuleCommandInfo]:
    commands = []
    index = walker.find_heading(3)
    while index is not None:
        walker.seek(index)
        heading = walker.take_next()
        command = _command_from_heading(heading.text)

        following = walker.peek()
        if following is not None and not following.is_heading:
            command.description = walker.take_next().text.strip()

        commands.append(command)
        index = walker.find_heading(3)
    return commands


def _command_from_heading(text: str) -> ModuleCommandInfo:
    match = LINK_RE.match(text.strip())
    if match:
        return ModuleCommandInfo(name=match.group("name").strip(), link=match.group("link").strip())
    return ModuleCommandInfo(name=text.strip())
