"""Split Markdown text into front matter and a flat heading/paragraph sequence."""

import logging
import re
from pathlib import Path

import yaml

from .base import Block, ParsedMarkdownContent

logger = logging.getLogger(__name__)

HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
CLOSING_HASHES_RE = re.compile(r"\s+#+\s*$")
FENCE_RE = re.compile(r"^(```|~~~)")
FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)


def parse_markdown(text: str) -> ParsedMarkdownContent:
    """Parse Markdown text into metadata and blocks."""
    metadata, metadata_error, body = _split_front_matter(text)
    return ParsedMarkdownContent(
        metadata=metadata,
        metadata_error=metadata_error,
        blocks=_parse_blocks(body),
        source=text,
    )


def parse_markdown_file(file_path: Path) -> ParsedMarkdownContent:
    return parse_markdown(file_path.read_text(encoding="utf-8-sig"))


def _split_front_matter(text: str) -> tuple[dict | None, str | None, str]:
    match = FRONT_MATTER_RE.match(text)
    if not match:
        return None, None, text
    body = text[match.end():]

    try:
        metadata = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.warning("Front matter is not valid YAML: %s", e)
        return None, f"front matter is not valid YAML: {e}", body

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        logger.warning("Front matter is not a mapping")
        return None, f"front matter is a {type(metadata).__name__}, not a mapping", body
    return metadata, None, body


def _parse_blocks(body: str) -> list[Block]:
    blocks: list[Block] = []
    paragraph: list[str] = []
    in_fence = False

    def flush():
        if paragraph:
            blocks.append(Block(kind="paragraph", text="\n".join(paragraph)))
            paragraph.clear()

    for line in body.splitlines():
        if FENCE_RE.match(line.strip()):
            paragraph.append(line)
            in_fence = not in_fence
            continue
        if in_fence:
            paragraph.append(line)
            continue

        heading = HEADING_RE.match(line)
        if heading:
            flush()
            text = CLOSING_HASHES_RE.sub("", heading.group(2)).strip()
            blocks.append(Block(kind="heading", level=len(heading.group(1)), text=text))
        elif not line.strip():
            flush()
        else:
            paragraph.append(line)

    flush()
    return blocks
