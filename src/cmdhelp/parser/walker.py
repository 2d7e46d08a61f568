"""Forward-only cursor over the block sequence of a Markdown document.

Sections must appear in document order: a heading behind the cursor is
never found again. Lookups that fail return None rather than raising, so
callers can report a missing optional section as a warning.
"""

import logging
from typing import Iterable

from .base import Block

logger = logging.getLogger(__name__)

ANY_LEVEL = 0


class DocumentWalker:
    """Walks an immutable block sequence with an explicit index."""

    def __init__(self, blocks: Iterable[Block]):
        self.blocks: tuple[Block, ...] = tuple(blocks)
        self.cursor = 0

    def __len__(self) -> int:
        return len(self.blocks)

    def find_heading(self, level: int, text: str = "") -> int | None:
        """Index of the next heading at or after the cursor, or None.

        level ANY_LEVEL matches a heading of any level. A non-empty text
        must equal the heading text exactly (case-sensitive).
        """
        for index in range(self.cursor, len(self.blocks)):
            block = self.blocks[index]
            if not block.is_heading:
                continue
            if level != ANY_LEVEL and block.level != level:
                continue
            if text and block.text != text:
                continue
            return index
        logger.debug("No level %d heading %r after block %d", level, text, self.cursor)
        return None

    def seek(self, index: int | None) -> None:
        """Move the cursor. None moves it past the last block."""
        if index is None or index > len(self.blocks):
            self.cursor = len(self.blocks)
        else:
            self.cursor = max(index, 0)

    def take_next(self) -> Block | None:
        """Return the block at the cursor and advance, or None at the end."""
        if self.cursor >= len(self.blocks):
            return None
        block = self.blocks[self.cursor]
        self.cursor += 1
        return block

    def peek(self) -> Block | None:
        if self.cursor >= len(self.blocks):
            return None
        return self.blocks[self.cursor]

    def collect_until_next_heading(self, max_level: int, start: int | None) -> str:
        """Join block text from start up to the next heading of level <= max_level."""
        if start is None or start < 0 or start >= len(self.blocks):
            return ""

        parts = []
        for block in self.blocks[start:]:
            if block.is_heading and block.level <= max_level:
                break
            parts.append(_block_markdown(block))
        return "\n\n".join(parts).strip()


def _block_markdown(block: Block) -> str:
    if block.is_heading:
        return f"{'#' * block.level} {block.text}"
    return block.text
