"""
Flattens a DocumentStructure into typed content blocks for display.

Every block carries a :class:`BlockKind`; rendering dispatches on the
kind through a table that covers all kinds.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, List

from .models import DocumentStructure


class BlockKind(Enum):
    HEADING = auto()
    TOC_ITEM = auto()
    PARAGRAPH = auto()
    LIST_ITEM = auto()


@dataclass
class ContentBlock:
    kind: BlockKind
    text: str
    page: int
    level: int = 0

    def __repr__(self) -> str:
        return f"ContentBlock({self.kind.name}, p{self.page}, '{self.text[:40]}')"


_RE_BULLET = re.compile(r"^\s*(?:[•●○◦▪▸►–—-]\s|\d{1,3}[.)]\s|[a-zA-Z][.)]\s)")

# Paragraph text in the outline is a preview, not the full chapter.
PARAGRAPH_PREVIEW = 240


def _content_blocks(content: str, page: int) -> List[ContentBlock]:
    """Split chapter content into list items and one paragraph preview."""
    blocks: List[ContentBlock] = []
    paragraph: List[str] = []

    for line in content.split("\n"):
        line = line.strip()
        if not line:
            continue
        if _RE_BULLET.match(line):
            blocks.append(ContentBlock(BlockKind.LIST_ITEM, line, page))
        else:
            paragraph.append(line)

    if paragraph:
        text = " ".join(paragraph)
        if len(text) > PARAGRAPH_PREVIEW:
            text = text[:PARAGRAPH_PREVIEW].rstrip() + "..."
        blocks.insert(0, ContentBlock(BlockKind.PARAGRAPH, text, page))
    return blocks


def build_outline(structure: DocumentStructure) -> List[ContentBlock]:
    """
    Build the block list: contents entries first, then every chapter
    heading followed by its paragraph preview and list items.
    """
    blocks: List[ContentBlock] = [
        ContentBlock(BlockKind.TOC_ITEM, entry.title, entry.page, entry.level)
        for entry in structure.table_of_contents
    ]

    for chapter in structure.chapters:
        blocks.append(
            ContentBlock(BlockKind.HEADING, chapter.title, chapter.page, chapter.level)
        )
        blocks.extend(_content_blocks(chapter.content, chapter.page))

    return blocks


# -----------------------------------------------------------------
# Rendering
# -----------------------------------------------------------------


def _render_heading(block: ContentBlock) -> str:
    indent = "  " * max(0, block.level - 1)
    return f"{indent}# {block.text}  (p. {block.page})"


def _render_toc_item(block: ContentBlock) -> str:
    indent = "  " * max(0, block.level - 1)
    return f"{indent}{block.text} .... {block.page}"


def _render_paragraph(block: ContentBlock) -> str:
    return f"    {block.text}"


def _render_list_item(block: ContentBlock) -> str:
    return f"    - {block.text}"


_RENDERERS: Dict[BlockKind, Callable[[ContentBlock], str]] = {
    BlockKind.HEADING: _render_heading,
    BlockKind.TOC_ITEM: _render_toc_item,
    BlockKind.PARAGRAPH: _render_paragraph,
    BlockKind.LIST_ITEM: _render_list_item,
}


def render_block(block: ContentBlock) -> str:
    try:
        renderer = _RENDERERS[block.kind]
    except KeyError:
        raise ValueError(f"No renderer for block kind {block.kind!r}") from None
    return renderer(block)


def render_outline(blocks: List[ContentBlock]) -> str:
    """Format blocks as plain text, one block per line."""
    lines: List[str] = []
    in_toc = False

    for block in blocks:
        if block.kind is BlockKind.TOC_ITEM and not in_toc:
            lines.append("[CONTENTS]")
            in_toc = True
        elif block.kind is not BlockKind.TOC_ITEM and in_toc:
            lines.append("")
            in_toc = False
        lines.append(render_block(block))

    return "\n".join(lines)
