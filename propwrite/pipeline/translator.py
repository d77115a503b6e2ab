"""
pipeline/translator.py: turn each finalized chunk into one document component.
"""

import logging
import re

from propwrite.document import TAGS
from propwrite.errors import UnknownTagError
from propwrite.state import (Chunk, Component, Heading, HEADING, ItemList,
                             LIST, Paragraph, PARAGRAPH, PropertyAssignment,
                             Proposition, PROPOSITION, SPECIAL, StartAppendix)

logger = logging.getLogger(__name__)

_ITEM_START_RE = re.compile(r"\*\s+(.*)")


def _split_items(lines: list[str]) -> list[str]:
    """Regroup list lines into items; continuation lines are stripped."""
    items: list[list[str]] = []
    for line in lines:
        m = _ITEM_START_RE.fullmatch(line)
        if m:
            items.append([m.group(1)])
        elif items:
            items[-1].append(line.strip())
        else:
            items.append([line.strip()])
    return ["\n".join(item) for item in items]


def translate_chunk(chunk: Chunk) -> Component:
    kind = chunk["kind"]
    lines = chunk["lines"]

    if kind == SPECIAL:
        if chunk["name"] == "appendix":
            return StartAppendix(kind="start_appendix")
        return PropertyAssignment(kind="property", name=chunk["name"] or "",
                                  value="\n".join(lines))

    if kind == PROPOSITION:
        return Proposition(kind="proposition", text="\n".join(lines))

    if kind == LIST:
        return ItemList(kind="item_list", is_critique=chunk["is_critique"],
                        items=_split_items(lines))

    if kind == PARAGRAPH:
        tag = chunk["tag"]
        if tag is not None and tag not in TAGS:
            raise UnknownTagError(f"Unknown tag: {tag!r}")
        return Paragraph(kind="paragraph", text="\n".join(lines),
                         is_critique=chunk["is_critique"], tag=tag)

    if kind == HEADING:
        return Heading(kind="heading", text=lines[0])

    raise ValueError(f"Unknown chunk kind: {kind!r}")


def translate_chunks(state: dict) -> dict:
    components = [translate_chunk(chunk) for chunk in state["chunks"]]
    logger.info("Translated %d components", len(components))
    return {"components": components}
