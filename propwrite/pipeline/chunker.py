"""
pipeline/chunker.py: split source text into block chunks.

A chunk is a run of lines forming one block: a property tag, a
proposition, a list, a paragraph or (after post-processing) a heading.
Property chunks end at a blank line or the next "##" line, propositions
at the end of their line, everything else at a blank line. The line that
ends a chunk starts the next.
"""

import logging
import re
from typing import Iterable, Iterator

from propwrite.state import (Chunk, HEADING, LIST, PARAGRAPH, PROPOSITION,
                             SPECIAL)

logger = logging.getLogger(__name__)

_SPECIAL_RE = re.compile(r"##([a-z\-]*)\s*(.*)")
_TAGGED_RE = re.compile(r"#:([a-z\-0-9]+)\s*(.*)")
_PROPOSITION_RE = re.compile(r"#\s*(.*)")
_CRITIQUE_RE = re.compile(r"\?\?\s(.*)")
_LIST_ITEM_RE = re.compile(r"\*\s+")
_BLANK_RE = re.compile(r"\s*")
_UNDERLINE_RE = re.compile(r"-+")


def _new_chunk(kind: str, line: str, *, name: str | None = None,
               is_critique: bool = False, tag: str | None = None) -> Chunk:
    return Chunk(kind=kind, lines=[line], name=name,
                 is_critique=is_critique, tag=tag)


def _start_chunk(line: str) -> Chunk | None:
    """Classify the first line of a chunk; None for a blank line."""
    m = _SPECIAL_RE.fullmatch(line)
    if m:
        return _new_chunk(SPECIAL, m.group(2), name=m.group(1))
    m = _TAGGED_RE.fullmatch(line)
    if m:
        return _new_chunk(PARAGRAPH, m.group(2), tag=m.group(1))
    m = _PROPOSITION_RE.fullmatch(line)
    if m:
        return _new_chunk(PROPOSITION, m.group(1))

    # "?? " qualifies the list or paragraph it starts
    m = _CRITIQUE_RE.fullmatch(line)
    is_critique = m is not None
    if m:
        line = m.group(1)

    if _LIST_ITEM_RE.match(line):
        return _new_chunk(LIST, line, is_critique=is_critique)
    if _BLANK_RE.fullmatch(line):
        return None
    return _new_chunk(PARAGRAPH, line, is_critique=is_critique)


def _is_terminated_by(chunk: Chunk, line: str) -> bool:
    if _BLANK_RE.fullmatch(line):
        return True
    if chunk["kind"] == PROPOSITION:
        # a proposition is a single headline; the next line explains it
        return True
    return chunk["kind"] == SPECIAL and line.startswith("##")


def _post_process(chunk: Chunk) -> Chunk:
    """A paragraph underlined with dashes is a heading."""
    lines = chunk["lines"]
    if (chunk["kind"] == PARAGRAPH and len(lines) == 2
            and _UNDERLINE_RE.fullmatch(lines[1])):
        return _new_chunk(HEADING, lines[0])
    return chunk


def iter_chunks(lines: Iterable[str]) -> Iterator[Chunk]:
    """Yield finalized chunks from source lines, in order."""
    current: Chunk | None = None
    for line in lines:
        if current is None:
            current = _start_chunk(line)
        elif _is_terminated_by(current, line):
            yield _post_process(current)
            current = _start_chunk(line)
        else:
            current["lines"].append(line)
    if current is not None:
        yield _post_process(current)


def chunk_source(state: dict) -> dict:
    """Split `state["source"]` into chunks."""
    chunks = list(iter_chunks(state["source"].splitlines()))
    for chunk in chunks:
        logger.debug("  %s%s %r", chunk["kind"],
                     " (critique)" if chunk["is_critique"] else "",
                     chunk["lines"])
    logger.info("Chunked %d blocks", len(chunks))
    return {"chunks": chunks}
