"""
Shared TypedDicts for the compilation pipeline.
"""

from typing import Literal, TypedDict, Union

# Chunk kinds
SPECIAL = "SPECIAL"
PROPOSITION = "PROPOSITION"
LIST = "LIST"
PARAGRAPH = "PARAGRAPH"
HEADING = "HEADING"


class Chunk(TypedDict):
    kind: str                # SPECIAL, PROPOSITION, LIST, PARAGRAPH, HEADING
    lines: list[str]
    name: str | None         # property name, SPECIAL only
    is_critique: bool        # "?? " qualifier on the first line
    tag: str | None          # "#:<tag>" qualifier


class PropertyAssignment(TypedDict):
    kind: Literal["property"]
    name: str
    value: str


class StartAppendix(TypedDict):
    kind: Literal["start_appendix"]


class Proposition(TypedDict):
    kind: Literal["proposition"]
    text: str


class Paragraph(TypedDict):
    kind: Literal["paragraph"]
    text: str
    is_critique: bool
    tag: str | None


class ItemList(TypedDict):
    kind: Literal["item_list"]
    is_critique: bool
    items: list[str]


class Heading(TypedDict):
    kind: Literal["heading"]
    text: str


Component = Union[PropertyAssignment, StartAppendix, Proposition,
                  Paragraph, ItemList, Heading]

# Components that may appear as items of a document section
TextItem = Union[Paragraph, ItemList, Heading]
