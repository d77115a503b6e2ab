"""
The propositional document: properties, sections and HTML fragments.

A document has three sections, written in order:

    intro         paragraphs and lists before the first proposition
    propositions  headline claims, each with its explanation items
    appendix      paragraphs, lists and headings after "##appendix"

`cursor` marks the section currently being written to. It only moves
forward and only through the transition methods below.
"""

import enum
import logging
from dataclasses import dataclass, field

from propwrite.errors import StructureError
from propwrite.footnotes import FootnoteRegistry
from propwrite.inline import compile_text
from propwrite.state import TextItem

logger = logging.getLogger(__name__)

REQUIRED_PROPERTIES = ("title", "author", "date")

# "#:<tag>" qualifiers and the element each one renders as
TAGS: dict[str, str] = {"bq": "blockquote"}


class Cursor(enum.Enum):
    INTRO = "intro"
    PROPOSITIONS = "propositions"
    APPENDIX = "appendix"


@dataclass
class PropositionEntry:
    text: str
    explanation: list[TextItem] = field(default_factory=list)


@dataclass
class Document:
    properties: dict[str, str] = field(default_factory=dict)
    cursor: Cursor = Cursor.INTRO
    intro: list[TextItem] = field(default_factory=list)
    propositions: list[PropositionEntry] = field(default_factory=list)
    appendix: list[TextItem] = field(default_factory=list)
    footnotes: FootnoteRegistry = field(default_factory=FootnoteRegistry)
    _fragments: dict[str, str] | None = field(default=None, init=False,
                                              repr=False, compare=False)

    # -- transitions --------------------------------------------------------

    def set_property(self, name: str, value: str) -> None:
        self.properties[name] = value

    def start_appendix(self) -> None:
        if self.cursor is Cursor.INTRO:
            raise StructureError(
                "Cannot start appendix before any propositions occur")
        if self.cursor is Cursor.APPENDIX:
            raise StructureError("Cannot start appendix, already in appendix")
        self.cursor = Cursor.APPENDIX

    def add_proposition(self, text: str) -> None:
        if self.cursor is Cursor.APPENDIX:
            raise StructureError(
                "Cannot add proposition, already in appendix")
        self.cursor = Cursor.PROPOSITIONS
        self.propositions.append(PropositionEntry(text))

    def add_text(self, item: TextItem) -> None:
        """Add a paragraph or list to whichever section is being written."""
        if self.cursor is Cursor.INTRO:
            self.intro.append(item)
        elif self.cursor is Cursor.PROPOSITIONS:
            self.propositions[-1].explanation.append(item)
        else:
            self.appendix.append(item)

    def add_heading(self, item: TextItem) -> None:
        if self.cursor is Cursor.INTRO:
            raise StructureError("Headings are not allowed in the introduction")
        if self.cursor is Cursor.PROPOSITIONS:
            raise StructureError("Headings are not allowed in propositions")
        self.appendix.append(item)

    # -- properties ---------------------------------------------------------

    @property
    def title(self) -> str | None:
        return self.properties.get("title")

    @property
    def author(self) -> str | None:
        return self.properties.get("author")

    @property
    def date(self) -> str | None:
        return self.properties.get("date")

    @property
    def template_name(self) -> str | None:
        return self.properties.get("template")

    @property
    def original_link(self) -> str | None:
        return self.properties.get("original-link")

    # -- HTML ---------------------------------------------------------------

    @property
    def intro_html(self) -> str:
        return self.render_fragments()["intro"]

    @property
    def propositions_html(self) -> str:
        return self.render_fragments()["propositions"]

    @property
    def appendix_html(self) -> str:
        return self.render_fragments()["appendix"]

    @property
    def original_link_html(self) -> str:
        return self.render_fragments()["original_link"]

    def render_fragments(self) -> dict[str, str]:
        """Compile every section once, in document order.

        Footnote numbers are allocated as references are compiled, so the
        sections are always compiled intro first, appendix last, whatever
        order the fragments are read in afterwards.
        """
        if self._fragments is not None:
            return self._fragments

        intro = "\n".join(self._item_html(item) for item in self.intro)
        propositions = "\n".join(self._proposition_html(entry)
                                 for entry in self.propositions)
        appendix = "\n".join(self._item_html(item) for item in self.appendix)

        self._fragments = {
            "intro": f'<div class="intro">\n{intro}\n</div>',
            "propositions":
                f'<ul class="propositions">\n{propositions}\n</ul>',
            "appendix": (f'<div class="appendix">\n{appendix}\n</div>'
                         if self.appendix else ""),
            "original_link": (
                f'<div class="original-link">{self._text(self.original_link)}'
                "</div>" if self.original_link is not None else ""),
        }
        logger.debug("Rendered fragments, %d footnotes numbered",
                     len(self.footnotes))
        return self._fragments

    def _text(self, text: str) -> str:
        return compile_text(text, self.footnotes)

    def _proposition_html(self, entry: PropositionEntry) -> str:
        explanation = "\n".join(self._item_html(item)
                                for item in entry.explanation)
        return (f'<li>\n<div class="proposition">{self._text(entry.text)}'
                f"</div>\n{explanation}\n</li>")

    def _item_html(self, item: TextItem) -> str:
        if item["kind"] == "heading":
            return f"<h2>{self._text(item['text'])}</h2>"
        classes = ' class="critique"' if item["is_critique"] else ""
        if item["kind"] == "item_list":
            items = "\n".join(f"<li>{self._text(text)}</li>"
                              for text in item["items"])
            return f"<ul{classes}>\n{items}\n</ul>"
        element = TAGS[item["tag"]] if item["tag"] else "p"
        return f"<{element}{classes}>{self._text(item['text'])}</{element}>"

    # -- debugging ----------------------------------------------------------

    def dump(self) -> str:
        """Plain-text outline of the document, for tracing."""
        lines = [f"Title: {self.title!r}",
                 f"Author: {self.author!r}",
                 f"Date: {self.date!r}",
                 ""]
        if self.intro:
            lines.append("Introduction:")
            lines.extend(f"  {_describe(item)}" for item in self.intro)
        lines.append("Propositions:")
        for entry in self.propositions:
            lines.append(f"  Proposition: {entry.text!r}")
            lines.extend(f"    {_describe(item)}" for item in entry.explanation)
        if self.appendix:
            lines.append("Appendix:")
            lines.extend(f"  {_describe(item)}" for item in self.appendix)
        return "\n".join(lines)


def _describe(item: TextItem) -> str:
    if item["kind"] == "item_list":
        return f"ItemList: {item['items']!r}"
    if item["kind"] == "heading":
        return f"Heading: {item['text']!r}"
    return f"Paragraph: {item['text']!r}"
