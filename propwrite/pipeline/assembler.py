"""
pipeline/assembler.py: build the document from components and validate it.

Components are applied strictly in source order. Where each one may go is
decided by the document's cursor (see propwrite.document); placing one in
the wrong section raises StructureError.
"""

import logging
from typing import Callable

from propwrite.document import Cursor, Document, REQUIRED_PROPERTIES
from propwrite.errors import EmptyDocumentError, MissingPropertyError
from propwrite.state import Component

logger = logging.getLogger(__name__)

_HANDLERS: dict[str, Callable[[Document, Component], None]] = {
    "property": lambda doc, c: doc.set_property(c["name"], c["value"]),
    "start_appendix": lambda doc, c: doc.start_appendix(),
    "proposition": lambda doc, c: doc.add_proposition(c["text"]),
    "paragraph": lambda doc, c: doc.add_text(c),
    "item_list": lambda doc, c: doc.add_text(c),
    "heading": lambda doc, c: doc.add_heading(c),
}


def apply_component(document: Document, component: Component) -> None:
    logger.debug("  %s -> %s", component["kind"], document.cursor.value)
    _HANDLERS[component["kind"]](document, component)


def validate(document: Document) -> None:
    """Check required properties are set and a proposition exists."""
    for name in REQUIRED_PROPERTIES:
        if name not in document.properties:
            raise MissingPropertyError(name)
    if document.cursor is Cursor.INTRO:
        raise EmptyDocumentError("There are no propositions in the document")


def assemble(state: dict) -> dict:
    """Apply components in order to a new document, then validate."""
    document = Document(properties=dict(state.get("properties") or {}))

    for component in state["components"]:
        apply_component(document, component)

    validate(document)

    logger.info(
        "Assembly complete: %d intro items, %d propositions, %d appendix items",
        len(document.intro), len(document.propositions),
        len(document.appendix),
    )
    return {"document": document}
