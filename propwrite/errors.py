"""
Errors raised while compiling a propositional document.

Every failure aborts the current compilation; nothing in the pipeline
catches these.
"""


class DocumentError(Exception):
    """Base class for errors in propositional source text."""


class GrammarError(DocumentError):
    """The inline scanner cannot match the remaining text."""

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.position = position


class StructureError(DocumentError):
    """A component appears in a section where it is not allowed."""


class UnclosedSpanError(DocumentError):
    """Bold or italic left open at the end of a text span."""


class UnknownTagError(DocumentError):
    """A "#:<tag>" paragraph names a tag outside the tag table."""


class MissingPropertyError(DocumentError):
    """A required document property was never set."""

    def __init__(self, name: str):
        super().__init__(f"No property {name!r} given for document")
        self.name = name


class EmptyDocumentError(DocumentError):
    """The document contains no propositions."""
