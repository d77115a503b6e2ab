"""
Sequential footnote numbering.

Numbers are handed out in the order footnote references are compiled.
Definitions only look numbers up, so a definition compiled before any
reference to it shows the placeholder.
"""

import logging

logger = logging.getLogger(__name__)

PLACEHOLDER = "?"


class FootnoteRegistry:
    """Map footnote names to numbers, allocated by first reference."""

    def __init__(self) -> None:
        self._numbers: dict[str, str] = {}
        self._count = 0

    def allocate(self, name: str) -> str:
        """Return the number for `name`, assigning the next one if new."""
        number = self._numbers.get(name)
        if number is None:
            self._count += 1
            number = str(self._count)
            self._numbers[name] = number
            logger.debug("Footnote %r -> %s", name, number)
        return number

    def lookup(self, name: str) -> str:
        return self._numbers.get(name, PLACEHOLDER)

    @property
    def numbers(self) -> dict[str, str]:
        return dict(self._numbers)

    def __len__(self) -> int:
        return self._count

    def __contains__(self, name: object) -> bool:
        return name in self._numbers
