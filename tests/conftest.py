"""Pytest configuration and shared fixtures for tests."""

import pytest

from propwrite.footnotes import FootnoteRegistry

HEADER = """\
##title Example
##author A. Person
##date 1 Jan 2024
"""


@pytest.fixture
def footnotes():
    return FootnoteRegistry()


@pytest.fixture
def header():
    """Property tags setting every required property."""
    return HEADER


@pytest.fixture
def required_properties():
    return {"title": "Example", "author": "A. Person", "date": "1 Jan 2024"}


@pytest.fixture
def example_source():
    """A document using every section and most of the inline markup."""
    return HEADER + """\

An introduction with a footnote[::](intro-note::).

* first point
* second point
  continues here

# First proposition
Some **bold** and *italic* text -- with a dash.

?? A critique of the [first proposition](first:).

# Second proposition[::](later::)

#:bq A quoted paragraph.

##appendix

Notes
-----

[intro-note::] The note on the introduction.

[later::] A later note, see [the example](http://example.com/).
"""
