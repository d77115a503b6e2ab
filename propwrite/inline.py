"""
Inline text compiler: render one span of propositional text as HTML.

The span is scanned once, left to right. At each position the rules are
tried in priority order and the first pattern that matches consumes the
text it matched:

    1. plain text (anything but \\ * [ &)   escaped
    2. \\x                                  x, escaped
    3. &name; or &#digits;                  verbatim
    4. **                                   toggle <b>
    5. *                                    toggle <i>
    6. [label] or [label](target)           anchor or link (not inside links)

Text nothing matches is a GrammarError. Link labels are compiled
recursively with rule 6 switched off, so brackets inside a label are
literal text.
"""

import re
from html import escape
from typing import Callable

from propwrite.errors import GrammarError, UnclosedSpanError
from propwrite.footnotes import FootnoteRegistry

EN_DASH = "&ndash;"

_PLAIN_RE = re.compile(r"[^\\*\[&]+")
_LINK_PLAIN_RE = re.compile(r"[^\\*&]+")
_BACKSLASH_RE = re.compile(r"\\(.)", re.DOTALL)
_ENTITY_RE = re.compile(r"&(?:[A-Za-z0-9]+|#[0-9]+);")
_BOLD_RE = re.compile(r"\*\*")
_ITALIC_RE = re.compile(r"\*")
_LINK_OR_ANCHOR_RE = re.compile(r"\[([^\]]*)\](?:\(([^)]+)\))?")

# Whole-string patterns for the bracketed or parenthesized part
_ANCHOR_RE = re.compile(r"([^/:]*):")
_FOOTNOTE_RE = re.compile(r"([^/:]*)::")
_URL_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*:\S+")
_SPACE_RE = re.compile(r"\s")


def _text(s: str) -> str:
    return escape(s, quote=False)


def _attr(s: str) -> str:
    return escape(s, quote=True)


class _Scan:
    """State of one scan: output buffer plus the bold/italic toggles."""

    def __init__(self, text: str, footnotes: FootnoteRegistry,
                 inside_link: bool):
        self.text = text
        self.footnotes = footnotes
        self.inside_link = inside_link
        self.bold = False
        self.italic = False
        self.pos = 0
        self.out: list[str] = []

    def run(self) -> str:
        rules = _LINK_TEXT_RULES if self.inside_link else _FULL_TEXT_RULES
        while self.pos < len(self.text):
            for pattern, handler in rules:
                match = pattern.match(self.text, self.pos)
                if match:
                    break
            else:
                raise GrammarError(
                    f"No match at position {self.pos} on "
                    f"{self.text[self.pos:]!r}", self.pos)
            handler(self, match)
            self.pos = match.end()
        if self.bold:
            raise UnclosedSpanError(f"unclosed bold span in {self.text!r}")
        if self.italic:
            raise UnclosedSpanError(f"unclosed italic span in {self.text!r}")
        return "".join(self.out)

    def plain(self, match: re.Match[str]) -> None:
        self.out.append(_text(match.group()))

    def backslash(self, match: re.Match[str]) -> None:
        self.out.append(_text(match.group(1)))

    def entity(self, match: re.Match[str]) -> None:
        self.out.append(match.group())

    def toggle_bold(self, match: re.Match[str]) -> None:
        self.out.append("</b>" if self.bold else "<b>")
        self.bold = not self.bold

    def toggle_italic(self, match: re.Match[str]) -> None:
        self.out.append("</i>" if self.italic else "<i>")
        self.italic = not self.italic

    def link_or_anchor(self, match: re.Match[str]) -> None:
        label, target = match.group(1), match.group(2)
        if target is None:
            self.out.append(self._anchor(label))
        else:
            self.out.append(self._link(label, target))

    def _anchor(self, label: str) -> str:
        footnote = _FOOTNOTE_RE.fullmatch(label)
        if footnote:
            name = footnote.group(1)
            number = self.footnotes.lookup(name)
            return (f'<span class="footnoteNumber">{number}</span>'
                    f'<a name="{_attr(name)}"></a>')
        anchor = _ANCHOR_RE.fullmatch(label)
        if anchor:
            return f'<a name="{_attr(anchor.group(1))}"></a>'
        raise GrammarError(f"Invalid anchor definition: {label!r}", self.pos)

    def _link(self, label: str, target: str) -> str:
        footnote = _FOOTNOTE_RE.fullmatch(target)
        if footnote:
            name = footnote.group(1)
            number = self.footnotes.allocate(name)
            return f'<a href="#{_attr(name)}" class="footnote">{number}</a>'
        anchor = _ANCHOR_RE.fullmatch(target)
        if anchor:
            return (f'<a href="#{_attr(anchor.group(1))}">'
                    f"{self._label(label)}</a>")
        if _SPACE_RE.search(target) and _URL_RE.fullmatch(label):
            label, target = target, label  # [url](label) form
        return f'<a href="{_attr(target)}">{self._label(label)}</a>'

    def _label(self, label: str) -> str:
        return compile_text(label, self.footnotes, inside_link=True)


_Rule = tuple[re.Pattern[str], Callable[[_Scan, re.Match[str]], None]]

_LINK_TEXT_RULES: list[_Rule] = [
    (_LINK_PLAIN_RE, _Scan.plain),
    (_BACKSLASH_RE, _Scan.backslash),
    (_ENTITY_RE, _Scan.entity),
    (_BOLD_RE, _Scan.toggle_bold),
    (_ITALIC_RE, _Scan.toggle_italic),
]

_FULL_TEXT_RULES: list[_Rule] = [
    (_PLAIN_RE, _Scan.plain),
    *_LINK_TEXT_RULES[1:],
    (_LINK_OR_ANCHOR_RE, _Scan.link_or_anchor),
]


def compile_text(text: str, footnotes: FootnoteRegistry,
                 inside_link: bool = False) -> str:
    """Compile `text` to HTML, allocating footnote numbers in `footnotes`.

    Outside of links, every "--" in the result becomes an en-dash entity.
    """
    html = _Scan(text, footnotes, inside_link).run()
    if not inside_link:
        html = html.replace("--", EN_DASH)
    return html
