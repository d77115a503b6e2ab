"""
Page rendering: combine a compiled document with a Jinja2 page template.

Templates see the document's properties as plain (autoescaped) strings and
its HTML fragments as markup:

    title, author, date, properties
    intro_html, propositions_html, appendix_html, original_link_html
    file_name, base_relative_url
"""

import logging
from pathlib import Path

import jinja2
from markupsafe import Markup

from propwrite.document import Document

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".html.j2"

DEFAULT_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{{ title }}</title>
</head>
<body>
<h1>{{ title }}</h1>
<div class="byline">{{ author }}, {{ date }}</div>
{{ original_link_html }}
{{ intro_html }}
{{ propositions_html }}
{{ appendix_html }}
</body>
</html>
"""

_env = jinja2.Environment(autoescape=True, keep_trailing_newline=True)


def load_template(src_dir: str | Path, document: Document,
                  override: str | Path | None = None) -> str:
    """Pick the template text for `document`.

    An explicit `override` path wins, then `<src_dir>/<template>.html.j2`
    named by the document's "template" property, then the built-in page.
    """
    if override:
        path = Path(override)
    elif document.template_name:
        path = Path(src_dir) / f"{document.template_name}{TEMPLATE_SUFFIX}"
    else:
        logger.info("  using built-in template")
        return DEFAULT_TEMPLATE

    if not path.exists():
        raise FileNotFoundError(f"Template not found: {path}")
    logger.info("  using template file %s", path)
    return path.read_text(encoding="utf-8")


def render_page(document: Document, template_text: str | None = None, *,
                file_name: str = "", base_relative_url: str = "") -> str:
    template = _env.from_string(template_text or DEFAULT_TEMPLATE)
    fragments = document.render_fragments()
    return template.render(
        title=document.title,
        author=document.author,
        date=document.date,
        properties=dict(document.properties),
        intro_html=Markup(fragments["intro"]),
        propositions_html=Markup(fragments["propositions"]),
        appendix_html=Markup(fragments["appendix"]),
        original_link_html=Markup(fragments["original_link"]),
        file_name=file_name,
        base_relative_url=base_relative_url,
    )
