"""Tests for propwrite/render.py - page templates."""

import pytest

from propwrite.main import compile_document
from propwrite.render import DEFAULT_TEMPLATE, load_template, render_page


@pytest.fixture
def document(header):
    return compile_document(header + "\n# A <claim>\n")


class TestRenderPage:

    def test_default_template(self, document):
        html = render_page(document)
        assert "<title>Example</title>" in html
        assert '<div class="proposition">A &lt;claim&gt;</div>' in html

    def test_properties_are_escaped(self, required_properties):
        props = dict(required_properties, title="Cats & <dogs>")
        html = render_page(compile_document("# Claim\n", props),
                           "{{ title }}|{{ propositions_html }}")
        assert html.startswith("Cats &amp; &lt;dogs&gt;|<ul")

    def test_template_variables(self, document):
        html = render_page(document,
                           "{{ file_name }} {{ base_relative_url }} "
                           "{{ properties['author'] }}",
                           file_name="a.html", base_relative_url="../")
        assert html == "a.html ../ A. Person"


class TestLoadTemplate:

    def test_builtin(self, document, tmp_path):
        assert load_template(tmp_path, document) == DEFAULT_TEMPLATE

    def test_named_by_property(self, header, tmp_path):
        (tmp_path / "essay.html.j2").write_text("essay {{ title }}",
                                                encoding="utf-8")
        doc = compile_document(header + "##template essay\n\n# Claim\n")
        assert load_template(tmp_path, doc) == "essay {{ title }}"

    def test_override_wins(self, header, tmp_path):
        override = tmp_path / "other.j2"
        override.write_text("other", encoding="utf-8")
        doc = compile_document(header + "##template essay\n\n# Claim\n")
        assert load_template(tmp_path, doc, override) == "other"

    def test_missing_template(self, header, tmp_path):
        doc = compile_document(header + "##template nope\n\n# Claim\n")
        with pytest.raises(FileNotFoundError):
            load_template(tmp_path, doc)
