"""Tests for propwrite/document.py - HTML fragments of a compiled document."""

from propwrite.main import compile_document


class TestEndToEnd:

    def test_minimal_document(self, header):
        doc = compile_document(
            header + "\n# First proposition\n"
            "Some **bold** and *italic* text.\n")
        assert doc.title == "Example"
        assert doc.author == "A. Person"
        assert doc.date == "1 Jan 2024"
        assert doc.propositions_html == (
            '<ul class="propositions">\n'
            "<li>\n"
            '<div class="proposition">First proposition</div>\n'
            "<p>Some <b>bold</b> and <i>italic</i> text.</p>\n"
            "</li>\n"
            "</ul>")

    def test_unused_appendix_is_empty(self, header):
        doc = compile_document(header + "\n# Claim\n")
        assert doc.appendix_html == ""
        assert doc.original_link_html == ""

    def test_external_properties(self, required_properties):
        doc = compile_document("# Claim\n", required_properties)
        assert doc.author == "A. Person"

    def test_intro(self, header):
        doc = compile_document(header + "\nHello &amp; welcome.\n\n# Claim\n")
        assert doc.intro_html == (
            '<div class="intro">\n<p>Hello &amp; welcome.</p>\n</div>')

    def test_empty_intro(self, header):
        doc = compile_document(header + "\n# Claim\n")
        assert doc.intro_html == '<div class="intro">\n\n</div>'


class TestItems:

    def test_list(self, header):
        doc = compile_document(header + "\n# Claim\n* one\n* two\n  more\n")
        assert "<ul>\n<li>one</li>\n<li>two\nmore</li>\n</ul>" in \
            doc.propositions_html

    def test_critique_items(self, header):
        doc = compile_document(header + "\n# Claim\n\n?? * no\n\n?? Wrong.\n")
        html = doc.propositions_html
        assert '<ul class="critique">\n<li>no</li>\n</ul>' in html
        assert '<p class="critique">Wrong.</p>' in html

    def test_blockquote(self, header):
        doc = compile_document(header + "\n# Claim\n\n#:bq Quoted.\n")
        assert "<blockquote>Quoted.</blockquote>" in doc.propositions_html

    def test_appendix(self, header):
        doc = compile_document(
            header + "\n# Claim\n\n##appendix\n\nNotes\n-----\n\nA note.\n")
        assert doc.appendix_html == (
            '<div class="appendix">\n<h2>Notes</h2>\n<p>A note.</p>\n</div>')

    def test_original_link(self, header):
        doc = compile_document(
            header + "##original-link [The original](http://x.org/)\n"
            "\n# Claim\n")
        assert doc.original_link_html == (
            '<div class="original-link">'
            '<a href="http://x.org/">The original</a></div>')


class TestFootnoteOrder:

    def test_example_document(self, example_source):
        doc = compile_document(example_source)
        assert 'footnote[::]' not in doc.intro_html
        assert '<a href="#intro-note" class="footnote">1</a>' in doc.intro_html
        assert '<a href="#later" class="footnote">2</a>' in doc.propositions_html
        assert ('<span class="footnoteNumber">1</span>'
                '<a name="intro-note"></a>') in doc.appendix_html
        assert ('<span class="footnoteNumber">2</span>'
                '<a name="later"></a>') in doc.appendix_html

    def test_fragment_access_order_does_not_matter(self, example_source):
        """Reading the appendix first still numbers by source order."""
        doc = compile_document(example_source)
        appendix = doc.appendix_html
        assert '<span class="footnoteNumber">1</span>' in appendix
        assert '<span class="footnoteNumber">?</span>' not in appendix
        assert doc.footnotes.numbers == {"intro-note": "1", "later": "2"}

    def test_definition_order_is_irrelevant(self, header):
        """y is defined first but x is referenced first."""
        doc = compile_document(
            header + "\n# Claim[::](x::) and[::](y::)\n\n##appendix\n\n"
            "[y::] Why.\n\n[x::] Ex.\n")
        assert doc.footnotes.numbers == {"x": "1", "y": "2"}
        assert doc.appendix_html.index(">2</span>") < \
            doc.appendix_html.index(">1</span>")


class TestDump:

    def test_outline(self, example_source):
        dump = compile_document(example_source).dump()
        assert "Title: 'Example'" in dump
        assert "  Proposition: 'First proposition'" in dump
        assert "Appendix:\n  Heading: 'Notes'" in dump
