"""Tests for the Markdown host parser.

Covers the block and inline constructs that attribute brackets attach to.
Output is checked through the renderer where that is clearer than the AST.
"""

from __future__ import annotations

import pytest

from llaves import (
    BlockQuote,
    CodeSpan,
    Emphasis,
    FencedCode,
    Heading,
    Image,
    IndentedCode,
    LineBreak,
    Link,
    LinkReference,
    List,
    Paragraph,
    ParseConfig,
    ParseError,
    Parser,
    SoftBreak,
    Strikethrough,
    Strong,
    Table,
    Text,
    ThematicBreak,
    parse,
    parse_config_context,
    render,
)


def html(source: str) -> str:
    config = ParseConfig(tables_enabled=True, strikethrough_enabled=True)
    return render(parse(source, config=config))


class TestBlocks:
    """Block-level structure."""

    def test_atx_heading_levels(self) -> None:
        doc = parse("# One\n\n### Three")
        assert [b.level for b in doc.children if isinstance(b, Heading)] == [1, 3]

    def test_empty_heading(self) -> None:
        assert html("#") == "<h1></h1>\n"

    def test_setext_headings(self) -> None:
        assert html("Title\n=====") == "<h1>Title</h1>\n"
        assert html("Sub\n---") == "<h2>Sub</h2>\n"

    def test_paragraph_lines_join_with_soft_break(self) -> None:
        doc = parse("one\ntwo")
        para = doc.children[0]
        assert isinstance(para, Paragraph)
        assert isinstance(para.children[1], SoftBreak)
        assert html("one\ntwo") == "<p>one\ntwo</p>\n"

    def test_thematic_break(self) -> None:
        doc = parse("***")
        assert isinstance(doc.children[0], ThematicBreak)
        assert html("a\n\n* * *") == "<p>a</p>\n<hr />\n"

    def test_fenced_code(self) -> None:
        doc = parse("```python\nprint(1)\n```")
        code = doc.children[0]
        assert isinstance(code, FencedCode)
        assert code.language == "python"
        assert code.code == "print(1)\n"

    def test_unclosed_fence_runs_to_end(self) -> None:
        assert html("~~~\nabc") == "<pre><code>abc\n</code></pre>\n"

    def test_indented_code(self) -> None:
        doc = parse("    a\n\n    b")
        code = doc.children[0]
        assert isinstance(code, IndentedCode)
        assert code.code == "a\n\nb\n"

    def test_block_quote(self) -> None:
        doc = parse("> # Head\n> text")
        quote = doc.children[0]
        assert isinstance(quote, BlockQuote)
        assert isinstance(quote.children[0], Heading)
        assert isinstance(quote.children[1], Paragraph)

    def test_block_quote_lazy_line(self) -> None:
        assert html("> a\nb") == "<blockquote>\n<p>a\nb</p>\n</blockquote>\n"

    def test_nested_block_quote(self) -> None:
        assert html("> > deep") == (
            "<blockquote>\n<blockquote>\n<p>deep</p>\n</blockquote>\n</blockquote>\n"
        )

    def test_heading_interrupts_paragraph(self) -> None:
        assert html("text\n# Head") == "<p>text</p>\n<h1>Head</h1>\n"

    def test_crlf_normalised(self) -> None:
        assert html("a\r\nb\r\n\r\nc") == "<p>a\nb</p>\n<p>c</p>\n"


class TestLists:
    """Bullet and ordered lists."""

    def test_tight_bullet_list(self) -> None:
        doc = parse("- a\n- b")
        lst = doc.children[0]
        assert isinstance(lst, List)
        assert not lst.ordered
        assert lst.tight
        assert len(lst.items) == 2
        assert html("- a\n- b") == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"

    def test_loose_list(self) -> None:
        doc = parse("- a\n\n- b")
        lst = doc.children[0]
        assert isinstance(lst, List)
        assert not lst.tight
        assert html("- a\n\n- b") == "<ul>\n<li>\n<p>a</p>\n</li>\n<li>\n<p>b</p>\n</li>\n</ul>\n"

    def test_ordered_start(self) -> None:
        doc = parse("3. c\n4. d")
        lst = doc.children[0]
        assert isinstance(lst, List)
        assert lst.ordered
        assert lst.start == 3
        assert html("3. c") == '<ol start="3">\n<li>c</li>\n</ol>\n'

    def test_marker_change_starts_new_list(self) -> None:
        doc = parse("- a\n+ b")
        assert len(doc.children) == 2

    def test_nested_list(self) -> None:
        assert html("- a\n  - b") == "<ul>\n<li>a\n<ul>\n<li>b</li>\n</ul>\n</li>\n</ul>\n"

    def test_item_with_code_fence(self) -> None:
        source = "- ```\n  code\n  ```\n- next"
        doc = parse(source)
        lst = doc.children[0]
        assert isinstance(lst, List)
        assert len(lst.items) == 2
        assert isinstance(lst.items[0].children[0], FencedCode)

    def test_lazy_continuation(self) -> None:
        assert html("- a\nb") == "<ul>\n<li>a\nb</li>\n</ul>\n"

    def test_ordered_list_interrupting_paragraph_must_start_at_one(self) -> None:
        assert html("text\n2. two") == "<p>text\n2. two</p>\n"
        assert html("text\n1. one") == "<p>text</p>\n<ol>\n<li>one</li>\n</ol>\n"

    def test_attribute_line_in_item(self) -> None:
        assert html("- a\n  {.x}") == '<ul>\n<li><p class="x">a</p>\n</li>\n</ul>\n'


class TestTables:
    """Pipe tables (plugin)."""

    def test_table(self) -> None:
        out = html("| a | b |\n|:--|--:|\n| 1 | 2 |")
        assert out == (
            "<table>\n<thead>\n<tr>\n"
            '<th style="text-align: left">a</th>\n'
            '<th style="text-align: right">b</th>\n'
            "</tr>\n</thead>\n<tbody>\n<tr>\n"
            '<td style="text-align: left">1</td>\n'
            '<td style="text-align: right">2</td>\n'
            "</tr>\n</tbody>\n</table>\n"
        )

    def test_short_row_padded(self) -> None:
        doc = parse("| a | b |\n|---|---|\n| 1 |", config=ParseConfig(tables_enabled=True))
        table = doc.children[0]
        assert isinstance(table, Table)
        assert len(table.body[0].cells) == 2

    def test_mismatched_delimiter_is_paragraph(self) -> None:
        doc = parse("| a | b |\n|---|", config=ParseConfig(tables_enabled=True))
        assert isinstance(doc.children[0], Paragraph)

    def test_disabled_by_default(self) -> None:
        doc = parse("| a |\n|---|")
        assert isinstance(doc.children[0], Paragraph)


class TestInlines:
    """Inline constructs."""

    def _inlines(self, source: str, **config: bool) -> tuple:
        doc = parse(source, config=ParseConfig(**config))
        para = doc.children[0]
        assert isinstance(para, Paragraph)
        return para.children

    def test_emphasis_and_strong(self) -> None:
        children = self._inlines("*a* **b** ***c***")
        assert isinstance(children[0], Emphasis)
        assert isinstance(children[2], Strong)
        assert html("***c***") == "<p><em><strong>c</strong></em></p>\n"

    def test_intraword_underscore_is_literal(self) -> None:
        assert html("snake_case_name") == "<p>snake_case_name</p>\n"

    def test_unmatched_delimiters_are_text(self) -> None:
        assert html("**a") == "<p>**a</p>\n"

    def test_code_span(self) -> None:
        children = self._inlines("`a  b`")
        assert children == (CodeSpan(location=children[0].location, code="a  b"),)
        assert html("`` a`b ``") == "<p><code>a`b</code></p>\n"

    def test_strikethrough(self) -> None:
        children = self._inlines("~~x~~", strikethrough_enabled=True)
        assert isinstance(children[0], Strikethrough)
        plain = self._inlines("~~x~~")
        assert plain == (Text(location=plain[0].location, content="~~x~~"),)

    def test_inline_link(self) -> None:
        children = self._inlines('[text](/url "Title")')
        link = children[0]
        assert isinstance(link, Link)
        assert link.url == "/url"
        assert link.title == "Title"
        assert html('[t](/u "T")') == '<p><a href="/u" title="T">t</a></p>\n'

    @pytest.mark.parametrize(
        ("source", "reference_type"),
        [
            ("[x][ref]\n\n[ref]: /r", "full"),
            ("[ref][]\n\n[ref]: /r", "collapsed"),
            ("[ref]\n\n[ref]: /r", "shortcut"),
        ],
    )
    def test_reference_links(self, source: str, reference_type: str) -> None:
        link = self._inlines(source)[0]
        assert isinstance(link, LinkReference)
        assert link.url == "/r"
        assert link.reference_type == reference_type

    def test_reference_label_case_insensitive(self) -> None:
        assert html("[Foo]\n\n[foo]: /f") == '<p><a href="/f">Foo</a></p>\n'

    def test_first_definition_wins(self) -> None:
        assert html("[a]\n\n[a]: /one\n[a]: /two") == '<p><a href="/one">a</a></p>\n'

    def test_undefined_reference_is_text(self) -> None:
        assert html("[nope]") == "<p>[nope]</p>\n"

    def test_image(self) -> None:
        image = self._inlines("![the *alt*](p.png)")[0]
        assert isinstance(image, Image)
        assert image.alt == "the alt"

    def test_autolinks(self) -> None:
        assert html("<https://x.org>") == '<p><a href="https://x.org">https://x.org</a></p>\n'
        assert html("<me@x.org>") == '<p><a href="mailto:me@x.org">me@x.org</a></p>\n'

    def test_hard_breaks(self) -> None:
        children = self._inlines("a  \nb")
        assert isinstance(children[1], LineBreak)
        assert html("a\\\nb") == "<p>a<br />\nb</p>\n"

    def test_backslash_escape(self) -> None:
        assert html("\\*not\\*") == "<p>*not*</p>\n"
        assert html("\\{.x}") == "<p>{.x}</p>\n"

    def test_entity(self) -> None:
        assert html("&copy; &amp;") == "<p>© &amp;</p>\n"

    def test_html_escaped(self) -> None:
        assert html("a < b & c") == "<p>a &lt; b &amp; c</p>\n"


class TestParserDirect:
    """Using the Parser class without the high-level API."""

    def test_returns_tuple_of_blocks(self) -> None:
        blocks = Parser("# a\n\nb").parse()
        assert isinstance(blocks, tuple)
        assert len(blocks) == 2

    def test_reads_config_from_context(self) -> None:
        with parse_config_context(ParseConfig(tables_enabled=True)):
            blocks = Parser("| a |\n|---|").parse()
        assert isinstance(blocks[0], Table)

    def test_attributes_disabled_keeps_brackets_literal(self) -> None:
        with parse_config_context(ParseConfig(attributes_enabled=False)):
            blocks = Parser("*a*{.x}\n{.y}").parse()
        para = blocks[0]
        assert isinstance(para, Paragraph)
        assert len(blocks) == 1

    def test_non_string_source(self) -> None:
        with pytest.raises(ParseError, match="must be a string"):
            Parser(b"bytes")  # type: ignore[arg-type]

    def test_source_file_in_locations(self) -> None:
        blocks = Parser("text", source_file="doc.md").parse()
        assert blocks[0].location.source_file == "doc.md"
