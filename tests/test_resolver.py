"""Tests for attaching attribute brackets to their target nodes.

Most cases go through parse() and render(), which is how the resolver is
used. A few build trees by hand to check resolver details directly.
"""

from __future__ import annotations

import pytest

from llaves import (
    AttributeBlock,
    AttributeInline,
    AttributeOptions,
    Document,
    Emphasis,
    FencedCode,
    Heading,
    Paragraph,
    ParseConfig,
    Parser,
    Strong,
    Text,
    parse,
    render,
    resolve_attributes,
)
from llaves.attributes import assign_attributes
from llaves.location import SourceLocation

LOC = SourceLocation(1, 1)


def html(source: str, **options: object) -> str:
    config = ParseConfig(
        tables_enabled=True,
        strikethrough_enabled=True,
        attribute_options=AttributeOptions(**options),  # type: ignore[arg-type]
    )
    return render(parse(source, config=config))


class TestInlineAttachment:
    """A bracket attaches to the inline node right before it."""

    def test_strong(self) -> None:
        assert html("**bold**{.myclass}") == '<p><strong class="myclass">bold</strong></p>\n'

    def test_emphasis(self) -> None:
        assert html("*it*{lang=la}") == '<p><em lang="la">it</em></p>\n'

    def test_link(self) -> None:
        assert html("[a](/u){rel=nofollow}") == '<p><a href="/u" rel="nofollow">a</a></p>\n'

    def test_reference_link(self) -> None:
        source = "[docs][d]{.ext}\n\n[d]: /docs"
        assert html(source) == '<p><a href="/docs" class="ext">docs</a></p>\n'

    def test_image(self) -> None:
        assert (
            html("![alt](i.png){width=10}")
            == '<p><img src="i.png" alt="alt" width="10" /></p>\n'
        )

    def test_code_span(self) -> None:
        assert html("`x`{.c}") == '<p><code class="c">x</code></p>\n'

    def test_strikethrough(self) -> None:
        assert html("~~old~~{.gone}") == '<p><del class="gone">old</del></p>\n'

    def test_nested_parent(self) -> None:
        assert (
            html("**a *b*{.x} c**")
            == '<p><strong>a <em class="x">b</em> c</strong></p>\n'
        )

    def test_inside_table_cell(self) -> None:
        source = "| h |\n| --- |\n| *a*{.x} |"
        assert '<td><em class="x">a</em></td>' in html(source)

    def test_later_id_wins(self) -> None:
        assert html("*x*{#a #b}") == '<p><em id="b">x</em></p>\n'

    def test_classes_and_id_together(self) -> None:
        assert html("*x*{#i .a .b}") == '<p><em id="i" class="a b">x</em></p>\n'


class TestUnattached:
    """Brackets without a target stay as literal text."""

    def test_after_plain_text(self) -> None:
        assert html("word{.c}") == "<p>word{.c}</p>\n"

    def test_at_start(self) -> None:
        assert html("{.c} word") == "<p>{.c} word</p>\n"

    def test_after_space(self) -> None:
        assert html("*x* {.c}") == "<p><em>x</em> {.c}</p>\n"

    def test_malformed_value(self) -> None:
        assert html("{=value}") == "<p>{=value}</p>\n"

    def test_unclosed(self) -> None:
        assert html("{.class") == "<p>{.class</p>\n"

    def test_literal_text_is_normalised(self) -> None:
        """Fallback text is written back from the parsed attributes."""
        assert html("word{ .a   #b }") == "<p>word{.a #b}</p>\n"


class TestHeadings:
    """Trailing brackets in headings."""

    def test_trailing_bracket_targets_heading(self) -> None:
        assert html("# Title {.class}") == '<h1 class="class">Title</h1>\n'

    def test_heading_text_trimmed(self) -> None:
        doc = parse("# Title {.class}")
        heading = doc.children[0]
        assert isinstance(heading, Heading)
        assert heading.properties == {"class": "class"}
        assert heading.children == (Text(location=heading.children[0].location, content="Title"),)

    def test_bracket_only_heading_stays_literal(self) -> None:
        doc = parse("# {.class}")
        heading = doc.children[0]
        assert isinstance(heading, Heading)
        assert heading.properties is None
        assert render(doc) == "<h1>{.class}</h1>\n"

    def test_trailing_bracket_after_inline_target(self) -> None:
        assert html("# Title **b**{.x}") == '<h1 class="x">Title <strong>b</strong></h1>\n'

    def test_inner_bracket_targets_sibling(self) -> None:
        assert html("# *a*{.x} tail") == '<h1><em class="x">a</em> tail</h1>\n'

    def test_heading_inline_disabled(self) -> None:
        assert html("# Title {.c}", enable_heading_inline=False) == "<h1>Title {.c}</h1>\n"
        assert (
            html("# Title *b*{.c}", enable_heading_inline=False)
            == '<h1>Title <em class="c">b</em></h1>\n'
        )

    def test_setext_heading(self) -> None:
        assert html("Title {#t}\n=====") == '<h1 id="t">Title</h1>\n'

    def test_closing_hashes(self) -> None:
        assert html("## Title {#t} ##") == '<h2 id="t">Title</h2>\n'


class TestBlockAttachment:
    """A bracket line attaches to the block before it."""

    def test_paragraph(self) -> None:
        assert html("Para\n{.lead}") == '<p class="lead">Para</p>\n'

    def test_after_blank_line(self) -> None:
        assert html("Para\n\n{.lead}") == '<p class="lead">Para</p>\n'

    def test_thematic_break(self) -> None:
        assert html("---\n{.sep}") == '<hr class="sep" />\n'

    def test_block_quote(self) -> None:
        assert (
            html("> quote\n\n{.q}")
            == '<blockquote class="q">\n<p>quote</p>\n</blockquote>\n'
        )

    def test_inside_block_quote(self) -> None:
        assert (
            html("> quote\n> {.q}")
            == '<blockquote>\n<p class="q">quote</p>\n</blockquote>\n'
        )

    def test_list(self) -> None:
        assert (
            html("- a\n- b\n\n{.l}")
            == '<ul class="l">\n<li>a</li>\n<li>b</li>\n</ul>\n'
        )

    def test_fenced_code(self) -> None:
        assert (
            html("```\ncode\n```\n{#c}")
            == '<pre><code id="c">code\n</code></pre>\n'
        )

    def test_table(self) -> None:
        out = html("| a |\n| --- |\n| 1 |\n{.grid}")
        assert out.startswith('<table class="grid">\n')

    def test_heading(self) -> None:
        assert html("# Title\n{#t}") == '<h1 id="t">Title</h1>\n'

    def test_indented_bracket_line(self) -> None:
        assert html("Para\n   {.lead}   ") == '<p class="lead">Para</p>\n'

    def test_no_preceding_block(self) -> None:
        assert html("{#x}") == "<p>{#x}</p>\n"

    def test_stacked_lines_all_attach(self) -> None:
        doc = parse("Para\n{#p}\n{lang=en}")
        para = doc.children[0]
        assert isinstance(para, Paragraph)
        assert para.properties == {"id": "p", "lang": "en"}
        assert len(doc.children) == 1

    def test_text_after_bracket_is_paragraph(self) -> None:
        assert html("Para\n\n{.a} more") == "<p>Para</p>\n<p>{.a} more</p>\n"

    def test_disable_block(self) -> None:
        assert html("Para\n{.lead}", disable_block=True) == "<p>Para</p>\n<p>{.lead}</p>\n"


class TestCodeMeta:
    """Brackets in fenced code info strings."""

    def test_meta_attributes(self) -> None:
        source = "```python {#ex .numbered}\nx = 1\n```"
        assert (
            html(source)
            == '<pre><code class="language-python numbered" id="ex">x = 1\n</code></pre>\n'
        )

    def test_meta_without_braces(self) -> None:
        doc = parse('```js title="app.js"\n```')
        code = doc.children[0]
        assert isinstance(code, FencedCode)
        assert code.properties == {"title": "app.js"}

    def test_language_only(self) -> None:
        doc = parse("```python\nx\n```")
        code = doc.children[0]
        assert isinstance(code, FencedCode)
        assert code.properties is None


class TestFiltering:
    """Scope and handler filtering during attachment."""

    def test_event_handler_dropped(self) -> None:
        assert html('*x*{onclick="alert(1)" .c}') == '<p><em class="c">x</em></p>\n'

    def test_event_handler_allowed(self) -> None:
        out = html('*x*{onclick="f()"}', allow_dangerous_handlers=True, scope="permissive")
        assert out == '<p><em onclick="f()">x</em></p>\n'

    def test_scope_none_drops_bracket(self) -> None:
        assert html("*x*{.c}", scope="none") == "<p><em>x</em></p>\n"

    def test_scope_global(self) -> None:
        assert html("![a](i.png){.c width=5}", scope="global") == (
            '<p><img src="i.png" alt="a" class="c" /></p>\n'
        )

    def test_extend(self) -> None:
        out = html("![a](i.png){x-size=5}", extend={"image": ("x-size",)})
        assert 'x-size="5"' in out

    def test_fully_filtered_bracket_is_consumed(self) -> None:
        assert html("*x*{onclick=f}") == "<p><em>x</em></p>\n"


class TestResolveAttributes:
    """Direct use of resolve_attributes on hand-built trees."""

    def test_idempotent(self) -> None:
        doc = parse("# T {#t}\n\n**b**{.x}\n\n```py {.c}\n```\n\nPara\n{.p}")
        assert resolve_attributes(doc) == doc

    def test_no_placeholders_remain(self) -> None:
        from llaves import BaseVisitor

        class PlaceholderFinder(BaseVisitor[None]):
            def __init__(self) -> None:
                self.found = 0

            def visit_attribute_block(self, node: AttributeBlock) -> None:
                self.found += 1

            def visit_attribute_inline(self, node: AttributeInline) -> None:
                self.found += 1

        finder = PlaceholderFinder()
        finder.visit(parse("{#a}\n\nx{.b}\n\n# {.c}\n\n*e*{.f}\n{.g}"))
        assert finder.found == 0

    def test_parser_leaves_placeholders(self) -> None:
        blocks = Parser("Para\n{.lead}").parse()
        assert isinstance(blocks[1], AttributeBlock)
        assert blocks[1].attributes == {"class": "lead"}

    def test_hand_built_tree(self) -> None:
        strong = Strong(location=LOC, children=(Text(location=LOC, content="b"),))
        attrs = AttributeInline(location=LOC, attributes={"id": "s"})
        doc = Document(
            location=LOC,
            children=(Paragraph(location=LOC, children=(strong, attrs)),),
        )
        resolved = resolve_attributes(doc, AttributeOptions())
        para = resolved.children[0]
        assert isinstance(para, Paragraph)
        assert para.children == (Strong(location=LOC, children=strong.children, properties={"id": "s"}),)

    def test_code_meta_merges_into_existing_properties(self) -> None:
        code = FencedCode(location=LOC, code="", info="js {.k}", properties={"data-x": "1"})
        resolved = resolve_attributes(Document(location=LOC, children=(code,)), AttributeOptions())
        assert resolved.children[0].properties == {"data-x": "1", "class": "k"}

    def test_code_meta_keeps_existing_keys(self) -> None:
        code = FencedCode(
            location=LOC, code="", info="js {#b .k .m}", properties={"id": "a", "class": "k"}
        )
        resolved = resolve_attributes(Document(location=LOC, children=(code,)), AttributeOptions())
        assert resolved.children[0].properties == {"id": "a", "class": "k m"}

    def test_idempotent_when_block_bracket_overrides_meta(self) -> None:
        doc = parse("```js {#a .c}\nx\n```\n{#b .d}")
        assert doc.children[0].properties == {"id": "b", "class": "c d"}
        assert resolve_attributes(doc) == doc

    def test_input_tree_untouched(self) -> None:
        blocks = Parser("*a*{.x}").parse()
        doc = Document(location=LOC, children=blocks)
        resolve_attributes(doc)
        para = doc.children[0]
        assert isinstance(para, Paragraph)
        assert isinstance(para.children[1], AttributeInline)


class TestAssignAttributes:
    """Merging into existing properties."""

    def test_class_appends(self) -> None:
        node = Emphasis(location=LOC, children=(), properties={"class": "a", "id": "x"})
        merged = assign_attributes(node, {"class": "b", "id": "y"}, AttributeOptions())
        assert merged.properties == {"class": "a b", "id": "y"}
        assert node.properties == {"class": "a", "id": "x"}

    @pytest.mark.parametrize("attributes", [{}, {"onclick": "f()"}])
    def test_nothing_survives_returns_same_node(self, attributes: dict[str, str]) -> None:
        node = Emphasis(location=LOC, children=())
        assert assign_attributes(node, attributes, AttributeOptions()) is node
