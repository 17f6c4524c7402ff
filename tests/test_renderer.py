"""Tests for HtmlRenderer."""

from __future__ import annotations

import pytest

from llaves import Markdown
from llaves.errors import RenderError
from llaves.location import SourceLocation
from llaves.nodes import (
    AttributeBlock,
    AttributeInline,
    CodeSpan,
    Document,
    FencedCode,
    Heading,
    Image,
    IndentedCode,
    Link,
    List,
    ListItem,
    Paragraph,
    Text,
    ThematicBreak,
)
from llaves.renderers import HtmlRenderer, format_attributes, html_escape

LOC = SourceLocation(1, 1)


def render_blocks(*blocks) -> str:
    return HtmlRenderer().render(Document(location=LOC, children=blocks))


def para(*inlines, properties: dict[str, str] | None = None) -> Paragraph:
    return Paragraph(location=LOC, children=inlines, properties=properties)


def text(content: str) -> Text:
    return Text(location=LOC, content=content)


class TestFormatAttributes:
    """Attribute string formatting."""

    def test_properties_after_intrinsic(self) -> None:
        out = format_attributes({"href": "/a"}, {"class": "x", "hidden": ""})
        assert out == ' href="/a" class="x" hidden=""'

    def test_property_overrides_intrinsic(self) -> None:
        assert format_attributes({"start": "3"}, {"start": "7"}) == ' start="7"'

    def test_merge_class(self) -> None:
        out = format_attributes({"class": "language-py"}, {"class": "x"}, merge_class=True)
        assert out == ' class="language-py x"'

    def test_values_escaped(self) -> None:
        assert format_attributes({}, {"title": 'a "b" <c> & d'}) == (
            ' title="a &quot;b&quot; &lt;c&gt; &amp; d"'
        )

    def test_none_properties(self) -> None:
        assert format_attributes({}, None) == ""

    @pytest.mark.parametrize("name", ['x"><script>', "a b", "a=b", "a/b", "a\x00b", ""])
    def test_invalid_names_skipped(self, name: str) -> None:
        assert format_attributes({"href": "/a"}, {name: "1", "ok": "2"}) == ' href="/a" ok="2"'


class TestHtmlEscape:
    def test_quotes_escaped_but_not_apostrophes(self) -> None:
        assert html_escape("\"it's\"") == "&quot;it's&quot;"


class TestBlocks:
    """Block rendering with and without properties."""

    def test_heading(self) -> None:
        heading = Heading(location=LOC, level=2, children=(text("Hi"),), properties={"id": "hi"})
        assert render_blocks(heading) == '<h2 id="hi">Hi</h2>\n'

    def test_paragraph(self) -> None:
        assert render_blocks(para(text("x"), properties={"class": "lead"})) == '<p class="lead">x</p>\n'

    def test_thematic_break(self) -> None:
        assert render_blocks(ThematicBreak(location=LOC, properties={"class": "s"})) == '<hr class="s" />\n'

    def test_fenced_code_properties_on_code_element(self) -> None:
        code = FencedCode(location=LOC, code="x\n", info="py", properties={"id": "c", "class": "n"})
        assert render_blocks(code) == '<pre><code class="language-py n" id="c">x\n</code></pre>\n'

    def test_fenced_code_info_entities(self) -> None:
        code = FencedCode(location=LOC, code="", info="c&plus;&plus;")
        assert render_blocks(code) == '<pre><code class="language-c++"></code></pre>\n'

    def test_indented_code_escaped(self) -> None:
        code = IndentedCode(location=LOC, code="<b>\n", properties={"class": "x"})
        assert render_blocks(code) == '<pre><code class="x">&lt;b&gt;\n</code></pre>\n'

    def test_ordered_list_start_overridden(self) -> None:
        item = ListItem(location=LOC, children=(para(text("a")),))
        lst = List(location=LOC, items=(item,), ordered=True, start=3, properties={"start": "9"})
        assert render_blocks(lst) == '<ol start="9">\n<li>a</li>\n</ol>\n'

    def test_empty_list_item(self) -> None:
        lst = List(location=LOC, items=(ListItem(location=LOC, children=()),))
        assert render_blocks(lst) == "<ul>\n<li></li>\n</ul>\n"


class TestInlines:
    """Inline rendering with and without properties."""

    def test_link_properties(self) -> None:
        link = Link(location=LOC, url="/a b", title=None, children=(text("x"),), properties={"rel": "me"})
        assert render_blocks(para(link)) == '<p><a href="/a%20b" rel="me">x</a></p>\n'

    def test_link_title(self) -> None:
        link = Link(location=LOC, url="/u", title="T &amp; U", children=(text("x"),))
        assert render_blocks(para(link)) == '<p><a href="/u" title="T &amp; U">x</a></p>\n'

    def test_image(self) -> None:
        image = Image(location=LOC, url="p.png", alt="A", properties={"width": "5"})
        assert render_blocks(para(image)) == '<p><img src="p.png" alt="A" width="5" /></p>\n'

    def test_code_span(self) -> None:
        code = CodeSpan(location=LOC, code="a<b", properties={"class": "k"})
        assert render_blocks(para(code)) == '<p><code class="k">a&lt;b</code></p>\n'


class TestUnsafeAttributeNames:
    """Attribute names from code meta cannot break out of the tag."""

    @pytest.mark.parametrize("scope", ["permissive", "every"])
    def test_markup_in_meta_key(self, scope: str) -> None:
        md = Markdown(attributes={"scope": scope})
        out = md("```js x><script>alert(1)</script>\nx\n```")
        assert "<script>" not in out
        assert out == '<pre><code class="language-js">x\n</code></pre>\n'

    def test_valid_keys_beside_invalid_ones_kept(self) -> None:
        md = Markdown(attributes={"scope": "permissive"})
        out = md('```js a"b=1 title="t"\nx\n```')
        assert out == '<pre><code class="language-js" title="t">x\n</code></pre>\n'

    def test_hand_built_properties(self) -> None:
        code = FencedCode(location=LOC, code="x\n", info="py", properties={"a><b": "1", "id": "c"})
        assert render_blocks(code) == '<pre><code class="language-py" id="c">x\n</code></pre>\n'


class TestPlaceholders:
    """Unresolved placeholders cannot be rendered."""

    def test_attribute_block(self) -> None:
        with pytest.raises(RenderError, match="resolve_attributes"):
            render_blocks(AttributeBlock(location=LOC, attributes={"id": "x"}))

    def test_attribute_inline(self) -> None:
        with pytest.raises(RenderError):
            render_blocks(para(AttributeInline(location=LOC, attributes={"id": "x"})))


class TestThreadSafety:
    def test_shared_renderer(self) -> None:
        from concurrent.futures import ThreadPoolExecutor

        renderer = HtmlRenderer()
        docs = [
            Document(location=LOC, children=(para(text(str(i)), properties={"id": f"p{i}"}),))
            for i in range(20)
        ]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(renderer.render, docs))
        assert results == [f'<p id="p{i}">{i}</p>\n' for i in range(20)]
