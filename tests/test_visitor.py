"""Tests for BaseVisitor and transform."""

import dataclasses

import pytest

from llaves import BaseVisitor, Document, Heading, Node, Strong, Text, parse, render, transform


class PropertyCollector(BaseVisitor[None]):
    def __init__(self) -> None:
        self.found: list[tuple[str, dict[str, str]]] = []

    def visit_default(self, node: Node) -> None:
        properties = getattr(node, "properties", None)
        if properties:
            self.found.append((node.node_type, properties))


class TestBaseVisitor:
    def test_visits_every_node_with_properties(self) -> None:
        doc = parse("# T {#t}\n\n**b**{.x}\n\n- a\n\n{.l}")
        collector = PropertyCollector()
        collector.visit(doc)
        assert collector.found == [
            ("heading", {"id": "t"}),
            ("strong", {"class": "x"}),
            ("list", {"class": "l"}),
        ]

    def test_specific_method(self) -> None:
        class TextCounter(BaseVisitor[None]):
            def __init__(self) -> None:
                self.count = 0

            def visit_text(self, node: Text) -> None:
                self.count += 1

        counter = TextCounter()
        counter.visit(parse("a *b* c"))
        assert counter.count == 3

    def test_return_value(self) -> None:
        class NodeType(BaseVisitor[str]):
            def visit_default(self, node: Node) -> str:
                return node.node_type

        assert NodeType().visit(parse("x")) == "root"


class TestTransform:
    def test_shift_headings(self) -> None:
        def shift(node: Node) -> Node:
            if isinstance(node, Heading):
                return dataclasses.replace(node, level=min(node.level + 1, 6))
            return node

        doc = transform(parse("# A {#a}"), shift)
        assert render(doc) == '<h2 id="a">A</h2>\n'

    def test_remove_nodes(self) -> None:
        def drop_strong(node: Node) -> Node | None:
            return None if isinstance(node, Strong) else node

        doc = transform(parse("a **b**{.x} c"), drop_strong)
        assert render(doc) == "<p>a  c</p>\n"

    def test_original_untouched(self) -> None:
        doc = parse("# A")
        transform(doc, lambda node: dataclasses.replace(node, level=2) if isinstance(node, Heading) else node)
        assert doc.children[0].level == 1

    def test_cannot_remove_root(self) -> None:
        with pytest.raises(TypeError):
            transform(parse("x"), lambda node: None if isinstance(node, Document) else node)
