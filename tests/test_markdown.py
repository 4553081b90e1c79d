"""Markdown subset parsing and its Dash rendering."""

from __future__ import annotations

from dash import html

from standarium_erp.components.markdown_view import render_markdown
from standarium_erp.markdown import (
    BOLD,
    BREAK,
    BULLET,
    HEADING,
    ITALIC,
    PARAGRAPH,
    TEXT,
    parse_inline,
    parse_markdown,
)


class TestParseInline:
    def test_bold_and_italic(self) -> None:
        inlines = parse_inline("Faturamento **alto** e *estável*.")
        assert [(i.kind, i.text) for i in inlines] == [
            (TEXT, "Faturamento "), (BOLD, "alto"), (TEXT, " e "), (ITALIC, "estável"), (TEXT, "."),
        ]

    def test_unclosed_markers_stay_literal(self) -> None:
        inlines = parse_inline("2 * 3 e **aberto")
        assert [(i.kind, i.text) for i in inlines] == [(TEXT, "2 * 3 e **aberto")]


class TestParseMarkdown:
    def test_blocks(self) -> None:
        text = "# Análise\n\nLinha um\nLinha dois\n\n- ponto **forte**\n* outro ponto\n"
        blocks = parse_markdown(text)
        assert [b.kind for b in blocks] == [HEADING, PARAGRAPH, BULLET, BULLET]
        assert blocks[0].level == 1
        assert [i.kind for i in blocks[1].inlines] == [TEXT, BREAK, TEXT]
        assert [(i.kind, i.text) for i in blocks[2].inlines] == [(TEXT, "ponto "), (BOLD, "forte")]

    def test_empty_input(self) -> None:
        assert parse_markdown("") == []
        assert parse_markdown(None) == []


class TestRenderMarkdown:
    def test_bullets_are_grouped_in_one_list(self) -> None:
        div = render_markdown("Intro\n- a\n- b\n\nFim")
        kinds = [type(child) for child in div.children]
        assert kinds == [html.P, html.Ul, html.P]
        assert len(div.children[1].children) == 2

    def test_no_raw_html_is_produced(self) -> None:
        div = render_markdown("<script>alert(1)</script>")
        (p,) = div.children
        assert p.children == ["<script>alert(1)</script>"]
