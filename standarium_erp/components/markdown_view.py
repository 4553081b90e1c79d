"""Render parsed markdown blocks as Dash html components."""
from dash import html

from standarium_erp.markdown import BOLD, BREAK, BULLET, HEADING, ITALIC, parse_markdown

_HEADINGS = {1: html.H3, 2: html.H4, 3: html.H5}


def _inline(inlines):
    out = []
    for item in inlines:
        if item.kind == BOLD:
            out.append(html.Strong(item.text))
        elif item.kind == ITALIC:
            out.append(html.Em(item.text))
        elif item.kind == BREAK:
            out.append(html.Br())
        else:
            out.append(item.text)
    return out


def render_markdown(text, class_name="markdown-body"):
    children = []
    bullets = []
    for block in parse_markdown(text):
        if block.kind == BULLET:
            bullets.append(html.Li(_inline(block.inlines)))
            continue
        if bullets:
            children.append(html.Ul(bullets))
            bullets = []
        if block.kind == HEADING:
            children.append(_HEADINGS.get(block.level, html.H6)(_inline(block.inlines)))
        else:
            children.append(html.P(_inline(block.inlines)))
    if bullets:
        children.append(html.Ul(bullets))
    return html.Div(children, className=class_name)
