"""
markdown.py: the small markdown subset the AI backend answers with.

Supported: ``#`` headings, ``- ``/``* `` bullets, ``**bold**``, ``*italic*``
and line breaks inside paragraphs. The output is a list of ``Block`` records;
rendering is left to components/markdown_view.py, so no raw HTML is ever
produced from model output. Unclosed markers stay literal text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

HEADING = "heading"
PARAGRAPH = "paragraph"
BULLET = "bullet"

TEXT = "text"
BOLD = "bold"
ITALIC = "italic"
BREAK = "break"

_HEADING_RE = re.compile(r"^(#{1,6})\s*(.*)$")
_BULLET_RE = re.compile(r"^\s*[-*•]\s+(.*)$")
_INLINE_RE = re.compile(r"\*\*(.+?)\*\*|\*(?!\s)(.+?)(?<!\s)\*")


@dataclass
class Inline:
    kind: str
    text: str = ""


@dataclass
class Block:
    kind: str
    inlines: list = field(default_factory=list)
    level: int = 0


def parse_inline(text):
    inlines = []
    pos = 0
    for m in _INLINE_RE.finditer(text):
        if m.start() > pos:
            inlines.append(Inline(TEXT, text[pos:m.start()]))
        if m.group(1) is not None:
            inlines.append(Inline(BOLD, m.group(1)))
        else:
            inlines.append(Inline(ITALIC, m.group(2)))
        pos = m.end()
    if pos < len(text):
        inlines.append(Inline(TEXT, text[pos:]))
    return inlines


def parse_markdown(text):
    blocks = []
    paragraph = []

    def flush():
        if not paragraph:
            return
        inlines = []
        for i, line in enumerate(paragraph):
            if i:
                inlines.append(Inline(BREAK))
            inlines.extend(parse_inline(line))
        blocks.append(Block(PARAGRAPH, inlines))
        paragraph.clear()

    for raw in (text or "").replace("\r\n", "\n").split("\n"):
        line = raw.rstrip()
        if not line.strip():
            flush()
            continue
        heading = _HEADING_RE.match(line)
        if heading:
            flush()
            blocks.append(Block(HEADING, parse_inline(heading.group(2)), level=len(heading.group(1))))
            continue
        bullet = _BULLET_RE.match(line)
        if bullet:
            flush()
            blocks.append(Block(BULLET, parse_inline(bullet.group(1))))
            continue
        paragraph.append(line.strip())
    flush()
    return blocks
