"""Linear scanner for single-file component markup.

The scanner walks tags left to right, keeping track of quoted attribute
values, HTML comments, ``{{ }}`` interpolations and raw-text blocks
(``<script>``/``<style>``) so that markup-like characters inside any of
them never start or end a tag.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

_NEXT_MARK = re.compile(r"<|\{\{")
_TAG_NAME = re.compile(r"<(/?)([A-Za-z][\w\-.:]*)")
_ATTR_NAME = re.compile(r"[^\s\"'<>/=]+")
_UNQUOTED_VALUE = re.compile(r"[^\s>]+")
_RAW_TEXT_TAGS = {"script", "style"}

TEMPLATE_TAG = "template"


@dataclass(frozen=True)
class Tag:
    """An opening, closing or self-closing tag found by :func:`iter_tags`."""

    name: str
    attributes: Tuple[Tuple[str, Optional[str]], ...]
    closing: bool
    self_closing: bool
    start: int
    end: int

    def is_named(self, name: str) -> bool:
        return self.name.lower() == name


def _skip_space(markup: str, index: int) -> int:
    length = len(markup)
    while index < length and markup[index].isspace():
        index += 1
    return index


def read_tag(markup: str, start: int) -> Optional[Tag]:
    """Parse the tag beginning at ``start`` or return ``None`` if none starts there."""
    match = _TAG_NAME.match(markup, start)
    if not match:
        return None
    closing = bool(match.group(1))
    name = match.group(2)
    attributes = []
    length = len(markup)
    index = match.end()
    while index < length:
        char = markup[index]
        if char.isspace():
            index += 1
            continue
        if char == ">":
            return Tag(name, tuple(attributes), closing, False, start, index + 1)
        if markup.startswith("/>", index):
            return Tag(name, tuple(attributes), closing, True, start, index + 2)
        attr = _ATTR_NAME.match(markup, index)
        if not attr:
            index += 1
            continue
        attr_name = attr.group(0)
        index = _skip_space(markup, attr.end())
        if index < length and markup[index] == "=":
            index = _skip_space(markup, index + 1)
            if index < length and markup[index] in "\"'":
                quote = markup[index]
                close = markup.find(quote, index + 1)
                if close < 0:
                    attributes.append((attr_name, markup[index + 1 :]))
                    index = length
                    break
                attributes.append((attr_name, markup[index + 1 : close]))
                index = close + 1
            else:
                value = _UNQUOTED_VALUE.match(markup, index)
                attributes.append((attr_name, value.group(0) if value else ""))
                index = value.end() if value else index
        else:
            attributes.append((attr_name, None))
    return Tag(name, tuple(attributes), closing, False, start, length)


def iter_tags(markup: str, start: int = 0) -> Iterator[Tag]:
    """Yield every tag in ``markup`` from ``start`` in document order."""
    length = len(markup)
    index = start
    while index < length:
        mark = _NEXT_MARK.search(markup, index)
        if not mark:
            return
        index = mark.start()
        if mark.group(0) == "{{":
            close = markup.find("}}", index + 2)
            index = length if close < 0 else close + 2
            continue
        if markup.startswith("<!--", index):
            close = markup.find("-->", index + 4)
            index = length if close < 0 else close + 3
            continue
        tag = read_tag(markup, index)
        if tag is None:
            index += 1
            continue
        yield tag
        index = tag.end
        if not tag.closing and not tag.self_closing and tag.name.lower() in _RAW_TEXT_TAGS:
            close = re.compile(rf"</{re.escape(tag.name)}\s*>", re.I).search(markup, index)
            index = length if close is None else close.start()


def extract_template_region(text: str) -> Optional[str]:
    """Return the body of the outermost ``<template>`` block.

    Nested ``<template>`` elements are balanced by depth so that an inner
    closer does not end the outer region. An unterminated region runs to the
    end of the text; ``None`` means the file has no template at all.
    """
    opener: Optional[Tag] = None
    for tag in iter_tags(text):
        if tag.is_named(TEMPLATE_TAG) and not tag.closing:
            opener = tag
            break
    if opener is None:
        return None
    if opener.self_closing:
        return ""

    depth = 1
    for tag in iter_tags(text, opener.end):
        if not tag.is_named(TEMPLATE_TAG):
            continue
        if tag.closing:
            depth -= 1
            if depth == 0:
                return text[opener.end : tag.start]
        elif not tag.self_closing:
            depth += 1
    return text[opener.end :]


__all__ = ["Tag", "extract_template_region", "iter_tags", "read_tag"]
