"""Inline annotation markers expanded on each source line before parsing.

Three markers are recognized anywhere in a line:

- ``@#name`` becomes ``<span id='name'></span>``
- ``@.name`` becomes ``<span class='name'></span>``
- ``@//`` drops itself and the rest of the line

Expansion never fails; a marker with no name after it is left as written.
"""

from __future__ import annotations

from typing import Callable

TAG_ID_MARKER = "@#"
TAG_CLASS_MARKER = "@."
TAG_COMMENT_MARKER = "@//"

# A tag name also ends where another marker or markup would start.
NAME_TERMINATORS = (TAG_ID_MARKER, TAG_CLASS_MARKER, TAG_COMMENT_MARKER, "'", "<", ">")


def _id_span(tag: str) -> str:
    return f"<span id='{tag}'></span>"


def _class_span(tag: str) -> str:
    return f"<span class='{tag}'></span>"


def _tag_name(text: str) -> str:
    ends = [end for end in (text.find(stop) for stop in NAME_TERMINATORS) if end != -1]
    return text[:min(ends)] if ends else text


def resolve_inline_tag(line: str, tag_marker: str, replacement: Callable[[str], str]) -> str:
    """Replace every ``<tag_marker><name>`` token in *line*.

    The name runs from the marker to the next whitespace, marker prefix or
    quote/angle bracket.  Scanning resumes after each inserted replacement,
    so generated markup is never rescanned.  An empty name stops the scan
    and leaves the rest as is.
    """
    start = line.find(tag_marker)
    while start != -1:
        token = line[start:].split(maxsplit=1)[0]
        tag_name = _tag_name(token[len(tag_marker):])
        if not tag_name:
            break

        expanded = replacement(tag_name)
        line = line[:start] + expanded + line[start + len(tag_marker) + len(tag_name):]
        start = line.find(tag_marker, start + len(expanded))

    return line


def strip_comment(line: str) -> str:
    comment_start = line.find(TAG_COMMENT_MARKER)
    if comment_start == -1:
        return line
    return line[:comment_start]


def expand(line: str) -> str:
    """Expand id, class and comment markers on a single line.

    Ids are resolved before classes, and comments are stripped last.
    Running this on its own output returns it unchanged.
    """
    if not line:
        return line
    with_ids = resolve_inline_tag(line, TAG_ID_MARKER, _id_span)
    with_classes = resolve_inline_tag(with_ids, TAG_CLASS_MARKER, _class_span)
    return strip_comment(with_classes)
