"""
Ignore Marker Module - Core Functions

This module handles the protection of literal substrings that DeepL must not
translate. Protected substrings are wrapped in the reserved ignore tag, which
is sent to DeepL as a non-translatable tag, and the wrappers are stripped
from the translated text again.

Markers are only matched in text content: tag names, attribute values and
comments are never touched.
"""

import html
import re
from typing import List, Optional, Pattern, Sequence, Tuple

from lxml import etree

IGNORE_TAG = 'deeplignore'

_IGNORE_TAG_PATTERN = re.compile(rf'</?{IGNORE_TAG}\s*/?>')


def order_markers(markers: Sequence[str]) -> List[str]:
    """
    Order markers so that longer markers win over markers they contain.

    Sorting is stable, so markers of equal length keep the order in which
    they were added.
    """
    return sorted((m for m in markers if m), key=len, reverse=True)


def compile_markers(markers: Sequence[str]) -> Optional[Pattern]:
    """Build the single-pass pattern matching all markers, longest first."""
    ordered = order_markers(markers)
    if not ordered:
        return None
    return re.compile('(' + '|'.join(re.escape(marker) for marker in ordered) + ')')


def _split_text(pattern: Pattern, text: str) -> Tuple[str, List[etree._Element]]:
    """Split a text node into its leading text and one ignore element per match."""
    parts = pattern.split(text)
    wrapped = []
    for marker, following in zip(parts[1::2], parts[2::2]):
        node = etree.Element(IGNORE_TAG)
        node.text = marker
        node.tail = following or None
        wrapped.append(node)
    return parts[0], wrapped


def wrap_ignore_markers(element: etree._Element, markers: Sequence[str]) -> etree._Element:
    """
    Wrap every occurrence of every marker in the text of an element tree.

    All markers are matched in a single left-to-right pass, longest first,
    so text that is already part of a longer marker is never wrapped twice.
    The element's own text, the text of its descendants and their tails are
    searched. lxml escapes the text when the tree is serialized.

    Example:
        >>> element = etree.fromstring('<p>Hello world</p>')
        >>> etree.tostring(wrap_ignore_markers(element, ["world"]))
        b'<p>Hello <deeplignore>world</deeplignore></p>'
    """
    pattern = compile_markers(markers)
    if pattern is None:
        return element

    for node in list(element.iter()):
        if isinstance(node.tag, str) and node.tag != IGNORE_TAG and node.text:
            leading, wrapped = _split_text(pattern, node.text)
            if wrapped:
                node.text = leading or None
                for index, ignore in enumerate(wrapped):
                    node.insert(index, ignore)

        if node is not element and node.tail:
            leading, wrapped = _split_text(pattern, node.tail)
            if wrapped:
                node.tail = leading or None
                parent = node.getparent()
                position = parent.index(node)
                for offset, ignore in enumerate(wrapped, start=1):
                    parent.insert(position + offset, ignore)

    return element


def strip_ignore_tags(text: str) -> str:
    """Remove ignore tag wrappers, keeping their content."""
    if IGNORE_TAG not in text:
        return text
    return _IGNORE_TAG_PATTERN.sub('', text)


def restore_translated_text(text: str) -> str:
    """
    Turn a translated fragment back into plain caller text.

    Strips the ignore wrappers and decodes HTML/XML entities.
    """
    return html.unescape(strip_ignore_tags(text))
