"""
Markup Classification Module

Decides whether a string is sent to DeepL as plain text or as an XML
fragment, and builds the matching element. The encoder consumes the result
without branching on the text itself.
"""

import html
import re
from dataclasses import dataclass
from typing import Sequence, Union

from lxml import etree

from deeplxml.protection import wrap_ignore_markers

ROOT_TAG = 'document'
SPLITTING_TAG = 'deeplstring'
ID_ATTRIBUTE = 'id'

# Opening, closing or self-closing tag: "<" directly followed by a name or "/"
_TAG_PATTERN = re.compile(r'</?[A-Za-z_][\w.:-]*(\s[^<>]*)?/?>')


@dataclass(frozen=True)
class PlainText:
    """Text without markup, attached as element text."""
    text: str


@dataclass(frozen=True)
class MarkupFragment:
    """Text containing markup, parsed and attached as child nodes."""
    text: str


ClassifiedText = Union[PlainText, MarkupFragment]


def contains_markup(text: str) -> bool:
    return bool(_TAG_PATTERN.search(text))


def classify_text(text: str) -> ClassifiedText:
    """
    Classify a string text.

    Example:
        >>> classify_text("Hello")
        PlainText(text='Hello')
        >>> classify_text("<p>Hello</p>")
        MarkupFragment(text='<p>Hello</p>')
    """
    if contains_markup(text):
        return MarkupFragment(text)
    return PlainText(text)


def fragment_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True)


def build_fragment(text: str, markers: Sequence[str] = (), tag: str = SPLITTING_TAG) -> etree._Element:
    """
    Build the element holding a string text, with ignore markers wrapped.

    Markup is parsed as a fragment wrapped in the given tag, which keeps the
    leading text and all nested elements in place. Plain text becomes the
    element text as-is.

    Raises:
        etree.XMLSyntaxError: If the markup is not well-formed
        ValueError: If the text contains characters XML cannot hold
    """
    classified = classify_text(text)

    if isinstance(classified, MarkupFragment):
        element = etree.fromstring(f"<{tag}>{classified.text}</{tag}>", fragment_parser())
    else:
        element = etree.Element(tag)
        element.text = classified.text

    return wrap_ignore_markers(element, markers)


def serialize_children(element: etree._Element) -> str:
    """Serialize everything inside an element: its text, child nodes and their tails."""
    parts = [html.escape(element.text, quote=False)] if element.text else []
    for child in element:
        parts.append(etree.tostring(child, encoding='unicode', with_tail=True))
    return ''.join(parts)
