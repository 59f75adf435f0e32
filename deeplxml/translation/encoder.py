"""
Batch Encoder Module

Renders the XML document that is sent to DeepL: one root element with one
splitting tag per string, each carrying the string ID as attribute.

Example:
    <document>
        <deeplstring id="title">Hello</deeplstring>
        <deeplstring id="intro"><p>Hello <deeplignore>world</deeplignore></p></deeplstring>
    </document>
"""

from typing import Iterable

from lxml import etree

from deeplxml.exceptions import ConversionError
from deeplxml.logger import get_logger
from deeplxml.translation.entry import StringEntry
from deeplxml.translation.markup import ID_ATTRIBUTE, ROOT_TAG, SPLITTING_TAG, build_fragment

logger = get_logger(__name__)


class BatchEncoder:
    """Converts string entries into the batch document."""

    def encode(self, entries: Iterable[StringEntry]) -> str:
        """
        Render the batch document.

        Args:
            entries: Entries to include, in the order they should appear

        Returns:
            The serialized XML document

        Raises:
            ConversionError: If a text containing markup is not well-formed XML
        """
        root = etree.Element(ROOT_TAG)
        count = 0

        for entry in entries:
            root.append(self._build_element(entry))
            count += 1

        document = etree.tostring(
            etree.ElementTree(root),
            xml_declaration=True,
            encoding='UTF-8',
        ).decode('utf-8')

        logger.debug(f"Encoded {count} strings into a {len(document)} chars document")

        return document

    def _build_element(self, entry: StringEntry) -> etree._Element:
        text = entry.original_text

        try:
            element = build_fragment(text, entry.ignore_markers)
            element.set(ID_ATTRIBUTE, entry.id)
        except (etree.XMLSyntaxError, ValueError) as e:
            logger.error(f"Failed to convert text of string [{entry.id}]: {e}")
            raise ConversionError(
                f"Failed to convert text snippet of string [{entry.id}]: {e}",
                text=text,
                details={'string_id': entry.id},
            ) from e

        return element
