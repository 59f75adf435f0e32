"""
Batch Decoder Module

Reads the XML document returned by DeepL and hands the translated fragments
to the matching string entries.

DeepL does not always return every string it was given: strings that cannot
be translated or are empty may be missing from the result. Any missing
string is treated as a failed translation of the whole batch.
"""

from typing import Dict, Mapping

from lxml import etree

from deeplxml.exceptions import (
    DuplicateResultIdError,
    EmptyDocumentError,
    IncompleteResultError,
    MalformedDocumentError,
    MissingIdError,
    UnknownIdError,
)
from deeplxml.logger import get_logger
from deeplxml.translation.entry import StringEntry
from deeplxml.translation.markup import ID_ATTRIBUTE, SPLITTING_TAG, serialize_children

logger = get_logger(__name__)


def prettify_xml(xml: str) -> str:
    """Indent an XML document for diagnostics. Unparseable input is returned as-is."""
    if not xml or not xml.strip():
        return xml
    try:
        parser = etree.XMLParser(remove_blank_text=True, resolve_entities=False, no_network=True)
        root = etree.fromstring(xml.strip().encode('utf-8'), parser)
    except etree.XMLSyntaxError:
        return xml
    return etree.tostring(root, pretty_print=True, encoding='unicode')


class BatchDecoder:
    """Matches the fragments of a result document back onto string entries."""

    def decode(self, raw_document: str, entries: Mapping[str, StringEntry],
               sent_document: str = "") -> None:
        """
        Parse the result document and set the translated texts.

        Elements are matched by their ID attribute only, so they may come back
        in any order. The translated texts are only set once the whole
        document has been validated: a failing document leaves every entry
        untouched.

        Args:
            raw_document: The XML returned by DeepL
            entries: The known entries by string ID
            sent_document: The XML that was originally sent, for diagnostics

        Raises:
            EmptyDocumentError: If the document is empty
            MalformedDocumentError: If the document is not well-formed XML
            MissingIdError: If a splitting tag has no ID attribute
            UnknownIdError: If a splitting tag references an unknown string
            DuplicateResultIdError: If two splitting tags carry the same ID
            IncompleteResultError: If a known string is missing from the result
        """
        diagnostics = {'received_document': raw_document or '', 'sent_document': sent_document}

        xml = (raw_document or '').strip()
        if not xml:
            raise EmptyDocumentError(
                "Empty XML translation document: the result is an empty string",
                **diagnostics,
            )

        try:
            parser = etree.XMLParser(resolve_entities=False, no_network=True)
            root = etree.fromstring(xml.encode('utf-8'), parser)
        except etree.XMLSyntaxError as e:
            logger.error(f"Failed to parse result XML: {e}")
            raise MalformedDocumentError(
                f"The result XML could not be parsed: {e}",
                **diagnostics,
            ) from e

        results: Dict[str, str] = {}

        for node in root.iter(SPLITTING_TAG):
            string_id = node.get(ID_ATTRIBUTE, '')

            if not string_id:
                raise MissingIdError(
                    "ID attribute value missing in DeepL response XML: "
                    "a translation element does not have the expected ID attribute.\n"
                    f"Received XML:\n{prettify_xml(xml)}\n"
                    f"We originally sent this XML:\n{prettify_xml(sent_document)}",
                    **diagnostics,
                )

            if string_id not in entries:
                raise UnknownIdError(
                    f"Returned string does not exist: the string [{string_id}] is present "
                    "in the translated XML, but was never added.",
                    string_id=string_id,
                    **diagnostics,
                )

            if string_id in results:
                raise DuplicateResultIdError(
                    f"Returned string appears twice: the string [{string_id}] is present "
                    "more than once in the translated XML.",
                    string_id=string_id,
                    **diagnostics,
                )

            results[string_id] = serialize_children(node)

        # Make sure that all strings were present
        for string_id in entries:
            if string_id not in results:
                logger.warning(f"String [{string_id}] missing from the result XML")
                raise IncompleteResultError(
                    f"String not found in result: the string [{string_id}] "
                    "could not be found in the result XML.",
                    string_id=string_id,
                    **diagnostics,
                )

        for string_id, text in results.items():
            entries[string_id].set_translated_text(text)

        logger.debug(f"Decoded {len(results)} translated strings")
