"""
String Entry Module

Contains the StringEntry class, the container for a single string to translate.
"""

from typing import List, TYPE_CHECKING

from deeplxml.protection import restore_translated_text
from deeplxml.translation.markup import build_fragment, serialize_children

if TYPE_CHECKING:
    from deeplxml.translation.session import Translator


class StringEntry:
    """
    A single string to translate.

    Entries are created by Translator.add_string() and belong to that
    translator for their whole lifetime. The translator reference is only
    used to look up the translation status; the translated text is set by
    the decoder.
    """

    def __init__(self, translator: "Translator", string_id: str, original_text: str):
        self._translator = translator
        self._id = string_id
        self._original = original_text
        self._translated = ''
        self._ignore: List[str] = []

    def __repr__(self) -> str:
        return f"StringEntry(id={self._id!r})"

    @property
    def id(self) -> str:
        return self._id

    @property
    def original_text(self) -> str:
        return self._original

    @property
    def translated_text(self) -> str:
        """The translated text, empty until the translation ran."""
        return self._translated

    @property
    def ignore_markers(self) -> List[str]:
        return list(self._ignore)

    def get_id(self) -> str:
        """Retrieve the string ID, as it was specified when it was added."""
        return self._id

    def get_original_text(self) -> str:
        return self._original

    def add_ignore_marker(self, marker: str) -> "StringEntry":
        """
        Add a literal substring that DeepL must leave untouched.

        Any occurrence of the marker in the text is sent inside the ignore
        tag. Adding the same marker twice has no effect.

        Args:
            marker: Literal substring to protect

        Returns:
            The entry itself, for chaining
        """
        if marker and marker not in self._ignore:
            self._ignore.append(marker)
        return self

    add_ignore_string = add_ignore_marker

    def prepared_text(self) -> str:
        """
        Retrieve the text to send to DeepL, with ignore markers wrapped.

        Markers are only wrapped in text content, and plain text comes back
        XML-escaped, so the result is always a well-formed fragment.

        Raises:
            lxml.etree.XMLSyntaxError: If the text contains malformed markup
        """
        return serialize_children(build_fragment(self._original, self._ignore))

    get_prepared_text = prepared_text

    def set_translated_text(self, text: str) -> None:
        """
        Store the translated text.

        Called by the decoder once the result document has been read. The
        ignore tags are removed and entities decoded.
        """
        self._translated = restore_translated_text(text)

    def get_translated_text(self) -> str:
        """Retrieve the translated text, empty until Translator.translate() ran."""
        return self._translated

    def is_translated(self) -> bool:
        return self._translator.is_translated()
