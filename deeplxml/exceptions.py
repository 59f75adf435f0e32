"""
Translator Exceptions

This module contains the exception classes raised while registering strings,
encoding the batch document, talking to DeepL and decoding the reply.
Separated to avoid circular imports between the translation and connector
packages.

Every exception carries a stable numeric code so callers can tell failures
apart without matching on messages.
"""

import html
from typing import Optional

import httpx

ERROR_STRING_ID_ALREADY_EXISTS = 37601
ERROR_NO_STRINGS_TO_TRANSLATE = 37602
ERROR_FAILED_CONVERTING_TEXT = 37603
ERROR_MISSING_ID_ATTRIBUTE_IN_RESPONSE = 37604
ERROR_RESPONSE_STRING_DOES_NOT_EXIST = 37605
ERROR_STRING_NOT_FOUND_IN_RESULT = 37506
ERROR_CANNOT_GET_UNKNOWN_STRING = 37507
ERROR_TRANSLATION_REQUEST_FAILED = 37508
ERROR_EMPTY_XML_DOCUMENT = 37510
ERROR_TRANSLATION_RESULT_EMPTY = 37511
ERROR_MALFORMED_XML_DOCUMENT = 37512
ERROR_DUPLICATE_ID_IN_RESPONSE = 37513
ERROR_CONNECTOR_REQUEST_FAILED = 37520


class TranslatorError(Exception):
    """Translator error with optional code and details."""

    code: Optional[int] = None

    def __init__(self, message: str, code: int = None, details: dict = None):
        super().__init__(message)
        if code is not None:
            self.code = code
        self.details = details or {}


class DuplicateIdError(TranslatorError):
    code = ERROR_STRING_ID_ALREADY_EXISTS


class UnknownStringError(TranslatorError):
    code = ERROR_CANNOT_GET_UNKNOWN_STRING


class NoStringsError(TranslatorError):
    code = ERROR_NO_STRINGS_TO_TRANSLATE


class ConversionError(TranslatorError):
    """A prepared text could not be converted to an XML fragment."""

    code = ERROR_FAILED_CONVERTING_TEXT

    def __init__(self, message: str, text: str, details: dict = None):
        super().__init__(message, details=details)
        self.text = text


class ConnectorError(TranslatorError):
    """The HTTP exchange with DeepL failed. The httpx error is chained as __cause__."""

    code = ERROR_CONNECTOR_REQUEST_FAILED


class DecodeError(TranslatorError):
    """Base class for errors found while reading the returned document."""

    def __init__(self, message: str, received_document: str = "", sent_document: str = "",
                 details: dict = None):
        super().__init__(message, details=details)
        self.received_document = received_document
        self.sent_document = sent_document


class EmptyDocumentError(DecodeError):
    code = ERROR_EMPTY_XML_DOCUMENT


class MalformedDocumentError(DecodeError):
    code = ERROR_MALFORMED_XML_DOCUMENT


class MissingIdError(DecodeError):
    code = ERROR_MISSING_ID_ATTRIBUTE_IN_RESPONSE


class UnknownIdError(DecodeError):
    code = ERROR_RESPONSE_STRING_DOES_NOT_EXIST

    def __init__(self, message: str, string_id: str, **kwargs):
        super().__init__(message, **kwargs)
        self.string_id = string_id


class IncompleteResultError(DecodeError):
    code = ERROR_STRING_NOT_FOUND_IN_RESULT

    def __init__(self, message: str, string_id: str, **kwargs):
        super().__init__(message, **kwargs)
        self.string_id = string_id


class DuplicateResultIdError(DecodeError):
    code = ERROR_DUPLICATE_ID_IN_RESPONSE

    def __init__(self, message: str, string_id: str, **kwargs):
        super().__init__(message, **kwargs)
        self.string_id = string_id


class RequestError(TranslatorError):
    """
    Base class for failures of the translation request itself.

    Carries the translator that sent the request, the request configuration
    and the XML that was submitted, for diagnostics.
    """

    def __init__(self, message: str, translator=None, config=None, xml: str = "",
                 details: dict = None):
        super().__init__(message, details=details)
        self.translator = translator
        self.config = config
        self.xml = xml

    def get_http_error(self) -> Optional[httpx.HTTPStatusError]:
        """Retrieve the HTTP status error somewhere in the cause chain, if any."""
        error = self.__cause__
        while error is not None:
            if isinstance(error, httpx.HTTPStatusError):
                return error
            error = error.__cause__
        return None

    def has_http_error(self) -> bool:
        return self.get_http_error() is not None

    def get_http_request(self) -> Optional[httpx.Request]:
        error = self.get_http_error()
        return error.request if error else None

    def get_http_response(self) -> Optional[httpx.Response]:
        error = self.get_http_error()
        return error.response if error else None

    def render_analysis(self, html_output: bool = False) -> str:
        """
        Render a human readable analysis of the failed request.

        Args:
            html_output: Render HTML line breaks and escape the XML

        Returns:
            The analysis text
        """
        source_lang = getattr(self.config, 'source_lang', '')
        target_lang = getattr(self.config, 'target_lang', '')
        error = self.get_http_error()

        if error is None:
            cause = self.__cause__
            cause_type = type(cause).__name__ if cause is not None else 'None'
            lines = [
                f"An exception of type [{cause_type}] occurred.",
                f"Source language: {source_lang}",
                f"Target language: {target_lang}",
                "Submitted XML:",
                self._filter(self.xml, html_output),
            ]
            return self._join(lines, html_output)

        request = error.request
        response = error.response
        request_body = request.content.decode('utf-8', errors='replace')
        lines = [
            "An error occurred while transmitting the translation request to DeepL.",
            f"Response code: {response.status_code} {response.reason_phrase}",
            f"URI: {request.url}",
            f"Source language: {source_lang}",
            f"Target language: {target_lang}",
            f"Response body ({len(response.content)} bytes):",
            self._filter(response.text, html_output),
            f"Request body ({len(request.content)} bytes):",
            self._filter(request_body, html_output),
            "Submitted XML:",
            self._filter(self.xml, html_output),
        ]
        return self._join(lines, html_output)

    @staticmethod
    def _filter(text: str, html_output: bool) -> str:
        if not html_output:
            return text
        return f"<pre>{html.escape(text)}</pre>"

    @staticmethod
    def _join(lines, html_output: bool) -> str:
        return ("<br>" if html_output else "\n").join(lines)


class TranslationRequestError(RequestError):
    code = ERROR_TRANSLATION_REQUEST_FAILED


class EmptyResultError(RequestError):
    code = ERROR_TRANSLATION_RESULT_EMPTY
