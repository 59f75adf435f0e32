"""
deeplxml

Translates batches of strings, optionally containing markup, with a single
XML request to the DeepL API.
"""

from deeplxml.exceptions import (
    ConnectorError,
    ConversionError,
    DecodeError,
    DuplicateIdError,
    DuplicateResultIdError,
    EmptyDocumentError,
    EmptyResultError,
    IncompleteResultError,
    MalformedDocumentError,
    MissingIdError,
    NoStringsError,
    RequestError,
    TranslationRequestError,
    TranslatorError,
    UnknownIdError,
    UnknownStringError,
)
from deeplxml.translation import StringEntry, TranslationSession, Translator

__version__ = "1.0.0"

__all__ = [
    'Translator',
    'TranslationSession',
    'StringEntry',
    'TranslatorError',
    'ConnectorError',
    'ConversionError',
    'DecodeError',
    'DuplicateIdError',
    'DuplicateResultIdError',
    'EmptyDocumentError',
    'EmptyResultError',
    'IncompleteResultError',
    'MalformedDocumentError',
    'MissingIdError',
    'NoStringsError',
    'RequestError',
    'TranslationRequestError',
    'UnknownIdError',
    'UnknownStringError',
]
