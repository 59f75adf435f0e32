"""
Translation module - Core translation functionality

This module provides:
- Translator: Batch translation coordinator
- StringEntry: A single string to translate
- BatchEncoder / BatchDecoder: The XML batch document in both directions
- classify_text: Plain text or markup decision for the encoder
"""

from deeplxml.translation.entry import StringEntry
from deeplxml.translation.markup import MarkupFragment, PlainText, classify_text
from deeplxml.translation.encoder import BatchEncoder, ROOT_TAG, SPLITTING_TAG
from deeplxml.translation.decoder import BatchDecoder
from deeplxml.translation.session import Translator, TranslationSession
