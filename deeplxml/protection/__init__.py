"""
Protection module - Ignore markers

This module provides:
- markers: wrapping of do-not-translate substrings and their restoration
"""

from deeplxml.protection.markers import (
    IGNORE_TAG,
    order_markers,
    compile_markers,
    wrap_ignore_markers,
    strip_ignore_tags,
    restore_translated_text,
)
