"""
Core module - Storage

This module provides:
- database: sqlite storage of cached translation documents
"""
