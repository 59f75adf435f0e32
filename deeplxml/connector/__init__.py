"""
Connector Module

This module provides the DeepL API connector and the registry sharing
connectors between translators.
"""

from deeplxml.connector.client import ConnectorOptions, DeeplConnector, TranslationConfig
from deeplxml.connector.registry import ConnectorRegistry, default_registry

__all__ = ['ConnectorOptions', 'DeeplConnector', 'TranslationConfig', 'ConnectorRegistry', 'default_registry']
