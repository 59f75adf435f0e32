"""
Connector Registry

Connectors are shared between all translators that use the same API key. The
registry creates a connector the first time a key is used and rebuilds it
when the connection settings for the key change, for example after a proxy
was set.

The registry may be shared between threads: all access to the connector map
goes through a lock.
"""

import threading
from typing import Callable, Dict, Optional, Tuple

from deeplxml.connector.client import ConnectorOptions, DeeplConnector
from deeplxml.logger import get_logger

logger = get_logger(__name__)

ConnectorFactory = Callable[[str, ConnectorOptions], DeeplConnector]


class ConnectorRegistry:
    """Process-wide connectors, one per API key."""

    def __init__(self, factory: Optional[ConnectorFactory] = None):
        self._factory = factory or DeeplConnector
        self._connectors: Dict[str, Tuple[ConnectorOptions, DeeplConnector]] = {}
        self._lock = threading.Lock()

    def get(self, api_key: str, options: Optional[ConnectorOptions] = None) -> DeeplConnector:
        """
        Get the connector for an API key, creating it if needed.

        A connector whose settings differ from the requested ones is closed
        and replaced.

        Args:
            api_key: DeepL authentication key
            options: Connection settings the connector must use

        Returns:
            The shared connector
        """
        options = options or ConnectorOptions()

        with self._lock:
            existing = self._connectors.get(api_key)
            if existing is not None:
                existing_options, connector = existing
                if existing_options == options:
                    return connector
                logger.info("Connection settings changed, recreating DeepL connector")
                connector.close()

            connector = self._factory(api_key, options)
            self._connectors[api_key] = (options, connector)
            return connector

    def has(self, api_key: str) -> bool:
        with self._lock:
            return api_key in self._connectors

    def invalidate(self, api_key: str):
        """Drop the connector of an API key. The next get() creates a new one."""
        with self._lock:
            existing = self._connectors.pop(api_key, None)
        if existing is not None:
            existing[1].close()
            logger.debug("DeepL connector invalidated")

    def clear(self):
        with self._lock:
            existing = list(self._connectors.values())
            self._connectors.clear()
        for _options, connector in existing:
            connector.close()


default_registry = ConnectorRegistry()
