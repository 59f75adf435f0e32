"""
DeepL API Connector

This module contains the HTTP side of a translation:
- TranslationConfig: the request parameters for one batch document
- ConnectorOptions: the connection settings a connector is built with
- DeeplConnector: sends the document to the DeepL /v2/translate endpoint

The connector returns the raw translated document; matching it back onto
the strings is done by the translation package.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from deeplxml.config import DEFAULT_TIMEOUT, resolve_api_url
from deeplxml.exceptions import ConnectorError
from deeplxml.logger import get_logger

logger = get_logger(__name__)

# Markup handling directives sent with every batch
TAG_HANDLING_XML = 'xml'
PRESERVE_FORMATTING_ON = '1'
SPLIT_SENTENCES_NO_NEWLINES = 'nonewlines'


@dataclass
class TranslationConfig:
    """Parameters of a single translation request."""
    text: str
    target_lang: str
    source_lang: str
    tag_handling: str = TAG_HANDLING_XML
    preserve_formatting: str = PRESERVE_FORMATTING_ON
    split_sentences: str = SPLIT_SENTENCES_NO_NEWLINES
    ignore_tags: List[str] = field(default_factory=list)
    splitting_tags: List[str] = field(default_factory=list)

    def to_request_body(self) -> Dict[str, Any]:
        """Build the JSON body of the /v2/translate request."""
        body: Dict[str, Any] = {
            "text": [self.text],
            "source_lang": self.source_lang,
            "target_lang": self.target_lang,
            "tag_handling": self.tag_handling,
            "preserve_formatting": self.preserve_formatting == PRESERVE_FORMATTING_ON,
            "split_sentences": self.split_sentences,
        }
        if self.ignore_tags:
            body["ignore_tags"] = list(self.ignore_tags)
        if self.splitting_tags:
            body["splitting_tags"] = list(self.splitting_tags)
        return body


@dataclass(frozen=True)
class ConnectorOptions:
    """Connection settings. Connectors built with different options are not shared."""
    proxy: str = ''
    timeout: float = DEFAULT_TIMEOUT
    request_debug: bool = False
    api_url: str = ''


def get_httpx_timeout(connect_timeout: Any) -> httpx.Timeout:
    """
    Convert the connect timeout setting to an httpx.Timeout object.

    Only establishing the connection is bounded by the setting; reading the
    translated document uses a fixed, longer limit.
    """
    connect = float(connect_timeout) if connect_timeout else DEFAULT_TIMEOUT
    return httpx.Timeout(
        connect=connect,
        write=60.0,
        read=120.0,
        pool=10.0,
    )


def _log_request(request: httpx.Request):
    logger.debug(f"DeepL request: {request.method} {request.url} ({len(request.content)} bytes)")


def _log_response(response: httpx.Response):
    logger.debug(f"DeepL response: {response.status_code} {response.reason_phrase} for {response.request.url}")


class DeeplConnector:
    """Sends translation requests to the DeepL API."""

    def __init__(self, api_key: str, options: Optional[ConnectorOptions] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        """
        Initialize the connector.

        Args:
            api_key: DeepL authentication key
            options: Connection settings (proxy, timeout, debugging)
            transport: Optional httpx transport, replaces the network layer
        """
        self.api_key = api_key
        self.options = options or ConnectorOptions()
        self.api_url = resolve_api_url(api_key, self.options.api_url)
        self.client = self._create_client(transport)
        logger.debug(f"Created DeepL connector for {self.api_url}")

    def _create_client(self, transport: Optional[httpx.BaseTransport]) -> httpx.Client:
        kwargs: Dict[str, Any] = {
            "timeout": get_httpx_timeout(self.options.timeout),
            "headers": {
                "Authorization": f"DeepL-Auth-Key {self.api_key}",
                "Content-Type": "application/json",
            },
        }
        if self.options.proxy:
            kwargs["proxy"] = self.options.proxy
        if self.options.request_debug:
            kwargs["event_hooks"] = {"request": [_log_request], "response": [_log_response]}
        if transport is not None:
            kwargs["transport"] = transport
        return httpx.Client(**kwargs)

    def get_translation(self, config: TranslationConfig) -> str:
        """
        Translate a document.

        Args:
            config: The request configuration

        Returns:
            The translated text, or an empty string if DeepL returned no translation

        Raises:
            ConnectorError: If the request failed or the response is not readable
        """
        logger.debug(f"Calling DeepL API: {config.source_lang} -> {config.target_lang}, {len(config.text)} chars")

        try:
            response = self.client.post(self.api_url, json=config.to_request_body())
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"DeepL API HTTP error: {e.response.status_code} - {e.response.text[:500]}")
            raise ConnectorError(
                f"DeepL API error: {e.response.status_code}",
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.TimeoutException as e:
            raise ConnectorError("DeepL API request timeout") from e
        except httpx.HTTPError as e:
            logger.error(f"DeepL API call failed: {e}")
            raise ConnectorError(f"DeepL API call failed: {e}") from e
        except ValueError as e:
            raise ConnectorError(f"Unreadable DeepL API response: {e}") from e

        translations = result.get('translations') if isinstance(result, dict) else None
        if not translations:
            logger.warning("DeepL API response contains no translations")
            return ''

        text = translations[0].get('text', '') or ''
        logger.debug(f"Received {len(text)} chars from DeepL")
        return text

    def close(self):
        self.client.close()
