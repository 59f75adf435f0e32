"""Tests for the httpx DeepL connector and the connector registry."""

import json
import threading

import httpx
import pytest

from deeplxml import ConnectorError, TranslationRequestError, Translator
from deeplxml.config import DEEPL_API_URL, DEEPL_FREE_API_URL
from deeplxml.connector import ConnectorOptions, ConnectorRegistry, DeeplConnector, TranslationConfig


def make_config(text='<document><deeplstring id="id1">Hello</deeplstring></document>'):
    return TranslationConfig(
        text=text,
        target_lang='DE',
        source_lang='EN',
        ignore_tags=['deeplignore'],
        splitting_tags=['deeplstring'],
    )


class RecordingHandler:
    """MockTransport handler answering with a fixed response."""

    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self.payload = payload
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)


def translations_payload(text):
    return {"translations": [{"detected_source_language": "EN", "text": text}]}


class TestDeeplConnector:

    def test_request_format(self):
        handler = RecordingHandler(payload=translations_payload('Hallo'))
        connector = DeeplConnector('secret', transport=httpx.MockTransport(handler))

        result = connector.get_translation(make_config())

        assert result == 'Hallo'
        request = handler.requests[0]
        assert str(request.url) == DEEPL_API_URL
        assert request.headers['Authorization'] == 'DeepL-Auth-Key secret'
        body = json.loads(request.content)
        assert body['text'] == ['<document><deeplstring id="id1">Hello</deeplstring></document>']
        assert body['source_lang'] == 'EN'
        assert body['target_lang'] == 'DE'
        assert body['tag_handling'] == 'xml'
        assert body['preserve_formatting'] is True
        assert body['split_sentences'] == 'nonewlines'
        assert body['ignore_tags'] == ['deeplignore']
        assert body['splitting_tags'] == ['deeplstring']

    def test_free_keys_use_free_endpoint(self):
        handler = RecordingHandler(payload=translations_payload('Hallo'))
        connector = DeeplConnector('secret:fx', transport=httpx.MockTransport(handler))

        connector.get_translation(make_config())

        assert str(handler.requests[0].url) == DEEPL_FREE_API_URL

    def test_explicit_api_url(self):
        handler = RecordingHandler(payload=translations_payload('Hallo'))
        options = ConnectorOptions(api_url='https://deepl.example.test/v2/translate')
        connector = DeeplConnector('secret:fx', options, transport=httpx.MockTransport(handler))

        connector.get_translation(make_config())

        assert handler.requests[0].url.host == 'deepl.example.test'

    def test_missing_translations_return_empty_text(self):
        handler = RecordingHandler(payload={"translations": []})
        connector = DeeplConnector('secret', transport=httpx.MockTransport(handler))

        assert connector.get_translation(make_config()) == ''

    def test_http_error(self):
        handler = RecordingHandler(status_code=403, payload={"message": "Forbidden"})
        connector = DeeplConnector('secret', transport=httpx.MockTransport(handler))

        with pytest.raises(ConnectorError) as exc_info:
            connector.get_translation(make_config())

        assert exc_info.value.details['status_code'] == 403
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    def test_timeout(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        connector = DeeplConnector('secret', transport=httpx.MockTransport(handler))

        with pytest.raises(ConnectorError, match='timeout'):
            connector.get_translation(make_config())

    def test_unreadable_response(self):
        def handler(request):
            return httpx.Response(200, text='not json')

        connector = DeeplConnector('secret', transport=httpx.MockTransport(handler))

        with pytest.raises(ConnectorError):
            connector.get_translation(make_config())


class TestTranslatorOverHttp:

    def test_translate(self):
        handler = RecordingHandler(
            payload=translations_payload('<document><deeplstring id="id1">Hallo</deeplstring></document>')
        )
        connector = DeeplConnector('secret', transport=httpx.MockTransport(handler))
        translator = Translator('secret', 'EN', 'DE', transport=connector)
        translator.add_string('id1', 'Hello')

        translator.translate()

        assert translator.get_string_by_id('id1').translated_text == 'Hallo'

    def test_http_error_analysis(self):
        handler = RecordingHandler(status_code=403, payload={"message": "Forbidden"})
        connector = DeeplConnector('secret', transport=httpx.MockTransport(handler))
        translator = Translator('secret', 'EN', 'DE', transport=connector)
        translator.add_string('id1', 'Hello')

        with pytest.raises(TranslationRequestError) as exc_info:
            translator.translate()

        error = exc_info.value
        assert error.has_http_error()
        assert error.get_http_response().status_code == 403
        analysis = error.render_analysis()
        assert 'Response code: 403 Forbidden' in analysis
        assert f'URI: {DEEPL_API_URL}' in analysis
        assert 'Forbidden' in analysis

        html_analysis = error.render_analysis(html_output=True)
        assert '&lt;deeplstring id=&quot;id1&quot;&gt;' in html_analysis


class FakeConnector:

    def __init__(self, api_key, options):
        self.api_key = api_key
        self.options = options
        self.closed = False

    def close(self):
        self.closed = True


class TestConnectorRegistry:

    def test_connector_is_created_lazily_and_reused(self):
        registry = ConnectorRegistry(factory=FakeConnector)

        assert not registry.has('key')

        first = registry.get('key')
        second = registry.get('key')

        assert first is second
        assert registry.has('key')

    def test_changed_options_recreate_connector(self):
        registry = ConnectorRegistry(factory=FakeConnector)
        first = registry.get('key', ConnectorOptions())

        second = registry.get('key', ConnectorOptions(proxy='http://proxy:3128'))

        assert first is not second
        assert first.closed
        assert second.options.proxy == 'http://proxy:3128'

    def test_invalidate(self):
        registry = ConnectorRegistry(factory=FakeConnector)
        first = registry.get('key')

        registry.invalidate('key')

        assert first.closed
        assert not registry.has('key')
        assert registry.get('key') is not first

    def test_invalidate_unknown_key_is_a_no_op(self):
        registry = ConnectorRegistry(factory=FakeConnector)

        registry.invalidate('missing')

        assert not registry.has('missing')

    def test_clear(self):
        registry = ConnectorRegistry(factory=FakeConnector)
        connectors = [registry.get('a'), registry.get('b')]

        registry.clear()

        assert all(connector.closed for connector in connectors)
        assert not registry.has('a')

    def test_concurrent_get_creates_one_connector(self):
        created = []
        start = threading.Barrier(8)

        def factory(api_key, options):
            connector = FakeConnector(api_key, options)
            created.append(connector)
            return connector

        registry = ConnectorRegistry(factory=factory)
        results = []

        def worker():
            start.wait()
            results.append(registry.get('key'))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(created) == 1
        assert all(connector is created[0] for connector in results)
