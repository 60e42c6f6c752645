# tests/infrastructure/test_provider_fetcher.py
import httpx
import pytest

from vas_catalog.errors.custom_errors import ProviderTransportError
from vas_catalog.infrastructure.providers.fetcher import ProviderFetcher
from vas_catalog.infrastructure.providers.signer import RequestSigner


def _fetcher(handler):
    return ProviderFetcher(RequestSigner(clock=lambda: 42), transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_sends_signed_get_and_decodes_json(connection_factory, flash_payload):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["method"] = request.method
        seen["headers"] = request.headers
        return httpx.Response(200, json=flash_payload)

    fetcher = _fetcher(handler)
    conn = connection_factory("flash")
    try:
        payload = await fetcher.fetch_products(conn)
    finally:
        await fetcher.close()

    assert payload == flash_payload
    assert seen["method"] == "GET"
    assert seen["url"] == "https://flash.test/api/v1/products"
    assert seen["headers"]["X-Timestamp"] == "42"
    assert seen["headers"]["Authorization"] == "Bearer flash-key"
    assert seen["headers"]["X-Signature"] == RequestSigner.signature(conn, "42")


@pytest.mark.asyncio
async def test_non_2xx_becomes_transport_error(connection_factory):
    fetcher = _fetcher(lambda request: httpx.Response(500, text="oops"))
    with pytest.raises(ProviderTransportError) as excinfo:
        await fetcher.fetch_products(connection_factory("easypay"))
    await fetcher.close()

    error = excinfo.value
    assert error.status_code == 500
    assert error.provider_id == "easypay"
    assert error.url == "https://easypay.test/api/v1/products"
    assert isinstance(error.__cause__, httpx.HTTPStatusError)


@pytest.mark.asyncio
async def test_timeout_becomes_transport_error(connection_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow vendor", request=request)

    fetcher = _fetcher(handler)
    with pytest.raises(ProviderTransportError) as excinfo:
        await fetcher.fetch_products(connection_factory("mobilemart"))
    await fetcher.close()
    assert excinfo.value.status_code is None
    assert "timed out" in excinfo.value.message


@pytest.mark.asyncio
async def test_connection_error_becomes_transport_error(connection_factory):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    fetcher = _fetcher(handler)
    with pytest.raises(ProviderTransportError):
        await fetcher.fetch_products(connection_factory())
    await fetcher.close()


@pytest.mark.asyncio
async def test_non_json_body_becomes_transport_error(connection_factory):
    fetcher = _fetcher(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
    with pytest.raises(ProviderTransportError) as excinfo:
        await fetcher.fetch_products(connection_factory("dtmercury"))
    await fetcher.close()
    assert excinfo.value.url == "https://dtmercury.test/api/v1/products"


@pytest.mark.asyncio
async def test_client_is_reusable_after_close(connection_factory):
    fetcher = _fetcher(lambda request: httpx.Response(200, json=[]))
    assert await fetcher.fetch_products(connection_factory()) == []
    await fetcher.close()
    assert await fetcher.fetch_products(connection_factory()) == []
    await fetcher.close()


@pytest.mark.asyncio
async def test_invalid_utf8_body_becomes_transport_error(connection_factory):
    fetcher = _fetcher(lambda request: httpx.Response(200, content=b'{"vouchers": ["\xff\xfe"]}'))
    with pytest.raises(ProviderTransportError) as excinfo:
        await fetcher.fetch_products(connection_factory("flash"))
    await fetcher.close()
    assert excinfo.value.message == "Provider returned a non-JSON body"
    assert excinfo.value.url == "https://flash.test/api/v1/products"
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)
