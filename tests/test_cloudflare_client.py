from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from adapters.cloudflare_client import CloudflareAPIError, CloudflareClient
from conftest import make_settings
from core.errors import CredentialsError, ProviderError


def _envelope(result, *, result_info=None, success=True, errors=None):
    body = {"success": success, "errors": errors or [], "messages": [], "result": result}
    if result_info is not None:
        body["result_info"] = result_info
    return body


async def _call(handler, method, *args):
    async with CloudflareClient(make_settings(), transport=httpx.MockTransport(handler)) as client:
        return await getattr(client, method)(*args)


def test_blank_token_fails_credential_construction():
    with pytest.raises(CredentialsError):
        CloudflareClient(make_settings(cloudflare_api_token="   "))


def test_zones_are_listed_across_pages():
    seen = []

    def handler(request):
        seen.append(request)
        page = int(request.url.params["page"])
        zones = {1: [{"id": "z1", "name": "one.test", "status": "active"}], 2: [{"id": "z2", "name": "example.com"}]}
        return httpx.Response(200, json=_envelope(zones[page], result_info={"page": page, "total_pages": 2}))

    zones = asyncio.run(_call(handler, "list_zones"))

    assert [(z.id, z.name) for z in zones] == [("z1", "one.test"), ("z2", "example.com")]
    assert seen[0].url.path == "/client/v4/zones"
    assert seen[0].headers["Authorization"] == "Bearer test-token"
    assert seen[0].url.params["per_page"] == "50"


def test_records_listing_returns_first_page_and_result_info():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            json=_envelope(
                [
                    {"id": "r1", "type": "A", "name": "example.com", "content": "1.1.1.1", "ttl": 1},
                    {"id": "r2", "type": "MX", "name": "example.com", "content": "mx.example.com"},
                ],
                result_info={"page": 1, "per_page": 100, "count": 2, "total_count": 250, "total_pages": 3},
            ),
        )

    page = asyncio.run(_call(handler, "list_dns_records", "z1"))

    assert len(seen) == 1
    assert seen[0].url.path == "/client/v4/zones/z1/dns_records"
    assert [r.id for r in page.records] == ["r1", "r2"]
    assert page.result_info.total_pages == 3
    assert page.has_more_pages


def test_update_patches_content_only():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=_envelope({"id": "r1", "type": "A", "content": "2.2.2.2"}))

    record = asyncio.run(_call(handler, "update_dns_record", "z1", "r1", "2.2.2.2"))

    assert seen[0].method == "PATCH"
    assert seen[0].url.path == "/client/v4/zones/z1/dns_records/r1"
    assert json.loads(seen[0].content) == {"content": "2.2.2.2"}
    assert record.content == "2.2.2.2"


def test_error_envelope_raises_api_error():
    def handler(request):
        return httpx.Response(
            403,
            json=_envelope(None, success=False, errors=[{"code": 10000, "message": "Authentication error"}]),
        )

    with pytest.raises(CloudflareAPIError) as excinfo:
        asyncio.run(_call(handler, "list_zones"))

    assert isinstance(excinfo.value, ProviderError)
    assert excinfo.value.status_code == 403
    assert excinfo.value.codes == [10000]
    assert "Authentication error" in str(excinfo.value)


def test_unsuccessful_200_raises_api_error():
    def handler(request):
        return httpx.Response(200, json=_envelope(None, success=False, errors=[{"code": 81044, "message": "Record not found"}]))

    with pytest.raises(CloudflareAPIError, match="81044"):
        asyncio.run(_call(handler, "update_dns_record", "z1", "gone", "2.2.2.2"))


def test_non_json_body_raises_api_error():
    def handler(request):
        return httpx.Response(502, text="<html>Bad gateway</html>")

    with pytest.raises(CloudflareAPIError, match="non-JSON"):
        asyncio.run(_call(handler, "list_dns_records", "z1"))


def test_transport_error_raises_api_error():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(CloudflareAPIError, match="timed out"):
        asyncio.run(_call(handler, "list_zones"))
