import asyncio
from unittest.mock import Mock, patch

import pytest
import requests

from catalog.client import CatalogClient
from catalog.errors import (
    CreateFailed, FetchFailed, MalformedResponse, RevisionFailed, SaveFailed,
)
from catalog.models import SourceRecord


def _response(status=200, payload=None, text=None):
    resp = Mock()
    resp.status_code = status
    if payload is None and text is None:
        resp.content = b""
        resp.text = ""
        resp.json.side_effect = ValueError("no body")
    elif text is not None:
        resp.content = text.encode()
        resp.text = text
        resp.json.side_effect = ValueError("not json")
    else:
        resp.content = b"{}"
        resp.text = ""
        resp.json.return_value = payload
    return resp



def _client(mock_request, *responses, token=""):
    mock_request.side_effect = list(responses)
    return CatalogClient("http://plm.local/", token=token, timeout=3)


@patch("requests.request")
def test_list_categories_parses_entries(mock_request):
    client = _client(mock_request, _response(payload=[
        {"id": "RES", "name": "Resistors", "description": "Resistor components"},
        {"id": "CAP"},
    ]))
    cats = asyncio.run(client.list_categories())
    assert [(c.id, c.name) for c in cats] == [("RES", "Resistors"), ("CAP", "")]
    mock_request.assert_called_once_with(
        "GET", "http://plm.local/v1/categories.json",
        headers=client.headers, json=None, timeout=3)


@patch("requests.request")
def test_token_header_is_sent(mock_request):
    client = _client(mock_request, _response(payload=[]), token="s3cret")
    asyncio.run(client.list_categories())
    headers = mock_request.call_args[1]["headers"]
    assert headers["Authorization"] == "Token s3cret"
    assert headers["Accept"] == "application/json"


@patch("requests.request")
def test_no_token_sends_no_authorization(mock_request):
    client = _client(mock_request, _response(payload=[]))
    asyncio.run(client.list_categories())
    assert "Authorization" not in mock_request.call_args[1]["headers"]


@patch("requests.request")
def test_concurrent_calls_run_as_separate_requests(mock_request):
    client = _client(mock_request,
                     _response(payload=[{"id": "RES-001-0001", "name": "10k"}]),
                     _response(payload=[{"id": "CAP-001-0001", "name": "100n"}]))

    async def both():
        return await asyncio.gather(client.list_parts("RES"), client.list_parts("CAP"))

    res, cap = asyncio.run(both())
    assert mock_request.call_count == 2
    assert {res[0].id, cap[0].id} == {"RES-001-0001", "CAP-001-0001"}


@patch("requests.request")
def test_connection_error_becomes_fetch_failed(mock_request):
    client = _client(mock_request, requests.ConnectionError("refused"))
    with pytest.raises(FetchFailed) as info:
        asyncio.run(client.list_categories())
    assert isinstance(info.value.__cause__, requests.ConnectionError)


@patch("requests.request")
def test_server_error_becomes_fetch_failed_with_status(mock_request):
    client = _client(mock_request, _response(503, text="Service Unavailable"))
    with pytest.raises(FetchFailed) as info:
        asyncio.run(client.list_parts("RES"))
    assert info.value.status == 503


@patch("requests.request")
def test_non_list_parts_payload_is_malformed(mock_request):
    client = _client(mock_request, _response(payload={"parts": []}))
    with pytest.raises(MalformedResponse):
        asyncio.run(client.list_parts("RES"))


@patch("requests.request")
def test_list_parts_quotes_category_id(mock_request):
    client = _client(mock_request,
                     _response(payload=[{"id": "RES-001-0001", "name": "10k"}]))
    parts = asyncio.run(client.list_parts("RES"))
    assert parts[0].id == "RES-001-0001"
    assert mock_request.call_args[0][1] == "http://plm.local/v1/parts/category/RES.json"


@patch("requests.request")
def test_get_part_keeps_field_metadata(mock_request):
    client = _client(mock_request, _response(payload={
        "id": "ANA-001-0001", "revision": "0001", "name": "op-amp",
        "symbolIdStr": "Device:IC",
        "fields": {
            "Description": {"value": "op-amp"},
            "Manufacturer": {"value": "TI", "visible": "False"},
            "MPN": {"value": "LM358"},
        },
    }))
    part = asyncio.run(client.get_part("ANA-001-0001"))
    assert part.revision == "0001"
    assert part.fields["Manufacturer"].extra == {"visible": "False"}
    assert part.extra["symbolIdStr"] == "Device:IC"
    assert part.sources == [SourceRecord("TI", "LM358")]
    assert part.description == "op-amp"


@patch("requests.request")
def test_get_part_with_bad_shape_is_malformed(mock_request):
    client = _client(mock_request, _response(payload={"id": "X", "fields": ["nope"]}))
    with pytest.raises(MalformedResponse):
        asyncio.run(client.get_part("X"))


@patch("requests.request")
def test_update_part_sends_trimmed_sources(mock_request):
    client = _client(mock_request, _response(payload={
        "id": "ANA-001-0001", "fields": {"Description": {"value": "dual"}},
    }))
    part = asyncio.run(client.update_part(
        "ANA-001-0001", "dual", [SourceRecord("TI", "LM358"), SourceRecord()]))
    method, url = mock_request.call_args[0]
    assert (method, url) == ("PUT", "http://plm.local/v1/parts/ANA-001-0001.json")
    assert mock_request.call_args[1]["json"] == {
        "description": "dual",
        "sources": [{"manufacturer": "TI", "mpn": "LM358"}],
    }
    assert part.description == "dual"


@patch("requests.request")
def test_update_failure_is_save_failed(mock_request):
    client = _client(mock_request, _response(500, text="disk full"))
    with pytest.raises(SaveFailed):
        asyncio.run(client.update_part("ANA-001-0001", "", []))


@patch("requests.request")
def test_create_part_accepts_empty_ack(mock_request):
    client = _client(mock_request, _response(201))
    assert asyncio.run(client.create_part("RES-002-0001", "1k", "RES")) is None
    assert mock_request.call_args[1]["json"] == {
        "id": "RES-002-0001", "name": "1k", "category": "RES"}


@patch("requests.request")
def test_create_failure_is_create_failed(mock_request):
    client = _client(mock_request, _response(409, text="exists"))
    with pytest.raises(CreateFailed):
        asyncio.run(client.create_part("RES-002-0001", "", "RES"))


@patch("requests.request")
def test_start_revision_returns_new_id(mock_request):
    client = _client(mock_request,
                     _response(payload={"id": "RES-001-0002", "fields": {}}))
    assert asyncio.run(client.start_revision("RES-001-0001")) == "RES-001-0002"
    assert mock_request.call_args[0] == (
        "POST", "http://plm.local/v1/parts/RES-001-0001/revision")


@patch("requests.request")
def test_start_revision_without_id_fails(mock_request):
    client = _client(mock_request, _response(payload={"ok": True}))
    with pytest.raises(RevisionFailed):
        asyncio.run(client.start_revision("RES-001-0001"))
