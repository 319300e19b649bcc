import json

import httpx
import pytest

from inventory.client.api_client import InventoryApiClient
from inventory.client.errors import (
    BackendError,
    EntityNotFoundError,
    TransientNetworkError,
    ValidationError,
)
from inventory.client.photo import DataUriPhotoAttachment, FilePhotoAttachment
from inventory.client.qr_codec import MAX_ENTITY_ID, EntityKind
from inventory.client.scan_resolver import NotFound, ScanResolver
from inventory.core.core_config import settings
from main import app

BASE_URL = "http://inventory.test/api/v1/inventory"


def envelope(data=None, code=200, message="Success"):
    body = {
        "internal_code": code,
        "internal_message": message,
        "external_code": code,
        "external_message": message,
    }
    if data is not None:
        body["data"] = data
    return body


class Recorder:
    """依序回放预先准备的响应，并记录收到的请求"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_client(handler, **kwargs):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    client = InventoryApiClient(
        BASE_URL,
        transport=httpx.MockTransport(handler),
        sleep=fake_sleep,
        **kwargs,
    )
    return client, delays


@pytest.mark.anyio
async def test_list_cabinets_from_envelope():
    recorder = Recorder(httpx.Response(200, json=envelope([
        {"id": 1, "name": "Garage", "description": None, "photo": None, "item_count": 2},
    ])))
    client, _ = make_client(recorder)
    async with client:
        cabinets = await client.list_cabinets()

    assert [cabinet.name for cabinet in cabinets] == ["Garage"]
    assert cabinets[0].item_count == 2
    assert recorder.requests[0].url.path == "/api/v1/inventory/cabinet/"


@pytest.mark.anyio
async def test_list_items_from_legacy_rows():
    recorder = Recorder(httpx.Response(200, json=[[3, "Hammer", "steel", None, 1], [4, "", None, None, 1]]))
    client, _ = make_client(recorder)
    async with client:
        items = await client.list_items(cabinet_id=1)

    assert [(item.id, item.name, item.cabinet_id) for item in items] == [(3, "Hammer", 1), (4, "Item 4", 1)]
    assert recorder.requests[0].url.params["cabinet_id"] == "1"


@pytest.mark.anyio
async def test_get_item_not_found_code():
    recorder = Recorder(httpx.Response(200, json=envelope(code=425, message="Item not found")))
    client, _ = make_client(recorder)
    async with client:
        with pytest.raises(EntityNotFoundError) as exc_info:
            await client.get_item(7)

    assert exc_info.value.kind == "item"
    assert exc_info.value.entity_id == 7


@pytest.mark.anyio
async def test_get_item_empty_legacy_result():
    client, _ = make_client(Recorder(httpx.Response(200, json=[])))
    async with client:
        with pytest.raises(EntityNotFoundError):
            await client.get_item(7)


@pytest.mark.anyio
async def test_other_codes_become_backend_error():
    client, _ = make_client(Recorder(httpx.Response(200, json=envelope(code=422, message="bad ids"))))
    async with client:
        with pytest.raises(BackendError) as exc_info:
            await client.list_items()
    assert exc_info.value.code == 422


@pytest.mark.anyio
async def test_search_requires_two_characters():
    recorder = Recorder()
    client, _ = make_client(recorder)
    async with client:
        assert await client.search_items("a") == []
        assert await client.search_items("  ") == []
    assert recorder.requests == []


@pytest.mark.anyio
async def test_retry_on_transient_failures():
    recorder = Recorder(
        httpx.ConnectError("refused"),
        httpx.Response(503),
        httpx.Response(200, json=envelope([])),
    )
    client, delays = make_client(recorder, retry_base_delay=1.0, retry_max_delay=3.0)
    async with client:
        assert await client.list_cabinets() == []

    assert len(recorder.requests) == 3
    assert delays == [2.0, 3.0]


@pytest.mark.anyio
async def test_retry_gives_up_after_max_attempts():
    recorder = Recorder(*[httpx.ReadTimeout("slow") for _ in range(3)])
    client, delays = make_client(recorder)
    async with client:
        with pytest.raises(TransientNetworkError):
            await client.list_cabinets()
    assert len(recorder.requests) == 3
    assert len(delays) == 2


@pytest.mark.anyio
async def test_no_retry_on_backend_error():
    recorder = Recorder(httpx.Response(200, json=envelope(code=412, message="bad name")))
    client, delays = make_client(recorder)
    async with client:
        with pytest.raises(BackendError):
            await client.add_cabinet("Shelf")
    assert len(recorder.requests) == 1
    assert delays == []


@pytest.mark.anyio
async def test_reassign_items_sends_one_request():
    recorder = Recorder(httpx.Response(200, json=envelope({"cabinet_id": 2, "moved": [5], "missing": [9]})))
    client, _ = make_client(recorder)
    async with client:
        result = await client.reassign_items(2, [5, 9])

    assert result.moved == [5]
    assert result.missing == [9]
    request = recorder.requests[0]
    assert request.url.path == "/api/v1/inventory/item/move/"
    assert json.loads(request.content) == {"cabinet_id": 2, "ids": [5, 9]}


@pytest.mark.anyio
async def test_reassign_items_legacy_empty_response():
    client, _ = make_client(Recorder(httpx.Response(200, json={"success": True})))
    async with client:
        result = await client.reassign_items(2, [5, 6])
    assert result.moved == [5, 6]
    assert result.missing == []


@pytest.mark.anyio
async def test_delete_cabinet_refuses_non_empty():
    recorder = Recorder(httpx.Response(200, json=envelope([{"id": 1, "name": "Hammer", "cabinet_id": 3}])))
    client, _ = make_client(recorder)
    async with client:
        with pytest.raises(ValidationError):
            await client.delete_cabinet(3)
    assert [request.method for request in recorder.requests] == ["GET"]


@pytest.mark.anyio
async def test_add_item_with_data_uri_photo():
    recorder = Recorder(httpx.Response(200, json=envelope({"id": 1, "name": "Mug", "cabinet_id": 2, "photo": "a.png"})))
    client, _ = make_client(recorder, photo_attachment=DataUriPhotoAttachment())
    async with client:
        item = await client.add_item("Mug", 2, photo="data:image/png;base64,iVBORw0KGgo=")

    assert item.photo == "a.png"
    body = recorder.requests[0].content
    assert b'name="photo"; filename="photo.png"' in body
    assert b"\x89PNG" in body


@pytest.mark.anyio
async def test_check_connectivity():
    client, _ = make_client(Recorder(httpx.ConnectError("refused")))
    async with client:
        assert await client.check_connectivity() is False

    client, _ = make_client(Recorder(httpx.Response(200, json=envelope([]))))
    async with client:
        assert await client.check_connectivity() is True


def test_image_url():
    client = InventoryApiClient(BASE_URL + "/", transport=httpx.MockTransport(Recorder()))
    assert client.image_url("abc.png") == f"{BASE_URL}/images/abc.png"
    assert client.image_url(None) is None


@pytest.mark.anyio
async def test_against_service(client):
    transport = httpx.ASGITransport(app=app)
    api = InventoryApiClient(f"http://testserver{settings.API_PREFIX}", transport=transport, retries=1)
    async with api:
        cabinet = await api.add_cabinet("Client Cabinet")
        target = await api.add_cabinet("Client Target")
        item = await api.add_item("Client Item", cabinet.id)

        assert (await api.get_item(item.id)).name == "Client Item"
        assert [found.id for found in await api.search_items("client item")] == [item.id]

        result = await api.reassign_items(target.id, [item.id, 99999])
        assert result.moved == [item.id]
        assert result.missing == [99999]

        with pytest.raises(ValidationError):
            await api.delete_cabinet(target.id)

        await api.delete_item(item.id)
        await api.delete_cabinet(target.id)
        with pytest.raises(EntityNotFoundError):
            await api.get_cabinet(target.id)
        with pytest.raises(EntityNotFoundError):
            await api.reassign_items(target.id, [1])


@pytest.mark.anyio
async def test_add_item_with_file_photo(tmp_path):
    path = tmp_path / "mug.png"
    path.write_bytes(b"\x89PNG-mug")
    recorder = Recorder(httpx.Response(200, json=envelope({"id": 1, "name": "Mug", "cabinet_id": 2})))
    client, _ = make_client(recorder, photo_attachment=FilePhotoAttachment())
    async with client:
        await client.add_item("Mug", 2, photo=str(path))

    body = recorder.requests[0].content
    assert b'name="photo"; filename="mug.png"' in body
    assert b"\x89PNG-mug" in body


@pytest.mark.anyio
async def test_scan_of_unknown_max_id_is_not_found(client):
    transport = httpx.ASGITransport(app=app)
    api = InventoryApiClient(f"http://testserver{settings.API_PREFIX}", transport=transport, retries=1)
    async with api:
        resolver = ScanResolver(api, cooldown=0)
        outcome = await resolver.resolve_scan(f"item:{MAX_ENTITY_ID}")
        assert outcome == NotFound(EntityKind.ITEM, MAX_ENTITY_ID)

        with pytest.raises(EntityNotFoundError):
            await api.get_item(99999999999999999999)
