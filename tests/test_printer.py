import base64
import json

import httpx
import pytest

from inventory.client.errors import BackendError, InvalidPayloadError, TransientNetworkError, ValidationError
from inventory.client.printer import LabelPrinterClient
from inventory.client.qr_codec import EntityKind, QRPayload


def make_printer(handler):
    return LabelPrinterClient("http://printer.local", transport=httpx.MockTransport(handler))


@pytest.mark.anyio
async def test_print_qr_posts_bitmap():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={})

    async with make_printer(handler) as printer:
        await printer.print_qr(QRPayload(EntityKind.ITEM, 42))

    request = requests[0]
    assert request.method == "POST"
    assert request.url.path == "/print"
    bitmap = base64.b64decode(json.loads(request.content)["qr"])
    assert len(bitmap) == 128 * 128 // 8


@pytest.mark.anyio
async def test_print_qr_errors():
    async with make_printer(lambda request: httpx.Response(400)) as printer:
        with pytest.raises(BackendError):
            await printer.print_qr(QRPayload(EntityKind.CABINET, 1))

    def unreachable(request):
        raise httpx.ConnectError("no route")

    async with make_printer(unreachable) as printer:
        with pytest.raises(TransientNetworkError):
            await printer.print_qr(QRPayload(EntityKind.CABINET, 1))


@pytest.mark.anyio
async def test_check():
    async with make_printer(lambda request: httpx.Response(200, text="hello")) as printer:
        assert await printer.check() is True

    def unreachable(request):
        raise httpx.ConnectError("no route")

    async with make_printer(unreachable) as printer:
        assert await printer.check() is False


def test_printer_url_required():
    with pytest.raises(ValidationError):
        LabelPrinterClient("")


@pytest.mark.anyio
async def test_print_qr_accepts_raw_payload():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={})

    async with make_printer(handler) as printer:
        await printer.print_qr("cabinet:3")
        with pytest.raises(InvalidPayloadError):
            await printer.print_qr("cabinet:03")

    assert len(requests) == 1
