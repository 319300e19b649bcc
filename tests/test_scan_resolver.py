import asyncio

import pytest

from inventory.client.adapter import Cabinet, Item
from inventory.client.errors import EntityNotFoundError, TransientNetworkError
from inventory.client.qr_codec import EntityKind
from inventory.client.scan_resolver import (
    InvalidPayload,
    NavigateCabinet,
    NavigateItem,
    NotFound,
    ScanResolver,
    ScanState,
    TransientError,
)


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeBackend:
    def __init__(self, cabinets=(), items=(), error=None, delay=0.0):
        self.cabinets = [Cabinet(id=cabinet_id, name=f"Cabinet {cabinet_id}") for cabinet_id in cabinets]
        self.items = {item_id: Item(id=item_id, name=f"Item {item_id}", cabinet_id=1) for item_id in items}
        self.error = error
        self.delay = delay
        self.calls = []

    async def list_cabinets(self):
        self.calls.append(("list_cabinets",))
        await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.cabinets

    async def get_item(self, item_id):
        self.calls.append(("get_item", item_id))
        await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        if item_id not in self.items:
            raise EntityNotFoundError("item", item_id)
        return self.items[item_id]


def make_resolver(backend, cooldown=2.0):
    clock = FakeClock()
    return ScanResolver(backend, cooldown=cooldown, clock=clock), clock


@pytest.mark.anyio
async def test_navigate_cabinet():
    resolver, _ = make_resolver(FakeBackend(cabinets=[1, 3]))
    assert await resolver.resolve_scan("cabinet:3") == NavigateCabinet(3)


@pytest.mark.anyio
async def test_cabinet_not_found():
    resolver, _ = make_resolver(FakeBackend(cabinets=[1]))
    outcome = await resolver.resolve_scan("cabinet:9")
    assert outcome == NotFound(EntityKind.CABINET, 9)
    assert outcome.title == "Cabinet Not Found"
    assert outcome.message == "Cabinet with ID 9 does not exist."


@pytest.mark.anyio
async def test_navigate_item_carries_item():
    backend = FakeBackend(items=[42])
    resolver, _ = make_resolver(backend)
    outcome = await resolver.resolve_scan("item:42")
    assert isinstance(outcome, NavigateItem)
    assert outcome.item_id == 42
    assert outcome.item == backend.items[42]


@pytest.mark.anyio
async def test_item_not_found():
    resolver, _ = make_resolver(FakeBackend())
    outcome = await resolver.resolve_scan("item:5")
    assert outcome == NotFound(EntityKind.ITEM, 5)
    assert outcome.title == "Item Not Found"


@pytest.mark.anyio
async def test_invalid_payload_skips_backend():
    backend = FakeBackend(cabinets=[1])
    resolver, _ = make_resolver(backend)
    outcome = await resolver.resolve_scan("hello world")
    assert isinstance(outcome, InvalidPayload)
    assert outcome.title == "Invalid QR Code"
    assert backend.calls == []


@pytest.mark.anyio
async def test_backend_failure_becomes_transient_error():
    resolver, _ = make_resolver(FakeBackend(error=TransientNetworkError("timed out")))
    outcome = await resolver.resolve_scan("cabinet:1")
    assert isinstance(outcome, TransientError)
    assert outcome.title == "Error"
    assert outcome.message == "Failed to process QR code. Please try again."


@pytest.mark.anyio
async def test_unexpected_error_does_not_propagate():
    resolver, _ = make_resolver(FakeBackend(error=ValueError("malformed row")))
    assert isinstance(await resolver.resolve_scan("item:1"), TransientError)
    assert resolver.state == ScanState.COOLDOWN


@pytest.mark.anyio
async def test_concurrent_scans_make_one_lookup():
    backend = FakeBackend(cabinets=[1], delay=0.01)
    resolver, _ = make_resolver(backend)

    first, second = await asyncio.gather(
        resolver.resolve_scan("cabinet:1"),
        resolver.resolve_scan("cabinet:1"),
    )

    assert first == NavigateCabinet(1)
    assert second is None
    assert backend.calls == [("list_cabinets",)]


@pytest.mark.anyio
async def test_cooldown_after_every_outcome():
    backend = FakeBackend(cabinets=[1])
    resolver, clock = make_resolver(backend, cooldown=2.0)

    assert isinstance(await resolver.resolve_scan("garbage"), InvalidPayload)
    assert resolver.state == ScanState.COOLDOWN

    clock.advance(1.9)
    assert await resolver.resolve_scan("cabinet:1") is None
    assert backend.calls == []

    clock.advance(0.1)
    assert resolver.state == ScanState.IDLE
    assert await resolver.resolve_scan("cabinet:1") == NavigateCabinet(1)
    assert await resolver.resolve_scan("cabinet:1") is None
    assert len(backend.calls) == 1


@pytest.mark.anyio
async def test_no_retries_inside_resolver():
    backend = FakeBackend(error=TransientNetworkError("down"))
    resolver, _ = make_resolver(backend, cooldown=0)
    await resolver.resolve_scan("item:1")
    assert backend.calls == [("get_item", 1)]


@pytest.mark.anyio
async def test_oversized_id_is_invalid_payload():
    backend = FakeBackend(items=[1])
    resolver, _ = make_resolver(backend)
    outcome = await resolver.resolve_scan("item:" + "9" * 5000)
    assert isinstance(outcome, InvalidPayload)
    assert backend.calls == []
    assert resolver.state == ScanState.COOLDOWN
