import pytest

from inventory.client.api_client import ReassignResult
from inventory.client.bulk_session import BulkScanSession
from inventory.client.errors import BackendError, ValidationError


class FakeBackend:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    async def reassign_items(self, cabinet_id, item_ids):
        self.calls.append((cabinet_id, list(item_ids)))
        if self.error:
            raise self.error
        return ReassignResult(cabinet_id=cabinet_id, moved=list(item_ids))


def test_add_only_items():
    session = BulkScanSession(FakeBackend(), target_cabinet_id=1)
    assert session.add_if_item("item:5") is True
    assert session.add_if_item("cabinet:2") is False
    assert session.add_if_item("nonsense") is False
    assert session.list() == [5]


def test_duplicates_are_ignored_and_order_kept():
    session = BulkScanSession(FakeBackend(), target_cabinet_id=1)
    for raw in ("item:5", "item:7", "item:5", "item:3"):
        session.add_if_item(raw)
    assert session.list() == [5, 7, 3]
    assert len(session) == 3
    assert 7 in session
    assert 8 not in session


def test_remove_and_clear():
    session = BulkScanSession(FakeBackend(), target_cabinet_id=1)
    session.add_if_item("item:1")
    session.add_if_item("item:2")

    assert session.remove(1) is True
    assert session.remove(1) is False
    assert session.list() == [2]

    session.clear()
    assert session.list() == []


@pytest.mark.anyio
async def test_submit_success_clears_batch():
    backend = FakeBackend()
    session = BulkScanSession(backend, target_cabinet_id=4)
    session.add_if_item("item:5")
    session.add_if_item("item:7")

    result = await session.submit()

    assert result.success
    assert result.cabinet_id == 4
    assert result.item_ids == [5, 7]
    assert result.result.moved == [5, 7]
    assert backend.calls == [(4, [5, 7])]
    assert session.list() == []


@pytest.mark.anyio
async def test_submit_target_override():
    backend = FakeBackend()
    session = BulkScanSession(backend, target_cabinet_id=4)
    session.add_if_item("item:5")
    await session.submit(9)
    assert backend.calls == [(9, [5])]


@pytest.mark.anyio
async def test_submit_failure_keeps_batch():
    backend = FakeBackend(error=BackendError(428, "Cabinet not found"))
    session = BulkScanSession(backend, target_cabinet_id=4)
    session.add_if_item("item:5")
    session.add_if_item("item:7")

    result = await session.submit()

    assert not result.success
    assert isinstance(result.error, BackendError)
    assert session.list() == [5, 7]


@pytest.mark.anyio
async def test_submit_empty_batch_makes_no_request():
    backend = FakeBackend()
    session = BulkScanSession(backend, target_cabinet_id=4)
    with pytest.raises(ValidationError):
        await session.submit()
    assert backend.calls == []


@pytest.mark.anyio
async def test_submit_requires_target():
    backend = FakeBackend()
    session = BulkScanSession(backend)
    session.add_if_item("item:5")
    with pytest.raises(ValidationError):
        await session.submit()
    assert backend.calls == []


@pytest.mark.anyio
async def test_discarded_session_rejects_mutations():
    session = BulkScanSession(FakeBackend(), target_cabinet_id=1)
    session.add_if_item("item:1")
    session.discard()

    assert session.list() == []
    with pytest.raises(RuntimeError):
        session.add_if_item("item:2")
    with pytest.raises(RuntimeError):
        session.remove(1)
    with pytest.raises(RuntimeError):
        await session.submit()


def test_oversized_id_is_ignored():
    session = BulkScanSession(FakeBackend(), target_cabinet_id=1)
    assert session.add_if_item("item:" + "9" * 5000) is False
    assert session.add_if_item("item:99999999999999999999") is False
    assert session.list() == []
