"""
批量扫码移动

扫描物品 QR 码累积成一批，再以一次请求把整批移到目标櫥櫃。
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Sequence

from inventory.client.api_client import ReassignResult
from inventory.client.errors import ValidationError
from inventory.client.qr_codec import EntityKind, decode_qr_payload

logger = logging.getLogger(__name__)


class ReassignBackend(Protocol):
    async def reassign_items(self, cabinet_id: int, item_ids: Sequence[int]) -> ReassignResult:
        ...


@dataclass
class SubmitResult:
    cabinet_id: int
    item_ids: List[int] = field(default_factory=list)
    result: Optional[ReassignResult] = None
    error: Optional[Exception] = None

    @property
    def success(self) -> bool:
        return self.error is None


class BulkScanSession:
    def __init__(self, backend: ReassignBackend, target_cabinet_id: Optional[int] = None):
        self.backend = backend
        self.target_cabinet_id = target_cabinet_id
        # dict 保留插入顺序，当作有序集合使用
        self._batch: Dict[int, None] = {}
        self._lock = asyncio.Lock()
        self._closed = False

    def __len__(self) -> int:
        return len(self._batch)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._batch

    def list(self) -> List[int]:
        return list(self._batch)

    def add_if_item(self, raw: object) -> bool:
        """只接受 `item:<id>`，其余内容与重复扫码都忽略"""
        self._ensure_open()
        payload = decode_qr_payload(raw)
        if not payload or payload.kind != EntityKind.ITEM:
            return False
        if payload.id in self._batch:
            return False

        self._batch[payload.id] = None
        return True

    def remove(self, item_id: int) -> bool:
        self._ensure_open()
        if item_id not in self._batch:
            return False
        del self._batch[item_id]
        return True

    def clear(self) -> None:
        self._ensure_open()
        self._batch.clear()

    def discard(self) -> None:
        self._batch.clear()
        self._closed = True

    async def submit(self, target_cabinet_id: Optional[int] = None) -> SubmitResult:
        self._ensure_open()
        async with self._lock:
            target = target_cabinet_id if target_cabinet_id is not None else self.target_cabinet_id
            if target is None:
                raise ValidationError("no target cabinet selected")

            item_ids = self.list()
            if not item_ids:
                raise ValidationError("scan batch is empty")

            try:
                result = await self.backend.reassign_items(target, item_ids)
            except Exception as e:
                logger.warning("Failed to move %d items to cabinet %s: %s", len(item_ids), target, e)
                return SubmitResult(cabinet_id=target, item_ids=item_ids, error=e)

            # 只移除本次提交的部分，提交期间新扫的保留
            for item_id in item_ids:
                self._batch.pop(item_id, None)

            logger.info("Moved %d items to cabinet %s", len(item_ids), target)
            return SubmitResult(cabinet_id=target, item_ids=item_ids, result=result)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("scan session has been discarded")
