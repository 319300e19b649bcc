"""
扫码解析

IDLE -> DECODING -> RESOLVING -> 结果 -> COOLDOWN -> IDLE

非 IDLE 状态下的扫码一律丢弃（返回 None），每个结果之后都有冷却时间，
避免相机连续触发同一个码。解析过程中的错误全部转换成结果，不向外抛出。
"""
import enum
import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Union

from inventory.core.core_config import settings
from inventory.client.adapter import Cabinet, Item, find_cabinet
from inventory.client.errors import EntityNotFoundError
from inventory.client.qr_codec import EntityKind, QRPayload, decode_qr_payload

logger = logging.getLogger(__name__)


class ScanState(str, enum.Enum):
    IDLE = "idle"
    DECODING = "decoding"
    RESOLVING = "resolving"
    COOLDOWN = "cooldown"


class ScanBackend(Protocol):
    async def list_cabinets(self) -> List[Cabinet]:
        ...

    async def get_item(self, item_id: int) -> Item:
        ...


# ==================== Outcome ====================

@dataclass(frozen=True)
class NavigateCabinet:
    cabinet_id: int


@dataclass(frozen=True)
class NavigateItem:
    item_id: int
    item: Item


@dataclass(frozen=True)
class InvalidPayload:
    raw: object

    title = "Invalid QR Code"

    @property
    def message(self) -> str:
        return "This QR code is not recognized as a valid cabinet or item."


@dataclass(frozen=True)
class NotFound:
    kind: EntityKind
    entity_id: int

    @property
    def title(self) -> str:
        return "Cabinet Not Found" if self.kind == EntityKind.CABINET else "Item Not Found"

    @property
    def message(self) -> str:
        if self.kind == EntityKind.CABINET:
            return f"Cabinet with ID {self.entity_id} does not exist."
        return f"Item with ID {self.entity_id} not found"


@dataclass(frozen=True)
class TransientError:
    detail: str = ""

    title = "Error"

    @property
    def message(self) -> str:
        return "Failed to process QR code. Please try again."


ScanOutcome = Union[NavigateCabinet, NavigateItem, InvalidPayload, NotFound, TransientError]


# ==================== Resolver ====================

class ScanResolver:
    def __init__(
        self,
        backend: ScanBackend,
        cooldown: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.backend = backend
        self.cooldown = settings.SCAN_COOLDOWN_SECONDS if cooldown is None else cooldown
        self._clock = clock
        self._state = ScanState.IDLE
        self._cooldown_until = 0.0

    @property
    def state(self) -> ScanState:
        if self._state == ScanState.COOLDOWN and self._clock() >= self._cooldown_until:
            self._state = ScanState.IDLE
        return self._state

    async def resolve_scan(self, raw: object) -> Optional[ScanOutcome]:
        if self.state != ScanState.IDLE:
            logger.debug("Scan dropped while %s: %r", self._state.value, raw)
            return None

        self._state = ScanState.DECODING
        try:
            payload = decode_qr_payload(raw)
            if not payload:
                logger.info("Unrecognized QR payload: %r", raw)
                return InvalidPayload(raw)

            self._state = ScanState.RESOLVING
            return await self._resolve(payload)
        finally:
            self._state = ScanState.COOLDOWN
            self._cooldown_until = self._clock() + self.cooldown

    async def _resolve(self, payload: QRPayload) -> ScanOutcome:
        try:
            if payload.kind == EntityKind.CABINET:
                cabinets = await self.backend.list_cabinets()
                if find_cabinet(cabinets, payload.id) is None:
                    return NotFound(EntityKind.CABINET, payload.id)
                return NavigateCabinet(payload.id)

            item = await self.backend.get_item(payload.id)
            return NavigateItem(payload.id, item)

        except EntityNotFoundError:
            return NotFound(payload.kind, payload.id)
        except Exception as e:
            logger.warning("Failed to resolve %s: %s", payload.encode(), e)
            return TransientError(str(e))
