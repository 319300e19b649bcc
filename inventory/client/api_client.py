"""
库存服务 HTTP 客户端

- 所有请求带超时，暂时性失败（超时、连接失败、5xx）按指数退避重试
- 响应统一经 adapter 转成强类型实体
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

import httpx

from inventory.core.core_config import settings
from inventory.client.adapter import (
    Cabinet,
    Item,
    cabinet_from_wire,
    cabinets_from_wire,
    item_from_wire,
    items_from_wire,
)
from inventory.client.errors import (
    BackendError,
    EntityNotFoundError,
    InventoryClientError,
    TransientNetworkError,
    ValidationError,
)
from inventory.client.photo import PhotoAttachment, PhotoSource, select_photo_attachment
from inventory.client.qr_codec import EntityKind
from inventory.utils.util_error_map import NOT_FOUND_CODES

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 2

_SUCCESS_CODE = 200


@dataclass
class ReassignResult:
    cabinet_id: int
    moved: List[int] = field(default_factory=list)
    missing: List[int] = field(default_factory=list)


class InventoryApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        retry_base_delay: Optional[float] = None,
        retry_max_delay: Optional[float] = None,
        photo_attachment: Optional[PhotoAttachment] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.retries = max(1, retries if retries is not None else settings.CLIENT_RETRIES)
        self.retry_base_delay = settings.CLIENT_RETRY_BASE_DELAY if retry_base_delay is None else retry_base_delay
        self.retry_max_delay = settings.CLIENT_RETRY_MAX_DELAY if retry_max_delay is None else retry_max_delay
        self.photo_attachment = photo_attachment or select_photo_attachment(settings.PHOTO_ATTACHMENT)
        self._sleep = sleep
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=settings.CLIENT_TIMEOUT if timeout is None else timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "InventoryApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ==================== Cabinet ====================

    async def list_cabinets(self) -> List[Cabinet]:
        data = await self._request("GET", "/cabinet/")
        return cabinets_from_wire(data or [])

    async def get_cabinet(self, cabinet_id: int) -> Cabinet:
        data = await self._request(
            "GET", "/cabinet/",
            params={"cabinet_id": cabinet_id},
            kind=EntityKind.CABINET, entity_id=cabinet_id,
        )
        return _single(data, cabinet_from_wire, EntityKind.CABINET, cabinet_id)

    async def add_cabinet(
        self,
        name: str,
        description: Optional[str] = None,
        photo: Optional[PhotoSource] = None,
    ) -> Optional[Cabinet]:
        if not name or not name.strip():
            raise ValidationError("cabinet name is required")

        form = {"name": name.strip()}
        if description:
            form["description"] = description

        # 读本地文件在执行绪中进行，不阻塞事件循环
        files = await asyncio.to_thread(self.photo_attachment.to_files, photo)
        data = await self._request(
            "POST", "/cabinet/",
            data=form,
            files=files,
        )
        return cabinet_from_wire(data) if data else None

    async def delete_cabinet(self, cabinet_id: int) -> None:
        """只允许删除空櫥櫃"""
        items = await self.list_items(cabinet_id)
        if items:
            raise ValidationError(f"cabinet {cabinet_id} still holds {len(items)} items")

        await self._request(
            "DELETE", "/cabinet/",
            params={"cabinet_id": cabinet_id},
            kind=EntityKind.CABINET, entity_id=cabinet_id,
        )

    # ==================== Item ====================

    async def get_item(self, item_id: int) -> Item:
        data = await self._request(
            "GET", "/item/",
            params={"item_id": item_id},
            kind=EntityKind.ITEM, entity_id=item_id,
        )
        return _single(data, item_from_wire, EntityKind.ITEM, item_id)

    async def list_items(self, cabinet_id: Optional[int] = None) -> List[Item]:
        params = {"cabinet_id": cabinet_id} if cabinet_id is not None else None
        data = await self._request("GET", "/item/", params=params)
        return items_from_wire(data or [])

    async def search_items(self, name: str, cabinet_id: Optional[int] = None) -> List[Item]:
        query = (name or "").strip()
        if len(query) < MIN_SEARCH_LENGTH:
            return []

        params: Dict[str, Any] = {"name": query}
        if cabinet_id is not None:
            params["cabinet_id"] = cabinet_id
        data = await self._request("GET", "/item/", params=params)
        return items_from_wire(data or [])

    async def add_item(
        self,
        name: str,
        cabinet_id: int,
        description: Optional[str] = None,
        photo: Optional[PhotoSource] = None,
    ) -> Optional[Item]:
        if not name or not name.strip():
            raise ValidationError("item name is required")

        form = {"name": name.strip(), "cabinet_id": str(cabinet_id)}
        if description:
            form["description"] = description

        # 读本地文件在执行绪中进行，不阻塞事件循环
        files = await asyncio.to_thread(self.photo_attachment.to_files, photo)
        data = await self._request(
            "POST", "/item/",
            data=form,
            files=files,
            kind=EntityKind.CABINET, entity_id=cabinet_id,
        )
        return item_from_wire(data) if data else None

    async def delete_item(self, item_id: int) -> None:
        await self._request(
            "DELETE", "/item/",
            params={"item_id": item_id},
            kind=EntityKind.ITEM, entity_id=item_id,
        )

    async def reassign_items(self, cabinet_id: int, item_ids: Sequence[int]) -> ReassignResult:
        """把一批物品移到目标櫥櫃（单次请求）"""
        ids = list(item_ids)
        if not ids:
            raise ValidationError("no items to reassign")

        data = await self._request(
            "POST", "/item/move/",
            json={"cabinet_id": cabinet_id, "ids": ids},
            kind=EntityKind.CABINET, entity_id=cabinet_id,
        )

        # 旧版服务成功时不返回内容
        if not isinstance(data, dict):
            return ReassignResult(cabinet_id=cabinet_id, moved=ids)
        return ReassignResult(
            cabinet_id=int(data.get("cabinet_id", cabinet_id)),
            moved=[int(i) for i in data.get("moved", ids)],
            missing=[int(i) for i in data.get("missing", [])],
        )

    # ==================== Misc ====================

    def image_url(self, file_name: Optional[str]) -> Optional[str]:
        if not file_name:
            return None
        return f"{self.base_url}/images/{file_name}"

    async def check_connectivity(self) -> bool:
        try:
            await self._send_once("GET", "/cabinet/")
        except InventoryClientError as e:
            logger.warning("Connectivity check failed: %s", e)
            return False
        return True

    # ==================== Private Method ====================

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        last_error: Optional[TransientNetworkError] = None
        for attempt in range(1, self.retries + 1):
            try:
                return await self._send_once(method, path, **kwargs)
            except TransientNetworkError as e:
                last_error = e
                logger.warning("Attempt %d/%d failed for %s %s: %s", attempt, self.retries, method, path, e)
                if attempt < self.retries:
                    await self._sleep(min(self.retry_base_delay * 2 ** attempt, self.retry_max_delay))

        assert last_error is not None
        raise last_error

    async def _send_once(
        self,
        method: str,
        path: str,
        *,
        kind: Optional[EntityKind] = None,
        entity_id: Optional[int] = None,
        **kwargs,
    ) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise TransientNetworkError(f"{method} {path} timed out") from e
        except httpx.TransportError as e:
            raise TransientNetworkError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 500:
            raise TransientNetworkError(
                f"{method} {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        if response.status_code == 404 and kind is not None:
            raise EntityNotFoundError(kind.value, entity_id)
        if response.status_code >= 400:
            raise BackendError(response.status_code, response.text[:200])

        return _unwrap(response, kind, entity_id)


def _unwrap(response: httpx.Response, kind: Optional[EntityKind], entity_id: Optional[int]) -> Any:
    if not response.content:
        return None

    try:
        body = response.json()
    except ValueError as e:
        raise BackendError(response.status_code, "response is not valid JSON") from e

    # 旧版服务直接返回数据本身
    if not isinstance(body, dict) or "internal_code" not in body:
        return body

    code = body.get("internal_code")
    if code == _SUCCESS_CODE:
        return body.get("data")

    message = body.get("internal_message") or body.get("external_message") or "Unknown error"
    if code in NOT_FOUND_CODES and kind is not None:
        raise EntityNotFoundError(kind.value, entity_id, code=code)
    raise BackendError(code, message)


def _single(data: Any, convert: Callable[[Any], Any], kind: EntityKind, entity_id: int) -> Any:
    """单笔查询结果；空结果视为不存在"""
    if isinstance(data, list):
        rows = [convert(row) for row in data]
        data = next((row for row in rows if row.id == entity_id), None)
        if data is None:
            raise EntityNotFoundError(kind.value, entity_id)
        return data

    if not data:
        raise EntityNotFoundError(kind.value, entity_id)
    return convert(data)
