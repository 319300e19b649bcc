"""
热敏标签打印机客户端

打印机提供 `POST /print`（JSON `{"qr": <base64 点阵>}`）与 `GET /health`。
"""
import base64
import logging
from typing import Optional, Union

import httpx

from inventory.core.core_config import settings
from inventory.client.errors import (
    BackendError,
    InvalidPayloadError,
    TransientNetworkError,
    ValidationError,
)
from inventory.client.qr_codec import QRPayload, decode_qr_payload
from inventory.utils.util_qr import render_qr_bitmap

logger = logging.getLogger(__name__)


class LabelPrinterClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        qr_size: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        base_url = base_url or settings.PRINTER_URL
        if not base_url:
            raise ValidationError("printer url is not configured")

        self.base_url = base_url.rstrip("/")
        self.qr_size = qr_size or settings.PRINTER_QR_SIZE
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=settings.CLIENT_TIMEOUT if timeout is None else timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "LabelPrinterClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def print_qr(self, payload: Union[QRPayload, str]) -> None:
        if isinstance(payload, str):
            decoded = decode_qr_payload(payload)
            if not decoded:
                raise InvalidPayloadError(payload)
            payload = decoded

        bitmap = render_qr_bitmap(payload.encode(), size=self.qr_size)
        body = {"qr": base64.b64encode(bitmap).decode("ascii")}

        try:
            response = await self._client.post("/print", json=body)
        except httpx.TransportError as e:
            raise TransientNetworkError(f"printer unreachable: {e}") from e

        if response.status_code >= 500:
            raise TransientNetworkError("printer failed", status_code=response.status_code)
        if response.status_code != 200:
            raise BackendError(response.status_code, "printer rejected the label")

        logger.info("Printed label for %s", payload.encode())

    async def check(self) -> bool:
        try:
            response = await self._client.get("/health")
        except httpx.TransportError as e:
            logger.warning("Printer health check failed: %s", e)
            return False
        return response.status_code == 200
