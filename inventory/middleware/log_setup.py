"""
开发环境使用的控制台日志中间件
仅在 LOG_REQUEST_CONSOLE / LOG_RESPONSE_CONSOLE 启用时输出，照片等二进制内容只记长度
"""
import json
import logging
import time
from typing import Any, AsyncIterator, Optional, cast

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from inventory.core.core_config import settings
from inventory.utils.util_error_map import ERROR_CODE_TO_MESSAGE
from inventory.utils.util_request import get_request_id


logger = logging.getLogger("inventory_server.dev_logging")
logger.setLevel(logging.INFO)

if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)

logger.propagate = False

_COLOR_RESET = "\033[0m"
_COLOR_REQUEST = "\033[96m"
_COLOR_RESPONSE = "\033[92m"
_COLOR_ERROR = "\033[91m"

_BINARY_MEDIA_PREFIXES = ("image/", "multipart/")
_MAX_TEXT_BODY = 500


class DevLoggingMiddleware(BaseHTTPMiddleware):
    """在開發環境中輸出簡易請求/響應日誌"""

    async def dispatch(self, request: Request, call_next):
        request_id = get_request_id(request)

        if not (settings.LOG_REQUEST_CONSOLE or settings.LOG_RESPONSE_CONSOLE):
            return await call_next(request)

        # 照片靜態檔不記錄
        if request.url.path.startswith(settings.image_url_path + "/"):
            return await call_next(request)

        if settings.LOG_REQUEST_CONSOLE:
            body = await _read_request_body(request)
            logger.info(
                "%s--> %s %s%s request_id=%s\n%s",
                _COLOR_REQUEST, request.method, request.url.path, _COLOR_RESET,
                request_id, _dump(body),
            )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "%s<-- %s %s failed%s request_id=%s error=%s",
                _COLOR_ERROR, request.method, request.url.path, _COLOR_RESET, request_id, exc,
            )
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000

        if not settings.LOG_RESPONSE_CONSOLE:
            return response

        content_type = response.headers.get("content-type", "")
        body_iterator = getattr(response, "body_iterator", None)
        if body_iterator is None or content_type.startswith(_BINARY_MEDIA_PREFIXES):
            logger.info("%s<-- %s %s%s (%s, %.1f ms)", _COLOR_RESPONSE, request.method,
                        request.url.path, _COLOR_RESET, content_type or "no body", elapsed_ms)
            return response

        body_bytes = b""
        async for chunk in cast(AsyncIterator[bytes], body_iterator):
            body_bytes += chunk

        payload = _decode(body_bytes)
        code = _business_code(payload)
        failed = code is not None and code != 200
        logger.log(
            logging.ERROR if failed else logging.INFO,
            "%s<-- %s %s code=%s (%s)%s %.1f ms\n%s",
            _COLOR_ERROR if failed else _COLOR_RESPONSE,
            request.method,
            request.url.path,
            code,
            ERROR_CODE_TO_MESSAGE.get(code, "Success") if failed else "Success",
            _COLOR_RESET,
            elapsed_ms,
            _dump(payload),
        )

        return Response(
            content=body_bytes,
            status_code=response.status_code,
            headers=dict(response.headers),
            media_type=response.media_type,
        )


async def _read_request_body(request: Request) -> Any:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_BINARY_MEDIA_PREFIXES):
        return f"<{content_type.split(';')[0]}, {request.headers.get('content-length', '?')} bytes>"

    body_bytes = await request.body()

    # 重新注入 body，避免後續 handler 無法再次讀取
    pending = [body_bytes]

    async def receive():
        return {"type": "http.request", "body": pending.pop() if pending else b"", "more_body": False}

    request._receive = receive
    return _decode(body_bytes)


def _decode(body_bytes: bytes) -> Any:
    if not body_bytes:
        return ""
    try:
        return json.loads(body_bytes.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body_bytes.decode("utf-8", errors="ignore")[:_MAX_TEXT_BODY]


def _dump(payload: Any) -> str:
    if isinstance(payload, (dict, list)):
        return json.dumps(payload, ensure_ascii=False, indent=2)
    return str(payload)


def _business_code(payload: Any) -> Optional[int]:
    if isinstance(payload, dict):
        code = payload.get("internal_code")
        if isinstance(code, int):
            return code
    return None
