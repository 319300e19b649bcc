from typing import Optional, Callable
from functools import wraps
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from inventory.utils.util_response import error_response
from inventory.utils.util_error_map import ServerErrorCode
from inventory.core.core_config import settings
import logging

logger = logging.getLogger(__name__)

class ValidationError(Exception):
    def __init__(self, code: int):
        self.code = code
        super().__init__(f"Validation error with code: {code}")

# 統一異常處理裝飾器
def router_exception_handler(func: Callable) -> Callable:
    @wraps(func)
    async def wrapper(*args, **kwargs):
        db: Optional[AsyncSession] = kwargs.get('db')
        request: Optional[Request] = kwargs.get('request')

        if db is None:
            db = next((arg for arg in args if isinstance(arg, AsyncSession)), None)
        if request is None:
            request = next((arg for arg in args if isinstance(arg, Request)), None)

        try:
            return await func(*args, **kwargs)
        except ValidationError as e:
            if db:
                await _rollback_if_needed(db)
            return error_response(e.code, request=request)
        except Exception as e:
            logger.error(f"Unhandled error in {func.__name__}: {e}", exc_info=True)
            if db:
                await _rollback_if_needed(db)
            return error_response(internal_msg=str(e), request=request)

    return wrapper

async def _rollback_if_needed(db: AsyncSession) -> None:
    if db.in_transaction():
        await db.rollback()

# HTTP 异常处理器
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        # 请求路径不存在
        internal_code = ServerErrorCode.REQUEST_PATH_INVALID_40
    elif exc.status_code in (400, 405, 422):
        internal_code = ServerErrorCode.REQUEST_PARAMETERS_INVALID_40
    else:
        internal_code = ServerErrorCode.INTERNAL_SERVER_ERROR_40

    return error_response(
        internal_code=internal_code,
        internal_msg=str(exc.detail),
        request=request
    )

# 请求验证异常处理器（依路徑歸到各路由自己的參數錯誤碼）
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        internal_code=_parameters_invalid_code(request),
        internal_msg=str(exc),
        request=request
    )

# 全局异常处理器
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return error_response(
        internal_code=ServerErrorCode.INTERNAL_SERVER_ERROR_40,
        internal_msg=str(exc),
        request=request
    )

_PARAMETERS_INVALID_BY_SEGMENT = {
    "cabinet": "REQUEST_PARAMETERS_INVALID_41",
    "item": "REQUEST_PARAMETERS_INVALID_42",
    "qr": "REQUEST_PARAMETERS_INVALID_44",
}

def _parameters_invalid_code(request: Request) -> int:
    path = request.url.path
    if path.startswith(settings.API_PREFIX):
        segment = path[len(settings.API_PREFIX):].strip("/").split("/")[0]
        name = _PARAMETERS_INVALID_BY_SEGMENT.get(segment)
        if name:
            return getattr(ServerErrorCode, name)
    return ServerErrorCode.REQUEST_PARAMETERS_INVALID_40
