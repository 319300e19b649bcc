from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from fastapi.responses import JSONResponse
from inventory.db.session import get_db
from inventory.utils.util_response import success_response, error_response
from inventory.utils.util_error_map import ServerErrorCode

router = APIRouter()

# 路由入口
@router.get("/health")
async def health_check(
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    try:
        # 檢查資料庫連接
        await db.execute(text("SELECT 1"))

        return success_response(
            data={
                "status": "healthy",
                "service": "inventory-api"
            },
            request=request
        )

    except SQLAlchemyError:
        return _error_handle(ServerErrorCode.INVENTORY_SERVICE_FAILED_40, request)

# 自定義錯誤處理
def _error_handle(internal_code: int, request: Request) -> JSONResponse:
    return error_response(internal_code=internal_code, request=request)
