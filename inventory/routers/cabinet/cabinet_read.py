from typing import Optional
from fastapi import APIRouter, Depends, Request, Query
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi.responses import JSONResponse
from inventory.db.session import get_db
from inventory.services.cabinet.cabinet_read_service import read_cabinet, read_single_cabinet
from inventory.schemas.cabinet_request import ReadCabinetRequestModel
from inventory.utils.util_response import success_response
from inventory.utils.util_error_handle import router_exception_handler

router = APIRouter()

@router.get("/", response_class=JSONResponse)
@router_exception_handler
async def read(
    request: Request,
    cabinet_id: Optional[int] = Query(None, description="Cabinet ID"),
    db: AsyncSession = Depends(get_db)
):
    # 如果指定了 cabinet_id，返回單一 cabinet；否則返回列表
    if cabinet_id is not None:
        cabinet = await read_single_cabinet(cabinet_id, db)
        return success_response(data=cabinet.model_dump(mode="json"), request=request)

    response_models = await read_cabinet(ReadCabinetRequestModel(), db)
    return success_response(
        data=[model.model_dump(mode="json") for model in response_models],
        request=request
    )
