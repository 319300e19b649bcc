from typing import Optional
from fastapi import APIRouter, Depends, Request, Query
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi.responses import JSONResponse
from inventory.db.session import get_db
from inventory.services.item.item_read_service import read_item, read_single_item
from inventory.schemas.item_request import ReadItemRequestModel
from inventory.utils.util_response import success_response
from inventory.utils.util_error_handle import router_exception_handler

router = APIRouter()

@router.get("/", response_class=JSONResponse)
@router_exception_handler
async def read(
    request: Request,
    item_id: Optional[int] = Query(None, description="Item ID"),
    cabinet_id: Optional[int] = Query(None, description="Cabinet ID"),
    name: Optional[str] = Query(None, description="Item name (partial match)"),
    db: AsyncSession = Depends(get_db)
):
    # 帶入 item_id 時返回單筆物品，不存在則返回 Item not found
    if item_id is not None:
        item = await read_single_item(item_id, db)
        return success_response(data=item.model_dump(mode="json"), request=request)

    request_model = ReadItemRequestModel(cabinet_id=cabinet_id, name=name)
    response_models = await read_item(request_model, db)
    return success_response(
        data=[model.model_dump(mode="json") for model in response_models],
        request=request
    )
