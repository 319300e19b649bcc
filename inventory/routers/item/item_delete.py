from fastapi import APIRouter, Depends, Request, BackgroundTasks, Query
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi.responses import JSONResponse
from inventory.db.session import get_db
from inventory.services.item.item_delete_service import delete_item
from inventory.schemas.item_request import DeleteItemRequestModel
from inventory.utils.util_response import success_response
from inventory.utils.util_log import log_info
from inventory.utils.util_error_handle import router_exception_handler

router = APIRouter()

@router.delete("/", response_class=JSONResponse)
@router_exception_handler
async def delete(
    request: Request,
    bg_tasks: BackgroundTasks,
    item_id: int = Query(..., description="Item ID"),
    db: AsyncSession = Depends(get_db)
):
    request_model = DeleteItemRequestModel(id=item_id)
    await delete_item(request_model, db)
    response = success_response(data=None, request=request)
    bg_tasks.add_task(
        log_info,
        request_model.model_dump(),
        None,
        request
    )
    return response
