from fastapi import APIRouter, Depends, Request, BackgroundTasks
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi.responses import JSONResponse
from inventory.db.session import get_db
from inventory.services.item.item_move_service import move_items
from inventory.schemas.item_request import MoveItemRequestModel
from inventory.utils.util_response import success_response
from inventory.utils.util_error_map import ServerErrorCode
from inventory.utils.util_log import log_info
from inventory.utils.util_error_handle import ValidationError, router_exception_handler

router = APIRouter()

@router.post("/", response_class=JSONResponse)
@router_exception_handler
async def move(
    request: Request,
    request_model: MoveItemRequestModel,
    bg_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db)
):
    _error_check(request_model)
    response_model = await move_items(request_model, db)
    response = success_response(data=response_model.model_dump(mode="json"), request=request)
    bg_tasks.add_task(
        log_info,
        request_model.model_dump(),
        response_model.model_dump(),
        request
    )
    return response

def _error_check(request_model: MoveItemRequestModel) -> None:
    # 檢查 ids 列表不為空
    if not request_model.ids:
        raise ValidationError(ServerErrorCode.REQUEST_PARAMETERS_INVALID_42)

    # 檢查所有 id 皆為正整數
    if request_model.cabinet_id < 1 or any(item_id < 1 for item_id in request_model.ids):
        raise ValidationError(ServerErrorCode.REQUEST_PARAMETERS_INVALID_42)
