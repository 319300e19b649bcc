from fastapi import APIRouter, Depends, Request, BackgroundTasks, Query
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi.responses import JSONResponse
from inventory.db.session import get_db
from inventory.services.cabinet.cabinet_delete_service import delete_cabinet
from inventory.schemas.cabinet_request import DeleteCabinetRequestModel
from inventory.utils.util_response import success_response
from inventory.utils.util_log import log_info
from inventory.utils.util_error_handle import router_exception_handler

router = APIRouter()

@router.delete("/", response_class=JSONResponse)
@router_exception_handler
async def delete(
    request: Request,
    bg_tasks: BackgroundTasks,
    cabinet_id: int = Query(..., description="Cabinet ID"),
    db: AsyncSession = Depends(get_db)
):
    request_model = DeleteCabinetRequestModel(id=cabinet_id)
    await delete_cabinet(request_model, db)
    response = success_response(data=None, request=request)
    bg_tasks.add_task(
        log_info,
        request_model.model_dump(),
        None,
        request
    )
    return response
