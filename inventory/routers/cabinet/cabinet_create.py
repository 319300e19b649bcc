from typing import Optional
from fastapi import APIRouter, Depends, Request, BackgroundTasks, Form, UploadFile, File
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi.responses import JSONResponse
from inventory.db.session import get_db
from inventory.services.cabinet.cabinet_create_service import create_cabinet
from inventory.schemas.cabinet_request import CreateCabinetRequestModel
from inventory.utils.util_response import success_response
from inventory.utils.util_error_map import ServerErrorCode
from inventory.utils.util_file import save_uploaded_photo, delete_uploaded_file
from inventory.utils.util_log import log_info
from inventory.utils.util_error_handle import ValidationError, router_exception_handler

router = APIRouter()

@router.post("/", response_class=JSONResponse)
@router_exception_handler
async def create(
    request: Request,
    bg_tasks: BackgroundTasks,
    name: str = Form(..., description="Cabinet name"),
    description: Optional[str] = Form(None, description="Cabinet description"),
    photo: Optional[UploadFile] = File(None, description="Cabinet photo"),
    db: AsyncSession = Depends(get_db)
):
    _error_check(name)
    photo_name = await save_uploaded_photo(photo)
    request_model = CreateCabinetRequestModel(
        name=name,
        description=description or None,
        photo=photo_name,
    )

    try:
        response_model = await create_cabinet(request_model, db)
    except Exception:
        delete_uploaded_file(photo_name)
        raise

    response = success_response(data=response_model.model_dump(mode="json"), request=request)
    bg_tasks.add_task(
        log_info,
        request_model.model_dump(),
        response_model.model_dump(),
        request
    )
    return response

def _error_check(name: str) -> None:
    # 檢查名稱不為空
    if not name or not name.strip():
        raise ValidationError(ServerErrorCode.REQUEST_PARAMETERS_INVALID_41)
