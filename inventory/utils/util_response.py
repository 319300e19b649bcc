from typing import Optional, Any
from uuid import UUID
from fastapi import status, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from inventory.utils.util_error_map import ERROR_CODE_TO_MESSAGE, ServerErrorCode
from inventory.utils.util_request import get_request_id
from inventory.utils.util_log import log_response

_SUCCESS_MESSAGE = "Success"


class BaseResponse(BaseModel):
    """
    統一響應信封

    HTTP 狀態碼一律 200，成功與否看 internal_code（200 為成功，其餘見 util_error_map）
    """
    internal_code: int
    internal_message: str
    external_code: int
    external_message: str
    request_id: Optional[UUID] = None
    data: Optional[Any] = None

    def toJSON(self) -> JSONResponse:
        return JSONResponse(
            content=self.model_dump(exclude_none=True, mode='json'),
            status_code=status.HTTP_200_OK
        )


def _respond(
    code: int,
    internal_message: str,
    external_message: str,
    data: Optional[Any],
    request: Optional[Request],
) -> JSONResponse:
    response = BaseResponse(
        internal_code=code,
        internal_message=internal_message,
        external_code=code,
        external_message=external_message,
        request_id=get_request_id(request),
        data=data,
    )
    log_response(response.model_dump(), request)
    return response.toJSON()


# 成功響應
def success_response(
    data: Optional[Any] = None,
    request: Optional[Request] = None
) -> JSONResponse:
    return _respond(status.HTTP_200_OK, _SUCCESS_MESSAGE, _SUCCESS_MESSAGE, data, request)


# 錯誤響應（internal_msg 為空時沿用對外訊息）
def error_response(
    internal_code: int = ServerErrorCode.INTERNAL_SERVER_ERROR_40,
    internal_msg: Optional[str] = None,
    request: Optional[Request] = None
) -> JSONResponse:
    external_message = ERROR_CODE_TO_MESSAGE.get(
        internal_code,
        ERROR_CODE_TO_MESSAGE[ServerErrorCode.INTERNAL_SERVER_ERROR_40],
    )
    return _respond(internal_code, internal_msg or external_message, external_message, None, request)
