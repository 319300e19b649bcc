from typing import Optional
from uuid import UUID, uuid4
from fastapi import Request

_REQUEST_ID_KEY: str = "request_id"
_REQUEST_ID_HEADER: str = "X-Request-ID"

def get_request_id(request: Optional[Request] = None) -> Optional[UUID]:
    """獲取順序：state > header > self gen"""
    if request is None:
        return None

    result_id: Optional[UUID] = getattr(request.state, _REQUEST_ID_KEY, None)

    if result_id is None:
        result_id = _handle_id(request) or uuid4()
        setattr(request.state, _REQUEST_ID_KEY, result_id)

    return result_id

def _handle_id(request: Request) -> Optional[UUID]:
    result_id_str: Optional[str] = request.headers.get(_REQUEST_ID_HEADER)

    if not result_id_str:
        return None

    try:
        return UUID(result_id_str)
    except (ValueError, TypeError):
        return None
