"""
日志工具函数
"""
from typing import Any, Optional
from fastapi import Request
from inventory.utils.util_request import get_request_id
import logging

logger = logging.getLogger("inventory_server")


def log_info(
    request_data: Optional[Any],
    response_data: Optional[Any],
    request: Optional[Request] = None
) -> None:
    """
    记录一次成功的写入操作（由 BackgroundTasks 在响应后执行）

    Args:
        request_data: 请求内容（已 model_dump）
        response_data: 响应内容（已 model_dump），无内容时为 None
        request: 原始请求，用于取得 request_id 与路径
    """
    logger.info(
        "request_id=%s path=%s request=%s response=%s",
        get_request_id(request),
        request.url.path if request is not None else "-",
        request_data,
        response_data,
    )


def log_response(response_data: dict, request: Optional[Request] = None) -> None:
    code = response_data.get("internal_code")
    if code == 200:
        logger.debug("request_id=%s code=%s", get_request_id(request), code)
        return
    logger.warning(
        "request_id=%s code=%s message=%s",
        get_request_id(request),
        code,
        response_data.get("internal_message"),
    )
