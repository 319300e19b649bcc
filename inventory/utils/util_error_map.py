"""
Inventory 服务错误码和错误消息定义

此文件由 script/generate_error_map.py 自动生成
如需修改错误码或消息，请编辑 resource/feature_code_map.json 后运行生成脚本

生成命令:
    python3 script/generate_error_map.py
"""
from typing import Optional

ERROR_CODE_TO_MESSAGE = {
    400: "Internal server error",
    401: "Inventory service failed",
    402: "Request parameters invalid",
    403: "Request path invalid",
    410: "Internal server error",
    411: "Cabinet service failed",
    412: "Request parameters invalid",
    413: "Request path invalid",
    415: "Cabinet not found",
    420: "Internal server error",
    421: "Item service failed",
    422: "Request parameters invalid",
    423: "Request path invalid",
    425: "Item not found",
    428: "Cabinet not found",
    430: "Internal server error",
    431: "Photo service failed",
    432: "Request parameters invalid",
    435: "Photo type not supported",
    436: "Photo too large",
    440: "Internal server error",
    441: "QR service failed",
    442: "Request parameters invalid",
    445: "Entity not found",
}


ERROR_NAME_TO_CODE = {
    "INTERNAL_SERVER_ERROR_40": 400,
    "INVENTORY_SERVICE_FAILED_40": 401,
    "REQUEST_PARAMETERS_INVALID_40": 402,
    "REQUEST_PATH_INVALID_40": 403,
    "INTERNAL_SERVER_ERROR_41": 410,
    "CABINET_SERVICE_FAILED_41": 411,
    "REQUEST_PARAMETERS_INVALID_41": 412,
    "REQUEST_PATH_INVALID_41": 413,
    "CABINET_NOT_FOUND_41": 415,
    "INTERNAL_SERVER_ERROR_42": 420,
    "ITEM_SERVICE_FAILED_42": 421,
    "REQUEST_PARAMETERS_INVALID_42": 422,
    "REQUEST_PATH_INVALID_42": 423,
    "ITEM_NOT_FOUND_42": 425,
    "CABINET_NOT_FOUND_42": 428,
    "INTERNAL_SERVER_ERROR_43": 430,
    "PHOTO_SERVICE_FAILED_43": 431,
    "REQUEST_PARAMETERS_INVALID_43": 432,
    "PHOTO_TYPE_NOT_SUPPORTED_43": 435,
    "PHOTO_TOO_LARGE_43": 436,
    "INTERNAL_SERVER_ERROR_44": 440,
    "QR_SERVICE_FAILED_44": 441,
    "REQUEST_PARAMETERS_INVALID_44": 442,
    "ENTITY_NOT_FOUND_44": 445,
}


class _ServerErrorCode:
    def __getattr__(self, name: str) -> int:
        if name in ERROR_NAME_TO_CODE:
            return ERROR_NAME_TO_CODE[name]
        raise AttributeError(f"{self.__class__.__name__} has no attribute '{name}'")


class _ServerErrorMessage:
    def __getattr__(self, name: str) -> str:
        if name in ERROR_NAME_TO_CODE:
            return ERROR_CODE_TO_MESSAGE[ERROR_NAME_TO_CODE[name]]
        raise AttributeError(f"{self.__class__.__name__} has no attribute '{name}'")


ServerErrorCode = _ServerErrorCode()
ServerErrorMessage = _ServerErrorMessage()

# 客户端据此判断「实体不存在」类错误
NOT_FOUND_CODES = frozenset(
    code for name, code in ERROR_NAME_TO_CODE.items() if "NOT_FOUND" in name
)


def get_error_code_from_message(message: str) -> Optional[int]:
    for code, msg in ERROR_CODE_TO_MESSAGE.items():
        if msg == message:
            return code
    return None
