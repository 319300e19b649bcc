"""
客户端错误分类

所有错误都可恢复：由调用方转换成提示信息后回到就绪状态。
"""
from typing import Optional


class InventoryClientError(Exception):
    """客户端错误基类"""


class InvalidPayloadError(InventoryClientError):
    def __init__(self, raw: object):
        self.raw = raw
        super().__init__(f"Unrecognized QR payload: {raw!r}")


class EntityNotFoundError(InventoryClientError):
    def __init__(self, kind: str, entity_id: int, code: Optional[int] = None):
        self.kind = kind
        self.entity_id = entity_id
        self.code = code
        super().__init__(f"{kind} {entity_id} not found")


class TransientNetworkError(InventoryClientError):
    """超时、连接失败或 5xx，可整体重试"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class BackendError(InventoryClientError):
    """服务端返回非成功业务码"""

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ValidationError(InventoryClientError):
    """在发出请求前即被拒绝的操作，例如提交空批次"""
