from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable
from inventory.core.core_config import settings


class TrailingSlashMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        """
        中间件：为 API 路径自动补上尾部斜杠
        只处理 API 前缀开头的路径，避免影响静态文件与健康检查
        """
        path = request.url.path

        if (
            path.startswith(settings.API_PREFIX)
            and not path.endswith("/")
            and not path.startswith(settings.image_url_path + "/")
        ):
            # 在读取请求体之前修改 scope，不会丢失请求体
            new_path = path + "/"
            request.scope["path"] = new_path
            request.scope["raw_path"] = new_path.encode()

        return await call_next(request)
