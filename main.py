from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from inventory.routers import health, inventory_router
from inventory.core.core_config import settings
from inventory.db.session import get_db, init_db
from inventory.utils.util_file import get_upload_dir
from inventory.utils.util_error_handle import (
    http_exception_handler,
    validation_exception_handler,
    global_exception_handler
)
from inventory.middleware.log_setup import DevLoggingMiddleware
from inventory.middleware.trailing_slash import TrailingSlashMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 启动时建立资料表
    await init_db()
    yield


app = FastAPI(
    title="Inventory Server",
    description="Cabinet / item inventory store with QR navigation support",
    version="0.1.0",
    lifespan=lifespan,
)

# 開發用 Console 日誌中間件（僅在配置為 true 時生效）
app.add_middleware(DevLoggingMiddleware)
app.add_middleware(TrailingSlashMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)

# 注册异常处理器 - 统一响应格式
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)  # 捕获所有未处理的异常

# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(inventory_router, prefix=settings.API_PREFIX, tags=["inventory"])

# 照片静态文件服务
app.mount(settings.image_url_path, StaticFiles(directory=str(get_upload_dir())), name="images")

@app.get("/")
async def root(request: Request, db: AsyncSession = Depends(get_db)):
    return await health.health_check(request, db)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.API_DEBUG)
