from fastapi import APIRouter
from . import health
from .cabinet import router as cabinet_router
from .item import router as item_router
from .qr import router as qr_router

inventory_router = APIRouter()

# 注册各个子路由
inventory_router.include_router(cabinet_router, prefix="/cabinet", tags=["cabinet"])
inventory_router.include_router(item_router, prefix="/item", tags=["item"])
inventory_router.include_router(qr_router, prefix="/qr", tags=["qr"])

__all__ = ["health", "inventory_router"]
