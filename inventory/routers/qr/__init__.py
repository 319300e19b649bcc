from fastapi import APIRouter
from .qr_read import router as qr_read_router

router = APIRouter()
router.include_router(qr_read_router)

__all__ = ["router"]
