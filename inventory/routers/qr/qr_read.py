from fastapi import APIRouter, Depends, Request, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession
from inventory.db.session import get_db
from inventory.client.qr_codec import EntityKind, encode_qr_payload, is_entity_id
from inventory.table.cabinet import Cabinet
from inventory.table.item import Item
from inventory.utils.util_qr import render_qr_png
from inventory.utils.util_error_map import ServerErrorCode
from inventory.utils.util_error_handle import ValidationError, router_exception_handler

router = APIRouter()

_TABLES = {
    EntityKind.CABINET: Cabinet,
    EntityKind.ITEM: Item,
}

@router.get("/")
@router_exception_handler
async def read(
    request: Request,
    kind: EntityKind = Query(..., description="cabinet | item"),
    entity_id: int = Query(..., alias="id", description="Entity ID"),
    db: AsyncSession = Depends(get_db)
):
    """返回實體對應的 QR 碼 PNG（內容為 `<kind>:<id>`）"""
    if entity_id < 1:
        raise ValidationError(ServerErrorCode.REQUEST_PARAMETERS_INVALID_44)

    if not is_entity_id(entity_id):
        raise ValidationError(ServerErrorCode.ENTITY_NOT_FOUND_44)

    entity = await db.get(_TABLES[kind], entity_id)
    if entity is None:
        raise ValidationError(ServerErrorCode.ENTITY_NOT_FOUND_44)

    return Response(
        content=render_qr_png(encode_qr_payload(kind, entity_id)),
        media_type="image/png",
        headers={"Cache-Control": "no-store, max-age=0"},
    )
