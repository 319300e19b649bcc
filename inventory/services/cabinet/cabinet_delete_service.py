from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from inventory.table.cabinet import Cabinet
from inventory.table.item import Item
from inventory.schemas.cabinet_request import DeleteCabinetRequestModel
from inventory.utils.util_error_map import ServerErrorCode
from inventory.utils.util_error_handle import ValidationError
from inventory.client.qr_codec import is_entity_id
from inventory.utils.util_file import delete_uploaded_file
import logging

logger = logging.getLogger(__name__)

# ==================== Delete ====================
async def delete_cabinet(
    request_model: DeleteCabinetRequestModel,
    db: AsyncSession
) -> None:
    if not is_entity_id(request_model.id):
        raise ValidationError(ServerErrorCode.CABINET_NOT_FOUND_41)

    result = await db.execute(
        select(Cabinet).where(Cabinet.id == request_model.id)
    )
    cabinet = result.scalar_one_or_none()

    if not cabinet:
        raise ValidationError(ServerErrorCode.CABINET_NOT_FOUND_41)

    # 櫥櫃內殘留的物品一併刪除（含照片）
    photos_result = await db.execute(
        select(Item.photo).where(Item.cabinet_id == request_model.id)
    )
    photos: List[Optional[str]] = list(photos_result.scalars().all())
    photos.append(cabinet.photo)

    removed = await db.execute(
        delete(Item).where(Item.cabinet_id == request_model.id)
    )
    await db.delete(cabinet)
    await db.commit()

    if removed.rowcount:
        logger.info("Deleted %d items with cabinet_id=%s", removed.rowcount, request_model.id)

    for photo in photos:
        if photo:
            delete_uploaded_file(photo)
