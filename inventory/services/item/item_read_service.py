from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from inventory.table.item import Item
from inventory.schemas.item_request import ReadItemRequestModel
from inventory.schemas.item_response import ItemResponseModel
from inventory.utils.util_error_map import ServerErrorCode
from inventory.utils.util_error_handle import ValidationError
from inventory.client.qr_codec import is_entity_id

# ==================== Read ====================
async def read_item(
    request_model: ReadItemRequestModel,
    db: AsyncSession
) -> List[ItemResponseModel]:
    query = select(Item).order_by(Item.id)

    if request_model.item_id is not None:
        query = query.where(Item.id == request_model.item_id)

    if request_model.cabinet_id is not None:
        # 超出 id 范围的櫥櫃不可能有物品
        if not is_entity_id(request_model.cabinet_id):
            return []
        query = query.where(Item.cabinet_id == request_model.cabinet_id)

    # 名稱模糊查詢（不分大小寫）
    if request_model.name:
        query = query.where(Item.name.ilike(f"%{_escape_like(request_model.name)}%", escape="\\"))

    result = await db.execute(query)
    return [ItemResponseModel.model_validate(item) for item in result.scalars().all()]

async def read_single_item(
    item_id: int,
    db: AsyncSession
) -> ItemResponseModel:
    item = await db.get(Item, item_id) if is_entity_id(item_id) else None
    if item is None:
        raise ValidationError(ServerErrorCode.ITEM_NOT_FOUND_42)
    return ItemResponseModel.model_validate(item)

# ==================== Private Method ====================

def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
