from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from inventory.table.cabinet import Cabinet
from inventory.table.item import Item
from inventory.schemas.item_request import MoveItemRequestModel
from inventory.schemas.item_response import MoveItemResponseModel
from inventory.utils.util_error_map import ServerErrorCode
from inventory.utils.util_error_handle import ValidationError
from inventory.client.qr_codec import is_entity_id
import logging

logger = logging.getLogger(__name__)

# ==================== Move ====================
async def move_items(
    request_model: MoveItemRequestModel,
    db: AsyncSession
) -> MoveItemResponseModel:
    """
    批量把物品移到指定櫥櫃

    每個 id 各自更新，不存在的 id 記入 missing 而不影響其他物品；
    目標櫥櫃不存在時整批拒絕。
    """
    cabinet = await db.get(Cabinet, request_model.cabinet_id) if is_entity_id(request_model.cabinet_id) else None
    if cabinet is None:
        raise ValidationError(ServerErrorCode.CABINET_NOT_FOUND_42)

    # 去重並保留順序
    item_ids: List[int] = list(dict.fromkeys(request_model.ids))

    # 超出 id 范围者必然不存在，不送进查询
    lookup_ids = [item_id for item_id in item_ids if is_entity_id(item_id)]
    result = await db.execute(select(Item).where(Item.id.in_(lookup_ids)))
    items = {item.id: item for item in result.scalars().all()}

    moved: List[int] = []
    missing: List[int] = []
    for item_id in item_ids:
        item = items.get(item_id)
        if item is None:
            missing.append(item_id)
            continue
        item.cabinet_id = request_model.cabinet_id
        moved.append(item_id)

    await db.commit()

    if missing:
        logger.warning("move_items: ids not found %s", missing)

    return MoveItemResponseModel(
        cabinet_id=request_model.cabinet_id,
        moved=moved,
        missing=missing,
    )
