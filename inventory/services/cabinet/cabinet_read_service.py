from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from inventory.table.cabinet import Cabinet
from inventory.table.item import Item
from inventory.schemas.cabinet_request import ReadCabinetRequestModel
from inventory.schemas.cabinet_response import CabinetResponseModel
from inventory.utils.util_error_map import ServerErrorCode
from inventory.utils.util_error_handle import ValidationError
from inventory.client.qr_codec import is_entity_id

# ==================== Read ====================
async def read_cabinet(
    request_model: ReadCabinetRequestModel,
    db: AsyncSession
) -> List[CabinetResponseModel]:
    # 一次查出櫥櫃與物品數量
    item_count = func.count(Item.id).label("item_count")
    query = (
        select(Cabinet, item_count)
        .outerjoin(Item, Item.cabinet_id == Cabinet.id)
        .group_by(Cabinet.id)
        .order_by(Cabinet.id)
    )

    if request_model.cabinet_id is not None:
        query = query.where(Cabinet.id == request_model.cabinet_id)

    result = await db.execute(query)
    return [_gen_response_model(cabinet, count) for cabinet, count in result.all()]

async def read_single_cabinet(
    cabinet_id: int,
    db: AsyncSession
) -> CabinetResponseModel:
    if not is_entity_id(cabinet_id):
        raise ValidationError(ServerErrorCode.CABINET_NOT_FOUND_41)

    cabinets = await read_cabinet(ReadCabinetRequestModel(cabinet_id=cabinet_id), db)
    if not cabinets:
        raise ValidationError(ServerErrorCode.CABINET_NOT_FOUND_41)
    return cabinets[0]

# ==================== Private Method ====================

def _gen_response_model(cabinet: Cabinet, count: int) -> CabinetResponseModel:
    return CabinetResponseModel(
        id=cabinet.id,
        name=cabinet.name,
        description=cabinet.description,
        photo=cabinet.photo,
        item_count=count or 0,
    )
