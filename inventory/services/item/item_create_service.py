from sqlalchemy.ext.asyncio import AsyncSession
from inventory.table.cabinet import Cabinet
from inventory.table.item import Item
from inventory.schemas.item_request import CreateItemRequestModel
from inventory.schemas.item_response import ItemResponseModel
from inventory.utils.util_error_map import ServerErrorCode
from inventory.utils.util_error_handle import ValidationError
from inventory.client.qr_codec import is_entity_id

# ==================== Create ====================
async def create_item(
    request_model: CreateItemRequestModel,
    db: AsyncSession
) -> ItemResponseModel:
    if not is_entity_id(request_model.cabinet_id):
        raise ValidationError(ServerErrorCode.CABINET_NOT_FOUND_42)

    cabinet = await db.get(Cabinet, request_model.cabinet_id)
    if cabinet is None:
        raise ValidationError(ServerErrorCode.CABINET_NOT_FOUND_42)

    new_item = Item(
        name=request_model.name.strip(),
        description=request_model.description,
        photo=request_model.photo,
        cabinet_id=request_model.cabinet_id,
    )
    db.add(new_item)
    await db.commit()
    await db.refresh(new_item)

    return ItemResponseModel.model_validate(new_item)
