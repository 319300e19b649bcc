from sqlalchemy.ext.asyncio import AsyncSession
from inventory.table.item import Item
from inventory.schemas.item_request import DeleteItemRequestModel
from inventory.utils.util_error_map import ServerErrorCode
from inventory.utils.util_error_handle import ValidationError
from inventory.client.qr_codec import is_entity_id
from inventory.utils.util_file import delete_uploaded_file

# ==================== Delete ====================
async def delete_item(
    request_model: DeleteItemRequestModel,
    db: AsyncSession
) -> None:
    item = await db.get(Item, request_model.id) if is_entity_id(request_model.id) else None

    if not item:
        raise ValidationError(ServerErrorCode.ITEM_NOT_FOUND_42)

    photo = item.photo
    await db.delete(item)
    await db.commit()

    if photo:
        delete_uploaded_file(photo)
