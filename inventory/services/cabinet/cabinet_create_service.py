from sqlalchemy.ext.asyncio import AsyncSession
from inventory.table.cabinet import Cabinet
from inventory.schemas.cabinet_request import CreateCabinetRequestModel
from inventory.schemas.cabinet_response import CabinetResponseModel

# ==================== Create ====================
async def create_cabinet(
    request_model: CreateCabinetRequestModel,
    db: AsyncSession
) -> CabinetResponseModel:
    new_cabinet = Cabinet(
        name=request_model.name.strip(),
        description=request_model.description,
        photo=request_model.photo,
    )
    db.add(new_cabinet)
    await db.commit()
    await db.refresh(new_cabinet)

    return CabinetResponseModel(
        id=new_cabinet.id,
        name=new_cabinet.name,
        description=new_cabinet.description,
        photo=new_cabinet.photo,
        item_count=0,
    )
