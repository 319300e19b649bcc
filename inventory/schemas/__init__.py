from inventory.schemas.cabinet_request import (
    CreateCabinetRequestModel,
    ReadCabinetRequestModel,
    DeleteCabinetRequestModel,
)
from inventory.schemas.cabinet_response import (
    CabinetResponseModel,
)
from inventory.schemas.item_request import (
    CreateItemRequestModel,
    ReadItemRequestModel,
    DeleteItemRequestModel,
    MoveItemRequestModel,
)
from inventory.schemas.item_response import (
    ItemResponseModel,
    MoveItemResponseModel,
)

__all__ = [
    "CreateCabinetRequestModel",
    "ReadCabinetRequestModel",
    "DeleteCabinetRequestModel",
    "CreateItemRequestModel",
    "ReadItemRequestModel",
    "DeleteItemRequestModel",
    "MoveItemRequestModel",
    "CabinetResponseModel",
    "ItemResponseModel",
    "MoveItemResponseModel",
]
