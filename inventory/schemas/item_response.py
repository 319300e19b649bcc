from typing import Optional, List
from pydantic import BaseModel, ConfigDict

class ItemResponseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    photo: Optional[str] = None
    cabinet_id: int

class MoveItemResponseModel(BaseModel):
    cabinet_id: int
    moved: List[int]
    missing: List[int]
