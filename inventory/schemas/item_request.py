from typing import Optional, List
from pydantic import BaseModel, field_validator

class CreateItemRequestModel(BaseModel):
    cabinet_id: int
    name: str
    description: Optional[str] = None
    photo: Optional[str] = None

class ReadItemRequestModel(BaseModel):
    item_id: Optional[int] = None
    cabinet_id: Optional[int] = None
    name: Optional[str] = None

    @field_validator('name', mode='before')
    @classmethod
    def validate_name(cls, v):
        if v is None or not str(v).strip():
            return None
        return str(v).strip()

class DeleteItemRequestModel(BaseModel):
    id: int

class MoveItemRequestModel(BaseModel):
    cabinet_id: int
    ids: List[int]
