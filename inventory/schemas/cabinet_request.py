from typing import Optional
from pydantic import BaseModel

class CreateCabinetRequestModel(BaseModel):
    name: str
    description: Optional[str] = None
    photo: Optional[str] = None

class ReadCabinetRequestModel(BaseModel):
    cabinet_id: Optional[int] = None

class DeleteCabinetRequestModel(BaseModel):
    id: int
