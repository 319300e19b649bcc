from typing import Optional
from pydantic import BaseModel, ConfigDict

class CabinetResponseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    photo: Optional[str] = None
    item_count: int = 0
