from pydantic import BaseModel, ConfigDict
from typing import Optional

class CategoryBase(BaseModel):
    code: str
    name: str
    description: Optional[str] = None

class CategoryCreate(CategoryBase):
    pass

class CategoryResponse(CategoryBase):
    id: int

    model_config = ConfigDict(from_attributes=True)
