# app/schemas/category.py
from pydantic import BaseModel, Field

class CategoryCreate(BaseModel):
    # Color is assigned by the store, not chosen by the client
    name: str = Field(..., min_length=1, max_length=100)
