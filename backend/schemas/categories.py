from pydantic import BaseModel, field_validator
from typing import Literal


class CategoryRead(BaseModel):
    id: str
    name: str


class CategoryCreate(BaseModel):
    kind: Literal["add_category"] = "add_category"

    name: str

    @field_validator("name")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("name is required")
        return v
