from pydantic import BaseModel, field_validator
from typing import Literal, Optional


class VendorRead(BaseModel):
    id: str
    name: str
    contact: str = ""
    phone: str = ""
    email: str = ""
    note: str = ""


class VendorCreate(BaseModel):
    kind: Literal["add_vendor"] = "add_vendor"

    name: str
    contact: str = ""
    phone: str = ""
    email: str = ""
    note: str = ""

    @field_validator("name")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("name is required")
        return v


class VendorUpdate(BaseModel):
    kind: Literal["edit_vendor"] = "edit_vendor"

    name: Optional[str] = None
    contact: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    note: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _strip_optional(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v
