from typing import Optional

from pydantic import field_validator

from schemas.base import CamelModel, strip_optional, strip_required


class Supplier(CamelModel):
    id: int
    legal_name: str
    phone_number: str = ""
    tax_number: str = ""
    email: str = ""
    address: str = ""
    contact_person: str = ""
    created_at: str = ""
    last_updated: str = ""


class SupplierCreate(CamelModel):
    legal_name: str
    phone_number: str = ""
    tax_number: str = ""
    email: str = ""
    address: str = ""
    contact_person: str = ""

    @field_validator("legal_name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        return strip_required(v)


class SupplierUpdate(CamelModel):
    legal_name: Optional[str] = None
    phone_number: Optional[str] = None
    tax_number: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    contact_person: Optional[str] = None

    @field_validator("legal_name")
    @classmethod
    def _strip_name(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)
