from typing import Optional

from pydantic import BaseModel, field_validator

from schemas.base import CamelModel, strip_optional, strip_required


class MeasuringUnit(CamelModel):
    id: int
    name: str
    abbreviation: str = ""
    created_at: str = ""


class MeasuringUnitCreate(CamelModel):
    name: str
    abbreviation: str = ""

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        return strip_required(v)


class MeasuringUnitUpdate(CamelModel):
    name: Optional[str] = None
    abbreviation: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)


class StockGroup(CamelModel):
    id: int
    name: str
    description: str = ""
    item_count: int = 0
    created_at: str = ""


class StockGroupCreate(CamelModel):
    name: str
    description: str = ""

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        return strip_required(v)


class StockGroupUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)


class SidebarPreference(BaseModel):
    collapsed: bool
