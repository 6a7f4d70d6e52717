from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Capability = Literal["supermarket", "fashion", "ice_cream", "cafe", "restaurant"]

# Outlet category as stored by the backend -> capability tag.
CATEGORY_CAPABILITIES: dict[str, Capability] = {
    "supermarket": "supermarket",
    "fashion": "fashion",
    "ice cream parlour": "ice_cream",
    "cafe": "cafe",
    "restaurant": "restaurant",
}


class PageMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    total: int = 0
    current_page: int = Field(1, alias="currentPage")
    has_prev_page: bool = Field(False, alias="hasPrevPage")
    has_next_page: bool = Field(False, alias="hasNextPage")
    limit: int = 10


class Outlet(BaseModel):
    id: str
    outlet_id: str
    name: str = ""
    description: str | None = None
    category: str | None = None
    type: str | None = None
    capabilities: list[Capability] = []
    rating: float = 0
    total_feedback: int = 0
    address: str | None = None
    images: list[str] = []
    manager_id: str | None = None
    manager_name: str | None = None
    manager_phone: str | None = None
    form_id: str | None = None
    form_title: str | None = None
    qr_token: str | None = None
    is_active: bool | None = None


class OutletPage(BaseModel):
    data: list[Outlet]
    meta: PageMeta


class QrLink(BaseModel):
    outlet_id: str
    qr_token: str
    url: str


class OutletType(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    name: str
    description: str = ""
    menu: list[str] | None = None
    form_id: str | None = Field(None, alias="formId")
    default_manager: str | None = Field(None, alias="defaultManager")


class OutletTypePage(BaseModel):
    data: list[OutletType]
    meta: PageMeta


class CreateOutletTypeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    menu: list[str] | None = None
    form_id: str | None = Field(None, alias="formId")
    default_manager: str | None = Field(None, alias="defaultManager")


TableStatus = Literal["available", "occupied", "reserved"]


class OutletTable(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field("", alias="_id")
    outlet_id: str = Field(alias="outletId")
    created_by: str | None = Field(None, alias="createdBy")
    name: str
    table_token: str | None = Field(None, alias="tableToken")
    capacity: int | None = None
    status: TableStatus | None = None
    is_active: bool | None = Field(None, alias="isActive")


class CreateTableRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    created_by: str = Field(alias="createdBy")
    capacity: int | None = None
    status: TableStatus | None = None


class UpdateTableRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    capacity: int | None = None
    status: TableStatus | None = None
    is_active: bool | None = Field(None, alias="isActive")
