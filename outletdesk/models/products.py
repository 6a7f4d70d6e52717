from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ProductType = Literal["premade", "custom"]


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    name: str
    price: float
    description: str = ""
    ratings_id: str | None = Field(None, alias="ratingsId")
    images: list[str] = []
    type: ProductType = "premade"
    is_active: bool | None = Field(None, alias="isActive")


class CreateProductRequest(BaseModel):
    name: str
    price: float
    description: str
    images: list[str] = []
    type: ProductType = "premade"
