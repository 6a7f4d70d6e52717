from fastapi import APIRouter

from outletdesk.auth import load_session
from outletdesk.models.common import DeleteResponse
from outletdesk.models.products import CreateProductRequest, Product
from outletdesk.services import products as products_service

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("")
def list_products(account: str = "default") -> list[Product]:
    return products_service.list_products(load_session(account))


@router.post("")
def create_product(request: CreateProductRequest, account: str = "default") -> Product:
    return products_service.create_product(request, load_session(account))


@router.delete("/{product_id}")
def delete_product(product_id: str, account: str = "default") -> DeleteResponse:
    products_service.delete_product(product_id, load_session(account))
    return DeleteResponse(id=product_id, deleted=True)
