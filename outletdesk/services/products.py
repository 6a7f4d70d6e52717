from outletdesk.auth import backend_for
from outletdesk.backend import unwrap
from outletdesk.models.auth import Session
from outletdesk.models.products import CreateProductRequest, Product


def list_products(session: Session) -> list[Product]:
    data = unwrap(backend_for(session).get("/product")) or []
    return [Product.model_validate(item) for item in data]


def create_product(request: CreateProductRequest, session: Session) -> Product:
    data = backend_for(session).post("/product", json=request.model_dump())
    return Product.model_validate(unwrap(data))


def delete_product(product_id: str, session: Session) -> None:
    backend_for(session).delete(f"/product/{product_id}")
