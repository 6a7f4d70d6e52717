from outletdesk.auth import backend_for
from outletdesk.backend import unwrap
from outletdesk.models.auth import Session
from outletdesk.models.outlets import CreateOutletTypeRequest, OutletType, OutletTypePage, PageMeta


def list_outlet_types(session: Session, page: int | None = None, limit: int | None = None) -> OutletTypePage:
    params = {k: v for k, v in {"page": page, "limit": limit}.items() if v is not None}
    data = backend_for(session).get("/outlet-type", params=params or None) or {}
    return OutletTypePage(
        data=[OutletType.model_validate(item) for item in data.get("data") or []],
        meta=PageMeta.model_validate(data.get("meta") or {}),
    )


def create_outlet_type(request: CreateOutletTypeRequest, session: Session) -> OutletType:
    payload = request.model_dump(by_alias=True, exclude_none=True)
    return OutletType.model_validate(unwrap(backend_for(session).post("/outlet-type", json=payload)))
