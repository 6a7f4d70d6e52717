from fastapi import APIRouter

from outletdesk.auth import load_session
from outletdesk.models.auth import Session
from outletdesk.models.common import DeleteResponse
from outletdesk.models.outlets import (
    CreateOutletTypeRequest,
    CreateTableRequest,
    Outlet,
    OutletPage,
    OutletTable,
    OutletType,
    OutletTypePage,
    QrLink,
    UpdateTableRequest,
)
from outletdesk.services import access
from outletdesk.services import outlet_types as outlet_types_service
from outletdesk.services import outlets as outlets_service
from outletdesk.services import tables as tables_service

router = APIRouter(prefix="/api", tags=["outlets"])

TABLE_CAPABILITIES = ("cafe", "restaurant")


def _table_session(account: str) -> Session:
    """Session for table management, which only café and restaurant outlets have."""
    session = load_session(account)
    if not session.is_admin:
        access.require_capability(session, outlets_service.list_outlets(session).data, TABLE_CAPABILITIES)
    return session


@router.get("/outlets")
def list_outlets(page: int | None = None, limit: int | None = None, account: str = "default") -> OutletPage:
    return outlets_service.list_outlets(load_session(account), page=page, limit=limit)


@router.get("/outlets/{outlet_id}")
def get_outlet(outlet_id: str, account: str = "default") -> Outlet:
    return outlets_service.get_outlet(outlet_id, load_session(account))


@router.post("/outlets/{outlet_id}/qr")
def outlet_qr(outlet_id: str, account: str = "default") -> QrLink:
    return outlets_service.ensure_qr_token(outlet_id, load_session(account))


@router.get("/outlet-types")
def list_outlet_types(page: int | None = None, limit: int | None = None, account: str = "default") -> OutletTypePage:
    return outlet_types_service.list_outlet_types(load_session(account), page=page, limit=limit)


@router.post("/outlet-types")
def create_outlet_type(request: CreateOutletTypeRequest, account: str = "default") -> OutletType:
    return outlet_types_service.create_outlet_type(request, load_session(account))


@router.get("/outlets/{outlet_id}/tables")
def list_tables(outlet_id: str, account: str = "default") -> list[OutletTable]:
    return tables_service.list_tables(outlet_id, _table_session(account))


@router.post("/outlets/{outlet_id}/tables")
def create_table(outlet_id: str, request: CreateTableRequest, account: str = "default") -> OutletTable:
    return tables_service.create_table(outlet_id, request, _table_session(account))


@router.patch("/tables/{table_id}")
def update_table(table_id: str, request: UpdateTableRequest, account: str = "default") -> OutletTable:
    return tables_service.update_table(table_id, request, _table_session(account))


@router.delete("/tables/{table_id}")
def delete_table(table_id: str, account: str = "default") -> DeleteResponse:
    tables_service.delete_table(table_id, _table_session(account))
    return DeleteResponse(id=table_id, deleted=True)
