from outletdesk.auth import backend_for
from outletdesk.backend import unwrap
from outletdesk.models.auth import Session
from outletdesk.models.outlets import CreateTableRequest, OutletTable, UpdateTableRequest


def list_tables(outlet_id: str, session: Session) -> list[OutletTable]:
    data = backend_for(session).get("/outlet-table", params={"outletId": outlet_id})
    return [OutletTable.model_validate(item) for item in unwrap(data) or []]


def create_table(outlet_id: str, request: CreateTableRequest, session: Session) -> OutletTable:
    payload = {"outletId": outlet_id, **request.model_dump(by_alias=True, exclude_none=True)}
    return OutletTable.model_validate(unwrap(backend_for(session).post("/outlet-table", json=payload)))


def update_table(table_id: str, request: UpdateTableRequest, session: Session) -> OutletTable:
    payload = request.model_dump(by_alias=True, exclude_none=True)
    return OutletTable.model_validate(unwrap(backend_for(session).patch(f"/outlet-table/{table_id}", json=payload)))


def delete_table(table_id: str, session: Session) -> None:
    backend_for(session).delete(f"/outlet-table/{table_id}")
