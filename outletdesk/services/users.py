from outletdesk.auth import backend_for
from outletdesk.backend import unwrap
from outletdesk.models.auth import Session
from outletdesk.models.users import ChangePasswordRequest, CreateUserRequest, UpdateUserRequest, User

# Request field -> backend field
_WIRE_NAMES = {
    "user_name": "userName",
    "phone_number": "phoneNumber",
    "outlet_ids": "outletId",
    "is_active": "isActive",
    "is_blocked": "isBlocked",
}


def _to_wire(request: CreateUserRequest | UpdateUserRequest) -> dict:
    return {_WIRE_NAMES.get(k, k): v for k, v in request.model_dump(exclude_none=True).items()}


def list_users(session: Session) -> list[User]:
    data = unwrap(backend_for(session).get("/users")) or []
    return [User.model_validate(item) for item in data]


def get_user(user_id: str, session: Session) -> User:
    return User.model_validate(unwrap(backend_for(session).get(f"/users/{user_id}")))


def create_user(request: CreateUserRequest, session: Session) -> User:
    return User.model_validate(unwrap(backend_for(session).post("/users", json=_to_wire(request))))


def update_user(user_id: str, request: UpdateUserRequest, session: Session) -> User:
    return User.model_validate(unwrap(backend_for(session).patch(f"/users/{user_id}", json=_to_wire(request))))


def delete_user(user_id: str, session: Session) -> None:
    backend_for(session).delete(f"/users/{user_id}")


def change_password(user_id: str, request: ChangePasswordRequest, session: Session) -> None:
    body = {"oldPassword": request.old_password, "newPassword": request.new_password}
    backend_for(session).post(f"/users/change-password/{user_id}", json=body)
