from fastapi import APIRouter

from outletdesk.auth import load_session
from outletdesk.models.auth import Session
from outletdesk.models.common import DeleteResponse
from outletdesk.models.users import ChangePasswordRequest, CreateUserRequest, UpdateUserRequest, User
from outletdesk.services import access
from outletdesk.services import users as users_service

router = APIRouter(prefix="/api/users", tags=["users"])


def _admin_session(account: str) -> Session:
    session = load_session(account)
    access.require_role(session, [access.ADMIN_ROLE])
    return session


@router.get("")
def list_users(account: str = "default") -> list[User]:
    return users_service.list_users(_admin_session(account))


@router.get("/{user_id}")
def get_user(user_id: str, account: str = "default") -> User:
    return users_service.get_user(user_id, _admin_session(account))


@router.post("")
def create_user(request: CreateUserRequest, account: str = "default") -> User:
    return users_service.create_user(request, _admin_session(account))


@router.patch("/{user_id}")
def update_user(user_id: str, request: UpdateUserRequest, account: str = "default") -> User:
    return users_service.update_user(user_id, request, _admin_session(account))


@router.delete("/{user_id}")
def delete_user(user_id: str, account: str = "default") -> DeleteResponse:
    users_service.delete_user(user_id, _admin_session(account))
    return DeleteResponse(id=user_id, deleted=True)


@router.post("/{user_id}/password")
def change_password(user_id: str, request: ChangePasswordRequest, account: str = "default") -> dict:
    session = load_session(account)
    if session.user is None or session.user.id != user_id:
        access.require_role(session, [access.ADMIN_ROLE])
    users_service.change_password(user_id, request, session)
    return {"id": user_id, "changed": True}
