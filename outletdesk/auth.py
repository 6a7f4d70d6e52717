import json
import logging
from pathlib import Path

from fastapi import APIRouter

from outletdesk.backend import BackendClient, _extract_token, unwrap
from outletdesk.config import get_settings
from outletdesk.exceptions import AuthenticationError, IntegrationError
from outletdesk.models.auth import LoginRequest, Session, SessionStatus, UserInfo

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"
LOGOUT_PATH = "/auth/logout"
PROFILE_PATH = "/auth/me"


class SessionStore:
    """Reads/writes backend sessions to a local JSON file, keyed by account."""

    def __init__(self, path: Path):
        self.path = path

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        return json.loads(self.path.read_text())

    def _write_all(self, data: dict) -> None:
        self.path.write_text(json.dumps(data, indent=2))

    def get(self, account: str) -> dict | None:
        return self._read_all().get(account)

    def save(self, account: str, session_data: dict) -> None:
        all_sessions = self._read_all()
        all_sessions[account] = session_data
        self._write_all(all_sessions)

    def delete(self, account: str) -> bool:
        all_sessions = self._read_all()
        if account not in all_sessions:
            return False
        del all_sessions[account]
        self._write_all(all_sessions)
        return True

    def list_accounts(self) -> list[str]:
        return sorted(self._read_all())


def _get_session_store() -> SessionStore:
    return SessionStore(get_settings().session_file)


def _persist(session: Session) -> None:
    _get_session_store().save(session.account, session.model_dump(mode="json"))


def load_session(account: str = "default") -> Session:
    """Load the stored session for an account; raises if nobody signed in."""
    data = _get_session_store().get(account)
    if not data:
        raise AuthenticationError(
            f"Account '{account}' is not signed in. POST /auth/login?account={account} first."
        )
    return Session.model_validate(data)


def backend_for(session: Session) -> BackendClient:
    """Backend client bound to a session; refreshed tokens are written back to the store."""
    return BackendClient(session, on_refresh=_persist)


def login(email: str, password: str, account: str = "default") -> Session:
    """Sign in against the backend and store the resulting session."""
    data = BackendClient().post(LOGIN_PATH, json={"email": email, "password": password})
    token = _extract_token(data)
    if not token:
        raise IntegrationError("Backend login response carried no token")
    body = unwrap(data)
    user_data = body.get("user", body) if isinstance(body, dict) else {}
    session = Session(account=account, token=token, user=UserInfo.model_validate(user_data))
    _persist(session)
    logger.info("Signed in account %s as %s", account, session.user.email)
    return session


def logout(account: str = "default") -> bool:
    """Sign out. The local session is destroyed even if the backend call fails."""
    store = _get_session_store()
    data = store.get(account)
    if data:
        try:
            backend_for(Session.model_validate(data)).post(LOGOUT_PATH)
        except (AuthenticationError, IntegrationError) as e:
            logger.warning("Backend logout failed for account %s: %s", account, e)
    return store.delete(account)


def profile(session: Session) -> UserInfo:
    data = backend_for(session).get(PROFILE_PATH)
    return UserInfo.model_validate(unwrap(data))


# --- Routes ---

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
def login_route(request: LoginRequest, account: str = "default") -> SessionStatus:
    session = login(request.email, request.password, account=account)
    return SessionStatus(
        account=account, signed_in=True, user=session.user, message=f"Signed in as {session.user.email}",
    )


@router.post("/logout")
def logout_route(account: str = "default") -> SessionStatus:
    removed = logout(account)
    message = "Signed out" if removed else "No session to sign out"
    return SessionStatus(account=account, signed_in=False, message=message)


@router.get("/me")
def profile_route(account: str = "default") -> UserInfo:
    return profile(load_session(account))
