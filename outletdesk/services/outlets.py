import logging
import secrets

from outletdesk.auth import backend_for
from outletdesk.backend import unwrap
from outletdesk.config import get_settings
from outletdesk.models.auth import Session
from outletdesk.models.outlets import Outlet, OutletPage, PageMeta, QrLink
from outletdesk.services.access import capabilities_for

logger = logging.getLogger(__name__)

QR_TOKEN_LENGTH = 10


def _number(value, default: float = 0) -> float:
    try:
        return float(value) if value not in (None, "") else default
    except (TypeError, ValueError):
        return default


def _to_outlet(item: dict) -> Outlet:
    """Normalize a backend outlet document (_id -> id, numeric coercion)."""
    outlet_id = str(item.get("id") or item.get("_id") or "")
    category = item.get("category")
    outlet_type = item.get("type") if isinstance(item.get("type"), str) else None
    return Outlet(
        id=outlet_id,
        outlet_id=str(item.get("outletId") or outlet_id),
        name=str(item.get("name") or ""),
        description=item.get("description"),
        category=category,
        type=outlet_type,
        capabilities=capabilities_for(category, outlet_type),
        rating=_number(item.get("rating")),
        total_feedback=int(_number(item.get("totalFeedback"))),
        address=item.get("address") if isinstance(item.get("address"), str) else None,
        images=item.get("images") or [],
        manager_id=item.get("managerId"),
        manager_name=item.get("managerName"),
        manager_phone=item.get("managerPhone"),
        form_id=item.get("formId"),
        form_title=item.get("formTitle"),
        qr_token=item.get("qrToken"),
        is_active=item.get("isActive"),
    )


def list_outlets(session: Session, page: int | None = None, limit: int | None = None) -> OutletPage:
    """List outlets, one page at a time."""
    params = {}
    if page is not None:
        params["currentPage"] = page
    if limit is not None:
        params["limit"] = limit
    data = backend_for(session).get("/outlet", params=params or None) or {}
    raw = data.get("data") if isinstance(data, dict) else data
    return OutletPage(
        data=[_to_outlet(item) for item in raw] if isinstance(raw, list) else [],
        meta=PageMeta.model_validate(data.get("meta") or {}) if isinstance(data, dict) else PageMeta(),
    )


def get_outlet(outlet_id: str, session: Session) -> Outlet:
    return _to_outlet(unwrap(backend_for(session).get(f"/outlet/{outlet_id}")))


def review_link(qr_token: str) -> str:
    """Public URL a QR code points at."""
    return f"{get_settings().public_base_url.rstrip('/')}/r/{qr_token}"


def ensure_qr_token(outlet_id: str, session: Session) -> QrLink:
    """Return the outlet's review link, issuing and persisting a token first if it has none."""
    outlet = get_outlet(outlet_id, session)
    token = outlet.qr_token
    if not token:
        token = secrets.token_urlsafe(QR_TOKEN_LENGTH)[:QR_TOKEN_LENGTH]
        data = backend_for(session).patch(f"/outlet/{outlet_id}", json={"qrToken": token})
        if data:
            token = _to_outlet(unwrap(data)).qr_token or token
        logger.info("Issued QR token for outlet %s", outlet_id)
    return QrLink(outlet_id=outlet.id, qr_token=token, url=review_link(token))
