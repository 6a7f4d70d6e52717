"""Role and outlet-capability checks.

Capabilities come from an explicit category table, never from substring
matching on category names. Admins pass every capability check.
"""

from collections.abc import Iterable

from outletdesk.exceptions import PermissionDeniedError
from outletdesk.models.auth import Session
from outletdesk.models.outlets import CATEGORY_CAPABILITIES, Capability, Outlet

ADMIN_ROLE = "admin"


def capabilities_for(*labels: str | None) -> list[Capability]:
    """Map outlet category/type labels onto capability tags; unknown labels map to nothing."""
    found: list[Capability] = []
    for label in labels:
        capability = CATEGORY_CAPABILITIES.get((label or "").strip().lower())
        if capability and capability not in found:
            found.append(capability)
    return found


def require_role(session: Session, allowed: Iterable[str]) -> None:
    role = session.user.role if session.user else None
    if role not in set(allowed):
        raise PermissionDeniedError(f"Role '{role}' may not perform this operation.")


def visible_outlets(session: Session, outlets: list[Outlet]) -> list[Outlet]:
    """Outlets the signed-in user manages; admins see all of them."""
    if session.is_admin:
        return outlets
    assigned = set(session.user.outlet_ids) if session.user else set()
    return [o for o in outlets if o.id in assigned or o.outlet_id in assigned]


def session_capabilities(session: Session, outlets: list[Outlet]) -> set[Capability]:
    return {c for o in visible_outlets(session, outlets) for c in o.capabilities}


def require_capability(session: Session, outlets: list[Outlet], allowed: Iterable[Capability]) -> None:
    if session.is_admin:
        return
    if not session_capabilities(session, outlets) & set(allowed):
        raise PermissionDeniedError(
            f"None of your outlets supports this feature (needs one of: {', '.join(sorted(allowed))})."
        )
