from fastmcp import FastMCP

from outletdesk.auth import _get_session_store, load_session
from outletdesk.exceptions import (
    AuthenticationError,
    IntegrationError,
    InvalidInputError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
)
from outletdesk.forms import editor
from outletdesk.forms.studio import FormStudio
from outletdesk.models.forms import QuestionType
from outletdesk.services import forms as forms_service
from outletdesk.services import outlets as outlets_service
from outletdesk.services import reviews as reviews_service

mcp = FastMCP("Outletdesk")

TOOL_ERRORS = (AuthenticationError, IntegrationError, InvalidInputError, NotFoundError, RateLimitError)


def _handle_mcp_error(e: Exception) -> dict:
    """Convert exceptions to agent-friendly error dicts."""
    if isinstance(e, PermissionDeniedError):
        return {"error": "permission_denied", "message": str(e)}
    if isinstance(e, AuthenticationError):
        return {"error": "auth_error", "message": str(e), "action": "Ask the user to sign in via POST /auth/login"}
    if isinstance(e, RateLimitError):
        return {"error": "rate_limit", "message": str(e), "action": "Wait a moment and retry"}
    if isinstance(e, InvalidInputError):
        return {"error": "invalid_input", "message": str(e)}
    if isinstance(e, NotFoundError):
        return {"error": "not_found", "message": str(e)}
    if isinstance(e, IntegrationError):
        return {"error": "integration_error", "message": str(e)}
    return {"error": "unknown_error", "message": str(e)}


def _studio_error(studio: FormStudio) -> dict:
    notes = "; ".join(n.message for n in studio.drain_notifications() if n.level == "error")
    if studio.last_error is None:
        return {"error": "integration_error", "message": notes or "Operation failed"}
    result = _handle_mcp_error(studio.last_error)
    if notes:
        result["message"] = f"{notes}: {result['message']}"
    return result


# --- Form tools ---

@mcp.tool
def forms_list(account: str = "default") -> dict:
    """List feedback forms (id and title). Use forms_get to read one form's questions."""
    try:
        studio = FormStudio(load_session(account))
    except TOOL_ERRORS as e:
        return _handle_mcp_error(e)
    if not studio.refresh():
        return _studio_error(studio)
    return {"forms": [f.model_dump() for f in studio.saved_forms], "count": len(studio.saved_forms)}


@mcp.tool
def forms_get(form_id: str, account: str = "default") -> dict:
    """Get a feedback form with its ordered questions, options and rating scales."""
    try:
        return forms_service.get_form(form_id, load_session(account)).model_dump()
    except TOOL_ERRORS as e:
        return _handle_mcp_error(e)


@mcp.tool
def forms_create(title: str = forms_service.DEFAULT_TITLE, account: str = "default") -> dict:
    """Create a new feedback form. It starts with the protected 'Overall Rating' question.
    Add more questions with forms_add_question."""
    try:
        studio = FormStudio(load_session(account))
    except TOOL_ERRORS as e:
        return _handle_mcp_error(e)
    if not studio.create_new():
        return _studio_error(studio)
    form = studio.edit_current(editor.set_title, title)
    if not studio.save():
        return _studio_error(studio)
    return form.model_dump()


@mcp.tool
def forms_add_question(
    form_id: str,
    title: str,
    question_type: QuestionType = "short_answer",
    options: list[str] | None = None,
    required: bool = False,
    hint: str = "",
    max_rating: int | None = None,
    account: str = "default",
) -> dict:
    """Append a question to a form and save it.
    question_type: short_answer, paragraph, multiple_choice, checkbox or rating.
    options is used for multiple_choice/checkbox; an option labelled 'Other:' takes free text.
    max_rating (3, 5 or 10) is used for rating."""
    try:
        form = forms_service.add_question(
            form_id, title, load_session(account),
            question_type=question_type, options=options, required=required, hint=hint, max_rating=max_rating,
        )
        return form.model_dump()
    except TOOL_ERRORS as e:
        return _handle_mcp_error(e)


@mcp.tool
def forms_delete(form_id: str, confirm: bool = False, account: str = "default") -> dict:
    """Delete a feedback form. Ask the user first, then call again with confirm=true."""
    if not confirm:
        return {"deleted": False, "message": f"Deleting form {form_id} needs confirmation. Call again with confirm=true."}
    try:
        studio = FormStudio(load_session(account))
    except TOOL_ERRORS as e:
        return _handle_mcp_error(e)
    studio.request_delete(form_id)
    if not studio.confirm_delete():
        return _studio_error(studio)
    return {"deleted": True, "id": form_id}


# --- Outlet and review tools ---

@mcp.tool
def outlets_list(page: int | None = None, limit: int | None = None, account: str = "default") -> dict:
    """List outlets with rating, feedback count, manager and QR token."""
    try:
        result = outlets_service.list_outlets(load_session(account), page=page, limit=limit)
        return {"outlets": [o.model_dump() for o in result.data], "meta": result.meta.model_dump()}
    except TOOL_ERRORS as e:
        return _handle_mcp_error(e)


@mcp.tool
def reviews_complaints(outlet_id: str | None = None, account: str = "default") -> dict:
    """List reviews that carry pending complaints, newest first."""
    try:
        session = load_session(account)
        _, complaints = reviews_service.summarize_reviews(reviews_service.list_reviews(session))
        complaints = reviews_service.filter_for_user(session, complaints, outlet_id=outlet_id)
        return {"complaints": [c.model_dump() for c in complaints], "count": len(complaints)}
    except TOOL_ERRORS as e:
        return _handle_mcp_error(e)


# --- Status tool ---

@mcp.tool
def outletdesk_status() -> dict:
    """Check which accounts are signed in to the backend."""
    accounts = _get_session_store().list_accounts()
    return {
        "signed_in_accounts": accounts,
        "message": (
            f"{len(accounts)} account(s) ready: {', '.join(accounts)}"
            if accounts
            else "No accounts signed in. The user should POST /auth/login."
        ),
    }
