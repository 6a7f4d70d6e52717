from fastapi import APIRouter
from fastapi.responses import JSONResponse

from outletdesk.auth import load_session
from outletdesk.models.common import DeleteResponse
from outletdesk.models.forms import (
    AddQuestionRequest,
    EncodedResponse,
    EncodeResponseRequest,
    Form,
    FormSummary,
    SaveFormRequest,
)
from outletdesk.services import forms as forms_service

router = APIRouter(prefix="/api/forms", tags=["forms"])


@router.get("")
def list_forms(account: str = "default") -> list[FormSummary]:
    return forms_service.list_forms(load_session(account))


@router.post("")
def create_form(account: str = "default") -> Form:
    return forms_service.create_form(load_session(account))


@router.get("/{form_id}")
def get_form(form_id: str, account: str = "default") -> Form:
    return forms_service.get_form(form_id, load_session(account))


@router.patch("/{form_id}")
def save_form(form_id: str, request: SaveFormRequest, account: str = "default") -> Form:
    return forms_service.update_form(form_id, request.title, request.questions, load_session(account))


@router.delete("/{form_id}", response_model=DeleteResponse)
def delete_form(form_id: str, confirm: bool = False, account: str = "default"):
    if not confirm:
        return JSONResponse(
            status_code=409,
            content={"error_code": "confirmation_required", "message": f"Repeat with ?confirm=true to delete form {form_id}."},
        )
    forms_service.delete_form(form_id, load_session(account))
    return DeleteResponse(id=form_id, deleted=True)


@router.post("/{form_id}/questions")
def add_question(form_id: str, request: AddQuestionRequest, account: str = "default") -> Form:
    return forms_service.add_question(
        form_id,
        request.title,
        load_session(account),
        question_type=request.question_type,
        options=request.options,
        required=request.required,
        hint=request.hint,
        max_rating=request.max_rating,
    )


@router.post("/{form_id}/responses/encode")
def encode_response(form_id: str, request: EncodeResponseRequest, account: str = "default") -> EncodedResponse:
    return forms_service.encode_response(form_id, request.events, load_session(account))
