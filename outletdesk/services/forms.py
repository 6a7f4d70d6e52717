import logging
from typing import get_args

from outletdesk.auth import backend_for
from outletdesk.backend import unwrap
from outletdesk.exceptions import InvalidInputError
from outletdesk.forms import editor
from outletdesk.forms.capture import ResponseCapture
from outletdesk.models.auth import Session
from outletdesk.models.forms import CaptureEvent, EncodedResponse, Form, FormSummary, Question, QuestionType

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Form"


def list_forms(session: Session) -> list[FormSummary]:
    """List form summaries (id and title)."""
    data = unwrap(backend_for(session).get("/forms")) or []
    return [FormSummary.model_validate(item) for item in data]


def get_form(form_id: str, session: Session) -> Form:
    """Get a full form document with its ordered questions."""
    return Form.model_validate(unwrap(backend_for(session).get(f"/forms/{form_id}")))


def create_form(session: Session) -> Form:
    """Create an empty form. The backend assigns the id."""
    data = backend_for(session).post("/forms", json={"title": DEFAULT_TITLE, "questions": []})
    form = Form.model_validate(unwrap(data))
    logger.info("Created form %s", form.id)
    return form


def update_form(form_id: str, title: str, questions: list[Question], session: Session) -> Form:
    """Persist a working copy. Returns the document as the backend stored it."""
    working = Form(id=form_id, title=title, questions=questions)
    data = backend_for(session).patch(f"/forms/{form_id}", json=editor.to_payload(working))
    logger.info("Saved form %s (%d questions)", form_id, len(questions))
    if not data:
        return working
    return Form.model_validate(unwrap(data))


def delete_form(form_id: str, session: Session) -> None:
    backend_for(session).delete(f"/forms/{form_id}")
    logger.info("Deleted form %s", form_id)


def add_question(
    form_id: str,
    title: str,
    session: Session,
    question_type: QuestionType = "short_answer",
    options: list[str] | None = None,
    required: bool = False,
    hint: str = "",
    max_rating: int | None = None,
) -> Form:
    """Append a question to a stored form and save it. Returns the saved form."""
    if question_type not in get_args(QuestionType):
        raise InvalidInputError(
            f"Unknown question type '{question_type}'. Use one of: {', '.join(get_args(QuestionType))}."
        )
    form = editor.add_question(editor.open_form(get_form(form_id, session)))
    question_id = form.questions[-1].id
    fields = {"type": question_type, "title": title, "required": required, "hint": hint}
    if question_type == "rating":
        fields["max_rating"] = max_rating or editor.SEED_MAX_RATING
    form = editor.update_question(form, question_id, **fields)
    for label in options or []:
        form = editor.add_option(form, question_id)
        option_id = form.questions[-1].options[-1].id
        form = editor.update_option(form, question_id, option_id, label)
    return update_form(form.id, form.title, form.questions, session)


def encode_response(form_id: str, events: list[CaptureEvent], session: Session) -> EncodedResponse:
    """Replay answer events against a form and return the wire-shaped response."""
    capture = ResponseCapture(get_form(form_id, session))
    for event in events:
        capture.apply(event)
    return EncodedResponse(form_id=form_id, answers=capture.answers, missing_required=capture.missing_required())
