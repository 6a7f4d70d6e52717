"""Form studio: the dashboard → builder → viewer flow over one session.

Backend failures become a single error notification and leave the studio
in its last good state. Nothing is retried.
"""

import logging
from typing import Literal

from pydantic import BaseModel

from outletdesk.exceptions import AuthenticationError, IntegrationError, NotFoundError, RateLimitError
from outletdesk.forms import editor
from outletdesk.forms.capture import ResponseCapture
from outletdesk.models.auth import Session
from outletdesk.models.forms import Form, FormSummary
from outletdesk.services import forms as forms_service

logger = logging.getLogger(__name__)

ViewMode = Literal["dashboard", "builder", "viewer", "preview"]

BACKEND_ERRORS = (AuthenticationError, IntegrationError, NotFoundError, RateLimitError)


class Notification(BaseModel):
    level: Literal["success", "error"]
    message: str


class FormStudio:
    def __init__(self, session: Session):
        self.session = session
        self.view: ViewMode = "dashboard"
        self.saved_forms: list[FormSummary] = []
        self.current_form: Form | None = None
        self.capture: ResponseCapture | None = None
        self.pending_delete: str | None = None
        self._notifications: list[Notification] = []
        self.last_error: Exception | None = None

    def _notify(self, level: str, message: str) -> None:
        self._notifications.append(Notification(level=level, message=message))

    def _fail(self, message: str, exc: Exception) -> None:
        logger.warning("%s: %s", message, exc)
        self.last_error = exc
        self._notify("error", message)

    def drain_notifications(self) -> list[Notification]:
        notes, self._notifications = self._notifications, []
        return notes

    # --- Dashboard ---

    def refresh(self) -> bool:
        try:
            self.saved_forms = forms_service.list_forms(self.session)
        except BACKEND_ERRORS as e:
            self._fail("Failed to load forms", e)
            return False
        return True

    def create_new(self) -> bool:
        try:
            created = forms_service.create_form(self.session)
        except BACKEND_ERRORS as e:
            self._fail("Failed to create form", e)
            return False
        self._start_editing(created)
        return True

    def edit(self, form_id: str) -> bool:
        try:
            full = forms_service.get_form(form_id, self.session)
        except BACKEND_ERRORS as e:
            self._fail("Failed to load form details", e)
            return False
        self._start_editing(full)
        return True

    def open(self, form_id: str) -> bool:
        try:
            full = forms_service.get_form(form_id, self.session)
        except BACKEND_ERRORS as e:
            self._fail("Failed to load form details", e)
            return False
        self.current_form = full
        self.capture = ResponseCapture(full)
        self.view = "viewer"
        return True

    def request_delete(self, form_id: str) -> None:
        self.pending_delete = form_id

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        if self.pending_delete is None:
            return False
        form_id, self.pending_delete = self.pending_delete, None
        try:
            forms_service.delete_form(form_id, self.session)
        except BACKEND_ERRORS as e:
            self._fail("Delete failed", e)
            return False
        self._notify("success", "Form deleted")
        self.refresh()
        return True

    # --- Builder ---

    def _start_editing(self, form: Form) -> None:
        self.current_form = editor.open_form(form)
        self.capture = None
        self.view = "builder"

    def edit_current(self, op, *args, **kwargs) -> Form:
        """Apply an editor transform, e.g. studio.edit_current(editor.add_question)."""
        if self.current_form is None or self.view != "builder":
            raise RuntimeError("No form is open in the builder")
        self.current_form = op(self.current_form, *args, **kwargs)
        return self.current_form

    def preview(self) -> None:
        if self.current_form is not None and self.view == "builder":
            self.capture = ResponseCapture(self.current_form)
            self.view = "preview"

    def back(self) -> None:
        self.capture = None
        self.view = "builder" if self.view == "preview" else "dashboard"

    def cancel(self) -> None:
        self.current_form = None
        self.capture = None
        self.view = "dashboard"

    def save(self) -> bool:
        form = self.current_form
        if form is None:
            return False
        try:
            forms_service.update_form(form.id, form.title, form.questions, self.session)
        except BACKEND_ERRORS as e:
            self._fail("Update failed", e)
            return False
        self._notify("success", "Form saved successfully")
        self.current_form = None
        self.view = "dashboard"
        self.refresh()
        return True
