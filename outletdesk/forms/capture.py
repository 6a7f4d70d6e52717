"""Answer capture for a rendered form.

Choice answers are keyed by option *position*: option 0 encodes as "0",
option 1 as "1", and the option labelled "Other:" as "other:<typed text>".
Stored responses depend on this shape, so reordering or deleting options
after answers exist changes what those numeric answers mean.
"""

from outletdesk.models.forms import (
    CHOICE_TYPES,
    OTHER_LABEL,
    TEXT_TYPES,
    Answer,
    CaptureEvent,
    Form,
    FormResponse,
    Question,
)
from outletdesk.forms.editor import SEED_MAX_RATING

OTHER_PREFIX = "other:"


def is_other(value: str) -> bool:
    return isinstance(value, str) and value.startswith(OTHER_PREFIX)


def encode_option(question: Question, index: int, other_text: str = "") -> str:
    options = question.options or []
    if 0 <= index < len(options) and options[index].text == OTHER_LABEL:
        return OTHER_PREFIX + other_text
    return str(index)


def decode_answer(question: Question, value: Answer | None) -> str | list[str] | int | None:
    """Turn a stored answer back into option labels for display."""
    if value is None or question.type not in CHOICE_TYPES:
        return value
    options = question.options or []

    def label(entry: str) -> str:
        if is_other(entry):
            return f"Other: {entry[len(OTHER_PREFIX):]}"
        if entry.isdigit() and int(entry) < len(options):
            return options[int(entry)].text
        return entry

    if isinstance(value, list):
        return [label(str(v)) for v in value]
    return label(str(value))


class ResponseCapture:
    """Accumulates one respondent's answers to a form, keyed by question id.

    Nothing is ever rejected: events for unknown questions or of the wrong
    kind are ignored, non-numeric star values are dropped, and star clicks
    outside the scale are clamped onto it.
    """

    def __init__(self, form: Form):
        self.form = form
        self._questions = {q.id: q for q in form.questions}
        self._answers: FormResponse = {}

    @property
    def answers(self) -> FormResponse:
        return {qid: list(v) if isinstance(v, list) else v for qid, v in self._answers.items()}

    def _question(self, question_id: str, *types: str) -> Question | None:
        q = self._questions.get(question_id)
        if q is None or q.type not in types:
            return None
        return q

    def set_text(self, question_id: str, text: str) -> None:
        if self._question(question_id, *TEXT_TYPES):
            self._answers[question_id] = text

    def rate(self, question_id: str, star: int) -> None:
        q = self._question(question_id, "rating")
        if q is None:
            return
        try:
            star = int(star)
        except (TypeError, ValueError):
            return
        max_rating = q.max_rating or SEED_MAX_RATING
        self._answers[question_id] = min(max(star, 1), max_rating)

    def select(self, question_id: str, index: int, selected: bool = True, other_text: str = "") -> None:
        q = self._question(question_id, *CHOICE_TYPES)
        if q is None:
            return
        entry = encode_option(q, index, other_text)
        if q.type == "multiple_choice":
            self._select_single(question_id, entry, selected)
        else:
            self._select_many(question_id, entry, selected)

    def _select_single(self, question_id: str, entry: str, selected: bool) -> None:
        current = self._answers.get(question_id)
        if selected:
            self._answers[question_id] = entry
        elif current == entry or (is_other(entry) and is_other(current)):
            del self._answers[question_id]

    def _select_many(self, question_id: str, entry: str, selected: bool) -> None:
        current = list(self._answers.get(question_id) or [])
        if is_other(entry):
            position = next((i for i, v in enumerate(current) if is_other(v)), None)
            if not selected:
                current = [v for v in current if not is_other(v)]
            elif position is None:
                current.append(entry)
            else:
                current[position] = entry
        elif selected:
            if entry not in current:
                current.append(entry)
        else:
            current = [v for v in current if v != entry]
        self._answers[question_id] = current

    def set_other_text(self, question_id: str, text: str) -> None:
        """Retype the free text of an "Other" entry that is already selected."""
        current = self._answers.get(question_id)
        if isinstance(current, list):
            self._answers[question_id] = [OTHER_PREFIX + text if is_other(v) else v for v in current]
        elif is_other(current):
            self._answers[question_id] = OTHER_PREFIX + text

    def clear(self, question_id: str) -> None:
        self._answers.pop(question_id, None)

    def missing_required(self) -> list[str]:
        """Required questions with no answer yet, in form order."""
        missing = []
        for q in self.form.questions:
            value = self._answers.get(q.id)
            if q.required and (value is None or value == "" or value == []):
                missing.append(q.id)
        return missing

    def apply(self, event: CaptureEvent) -> None:
        """Replay one recorded UI event."""
        qid = event.question_id
        if event.action == "text":
            self.set_text(qid, "" if event.value is None else str(event.value))
        elif event.action == "rate" and event.value is not None:
            self.rate(qid, event.value)
        elif event.action in ("select", "deselect") and event.index is not None:
            other_text = "" if event.value is None else str(event.value)
            self.select(qid, event.index, selected=event.action == "select", other_text=other_text)
        elif event.action == "other_text":
            self.set_other_text(qid, "" if event.value is None else str(event.value))
        elif event.action == "clear":
            self.clear(qid)
