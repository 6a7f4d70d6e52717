"""Working-copy transforms for the form builder.

Every function takes a Form and returns a new Form; the input is never
mutated. None of them fail: unknown ids and malformed fields are no-ops or
merged as given. Persisting the result is the caller's business.
"""

from outletdesk.models.forms import CHOICE_TYPES, Form, Option, Question, new_id

SEED_TITLE = "Overall Rating"
SEED_MAX_RATING = 5


def _unique_id(taken: set[str]) -> str:
    while True:
        candidate = new_id()
        if candidate not in taken:
            return candidate


def _replace_question(form: Form, question_id: str, fn) -> Form:
    questions = [fn(q) if q.id == question_id else q for q in form.questions]
    return form.model_copy(update={"questions": questions})


def seed_question() -> Question:
    return Question(
        type="rating",
        title=SEED_TITLE,
        hint="",
        required=True,
        max_rating=SEED_MAX_RATING,
        is_protected=True,
    )


def open_form(form: Form) -> Form:
    """Start editing. An empty form gets the protected overall-rating question."""
    form = form.model_copy(deep=True)
    if not form.questions:
        form.questions = [seed_question()]
    return form


def set_title(form: Form, title: str) -> Form:
    return form.model_copy(update={"title": title})


def add_question(form: Form) -> Form:
    taken = {q.id for q in form.questions}
    question = Question(id=_unique_id(taken), type="short_answer", title="", hint="", required=False)
    return form.model_copy(update={"questions": [*form.questions, question]})


def update_question(form: Form, question_id: str, **fields) -> Form:
    """Merge fields into one question. The protected seed question keeps its type."""

    def merge(q: Question) -> Question:
        updates = dict(fields)
        if q.is_protected:
            updates.pop("type", None)
            updates.pop("is_protected", None)
        return q.model_copy(update=updates)

    return _replace_question(form, question_id, merge)


def toggle_required(form: Form, question_id: str) -> Form:
    return _replace_question(form, question_id, lambda q: q.model_copy(update={"required": not q.required}))


def remove_question(form: Form, question_id: str) -> Form:
    questions = [q for q in form.questions if q.id != question_id or q.is_protected]
    return form.model_copy(update={"questions": questions})


def add_option(form: Form, question_id: str) -> Form:
    def append(q: Question) -> Question:
        if q.options is None and q.type not in CHOICE_TYPES:
            return q
        options = list(q.options or [])
        option = Option(id=_unique_id({o.id for o in options}), text=f"Option {len(options) + 1}")
        return q.model_copy(update={"options": [*options, option]})

    return _replace_question(form, question_id, append)


def update_option(form: Form, question_id: str, option_id: str, text: str) -> Form:
    def relabel(q: Question) -> Question:
        if q.options is None:
            return q
        options = [o.model_copy(update={"text": text}) if o.id == option_id else o for o in q.options]
        return q.model_copy(update={"options": options})

    return _replace_question(form, question_id, relabel)


def remove_option(form: Form, question_id: str, option_id: str) -> Form:
    def drop(q: Question) -> Question:
        if q.options is None:
            return q
        return q.model_copy(update={"options": [o for o in q.options if o.id != option_id]})

    return _replace_question(form, question_id, drop)


def to_payload(form: Form) -> dict:
    """Body for PATCH /forms/{id}: title plus questions in backend field names."""
    return {
        "title": form.title,
        "questions": [q.model_dump(by_alias=True, exclude_none=True) for q in form.questions],
    }
