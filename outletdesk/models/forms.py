import secrets
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

QuestionType = Literal["short_answer", "paragraph", "multiple_choice", "checkbox", "rating"]
CHOICE_TYPES = ("multiple_choice", "checkbox")
TEXT_TYPES = ("short_answer", "paragraph")

# Label of the free-text option in choice questions.
OTHER_LABEL = "Other:"

Answer = str | list[str] | int
FormResponse = dict[str, Answer]


def new_id() -> str:
    """Random client-side id for questions and options."""
    return secrets.token_hex(5)


class Option(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default_factory=new_id, alias="_id")
    text: str = ""


class Question(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(default_factory=new_id, alias="_id")
    type: QuestionType = "short_answer"
    title: str = ""
    hint: str | None = ""
    required: bool = Field(False, alias="isRequired")
    options: list[Option] | None = None
    max_rating: int | None = Field(None, alias="maxRatings")
    star_step: float | None = Field(None, alias="starStep")
    is_protected: bool = Field(False, alias="isProtected")


class Form(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    title: str = ""
    version: int | None = None
    questions: list[Question] = Field(default_factory=list)


class FormSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    title: str = ""


# --- Request / response bodies ---

class SaveFormRequest(BaseModel):
    title: str
    questions: list[Question]


class AddQuestionRequest(BaseModel):
    title: str
    question_type: QuestionType = "short_answer"
    options: list[str] | None = None  # For multiple_choice and checkbox
    required: bool = False
    hint: str = ""
    max_rating: int | None = None  # For rating: 3, 5 or 10


class CaptureEvent(BaseModel):
    question_id: str
    action: Literal["text", "rate", "select", "deselect", "other_text", "clear"]
    value: str | int | None = None  # typed text or star number
    index: int | None = None  # option position for select/deselect


class EncodeResponseRequest(BaseModel):
    events: list[CaptureEvent]


class EncodedResponse(BaseModel):
    form_id: str
    answers: dict[str, Answer]
    missing_required: list[str]
