from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ComplaintStatus = Literal["pending", "resolved", "dismissed"]


class UserResponse(BaseModel):
    """One answer inside a submitted review; may be flagged as a complaint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    question_id: str = Field(alias="questionId")
    answer: str | list[str] | int | float | None = None
    is_complaint: bool = Field(False, alias="isComplaint")
    complaint_status: ComplaintStatus | None = Field(None, alias="complaintStatus")
    resolved_at: str | None = Field(None, alias="resolvedAt")
    resolution_notes: str | None = Field(None, alias="resolutionNotes")
    resolution_by: str | None = Field(None, alias="resolutionBy")


class Rating(BaseModel):
    """A submitted review as the backend returns it.

    outlet and form may come back as bare ids or populated documents.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    created_at: str | None = Field(None, alias="createdAt")
    overall_rating: float = Field(0, alias="overallRating")
    user_id: str | None = Field(None, alias="userId")
    type: Literal["complaint", "review"] | None = None
    outlet: str | dict[str, Any] | None = Field(None, alias="outletId")
    form: str | dict[str, Any] | None = Field(None, alias="formId")
    user_responses: list[UserResponse] = Field(default_factory=list, alias="userResponses")


class ReviewSummary(BaseModel):
    id: str
    customer: str
    outlet_id: str
    outlet_name: str
    rating: float
    comment: str
    date: str | None = None


class ComplaintQuestion(BaseModel):
    question_id: str
    answer: str | list[str] | int | float | None = None
    complaint_status: ComplaintStatus | None = None


class ComplaintSummary(ReviewSummary):
    complaint_questions: list[ComplaintQuestion]


class CreateReviewRequest(BaseModel):
    comment: str
    stars: int
    product_id: str | None = None


class UpdateReviewRequest(BaseModel):
    comment: str | None = None
    stars: int | None = None


class ResolveComplaintRequest(BaseModel):
    question_id: str
    complaint_status: Literal["resolved", "dismissed"]
    resolution_notes: str | None = None
