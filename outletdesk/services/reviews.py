import logging
from typing import Literal

from outletdesk.auth import backend_for
from outletdesk.backend import unwrap
from outletdesk.exceptions import AuthenticationError
from outletdesk.models.auth import Session
from outletdesk.models.reviews import (
    ComplaintQuestion,
    ComplaintSummary,
    Rating,
    ReviewSummary,
    UserResponse,
)

logger = logging.getLogger(__name__)

ANONYMOUS = "Anonymous"


def list_reviews(session: Session) -> list[Rating]:
    data = unwrap(backend_for(session).get("/rating")) or []
    return [Rating.model_validate(item) for item in data]


def get_review(review_id: str, session: Session) -> Rating:
    return Rating.model_validate(unwrap(backend_for(session).get(f"/rating/{review_id}")))


def create_review(comment: str, stars: int, session: Session, product_id: str | None = None) -> Rating:
    payload = {"comment": comment, "value": stars}
    if product_id:
        payload["product"] = product_id
    return Rating.model_validate(unwrap(backend_for(session).post("/rating", json=payload)))


def update_review(review_id: str, session: Session, comment: str | None = None, stars: int | None = None) -> Rating:
    payload = {}
    if comment is not None:
        payload["comment"] = comment
    if stars is not None:
        payload["value"] = stars
    return Rating.model_validate(unwrap(backend_for(session).patch(f"/rating/{review_id}", json=payload)))


def delete_review(review_id: str, session: Session) -> None:
    backend_for(session).delete(f"/rating/{review_id}")


def resolve_complaint(
    review_id: str,
    question_id: str,
    status: Literal["resolved", "dismissed"],
    session: Session,
    notes: str | None = None,
) -> Rating:
    """Close one complaint answer inside a review as resolved or dismissed."""
    if session.user is None or not session.user.id:
        raise AuthenticationError("Resolving a complaint needs a signed-in user with an id.")
    body = {"questionId": question_id, "complaintStatus": status, "resolvedBy": session.user.id}
    if notes and notes.strip():
        body["resolutionNotes"] = notes.strip()
    data = backend_for(session).patch(f"/rating/{review_id}/resolve-complaint", json=body)
    logger.info("Complaint %s on review %s marked %s", question_id, review_id, status)
    return Rating.model_validate(unwrap(data))


# --- Summaries ---

def _first_text(answer) -> str | None:
    if isinstance(answer, list):
        return str(answer[0]) if answer else None
    return None if answer is None else str(answer)


def _question_types(rating: Rating) -> dict[str, str]:
    if not isinstance(rating.form, dict):
        return {}
    return {q.get("_id"): q.get("type") for q in rating.form.get("questions") or []}


def _summary(rating: Rating) -> ReviewSummary:
    types = _question_types(rating)
    customer, comment = ANONYMOUS, ""
    for response in rating.user_responses:
        kind = types.get(response.question_id)
        if kind == "short_answer":
            customer = _first_text(response.answer) or ANONYMOUS
        elif kind == "paragraph":
            comment = _first_text(response.answer) or ""
    if isinstance(rating.outlet, dict):
        outlet_id, outlet_name = str(rating.outlet.get("_id", "")), rating.outlet.get("name", "Outlet")
    else:
        outlet_id, outlet_name = rating.outlet or "", "Outlet"
    return ReviewSummary(
        id=rating.id,
        customer=customer,
        outlet_id=outlet_id,
        outlet_name=outlet_name,
        rating=rating.overall_rating,
        comment=comment,
        date=rating.created_at[:10] if rating.created_at else None,
    )


def _pending_complaints(responses: list[UserResponse]) -> list[ComplaintQuestion]:
    return [
        ComplaintQuestion(question_id=r.question_id, answer=r.answer, complaint_status=r.complaint_status)
        for r in responses
        if r.is_complaint and r.complaint_status == "pending"
    ]


def summarize_reviews(ratings: list[Rating]) -> tuple[list[ReviewSummary], list[ComplaintSummary]]:
    """Split raw ratings into display summaries and the ones with open complaints."""
    reviews, complaints = [], []
    for rating in ratings:
        summary = _summary(rating)
        reviews.append(summary)
        pending = _pending_complaints(rating.user_responses)
        if pending:
            complaints.append(ComplaintSummary(**summary.model_dump(), complaint_questions=pending))
    return reviews, complaints


def filter_for_user(
    session: Session,
    reviews: list[ReviewSummary],
    outlet_id: str | None = None,
    newest_first: bool = True,
) -> list[ReviewSummary]:
    """Scope non-admins to their outlets, optionally narrow to one outlet, sort by date."""
    if not session.is_admin and session.user and session.user.outlet_ids:
        reviews = [r for r in reviews if r.outlet_id in session.user.outlet_ids]
    if outlet_id:
        reviews = [r for r in reviews if r.outlet_id == outlet_id]
    return sorted(reviews, key=lambda r: r.date or "", reverse=newest_first)
