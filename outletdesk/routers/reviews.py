from fastapi import APIRouter

from outletdesk.auth import load_session
from outletdesk.models.common import DeleteResponse
from outletdesk.models.reviews import (
    ComplaintSummary,
    CreateReviewRequest,
    Rating,
    ResolveComplaintRequest,
    ReviewSummary,
    UpdateReviewRequest,
)
from outletdesk.services import reviews as reviews_service

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.get("")
def list_reviews(outlet_id: str | None = None, newest_first: bool = True, account: str = "default") -> list[ReviewSummary]:
    session = load_session(account)
    reviews, _ = reviews_service.summarize_reviews(reviews_service.list_reviews(session))
    return reviews_service.filter_for_user(session, reviews, outlet_id=outlet_id, newest_first=newest_first)


@router.get("/complaints")
def list_complaints(outlet_id: str | None = None, account: str = "default") -> list[ComplaintSummary]:
    session = load_session(account)
    _, complaints = reviews_service.summarize_reviews(reviews_service.list_reviews(session))
    return reviews_service.filter_for_user(session, complaints, outlet_id=outlet_id)


@router.get("/{review_id}")
def get_review(review_id: str, account: str = "default") -> Rating:
    return reviews_service.get_review(review_id, load_session(account))


@router.post("")
def create_review(request: CreateReviewRequest, account: str = "default") -> Rating:
    return reviews_service.create_review(
        request.comment, request.stars, load_session(account), product_id=request.product_id,
    )


@router.patch("/{review_id}")
def update_review(review_id: str, request: UpdateReviewRequest, account: str = "default") -> Rating:
    return reviews_service.update_review(
        review_id, load_session(account), comment=request.comment, stars=request.stars,
    )


@router.delete("/{review_id}")
def delete_review(review_id: str, account: str = "default") -> DeleteResponse:
    reviews_service.delete_review(review_id, load_session(account))
    return DeleteResponse(id=review_id, deleted=True)


@router.post("/{review_id}/complaints/resolve")
def resolve_complaint(review_id: str, request: ResolveComplaintRequest, account: str = "default") -> Rating:
    return reviews_service.resolve_complaint(
        review_id,
        request.question_id,
        request.complaint_status,
        load_session(account),
        notes=request.resolution_notes,
    )
