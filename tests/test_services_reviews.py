import pytest

from outletdesk.exceptions import AuthenticationError
from outletdesk.models.auth import Session
from outletdesk.models.reviews import Rating, ReviewSummary
from outletdesk.services import reviews as reviews_service
from conftest import RATING_DOC


class TestSummarize:
    def test_review_and_complaint(self):
        reviews, complaints = reviews_service.summarize_reviews([Rating.model_validate(RATING_DOC)])
        (review,) = reviews
        assert review.customer == "Grace"
        assert review.comment == "Cold coffee"
        assert review.outlet_id == "out1"
        assert review.outlet_name == "Harbour Café"
        assert review.rating == 2
        assert review.date == "2025-03-02"
        (complaint,) = complaints
        assert complaint.id == "r1"
        assert [q.question_id for q in complaint.complaint_questions] == ["q-comment"]

    def test_unpopulated_rating_is_anonymous(self):
        rating = Rating.model_validate({"_id": "r2", "outletId": "out9", "overallRating": 5})
        reviews, complaints = reviews_service.summarize_reviews([rating])
        assert reviews[0].customer == "Anonymous"
        assert reviews[0].outlet_id == "out9"
        assert reviews[0].outlet_name == "Outlet"
        assert reviews[0].date is None
        assert complaints == []

    def test_resolved_complaints_are_not_listed(self):
        doc = {**RATING_DOC, "userResponses": [
            {"questionId": "q-comment", "answer": "Cold", "isComplaint": True, "complaintStatus": "resolved"},
        ]}
        _, complaints = reviews_service.summarize_reviews([Rating.model_validate(doc)])
        assert complaints == []


def _summary(id, outlet_id, date):
    return ReviewSummary(id=id, customer="c", outlet_id=outlet_id, outlet_name="o", rating=3, comment="", date=date)


class TestFilterForUser:
    REVIEWS = [
        _summary("a", "out1", "2025-01-01"),
        _summary("b", "out2", "2025-03-01"),
        _summary("c", "out1", "2025-02-01"),
    ]

    def test_manager_sees_own_outlets_newest_first(self, manager_session):
        result = reviews_service.filter_for_user(manager_session, self.REVIEWS)
        assert [r.id for r in result] == ["c", "a"]

    def test_admin_filters_by_outlet(self, admin_session):
        result = reviews_service.filter_for_user(admin_session, self.REVIEWS, outlet_id="out2")
        assert [r.id for r in result] == ["b"]

    def test_oldest_first(self, admin_session):
        result = reviews_service.filter_for_user(admin_session, self.REVIEWS, newest_first=False)
        assert [r.id for r in result] == ["a", "c", "b"]


class TestResolveComplaint:
    def test_patch_body(self, mock_reviews_backend, manager_session):
        mock_reviews_backend.patch.return_value = {"data": RATING_DOC}
        rating = reviews_service.resolve_complaint("r1", "q-comment", "resolved", manager_session, notes="  Refunded ")
        assert rating.id == "r1"
        mock_reviews_backend.patch.assert_called_once_with(
            "/rating/r1/resolve-complaint",
            json={"questionId": "q-comment", "complaintStatus": "resolved",
                  "resolvedBy": "u2", "resolutionNotes": "Refunded"},
        )

    def test_blank_notes_are_omitted(self, mock_reviews_backend, manager_session):
        mock_reviews_backend.patch.return_value = RATING_DOC
        reviews_service.resolve_complaint("r1", "q-comment", "dismissed", manager_session, notes="   ")
        assert "resolutionNotes" not in mock_reviews_backend.patch.call_args.kwargs["json"]

    def test_needs_user(self, mock_reviews_backend):
        with pytest.raises(AuthenticationError):
            reviews_service.resolve_complaint("r1", "q", "resolved", Session(token="t"))
        mock_reviews_backend.patch.assert_not_called()


class TestCrud:
    def test_create_payload(self, mock_reviews_backend, admin_session):
        mock_reviews_backend.post.return_value = {"_id": "r9"}
        reviews_service.create_review("Great", 5, admin_session, product_id="p1")
        mock_reviews_backend.post.assert_called_once_with(
            "/rating", json={"comment": "Great", "value": 5, "product": "p1"},
        )

    def test_update_sends_only_given_fields(self, mock_reviews_backend, admin_session):
        mock_reviews_backend.patch.return_value = {"_id": "r9"}
        reviews_service.update_review("r9", admin_session, stars=4)
        mock_reviews_backend.patch.assert_called_once_with("/rating/r9", json={"value": 4})

    def test_list_unwraps(self, mock_reviews_backend, admin_session):
        mock_reviews_backend.get.return_value = {"data": [RATING_DOC]}
        assert [r.id for r in reviews_service.list_reviews(admin_session)] == ["r1"]
