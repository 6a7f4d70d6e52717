import copy
import itertools

import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from outletdesk.models.auth import Session, UserInfo


# --- Canned backend payloads ---

FORM_DOC = {
    "_id": "form1",
    "title": "Café feedback",
    "questions": [
        {"_id": "q-seed", "type": "rating", "title": "Overall Rating", "isRequired": True,
         "maxRatings": 5, "isProtected": True},
        {"_id": "q-name", "type": "short_answer", "title": "Name", "hint": "", "isRequired": False},
        {"_id": "q-visit", "type": "checkbox", "title": "What did you order?", "isRequired": False,
         "options": [{"_id": "o1", "text": "Coffee"}, {"_id": "o2", "text": "Cake"}, {"_id": "o3", "text": "Other:"}]},
    ],
}

FORMS_LIST = {"data": [{"_id": "form1", "title": "Café feedback"}, {"_id": "form2", "title": "Store survey"}]}

OUTLET_DOC = {
    "_id": "out1",
    "name": "Harbour Café",
    "category": "Cafe",
    "rating": "4.5",
    "totalFeedback": 12,
    "address": "1 Quay St",
    "managerId": "u2",
    "qrToken": None,
}

OUTLETS_PAGE = {
    "data": [
        OUTLET_DOC,
        {"_id": "out2", "name": "Main St Market", "category": "Supermarket", "rating": None},
    ],
    "meta": {"total": 2, "currentPage": 1, "hasPrevPage": False, "hasNextPage": False, "limit": 10},
}

RATING_DOC = {
    "_id": "r1",
    "createdAt": "2025-03-02T10:00:00.000Z",
    "overallRating": 2,
    "userId": "cust1",
    "outletId": {"_id": "out1", "name": "Harbour Café"},
    "formId": {"questions": [
        {"_id": "q-name", "type": "short_answer"},
        {"_id": "q-comment", "type": "paragraph"},
        {"_id": "q-seed", "type": "rating"},
    ]},
    "userResponses": [
        {"questionId": "q-name", "answer": "Grace"},
        {"questionId": "q-comment", "answer": "Cold coffee", "isComplaint": True, "complaintStatus": "pending"},
        {"questionId": "q-seed", "answer": 2},
    ],
}


def make_response(status: int = 200, body=None, text: str = ""):
    """Stand-in for requests.Response."""
    resp = MagicMock()
    resp.status_code = status
    resp.ok = status < 400
    resp.content = b"" if body is None else b"{}"
    resp.json.return_value = body
    resp.text = text
    resp.reason = "Bad Request" if status >= 400 else "OK"
    return resp


class FakeFormBackend:
    """In-memory stand-in for the backend form endpoints."""

    def __init__(self, forms: list[dict] | None = None):
        self.forms = {f["_id"]: copy.deepcopy(f) for f in forms or []}
        self._ids = itertools.count(100)
        self.calls = []

    def get(self, path, params=None):
        self.calls.append(("GET", path))
        if path == "/forms":
            return {"data": [{"_id": f["_id"], "title": f["title"]} for f in self.forms.values()]}
        return {"data": copy.deepcopy(self.forms[path.rsplit("/", 1)[1]])}

    def post(self, path, json=None, params=None):
        self.calls.append(("POST", path))
        form_id = f"form{next(self._ids)}"
        self.forms[form_id] = {"_id": form_id, **copy.deepcopy(json)}
        return {"data": copy.deepcopy(self.forms[form_id])}

    def patch(self, path, json=None):
        self.calls.append(("PATCH", path))
        form_id = path.rsplit("/", 1)[1]
        self.forms[form_id].update(copy.deepcopy(json))
        return copy.deepcopy(self.forms[form_id])

    def delete(self, path):
        self.calls.append(("DELETE", path))
        del self.forms[path.rsplit("/", 1)[1]]


@pytest.fixture
def admin_session():
    return Session(
        account="default", token="tok-admin",
        user=UserInfo(id="u1", name="Ada", email="ada@example.com", role="admin"),
    )


@pytest.fixture
def manager_session():
    return Session(
        account="manager", token="tok-manager",
        user=UserInfo(id="u2", name="Grace", email="grace@example.com", role="manager", outlet_ids=["out1"]),
    )


@pytest.fixture
def fake_forms_backend(mocker):
    fake = FakeFormBackend([FORM_DOC])
    mocker.patch("outletdesk.services.forms.backend_for", return_value=fake)
    return fake


def _mock_backend_for(mocker, module: str) -> MagicMock:
    client = MagicMock()
    mocker.patch(f"outletdesk.services.{module}.backend_for", return_value=client)
    return client


@pytest.fixture
def mock_forms_backend(mocker):
    return _mock_backend_for(mocker, "forms")


@pytest.fixture
def mock_outlets_backend(mocker):
    return _mock_backend_for(mocker, "outlets")


@pytest.fixture
def mock_reviews_backend(mocker):
    return _mock_backend_for(mocker, "reviews")


@pytest.fixture
def api_client():
    """FastAPI TestClient for router tests."""
    from outletdesk.main import api
    return TestClient(api)
