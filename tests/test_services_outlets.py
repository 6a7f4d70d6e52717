from outletdesk.config import Settings
from outletdesk.models.outlets import CreateOutletTypeRequest, CreateTableRequest, UpdateTableRequest
from outletdesk.services import outlet_types as outlet_types_service
from outletdesk.services import outlets as outlets_service
from outletdesk.services import tables as tables_service
from conftest import OUTLET_DOC, OUTLETS_PAGE


class TestListOutlets:
    def test_normalizes_items(self, mock_outlets_backend, admin_session):
        mock_outlets_backend.get.return_value = OUTLETS_PAGE
        page = outlets_service.list_outlets(admin_session, page=2, limit=5)
        first, second = page.data
        assert first.id == "out1"
        assert first.outlet_id == "out1"
        assert first.rating == 4.5
        assert first.total_feedback == 12
        assert first.capabilities == ["cafe"]
        assert second.rating == 0
        assert second.capabilities == ["supermarket"]
        assert page.meta.total == 2
        mock_outlets_backend.get.assert_called_once_with("/outlet", params={"currentPage": 2, "limit": 5})

    def test_missing_data(self, mock_outlets_backend, admin_session):
        mock_outlets_backend.get.return_value = {}
        page = outlets_service.list_outlets(admin_session)
        assert page.data == []
        assert page.meta.limit == 10


class TestQrToken:
    def test_existing_token_is_reused(self, mock_outlets_backend, admin_session, mocker):
        mocker.patch("outletdesk.services.outlets.get_settings", return_value=Settings(public_base_url="https://fb.example/"))
        mock_outlets_backend.get.return_value = {**OUTLET_DOC, "qrToken": "abc123"}
        link = outlets_service.ensure_qr_token("out1", admin_session)
        assert link.url == "https://fb.example/r/abc123"
        mock_outlets_backend.patch.assert_not_called()

    def test_new_token_is_persisted(self, mock_outlets_backend, admin_session, mocker):
        mocker.patch("outletdesk.services.outlets.get_settings", return_value=Settings(public_base_url="https://fb.example"))
        mock_outlets_backend.get.return_value = OUTLET_DOC
        mock_outlets_backend.patch.return_value = None
        link = outlets_service.ensure_qr_token("out1", admin_session)
        body = mock_outlets_backend.patch.call_args.kwargs["json"]
        assert mock_outlets_backend.patch.call_args.args[0] == "/outlet/out1"
        assert len(body["qrToken"]) == 10
        assert link.qr_token == body["qrToken"]
        assert link.url.endswith(f"/r/{body['qrToken']}")


class TestOutletTypes:
    def test_list(self, mocker, admin_session):
        client = mocker.MagicMock()
        mocker.patch("outletdesk.services.outlet_types.backend_for", return_value=client)
        client.get.return_value = {"data": [{"_id": "t1", "name": "Cafe", "description": "Coffee"}], "meta": {"total": 1}}
        page = outlet_types_service.list_outlet_types(admin_session)
        assert page.data[0].name == "Cafe"
        assert page.meta.total == 1

    def test_create_uses_backend_names(self, mocker, admin_session):
        client = mocker.MagicMock()
        mocker.patch("outletdesk.services.outlet_types.backend_for", return_value=client)
        client.post.return_value = {"_id": "t2", "name": "Bakery", "formId": "form1"}
        created = outlet_types_service.create_outlet_type(
            CreateOutletTypeRequest(name="Bakery", description="Bread", form_id="form1"), admin_session,
        )
        assert created.form_id == "form1"
        client.post.assert_called_once_with(
            "/outlet-type", json={"name": "Bakery", "description": "Bread", "formId": "form1"},
        )


class TestTables:
    def test_create_includes_outlet(self, mocker, admin_session):
        client = mocker.MagicMock()
        mocker.patch("outletdesk.services.tables.backend_for", return_value=client)
        client.post.return_value = {"_id": "tb1", "outletId": "out1", "name": "T1", "tableToken": "tt"}
        table = tables_service.create_table("out1", CreateTableRequest(name="T1", created_by="u1", capacity=4), admin_session)
        assert table.table_token == "tt"
        client.post.assert_called_once_with(
            "/outlet-table", json={"outletId": "out1", "name": "T1", "createdBy": "u1", "capacity": 4},
        )

    def test_update_sends_only_set_fields(self, mocker, admin_session):
        client = mocker.MagicMock()
        mocker.patch("outletdesk.services.tables.backend_for", return_value=client)
        client.patch.return_value = {"_id": "tb1", "outletId": "out1", "name": "T1", "status": "occupied"}
        tables_service.update_table("tb1", UpdateTableRequest(status="occupied"), admin_session)
        client.patch.assert_called_once_with("/outlet-table/tb1", json={"status": "occupied"})
