from outletdesk.models.products import CreateProductRequest
from outletdesk.models.users import ChangePasswordRequest, CreateUserRequest, UpdateUserRequest
from outletdesk.services import products as products_service
from outletdesk.services import users as users_service


def _client(mocker, module):
    client = mocker.MagicMock()
    mocker.patch(f"outletdesk.services.{module}.backend_for", return_value=client)
    return client


class TestUsers:
    def test_list_normalizes_ids(self, mocker, admin_session):
        client = _client(mocker, "users")
        client.get.return_value = {"data": [
            {"_id": "u2", "name": "Grace", "email": "g@example.com", "role": "manager",
             "userName": "grace", "outletId": ["out1"], "isActive": True},
        ]}
        (user,) = users_service.list_users(admin_session)
        assert user.id == "u2"
        assert user.user_name == "grace"
        assert user.outlet_ids == ["out1"]
        assert user.is_active is True

    def test_create_uses_backend_names(self, mocker, admin_session):
        client = _client(mocker, "users")
        client.post.return_value = {"_id": "u3", "name": "Lin", "email": "l@example.com", "role": "manager"}
        users_service.create_user(CreateUserRequest(
            name="Lin", user_name="lin", email="l@example.com", role="manager",
            phone_number="555", outlet_ids=["out2"],
        ), admin_session)
        client.post.assert_called_once_with("/users", json={
            "name": "Lin", "userName": "lin", "email": "l@example.com", "role": "manager",
            "phoneNumber": "555", "outletId": ["out2"],
        })

    def test_update_sends_only_set_fields(self, mocker, admin_session):
        client = _client(mocker, "users")
        client.patch.return_value = {"_id": "u3", "name": "Lin", "email": "l@example.com", "role": "manager"}
        users_service.update_user("u3", UpdateUserRequest(is_blocked=True), admin_session)
        client.patch.assert_called_once_with("/users/u3", json={"isBlocked": True})

    def test_change_password(self, mocker, manager_session):
        client = _client(mocker, "users")
        users_service.change_password("u2", ChangePasswordRequest(old_password="a", new_password="b"), manager_session)
        client.post.assert_called_once_with(
            "/users/change-password/u2", json={"oldPassword": "a", "newPassword": "b"},
        )


class TestProducts:
    def test_create_and_list(self, mocker, admin_session):
        client = _client(mocker, "products")
        client.post.return_value = {"data": {"_id": "p1", "name": "Latte", "price": 4.5}}
        product = products_service.create_product(
            CreateProductRequest(name="Latte", price=4.5, description="Milky"), admin_session,
        )
        assert product.id == "p1"
        assert client.post.call_args.kwargs["json"]["description"] == "Milky"

        client.get.return_value = [{"_id": "p1", "name": "Latte", "price": "4.5"}]
        assert products_service.list_products(admin_session)[0].price == 4.5

    def test_delete(self, mocker, admin_session):
        client = _client(mocker, "products")
        products_service.delete_product("p1", admin_session)
        client.delete.assert_called_once_with("/product/p1")
