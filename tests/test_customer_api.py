"""HTTP tests for /customers and /login."""
from bookstore_api.app.models import BookStatus, CustomerStatus

from conftest import build_book


def test_list_customers_as_admin(client, make_customer, admin_headers):
    make_customer(name="Gustavo")
    make_customer(name="Daniel")
    response = client.get("/customers", headers=admin_headers)
    assert response.status_code == 200
    names = [c["name"] for c in response.json()]
    assert "Gustavo" in names and "Daniel" in names
    assert all("password" not in c for c in response.json())


def test_list_customers_filtered_by_name(client, make_customer, admin_headers):
    gustavo = make_customer(name="Gustavo")
    make_customer(name="Daniel")
    response = client.get("/customers", params={"name": "Gus"}, headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["id"] == gustavo.id
    assert body[0]["name"] == "Gustavo"


def test_list_customers_requires_admin(client, make_customer, auth_headers):
    customer = make_customer()
    response = client.get("/customers", headers=auth_headers(customer))
    assert response.status_code == 403
    assert response.json()["internalCode"] == "ML-000"


def test_requests_without_token_are_unauthorized(client, make_customer):
    customer = make_customer()
    assert client.get("/customers").status_code == 401
    assert client.get(f"/customers/{customer.id}").status_code == 401
    assert client.delete(f"/customers/{customer.id}").status_code == 401


def test_invalid_token_is_unauthorized(client):
    response = client.get("/customers", headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == 401


def test_create_customer(client):
    payload = {"name": "Ana", "email": "ana@email.com", "password": "123456"}
    response = client.post("/customers", json=payload)
    assert response.status_code == 201
    body = response.json()
    assert body["id"] is not None
    assert body["name"] == "Ana"
    assert body["email"] == "ana@email.com"
    assert body["status"] == "ACTIVE"
    assert body["roles"] == ["CUSTOMER"]
    assert "password" not in body


def test_create_customer_with_blank_name(client):
    payload = {"name": "", "email": "ana@email.com", "password": "123456"}
    response = client.post("/customers", json=payload)
    assert response.status_code == 422
    body = response.json()
    assert body["httpCode"] == 422
    assert body["message"] == "Fields errors"
    assert body["internalCode"] == "ML-0001"
    assert {"message": "Name must be informed", "field": "name"} in body["errors"]


def test_create_customer_collects_every_field_error(client, make_customer):
    make_customer(email="taken@email.com")
    response = client.post("/customers", json={"name": " ", "email": "taken@email.com", "password": ""})
    assert response.status_code == 422
    fields = {(e["field"], e["message"]) for e in response.json()["errors"]}
    assert fields == {
        ("name", "Name must be informed"),
        ("email", "E-mail already in use"),
        ("password", "Password must be informed"),
    }


def test_create_customer_with_missing_field(client):
    response = client.post("/customers", json={"name": "Ana", "password": "123456"})
    assert response.status_code == 422
    body = response.json()
    assert body["internalCode"] == "ML-0001"
    assert [e["field"] for e in body["errors"]] == ["email"]


def test_get_own_customer(client, make_customer, auth_headers):
    customer = make_customer(name="Ana")
    response = client.get(f"/customers/{customer.id}", headers=auth_headers(customer))
    assert response.status_code == 200
    assert response.json()["name"] == "Ana"


def test_get_other_customer_is_forbidden(client, make_customer, auth_headers):
    customer = make_customer()
    other = make_customer()
    response = client.get(f"/customers/{other.id}", headers=auth_headers(customer))
    assert response.status_code == 403
    assert response.json() == {
        "httpCode": 403,
        "message": "Access denied",
        "internalCode": "ML-000",
        "errors": [],
    }


def test_admin_can_get_any_customer(client, make_customer, admin_headers):
    customer = make_customer(name="Ana")
    response = client.get(f"/customers/{customer.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["id"] == customer.id


def test_get_unknown_customer(client, admin_headers):
    response = client.get("/customers/9999", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Customer with the id [9999] doesn't exist"
    assert response.json()["internalCode"] == "ML-1102"


def test_put_customer(client, store, make_customer, auth_headers):
    customer = make_customer(name="Old", email="old@email.com")
    response = client.put(
        f"/customers/{customer.id}",
        json={"name": "New", "email": "new@email.com"},
        headers=auth_headers(customer),
    )
    assert response.status_code == 204
    updated = store.find_by_id(customer.id)
    assert updated.name == "New"
    assert updated.email == "new@email.com"
    assert updated.password == customer.password


def test_put_customer_keeping_own_email(client, make_customer, auth_headers):
    customer = make_customer(email="same@email.com")
    response = client.put(
        f"/customers/{customer.id}",
        json={"name": "Renamed", "email": "same@email.com"},
        headers=auth_headers(customer),
    )
    assert response.status_code == 204


def test_put_customer_with_invalid_payload(client, admin_headers):
    response = client.put("/customers/1", json={"name": "", "email": "bad"}, headers=admin_headers)
    assert response.status_code == 422
    assert response.json()["internalCode"] == "ML-0001"


def test_put_unknown_customer(client, admin_headers):
    response = client.put(
        "/customers/9999",
        json={"name": "Someone", "email": "someone@email.com"},
        headers=admin_headers,
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Customer with the id [9999] doesn't exist"
    assert response.json()["internalCode"] == "ML-1102"


def test_delete_customer(client, app, store, make_customer, auth_headers):
    customer = make_customer()
    book = app.state.book_service.book_repository.save(build_book(customer_id=customer.id))
    response = client.delete(f"/customers/{customer.id}", headers=auth_headers(customer))
    assert response.status_code == 204
    assert store.find_by_id(customer.id).status == CustomerStatus.INACTIVE
    assert app.state.book_service.book_repository.find_by_id(book.id).status == BookStatus.DELETED


def test_deleted_customer_token_stops_working(client, make_customer, auth_headers):
    customer = make_customer()
    headers = auth_headers(customer)
    assert client.delete(f"/customers/{customer.id}", headers=headers).status_code == 204
    assert client.get(f"/customers/{customer.id}", headers=headers).status_code == 401


def test_delete_unknown_customer(client, admin_headers):
    response = client.delete("/customers/9999", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["internalCode"] == "ML-1102"


def test_login(client, make_customer):
    make_customer(email="ana@email.com", password="123456")
    response = client.post("/login", json={"email": "ana@email.com", "password": "123456"})
    assert response.status_code == 200
    token = response.json()["access_token"]
    assert response.json()["token_type"] == "bearer"
    assert client.get("/customers", headers={"Authorization": f"Bearer {token}"}).status_code == 403


def test_login_with_wrong_password(client, make_customer):
    make_customer(email="ana@email.com", password="123456")
    response = client.post("/login", json={"email": "ana@email.com", "password": "nope"})
    assert response.status_code == 401


def test_admin_report(client, make_customer, auth_headers, admin_headers):
    customer = make_customer()
    assert client.get("/admin/report", headers=auth_headers(customer)).status_code == 403
    response = client.get("/admin/report", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == "This is a report! only admins can see it."
