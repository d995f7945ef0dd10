"""HTTP tests for /books."""
import pytest

from bookstore_api.app.models import BookStatus


@pytest.fixture
def seller(make_customer):
    return make_customer(name="Seller")


@pytest.fixture
def seller_headers(seller, auth_headers):
    return auth_headers(seller)


@pytest.fixture
def create_book(client, seller, seller_headers):
    def _create(name="Book Name", price=10.0):
        response = client.post(
            "/books",
            json={"name": name, "price": price, "customer_id": seller.id},
            headers=seller_headers,
        )
        assert response.status_code == 201
        return response.json()

    return _create


def test_create_book(client, seller, seller_headers):
    response = client.post(
        "/books",
        json={"name": "Dom Casmurro", "price": 29.9, "customer_id": seller.id},
        headers=seller_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["id"] is not None
    assert body["name"] == "Dom Casmurro"
    assert body["price"] == 29.9
    assert body["status"] == "ACTIVE"
    assert body["customer_id"] == seller.id


def test_create_book_requires_token(client, seller):
    response = client.post("/books", json={"name": "X", "price": 1.0, "customer_id": seller.id})
    assert response.status_code == 401


def test_create_book_with_invalid_fields(client, seller, seller_headers):
    response = client.post(
        "/books",
        json={"name": "", "price": 0, "customer_id": seller.id},
        headers=seller_headers,
    )
    assert response.status_code == 422
    fields = {e["field"] for e in response.json()["errors"]}
    assert fields == {"name", "price"}


def test_create_book_for_unknown_customer(client, seller_headers):
    response = client.post(
        "/books",
        json={"name": "X", "price": 1.0, "customer_id": 9999},
        headers=seller_headers,
    )
    assert response.status_code == 404
    assert response.json()["internalCode"] == "ML-1102"


def test_list_books_is_public_and_paged(client, create_book):
    for i in range(3):
        create_book(name=f"Book {i}")
    response = client.get("/books", params={"page": 1, "size": 2})
    assert response.status_code == 200
    body = response.json()
    assert [b["name"] for b in body["items"]] == ["Book 2"]
    assert body["current_page"] == 1
    assert body["total_items"] == 3
    assert body["total_pages"] == 2


def test_list_books_default_page(client, create_book):
    create_book()
    body = client.get("/books").json()
    assert body["current_page"] == 0
    assert body["total_items"] == 1


def test_list_books_rejects_bad_paging(client):
    assert client.get("/books", params={"page": -1}).status_code == 422
    assert client.get("/books", params={"size": 0}).status_code == 422


def test_list_active_books(client, create_book, seller_headers):
    active = create_book(name="Active")
    canceled = create_book(name="Canceled")
    assert client.delete(f"/books/{canceled['id']}", headers=seller_headers).status_code == 204
    body = client.get("/books/active").json()
    assert [b["id"] for b in body["items"]] == [active["id"]]
    all_books = client.get("/books").json()
    assert all_books["total_items"] == 2


def test_get_book(client, create_book):
    book = create_book(name="Dom Casmurro")
    response = client.get(f"/books/{book['id']}")
    assert response.status_code == 200
    assert response.json()["name"] == "Dom Casmurro"


def test_get_unknown_book(client):
    response = client.get("/books/9999")
    assert response.status_code == 404
    assert response.json() == {
        "httpCode": 404,
        "message": "Book [9999] doesn't exists",
        "internalCode": "ML-1001",
        "errors": [],
    }


def test_update_book_partially(client, create_book, seller_headers):
    book = create_book(name="Old", price=10.0)
    response = client.put(f"/books/{book['id']}", json={"price": 15.5}, headers=seller_headers)
    assert response.status_code == 204
    updated = client.get(f"/books/{book['id']}").json()
    assert updated["name"] == "Old"
    assert updated["price"] == 15.5


def test_update_book_with_invalid_price(client, create_book, seller_headers):
    book = create_book()
    response = client.put(f"/books/{book['id']}", json={"price": -1}, headers=seller_headers)
    assert response.status_code == 422
    assert response.json()["errors"] == [{"message": "Price must be greater than zero", "field": "price"}]


def test_update_canceled_book_conflicts(client, create_book, seller_headers):
    book = create_book()
    client.delete(f"/books/{book['id']}", headers=seller_headers)
    response = client.put(f"/books/{book['id']}", json={"name": "New"}, headers=seller_headers)
    assert response.status_code == 409
    assert response.json()["internalCode"] == "ML-1002"
    assert response.json()["message"] == "Cannot update book with the status [CANCELED]"


def test_delete_book_cancels(client, create_book, seller_headers):
    book = create_book()
    assert client.delete(f"/books/{book['id']}", headers=seller_headers).status_code == 204
    assert client.get(f"/books/{book['id']}").json()["status"] == BookStatus.CANCELED.value


def test_delete_unknown_book(client, seller_headers):
    response = client.delete("/books/9999", headers=seller_headers)
    assert response.status_code == 404
    assert response.json()["internalCode"] == "ML-1001"
