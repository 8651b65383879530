"""
API tests for /api/v1/items

Services are wired to MagicMock repositories through dependency overrides,
so no database is needed.
"""
import pytest
from fastapi.testclient import TestClient

from little_shop.api.dependencies import get_item_service
from little_shop.main import app
from little_shop.services.item_service import ItemService


@pytest.fixture
def client(item_repo, merchant_repo):
    app.dependency_overrides[get_item_service] = lambda: ItemService(items=item_repo, merchants=merchant_repo)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestListItems:

    def test_returns_items(self, client, item_repo, grocery_items):
        item_repo.find_all.return_value = grocery_items

        response = client.get("/api/v1/items")
        json = response.json()

        assert response.status_code == 200
        assert len(json['data']) == 3
        first = json['data'][0]
        assert first['id'] == "1"
        assert first['type'] == "item"
        assert set(first['attributes']) == {'name', 'description', 'unit_price', 'merchant_id'}

    def test_sorted_by_price(self, client, item_repo, grocery_items):
        item_repo.find_all.return_value = grocery_items

        response = client.get("/api/v1/items?sorted=price")

        names = [item['attributes']['name'] for item in response.json()['data']]
        assert names == ["oreos", "grapes", "bananas"]

    def test_unknown_sort_is_bad_request(self, client):
        response = client.get("/api/v1/items?sorted=color")
        assert response.status_code == 400


class TestGetItem:

    def test_returns_item(self, client, item_repo, make_item):
        item_repo.find_by_id.return_value = make_item(4, name="toothpaste", unit_price="45.55")

        response = client.get("/api/v1/items/4")
        json = response.json()

        assert response.status_code == 200
        assert json['data']['id'] == "4"
        assert json['data']['attributes']['unit_price'] == 45.55

    def test_not_found(self, client, item_repo):
        item_repo.find_by_id.return_value = None

        response = client.get("/api/v1/items/100000")
        json = response.json()

        assert response.status_code == 404
        assert json['message'] == "Your query could not be completed"
        assert json['errors'] == ["Couldn't find Item with 'id'=100000"]


class TestFindItems:

    def test_find_by_name(self, client, item_repo, grocery_items):
        item_repo.find_all.return_value = grocery_items

        response = client.get("/api/v1/items/find", params={"name": "GRA"})

        assert response.status_code == 200
        assert response.json()['data']['attributes']['name'] == "grapes"

    def test_find_by_price_range(self, client, item_repo, grocery_items):
        item_repo.find_all.return_value = grocery_items

        response = client.get("/api/v1/items/find", params={"min_price": "1.0", "max_price": "2"})

        assert response.json()['data']['attributes']['name'] == "oreos"

    def test_find_without_match_is_not_found(self, client, item_repo, grocery_items):
        item_repo.find_all.return_value = grocery_items

        response = client.get("/api/v1/items/find", params={"min_price": "500"})

        assert response.status_code == 404

    def test_find_all_by_price(self, client, item_repo, grocery_items):
        item_repo.find_all.return_value = grocery_items

        response = client.get("/api/v1/items/find_all", params={"max_price": "5"})

        names = [item['attributes']['name'] for item in response.json()['data']]
        assert names == ["oreos", "grapes"]

    def test_find_all_without_match_is_empty(self, client, item_repo, grocery_items):
        item_repo.find_all.return_value = grocery_items

        response = client.get("/api/v1/items/find_all", params={"name": "nonexistent"})

        assert response.status_code == 200
        assert response.json()['data'] == []

    def test_name_and_price_together_is_bad_request(self, client):
        response = client.get("/api/v1/items/find_all", params={"name": "ring", "min_price": "5"})

        assert response.status_code == 400
        assert response.json()['errors'] == ["Cannot send both name and price"]

    def test_non_numeric_price_is_bad_request(self, client):
        response = client.get("/api/v1/items/find", params={"min_price": "cheap"})
        assert response.status_code == 400


class TestCreateItem:

    def test_creates_item_and_ignores_extra_fields(self, client, item_repo, make_item):
        item_repo.create.return_value = make_item(9, name="name", unit_price="354.35", description="desc")
        body = {
            "name": "name",
            "description": "desc",
            "unit_price": 354.35,
            "extra_field": "malicious stuff",
            "merchant_id": 1
        }

        response = client.post("/api/v1/items", json=body)
        json = response.json()

        assert response.status_code == 201
        assert 'extra_field' not in json['data']['attributes']
        created = item_repo.create.call_args[0][0]
        assert not hasattr(created, 'extra_field')

    def test_missing_price_is_unprocessable(self, client, item_repo):
        body = {"name": "name", "description": "desc", "merchant_id": 1}

        response = client.post("/api/v1/items", json=body)

        assert response.status_code == 422
        assert response.json()['errors'] == ["Validation failed: Unit price can't be blank, Unit price is not a number"]
        item_repo.create.assert_not_called()

    def test_non_numeric_price_is_unprocessable(self, client, item_repo):
        body = {"name": "name", "description": "desc", "unit_price": "lots", "merchant_id": 1}

        response = client.post("/api/v1/items", json=body)

        assert response.status_code == 422
        assert response.json()['errors'][0].startswith("unit_price")
        item_repo.create.assert_not_called()


class TestUpdateItem:

    def test_updates_supplied_field(self, client, item_repo, make_item):
        item_repo.find_by_id.return_value = make_item(1)
        item_repo.update.return_value = make_item(1, name="stamps")

        response = client.patch("/api/v1/items/1", json={"name": "stamps"})

        assert response.status_code == 200
        assert response.json()['data']['attributes']['name'] == "stamps"
        item_repo.update.assert_called_once_with(1, {'name': "stamps"})

    def test_invalid_merchant_is_not_found(self, client, item_repo, merchant_repo, make_item):
        item_repo.find_by_id.return_value = make_item(1)
        merchant_repo.exists.return_value = False

        response = client.patch("/api/v1/items/1", json={"name": "Updated Item", "merchant_id": 99999})

        assert response.status_code == 404
        assert "Invalid merchant" in response.json()['errors']

    def test_unknown_item_is_not_found(self, client, item_repo):
        item_repo.find_by_id.return_value = None

        response = client.patch("/api/v1/items/235", json={"name": "new name"})

        assert response.status_code == 404
        assert response.json()['errors'][0] == "Couldn't find Item with 'id'=235"


class TestDeleteItem:

    def test_deletes(self, client, item_repo):
        item_repo.delete.return_value = True

        response = client.delete("/api/v1/items/3")

        assert response.status_code == 204

    def test_unknown_item_is_not_found(self, client, item_repo):
        item_repo.delete.return_value = False

        response = client.delete("/api/v1/items/678")

        assert response.status_code == 404
        assert response.json()['errors'][0] == "Couldn't find Item with 'id'=678"
