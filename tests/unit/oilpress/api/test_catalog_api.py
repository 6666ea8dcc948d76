"""API tests for the product, combo and gift routes."""

import pytest

from src.oilpress_admin.entities import collections
from tests.utils import seed_documents

API = "/api/v1"


def _product(**overrides) -> dict:
    data = {
        "product_name": "Groundnut Oil",
        "category": "Cooking",
        "size": "1L",
        "actual_mrp": 140,
        "discount": 15,
    }
    data.update(overrides)
    return data


def _create(client, path: str = "/products/", **overrides) -> dict:
    response = client.post(f"{API}{path}", json=_product(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


class TestProductCrud:
    """Create, read, update and delete products."""

    def test_create_derives_selling_price(self, client):
        created = _create(client)

        assert created["selling_mrp"] == 119
        assert created["status"] == "Active"
        assert created["id"]

    def test_client_supplied_identity_is_ignored(self, client):
        created = _create(client, id="chosen-by-client")
        assert created["id"] != "chosen-by-client"

    def test_get_by_id(self, client):
        created = _create(client)

        response = client.get(f"{API}/products/{created['id']}")
        assert response.status_code == 200
        assert response.json()["product_name"] == "Groundnut Oil"

    def test_get_missing(self, client):
        response = client.get(f"{API}/products/missing")
        assert response.status_code == 404
        assert response.json()["detail"] == "Product not found"

    def test_missing_required_field(self, client):
        response = client.post(f"{API}/products/", json=_product(product_name=""))
        assert response.status_code == 422

    def test_discount_over_hundred_rejected(self, client):
        response = client.post(f"{API}/products/", json=_product(discount=150))
        assert response.status_code == 422

    def test_selling_price_above_actual_rejected(self, client):
        response = client.post(
            f"{API}/products/", json=_product(discount=None, actual_mrp=100, selling_mrp=110)
        )
        assert response.status_code == 422
        assert client.get(f"{API}/products/").json()["total"] == 0

    def test_selling_price_without_actual_price_rejected(self, client):
        response = client.post(
            f"{API}/products/", json=_product(discount=None, actual_mrp=0, selling_mrp=50)
        )
        assert response.status_code == 422

    def test_update_recomputes_selling_price(self, client):
        created = _create(client)

        response = client.put(f"{API}/products/{created['id']}", json={"discount": 20})
        assert response.status_code == 200
        body = response.json()
        assert body["selling_mrp"] == 112
        assert body["product_name"] == "Groundnut Oil"

    def test_update_invalid(self, client):
        created = _create(client)
        response = client.put(f"{API}/products/{created['id']}", json={"discount": 150})
        assert response.status_code == 422

    def test_update_missing(self, client):
        response = client.put(f"{API}/products/missing", json={"discount": 5})
        assert response.status_code == 404

    def test_delete(self, client):
        created = _create(client)

        response = client.delete(f"{API}/products/{created['id']}")
        assert response.status_code == 200
        assert response.json() == {"message": "Product deleted successfully"}
        assert client.get(f"{API}/products/{created['id']}").status_code == 404
        assert client.delete(f"{API}/products/{created['id']}").status_code == 404


class TestProductListing:
    """Search, filters and pagination on the product list."""

    @pytest.fixture
    def seeded(self, client):
        _create(client, product_name="Groundnut Oil", category="Cooking")
        _create(client, product_name="Mustard Oil", category="Cooking", size="500ml")
        _create(client, product_name="Almond Oil", category="Personal Care", status="Inactive")
        return client

    def test_lists_everything_by_default(self, seeded):
        body = seeded.get(f"{API}/products/").json()
        assert body["total"] == 3
        assert body["page"] == 1
        assert len(body["items"]) == 3

    def test_search_is_case_insensitive(self, seeded):
        body = seeded.get(f"{API}/products/", params={"search": "MUSTARD"}).json()
        assert [p["product_name"] for p in body["items"]] == ["Mustard Oil"]

    def test_filter_by_category(self, seeded):
        body = seeded.get(f"{API}/products/", params={"category": "personal care"}).json()
        assert [p["product_name"] for p in body["items"]] == ["Almond Oil"]

    def test_filter_by_status(self, seeded):
        body = seeded.get(f"{API}/products/", params={"status": "Active"}).json()
        assert body["total"] == 2

    def test_pagination(self, seeded):
        first = seeded.get(f"{API}/products/", params={"page_size": 2}).json()
        second = seeded.get(f"{API}/products/", params={"page_size": 2, "page": 2}).json()

        assert first["total_pages"] == 2
        assert len(first["items"]) == 2
        assert (first["first_index"], first["last_index"]) == (1, 2)
        assert len(second["items"]) == 1
        assert (second["first_index"], second["last_index"]) == (3, 3)

    def test_page_past_the_end_is_empty(self, seeded):
        body = seeded.get(f"{API}/products/", params={"page": 9}).json()
        assert body["items"] == []
        assert body["first_index"] == 0

    def test_page_size_is_capped(self, seeded):
        body = seeded.get(f"{API}/products/", params={"page_size": 5000}).json()
        assert body["page_size"] == 100

    def test_invalid_page(self, seeded):
        assert seeded.get(f"{API}/products/", params={"page": 0}).status_code == 422


class TestCombosAndGifts:
    def test_combo_product(self, client):
        combo = _create(
            client,
            "/combo-products/",
            product_name="Healthy Oils Combo",
            category="Combo",
            actual_mrp=420,
            discount=14,
            included_product_ids=["a", "b"],
        )
        assert combo["selling_mrp"] == 361
        assert combo["included_product_ids"] == ["a", "b"]

    def test_gift_product(self, client):
        response = client.post(
            f"{API}/gift-products/",
            json={"product_name": "Festive Box", "actual_mrp": 999, "discount": 20, "contents": "2 oils"},
        )
        assert response.status_code == 201
        assert response.json()["selling_mrp"] == 799

    def test_gallery_limit(self, client):
        images = [f"https://img/{i}.jpg" for i in range(6)]
        response = client.post(f"{API}/gift-products/", json={"product_name": "Box", "other_images": images})
        assert response.status_code == 422


class TestStoredRecords:
    """Documents written by the old dashboard are served as stored."""

    @pytest.fixture
    def legacy_product(self, db_service):
        seed_documents(
            db_service,
            collections.PRODUCTS,
            {
                "id": "legacy-1",
                "productName": "Sesame Oil",
                "category": "Cooking",
                "size": "1L",
                "actualMRP": 1000,
                "sellingMRP": 876,
            },
        )
        return "legacy-1"

    def test_get_keeps_stored_selling_price(self, client, legacy_product):
        body = client.get(f"{API}/products/{legacy_product}").json()
        assert body["selling_mrp"] == 876
        assert body["discount"] is None
        assert body["effective_discount"] == 12

    def test_list_keeps_stored_selling_price(self, client, legacy_product):
        body = client.get(f"{API}/products/").json()
        assert [p["selling_mrp"] for p in body["items"]] == [876]

    def test_unrelated_update_keeps_stored_selling_price(self, client, legacy_product):
        response = client.put(f"{API}/products/{legacy_product}", json={"status": "Inactive"})
        assert response.status_code == 200
        assert response.json()["selling_mrp"] == 876
        assert client.get(f"{API}/products/{legacy_product}").json()["selling_mrp"] == 876

    def test_setting_a_discount_reprices(self, client, legacy_product):
        response = client.put(f"{API}/products/{legacy_product}", json={"discount": 10})
        assert response.json()["selling_mrp"] == 900

    def test_old_gift_shape_is_listed(self, client, db_service):
        seed_documents(
            db_service,
            collections.GIFT_PRODUCTS,
            {"category": "Diwali Box", "mrp": 500, "discount": 10, "sellingMRP": 450},
        )
        body = client.get(f"{API}/gift-products/").json()

        assert body["total"] == 1
        gift = body["items"][0]
        assert gift["product_name"] == "Diwali Box"
        assert gift["actual_mrp"] == 500
        assert gift["selling_mrp"] == 450

    def test_unreadable_document_does_not_break_the_list(self, client, db_service, legacy_product):
        seed_documents(db_service, collections.PRODUCTS, {"category": "Cooking", "sellingMRP": "n/a"})
        response = client.get(f"{API}/products/")
        assert response.status_code == 200
        assert [p["id"] for p in response.json()["items"]] == [legacy_product]

    def test_unreadable_document_by_id(self, client, db_service):
        seed_documents(db_service, collections.PRODUCTS, {"id": "broken", "category": "Cooking"})
        response = client.get(f"{API}/products/broken")
        assert response.status_code == 422
        assert any(error["loc"][-1] == "product_name" for error in response.json()["detail"])
