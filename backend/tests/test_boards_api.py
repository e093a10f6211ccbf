"""
Tests for the /boards and /shared endpoints.
"""

import pytest


@pytest.fixture()
def board(client, auth_headers):
    response = client.post(
        "/boards", json={"name": "Wishlist", "note": "Birthday"}, headers=auth_headers
    )
    assert response.status_code == 201
    return response.json()


def add_product(client, headers, board_id, name="Kindle Paperwhite", price=13999):
    response = client.post(
        f"/boards/{board_id}/products",
        json={"name": name, "current_price": price},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


class TestBoards:
    def test_new_board_is_private(self, board):
        assert board["is_public"] is False
        assert board["share_token"] is None

    def test_blank_name_is_rejected(self, client, auth_headers):
        response = client.post("/boards", json={"name": "  "}, headers=auth_headers)

        assert response.status_code == 422

    def test_list_shows_only_own_boards(self, client, board, other_auth_headers):
        response = client.get("/boards", headers=other_auth_headers)

        assert response.status_code == 200
        assert response.json() == []

    def test_foreign_board_is_not_found(self, client, board, other_auth_headers):
        response = client.get(f"/boards/{board['id']}", headers=other_auth_headers)

        assert response.status_code == 404

    def test_update(self, client, board, auth_headers):
        response = client.patch(
            f"/boards/{board['id']}", json={"name": "Gifts"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Gifts"
        assert response.json()["note"] is None

    def test_delete_twice_succeeds(self, client, board, auth_headers):
        url = f"/boards/{board['id']}"

        assert client.delete(url, headers=auth_headers).json() == {"success": True}
        assert client.delete(url, headers=auth_headers).json() == {"success": True}


class TestSharing:
    def share(self, client, board, headers, is_public=True):
        response = client.post(
            f"/boards/{board['id']}/sharing",
            json={"isPublic": is_public},
            headers=headers,
        )
        assert response.status_code == 200
        return response.json()

    def test_public_board_resolves_by_token_without_auth(
        self, client, board, auth_headers
    ):
        add_product(client, auth_headers, board["id"])
        shared = self.share(client, board, auth_headers)

        response = client.get(f"/shared/{shared['share_token']}")

        assert response.status_code == 200
        body = response.json()
        assert body["board"]["name"] == "Wishlist"
        assert [p["name"] for p in body["products"]] == ["Kindle Paperwhite"]

    def test_token_stops_resolving_when_private(self, client, board, auth_headers):
        token = self.share(client, board, auth_headers)["share_token"]

        unshared = self.share(client, board, auth_headers, is_public=False)

        assert unshared["share_token"] is None
        assert client.get(f"/shared/{token}").status_code == 404

    def test_republishing_issues_new_token(self, client, board, auth_headers):
        first = self.share(client, board, auth_headers)["share_token"]
        self.share(client, board, auth_headers, is_public=False)

        second = self.share(client, board, auth_headers)["share_token"]

        assert second != first
        assert len(second) == 8
        assert client.get(f"/shared/{first}").status_code == 404

    def test_unknown_token_is_not_found(self, client):
        assert client.get("/shared/deadbeef").status_code == 404

    def test_foreign_board_cannot_be_shared(self, client, board, other_auth_headers):
        response = client.post(
            f"/boards/{board['id']}/sharing",
            json={"isPublic": True},
            headers=other_auth_headers,
        )

        assert response.status_code == 404


class TestBoardProducts:
    def test_products_are_newest_first(self, client, board, auth_headers):
        add_product(client, auth_headers, board["id"], name="First")
        add_product(client, auth_headers, board["id"], name="Second")

        response = client.get(f"/boards/{board['id']}/products", headers=auth_headers)

        assert [p["name"] for p in response.json()] == ["Second", "First"]

    def test_product_from_link(self, client, fakes, board, auth_headers):
        response = client.post(
            f"/boards/{board['id']}/products/from-link",
            json={"url": "https://www.amazon.in/dp/B09XS7JWHH"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        product = response.json()
        assert product["name"] == "Sony WH-1000XM5"
        assert product["ai_note"] == fakes.assistant.note
        assert product["links"][0]["url"] == "https://www.amazon.in/dp/B09XS7JWHH"
        assert [e.price for e in fakes.products.prices] == [29990.0]

    def test_insight_of_empty_board_is_rejected(self, client, board, auth_headers):
        response = client.get(f"/boards/{board['id']}/insight", headers=auth_headers)

        assert response.status_code == 422

    def test_insight_uses_board_products(self, client, fakes, board, auth_headers):
        add_product(client, auth_headers, board["id"], name="Kindle", price=13999)

        response = client.get(f"/boards/{board['id']}/insight", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"insight": fakes.assistant.insight}
        assert [p.name for p in fakes.assistant.insight_requests[0]] == ["Kindle"]

    def test_blank_link_is_rejected_without_ai_call(
        self, client, fakes, board, auth_headers
    ):
        response = client.post(
            f"/boards/{board['id']}/products/from-link",
            json={"url": "   "},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert fakes.assistant.extract_requests == []
        assert fakes.products.products == {}
