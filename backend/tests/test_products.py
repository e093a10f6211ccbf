"""
Tests for products, links and price tracking.
"""

import asyncio
import logging

import pytest

from fakes import never_disconnected, parse_sse, run
from productboards.application.commands.products import (
    RecordPriceCommand,
    RecordPriceHandler,
)
from productboards.application.services import PriceWatch
from productboards.domain.entities.alert_preferences import AlertPreferences
from productboards.domain.exceptions import EntityNotFoundError
from productboards.domain.ports.event_feed import price_channel
from productboards.domain.value_objects.product_link_id import ProductLinkId
from productboards.infrastructure.messaging import NotifyingProductRepository
from productboards.presentation.api.products import price_events


def create_board(client, headers, name="Wishlist"):
    response = client.post("/boards", json={"name": name}, headers=headers)
    assert response.status_code == 201
    return response.json()


@pytest.fixture()
def board(client, auth_headers):
    return create_board(client, auth_headers)


@pytest.fixture()
def product(client, board, auth_headers):
    response = client.post(
        f"/boards/{board['id']}/products",
        json={"name": "Kindle Paperwhite", "current_price": 13999},
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture()
def link(client, product, auth_headers):
    response = client.post(
        f"/products/{product['id']}/links",
        json={
            "url": "https://www.flipkart.com/kindle",
            "retailer": "Flipkart",
            "price": 13499,
        },
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.json()


class TestProductCrud:
    def test_get_joins_links(self, client, product, link, auth_headers):
        response = client.get(f"/products/{product['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert [l["id"] for l in response.json()["links"]] == [link["id"]]

    def test_partial_update_changes_only_given_fields(
        self, client, product, auth_headers
    ):
        response = client.patch(
            f"/products/{product['id']}",
            json={"price_alert_enabled": True, "target_price": 12000},
            headers=auth_headers,
        )

        body = response.json()
        assert response.status_code == 200
        assert body["price_alert_enabled"] is True
        assert body["target_price"] == 12000
        assert body["name"] == "Kindle Paperwhite"
        assert body["current_price"] == 13999

    @pytest.mark.parametrize(
        "changes",
        [
            {"currency": None},
            {"currency": "  "},
            {"price_alert_enabled": None},
            {"current_price": -1},
            {"target_price": -0.5},
        ],
    )
    def test_invalid_update_is_rejected(
        self, client, fakes, product, auth_headers, changes
    ):
        response = client.patch(
            f"/products/{product['id']}", json=changes, headers=auth_headers
        )

        assert response.status_code == 422
        stored = fakes.products.products[product["id"]]
        assert stored.currency == "INR"
        assert stored.current_price == 13999
        assert stored.price_alert_enabled is False

    def test_foreign_product_is_forbidden(self, client, product, other_auth_headers):
        response = client.get(f"/products/{product['id']}", headers=other_auth_headers)

        assert response.status_code == 403

    def test_delete_twice_succeeds(self, client, product, auth_headers):
        url = f"/products/{product['id']}"

        assert client.delete(url, headers=auth_headers).json() == {"success": True}
        assert client.delete(url, headers=auth_headers).json() == {"success": True}
        assert client.get(url, headers=auth_headers).status_code == 404


class TestMoveProduct:
    def test_move_to_own_board(self, client, product, auth_headers):
        target = create_board(client, auth_headers, "Maybe later")

        response = client.post(
            f"/products/{product['id']}/move",
            json={"boardId": target["id"]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["board_id"] == target["id"]
        listed = client.get(f"/boards/{target['id']}/products", headers=auth_headers)
        assert [p["id"] for p in listed.json()] == [product["id"]]

    def test_move_to_foreign_board_is_not_found(
        self, client, fakes, product, auth_headers, other_auth_headers
    ):
        foreign = create_board(client, other_auth_headers, "Theirs")

        response = client.post(
            f"/products/{product['id']}/move",
            json={"boardId": foreign["id"]},
            headers=auth_headers,
        )

        assert response.status_code == 404
        stored = fakes.products.products[product["id"]]
        assert stored.board_id.value == product["board_id"]


class TestPrices:
    def test_adding_link_with_price_records_history(self, client, link, auth_headers):
        response = client.get(f"/product-links/{link['id']}/prices", headers=auth_headers)

        assert response.status_code == 200
        assert [e["price"] for e in response.json()] == [13499]

    def test_record_price_updates_link_and_product(
        self, client, fakes, product, link, auth_headers
    ):
        response = client.post(
            f"/product-links/{link['id']}/prices",
            json={"price": 11999},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["currency"] == "INR"
        stored = client.get(f"/products/{product['id']}", headers=auth_headers).json()
        assert stored["current_price"] == 11999
        assert stored["links"][0]["current_price"] == 11999
        history = client.get(f"/product-links/{link['id']}/prices", headers=auth_headers)
        assert [e["price"] for e in history.json()] == [13499, 11999]

    def test_record_price_is_published(self, client, fakes, link, auth_headers):
        client.post(
            f"/product-links/{link['id']}/prices",
            json={"price": 11999},
            headers=auth_headers,
        )

        published = [p for c, p in fakes.feed.published if c == price_channel(link["id"])]
        assert [p["price"] for p in published] == [13499, 11999]

    def test_negative_price_is_rejected(self, client, link, auth_headers):
        response = client.post(
            f"/product-links/{link['id']}/prices",
            json={"price": -1},
            headers=auth_headers,
        )

        assert response.status_code == 422

    def test_foreign_link_is_forbidden(self, client, link, other_auth_headers):
        response = client.get(
            f"/product-links/{link['id']}/prices", headers=other_auth_headers
        )

        assert response.status_code == 403


class TestPriceWatch:
    def test_watcher_receives_recorded_prices(
        self, client, fakes, guard, link, user_id
    ):
        received = []
        product_repo = NotifyingProductRepository(fakes.products, fakes.feed)
        watch = PriceWatch(guard, fakes.feed)
        handler = RecordPriceHandler(guard, product_repo, fakes.alert_preferences)
        link_id = ProductLinkId(link["id"])

        async def scenario():
            subscription = await watch.subscribe(link_id, user_id, received.append)
            await handler.execute(RecordPriceCommand(link_id, user_id, 10999.0))
            await subscription.release()
            await handler.execute(RecordPriceCommand(link_id, user_id, 9999.0))

        run(scenario())
        assert [e.price for e in received] == [10999.0]
        assert fakes.feed.active_count(price_channel(link["id"])) == 0

    def test_unknown_link_cannot_be_watched(self, fakes, guard, user_id):
        watch = PriceWatch(guard, fakes.feed)

        with pytest.raises(EntityNotFoundError):
            run(watch.subscribe(ProductLinkId.generate(), user_id, print))

    def test_price_stream_delivers_each_recorded_price_once(
        self, client, fakes, guard, link, user_id
    ):
        product_repo = NotifyingProductRepository(fakes.products, fakes.feed)
        watch = PriceWatch(guard, fakes.feed)
        handler = RecordPriceHandler(guard, product_repo, fakes.alert_preferences)
        link_id = ProductLinkId(link["id"])
        channel = price_channel(link["id"])

        async def scenario():
            stream = price_events(watch, link_id, user_id, never_disconnected)
            pending = asyncio.ensure_future(stream.__anext__())
            while fakes.feed.active_count(channel) == 0:
                await asyncio.sleep(0)
            first = await handler.execute(RecordPriceCommand(link_id, user_id, 10999.0))
            first_event = parse_sse(await pending)
            # At-least-once feed: the same entry delivered again is skipped
            await fakes.feed.publish(channel, first.to_payload())
            await handler.execute(RecordPriceCommand(link_id, user_id, 9999.0))
            second_event = parse_sse(await stream.__anext__())
            await stream.aclose()
            return first_event, second_event

        first_event, second_event = run(scenario())
        assert first_event[0] == "price"
        assert first_event[1]["price"] == 10999.0
        assert second_event[1]["price"] == 9999.0
        assert fakes.feed.active_count(channel) == 0

    def test_foreign_link_stream_is_forbidden(self, client, link, other_auth_headers):
        response = client.get(
            f"/product-links/{link['id']}/events", headers=other_auth_headers
        )

        assert response.status_code == 403


class TestProductNote:
    def test_note_for_own_product(self, client, fakes, product, auth_headers):
        response = client.post(
            "/ai/product-note", json={"productId": product["id"]}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "note": fakes.assistant.note}
        assert fakes.assistant.note_requests == [("Kindle Paperwhite", 13999)]

    def test_note_for_foreign_product_is_forbidden_without_ai_call(
        self, client, fakes, product, other_auth_headers
    ):
        response = client.post(
            "/ai/product-note",
            json={"productId": product["id"]},
            headers=other_auth_headers,
        )

        assert response.status_code == 403
        assert fakes.assistant.note_requests == []


class TestPriceAlerts:
    @pytest.fixture()
    def record(self, fakes, guard, link, user_id):
        handler = RecordPriceHandler(
            guard,
            NotifyingProductRepository(fakes.products, fakes.feed),
            fakes.alert_preferences,
        )

        def _record(price):
            return run(
                handler.execute(
                    RecordPriceCommand(ProductLinkId(link["id"]), user_id, price)
                )
            )

        return _record

    def alerts(self, caplog):
        messages = [r.getMessage() for r in caplog.records]
        return [m for m in messages if "[Price alert]" in m]

    def test_drop_beyond_default_threshold_alerts(self, record, caplog):
        caplog.set_level(logging.INFO, logger="productboards")

        record(11000)  # 13499 -> 11000 is an 18.5% drop

        assert len(self.alerts(caplog)) == 1
        assert "price_drop" in self.alerts(caplog)[0]

    def test_drop_below_user_threshold_is_quiet(self, record, fakes, user_id, caplog):
        preferences = AlertPreferences.default(user_id)
        preferences.apply_changes({"price_drop_threshold": 25})
        fakes.alert_preferences.rows[user_id.value] = preferences
        caplog.set_level(logging.INFO, logger="productboards")

        record(11000)

        assert self.alerts(caplog) == []

    def test_email_disabled_silences_drop_alert(self, record, fakes, user_id, caplog):
        preferences = AlertPreferences.default(user_id)
        preferences.apply_changes({"email_enabled": False})
        fakes.alert_preferences.rows[user_id.value] = preferences
        caplog.set_level(logging.INFO, logger="productboards")

        record(5000)

        assert self.alerts(caplog) == []

    def test_target_price_alert(self, record, client, product, auth_headers, caplog):
        client.patch(
            f"/products/{product['id']}",
            json={"price_alert_enabled": True, "target_price": 13000},
            headers=auth_headers,
        )
        caplog.set_level(logging.INFO, logger="productboards")

        record(12999)  # under 4% drop, only the target fires

        assert len(self.alerts(caplog)) == 1
        assert "target_reached" in self.alerts(caplog)[0]

    def test_preferences_outage_still_records_price(self, record, fakes, link):
        fakes.alert_preferences.fail_on.add("get_by_user")

        entry = record(9000)

        assert fakes.products.links[link["id"]].current_price == 9000
        assert entry.price == 9000
