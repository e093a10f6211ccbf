"""
Tests for the /conversations endpoints.

Run with: pytest backend/tests/test_conversations_api.py -v
"""

from datetime import datetime, timedelta, timezone

from jwt_generation import generate_jwt_token
from productboards.domain.entities.conversation import Conversation
from productboards.domain.exceptions import AiFailureReason, AiUnavailableError


def create_conversation(client, headers, title=None):
    body = {"title": title} if title else None
    response = client.post("/conversations", json=body, headers=headers)
    assert response.status_code == 201
    return response.json()


class TestAuthentication:
    def test_missing_token_is_unauthorized(self, client):
        response = client.get("/conversations")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_token_with_wrong_secret_is_unauthorized(self, client):
        token = generate_jwt_token(secret="not-the-secret")
        response = client.get(
            "/conversations", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401

    def test_expired_token_is_unauthorized(self, client):
        token = generate_jwt_token(expires_in=timedelta(seconds=-30))
        response = client.get(
            "/conversations", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Token has expired"


class TestCreateAndList:
    def test_new_conversation_has_default_title(self, client, auth_headers):
        conversation = create_conversation(client, auth_headers)

        assert conversation["title"] == "New Chat"

    def test_list_is_newest_first_with_groups(self, client, fakes, auth_headers, user_id):
        now = datetime.now(timezone.utc)
        old = Conversation.create(user_id, "Old laptops")
        old.updated_at = now - timedelta(days=30)
        fresh = Conversation.create(user_id, "Headphones")
        fakes.conversations.rows[old.id.value] = old
        fakes.conversations.rows[fresh.id.value] = fresh

        response = client.get("/conversations", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert [c["title"] for c in body["conversations"]] == ["Headphones", "Old laptops"]
        assert [g["label"] for g in body["groups"]] == ["Today", "Older"]

    def test_list_only_shows_own_conversations(
        self, client, auth_headers, other_auth_headers
    ):
        create_conversation(client, other_auth_headers, "Not yours")

        response = client.get("/conversations", headers=auth_headers)

        assert response.json()["conversations"] == []

    def test_unknown_time_zone_is_rejected(self, client, auth_headers):
        response = client.get(
            "/conversations", params={"tz": "Mars/Olympus"}, headers=auth_headers
        )

        assert response.status_code == 422


class TestConversationDetail:
    def test_foreign_conversation_is_not_found(
        self, client, auth_headers, other_auth_headers
    ):
        foreign = create_conversation(client, other_auth_headers)

        response = client.get(f"/conversations/{foreign['id']}", headers=auth_headers)

        assert response.status_code == 404

    def test_malformed_id_is_rejected(self, client, auth_headers):
        response = client.get("/conversations/not-a-uuid", headers=auth_headers)

        assert response.status_code == 422

    def test_rename(self, client, auth_headers):
        conversation = create_conversation(client, auth_headers)

        response = client.patch(
            f"/conversations/{conversation['id']}",
            json={"title": "  Gift ideas  "},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Gift ideas"

    def test_rename_to_blank_is_rejected(self, client, auth_headers):
        conversation = create_conversation(client, auth_headers)

        response = client.patch(
            f"/conversations/{conversation['id']}",
            json={"title": "   "},
            headers=auth_headers,
        )

        assert response.status_code == 422

    def test_events_of_foreign_conversation_is_not_found(
        self, client, auth_headers, other_auth_headers
    ):
        foreign = create_conversation(client, other_auth_headers)

        response = client.get(
            f"/conversations/{foreign['id']}/events", headers=auth_headers
        )

        assert response.status_code == 404


class TestDelete:
    def test_delete_twice_succeeds(self, client, auth_headers):
        conversation = create_conversation(client, auth_headers)
        url = f"/conversations/{conversation['id']}"

        first = client.delete(url, headers=auth_headers)
        second = client.delete(url, headers=auth_headers)

        assert first.json() == {"success": True}
        assert second.json() == {"success": True}
        assert client.get(url, headers=auth_headers).status_code == 404

    def test_delete_foreign_conversation_is_forbidden(
        self, client, auth_headers, other_auth_headers
    ):
        foreign = create_conversation(client, other_auth_headers)

        response = client.delete(f"/conversations/{foreign['id']}", headers=auth_headers)

        assert response.status_code == 403


class TestSendMessage:
    def test_send_returns_user_message_and_stores_reply(
        self, client, fakes, auth_headers
    ):
        conversation = create_conversation(client, auth_headers)
        url = f"/conversations/{conversation['id']}/messages"

        response = client.post(
            url, json={"content": "Best phone under 20k?"}, headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json()["role"] == "user"
        messages = client.get(url, headers=auth_headers).json()
        assert [m["role"] for m in messages] == ["user", "assistant"]
        detail = client.get(
            f"/conversations/{conversation['id']}", headers=auth_headers
        ).json()
        assert detail["conversation"]["title"] == "Best phone under 20k?"

    def test_empty_content_is_rejected(self, client, fakes, auth_headers):
        conversation = create_conversation(client, auth_headers)

        response = client.post(
            f"/conversations/{conversation['id']}/messages",
            json={"content": ""},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert fakes.messages.rows == []

    def test_rate_limited_ai_maps_to_429(self, client, fakes, auth_headers):
        conversation = create_conversation(client, auth_headers)
        fakes.assistant.errors.append(
            AiUnavailableError(AiFailureReason.RATE_LIMITED, "Rate limit exceeded")
        )

        response = client.post(
            f"/conversations/{conversation['id']}/messages",
            json={"content": "hello"},
            headers=auth_headers,
        )

        assert response.status_code == 429
        assert response.json() == {"error": "Rate limit exceeded"}

    def test_quota_exhausted_ai_maps_to_402(self, client, fakes, auth_headers):
        conversation = create_conversation(client, auth_headers)
        fakes.assistant.errors.append(AiUnavailableError(AiFailureReason.QUOTA_EXHAUSTED))

        response = client.post(
            f"/conversations/{conversation['id']}/messages",
            json={"content": "hello"},
            headers=auth_headers,
        )

        assert response.status_code == 402

    def test_store_failure_maps_to_500(self, client, fakes, auth_headers):
        conversation = create_conversation(client, auth_headers)
        fakes.messages.fail_on.add("add")

        response = client.post(
            f"/conversations/{conversation['id']}/messages",
            json={"content": "hello"},
            headers=auth_headers,
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Store unavailable"}
