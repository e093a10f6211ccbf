import os

# Config reads the environment at import time
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret")
os.environ.setdefault("AUTH_JWT_AUDIENCE", "authenticated")
os.environ.setdefault("APP_ENV", "testing")

import pytest
from dishka import Provider, Scope, make_async_container, provide
from fastapi.testclient import TestClient

from fakes import Fakes
from jwt_generation import DEFAULT_USER_ID, OTHER_USER_ID, generate_jwt_token
from productboards.application.services import MessageStore, OwnershipGuard
from productboards.domain.entities.conversation import Conversation
from productboards.domain.ports.ai_assistant import AiAssistant
from productboards.domain.ports.event_feed import EventFeed
from productboards.domain.ports.repositories import (
    AlertPreferencesRepository,
    BoardRepository,
    ConversationRepository,
    MessageRepository,
    ProductRepository,
)
from productboards.domain.value_objects.user_id import UserId
from productboards.fastapi_app import create_fastapi_app
from productboards.infrastructure.messaging import (
    NotifyingMessageRepository,
    NotifyingProductRepository,
)
from productboards.setup.ioc.providers import ApplicationProvider


class FakeInfrastructureProvider(Provider):
    """In-memory stand-ins for the adapters of InfrastructureProvider."""

    def __init__(self, fakes: Fakes):
        super().__init__()
        self.fakes = fakes

    @provide(scope=Scope.APP)
    def get_event_feed(self) -> EventFeed:
        return self.fakes.feed

    @provide(scope=Scope.APP)
    def get_ai_assistant(self) -> AiAssistant:
        return self.fakes.assistant

    @provide(scope=Scope.APP)
    def get_conversation_repository(self) -> ConversationRepository:
        return self.fakes.conversations

    @provide(scope=Scope.APP)
    def get_message_repository(self) -> MessageRepository:
        return NotifyingMessageRepository(self.fakes.messages, self.fakes.feed)

    @provide(scope=Scope.APP)
    def get_board_repository(self) -> BoardRepository:
        return self.fakes.boards

    @provide(scope=Scope.APP)
    def get_product_repository(self) -> ProductRepository:
        return NotifyingProductRepository(self.fakes.products, self.fakes.feed)

    @provide(scope=Scope.APP)
    def get_alert_preferences_repository(self) -> AlertPreferencesRepository:
        return self.fakes.alert_preferences


@pytest.fixture()
def fakes():
    return Fakes()


@pytest.fixture()
def user_id():
    return UserId(DEFAULT_USER_ID)


@pytest.fixture()
def other_user_id():
    return UserId(OTHER_USER_ID)


@pytest.fixture()
def guard(fakes):
    return OwnershipGuard(fakes.conversations, fakes.boards, fakes.products)


@pytest.fixture()
def message_store(fakes, guard):
    return MessageStore(
        guard, NotifyingMessageRepository(fakes.messages, fakes.feed), fakes.feed
    )


@pytest.fixture()
def conversation(fakes, user_id):
    """A stored, empty conversation owned by the default user."""
    conversation = Conversation.create(user_id)
    fakes.conversations.rows[conversation.id.value] = conversation
    return conversation


@pytest.fixture()
def app(fakes):
    """FastAPI app wired to in-memory adapters."""
    container = make_async_container(
        FakeInfrastructureProvider(fakes), ApplicationProvider()
    )
    return create_fastapi_app(container)


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture()
def auth_headers():
    """Authentication headers with valid JWT token."""
    return {"Authorization": f"Bearer {generate_jwt_token()}"}


@pytest.fixture()
def other_auth_headers():
    return {"Authorization": f"Bearer {generate_jwt_token(OTHER_USER_ID)}"}
