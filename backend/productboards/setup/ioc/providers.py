"""
Application Provider - handlers and application services.

Depends only on domain ports (repositories, EventFeed, AiAssistant); whoever
builds the container supplies the implementations: InfrastructureProvider in
production, in-memory fakes in tests.

Dishka concepts:
- @provide: Decorator to mark factory methods
- Scope.APP = created once per container, Scope.REQUEST = per HTTP request
"""

from dishka import Provider, Scope, provide

from productboards.application.commands.alerts import UpdateAlertPreferencesHandler
from productboards.application.commands.boards import (
    CreateBoardHandler,
    DeleteBoardHandler,
    ToggleBoardSharingHandler,
    UpdateBoardHandler,
)
from productboards.application.commands.chat import SendMessageHandler
from productboards.application.commands.conversations import (
    CreateConversationHandler,
    DeleteConversationHandler,
    RenameConversationHandler,
)
from productboards.application.commands.products import (
    AddProductFromLinkHandler,
    AddProductLinkHandler,
    CreateProductHandler,
    DeleteProductHandler,
    GenerateProductNoteHandler,
    MoveProductHandler,
    RecordPriceHandler,
    UpdateProductHandler,
)
from productboards.application.queries.alerts import GetAlertPreferencesHandler
from productboards.application.queries.boards import (
    BoardInsightHandler,
    ExtractProductHandler,
    GetBoardHandler,
    GetSharedBoardHandler,
    ListBoardsHandler,
    StoredBoardInsightHandler,
)
from productboards.application.queries.chat import (
    CompleteChatHandler,
    GetChatHistoryHandler,
)
from productboards.application.queries.conversations import ListConversationsHandler
from productboards.application.queries.products import (
    GetPriceHistoryHandler,
    GetProductHandler,
    ListProductsHandler,
)
from productboards.application.services import MessageStore, OwnershipGuard, PriceWatch
from productboards.domain.ports.ai_assistant import AiAssistant
from productboards.domain.ports.event_feed import EventFeed
from productboards.domain.ports.repositories import (
    AlertPreferencesRepository,
    BoardRepository,
    ConversationRepository,
    MessageRepository,
    ProductRepository,
)


class ApplicationProvider(Provider):
    """Registers every handler and service with its port dependencies."""

    # ==================== SERVICES ====================

    @provide(scope=Scope.REQUEST)
    def get_ownership_guard(
        self,
        conversation_repository: ConversationRepository,
        board_repository: BoardRepository,
        product_repository: ProductRepository,
    ) -> OwnershipGuard:
        return OwnershipGuard(
            conv_repo=conversation_repository,
            board_repo=board_repository,
            product_repo=product_repository,
        )

    @provide(scope=Scope.REQUEST)
    def get_message_store(
        self,
        guard: OwnershipGuard,
        message_repository: MessageRepository,
        feed: EventFeed,
    ) -> MessageStore:
        return MessageStore(guard=guard, msg_repo=message_repository, feed=feed)

    @provide(scope=Scope.REQUEST)
    def get_price_watch(self, guard: OwnershipGuard, feed: EventFeed) -> PriceWatch:
        return PriceWatch(guard=guard, feed=feed)

    # ==================== CHAT ====================

    @provide(scope=Scope.REQUEST)
    def get_send_message_handler(
        self,
        guard: OwnershipGuard,
        conversation_repository: ConversationRepository,
        message_store: MessageStore,
        assistant: AiAssistant,
    ) -> SendMessageHandler:
        return SendMessageHandler(
            guard=guard,
            conv_repo=conversation_repository,
            message_store=message_store,
            assistant=assistant,
        )

    @provide(scope=Scope.REQUEST)
    def get_chat_history_handler(
        self, guard: OwnershipGuard, message_store: MessageStore
    ) -> GetChatHistoryHandler:
        return GetChatHistoryHandler(guard, message_store)

    @provide(scope=Scope.REQUEST)
    def get_complete_chat_handler(self, assistant: AiAssistant) -> CompleteChatHandler:
        return CompleteChatHandler(assistant)

    # ==================== CONVERSATIONS ====================

    @provide(scope=Scope.REQUEST)
    def get_create_conversation_handler(
        self, conversation_repository: ConversationRepository
    ) -> CreateConversationHandler:
        return CreateConversationHandler(conversation_repository)

    @provide(scope=Scope.REQUEST)
    def get_delete_conversation_handler(
        self, conversation_repository: ConversationRepository
    ) -> DeleteConversationHandler:
        return DeleteConversationHandler(conversation_repository)

    @provide(scope=Scope.REQUEST)
    def get_rename_conversation_handler(
        self, guard: OwnershipGuard, conversation_repository: ConversationRepository
    ) -> RenameConversationHandler:
        return RenameConversationHandler(guard, conversation_repository)

    @provide(scope=Scope.REQUEST)
    def get_list_conversations_handler(
        self, conversation_repository: ConversationRepository
    ) -> ListConversationsHandler:
        return ListConversationsHandler(conversation_repository)

    # ==================== BOARDS ====================

    @provide(scope=Scope.REQUEST)
    def get_create_board_handler(
        self, board_repository: BoardRepository
    ) -> CreateBoardHandler:
        return CreateBoardHandler(board_repository)

    @provide(scope=Scope.REQUEST)
    def get_update_board_handler(
        self, guard: OwnershipGuard, board_repository: BoardRepository
    ) -> UpdateBoardHandler:
        return UpdateBoardHandler(guard, board_repository)

    @provide(scope=Scope.REQUEST)
    def get_delete_board_handler(
        self, board_repository: BoardRepository
    ) -> DeleteBoardHandler:
        return DeleteBoardHandler(board_repository)

    @provide(scope=Scope.REQUEST)
    def get_toggle_sharing_handler(
        self, guard: OwnershipGuard, board_repository: BoardRepository
    ) -> ToggleBoardSharingHandler:
        return ToggleBoardSharingHandler(guard, board_repository)

    @provide(scope=Scope.REQUEST)
    def get_list_boards_handler(self, board_repository: BoardRepository) -> ListBoardsHandler:
        return ListBoardsHandler(board_repository)

    @provide(scope=Scope.REQUEST)
    def get_board_handler(self, guard: OwnershipGuard) -> GetBoardHandler:
        return GetBoardHandler(guard)

    @provide(scope=Scope.REQUEST)
    def get_shared_board_handler(
        self, board_repository: BoardRepository, product_repository: ProductRepository
    ) -> GetSharedBoardHandler:
        return GetSharedBoardHandler(board_repository, product_repository)

    @provide(scope=Scope.REQUEST)
    def get_board_insight_handler(self, assistant: AiAssistant) -> BoardInsightHandler:
        return BoardInsightHandler(assistant)

    @provide(scope=Scope.REQUEST)
    def get_stored_board_insight_handler(
        self,
        guard: OwnershipGuard,
        product_repository: ProductRepository,
        insight_handler: BoardInsightHandler,
    ) -> StoredBoardInsightHandler:
        return StoredBoardInsightHandler(guard, product_repository, insight_handler)

    @provide(scope=Scope.REQUEST)
    def get_extract_product_handler(
        self, assistant: AiAssistant
    ) -> ExtractProductHandler:
        return ExtractProductHandler(assistant)

    # ==================== PRODUCTS ====================

    @provide(scope=Scope.REQUEST)
    def get_list_products_handler(
        self, guard: OwnershipGuard, product_repository: ProductRepository
    ) -> ListProductsHandler:
        return ListProductsHandler(guard, product_repository)

    @provide(scope=Scope.REQUEST)
    def get_product_handler(self, guard: OwnershipGuard) -> GetProductHandler:
        return GetProductHandler(guard)

    @provide(scope=Scope.REQUEST)
    def get_price_history_handler(
        self, guard: OwnershipGuard, product_repository: ProductRepository
    ) -> GetPriceHistoryHandler:
        return GetPriceHistoryHandler(guard, product_repository)

    @provide(scope=Scope.REQUEST)
    def get_create_product_handler(
        self, guard: OwnershipGuard, product_repository: ProductRepository
    ) -> CreateProductHandler:
        return CreateProductHandler(guard, product_repository)

    @provide(scope=Scope.REQUEST)
    def get_update_product_handler(
        self, guard: OwnershipGuard, product_repository: ProductRepository
    ) -> UpdateProductHandler:
        return UpdateProductHandler(guard, product_repository)

    @provide(scope=Scope.REQUEST)
    def get_delete_product_handler(
        self, product_repository: ProductRepository
    ) -> DeleteProductHandler:
        return DeleteProductHandler(product_repository)

    @provide(scope=Scope.REQUEST)
    def get_move_product_handler(
        self, guard: OwnershipGuard, product_repository: ProductRepository
    ) -> MoveProductHandler:
        return MoveProductHandler(guard, product_repository)

    @provide(scope=Scope.REQUEST)
    def get_add_product_link_handler(
        self, guard: OwnershipGuard, product_repository: ProductRepository
    ) -> AddProductLinkHandler:
        return AddProductLinkHandler(guard, product_repository)

    @provide(scope=Scope.REQUEST)
    def get_record_price_handler(
        self,
        guard: OwnershipGuard,
        product_repository: ProductRepository,
        preferences_repository: AlertPreferencesRepository,
    ) -> RecordPriceHandler:
        return RecordPriceHandler(guard, product_repository, preferences_repository)

    @provide(scope=Scope.REQUEST)
    def get_generate_product_note_handler(
        self,
        guard: OwnershipGuard,
        product_repository: ProductRepository,
        assistant: AiAssistant,
    ) -> GenerateProductNoteHandler:
        return GenerateProductNoteHandler(guard, product_repository, assistant)

    @provide(scope=Scope.REQUEST)
    def get_add_product_from_link_handler(
        self,
        guard: OwnershipGuard,
        product_repository: ProductRepository,
        assistant: AiAssistant,
        note_handler: GenerateProductNoteHandler,
    ) -> AddProductFromLinkHandler:
        return AddProductFromLinkHandler(
            guard, product_repository, assistant, note_handler
        )

    # ==================== ALERT PREFERENCES ====================

    @provide(scope=Scope.REQUEST)
    def get_alert_preferences_handler(
        self, preferences_repository: AlertPreferencesRepository
    ) -> GetAlertPreferencesHandler:
        return GetAlertPreferencesHandler(preferences_repository)

    @provide(scope=Scope.REQUEST)
    def get_update_alert_preferences_handler(
        self, preferences_repository: AlertPreferencesRepository
    ) -> UpdateAlertPreferencesHandler:
        return UpdateAlertPreferencesHandler(preferences_repository)
