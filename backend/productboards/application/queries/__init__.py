"""
Queries - read-only use cases.

- chat/          → GetChatHistory, CompleteChat
- conversations/ → ListConversations
- boards/        → ListBoards, GetBoard, GetSharedBoard, BoardInsight, ExtractProduct
- products/      → ListProducts, GetProduct, GetPriceHistory
- alerts/        → GetAlertPreferences
"""
