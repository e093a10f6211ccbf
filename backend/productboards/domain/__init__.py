"""
DOMAIN LAYER - Conversations, messages, boards and tracked products

This layer contains:
- Entities: Business objects with identity (Conversation, Message, Board, Product)
- Value Objects: Immutable identifiers (UserId, ConversationId, BoardId, ...)
- Ports: Interfaces that infrastructure implements (repositories, event feed, AI)
- Services: Pure domain logic (message timeline, recency buckets, transcripts)
- Exceptions: Domain-specific errors

RULES:
1. NO framework imports (no FastAPI, Prisma, Pydantic, etc.)
2. NO I/O operations
3. Only depends on Python stdlib
"""
