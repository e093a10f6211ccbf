"""
APPLICATION LAYER - Use Cases & Orchestration

This layer contains:
- commands/  → Write operations (send pipeline, conversation/board/product changes)
- queries/   → Read operations (history, lists, shared boards, AI insights)
- services/  → Authorization gate, message store adapter, live message list
- dto/       → Data Transfer Objects
- common/    → Shared interfaces (Command, Query base classes)

Rules:
- Depends on Domain layer only
- No HTTP/framework code here
"""
