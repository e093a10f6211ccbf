"""
Infrastructure Layer - adapters for the domain ports.

- persistence/ → Prisma repositories (PostgreSQL)
- messaging/   → Redis pub/sub insert feed, feed-publishing repository decorators
- ai/          → OpenAI-compatible AI gateway client
"""
