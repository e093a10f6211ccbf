"""
PORTS - Interfaces that infrastructure implements

A "port" is an abstract interface that defines WHAT the application needs,
without specifying HOW it's done.

Subfolders:
- repositories/    → Data persistence interfaces (Prisma implementations)
- (root files)     → Other external collaborators
    - event_feed.py    → insert-notification feed (Redis pub/sub implementation)
    - ai_assistant.py  → AI completion gateway (OpenAI-compatible implementation)
"""
