"""
Dishka providers.

- providers.py → ApplicationProvider (handlers and services; ports only)
- container.py → InfrastructureProvider (Prisma, Redis, AI client) and create_container()
"""
