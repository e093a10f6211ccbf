"""
StoreError - Raised when the persistent store rejects or fails a read/write.
Maps to: HTTP 500 (critical steps only; non-critical steps log and continue)
"""


class StoreError(Exception):
    """Persistence failure reported by a repository implementation."""

    def __init__(self, message: str = "Store operation failed"):
        super().__init__(message)
