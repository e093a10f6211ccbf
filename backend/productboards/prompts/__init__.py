"""
Centralized prompt management for the AI gateway calls.

- chat.py     → assistant persona for conversations
- products.py → product extraction, product notes and board insights
"""

from productboards.prompts.chat import ChatPrompts
from productboards.prompts.products import ProductPrompts

__all__ = [
    "ChatPrompts",
    "ProductPrompts",
]
