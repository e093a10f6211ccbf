"""
Product prompts: URL extraction, short notes and board insights.
"""

from typing import Optional

RUPEE = "₹"


def _price_suffix(price: Optional[float], template: str) -> str:
    if not price:
        return ""
    amount = int(price) if float(price).is_integer() else price
    return template.format(price=f"{RUPEE}{amount}")


class ProductPrompts:
    """Prompts for product-related AI calls."""

    EXTRACT_SYSTEM = """You extract product information from URLs. Return JSON only with these fields:
- name: product name (string)
- price: numeric price without currency symbols (number or null)
- currency: currency code like INR, USD (string, default INR)
- image_url: product image URL if found (string or null)
- retailer: retailer name like Amazon, Flipkart (string or null)

Example: {"name": "Sony WH-1000XM5", "price": 29990, "currency": "INR", "image_url": null, "retailer": "Amazon"}"""

    EXTRACT_TOOL_NAME = "extract_product"

    EXTRACT_TOOL = {
        "type": "function",
        "function": {
            "name": EXTRACT_TOOL_NAME,
            "description": "Extract product details from URL",
            "parameters": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "price": {"type": "number"},
                    "currency": {"type": "string"},
                    "image_url": {"type": "string"},
                    "retailer": {"type": "string"},
                },
                "required": ["name"],
            },
        },
    }

    NOTE_SYSTEM = (
        "Generate a very brief (max 10 words), neutral product note. "
        "Focus on practical value."
    )

    INSIGHT_SYSTEM = (
        "You provide brief, helpful shopping insights. Be concise (1-2 sentences max). "
        "Focus on practical advice about timing, value, or alternatives."
    )

    @staticmethod
    def extract_user(url: str) -> str:
        return f"Extract product info from this URL: {url}"

    @staticmethod
    def note_user(name: str, price: Optional[float] = None) -> str:
        return f"Product: {name}{_price_suffix(price, ' at {price}')}"

    @staticmethod
    def insight_user(products: list[tuple[str, Optional[float]]]) -> str:
        """
        Args:
            products: (name, price) pairs in board order
        """
        lines = "\n".join(
            f"- {name}{_price_suffix(price, ' ({price})')}" for name, price in products
        )
        return f"Give a brief insight about this shopping board:\n{lines}"
