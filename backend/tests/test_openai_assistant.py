"""
Tests for the OpenAI-compatible gateway adapter.

The gateway is replaced by an httpx.MockTransport, so the real AsyncOpenAI
client builds and parses every request.
"""

import json

import httpx
import pytest
from openai import AsyncOpenAI

from fakes import run
from productboards.domain.exceptions import AiFailureReason, AiUnavailableError
from productboards.domain.ports.ai_assistant import ProductSummary
from productboards.infrastructure.ai import OpenAiAssistant
from productboards.infrastructure.ai.openai_assistant import parse_extracted_product
from productboards.prompts import ChatPrompts, ProductPrompts


def completion(message: dict) -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "google/gemini-2.5-flash",
        "choices": [{"index": 0, "message": message, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 12, "completion_tokens": 8, "total_tokens": 20},
    }


class Gateway:
    """Records request bodies and answers with a fixed status and body."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body or completion({"role": "assistant", "content": "Hello!"})
        self.requests: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        return httpx.Response(self.status_code, json=self.body)

    def assistant(self) -> OpenAiAssistant:
        client = AsyncOpenAI(
            api_key="test-key",
            base_url="https://gateway.test/v1",
            max_retries=0,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(self)),
        )
        return OpenAiAssistant(client, model="google/gemini-2.5-flash")


class TestReply:
    def test_reply_prepends_system_prompt(self):
        gateway = Gateway()

        reply = run(gateway.assistant().reply([{"role": "user", "content": "Hi"}]))

        assert reply.content == "Hello!"
        sent = gateway.requests[0]
        assert sent["model"] == "google/gemini-2.5-flash"
        assert sent["messages"][0] == {"role": "system", "content": ChatPrompts.SYSTEM}
        assert sent["messages"][1:] == [{"role": "user", "content": "Hi"}]

    def test_empty_content_is_malformed(self):
        gateway = Gateway(body=completion({"role": "assistant", "content": "  "}))

        with pytest.raises(AiUnavailableError) as exc_info:
            run(gateway.assistant().reply([{"role": "user", "content": "Hi"}]))

        assert exc_info.value.reason == AiFailureReason.MALFORMED_RESPONSE


class TestErrorMapping:
    @pytest.mark.parametrize(
        "status_code, reason",
        [
            (429, AiFailureReason.RATE_LIMITED),
            (402, AiFailureReason.QUOTA_EXHAUSTED),
            (500, AiFailureReason.UPSTREAM_ERROR),
        ],
    )
    def test_status_codes(self, status_code, reason):
        gateway = Gateway(status_code=status_code, body={"error": {"message": "nope"}})

        with pytest.raises(AiUnavailableError) as exc_info:
            run(gateway.assistant().reply([{"role": "user", "content": "Hi"}]))

        assert exc_info.value.reason == reason

    def test_connection_failure_is_upstream_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = AsyncOpenAI(
            api_key="test-key",
            base_url="https://gateway.test/v1",
            max_retries=0,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(refuse)),
        )

        with pytest.raises(AiUnavailableError) as exc_info:
            run(OpenAiAssistant(client).product_note("Kindle"))

        assert exc_info.value.reason == AiFailureReason.UPSTREAM_ERROR


class TestExtractProduct:
    def tool_call_body(self, arguments: dict) -> dict:
        return completion(
            {
                "role": "assistant",
                "content": None,
                "tool_calls": [
                    {
                        "id": "call_1",
                        "type": "function",
                        "function": {
                            "name": ProductPrompts.EXTRACT_TOOL_NAME,
                            "arguments": json.dumps(arguments),
                        },
                    }
                ],
            }
        )

    def test_forced_tool_call_is_parsed(self):
        gateway = Gateway(
            body=self.tool_call_body(
                {"name": "Sony WH-1000XM5", "price": 29990, "retailer": "Amazon"}
            )
        )

        extracted = run(gateway.assistant().extract_product("https://amzn.in/d/xm5"))

        assert extracted.name == "Sony WH-1000XM5"
        assert extracted.price == 29990.0
        assert extracted.retailer == "Amazon"
        assert extracted.currency is None
        sent = gateway.requests[0]
        assert sent["tool_choice"] == {
            "type": "function",
            "function": {"name": ProductPrompts.EXTRACT_TOOL_NAME},
        }
        assert "https://amzn.in/d/xm5" in sent["messages"][1]["content"]

    def test_missing_tool_call_is_malformed(self):
        gateway = Gateway(body=completion({"role": "assistant", "content": "Sorry"}))

        with pytest.raises(AiUnavailableError) as exc_info:
            run(gateway.assistant().extract_product("https://example.com/p"))

        assert exc_info.value.reason == AiFailureReason.MALFORMED_RESPONSE


class TestParseExtractedProduct:
    def test_name_is_required(self):
        with pytest.raises(AiUnavailableError):
            parse_extracted_product(json.dumps({"price": 100}))

    def test_invalid_json_is_malformed(self):
        with pytest.raises(AiUnavailableError):
            parse_extracted_product("{not json")

    def test_unusable_price_is_dropped(self):
        extracted = parse_extracted_product(
            json.dumps({"name": "Desk lamp", "price": "about 900"})
        )

        assert extracted.price is None


class TestBoardInsight:
    def test_products_are_listed_in_prompt(self):
        gateway = Gateway(
            body=completion({"role": "assistant", "content": "Wait for the sale."})
        )

        insight = run(
            gateway.assistant().board_insight(
                [ProductSummary(name="Kindle", price=13999.0), ProductSummary("Lamp")]
            )
        )

        assert insight == "Wait for the sale."
        prompt = gateway.requests[0]["messages"][1]["content"]
        assert "Kindle" in prompt and "₹13999" in prompt
        assert "Lamp" in prompt
