# tests/test_llm_client.py
import asyncio

import pytest
from aiohttp import web
from aiohttp import test_utils

from backend.app.errors import UpstreamError
from backend.app.llm_client import GeminiClient, build_payload

GOOD_REPLY = {"candidates": [{"content": {"parts": [{"text": "Save 10% of income."}]}}]}


def generate_against(handler, prompt="prompt", system="system"):
    """Run GeminiClient.generate against a local aiohttp server using ``handler``."""
    received = []

    async def endpoint(request):
        received.append(await request.json())
        return await handler(request)

    async def main():
        app = web.Application()
        app.router.add_post("/generate", endpoint)
        async with test_utils.TestServer(app) as server:
            client = GeminiClient(str(server.make_url("/generate")))
            return await client.generate(prompt, system)

    return asyncio.run(main()), received


def test_success_returns_candidate_text_and_sends_payload():
    async def handler(request):
        return web.json_response(GOOD_REPLY)

    text, received = generate_against(handler, "How am I doing?", "be kind")
    assert text == "Save 10% of income."
    assert received == [build_payload("How am I doing?", "be kind")]


def test_success_without_candidate_text_returns_none():
    async def handler(request):
        return web.json_response({"candidates": [], "promptFeedback": {"blockReason": "SAFETY"}})

    text, _ = generate_against(handler)
    assert text is None


@pytest.mark.parametrize("status", [400, 429, 503])
def test_non_success_status_raises(status):
    async def handler(request):
        return web.json_response({"error": {"message": "nope"}}, status=status)

    with pytest.raises(UpstreamError, match=str(status)):
        generate_against(handler)


def test_non_json_body_raises():
    async def handler(request):
        return web.Response(text="<html>gateway</html>", content_type="text/html")

    with pytest.raises(UpstreamError, match="unreadable"):
        generate_against(handler)


def test_transport_error_raises():
    async def main():
        app = web.Application()
        async with test_utils.TestServer(app) as server:
            url = str(server.make_url("/generate"))
        # server is closed now, so the connection is refused
        return await GeminiClient(url).generate("prompt", "system")

    with pytest.raises(UpstreamError, match="request failed"):
        asyncio.run(main())
