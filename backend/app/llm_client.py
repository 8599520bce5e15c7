# backend/app/llm_client.py
"""
Thin async client for the Gemini ``generateContent`` endpoint.

One attempt per call: no retry, no caching. Anything other than a 2xx JSON
answer is raised as UpstreamError.
"""
import logging
from typing import Optional

import aiohttp

from backend.app import config
from backend.app.errors import UpstreamError

logger = logging.getLogger(__name__)


def build_payload(prompt: str, system_instruction: str) -> dict:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "systemInstruction": {"parts": [{"text": system_instruction}]},
    }


def extract_text(result) -> Optional[str]:
    """Return candidates[0].content.parts[0].text, or None when the path is absent."""
    try:
        return result["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None


class GeminiClient:
    def __init__(self, api_url: Optional[str] = None):
        self.api_url = api_url

    async def generate(self, prompt: str, system_instruction: str) -> Optional[str]:
        if not self.api_url:
            raise UpstreamError("GEMINI_API_URL is not configured")

        payload = build_payload(prompt, system_instruction)
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(self.api_url, json=payload) as resp:
                    if resp.status < 200 or resp.status >= 300:
                        raise UpstreamError(f"API error: {resp.status} {resp.reason}")
                    result = await resp.json(content_type=None)
        except aiohttp.ClientError as e:
            raise UpstreamError(f"API request failed: {e}") from e
        except ValueError as e:
            # body was not JSON
            raise UpstreamError(f"API returned an unreadable body: {e}") from e

        text = extract_text(result)
        if text is None:
            logger.warning("Generation API answered without candidate text")
        return text


def get_llm_client() -> GeminiClient:
    return GeminiClient(config.GEMINI_API_URL)
