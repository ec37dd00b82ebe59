"""Chat-completions client for the LLM oracle."""
import json
import logging
from typing import Optional

import aiohttp

from talent_radar.github.utils import http_post_json

logger = logging.getLogger(__name__)


def extract_json_object(text: Optional[str]) -> Optional[dict]:
    """Parse the first top-level JSON object embedded in free text.

    Oracle replies often wrap the object in prose or code fences, so this
    decodes from the first '{' and ignores anything after the object.

    Returns:
        The parsed object, or None when no object can be decoded
    """
    if not text:
        return None
    start = text.find("{")
    if start == -1:
        return None
    try:
        obj, _ = json.JSONDecoder().raw_decode(text, start)
    except json.JSONDecodeError:
        return None
    return obj if isinstance(obj, dict) else None


class OracleClient:
    """OpenRouter-compatible chat completions client.

    API docs: https://openrouter.ai/docs/api-reference/chat-completion
    Returns None instead of raising on every failure mode; callers pair it
    with a deterministic fallback.
    """

    API_URL = "https://openrouter.ai/api/v1/chat/completions"

    def __init__(
        self,
        session: aiohttp.ClientSession,
        api_key: str,
        *,
        model: str = "meta-llama/llama-3.2-3b-instruct:free",
        api_url: Optional[str] = None,
        referer: str = "https://talent-radar.local",
        title: str = "Talent Radar",
        max_tokens: int = 1000,
        timeout: float = 30,
        retries: int = 1,
    ):
        """
        Initialize oracle client.

        Args:
            session: aiohttp client session owned by the caller
            api_key: OpenRouter API key
            model: Model identifier
            api_url: Endpoint override
            referer: HTTP-Referer header value
            title: X-Title header value
            max_tokens: Completion token limit
            timeout: Total timeout per request in seconds
            retries: Attempts on transient failures
        """
        self.session = session
        self.api_url = api_url or self.API_URL
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.retries = retries
        self.headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
            "HTTP-Referer": referer,
            "X-Title": title,
        }

    async def complete(
        self,
        system: str,
        prompt: str,
        temperature: float = 0.3,
        max_tokens: Optional[int] = None,
    ) -> Optional[str]:
        """Send one system+user exchange and return the reply text."""
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": max_tokens or self.max_tokens,
            "temperature": temperature,
        }
        data = await http_post_json(
            self.session,
            self.api_url,
            json=payload,
            headers=self.headers,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            retries=self.retries,
        )
        if not isinstance(data, dict):
            logger.warning("Oracle request failed")
            return None

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.warning("Oracle returned unexpected format: %s", list(data)[:5])
            return None
        return content if isinstance(content, str) else None

    async def complete_json(
        self,
        system: str,
        prompt: str,
        temperature: float = 0.3,
        max_tokens: Optional[int] = None,
    ) -> Optional[dict]:
        """Like complete(), but return the first JSON object in the reply."""
        text = await self.complete(system, prompt, temperature, max_tokens)
        if text is None:
            return None
        obj = extract_json_object(text)
        if obj is None:
            logger.warning("Oracle reply contained no JSON object")
        return obj
