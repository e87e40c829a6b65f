"""
LLM providers for sales strategy generation
Both providers return None on any failure so the caller can degrade gracefully
"""

from typing import Any, Dict, Optional

import httpx
import structlog

from ..config import get_settings
from ..utils.helpers import retry_async, truncate_text

logger = structlog.get_logger("saleshub.llm.providers")

SALES_SYSTEM_PROMPT = (
    "You are a professional sales consultant and business development expert. "
    "Focus on lead qualification, sales strategy optimization, and revenue generation. "
    "Provide actionable sales insights and recommendations."
)


class LLMProvider:
    """Base class for a single-prompt text generation provider"""

    name = "llm"

    def __init__(self, api_key: Optional[str], model: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = get_settings()
        self.api_key = api_key
        self.model = model
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def generate(self, prompt: str) -> Optional[str]:
        """
        Generate text for prompt

        Returns:
            Generated text, or None if the provider is not configured or failed
        """
        if not self.is_configured:
            logger.warning("Provider not configured", provider=self.name)
            return None

        try:
            return await retry_async(
                lambda: self._request(prompt),
                max_retries=self.settings.llm_max_retries,
                delay=0.5,
                exceptions=(httpx.TransportError,)
            )
        except httpx.HTTPStatusError as e:
            logger.error(
                f"{self.name} API error",
                provider=self.name,
                status_code=e.response.status_code,
                body=truncate_text(e.response.text, 200)
            )
        except httpx.HTTPError as e:
            logger.error(f"{self.name} request failed: {e}", provider=self.name)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"{self.name} returned unexpected payload: {e}", provider=self.name)
        return None

    async def _request(self, prompt: str) -> str:
        raise NotImplementedError

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.settings.llm_timeout_seconds, transport=self._transport)


class GeminiProvider(LLMProvider):
    """Google Gemini generateContent API"""

    name = "gemini"
    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, transport=None):
        settings = get_settings()
        super().__init__(
            api_key if api_key is not None else settings.google_ai_api_key,
            model or settings.gemini_model,
            transport
        )

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": 0.4,
                "topK": 40,
                "topP": 0.95,
                "maxOutputTokens": 1024
            }
        }

    async def _request(self, prompt: str) -> str:
        async with self._client() as client:
            response = await client.post(
                f"{self.BASE_URL}/{self.model}:generateContent",
                params={"key": self.api_key},
                headers={"Content-Type": "application/json"},
                json=self.build_payload(prompt)
            )
            response.raise_for_status()
            data = response.json()
            return data["candidates"][0]["content"]["parts"][0]["text"]


class DeepSeekProvider(LLMProvider):
    """DeepSeek OpenAI-compatible chat completions API"""

    name = "deepseek"
    API_URL = "https://api.deepseek.com/v1/chat/completions"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, transport=None):
        settings = get_settings()
        super().__init__(
            api_key if api_key is not None else settings.deepseek_api_key,
            model or settings.deepseek_model,
            transport
        )

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SALES_SYSTEM_PROMPT},
                {"role": "user", "content": prompt}
            ],
            "max_tokens": 1024,
            "temperature": 0.4
        }

    async def _request(self, prompt: str) -> str:
        async with self._client() as client:
            response = await client.post(
                self.API_URL,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json"
                },
                json=self.build_payload(prompt)
            )
            response.raise_for_status()
            data = response.json()
            return data["choices"][0]["message"]["content"]
