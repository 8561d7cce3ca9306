"""LLM client: Gemini (with API-key rotation) or local Ollama, plus robust JSON extraction."""
import httpx
import json
import re
from typing import Any, Optional
from pydantic import BaseModel
from config.settings import settings
import logging

logger = logging.getLogger(__name__)

# Pre-compiled regex for stripping markdown fences from LLM output
_MD_FENCE_RE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?\s*```", re.DOTALL)


class LLMServiceError(Exception):
    """The completion service could not produce a response."""


class LLMResponse(BaseModel):
    """Completion returned by the service."""
    text: str
    model: str = ""


def _extract_json_object(text: str) -> str:
    """
    Robustly extract a JSON object from LLM output.

    Handles:
    - Markdown code fences (```json ... ```)
    - Leading/trailing prose around the JSON
    - Multiple JSON objects (takes the first complete one)

    Raises ValueError if no valid JSON object is found.
    """
    # 1. Try extracting from markdown fences first
    fence_match = _MD_FENCE_RE.search(text)
    if fence_match:
        candidate = fence_match.group(1).strip()
        try:
            json.loads(candidate)
            return candidate
        except json.JSONDecodeError:
            pass  # fall through to brace-matching

    # 2. Brace-matching with depth tracking
    depth = 0
    start = None
    for i, ch in enumerate(text):
        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}":
            if depth == 0:
                continue
            depth -= 1
            if depth == 0 and start is not None:
                candidate = text[start : i + 1]
                try:
                    json.loads(candidate)
                    return candidate
                except json.JSONDecodeError:
                    start = None  # reset and keep scanning

    raise ValueError("No valid JSON object found in LLM response")


def parse_json_object(text: str) -> dict[str, Any]:
    """Strip fences/prose and decode the first JSON object in an LLM response."""
    return json.loads(_extract_json_object(text))


class LLMClient:
    """Text-in/text-out wrapper around the completion service."""

    def __init__(
        self,
        provider: Optional[str] = None,
        api_keys: Optional[list[str]] = None,
        endpoint: Optional[str] = None,
        timeout_s: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.provider = provider or settings.LLM_PROVIDER
        self.api_keys = list(api_keys if api_keys is not None else settings.GEMINI_API_KEYS)
        if self.provider == "gemini":
            self.endpoint = (endpoint or settings.GEMINI_ENDPOINT).rstrip("/")
        else:
            self.endpoint = (endpoint or settings.OLLAMA_ENDPOINT).rstrip("/")
        self.timeout_s = timeout_s or settings.LLM_TIMEOUT
        self._key_index = 0

        if self.provider == "gemini" and not self.api_keys:
            logger.error("No GEMINI_API_KEYS configured; Gemini requests will fail")

        self.client = http_client or httpx.AsyncClient(timeout=self.timeout_s)

    async def generate(self, model_id: str, prompt: str) -> LLMResponse:
        """Generate a single completion for the prompt."""
        try:
            if self.provider == "gemini":
                text = await self._generate_gemini(model_id, prompt)
            else:
                text = await self._generate_ollama(model_id, prompt)
            return LLMResponse(text=text, model=model_id)

        except httpx.TimeoutException:
            logger.error(f"LLM request timed out after {self.timeout_s}s")
            raise TimeoutError(f"LLM request timed out after {self.timeout_s}s")
        except httpx.TransportError as e:
            logger.error(f"LLM transport error: {e}")
            raise ConnectionError(f"LLM service unreachable: {e}") from e
        except httpx.HTTPStatusError as e:
            logger.error(f"LLM service returned {e.response.status_code}")
            raise LLMServiceError(f"LLM service returned HTTP {e.response.status_code}") from e

    async def _generate_gemini(self, model_id: str, prompt: str) -> str:
        """
        Call Gemini generateContent, rotating to the next API key on failure.

        Every key gets one attempt; the last error is raised once all have failed.
        """
        keys = self.api_keys or [""]
        attempts = 0
        while True:
            key = keys[self._key_index % len(keys)]
            try:
                response = await self.client.post(
                    f"{self.endpoint}/v1beta/models/{model_id}:generateContent",
                    headers={"x-goog-api-key": key},
                    json={"contents": [{"parts": [{"text": prompt}]}]},
                    timeout=self.timeout_s,
                )
                response.raise_for_status()
                return _gemini_text(response.json())
            except (httpx.HTTPStatusError, httpx.TransportError) as e:
                logger.warning(f"Gemini API error with key index {self._key_index % len(keys)}: {e}")
                self._key_index = (self._key_index + 1) % len(keys)
                attempts += 1
                if attempts >= len(keys):
                    raise

    async def _generate_ollama(self, model_id: str, prompt: str) -> str:
        response = await self.client.post(
            f"{self.endpoint}/api/generate",
            json={"model": model_id, "prompt": prompt, "stream": False},
            timeout=self.timeout_s,
        )
        response.raise_for_status()
        return response.json().get("response", "")

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()


def _gemini_text(payload: dict) -> str:
    """Concatenate the text parts of the first Gemini candidate."""
    candidates = payload.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts)
