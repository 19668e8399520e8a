"""HTTP clients for the hosted language models."""

from __future__ import annotations

import base64
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from paravault.errors import ModelError

LOGGER = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_MODEL = "gemini-3-flash-preview"

ANTHROPIC_API_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_CLAUDE_MODEL = "claude-sonnet-4-5"


@dataclass(slots=True, frozen=True)
class ImageInput:
    data: bytes
    mime_type: str = "image/png"

    @property
    def base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


class LanguageModel(ABC):
    """A hosted model that answers a text prompt, optionally with one image."""

    name: str = "model"

    def __init__(
        self,
        api_key: str | None,
        model: str,
        *,
        timeout: float = 60.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = client

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=httpx.Timeout(self.timeout))
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    @abstractmethod
    def generate(self, prompt: str, image: Optional[ImageInput] = None) -> str:
        raise NotImplementedError

    def _post(self, url: str, *, json: Dict[str, Any], headers: Dict[str, str]) -> Dict[str, Any]:
        if not self.api_key:
            raise ModelError(f"{self.name}: API key is not configured")
        try:
            response = self.client.post(url, json=json, headers=headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            body = exc.response.text[:300]
            raise ModelError(f"{self.name} HTTP {exc.response.status_code}: {body}") from exc
        except httpx.HTTPError as exc:
            raise ModelError(f"{self.name} request failed: {exc}") from exc
        except ValueError as exc:
            raise ModelError(f"{self.name} returned a non-JSON response") from exc


class GeminiModel(LanguageModel):
    """Google Generative Language API (``models/{model}:generateContent``)."""

    name = "gemini"

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_GEMINI_MODEL,
        *,
        timeout: float = 60.0,
        client: httpx.Client | None = None,
        base_url: str = GEMINI_API_URL,
    ) -> None:
        super().__init__(api_key, model, timeout=timeout, client=client)
        self.base_url = base_url.rstrip("/")

    def generate(self, prompt: str, image: Optional[ImageInput] = None) -> str:
        parts: List[Dict[str, Any]] = [{"text": prompt}]
        if image is not None:
            parts.append({"inline_data": {"mime_type": image.mime_type, "data": image.base64}})
        payload = self._post(
            f"{self.base_url}/models/{self.model}:generateContent",
            json={"contents": [{"role": "user", "parts": parts}]},
            headers={"x-goog-api-key": self.api_key or ""},
        )
        candidates = payload.get("candidates") or []
        if not candidates:
            feedback = payload.get("promptFeedback", {})
            raise ModelError(f"gemini returned no candidates: {feedback}")
        content = candidates[0].get("content") or {}
        text = "".join(part.get("text", "") for part in content.get("parts", []))
        if not text.strip():
            reason = candidates[0].get("finishReason", "unknown")
            raise ModelError(f"gemini returned an empty reply (finish reason: {reason})")
        return text


class ClaudeModel(LanguageModel):
    """Anthropic Messages API."""

    name = "claude"

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_CLAUDE_MODEL,
        *,
        timeout: float = 60.0,
        client: httpx.Client | None = None,
        max_tokens: int = 1024,
        url: str = ANTHROPIC_API_URL,
    ) -> None:
        super().__init__(api_key, model, timeout=timeout, client=client)
        self.max_tokens = max_tokens
        self.url = url

    def generate(self, prompt: str, image: Optional[ImageInput] = None) -> str:
        content: List[Dict[str, Any]] = []
        if image is not None:
            content.append(
                {
                    "type": "image",
                    "source": {
                        "type": "base64",
                        "media_type": image.mime_type,
                        "data": image.base64,
                    },
                }
            )
        content.append({"type": "text", "text": prompt})
        payload = self._post(
            self.url,
            json={
                "model": self.model,
                "max_tokens": self.max_tokens,
                "messages": [{"role": "user", "content": content}],
            },
            headers={
                "x-api-key": self.api_key or "",
                "anthropic-version": ANTHROPIC_VERSION,
            },
        )
        text = "".join(
            block.get("text", "") for block in payload.get("content", []) if block.get("type") == "text"
        )
        if not text.strip():
            raise ModelError(f"claude returned an empty reply (stop reason: {payload.get('stop_reason')})")
        return text
