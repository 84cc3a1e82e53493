"""Async client for the Gemini generateContent REST endpoint.

One instance is created at application startup and shared by all requests;
it owns a pooled ``httpx.AsyncClient`` that is closed on shutdown.
"""
from __future__ import annotations
import time
from typing import Any

import httpx

from commitgen_relay.common.config import Settings
from commitgen_relay.common.errors import UpstreamError
from commitgen_relay.common.schema import UpstreamResult

class GeminiClient:
    """Gemini text generation over HTTP."""

    def __init__(self, settings: Settings, http: httpx.AsyncClient | None = None) -> None:
        """
        Args:
            settings: Credential, model, endpoint and sampling parameters.
            http: Pre-built client, e.g. one with a mock transport.
        """
        self.settings = settings
        self.model = settings.model
        self._http = http or httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.timeout_s,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    def _payload(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.settings.temperature,
                "topP": self.settings.top_p,
                "maxOutputTokens": self.settings.max_tokens,
            },
        }

    async def generate(self, prompt: str) -> UpstreamResult:
        """
        Send one prompt and return the generated text.

        Args:
            prompt: Fully rendered prompt.

        Raises:
            UpstreamError: On any transport, HTTP or response-shape failure.
        """
        if not self.settings.api_key:
            raise UpstreamError("GEMINI_API_KEY is not set")

        url = f"/v1beta/models/{self.model}:generateContent"
        headers = {"x-goog-api-key": self.settings.api_key}

        start = time.time()
        try:
            r = await self._http.post(url, headers=headers, json=self._payload(prompt))
            r.raise_for_status()
            data = r.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(f"Gemini returned HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamError(f"Gemini request failed: {e}") from e
        latency = int((time.time() - start) * 1000)

        text = _extract_text(data)
        usage = data.get("usageMetadata") or {}
        return UpstreamResult(
            text=text,
            model=self.model,
            input_tokens=int(usage.get("promptTokenCount") or 0),
            output_tokens=int(usage.get("candidatesTokenCount") or 0),
            latency_ms=latency,
        )

def _extract_text(data: Any) -> str:
    """Join the text parts of the first candidate."""
    if not isinstance(data, dict):
        raise UpstreamError("Malformed Gemini response")

    candidates = data.get("candidates") or []
    if not candidates:
        feedback = data.get("promptFeedback") or {}
        reason = feedback.get("blockReason")
        if reason:
            raise UpstreamError(f"Gemini blocked the prompt: {reason}")
        raise UpstreamError("Gemini returned no candidates")

    try:
        parts = candidates[0].get("content", {}).get("parts", [])
        text = "".join(p.get("text", "") for p in parts)
    except (AttributeError, TypeError) as e:
        raise UpstreamError("Malformed Gemini response") from e

    if not text.strip():
        finish = candidates[0].get("finishReason")
        raise UpstreamError(f"Gemini returned empty text (finishReason={finish})")
    return text
