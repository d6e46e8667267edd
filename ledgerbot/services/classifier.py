# ledgerbot/services/classifier.py
# Адаптер к внешнему классификатору (OpenAI-совместимый chat/completions, по умолчанию Groq).
# Наружу никогда не бросает: любая проблема -> ClassificationFailure.
from __future__ import annotations

import json
import logging
from pathlib import Path

import httpx

from ledgerbot.services.intents import ClassificationFailure, Intent, parse_intent

log = logging.getLogger(__name__)


def load_prompt(path: str | Path) -> str:
    text = Path(path).read_text(encoding="utf-8").strip()
    if not text:
        raise RuntimeError(f"Пустой системный промпт: {path}")
    return text


class IntentClassifier:
    """HTTP-клиент: свободный текст -> Intent | ClassificationFailure."""

    def __init__(
        self,
        api_key: str,
        url: str,
        model: str,
        system_prompt: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.model = model
        self.system_prompt = system_prompt
        self.client = httpx.AsyncClient(
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=httpx.Timeout(timeout=timeout, connect=min(timeout, 5.0)),
            transport=transport,
        )

    def _request_body(self, text: str) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": text},
            ],
            "response_format": {"type": "json_object"},
            "max_tokens": 256,
            "temperature": 0,
        }

    async def classify(self, text: str) -> Intent | ClassificationFailure:
        try:
            response = await self.client.post(self.url, json=self._request_body(text))
        except httpx.HTTPError as exc:
            log.warning("classifier transport error: %s", exc.__class__.__name__)
            return ClassificationFailure(f"transport: {exc.__class__.__name__}")

        if response.status_code != 200:
            log.warning("classifier status=%s body=%s", response.status_code, response.text[:200])
            return ClassificationFailure(f"status {response.status_code}")

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            log.warning("classifier: unexpected envelope")
            return ClassificationFailure("unexpected envelope")

        if not content or not str(content).strip():
            log.warning("classifier: empty content")
            return ClassificationFailure("empty content")

        try:
            payload = json.loads(content)
        except (TypeError, json.JSONDecodeError):
            log.warning("classifier: content is not JSON: %r", str(content)[:200])
            return ClassificationFailure("invalid JSON")

        result = parse_intent(payload)
        if isinstance(result, ClassificationFailure):
            log.warning("classifier: %s", result.reason)
        else:
            log.debug("classifier intent=%s", result.intent)
        return result

    async def aclose(self) -> None:
        await self.client.aclose()
