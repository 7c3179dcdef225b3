from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any

from django.conf import settings

logger = logging.getLogger(__name__)

OPENROUTER_CHAT_URL = "https://openrouter.ai/api/v1/chat/completions"


class LLMNotConfiguredError(Exception):
    """Raised when an LLM client is requested but missing configuration."""


@dataclass
class LLMConfig:
    provider: str = "openrouter"
    model: str = "openrouter/auto"
    api_key: str | None = None
    timeout: float = 15.0
    site_url: str = ""
    app_title: str = ""
    temperature: float = 0.2


class LLMClient:
    """Provider-agnostic interface for chat-style text generation."""

    def generate_text(self, prompt: str, system: str | None = None) -> str | None:
        raise NotImplementedError


class OpenRouterClient(LLMClient):
    """Minimal OpenRouter chat-completions client over urllib."""

    def __init__(self, cfg: LLMConfig):
        if not cfg.api_key:
            msg = "OPENROUTER_API_KEY missing"
            raise LLMNotConfiguredError(msg)
        self.cfg = cfg

    def _headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.cfg.api_key}",
            "Content-Type": "application/json",
        }
        if self.cfg.site_url:
            headers["HTTP-Referer"] = self.cfg.site_url
        if self.cfg.app_title:
            headers["X-Title"] = self.cfg.app_title
        return headers

    def generate_text(self, prompt: str, system: str | None = None) -> str | None:
        messages: list[dict[str, Any]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        payload = {
            "model": self.cfg.model,
            "messages": messages,
            "temperature": self.cfg.temperature,
        }
        req = urllib.request.Request(  # noqa: S310 - fixed https URL
            OPENROUTER_CHAT_URL,
            data=json.dumps(payload).encode("utf-8"),
            headers=self._headers(),
            method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self.cfg.timeout) as resp:  # noqa: S310 - fixed https URL
                obj = json.loads(resp.read().decode("utf-8"))
        except urllib.error.HTTPError as e:  # pragma: no cover - network
            logger.warning("OpenRouter HTTPError: %s", e.read().decode("utf-8", "ignore"))
            return None
        except Exception as e:  # noqa: BLE001 - catch-all for network/JSON
            logger.warning("OpenRouter request failed: %s", e)
            return None

        # choices -> message -> content
        try:
            choices = obj.get("choices") or []
            content = ((choices[0] or {}).get("message") or {}).get("content")
        except (AttributeError, IndexError, TypeError) as e:
            logger.debug("Unexpected OpenRouter payload: %s", e)
            return None
        return content if isinstance(content, str) and content.strip() else None


def get_llm_client_from_settings() -> LLMClient | None:
    """Factory reading settings to return a configured LLM client.

    Returns None when no API key is configured or the provider is unknown.
    """
    cfg = LLMConfig(
        provider=getattr(settings, "LLM_PROVIDER", "openrouter"),
        model=getattr(settings, "LLM_MODEL", "openrouter/auto"),
        api_key=getattr(settings, "OPENROUTER_API_KEY", "") or None,
        timeout=float(getattr(settings, "LLM_TIMEOUT", 15.0)),
        site_url=getattr(settings, "LLM_SITE_URL", ""),
        app_title=getattr(settings, "LLM_APP_TITLE", ""),
    )
    if cfg.provider != "openrouter":
        logger.info("LLM provider '%s' not supported; skipping LLM", cfg.provider)
        return None
    try:
        return OpenRouterClient(cfg)
    except LLMNotConfiguredError:
        logger.debug("OPENROUTER_API_KEY missing; LLM disabled")
        return None
