"""OpenAI-style Chat Completions client.

The model is treated as an opaque text-in/text-out function. Its output is never trusted: callers
must pass it through the extractor before using it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from http.client import HTTPException
from typing import Any
from urllib.error import HTTPError
from urllib.request import Request, urlopen

from covid_nlq.config.settings import Settings


class LLMClientError(RuntimeError):
    """Raised when the model call fails or returns an unexpected payload."""


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for the OpenAI-style Chat Completions API call."""

    api_key: str
    model: str = "gpt-4o-mini"
    api_base: str = "https://api.openai.com/v1"
    temperature: float = 0.2
    timeout_s: float = 30.0


def _chat_completions_url(api_base: str) -> str:
    return api_base.rstrip("/") + "/chat/completions"


def generate(system_prompt: str, user_input: str, *, config: LLMConfig) -> str:
    """Call the model once and return the text of the first choice.

    A `null` message content is returned as an empty string.
    """

    payload: dict[str, Any] = {
        "model": config.model,
        "temperature": config.temperature,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_input},
        ],
    }

    req = Request(
        _chat_completions_url(config.api_base),
        method="POST",
        headers={
            "Authorization": f"Bearer {config.api_key}",
            "Content-Type": "application/json",
        },
        data=json.dumps(payload).encode(),
    )

    try:
        with urlopen(req, timeout=config.timeout_s) as resp:  # noqa: S310 (configured API base)
            body = resp.read()
    except HTTPError as exc:
        raise LLMClientError(f"LLM HTTP error: {exc.code}") from exc
    except (OSError, HTTPException) as exc:
        # URLError, socket timeouts and dropped connections.
        raise LLMClientError("LLM connection error") from exc

    try:
        decoded = json.loads(body)
        content = decoded["choices"][0]["message"]["content"]
    except (ValueError, RecursionError, KeyError, IndexError, TypeError) as exc:
        raise LLMClientError("Unexpected LLM response format") from exc

    return content or ""


def llm_config_from_settings(settings: Settings) -> LLMConfig:
    """Build the LLM config from validated settings.

    Raises:
        LLMClientError: If no API key is configured.
    """

    if not settings.llm_api_key:
        raise LLMClientError("OPENAI_API_KEY is required")

    return LLMConfig(
        api_key=settings.llm_api_key,
        model=settings.llm_model,
        api_base=settings.llm_api_base,
        temperature=settings.llm_temperature,
        timeout_s=settings.llm_timeout_s,
    )
