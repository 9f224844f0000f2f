"""AI draft generation: rewrite a base post for each selected platform.

OpenAI is called through its Python client; Anthropic and Google AI through
their REST endpoints. Every provider is asked for a JSON object keyed by
platform id. A response that is not JSON is returned as `{"default": text}`.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

import requests

from .app_log import AppLog
from .config import AppConfig
from .errors import AIKeyError, AIRateLimitError, ConfigurationError, DraftGenerationError
from .platforms import validation_table

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
GOOGLE_AI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

TEMPERATURE = 0.7
MAX_TOKENS = 2000

_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class AIService(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"

    @property
    def label(self) -> str:
        return {"openai": "OpenAI", "anthropic": "Anthropic", "google": "Google AI"}[self.value]


@dataclass
class AISettings:
    service: AIService
    model: str
    api_token: str

    @classmethod
    def from_config(cls, config: AppConfig) -> "AISettings":
        if not config.is_ai_configured():
            raise ConfigurationError("AI service is not configured. Set AI_SERVICE, AI_MODEL and AI_API_TOKEN.")
        try:
            service = AIService(config.ai_service.lower())
        except ValueError:
            raise ConfigurationError(f"Unsupported AI service: {config.ai_service}") from None
        return cls(service, config.ai_model, config.ai_api_token)


def build_prompt(base_content: str, instruction: str, platforms: List[str]) -> str:
    """Prompt asking for one rewrite per platform, each within its limit."""
    table = validation_table(platforms)
    lines = []
    for platform_id in platforms:
        limits = table.get(platform_id)
        if limits is None:
            lines.append(f"- {platform_id}: unlimited characters")
        else:
            lines.append(f"- {limits['name']}: max {limits['maxLength']} characters")
    platform_info = "\n".join(lines)

    return f"""Optimize the following post for each of the listed platforms.

[Original post]
{base_content}

[Instructions]
{instruction}

[Target platforms]
{platform_info}

[Requirements]
- Strictly respect each platform's character limit
- Adapt the tone and format to each platform
- Answer in JSON, using the platform ids as keys

[Example answer]
{{
  "x": "Post for X (280 characters max)",
  "instagram": "Post for Instagram (2200 characters max)",
  "facebook": "Post for Facebook"
}}

Generate optimized content for the selected platforms in the format above."""


def parse_response(text: str) -> Dict[str, str]:
    """Platform drafts from the model output; non-JSON becomes `{"default": text}`."""
    stripped = text.strip()
    match = _FENCE.match(stripped)
    if match:
        stripped = match.group(1)
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError:
        return {"default": text}
    if not isinstance(data, dict):
        return {"default": text}
    return {str(k): str(v) for k, v in data.items()}


# ===== PROVIDERS =====

def _call_openai(prompt: str, settings: AISettings) -> str:
    import openai
    from openai import OpenAI

    client = OpenAI(api_key=settings.api_token)
    try:
        response = client.chat.completions.create(
            model=settings.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=TEMPERATURE,
            max_tokens=MAX_TOKENS,
        )
    except openai.AuthenticationError as e:
        raise AIKeyError("Invalid API key. Check your AI settings.") from e
    except openai.RateLimitError as e:
        raise AIRateLimitError("Rate limit reached. Please wait and try again.") from e
    except openai.OpenAIError as e:
        raise DraftGenerationError(f"OpenAI API error: {e}") from e

    return response.choices[0].message.content or ""


def _call_anthropic(prompt: str, settings: AISettings) -> str:
    data = _post_json(
        settings.service,
        ANTHROPIC_URL,
        headers={
            "x-api-key": settings.api_token,
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        },
        json={
            "model": settings.model,
            "max_tokens": MAX_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
        },
    )
    content = data.get("content") or [{}]
    return content[0].get("text", "")


def _call_google(prompt: str, settings: AISettings) -> str:
    data = _post_json(
        settings.service,
        GOOGLE_AI_URL.format(model=settings.model),
        params={"key": settings.api_token},
        headers={"Content-Type": "application/json"},
        json={
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": TEMPERATURE, "maxOutputTokens": MAX_TOKENS},
        },
    )
    candidates = data.get("candidates") or [{}]
    parts = candidates[0].get("content", {}).get("parts") or [{}]
    return parts[0].get("text", "")


def _post_json(service: AIService, url: str, **kwargs: Any) -> Dict[str, Any]:
    try:
        response = requests.post(url, timeout=60, **kwargs)
    except requests.RequestException as e:
        raise DraftGenerationError(f"{service.label} API connection error: {e}") from e

    if response.status_code == 401 or (service is AIService.GOOGLE and response.status_code == 403):
        raise AIKeyError("Invalid API key. Check your AI settings.")
    if response.status_code == 429:
        raise AIRateLimitError("Rate limit reached. Please wait and try again.")
    if not response.ok:
        try:
            message = response.json().get("error", {}).get("message", "Unknown error")
        except ValueError:
            message = response.text or "Unknown error"
        raise DraftGenerationError(f"{service.label} API error: {message}")
    return response.json()


_PROVIDERS = {
    AIService.OPENAI: _call_openai,
    AIService.ANTHROPIC: _call_anthropic,
    AIService.GOOGLE: _call_google,
}


def call_ai(prompt: str, settings: AISettings, log: AppLog | None = None) -> Dict[str, str]:
    if log is None:
        log = AppLog(echo=False)
    service = AIService(settings.service)
    log.info(f"Calling {service.label} API", {"model": settings.model, "promptLength": len(prompt)})

    try:
        text = _PROVIDERS[service](prompt, AISettings(service, settings.model, settings.api_token))
    except DraftGenerationError as e:
        log.error(f"{service.label} API call failed", {"error": str(e)})
        raise

    if not text:
        raise DraftGenerationError("The AI returned an empty response")

    drafts = parse_response(text)
    if "default" in drafts and len(drafts) == 1:
        log.warn("Failed to parse JSON response, using raw content", {"content": text})
    else:
        log.info(f"{service.label} API call successful", {"platforms": list(drafts)})
    return drafts


def generate_platform_drafts(
    base_content: str,
    instruction: str,
    platforms: List[str],
    settings: AISettings,
    log: AppLog | None = None,
) -> Dict[str, str]:
    """Draft text for each selected platform, keyed by platform id.

    A `default` entry in the answer fills every selected platform the model
    did not address by name.
    """
    if not base_content.strip():
        raise DraftGenerationError("Enter the base content before generating drafts")
    if not instruction.strip():
        raise DraftGenerationError("Enter an instruction for the AI")
    if not platforms:
        raise DraftGenerationError("Select at least one platform")

    answer = call_ai(build_prompt(base_content, instruction, platforms), settings, log=log)

    drafts: Dict[str, str] = {}
    for platform in platforms:
        if platform in answer:
            drafts[platform] = answer[platform]
        elif "default" in answer:
            drafts[platform] = answer["default"]
    return drafts


_KEY_PREFIXES = {
    AIService.OPENAI: "sk-",
    AIService.ANTHROPIC: "sk-ant-",
}
MIN_GOOGLE_KEY_LENGTH = 20


def check_ai_connection(settings: AISettings, log: AppLog | None = None) -> None:
    """Check the saved AI credentials before drafting is enabled.

    Raises AIKeyError when the API key does not have the provider's format.
    """
    if log is None:
        log = AppLog(echo=False)
    service = AIService(settings.service)
    token = settings.api_token.strip()

    prefix = _KEY_PREFIXES.get(service)
    if prefix and not token.startswith(prefix):
        valid = False
    elif service is AIService.GOOGLE:
        valid = len(token) >= MIN_GOOGLE_KEY_LENGTH
    else:
        valid = bool(token)

    if not valid:
        log.warn(f"{service.label} connection test failed", {"model": settings.model})
        raise AIKeyError(f"Invalid {service.label} API key format")
    log.info(f"{service.label} connection successful", {"model": settings.model})
