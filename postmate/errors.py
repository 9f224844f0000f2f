"""Exception types raised by the PostMate adapters and submitter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


class PostMateError(Exception):
    """Base class for all PostMate errors."""


class ConfigurationError(PostMateError):
    """A required setting (sheet, webhook URL, AI token) is missing."""


class CharacterLimitError(PostMateError):
    """Content exceeds one or more platform limits."""

    def __init__(self, violations: Dict[str, List[str]]):
        self.violations = violations
        platforms = ", ".join(sorted(violations))
        super().__init__(f"Character limit exceeded for: {platforms}")


class UnknownPlatformError(PostMateError):
    """A post names a platform outside the supported set."""

    def __init__(self, platforms: List[str]):
        self.platforms = platforms
        super().__init__(f"Unsupported platform(s): {', '.join(platforms)}")


class DatastoreError(PostMateError):
    """The spreadsheet datastore rejected or failed a request."""


class DraftGenerationError(PostMateError):
    """The AI provider could not produce platform drafts."""


class AIKeyError(DraftGenerationError):
    """The AI provider rejected the API key."""


class AIRateLimitError(DraftGenerationError):
    """The AI provider rate limit was reached."""


class WebhookError(PostMateError):
    """The automation webhook call failed."""


@dataclass(frozen=True)
class FriendlyError:
    title: str
    description: str
    action_label: str | None = None


def user_friendly_message(error: str | Exception) -> FriendlyError:
    """Translate an error into a message suitable for a toast or alert."""
    text = str(error)
    lower = text.lower()

    if isinstance(error, CharacterLimitError) or ("character" in lower and "limit" in lower):
        return FriendlyError(
            "Character limit exceeded",
            "Some platforms exceed their character limit. Shorten the content and try again.",
        )
    if isinstance(error, UnknownPlatformError):
        return FriendlyError(
            "Unsupported platform",
            f"These platforms are not supported: {', '.join(error.platforms)}. Remove them and try again.",
        )
    if isinstance(error, AIKeyError):
        return FriendlyError(
            "API key error",
            "The AI service API key is invalid or expired. Check your settings.",
            "Check AI settings",
        )
    if isinstance(error, AIRateLimitError):
        return FriendlyError(
            "Usage limit reached",
            "The API usage limit was reached. Please wait a while and try again.",
        )
    if any(k in lower for k in ("access token", "token expired", "invalid_grant")):
        return FriendlyError(
            "Google connection expired",
            "The Google credentials have expired. Sign in again or refresh the service account key.",
            "Sign in again",
        )
    if "webhook url not configured" in lower or "webhook url is not set" in lower:
        return FriendlyError(
            "Webhook URL not set",
            "Immediate posting needs a webhook URL. Configure it on the Settings page.",
            "Open settings",
        )
    if any(k in lower for k in ("api key", "invalid key", "unauthorized")):
        return FriendlyError(
            "API key error",
            "The AI service API key is invalid or expired. Check your settings.",
            "Check AI settings",
        )
    if any(k in lower for k in ("network", "connection", "timeout")):
        return FriendlyError(
            "Connection error",
            "Check your internet connection and try again in a moment.",
        )
    if "sheet" in lower and ("not found" in lower or "not exist" in lower or "not configured" in lower):
        return FriendlyError(
            "Google Sheet not set up",
            "The post spreadsheet has not been configured yet. Set it up on the Settings page.",
            "Open settings",
        )
    if "permission" in lower or "forbidden" in lower:
        return FriendlyError(
            "Permission error",
            "You do not have permission for this operation. Check your settings.",
        )
    if any(k in lower for k in ("openai", "anthropic", "google ai")):
        return FriendlyError(
            "AI service error",
            "Communication with the AI service failed. Check the API key and model settings.",
            "Check AI settings",
        )
    if "rate limit" in lower or "quota" in lower:
        return FriendlyError(
            "Usage limit reached",
            "The API usage limit was reached. Please wait a while and try again.",
        )
    return FriendlyError(
        "An error occurred",
        text or "An unexpected error occurred. Please try again.",
    )
