"""Supported target platforms and their character limits."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List


class Platform(Enum):
    """Closed set of target platforms.

    Each member carries its configuration as data:
    (identifier, display name, maximum content length, badge).
    """

    X = ("x", "X (Twitter)", 280, "𝕏")
    INSTAGRAM = ("instagram", "Instagram", 2200, "📸")
    FACEBOOK = ("facebook", "Facebook", 63206, "📘")
    LINE = ("line", "LINE", 1000, "💬")
    DISCORD = ("discord", "Discord", 2000, "🎮")
    WORDPRESS = ("wordpress", "WordPress", 100000, "📝")

    def __init__(self, platform_id: str, display_name: str, max_length: int, badge: str):
        self.platform_id = platform_id
        self.display_name = display_name
        self.max_length = max_length
        self.badge = badge

    def __str__(self) -> str:
        return self.platform_id

    @classmethod
    def parse(cls, value: "str | Platform") -> "Platform | None":
        """Return the platform for an identifier, or None if unrecognized."""
        if isinstance(value, Platform):
            return value
        key = (value or "").strip().lower()
        for platform in cls:
            if platform.platform_id == key:
                return platform
        return None


def platform_ids() -> List[str]:
    return [p.platform_id for p in Platform]


def max_length_for(platform_id: str) -> int | None:
    """Character limit for a platform; None means unconstrained."""
    platform = Platform.parse(platform_id)
    return platform.max_length if platform else None


def display_name_for(platform_id: str) -> str:
    platform = Platform.parse(platform_id)
    return platform.display_name if platform else platform_id


def badge_for(platform_id: str) -> str:
    platform = Platform.parse(platform_id)
    return f"{platform.badge} {platform.display_name}" if platform else platform_id


def validation_table(platforms: Iterable[str] | None = None) -> Dict[str, Dict]:
    """Limits keyed by identifier, as handed to the draft generator."""
    selected = list(platforms) if platforms is not None else platform_ids()
    table: Dict[str, Dict] = {}
    for platform_id in selected:
        platform = Platform.parse(platform_id)
        if platform:
            table[platform.platform_id] = {
                "maxLength": platform.max_length,
                "name": platform.display_name,
            }
    return table
