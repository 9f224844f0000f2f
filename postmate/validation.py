from __future__ import annotations

from typing import Dict, Iterable, List, Mapping

from .models import Post
from .platforms import Platform


def effective_content(shared: str, platform_content: Mapping[str, str], platform: str) -> str:
    """Per-platform override if present, otherwise the shared content."""
    return platform_content.get(platform) or shared or ""


def validate(
    content: str,
    platform_content: Mapping[str, str],
    selected_platforms: Iterable[str],
) -> Dict[str, List[str]]:
    """Check every selected platform against its character limit.

    Returns {platform: [messages]} for each platform over its limit; an empty
    dict means the content may be submitted. Unknown platforms are not limited.
    """
    violations: Dict[str, List[str]] = {}
    for platform_id in selected_platforms:
        platform = Platform.parse(platform_id)
        if platform is None:
            continue

        length = len(effective_content(content, platform_content, platform_id))
        if length > platform.max_length:
            violations[platform_id] = [
                f"{platform.display_name} exceeds its {platform.max_length} character limit "
                f"(currently {length} characters)."
            ]
    return violations


def validate_post(post: Post) -> Dict[str, List[str]]:
    return validate(post.content, post.platform_content, post.platforms)
