from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from pathlib import Path

FONT_SIZES = ("small", "medium", "large")


@dataclass
class Preferences:
    """Per-browser UI preferences persisted in the workspace."""

    font_size: str = "medium"
    compact_mode: bool = False
    onboarding_seen: bool = False
    path: Path | None = None

    @classmethod
    def load(cls, path: Path) -> "Preferences":
        prefs = cls(path=path)
        if not path.exists():
            return prefs
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"⚠️ Could not read preferences, using defaults: {e}")
            return prefs

        if data.get("font_size") in FONT_SIZES:
            prefs.font_size = data["font_size"]
        prefs.compact_mode = data.get("compact_mode") is True
        prefs.onboarding_seen = data.get("onboarding_seen") is True
        return prefs

    def save(self) -> None:
        if self.path is None:
            return
        data = asdict(self)
        data.pop("path")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def set_font_size(self, size: str) -> None:
        if size not in FONT_SIZES:
            raise ValueError(f"Unsupported font size: {size}")
        self.font_size = size
        self.save()

    def set_compact_mode(self, compact: bool) -> None:
        self.compact_mode = bool(compact)
        self.save()

    def mark_onboarding_seen(self) -> None:
        self.onboarding_seen = True
        self.save()
