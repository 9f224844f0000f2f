"""In-app activity log shown on the Logs page.

Keeps the most recent entries (newest first) in memory and persists them to a
JSON file in the workspace. Call `load()` on start and `flush()` after writes
or on exit.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from .config import LOG_CAPACITY
from .schedule_time import LOCAL_TZ

LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")

_PREFIX = {"DEBUG": "🔎", "INFO": "ℹ️", "WARN": "⚠️", "ERROR": "❌"}


class AppLog:
    def __init__(self, path: Path | None = None, capacity: int = LOG_CAPACITY, echo: bool = True):
        self.path = path
        self.capacity = capacity
        self.echo = echo
        self._entries: List[Dict[str, Any]] = []

    def load(self) -> "AppLog":
        if self.path and self.path.exists():
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    data = json.load(f)
                if isinstance(data, list):
                    self._entries = data[: self.capacity]
            except (OSError, json.JSONDecodeError) as e:
                print(f"⚠️ Could not read log file {self.path.name}: {e}")
                self._entries = []
        return self

    def flush(self) -> None:
        if not self.path:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(self._entries, f, indent=2, ensure_ascii=False)

    def add(self, level: str, message: str, data: Any = None) -> Dict[str, Any]:
        level = level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level}")

        entry = {
            "timestamp": datetime.now(LOCAL_TZ).strftime("%Y/%m/%d %H:%M:%S"),
            "type": level,
            "message": message,
            "data": json.dumps(data, indent=2, ensure_ascii=False, default=str) if data is not None else None,
        }
        self._entries.insert(0, entry)
        del self._entries[self.capacity:]

        if self.echo:
            suffix = f" {data}" if data is not None else ""
            print(f"{_PREFIX[level]} [{level}] {message}{suffix}")
        return entry

    def debug(self, message: str, data: Any = None) -> None:
        self.add("DEBUG", message, data)

    def info(self, message: str, data: Any = None) -> None:
        self.add("INFO", message, data)

    def warn(self, message: str, data: Any = None) -> None:
        self.add("WARN", message, data)

    def error(self, message: str, data: Any = None) -> None:
        self.add("ERROR", message, data)

    def entries(self) -> List[Dict[str, Any]]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries = []
        self.flush()

    def __len__(self) -> int:
        return len(self._entries)
