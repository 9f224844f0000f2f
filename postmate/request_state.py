"""Lifecycle of one remote operation in the UI (submit, generate, webhook test)."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class Phase(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class RequestState:
    """Immutable state; each transition returns a new instance.

    Only the succeeded phase carries a result and only the failed phase
    carries an error.
    """

    phase: Phase = Phase.IDLE
    result: Any = None
    error: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.phase is Phase.IN_FLIGHT

    def start(self) -> "RequestState":
        if self.phase is Phase.IN_FLIGHT:
            raise ValueError("Request already in flight")
        return RequestState(Phase.IN_FLIGHT)

    def succeed(self, result: Any = None) -> "RequestState":
        self._require_in_flight()
        return replace(self, phase=Phase.SUCCEEDED, result=result, error=None)

    def fail(self, error: str | Exception) -> "RequestState":
        self._require_in_flight()
        return replace(self, phase=Phase.FAILED, result=None, error=str(error))

    def reset(self) -> "RequestState":
        if self.phase is Phase.IN_FLIGHT:
            raise ValueError("Cannot reset a request in flight")
        return RequestState()

    def _require_in_flight(self) -> None:
        if self.phase is not Phase.IN_FLIGHT:
            raise ValueError(f"Cannot complete a request in phase {self.phase.value}")
