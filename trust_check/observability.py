"""Structured events emitted at engine component boundaries.

The engine never prints. Each stage hands a :class:`ScoringEvent` to an
injectable hook; :func:`log_event` is the default and writes through
``logging``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Literal

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


Stage = Literal["scored", "ranked", "analyzed", "report_built"]


class ScoringEvent(BaseModel):
    """A single boundary event, e.g. 'scorer produced 18 results'."""

    model_config = ConfigDict(frozen=True)

    stage: Stage
    detail: dict[str, Any] = Field(default_factory=dict)


EventHook = Callable[[ScoringEvent], None]


def log_event(event: ScoringEvent) -> None:
    """Default hook: one log record per event."""
    logger.info("stage=%s %s", event.stage, event.detail)


class EventCollector:
    """Hook that keeps every event in memory (tests, dashboard diagnostics)."""

    def __init__(self) -> None:
        self.events: list[ScoringEvent] = []

    def __call__(self, event: ScoringEvent) -> None:
        self.events.append(event)

    def stages(self) -> list[str]:
        return [e.stage for e in self.events]


def emit(hook: EventHook | None, stage: Stage, **detail: Any) -> None:
    (hook or log_event)(ScoringEvent(stage=stage, detail=detail))
