"""
Hover highlight state machine.

Tracks which cell, month or weekday is hovered and guards every pointer event
with a single in-flight flag: while a highlight transition is animating, enter
and leave events are dropped rather than queued.
"""

import logging
from dataclasses import replace
from datetime import date
from enum import Enum

from src.models import HighlightKind, HighlightState

logger = logging.getLogger(__name__)

DIMMED_OPACITY = 0.1
FULL_OPACITY = 1.0


class HighlightPhase(str, Enum):
    IDLE = "idle"
    HIGHLIGHTING = "highlighting"
    DIMMING = "dimming"


class HighlightController:
    """Owns the HighlightState; nothing else mutates it."""

    def __init__(self):
        self._state = HighlightState()

    @property
    def state(self) -> HighlightState:
        return self._state

    @property
    def phase(self) -> HighlightPhase:
        if self._state.transition_in_flight:
            return HighlightPhase.DIMMING
        if self._state.active_kind == HighlightKind.NONE:
            return HighlightPhase.IDLE
        return HighlightPhase.HIGHLIGHTING

    @property
    def in_flight(self) -> bool:
        return self._state.transition_in_flight

    def pointer_enter(self, kind: HighlightKind, key) -> bool:
        """
        Activate a highlight.

        Args:
            kind: CELL, MONTH or WEEKDAY
            key: Cell date, (year, month) tuple, or weekday row

        Returns:
            True if the state changed, False if the event was dropped
        """
        if self._state.transition_in_flight:
            logger.debug("Dropped pointer enter on %s %r: transition in flight", kind.value, key)
            return False
        if kind == HighlightKind.NONE:
            raise ValueError("pointer_enter needs a cell, month or weekday kind")

        self._state = replace(self._state, active_kind=kind, active_key=key)
        return True

    def pointer_leave(self) -> bool:
        """
        Clear the active highlight.

        Returns:
            True if the state changed, False if the event was dropped
        """
        if self._state.transition_in_flight:
            logger.debug("Dropped pointer leave: transition in flight")
            return False

        self._state = replace(self._state, active_kind=HighlightKind.NONE, active_key=None)
        return True

    def begin_transition(self) -> None:
        self._state = replace(self._state, transition_in_flight=True)

    def end_transition(self) -> None:
        """Release the guard; called from an animation completion callback."""
        self._state = replace(self._state, transition_in_flight=False)

    def reset(self) -> None:
        """Return to idle with the guard released. Safe to call repeatedly."""
        self._state = HighlightState()

    def opacity_for(self, day: date, row: int) -> float:
        """
        Opacity a cell should animate to under the current highlight.

        Args:
            day: The cell's date
            row: The cell's weekday row

        Returns:
            1.0 for highlighted or unaffected cells, 0.1 for dimmed ones
        """
        kind = self._state.active_kind
        key = self._state.active_key

        if kind == HighlightKind.MONTH:
            return FULL_OPACITY if (day.year, day.month) == key else DIMMED_OPACITY
        if kind == HighlightKind.WEEKDAY:
            return FULL_OPACITY if row == key else DIMMED_OPACITY
        return FULL_OPACITY
