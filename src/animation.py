"""
Virtual animation timeline.

Transitions interpolate numeric element attributes over a duration and fire
completion callbacks as continuations. Time only moves when the host calls
advance(), so everything runs on the caller's thread in a deterministic order.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)


def ease_linear(t: float) -> float:
    return t


def ease_quad_in_out(t: float) -> float:
    if t < 0.5:
        return 2 * t * t
    return 1 - (-2 * t + 2) ** 2 / 2


EASINGS = {
    "linear": ease_linear,
    "quad-in-out": ease_quad_in_out,
}


@dataclass(eq=False)
class Transition:
    """A scheduled change of one element's attributes."""

    element_id: str
    targets: dict
    start_time: float
    duration: float
    easing: Callable[[float], float] = ease_linear
    start_values: dict | None = None
    done: bool = False
    cancelled: bool = False
    callbacks: list = field(default_factory=list)

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    @property
    def started(self) -> bool:
        return self.start_values is not None

    def on_end(self, callback: Callable[["Transition"], None]) -> "Transition":
        """Register a continuation; runs once when the transition completes."""
        self.callbacks.append(callback)
        return self

    def value_at(self, name: str, now: float):
        target = self.targets[name]
        start = self.start_values.get(name)
        if not isinstance(target, (int, float)) or not isinstance(start, (int, float)):
            return target if now >= self.end_time else start
        if self.duration <= 0:
            return target
        progress = min(max((now - self.start_time) / self.duration, 0.0), 1.0)
        return start + (target - start) * self.easing(progress)


class TransitionGroup:
    """
    Completion signal for a batch of transitions.

    Fires `on_complete` once, after every member has ended. An empty group
    completes immediately.
    """

    def __init__(self, transitions: list[Transition], on_complete: Callable[[], None]):
        self._remaining = len(transitions)
        self._on_complete = on_complete
        self.completed = False

        if not transitions:
            self._complete()
            return
        for transition in transitions:
            transition.on_end(self._member_done)

    def _member_done(self, _transition: Transition) -> None:
        self._remaining -= 1
        if self._remaining == 0:
            self._complete()

    def _complete(self) -> None:
        self.completed = True
        self._on_complete()


class Timeline:
    """
    Scheduler for attribute transitions on a scene.

    Args:
        read: Callable(element_id, names) -> dict of current attribute values
        write: Callable(element_id, attrs) applying attribute values
    """

    def __init__(self, read: Callable[[str, list], dict], write: Callable[[str, dict], None]):
        self._read = read
        self._write = write
        self.now = 0.0
        self._transitions: list[Transition] = []

    @property
    def pending(self) -> list[Transition]:
        return list(self._transitions)

    def schedule(
        self,
        element_id: str,
        targets: dict,
        duration: float,
        delay: float = 0.0,
        easing: str = "linear",
    ) -> Transition:
        """
        Schedule a transition starting `delay` ms from now.

        Earlier unfinished transitions on the same element that animate any of
        the same attributes are interrupted; their callbacks never fire.
        """
        for existing in self._transitions:
            if existing.element_id == element_id and set(existing.targets) & set(targets):
                existing.cancelled = True
        self._transitions = [t for t in self._transitions if not t.cancelled]

        transition = Transition(
            element_id=element_id,
            targets=dict(targets),
            start_time=self.now + max(delay, 0.0),
            duration=max(duration, 0.0),
            easing=EASINGS[easing],
        )
        self._transitions.append(transition)
        return transition

    def cancel_element(self, element_id: str) -> None:
        """Abandon every transition on an element that is being removed."""
        for transition in self._transitions:
            if transition.element_id == element_id:
                transition.cancelled = True
        self._transitions = [t for t in self._transitions if not t.cancelled]

    def _next_event_time(self) -> float | None:
        times = [t.end_time if t.started else t.start_time for t in self._transitions]
        return min(times) if times else None

    def advance(self, ms: float) -> None:
        """
        Move the clock forward by `ms`, applying values and firing completions
        in time order. Continuations may schedule further transitions, which
        are picked up within the same call.
        """
        target_time = self.now + ms

        while True:
            next_time = self._next_event_time()
            if next_time is None or next_time > target_time:
                break
            self.now = max(self.now, next_time)
            self._process_events()

        self.now = target_time
        for transition in self._transitions:
            if transition.started:
                self._write(
                    transition.element_id,
                    {name: transition.value_at(name, self.now) for name in transition.targets},
                )

    def _process_events(self) -> None:
        # Starts first so zero-length transitions begin and end in one step
        for transition in list(self._transitions):
            if not transition.started and transition.start_time <= self.now:
                transition.start_values = self._read(transition.element_id, list(transition.targets))

        finished = [t for t in self._transitions if t.started and t.end_time <= self.now]
        for transition in finished:
            if transition.cancelled:
                continue
            self._write(transition.element_id, dict(transition.targets))
            transition.done = True
            self._transitions.remove(transition)
            for callback in transition.callbacks:
                callback(transition)

    def run_until_idle(self, limit: float = 60000.0) -> None:
        """
        Advance until nothing is scheduled, or until `limit` ms have passed
        (repeating animations such as the hover pulse never go idle).
        """
        deadline = self.now + limit
        while self._transitions:
            next_time = self._next_event_time()
            if next_time > deadline:
                self.advance(deadline - self.now)
                logger.debug("Timeline still busy after %.0f ms", limit)
                return
            self.advance(next_time - self.now)
