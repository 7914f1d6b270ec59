"""Time-interpolated progress value for the quiz progress bar.

The animator is independent of :class:`~museum_quiz.quiz.models.QuizSession`.
The controller only tells it where to go; front ends sample ``value()`` or
``fraction()`` whenever they redraw. Retargeting mid-flight starts from the
value currently on screen, so rapid advances never snap back to zero.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

Clock = Callable[[], float]
Easing = Callable[[float], float]

DEFAULT_DURATION_MS = 1000


def linear(t: float) -> float:
    return t


def ease_in_out(t: float) -> float:
    """Cubic ease-in-out curve."""
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


EASINGS: dict[str, Easing] = {
    "linear": linear,
    "ease_in_out": ease_in_out,
}


@dataclass(frozen=True)
class _Segment:
    start_value: float
    target: float
    started_at: float


class ProgressAnimator:
    """Animate a value towards a target over a fixed duration."""

    def __init__(
        self,
        total: int,
        *,
        duration_ms: int = DEFAULT_DURATION_MS,
        easing: Easing = linear,
        clock: Clock = time.monotonic,
    ) -> None:
        if total <= 0:
            raise ValueError("Progress total must be positive.")
        if duration_ms < 0:
            raise ValueError("Animation duration cannot be negative.")
        self.total = total
        self.duration = duration_ms / 1000.0
        self._easing = easing
        self._clock = clock
        self._segment = _Segment(0.0, 0.0, clock())

    @property
    def target(self) -> float:
        return self._segment.target

    def value(self, now: float | None = None) -> float:
        now = self._clock() if now is None else now
        segment = self._segment
        elapsed = now - segment.started_at
        if self.duration == 0 or elapsed >= self.duration:
            return segment.target
        progress = self._easing(max(0.0, elapsed / self.duration))
        return segment.start_value + (
            segment.target - segment.start_value
        ) * progress

    def fraction(self, now: float | None = None) -> float:
        """Return the current value as a share of ``total`` in ``[0, 1]``."""
        return min(1.0, max(0.0, self.value(now) / self.total))

    def is_animating(self, now: float | None = None) -> bool:
        now = self._clock() if now is None else now
        return (
            self.duration > 0
            and now - self._segment.started_at < self.duration
            and self._segment.start_value != self._segment.target
        )

    def retarget(self, target: float, now: float | None = None) -> None:
        now = self._clock() if now is None else now
        self._segment = _Segment(
            start_value=self.value(now),
            target=float(target),
            started_at=now,
        )
