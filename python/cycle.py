"""
Cycle detection for deterministic simulations.

A pure step function applied to a finite state space eventually repeats.
Once the first repeat is found, the state after an arbitrarily large number
of steps is reached by simulating only the remainder modulo the period.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, TypeVar

from grid_types import PuzzleError

logger = logging.getLogger(__name__)

S = TypeVar("S")

__all__ = ["Cycle", "CycleDetector", "state_after"]


@dataclass(frozen=True)
class Cycle:
    """States repeat every `period` steps from step `start` onwards."""

    start: int
    period: int

    @property
    def end(self) -> int:
        return self.start + self.period


class CycleDetector(Generic[S]):
    """
    Wraps a step function and detects when the simulated state repeats.

    The fingerprint must be a faithful summary of the full state: two states
    with equal fingerprints are treated as identical. It defaults to the
    state itself, which must then be hashable.
    """

    def __init__(
        self,
        step: Callable[[S], S],
        fingerprint: Callable[[S], Hashable] | None = None,
    ) -> None:
        self.step = step
        self.fingerprint: Callable[[S], Hashable] = fingerprint or (lambda state: state)

    def _run(
        self, initial: S, stop_at: int | None
    ) -> tuple[S, int, Cycle | None]:
        """
        Step from `initial` until a state repeats or `stop_at` steps are done.

        Returns:
            (state, steps_taken, cycle) where cycle is None if `stop_at` was
            reached before any repeat
        """
        history: dict[Hashable, int] = {}
        state = initial
        n = 0
        while True:
            key = self.fingerprint(state)
            if key in history:
                cycle = Cycle(history[key], n - history[key])
                logger.info("Found loop from %d to %d", cycle.start, cycle.end)
                return state, n, cycle
            if stop_at is not None and n >= stop_at:
                return state, n, None
            history[key] = n
            state = self.step(state)
            n += 1

    def detect(self, initial: S, limit: int | None = None) -> Cycle:
        """
        Find the first repeated state reachable from `initial`.

        Args:
            initial: Starting state (step 0)
            limit: Maximum number of steps to simulate before giving up

        Returns:
            The cycle (start, period)

        Raises:
            PuzzleError: if no state repeats within `limit` steps
        """
        _, steps, cycle = self._run(initial, limit)
        if cycle is None:
            raise PuzzleError(f"No cycle found within {steps} steps")
        return cycle

    def state_after(self, initial: S, steps: int) -> S:
        """
        Return the state reached after `steps` applications of the step function.

        If `steps` is reached before any state repeats, the plainly simulated
        state is returned. Otherwise only `(steps - start) % period` further
        steps are simulated from the first repeated state.
        """
        if steps < 0:
            raise ValueError(f"steps must be non-negative, got {steps}")

        state, _, cycle = self._run(initial, steps)
        if cycle is None:
            return state

        remaining = (steps - cycle.start) % cycle.period
        logger.debug("Skipping to step %d, %d steps remaining", steps, remaining)
        for _ in range(remaining):
            state = self.step(state)
        return state


def state_after(
    initial: S,
    step: Callable[[S], S],
    steps: int,
    fingerprint: Callable[[S], Hashable] | None = None,
) -> S:
    """Convenience wrapper around CycleDetector.state_after."""
    return CycleDetector(step, fingerprint).state_after(initial, steps)
