"""Scripted multi-step design progress as a cancellable state machine.

The run walks a fixed list of steps, waiting ``step_delay`` seconds before
each one and reporting it through the checkpoint callback. The cancellation
token is checked between steps, so a cancelled run stops before the next
step is reported.
"""

from __future__ import annotations

from dataclasses import dataclass
import threading
from typing import Callable, Sequence

from designer.logging.checkpoints import log_checkpoint


@dataclass(frozen=True)
class ProgressStep:
    message: str
    percent: int


DEFAULT_STEPS: tuple[ProgressStep, ...] = (
    ProgressStep("Analyzing requirements...", 20),
    ProgressStep("Generating floor plan...", 40),
    ProgressStep("Calculating materials...", 60),
    ProgressStep("Estimating costs...", 80),
    ProgressStep("Finalizing design...", 100),
)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Step:
    index: int
    percent: int


@dataclass(frozen=True)
class Done:
    pass


@dataclass(frozen=True)
class Cancelled:
    completed_steps: int


ProgressState = Idle | Step | Done | Cancelled


class CancellationToken:
    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds; return early with True on cancel."""
        return self._event.wait(timeout)


class DesignProgress:
    def __init__(
        self,
        steps: Sequence[ProgressStep] = DEFAULT_STEPS,
        *,
        step_delay: float = 1.5,
        token: CancellationToken | None = None,
        on_state: Callable[[ProgressState], None] | None = None,
    ) -> None:
        if not steps:
            raise ValueError("DesignProgress needs at least one step")
        self.steps = tuple(steps)
        self.step_delay = max(0.0, step_delay)
        self.token = token or CancellationToken()
        self._on_state = on_state
        self._state: ProgressState = Idle()

    @property
    def state(self) -> ProgressState:
        return self._state

    @property
    def percent(self) -> int:
        state = self._state
        if isinstance(state, Step):
            return state.percent
        if isinstance(state, Done):
            return 100
        if isinstance(state, Cancelled) and state.completed_steps:
            return self.steps[state.completed_steps - 1].percent
        return 0

    def cancel(self) -> None:
        self.token.cancel()

    def run(self) -> ProgressState:
        if not isinstance(self._state, Idle):
            raise RuntimeError("Progress run has already been started")

        for index, step in enumerate(self.steps):
            if self._wait_or_cancelled():
                return self._transition(Cancelled(completed_steps=index))
            self._transition(Step(index=index, percent=step.percent))
            log_checkpoint(step.message, step.percent)

        return self._transition(Done())

    def _wait_or_cancelled(self) -> bool:
        if self.token.cancelled:
            return True
        if self.step_delay:
            return self.token.wait(self.step_delay)
        return False

    def _transition(self, state: ProgressState) -> ProgressState:
        self._state = state
        if self._on_state is not None:
            self._on_state(state)
        return state


__all__ = [
    "CancellationToken",
    "Cancelled",
    "DEFAULT_STEPS",
    "DesignProgress",
    "Done",
    "Idle",
    "ProgressState",
    "ProgressStep",
    "Step",
]
