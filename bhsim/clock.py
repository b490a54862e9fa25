#!/usr/bin/env python3
"""
Frame-driven simulation clock.

The host (the pygame viewport loop) owns the per-display-frame signal. The
clock registers a callback with a FrameScheduler, and every time that callback
fires it steps the simulation (unless paused), requests a render and then
re-registers itself for the next frame. It holds no simulation data.

Stopping cancels the pending request, so nothing touches simulation state
after teardown. A callback that slips through anyway (a stale handle already
dequeued by the host) sees the clock stopped and returns without work.
"""
import itertools
import logging
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameScheduler:
    """Host-side source of display frames, in the style of requestAnimationFrame."""

    def request_frame(self, callback: FrameCallback) -> int:
        raise NotImplementedError

    def cancel_frame(self, handle: int) -> None:
        raise NotImplementedError


class ManualFrameScheduler(FrameScheduler):
    """
    Scheduler pumped explicitly by the host loop.

    Callbacks requested during a pump run on the next pump, never the current
    one, so a callback that re-requests itself runs exactly once per frame.
    """

    def __init__(self):
        self._handles = itertools.count(1)
        self._pending: Dict[int, FrameCallback] = {}

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def pump(self) -> int:
        """Run every callback queued before this call. Returns how many ran."""
        due, self._pending = self._pending, {}
        for callback in due.values():
            callback()
        return len(due)


class SimulationClock:
    """
    Drives one integration step and one render per host frame.

    Args:
        scheduler: Source of frame callbacks.
        step: Advances the simulation by one nominal step.
        render: Draws the current state.
        is_paused: Consulted every frame; a paused clock still renders.
    """

    def __init__(self, scheduler: FrameScheduler, step: FrameCallback,
                 render: FrameCallback, is_paused: Callable[[], bool]):
        self.scheduler = scheduler
        self._step = step
        self._render = render
        self._is_paused = is_paused
        self._handle: Optional[int] = None
        self.frame_count = 0

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        if self.running:
            return
        self._handle = self.scheduler.request_frame(self._on_frame)
        logger.info("Simulation clock started")

    def stop(self) -> None:
        if not self.running:
            return
        self.scheduler.cancel_frame(self._handle)
        self._handle = None
        logger.info("Simulation clock stopped after %d frames", self.frame_count)

    def tick(self) -> None:
        """One frame of work: step unless paused, then render."""
        if not self._is_paused():
            self._step()
        self._render()
        self.frame_count += 1

    def _on_frame(self) -> None:
        if not self.running:
            return
        self.tick()
        # render() may have stopped the clock (e.g. window closed)
        if self.running:
            self._handle = self.scheduler.request_frame(self._on_frame)
