"""
Render Loop - The per-frame driver for camera mode.

Every frame:
1. Redraw the latest detection snapshot (target highlighted)
2. Ask the scheduler whether a detection pass is due
3. If so, run it in the background; its result replaces the
   snapshot and is forwarded to the controller

The loop is a plain while-loop with one await per iteration.
Stopping is a flag checked at the top of each iteration; once
stopped the loop does no work at all.
"""

from __future__ import annotations
from collections.abc import Callable
import asyncio
import logging
import time

from .state import Session
from .presenter import Presenter, RenderCommand, TARGET_COLOR, DETECTION_COLOR
from ..vision.detection import DetectedObject
from ..vision.detector import FrameSource
from ..vision.scheduler import DetectionScheduler

logger = logging.getLogger(__name__)


def monotonic_ms() -> float:
    return time.monotonic() * 1000


class RenderLoop:
    """
    Cooperative render/detect loop.

    Usage:
        loop = RenderLoop(session, scheduler, frames, presenter,
                          on_detections=controller.apply_detections)
        loop.start()   # inside a running event loop
        ...
        loop.stop()
    """

    def __init__(
        self,
        session: Session,
        scheduler: DetectionScheduler,
        frame_source: FrameSource,
        presenter: Presenter,
        on_detections: Callable[[list[DetectedObject]], None],
        frame_interval: float = 1 / 60,
        clock: Callable[[], float] = monotonic_ms,
    ):
        self.session = session
        self.scheduler = scheduler
        self.frame_source = frame_source
        self.presenter = presenter
        self.on_detections = on_detections
        self.frame_interval = frame_interval
        self.clock = clock

        # Latest completed detection pass, drawn every frame
        self.snapshot: list[DetectedObject] = []

        self._running = False
        self._task: asyncio.Task | None = None
        self._detection_task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        self.stop()
        self._running = True
        self._task = asyncio.get_running_loop().create_task(self.run())

    def arm(self) -> None:
        """Allow manual tick() calls without scheduling the loop task."""
        self._running = True

    async def run(self) -> None:
        while self._running and self.session.is_running:
            self.tick(self.clock())
            await asyncio.sleep(self.frame_interval)
        self._running = False

    def tick(self, now: float) -> None:
        """One frame: redraw, then dispatch detection if due."""
        if not self._running or not self.session.is_running:
            return

        self.presenter.render(self.render_commands())

        if self.scheduler.due(now):
            frame = self.frame_source.current_frame()
            self._detection_task = asyncio.get_running_loop().create_task(
                self._detect(now, frame)
            )

    def render_commands(self) -> list[RenderCommand]:
        """
        Build the draw list for the current snapshot.

        Answered words are not drawn, except the current target.
        """
        target = self.session.target_word
        answered = self.session.answered_words

        commands = [RenderCommand(kind="clear"), RenderCommand(kind="draw_frame")]
        for detection in self.snapshot:
            if detection.label in answered and detection.label != target:
                continue
            is_target = detection.label == target
            commands.append(RenderCommand(
                kind="draw_box",
                label=detection.label,
                text=f"{detection.label} ({detection.percent}%)",
                bbox=detection.bbox.as_tuple(),
                color=TARGET_COLOR if is_target else DETECTION_COLOR,
                highlighted=is_target,
            ))
        return commands

    def stop(self) -> None:
        """Stop rescheduling and drop any in-flight detection."""
        self._running = False
        self.scheduler.cancel()

        current = _current_task()
        for task in (self._task, self._detection_task):
            if task is not None and not task.done() and task is not current:
                task.cancel()
        self._task = None
        self._detection_task = None

    def clear(self) -> None:
        self.snapshot = []

    async def _detect(self, now: float, frame) -> None:
        detections = await self.scheduler.tick(now, frame)
        if detections is None:
            return
        if not self._running or not self.session.is_running:
            logger.debug("Dropping detection pass that finished after stop")
            return
        self.snapshot = detections
        self.on_detections(detections)


def _current_task() -> asyncio.Task | None:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None
