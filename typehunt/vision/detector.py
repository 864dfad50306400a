"""
Detector Interfaces - The camera and model boundary.

Acquiring a camera stream and loading a detection model are not part
of this package. Hosts plug them in through two small interfaces:
- FrameSource: hands out the current frame
- ObjectDetector: turns a frame into detections, asynchronously

Implementations here:
- StaticFrameSource: always returns the same frame handle
- MockObjectDetector: replays scripted detection passes (testing, demo)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any
import asyncio

from .detection import DetectedObject, coerce_detections


class FrameSource(ABC):
    """
    Abstract source of camera frames.

    Camera mode refuses to start until is_ready() is True.
    """

    @abstractmethod
    def current_frame(self) -> Any:
        """Return an opaque handle to the current frame."""
        pass

    def is_ready(self) -> bool:
        return self.current_frame() is not None


class ObjectDetector(ABC):
    """
    Abstract object detector.

    detect() may take arbitrarily long. The scheduler guarantees
    at most one call is outstanding at a time.
    """

    @abstractmethod
    async def detect(self, frame: Any) -> list[DetectedObject]:
        """Run one detection pass on a frame."""
        pass

    def is_ready(self) -> bool:
        return True


class StaticFrameSource(FrameSource):
    """Frame source with a fixed frame handle."""

    def __init__(self, frame: Any = "frame"):
        self.frame = frame

    def current_frame(self) -> Any:
        return self.frame


class MockObjectDetector(ObjectDetector):
    """
    Mock detector for testing.

    Replays a script of detection passes, one per call. After the
    script runs out the last pass repeats. Raw dicts in the script
    are converted with DetectedObject.from_dict; an Exception instance
    in the script is raised for that call.
    """

    def __init__(
        self,
        script: Iterable[Any] | None = None,
        delay: float = 0.0,
        ready: bool = True,
    ):
        self.script: list[Any] = list(script or [])
        self.delay = delay
        self.ready = ready
        self.calls = 0
        self.frames: list[Any] = []

    async def detect(self, frame: Any) -> list[DetectedObject]:
        self.calls += 1
        self.frames.append(frame)
        if self.delay:
            await asyncio.sleep(self.delay)

        if not self.script:
            return []
        index = min(self.calls - 1, len(self.script) - 1)
        step = self.script[index]
        if isinstance(step, Exception):
            raise step
        return coerce_detections(step)

    def is_ready(self) -> bool:
        return self.ready
