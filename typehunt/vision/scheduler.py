"""
Detection Scheduler - Throttles calls into the object detector.

The render loop ticks at frame rate (~60 Hz) but the detector is slow
and expensive. The scheduler:
1. Dispatches at most once per detection interval
2. Never has more than one call in flight (extra ticks are dropped)
3. Stamps the dispatch time on dispatch, not on completion
4. Discards completions that were cancelled or superseded

Timestamps are milliseconds from the host's monotonic clock.
"""

from __future__ import annotations
from collections.abc import Callable
from typing import Any
import asyncio
import logging

from .detection import DetectedObject, coerce_detections, filter_by_threshold
from .detector import ObjectDetector

logger = logging.getLogger(__name__)


class DetectionScheduler:
    """
    Fixed-interval, single-flight wrapper around an ObjectDetector.

    Usage:
        scheduler = DetectionScheduler(detector, interval_ms=2000)

        # every frame:
        if scheduler.due(now):
            detections = await scheduler.tick(now, frame)
    """

    def __init__(
        self,
        detector: ObjectDetector,
        interval_ms: float = 2000,
        threshold: float = 0.6,
        on_dispatch: Callable[[float], None] | None = None,
    ):
        self.detector = detector
        self.interval_ms = interval_ms
        self.threshold = threshold
        self.on_dispatch = on_dispatch

        self.last_detection_timestamp: float | None = None
        self._in_flight = False
        self._token = 0
        self.dispatch_count = 0

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def token(self) -> int:
        """Attempt token of the newest dispatch."""
        return self._token

    def due(self, now: float) -> bool:
        """Would a tick at `now` dispatch a detector call?"""
        if self._in_flight:
            return False
        if self.last_detection_timestamp is None:
            return True
        return now - self.last_detection_timestamp > self.interval_ms

    async def tick(self, now: float, frame: Any) -> list[DetectedObject] | None:
        """
        Run a detection pass if one is due.

        Returns None when nothing was dispatched or when the result
        was invalidated while in flight. A detector failure, or output
        that cannot be read as detections, counts as an empty pass.
        """
        if not self.due(now):
            return None

        token = self._dispatch(now)
        try:
            detections = coerce_detections(await self.detector.detect(frame))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("Detection pass %d failed: %s", token, e)
            detections = []
        finally:
            if self.is_current(token):
                self._in_flight = False

        if not self.is_current(token):
            logger.debug("Discarding stale detection pass %d", token)
            return None

        filtered = filter_by_threshold(detections, self.threshold)
        logger.debug(
            "Detection pass %d: %d/%d above threshold",
            token, len(filtered), len(detections),
        )
        return filtered

    def is_current(self, token: int) -> bool:
        return token == self._token

    def cancel(self) -> None:
        """Invalidate any in-flight pass; its result will be dropped."""
        self._token += 1
        self._in_flight = False

    def reset(self) -> None:
        """Cancel and forget the last dispatch time."""
        self.cancel()
        self.last_detection_timestamp = None

    def _dispatch(self, now: float) -> int:
        self._token += 1
        self._in_flight = True
        self.last_detection_timestamp = now
        self.dispatch_count += 1
        if self.on_dispatch:
            self.on_dispatch(now)
        return self._token
