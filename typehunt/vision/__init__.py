"""
Vision Layer - Live object detection as a word source.

The vision layer turns camera frames into short-lived lists of
detected objects. It never decides targets itself.

Architecture:
    Frame -> DetectionScheduler -> ObjectDetector -> [DetectedObject] -> ChallengeTracker

The detector is external:
- Hosts supply a FrameSource and an ObjectDetector
- The scheduler throttles and serializes calls into it
- Results are filtered by confidence and then forgotten on the next pass
"""

from .detection import DetectedObject, BoundingBox, coerce_detections, filter_by_threshold
from .detector import (
    FrameSource,
    ObjectDetector,
    StaticFrameSource,
    MockObjectDetector,
)
from .scheduler import DetectionScheduler

__all__ = [
    "DetectedObject",
    "BoundingBox",
    "coerce_detections",
    "filter_by_threshold",
    "FrameSource",
    "ObjectDetector",
    "StaticFrameSource",
    "MockObjectDetector",
    "DetectionScheduler",
]
