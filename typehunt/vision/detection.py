"""
Detection Results - Data structures for detector output.

A detection pass produces a flat list of DetectedObject.
Passes are unrelated to each other:
- No object identity across frames
- No tracking or merging
- Each pass replaces the previous one wholesale
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class BoundingBox:
    """Box in frame pixel space."""
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_sequence(cls, values: Any) -> BoundingBox:
        """Build from an (x, y, w, h) sequence, as most detectors emit."""
        x, y, width, height = values
        return cls(float(x), float(y), float(width), float(height))

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class DetectedObject:
    """
    One object from a detection pass.
    """
    label: str
    confidence: float  # 0-1
    bbox: BoundingBox = BoundingBox(0.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DetectedObject:
        """
        Create from a raw detector dict.

        Accepts both {"label", "confidence", "bbox"} and the
        {"class", "score", "bbox"} shape of COCO-SSD style models.
        """
        label = data.get("label", data.get("class"))
        confidence = data.get("confidence", data.get("score", 0.0))
        if label is None:
            raise ValueError(f"Detection has no label: {data!r}")
        bbox = data.get("bbox")
        return cls(
            label=str(label),
            confidence=float(confidence),
            bbox=BoundingBox.from_sequence(bbox) if bbox is not None else BoundingBox(0.0, 0.0, 0.0, 0.0),
        )

    @property
    def percent(self) -> int:
        """Confidence as a rounded percentage for labels."""
        return round(self.confidence * 100)


def filter_by_threshold(
    detections: list[DetectedObject],
    threshold: float,
) -> list[DetectedObject]:
    """Keep detections strictly above the confidence threshold."""
    return [d for d in detections if d.confidence > threshold]


def coerce_detections(raw: Any) -> list[DetectedObject]:
    """
    Normalize detector output to DetectedObject instances.

    Entries may already be DetectedObject or raw dicts in either
    shape accepted by DetectedObject.from_dict. Anything else raises.
    """
    if raw is None:
        return []
    return [
        d if isinstance(d, DetectedObject) else DetectedObject.from_dict(d)
        for d in raw
    ]
