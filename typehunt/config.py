"""
Game Configuration - Tunable constants for a challenge session.

Defaults:
- 60 second sessions
- one detection pass every 2000 ms
- detections at or below 0.6 confidence are dropped

Hosts can override any value through TYPEHUNT_* environment variables.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import os

from .words.coco import ALLOWED_CLASSES


SESSION_DURATION = 60
DETECTION_INTERVAL_MS = 2000
DETECTION_THRESHOLD = 0.6


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class GameConfig:
    """
    Configuration for one GameController.
    """
    # Timing
    session_duration: int = SESSION_DURATION  # seconds
    detection_interval_ms: int = DETECTION_INTERVAL_MS
    frame_interval: float = 1 / 60  # seconds between render ticks
    tick_seconds: float = 1.0  # countdown period

    # Detection
    detection_threshold: float = DETECTION_THRESHOLD

    # Keep the camera target when it leaves the frame
    camera_target_persistence: bool = True

    # Words
    vocabulary: list[str] = field(default_factory=lambda: list(ALLOWED_CLASSES))
    cycle_vocabulary: bool = False
    untranslated_labels: str = "raw"  # "raw" or "ineligible"

    # Input
    reject_paste: bool = False

    # Reproducible draws
    random_seed: int | None = None

    def validate(self) -> None:
        """Raise ValueError for values the controller cannot run with."""
        if self.session_duration <= 0:
            raise ValueError("session_duration must be positive")
        if self.detection_interval_ms < 0:
            raise ValueError("detection_interval_ms must not be negative")
        if not 0.0 <= self.detection_threshold <= 1.0:
            raise ValueError("detection_threshold must be within [0, 1]")
        if self.frame_interval <= 0 or self.tick_seconds <= 0:
            raise ValueError("frame_interval and tick_seconds must be positive")
        if self.untranslated_labels not in ("raw", "ineligible"):
            raise ValueError("untranslated_labels must be 'raw' or 'ineligible'")

    @classmethod
    def from_env(cls, **overrides) -> GameConfig:
        """Build a config from TYPEHUNT_* environment variables."""
        values: dict = {}
        if duration := os.getenv("TYPEHUNT_SESSION_DURATION"):
            values["session_duration"] = int(duration)
        if interval := os.getenv("TYPEHUNT_DETECTION_INTERVAL_MS"):
            values["detection_interval_ms"] = int(interval)
        if threshold := os.getenv("TYPEHUNT_DETECTION_THRESHOLD"):
            values["detection_threshold"] = float(threshold)
        if vocabulary := os.getenv("TYPEHUNT_VOCABULARY"):
            values["vocabulary"] = [w.strip() for w in vocabulary.split(",") if w.strip()]
        values["cycle_vocabulary"] = _env_bool("TYPEHUNT_CYCLE_VOCABULARY", False)
        values["reject_paste"] = _env_bool("TYPEHUNT_REJECT_PASTE", False)
        values.update(overrides)

        config = cls(**values)
        config.validate()
        return config
