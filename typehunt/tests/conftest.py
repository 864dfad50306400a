"""
Pytest fixtures for Typehunt tests.
"""

import random

import pytest

from ..config import GameConfig
from ..session import GameController, RecordingPresenter, Session, GameMode, GameStatus
from ..vision import MockObjectDetector, StaticFrameSource, DetectedObject, BoundingBox


def detection(label: str, confidence: float = 0.9, x: float = 0, y: float = 0) -> DetectedObject:
    """Build a detection with a small box."""
    return DetectedObject(label=label, confidence=confidence, bbox=BoundingBox(x, y, 40, 30))


@pytest.fixture
def running_list_session() -> Session:
    """A running list-mode session with a full countdown."""
    return Session(mode=GameMode.LIST, status=GameStatus.RUNNING, remaining_seconds=60)


@pytest.fixture
def running_camera_session() -> Session:
    """A running camera-mode session with a full countdown."""
    return Session(mode=GameMode.CAMERA, status=GameStatus.RUNNING, remaining_seconds=60)


@pytest.fixture
def cat_dog_config() -> GameConfig:
    """The two-word vocabulary from the list-mode scenario."""
    return GameConfig(vocabulary=["cat", "dog"], random_seed=1)


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def list_controller(cat_dog_config: GameConfig, presenter: RecordingPresenter) -> GameController:
    """List-mode controller without camera."""
    return GameController(cat_dog_config, presenter=presenter, rng=random.Random(1))


@pytest.fixture
def camera_detector() -> MockObjectDetector:
    """Detector that keeps seeing a cup."""
    return MockObjectDetector([[detection("cup")]])


@pytest.fixture
def camera_controller(camera_detector: MockObjectDetector, presenter: RecordingPresenter) -> GameController:
    """Camera-ready controller with COCO vocabulary."""
    return GameController(
        GameConfig(random_seed=3),
        frame_source=StaticFrameSource("frame-0"),
        detector=camera_detector,
        presenter=presenter,
        rng=random.Random(3),
    )
