"""
Presentation Boundary - Where session state leaves the core.

The controller never draws pixels or touches widgets. It hands:
- a render command list on every frame (camera mode)
- a SessionSnapshot after every state change
- the final score when a session ends

RecordingPresenter keeps everything in memory; the API host and the
tests read from it.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from .state import SessionSnapshot, EndReason


TARGET_COLOR = "#E91E63"
DETECTION_COLOR = "#00FFFF"


@dataclass(frozen=True)
class RenderCommand:
    """
    One drawing instruction.

    kind is "clear", "draw_frame" or "draw_box". Box commands carry
    the detection geometry and the label text to draw above it.
    """
    kind: str
    label: str | None = None
    text: str | None = None
    bbox: tuple[float, float, float, float] | None = None
    color: str | None = None
    highlighted: bool = False


class Presenter(ABC):
    """
    Abstract presentation boundary.
    """

    @abstractmethod
    def render(self, commands: list[RenderCommand]) -> None:
        """Draw one frame."""
        pass

    @abstractmethod
    def update(self, snapshot: SessionSnapshot) -> None:
        """Reflect score, timer, target, feedback and status text."""
        pass

    @abstractmethod
    def session_ended(self, score: int, reason: EndReason) -> None:
        """Show the end-of-session notice."""
        pass


class RecordingPresenter(Presenter):
    """
    In-memory presenter.

    Keeps the latest frame, every snapshot and every end notice.
    Listeners registered with subscribe() are called with each
    snapshot after it is recorded.
    """

    def __init__(self, max_history: int = 1000):
        self.max_history = max_history
        self.frames_rendered = 0
        self.last_frame: list[RenderCommand] = []
        self.snapshots: list[SessionSnapshot] = []
        self.endings: list[tuple[int, EndReason]] = []
        self._listeners: list[Callable[[SessionSnapshot], None]] = []

    @property
    def latest(self) -> SessionSnapshot | None:
        return self.snapshots[-1] if self.snapshots else None

    def subscribe(self, listener: Callable[[SessionSnapshot], None]) -> None:
        self._listeners.append(listener)

    def render(self, commands: list[RenderCommand]) -> None:
        self.frames_rendered += 1
        self.last_frame = list(commands)

    def update(self, snapshot: SessionSnapshot) -> None:
        self.snapshots.append(snapshot)
        if len(self.snapshots) > self.max_history:
            del self.snapshots[: len(self.snapshots) - self.max_history]
        for listener in list(self._listeners):
            listener(snapshot)

    def session_ended(self, score: int, reason: EndReason) -> None:
        self.endings.append((score, reason))
