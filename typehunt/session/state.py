"""
Session State - The single owned aggregate for one challenge.

A session represents one timed run:
- Created when the player starts a mode
- Mutated by the tracker (score, target, answered words)
  and by the clock (remaining seconds)
- Left readable after it ends, cleared on reset

Sessions are EPHEMERAL: no score survives a reset.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


NO_TARGET = "---"  # Sentinel shown while there is nothing to type


class GameMode(Enum):
    """Where target words come from."""
    CAMERA = "camera"
    LIST = "list"


class GameStatus(Enum):
    """Lifecycle state of a session."""
    IDLE = "idle"  # Mode selection
    RUNNING = "running"  # Countdown active, input accepted
    ENDED = "ended"  # Final score readable, waiting for reset


class EndReason(Enum):
    """Why a session ended."""
    TIMEOUT = "timeout"  # Countdown reached zero
    CLEARED = "cleared"  # Every list word answered
    STOPPED = "stopped"  # Player stopped the game


@dataclass
class Session:
    """
    State of one challenge run.

    Owned by GameController; every other component receives it
    by reference and mutates it only through controller calls.
    """
    mode: GameMode = GameMode.LIST
    status: GameStatus = GameStatus.IDLE
    score: int = 0
    remaining_seconds: int = 0
    target_word: str = NO_TARGET
    answered_words: set[str] = field(default_factory=set)
    last_detection_timestamp: float | None = None  # None = never

    # Display text
    feedback: str = ""
    status_message: str = ""
    typed_text: str = ""

    end_reason: EndReason | None = None

    @property
    def has_target(self) -> bool:
        return self.target_word != NO_TARGET

    @property
    def is_running(self) -> bool:
        return self.status == GameStatus.RUNNING

    def clear(self, duration: int = 0) -> None:
        """Reset every field to its starting value."""
        self.mode = GameMode.LIST
        self.status = GameStatus.IDLE
        self.score = 0
        self.remaining_seconds = duration
        self.target_word = NO_TARGET
        self.answered_words.clear()
        self.last_detection_timestamp = None
        self.feedback = ""
        self.status_message = ""
        self.typed_text = ""
        self.end_reason = None

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            mode=self.mode,
            status=self.status,
            score=self.score,
            remaining_seconds=self.remaining_seconds,
            target_word=self.target_word,
            answered_words=sorted(self.answered_words),
            feedback=self.feedback,
            status_message=self.status_message,
            typed_text=self.typed_text,
            end_reason=self.end_reason,
        )


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Immutable copy of the session for the presentation boundary.
    """
    mode: GameMode
    status: GameStatus
    score: int
    remaining_seconds: int
    target_word: str
    answered_words: list[str]
    feedback: str = ""
    status_message: str = ""
    typed_text: str = ""
    end_reason: EndReason | None = None
    target_display: str = ""
