"""
Session Module - Runs one timed typing challenge.

A session represents one run:
- Created when the player picks a mode
- Driven by two independent clocks: the render loop (per frame)
  and the countdown (once per second)
- Ended by the countdown, by clearing every word, or by the player

Sessions are EPHEMERAL:
- No persistence of scores
- reset() wipes everything except camera/detector readiness

All mutation goes through GameController.
"""

from .state import Session, SessionSnapshot, GameMode, GameStatus, EndReason, NO_TARGET
from .tracker import ChallengeTracker, InputResult, TrackerOutcome
from .clock import SessionClock
from .presenter import Presenter, RecordingPresenter, RenderCommand
from .render_loop import RenderLoop
from .controller import GameController, StartResult, StartError

__all__ = [
    "Session",
    "SessionSnapshot",
    "GameMode",
    "GameStatus",
    "EndReason",
    "NO_TARGET",
    "ChallengeTracker",
    "InputResult",
    "TrackerOutcome",
    "SessionClock",
    "Presenter",
    "RecordingPresenter",
    "RenderCommand",
    "RenderLoop",
    "GameController",
    "StartResult",
    "StartError",
]
