"""
Game Controller - The top-level state machine.

States:
    IDLE --start(mode)--> RUNNING --stop/timeout/cleared--> ENDED --reset--> IDLE

Every command and every asynchronous result enters through this
class. It applies the state change, then emits a snapshot to the
presenter, so listeners never observe a half-applied transition.

Mode is chosen at start and cannot change while running.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
import logging
import random

from ..config import GameConfig
from ..vision.detection import DetectedObject
from ..vision.detector import FrameSource, ObjectDetector
from ..vision.scheduler import DetectionScheduler
from ..words.source import ListSource, DetectionSource, LabelTranslator
from .clock import SessionClock
from .presenter import Presenter, RecordingPresenter
from .render_loop import RenderLoop, monotonic_ms
from .state import Session, SessionSnapshot, GameMode, GameStatus, EndReason, NO_TARGET
from .tracker import ChallengeTracker, InputResult, TrackerOutcome

logger = logging.getLogger(__name__)


class StartError(Enum):
    """Why start() was rejected."""
    ALREADY_RUNNING = "already_running"
    RESOURCE_UNAVAILABLE = "resource_unavailable"


@dataclass
class StartResult:
    """Result of a start request."""
    success: bool
    mode: GameMode
    error: StartError | None = None
    message: str = ""


class GameController:
    """
    Owns the Session and every component that touches it.

    Usage:
        controller = GameController(config, frame_source=camera, detector=model)

        # inside a running event loop
        result = controller.start(GameMode.LIST)
        controller.handle_input("ca")
        controller.handle_input("cat")
        ...
        controller.return_to_menu()
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        frame_source: FrameSource | None = None,
        detector: ObjectDetector | None = None,
        presenter: Presenter | None = None,
        translator: LabelTranslator | None = None,
        rng: random.Random | None = None,
        clock=monotonic_ms,
    ):
        self.config = config or GameConfig()
        self.config.validate()

        self.frame_source = frame_source
        self.detector = detector
        self.presenter = presenter or RecordingPresenter()
        self.translator = translator or LabelTranslator(
            untranslated=self.config.untranslated_labels
        )

        self.session = Session(remaining_seconds=self.config.session_duration)
        self.tracker = ChallengeTracker(
            self.session,
            rng=rng or random.Random(self.config.random_seed),
            persist_camera_target=self.config.camera_target_persistence,
        )
        self.list_source = ListSource(
            self.config.vocabulary, cycle=self.config.cycle_vocabulary
        )
        self.detection_source = DetectionSource(
            vocabulary=self.config.vocabulary, translator=self.translator
        )
        self.clock = SessionClock(
            self.session,
            on_expired=self._on_timeout,
            on_tick=lambda _remaining: self._emit(),
            tick_seconds=self.config.tick_seconds,
        )

        self.scheduler: DetectionScheduler | None = None
        self.render_loop: RenderLoop | None = None
        if detector is not None and frame_source is not None:
            self.scheduler = DetectionScheduler(
                detector,
                interval_ms=self.config.detection_interval_ms,
                threshold=self.config.detection_threshold,
                on_dispatch=self._on_dispatch,
            )
            self.render_loop = RenderLoop(
                self.session,
                self.scheduler,
                frame_source,
                self.presenter,
                on_detections=self.apply_detections,
                frame_interval=self.config.frame_interval,
                clock=clock,
            )

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def status(self) -> GameStatus:
        return self.session.status

    def camera_ready(self) -> bool:
        """Both camera and detector are present and report ready."""
        if self.render_loop is None:
            return False
        return self.frame_source.is_ready() and self.detector.is_ready()

    def snapshot(self) -> SessionSnapshot:
        snapshot = self.session.snapshot()
        target_display = ""
        if self.session.has_target:
            target_display = self.translator.translate(self.session.target_word)
        return replace(snapshot, target_display=target_display)

    # =========================================================================
    # Commands
    # =========================================================================

    def start(self, mode: GameMode | str, schedule: bool = True) -> StartResult:
        """
        Start a session in the given mode.

        Rejected while running, and in camera mode when the camera or
        detector is not ready; a rejected start leaves the session as
        it was. With schedule=False the clock and render loop are only
        armed, and the host drives tick() itself.
        """
        mode = GameMode(mode)
        session = self.session

        if session.status == GameStatus.RUNNING:
            logger.warning("Ignoring start(%s): a session is already running", mode.value)
            return StartResult(
                success=False,
                mode=mode,
                error=StartError.ALREADY_RUNNING,
                message="A game is already running.",
            )

        if mode == GameMode.CAMERA and not self.camera_ready():
            message = "The camera is not ready."
            logger.warning("Cannot start camera mode: camera or detector unavailable")
            if session.status == GameStatus.IDLE:
                session.status_message = message
                self._emit()
            return StartResult(
                success=False,
                mode=mode,
                error=StartError.RESOURCE_UNAVAILABLE,
                message=message,
            )

        self._clear()
        session.mode = mode
        session.status = GameStatus.RUNNING
        logger.info("Session started in %s mode", mode.value)

        if schedule:
            self.clock.start()
        else:
            self.clock.arm()

        if mode == GameMode.CAMERA:
            session.status_message = "Game started! Type what the camera sees."
            if schedule:
                self.render_loop.start()
            else:
                self.render_loop.arm()
        else:
            session.status_message = "Game started! Type the word shown."
            self._draw_list_target(forced=True)

        self._emit()
        return StartResult(success=True, mode=mode, message=session.status_message)

    def stop(self) -> bool:
        """End a running session; the final state stays readable."""
        if self.session.status != GameStatus.RUNNING:
            return False
        self._end(EndReason.STOPPED)
        return True

    def reset(self) -> None:
        """Return to IDLE from any state, clearing the session."""
        self._clear()
        self.session.status_message = "Choose a mode."
        logger.info("Session reset")
        self._emit()

    def return_to_menu(self) -> None:
        """Stop if running, then reset."""
        self.stop()
        self.reset()

    def handle_input(self, typed: str) -> InputResult:
        """
        Evaluate the typed-so-far text.

        A correct answer immediately draws the next target.
        """
        session = self.session
        if not session.is_running or not session.has_target:
            return InputResult.IGNORED

        if self.config.reject_paste and _looks_pasted(session.typed_text, typed):
            session.typed_text = ""
            session.feedback = "Pasting is not allowed."
            self._emit()
            return InputResult.REJECTED

        result = self.tracker.check_input(typed)
        if result == InputResult.CORRECT:
            if session.mode == GameMode.CAMERA:
                # Draws from the last completed pass; the next scheduled
                # pass refreshes the pool
                self._draw_camera_target(forced=True)
            else:
                self._draw_list_target(forced=True)

        self._emit()
        return result

    def apply_detections(
        self,
        detections: list[DetectedObject],
        forced: bool = False,
    ) -> TrackerOutcome | None:
        """
        Feed one completed detection pass into the tracker.

        Ignored unless a camera session is running.
        """
        session = self.session
        if not session.is_running or session.mode != GameMode.CAMERA:
            return None

        self.detection_source.feed(detections)
        outcome = self._draw_camera_target(forced=forced)
        self._emit()
        return outcome

    # =========================================================================
    # Internals
    # =========================================================================

    def _draw_camera_target(self, forced: bool) -> TrackerOutcome:
        session = self.session
        source = self.detection_source
        candidates = source.next_candidates(session.answered_words)
        outcome = self.tracker.consider_new_target(
            candidates, forced=forced, detected_labels=source.labels
        )

        if outcome == TrackerOutcome.NO_OBJECTS:
            session.status_message = "Nothing found. Point the camera at something."
        elif outcome == TrackerOutcome.ALL_CLEARED:
            session.status_message = "Every object in view is already cleared."
        elif outcome == TrackerOutcome.NOTHING_NEW:
            session.status_message = "Nothing new to find."
        else:
            session.status_message = f"{len(candidates)} candidate(s) in view."
        return outcome

    def _draw_list_target(self, forced: bool) -> TrackerOutcome:
        session = self.session
        source = self.list_source
        if source.cycle and source.vocabulary and source.is_exhausted(session.answered_words):
            logger.info("Vocabulary exhausted, starting a new cycle")
            session.answered_words.clear()

        outcome = self.tracker.consider_new_target(
            source.next_candidates(session.answered_words), forced=forced
        )

        if outcome == TrackerOutcome.EXHAUSTED:
            session.target_word = NO_TARGET
            session.feedback = "All words cleared!"
            self._end(EndReason.CLEARED)
        return outcome

    def _end(self, reason: EndReason) -> None:
        session = self.session
        if session.status != GameStatus.RUNNING:
            return

        self.clock.cancel()
        if self.render_loop is not None:
            self.render_loop.stop()

        session.status = GameStatus.ENDED
        session.end_reason = reason
        session.typed_text = ""
        session.status_message = f"Game over! Score: {session.score}"
        logger.info("Session ended (%s) with score %d", reason.value, session.score)

        self._emit()
        self.presenter.session_ended(session.score, reason)

    def _on_timeout(self) -> None:
        self._end(EndReason.TIMEOUT)

    def _on_dispatch(self, now: float) -> None:
        self.session.last_detection_timestamp = now

    def _clear(self) -> None:
        self.clock.cancel()
        if self.render_loop is not None:
            self.render_loop.stop()
            self.render_loop.clear()
        if self.scheduler is not None:
            self.scheduler.reset()
        self.detection_source.clear()
        self.session.clear(self.config.session_duration)

    def _emit(self) -> None:
        self.presenter.update(self.snapshot())


def _looks_pasted(previous: str, typed: str) -> bool:
    """More than one character appeared in a single keystroke."""
    return len(typed) - len(previous) > 1
