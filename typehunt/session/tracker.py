"""
Challenge Tracker - Owns the target word and the answered set.

Decides two things:
1. When a new target must be drawn, and which one
2. How typed text compares against the current target

New-target policy:
- Draw when forced (session start, right after a correct answer)
- Draw when there is no valid target (sentinel, or already answered)
- Camera mode, only without target persistence: draw when the
  target is no longer among the latest detections
- Otherwise keep the current target, even if it left the frame

Answered words are never drawn again.
"""

from __future__ import annotations
from collections.abc import Iterable, Sequence
from enum import Enum
import logging
import random

from .state import Session, GameMode, NO_TARGET

logger = logging.getLogger(__name__)


class InputResult(Enum):
    """Outcome of comparing typed text with the target."""
    CORRECT = "correct"
    PARTIAL = "partial"  # Target starts with the typed text
    MISMATCH = "mismatch"
    IGNORED = "ignored"  # No target, or session not running
    REJECTED = "rejected"  # Looked like a paste


class TrackerOutcome(Enum):
    """Outcome of a target decision."""
    NEW_TARGET = "new_target"
    KEPT = "kept"  # Valid target kept, other candidates available
    NOTHING_NEW = "nothing_new"  # Valid target kept, no other candidate
    ALL_CLEARED = "all_cleared"  # Objects in view, all already answered
    NO_OBJECTS = "no_objects"  # Nothing eligible in view
    EXHAUSTED = "exhausted"  # List mode: every word answered


class ChallengeTracker:
    """
    Target selection and input matching for one session.

    Usage:
        tracker = ChallengeTracker(session, rng=random.Random(7))
        tracker.consider_new_target(["cat", "dog"], forced=True)
        result = tracker.check_input("ca")  # InputResult.PARTIAL
    """

    def __init__(
        self,
        session: Session,
        rng: random.Random | None = None,
        persist_camera_target: bool = True,
    ):
        self.session = session
        self.rng = rng or random.Random()
        self.persist_camera_target = persist_camera_target

    def target_is_valid(self) -> bool:
        """A real target that has not been answered yet."""
        session = self.session
        return session.has_target and session.target_word not in session.answered_words

    def eligible(self, candidates: Iterable[str]) -> list[str]:
        answered = self.session.answered_words
        return [word for word in dict.fromkeys(candidates) if word not in answered]

    def consider_new_target(
        self,
        candidates: Sequence[str],
        forced: bool = False,
        detected_labels: Iterable[str] | None = None,
    ) -> TrackerOutcome:
        """
        Apply the new-target policy.

        Args:
            candidates: Words eligible as target (answered words are
                removed here regardless)
            forced: Draw even if the current target is still valid
            detected_labels: Raw labels of the latest detection pass
                (camera mode only)
        """
        session = self.session
        camera = session.mode == GameMode.CAMERA
        labels = set(detected_labels) if detected_labels is not None else None
        pool = self.eligible(candidates)

        target_valid = self.target_is_valid()
        lost = (
            camera
            and not self.persist_camera_target
            and labels is not None
            and target_valid
            and session.target_word not in labels
        )

        if not (forced or not target_valid or lost):
            others = [word for word in pool if word != session.target_word]
            return TrackerOutcome.KEPT if others else TrackerOutcome.NOTHING_NEW

        if pool:
            word = self.rng.choice(pool)
            self.set_target(word)
            logger.debug("New target %r drawn from %d candidate(s)", word, len(pool))
            return TrackerOutcome.NEW_TARGET

        if not camera:
            return TrackerOutcome.EXHAUSTED

        if target_valid and not lost:
            # Forced draw with nothing new: keep what the player is typing
            return TrackerOutcome.NOTHING_NEW

        session.target_word = NO_TARGET
        if labels:
            return TrackerOutcome.ALL_CLEARED
        return TrackerOutcome.NO_OBJECTS

    def set_target(self, word: str) -> None:
        session = self.session
        session.target_word = word
        session.feedback = f"New target: {word}"
        session.typed_text = ""

    def check_input(self, typed: str) -> InputResult:
        """
        Compare typed text with the target.

        CORRECT scores, records the word and clears the input; the
        caller is then responsible for a forced draw. PARTIAL and
        MISMATCH only update feedback.
        """
        session = self.session
        if not session.is_running or not session.has_target:
            return InputResult.IGNORED

        target = session.target_word
        if typed == target:
            session.score += 1
            session.answered_words.add(target)
            session.feedback = f"Correct! {target}"
            session.typed_text = ""
            logger.info("Correct answer %r, score %d", target, session.score)
            return InputResult.CORRECT

        session.typed_text = typed
        if target.startswith(typed):
            session.feedback = "Typing..."
            return InputResult.PARTIAL

        session.feedback = "Miss! Try again."
        return InputResult.MISMATCH
