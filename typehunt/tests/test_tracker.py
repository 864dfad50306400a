"""
Tests for the challenge tracker.

Tests:
- Input matching (correct / partial / mismatch / ignored)
- Score and answered-set bookkeeping
- New-target policy, including camera persistence
- Answered words are never drawn
"""

import random

from ..session import (
    ChallengeTracker,
    InputResult,
    TrackerOutcome,
    Session,
    GameMode,
    GameStatus,
    NO_TARGET,
)


class TestCheckInput:
    """Tests for ChallengeTracker.check_input."""

    def test_partial_mismatch_correct(self, running_list_session):
        """'c' is partial, 'cx' a mismatch, 'cat' correct against 'cat'."""
        tracker = ChallengeTracker(running_list_session)
        tracker.set_target("cat")

        assert tracker.check_input("c") == InputResult.PARTIAL
        assert tracker.check_input("cx") == InputResult.MISMATCH
        assert running_list_session.score == 0
        assert running_list_session.answered_words == set()

        assert tracker.check_input("cat") == InputResult.CORRECT
        assert running_list_session.score == 1
        assert running_list_session.answered_words == {"cat"}

    def test_feedback_text(self, running_list_session):
        tracker = ChallengeTracker(running_list_session)
        tracker.set_target("cat")
        assert running_list_session.feedback == "New target: cat"

        tracker.check_input("ca")
        assert running_list_session.feedback == "Typing..."
        tracker.check_input("co")
        assert running_list_session.feedback == "Miss! Try again."
        tracker.check_input("cat")
        assert running_list_session.feedback == "Correct! cat"

    def test_correct_clears_input(self, running_list_session):
        tracker = ChallengeTracker(running_list_session)
        tracker.set_target("cat")
        tracker.check_input("ca")
        assert running_list_session.typed_text == "ca"

        tracker.check_input("cat")
        assert running_list_session.typed_text == ""

    def test_longer_than_target_is_mismatch(self, running_list_session):
        tracker = ChallengeTracker(running_list_session)
        tracker.set_target("cat")
        assert tracker.check_input("cats") == InputResult.MISMATCH

    def test_ignored_without_target(self, running_list_session):
        tracker = ChallengeTracker(running_list_session)
        assert running_list_session.target_word == NO_TARGET

        assert tracker.check_input("---") == InputResult.IGNORED
        assert running_list_session.score == 0

    def test_ignored_when_not_running(self):
        session = Session(status=GameStatus.ENDED)
        tracker = ChallengeTracker(session)
        session.target_word = "cat"

        assert tracker.check_input("cat") == InputResult.IGNORED
        assert session.score == 0
        assert session.answered_words == set()

    def test_score_matches_correct_count(self, running_list_session):
        """Score equals the number of CORRECT results over any input sequence."""
        rng = random.Random(42)
        words = ["cat", "dog", "cup", "book"]
        tracker = ChallengeTracker(running_list_session, rng=random.Random(0))

        correct = 0
        correct_words = set()
        for _ in range(200):
            if not running_list_session.has_target:
                tracker.set_target(rng.choice(words))
            target = running_list_session.target_word
            typed = rng.choice([target, target[:2], target + "x", "zz", ""])
            if tracker.check_input(typed) == InputResult.CORRECT:
                correct += 1
                correct_words.add(target)
                tracker.set_target(rng.choice(words))

        assert running_list_session.score == correct
        assert running_list_session.answered_words == correct_words


class TestConsiderNewTarget:
    """Tests for ChallengeTracker.consider_new_target."""

    def test_draw_when_sentinel(self, running_list_session):
        tracker = ChallengeTracker(running_list_session, rng=random.Random(1))

        outcome = tracker.consider_new_target(["cat", "dog"])

        assert outcome == TrackerOutcome.NEW_TARGET
        assert running_list_session.target_word in {"cat", "dog"}

    def test_keep_valid_target_unless_forced(self, running_list_session):
        tracker = ChallengeTracker(running_list_session, rng=random.Random(1))
        tracker.set_target("cat")

        assert tracker.consider_new_target(["cat", "dog"]) == TrackerOutcome.KEPT
        assert running_list_session.target_word == "cat"

    def test_forced_draw(self, running_list_session):
        tracker = ChallengeTracker(running_list_session, rng=random.Random(1))
        tracker.set_target("cat")
        running_list_session.answered_words.add("cat")

        outcome = tracker.consider_new_target(["cat", "dog"], forced=True)

        assert outcome == TrackerOutcome.NEW_TARGET
        assert running_list_session.target_word == "dog"

    def test_answered_never_drawn(self, running_list_session):
        """A word in the answered set is never drawn, for any pool."""
        running_list_session.answered_words.update({"cat", "cup"})
        tracker = ChallengeTracker(running_list_session, rng=random.Random(5))

        for _ in range(100):
            tracker.consider_new_target(["cat", "dog", "cup", "book"], forced=True)
            assert running_list_session.target_word not in running_list_session.answered_words

    def test_list_exhausted(self, running_list_session):
        running_list_session.answered_words.update({"cat", "dog"})
        tracker = ChallengeTracker(running_list_session)

        outcome = tracker.consider_new_target(["cat", "dog"], forced=True)
        assert outcome == TrackerOutcome.EXHAUSTED

    def test_draw_is_uniform_over_pool(self, running_list_session):
        tracker = ChallengeTracker(running_list_session, rng=random.Random(9))
        seen = set()
        for _ in range(200):
            tracker.consider_new_target(["cat", "dog", "cup"], forced=True)
            seen.add(running_list_session.target_word)
        assert seen == {"cat", "dog", "cup"}


class TestCameraTargetPolicy:
    """Persistence of the camera target when it leaves the frame."""

    def test_target_persists_when_detections_empty(self, running_camera_session):
        """Target 'cup' stays after detections become empty."""
        tracker = ChallengeTracker(running_camera_session, rng=random.Random(1))
        assert tracker.consider_new_target(["cup"], detected_labels=["cup"]) == TrackerOutcome.NEW_TARGET
        assert running_camera_session.target_word == "cup"

        outcome = tracker.consider_new_target([], detected_labels=[])

        assert outcome == TrackerOutcome.NOTHING_NEW
        assert running_camera_session.target_word == "cup"

    def test_target_persists_when_other_objects_appear(self, running_camera_session):
        tracker = ChallengeTracker(running_camera_session, rng=random.Random(1))
        tracker.set_target("cup")

        outcome = tracker.consider_new_target(["book"], detected_labels=["book"])

        assert outcome == TrackerOutcome.KEPT
        assert running_camera_session.target_word == "cup"

    def test_revert_policy_redraws_lost_target(self, running_camera_session):
        tracker = ChallengeTracker(
            running_camera_session, rng=random.Random(1), persist_camera_target=False
        )
        tracker.set_target("cup")

        outcome = tracker.consider_new_target(["book"], detected_labels=["book"])
        assert outcome == TrackerOutcome.NEW_TARGET
        assert running_camera_session.target_word == "book"

    def test_revert_policy_falls_back_to_sentinel(self, running_camera_session):
        tracker = ChallengeTracker(
            running_camera_session, rng=random.Random(1), persist_camera_target=False
        )
        tracker.set_target("cup")

        outcome = tracker.consider_new_target([], detected_labels=[])
        assert outcome == TrackerOutcome.NO_OBJECTS
        assert running_camera_session.target_word == NO_TARGET

    def test_no_objects_keeps_sentinel(self, running_camera_session):
        tracker = ChallengeTracker(running_camera_session)

        outcome = tracker.consider_new_target([], detected_labels=[])

        assert outcome == TrackerOutcome.NO_OBJECTS
        assert running_camera_session.target_word == NO_TARGET

    def test_all_in_view_answered(self, running_camera_session):
        """After answering the only visible object the target is cleared."""
        running_camera_session.answered_words.add("cup")
        running_camera_session.target_word = "cup"
        tracker = ChallengeTracker(running_camera_session)

        outcome = tracker.consider_new_target([], forced=True, detected_labels=["cup"])

        assert outcome == TrackerOutcome.ALL_CLEARED
        assert running_camera_session.target_word == NO_TARGET

    def test_list_mode_ignores_detections(self):
        session = Session(mode=GameMode.LIST, status=GameStatus.RUNNING, remaining_seconds=10)
        tracker = ChallengeTracker(session, persist_camera_target=False)
        tracker.set_target("cat")

        outcome = tracker.consider_new_target(["cat", "dog"], detected_labels=[])
        assert outcome == TrackerOutcome.KEPT
        assert session.target_word == "cat"
