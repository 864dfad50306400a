"""
Tests for word sources and the built-in vocabulary.

Tests:
- COCO table and allowed classes
- Label translation policies
- List source exhaustion
- Detection source filtering
"""

import pytest

from ..words import (
    COCO_CLASSES,
    ALLOWED_CLASSES,
    ListSource,
    DetectionSource,
    LabelTranslator,
)
from .conftest import detection


class TestVocabulary:
    """Tests for the COCO class table."""

    def test_eighty_classes(self):
        assert len(COCO_CLASSES) == 80

    def test_allowed_classes_are_table_keys(self):
        assert ALLOWED_CLASSES == list(COCO_CLASSES.keys())
        assert "cup" in ALLOWED_CLASSES
        assert "teddy bear" in ALLOWED_CLASSES


class TestLabelTranslator:
    """Tests for LabelTranslator."""

    def test_known_label(self):
        translator = LabelTranslator()
        assert translator.translate("cat") == "猫"
        assert translator.is_eligible("cat")

    def test_unknown_label_raw(self):
        """Raw policy shows and accepts unknown labels as-is."""
        translator = LabelTranslator({"cat": "猫"}, untranslated="raw")
        assert translator.translate("robot") == "robot"
        assert translator.is_eligible("robot")

    def test_unknown_label_ineligible(self):
        translator = LabelTranslator({"cat": "猫"}, untranslated="ineligible")
        assert translator.translate("robot") == "robot"
        assert not translator.is_eligible("robot")

    def test_invalid_policy(self):
        with pytest.raises(ValueError):
            LabelTranslator(untranslated="drop")


class TestListSource:
    """Tests for ListSource."""

    def test_excludes_answered(self):
        source = ListSource(["cat", "dog", "cup"])
        assert source.next_candidates({"dog"}) == ["cat", "cup"]

    def test_duplicates_collapsed(self):
        source = ListSource(["cat", "cat", "dog"])
        assert source.vocabulary == ["cat", "dog"]

    def test_exhaustion(self):
        source = ListSource(["cat", "dog"])
        assert not source.is_exhausted({"cat"})
        assert source.is_exhausted({"cat", "dog"})
        assert source.next_candidates({"cat", "dog"}) == []

    def test_empty_vocabulary_is_exhausted(self):
        assert ListSource([]).is_exhausted(set())


class TestDetectionSource:
    """Tests for DetectionSource."""

    def test_no_candidates_before_feed(self):
        assert DetectionSource().next_candidates(set()) == []

    def test_unique_labels_in_detection_order(self):
        source = DetectionSource()
        source.feed([detection("cup"), detection("book"), detection("cup")])
        assert source.labels == ["cup", "book"]
        assert source.next_candidates(set()) == ["cup", "book"]

    def test_vocabulary_intersection(self):
        source = DetectionSource(vocabulary=["cup"])
        source.feed([detection("cup"), detection("book")])
        assert source.next_candidates(set()) == ["cup"]

    def test_answered_excluded(self):
        source = DetectionSource()
        source.feed([detection("cup"), detection("book")])
        assert source.next_candidates({"cup"}) == ["book"]

    def test_ineligible_labels_dropped(self):
        translator = LabelTranslator({"cup": "コップ"}, untranslated="ineligible")
        source = DetectionSource(translator=translator)
        source.feed([detection("cup"), detection("robot")])
        assert source.labels == ["cup"]

    def test_feed_replaces_previous_pass(self):
        source = DetectionSource()
        source.feed([detection("cup")])
        source.feed([detection("book")])
        assert source.labels == ["book"]

        source.feed([])
        assert source.labels == []
