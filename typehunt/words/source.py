"""
Word Sources - Where candidate target words come from.

Two sources, one contract:
- ListSource: a fixed vocabulary (list mode)
- DetectionSource: labels of the objects currently in view (camera mode)

Both return candidates with answered words already removed.
An empty result is a normal state, not an error.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .coco import COCO_CLASSES

if TYPE_CHECKING:
    from ..vision.detection import DetectedObject


UNTRANSLATED_POLICIES = ("raw", "ineligible")


class LabelTranslator:
    """
    Maps detector labels to display names.

    A label missing from the table either displays as itself ("raw")
    or can never become a target ("ineligible").
    """

    def __init__(
        self,
        table: dict[str, str] | None = None,
        untranslated: str = "raw",
    ):
        if untranslated not in UNTRANSLATED_POLICIES:
            raise ValueError(
                f"untranslated must be one of {UNTRANSLATED_POLICIES}, got {untranslated!r}"
            )
        self.table = dict(COCO_CLASSES if table is None else table)
        self.untranslated = untranslated

    def translate(self, label: str) -> str:
        return self.table.get(label, label)

    def is_eligible(self, label: str) -> bool:
        if label in self.table:
            return True
        return self.untranslated == "raw"

    def entries(self) -> list[tuple[str, str]]:
        """All (label, display name) pairs, in table order."""
        return list(self.table.items())


class WordSource(ABC):
    """
    Abstract supplier of candidate target words.
    """

    @abstractmethod
    def next_candidates(self, answered: set[str]) -> list[str]:
        """
        Return the words eligible as the next target.

        Order is stable so draws are reproducible with a seeded RNG.
        """
        pass


class ListSource(WordSource):
    """
    Fixed vocabulary source.

    With cycle=True, exhaustion is not terminal: the owner is expected to
    clear its answered set and the whole vocabulary is offered again.
    """

    def __init__(self, vocabulary: Iterable[str], cycle: bool = False):
        # Deduplicate, keep first occurrence order
        self.vocabulary: list[str] = list(dict.fromkeys(vocabulary))
        self.cycle = cycle

    def next_candidates(self, answered: set[str]) -> list[str]:
        return [word for word in self.vocabulary if word not in answered]

    def is_exhausted(self, answered: set[str]) -> bool:
        return not self.next_candidates(answered)


class DetectionSource(WordSource):
    """
    Candidates derived from the most recent detection pass.

    Has no words of its own. The scheduler result path calls feed()
    with already threshold-filtered detections; the previous pass
    is discarded wholesale.
    """

    def __init__(
        self,
        vocabulary: Iterable[str] | None = None,
        translator: LabelTranslator | None = None,
    ):
        self.vocabulary: set[str] | None = set(vocabulary) if vocabulary is not None else None
        self.translator = translator or LabelTranslator()
        self._labels: list[str] = []

    def feed(self, detections: Iterable[DetectedObject]) -> None:
        labels = dict.fromkeys(d.label for d in detections)
        self._labels = [label for label in labels if self._accepts(label)]

    def clear(self) -> None:
        self._labels = []

    @property
    def labels(self) -> list[str]:
        """Unique eligible labels of the last pass, in detection order."""
        return list(self._labels)

    def next_candidates(self, answered: set[str]) -> list[str]:
        return [label for label in self._labels if label not in answered]

    def _accepts(self, label: str) -> bool:
        if self.vocabulary is not None and label not in self.vocabulary:
            return False
        return self.translator.is_eligible(label)
