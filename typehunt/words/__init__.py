"""
Words - Vocabulary and candidate word sources.

List mode draws from a fixed vocabulary; camera mode draws from
whatever the detector currently sees. The built-in vocabulary is the
COCO class list.
"""

from .coco import COCO_CLASSES, ALLOWED_CLASSES
from .source import WordSource, ListSource, DetectionSource, LabelTranslator

__all__ = [
    "COCO_CLASSES",
    "ALLOWED_CLASSES",
    "WordSource",
    "ListSource",
    "DetectionSource",
    "LabelTranslator",
]
