"""
Typehunt - Timed word-typing challenge driven by object detection

Type the name of what your camera sees before the clock runs out,
or play from a fixed word list. The package provides:
- The challenge controller (state machine, scoring, countdown)
- Throttled, single-flight scheduling of an external object detector
- Word sources and the built-in COCO vocabulary
- Optional HTTP/WebSocket and terminal hosts
"""

__version__ = "0.1.0"
