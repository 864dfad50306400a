"""
API Module - HTTP/WebSocket host for the challenge.

Exposes one GameController over REST for a browser UI:
1. Start a game in camera or list mode
2. Stream keystrokes and receive verdicts
3. Poll or subscribe to state (score, timer, target, overlay)
4. Stop and return to mode selection

All state is session-scoped. Nothing is persisted.
"""

from .schemas import (
    # Requests
    StartRequest,
    InputRequest,
    # Responses
    GameStateResponse,
    StartResponse,
    InputResponse,
    ClassListResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    DetectionInfo,
    ClassInfo,
    # Enums
    Mode,
    Status,
    ErrorCode,
    InputVerdict,
)
from .service import GameService
from .app import create_app

__all__ = [
    # Requests
    "StartRequest",
    "InputRequest",
    # Responses
    "GameStateResponse",
    "StartResponse",
    "InputResponse",
    "ClassListResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "DetectionInfo",
    "ClassInfo",
    # Enums
    "Mode",
    "Status",
    "ErrorCode",
    "InputVerdict",
    # Service
    "GameService",
    "create_app",
]
