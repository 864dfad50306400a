"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between a browser/host UI and
the challenge controller.

Error Codes:
- ALREADY_RUNNING: start requested while a game is running
- RESOURCE_UNAVAILABLE: camera mode requested without a ready camera/detector
- NOT_RUNNING: stop requested with no running game
- VALIDATION_ERROR: request body could not be parsed
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class Mode(str, Enum):
    """Word source for a session."""
    CAMERA = "camera"
    LIST = "list"


class Status(str, Enum):
    """Session status values."""
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


class EndReason(str, Enum):
    """Why a session ended."""
    TIMEOUT = "timeout"
    CLEARED = "cleared"
    STOPPED = "stopped"


class InputVerdict(str, Enum):
    """Outcome of a keystroke."""
    CORRECT = "correct"
    PARTIAL = "partial"
    MISMATCH = "mismatch"
    IGNORED = "ignored"
    REJECTED = "rejected"


class ErrorCode(str, Enum):
    """Structured error codes."""
    ALREADY_RUNNING = "ALREADY_RUNNING"
    RESOURCE_UNAVAILABLE = "RESOURCE_UNAVAILABLE"
    NOT_RUNNING = "NOT_RUNNING"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class DetectionInfo(BaseModel):
    """One detected object, as drawn on the overlay."""
    label: str
    text: str = Field(description="Label text drawn above the box")
    bounding_box: tuple[float, float, float, float] = Field(
        description="x, y, width, height in frame pixels"
    )
    color: str
    is_target: bool = False


class ClassInfo(BaseModel):
    """A vocabulary entry and its display name."""
    label: str
    display: str


# =============================================================================
# Request Models
# =============================================================================

class StartRequest(BaseModel):
    """Request to start a game."""
    mode: Mode = Field(Mode.LIST, description="camera or list")


class InputRequest(BaseModel):
    """The full typed text after a keystroke."""
    text: str = Field(..., max_length=200, description="Typed text so far")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Everything the UI shows."""
    mode: Mode
    status: Status
    score: int = Field(0, ge=0)
    remaining_seconds: int = Field(0, ge=0)
    target_word: Optional[str] = Field(None, description="None while there is no target")
    target_display: Optional[str] = None
    answered_words: list[str] = Field(default_factory=list)
    feedback: str = ""
    status_message: str = ""
    end_reason: Optional[EndReason] = None
    detections: list[DetectionInfo] = Field(default_factory=list)
    api_version: str = "v1"


class StartResponse(BaseModel):
    """Response after a successful start."""
    success: bool
    mode: Mode
    message: str = ""
    state: GameStateResponse


class InputResponse(BaseModel):
    """Response after a keystroke."""
    result: InputVerdict
    state: GameStateResponse


class ClassListResponse(BaseModel):
    """The vocabulary with display names."""
    classes: list[ClassInfo]
    count: int


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    camera_ready: bool = False
