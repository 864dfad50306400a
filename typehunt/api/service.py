"""
API Service - Business logic layer between the API and the controller.

The service:
1. Translates API requests to controller commands
2. Maps rejected commands to structured errors
3. Formats controller snapshots for the UI

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Union

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
    ErrorCode,
    InputVerdict,
)
from .. import __version__
from ..config import GameConfig
from ..session import (
    GameController,
    GameMode,
    StartError,
    RecordingPresenter,
    SessionSnapshot,
    NO_TARGET,
)


_START_ERRORS = {
    StartError.ALREADY_RUNNING: ErrorCode.ALREADY_RUNNING,
    StartError.RESOURCE_UNAVAILABLE: ErrorCode.RESOURCE_UNAVAILABLE,
}


@dataclass
class GameService:
    """
    Single-player game service.

    Usage:
        service = GameService()

        response = service.start(StartRequest(mode="list"))
        response = service.handle_input(InputRequest(text="ca"))
        state = service.get_state()

    With schedule=False the countdown and render loop are only armed;
    the host (or a test) drives them by hand.
    """
    controller: GameController = field(
        default_factory=lambda: GameController(
            GameConfig.from_env(), presenter=RecordingPresenter()
        )
    )
    schedule: bool = True

    def start(self, request: StartRequest) -> Union[StartResponse, ErrorResponse]:
        result = self.controller.start(GameMode(request.mode.value), schedule=self.schedule)
        if not result.success:
            return ErrorResponse(
                error=result.message,
                error_code=_START_ERRORS[result.error],
                details={"mode": request.mode.value},
            )
        return StartResponse(
            success=True,
            mode=request.mode,
            message=result.message,
            state=self.get_state(),
        )

    def stop(self) -> Union[GameStateResponse, ErrorResponse]:
        if not self.controller.stop():
            return ErrorResponse(
                error="No game is running.",
                error_code=ErrorCode.NOT_RUNNING,
            )
        return self.get_state()

    def reset(self) -> GameStateResponse:
        self.controller.return_to_menu()
        return self.get_state()

    def handle_input(self, request: InputRequest) -> InputResponse:
        result = self.controller.handle_input(request.text)
        return InputResponse(
            result=InputVerdict(result.value),
            state=self.get_state(),
        )

    def get_state(self) -> GameStateResponse:
        return self.format_state(self.controller.snapshot())

    def format_state(self, snapshot: SessionSnapshot) -> GameStateResponse:
        has_target = snapshot.target_word != NO_TARGET
        return GameStateResponse(
            mode=snapshot.mode.value,
            status=snapshot.status.value,
            score=snapshot.score,
            remaining_seconds=snapshot.remaining_seconds,
            target_word=snapshot.target_word if has_target else None,
            target_display=snapshot.target_display or None,
            answered_words=snapshot.answered_words,
            feedback=snapshot.feedback,
            status_message=snapshot.status_message,
            end_reason=snapshot.end_reason.value if snapshot.end_reason else None,
            detections=self._detections(),
        )

    def list_classes(self) -> ClassListResponse:
        translator = self.controller.translator
        vocabulary = self.controller.list_source.vocabulary
        classes = [
            ClassInfo(label=label, display=translator.translate(label))
            for label in vocabulary
        ]
        return ClassListResponse(classes=classes, count=len(classes))

    def health(self) -> HealthResponse:
        return HealthResponse(
            status="healthy",
            service="typehunt",
            version=__version__,
            camera_ready=self.controller.camera_ready(),
        )

    def _detections(self) -> list[DetectionInfo]:
        render_loop = self.controller.render_loop
        if render_loop is None:
            return []
        return [
            DetectionInfo(
                label=command.label,
                text=command.text,
                bounding_box=command.bbox,
                color=command.color,
                is_target=command.highlighted,
            )
            for command in render_loop.render_commands()
            if command.kind == "draw_box"
        ]
