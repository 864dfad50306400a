"""
FastAPI Application - HTTP/WebSocket host for the challenge.

Endpoints:
    POST   /api/v1/game/start   Start a game (camera or list mode)
    POST   /api/v1/game/stop    Stop the running game
    POST   /api/v1/game/reset   Back to mode selection
    POST   /api/v1/game/input   Send the typed-so-far text
    GET    /api/v1/game/state   Get score, timer, target and overlay
    GET    /api/v1/classes      List the vocabulary with display names
    WS     /api/v1/game/ws      Real-time state updates and keystrokes

One app instance hosts one single-player game. Camera mode needs a
service built with a FrameSource and an ObjectDetector; without them
start(mode=camera) answers RESOURCE_UNAVAILABLE.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Union
import asyncio
import json
import logging
import os

# Environment configuration
TYPEHUNT_ENV = os.getenv("TYPEHUNT_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional GameService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    from fastapi import FastAPI, WebSocket, WebSocketDisconnect
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse

    from .service import GameService
    from .schemas import (
        # Request models
        StartRequest,
        InputRequest,
        # Response models
        GameStateResponse,
        StartResponse,
        InputResponse,
        ClassListResponse,
        ErrorResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )
    from ..session import RecordingPresenter

    app = FastAPI(
        title="Typehunt API",
        description="""
Timed word-typing challenge driven by object detection.

## Game Flow

1. `POST /game/start` with `mode=list` or `mode=camera`
2. Send every keystroke's full text to `POST /game/input`
   (or as `{"type": "input", "text": ...}` over the WebSocket)
3. A correct word scores and the next target appears
4. The game ends when the timer runs out, every list word is
   cleared, or `POST /game/stop` is called

## Error Codes

| Code | Description |
|------|-------------|
| `ALREADY_RUNNING` | A game is already running |
| `RESOURCE_UNAVAILABLE` | Camera or detector not ready |
| `NOT_RUNNING` | No game to stop |
        """,
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or GameService()
    app.state.game_service = api_service

    # WebSocket connections
    ws_connections: list[WebSocket] = []
    # Pending broadcasts, held until done
    broadcast_tasks: set[asyncio.Task] = set()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse, status_code: int = 409) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(status_code=status_code, content=error.model_dump(mode="json"))

    async def broadcast(message: dict):
        """Send a message to every connected WebSocket."""
        dead_connections = []
        for ws in ws_connections:
            try:
                await ws.send_json(message)
            except (WebSocketDisconnect, RuntimeError) as e:
                logger.debug("Dropping WebSocket connection: %s", e)
                dead_connections.append(ws)
        for ws in dead_connections:
            if ws in ws_connections:
                ws_connections.remove(ws)

    def on_snapshot(snapshot):
        if not ws_connections:
            return
        payload = api_service.format_state(snapshot).model_dump(mode="json")
        task = asyncio.get_running_loop().create_task(
            broadcast({"type": "state_update", "payload": payload})
        )
        broadcast_tasks.add(task)
        task.add_done_callback(broadcast_tasks.discard)

    presenter = api_service.controller.presenter
    if isinstance(presenter, RecordingPresenter):
        presenter.subscribe(on_snapshot)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/game/start",
        response_model=StartResponse,
        responses={
            409: {"model": ErrorResponse, "description": "Game already running"},
            503: {"model": ErrorResponse, "description": "Camera not ready"},
        },
        tags=["Game"],
        summary="Start a game",
    )
    async def start_game(body: StartRequest) -> Union[StartResponse, JSONResponse]:
        """
        Start a game in camera or list mode.

        A game that has ended is reset first. Mode cannot be switched
        while a game is running: stop it first.
        """
        response = api_service.start(body)
        if isinstance(response, ErrorResponse):
            status_code = 503 if response.error_code == ErrorCode.RESOURCE_UNAVAILABLE else 409
            return make_error_response(response, status_code=status_code)
        return response

    @app.post(
        "/api/v1/game/stop",
        response_model=GameStateResponse,
        responses={409: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Stop the running game",
    )
    async def stop_game() -> Union[GameStateResponse, JSONResponse]:
        """Stop the game; the final score stays readable until reset."""
        response = api_service.stop()
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/game/reset",
        response_model=GameStateResponse,
        tags=["Game"],
        summary="Return to mode selection",
    )
    async def reset_game() -> GameStateResponse:
        """Stop if running, then clear the session."""
        return api_service.reset()

    @app.post(
        "/api/v1/game/input",
        response_model=InputResponse,
        tags=["Game"],
        summary="Send typed text",
    )
    async def send_input(body: InputRequest) -> InputResponse:
        """
        Send the full typed text after a keystroke.

        Returns `correct`, `partial` (target starts with the text),
        `mismatch`, `ignored` (no target / not running) or `rejected`
        (looked like a paste).
        """
        return api_service.handle_input(body)

    @app.get(
        "/api/v1/game/state",
        response_model=GameStateResponse,
        tags=["Game"],
        summary="Get current game state",
    )
    async def get_state() -> GameStateResponse:
        """Score, timer, target, feedback and the detection overlay."""
        return api_service.get_state()

    @app.get(
        "/api/v1/classes",
        response_model=ClassListResponse,
        tags=["Words"],
        summary="List the vocabulary",
    )
    async def list_classes() -> ClassListResponse:
        """Every word that can become a target, with its display name."""
        return api_service.list_classes()

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/game/ws")
    async def websocket_endpoint(websocket: WebSocket):
        """
        WebSocket for real-time updates.

        Messages from server:
        - state_update: Game state changed (includes every countdown tick)
        - input_result: Verdict for an input message
        - pong: Reply to ping
        - error: Malformed message

        Messages from client:
        - ping: Keep-alive
        - input: {"type": "input", "text": "<typed so far>"}
        """
        await websocket.accept()
        ws_connections.append(websocket)

        try:
            await websocket.send_json({
                "type": "state_update",
                "payload": api_service.get_state().model_dump(mode="json"),
            })

            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    message = None
                if not isinstance(message, dict):
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })
                    continue

                if message.get("type") == "ping":
                    await websocket.send_json({"type": "pong"})
                elif message.get("type") == "input":
                    response = api_service.handle_input(
                        InputRequest(text=str(message.get("text", "")))
                    )
                    await websocket.send_json({
                        "type": "input_result",
                        "payload": response.model_dump(mode="json"),
                    })
                else:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": f"Unknown message type: {message.get('type')}"},
                    })

        except WebSocketDisconnect:
            logger.debug("WebSocket client disconnected")
        finally:
            if websocket in ws_connections:
                ws_connections.remove(websocket)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return api_service.health()

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Typehunt API",
            "version": "1.0.0",
            "environment": TYPEHUNT_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
