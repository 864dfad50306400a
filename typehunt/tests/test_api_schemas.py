"""
Tests for API Pydantic schemas.

Validates that:
- Request/response models serialize correctly
- Error codes are properly structured
- Input text is bounded
- The OpenAPI schema lists every response model
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_game_state_response_schema(self):
        """GameStateResponse serializes enums and the overlay."""
        from typehunt.api.schemas import GameStateResponse, DetectionInfo, Mode, Status

        response = GameStateResponse(
            mode=Mode.CAMERA,
            status=Status.RUNNING,
            score=3,
            remaining_seconds=42,
            target_word="cup",
            target_display="コップ",
            answered_words=["book", "chair", "dog"],
            feedback="Typing...",
            detections=[
                DetectionInfo(
                    label="cup",
                    text="cup (87%)",
                    bounding_box=(10, 20, 40, 30),
                    color="#E91E63",
                    is_target=True,
                ),
            ],
        )

        data = response.model_dump(mode="json")
        assert data["mode"] == "camera"
        assert data["status"] == "running"
        assert data["target_word"] == "cup"
        assert data["end_reason"] is None
        assert data["detections"][0]["bounding_box"] == [10.0, 20.0, 40.0, 30.0]
        assert data["api_version"] == "v1"

    def test_no_target_is_null(self):
        from typehunt.api.schemas import GameStateResponse

        response = GameStateResponse(mode="list", status="idle")
        assert response.target_word is None
        assert response.answered_words == []

    def test_negative_score_rejected(self):
        from typehunt.api.schemas import GameStateResponse

        with pytest.raises(ValidationError):
            GameStateResponse(mode="list", status="running", score=-1)

    def test_start_request_defaults_to_list(self):
        from typehunt.api.schemas import StartRequest, Mode

        assert StartRequest().mode == Mode.LIST
        assert StartRequest(mode="camera").mode == Mode.CAMERA

    def test_start_request_unknown_mode(self):
        from typehunt.api.schemas import StartRequest

        with pytest.raises(ValidationError):
            StartRequest(mode="voice")

    def test_input_request_validation(self):
        """InputRequest requires text and bounds its length."""
        from typehunt.api.schemas import InputRequest

        with pytest.raises(ValidationError):
            InputRequest()
        with pytest.raises(ValidationError):
            InputRequest(text="x" * 201)

        assert InputRequest(text="").text == ""

    def test_error_response_schema(self):
        """ErrorResponse has structured error codes."""
        from typehunt.api.schemas import ErrorResponse, ErrorCode

        error = ErrorResponse(
            error="A game is already running.",
            error_code=ErrorCode.ALREADY_RUNNING,
            details={"mode": "list"},
        )

        data = error.model_dump()
        assert data["error"] == "A game is already running."
        assert data["error_code"] == "ALREADY_RUNNING"
        assert data["details"]["mode"] == "list"
        assert data["api_version"] == "v1"


class TestErrorCodes:
    """Tests for error code coverage."""

    def test_all_error_codes_defined(self):
        """All required error codes are defined."""
        from typehunt.api.schemas import ErrorCode

        required_codes = [
            "ALREADY_RUNNING",
            "RESOURCE_UNAVAILABLE",
            "NOT_RUNNING",
        ]

        for code in required_codes:
            assert hasattr(ErrorCode, code), f"Missing error code: {code}"
            assert ErrorCode[code].value == code

    def test_error_code_values_are_strings(self):
        """Error codes are string enums for JSON serialization."""
        from typehunt.api.schemas import ErrorCode

        for code in ErrorCode:
            assert isinstance(code.value, str)
            assert code.value == code.value.upper()

    def test_verdicts_match_controller_results(self):
        from typehunt.api.schemas import InputVerdict
        from typehunt.session import InputResult

        assert {v.value for v in InputVerdict} == {r.value for r in InputResult}


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    @pytest.fixture
    def app(self):
        from typehunt.api import create_app, GameService

        return create_app(GameService(schedule=False))

    def test_response_models_in_schema(self, app):
        """Response models appear in OpenAPI schema."""
        from fastapi.openapi.utils import get_openapi

        schema = get_openapi(title=app.title, version=app.version, routes=app.routes)
        schemas = schema["components"]["schemas"]

        for name in [
            "GameStateResponse",
            "StartResponse",
            "InputResponse",
            "ClassListResponse",
            "HealthResponse",
            "ErrorResponse",
        ]:
            assert name in schemas, f"Missing schema: {name}"

    def test_game_endpoints_present(self, app):
        from fastapi.openapi.utils import get_openapi

        paths = get_openapi(title=app.title, version=app.version, routes=app.routes)["paths"]

        for path in [
            "/api/v1/game/start",
            "/api/v1/game/stop",
            "/api/v1/game/reset",
            "/api/v1/game/input",
        ]:
            assert "post" in paths[path]
        assert "get" in paths["/api/v1/game/state"]
        assert "get" in paths["/api/v1/classes"]
        assert "get" in paths["/health"]
