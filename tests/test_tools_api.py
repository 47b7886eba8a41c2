"""
Tests for the educational tool endpoints.

These tests verify:
- camelCase request/response bodies
- Generic {"message": ...} errors when generation fails
- Base64 handling for image analysis
- Generation history for signed-in users
"""

import base64

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.ai.errors import NonTransientProviderError, TransientProviderError
from app.ai.retry import ResilientGenerator
from app.ai.tools.service import EducationalToolService
from app.core.config import settings
from app.main import app
from app.models.generation_request import GenerationRequest
from app.models.user import User


@pytest.fixture
def install_service(override_tool_service, make_provider, sleep_recorder):
    """
    Build a service around a scripted provider and install it.

    Usage:
        provider = install_service(["<div>ok</div>"])
    """
    def _install(outcomes=None, image_outcome="", models=("model-a",), max_retries=0):
        provider = make_provider(outcomes, image_outcome=image_outcome)
        generator = ResilientGenerator(
            provider=provider,
            models=list(models),
            max_retries=max_retries,
            base_delay_ms=10,
            sleep=sleep_recorder,
        )
        override_tool_service(
            EducationalToolService(
                generator=generator,
                provider=provider,
                vision_model="vision-model",
                enhance_max_retries=max_retries,
                enhance_base_delay_ms=10,
            )
        )
        return provider

    return _install


class TestHealth:

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_debug_follows_settings(self):
        assert app.debug is settings.DEBUG


class TestEnhancePrompt:
    """Tests for POST /api/enhance-prompt."""

    def test_success(self, client: TestClient, install_service):
        install_service(["A 10-question fractions quiz for grade 5 with instant feedback."])

        response = client.post("/api/enhance-prompt", json={"prompt": "fractions", "category": "Math"})

        assert response.status_code == 200
        assert response.json() == {
            "enhancedPrompt": "A 10-question fractions quiz for grade 5 with instant feedback."
        }

    def test_generation_failure(self, client: TestClient, install_service):
        install_service([NonTransientProviderError("API key not valid", status_code=400)])

        response = client.post("/api/enhance-prompt", json={"prompt": "fractions"})

        assert response.status_code == 502
        assert response.json() == {"message": "Failed to enhance prompt"}

    def test_empty_prompt_is_validation_error(self, client: TestClient, install_service):
        install_service()

        response = client.post("/api/enhance-prompt", json={"prompt": ""})

        assert response.status_code == 422


class TestGenerateTool:
    """Tests for POST /api/generate-tool."""

    def test_success(self, client: TestClient, install_service):
        provider = install_service(["```html\n<html><body>Quiz</body></html>\n```"])

        response = client.post(
            "/api/generate-tool",
            json={
                "prompt": "Water cycle",
                "toolType": "quiz",
                "category": "Science",
                "files": [{"type": "text", "content": "Evaporation notes", "fileName": "notes.txt"}],
            },
        )

        assert response.status_code == 200
        assert response.json() == {"html": "<html><body>Quiz</body></html>", "toolDescription": ""}
        _, prompt, system_prompt = provider.calls[0]
        assert "File 1 (notes.txt):\nEvaporation notes" in prompt
        assert "Category/Subject: Science" in system_prompt

    def test_snake_case_fields_accepted(self, client: TestClient, install_service):
        provider = install_service(["<div>ok</div>"])

        response = client.post("/api/generate-tool", json={"prompt": "Volcanoes", "tool_type": "diagram"})

        assert response.status_code == 200
        assert "interactive diagram" in provider.calls[0][2]

    def test_transient_failure_falls_back(self, client: TestClient, install_service, sleep_recorder):
        provider = install_service(
            [TransientProviderError("overloaded", status_code=503), "<div>from fallback</div>"],
            models=("model-a", "model-b"),
        )

        response = client.post("/api/generate-tool", json={"prompt": "Volcanoes"})

        assert response.status_code == 200
        assert response.json()["html"] == "<div>from fallback</div>"
        assert provider.models_called == ["model-a", "model-b"]
        assert sleep_recorder.delays == []

    def test_all_models_failed(self, client: TestClient, install_service):
        install_service([TransientProviderError("overloaded", status_code=503)] * 2, models=("model-a", "model-b"))

        response = client.post("/api/generate-tool", json={"prompt": "Volcanoes"})

        assert response.status_code == 502
        assert response.json() == {"message": "Failed to generate educational tool"}

    def test_non_html_answer(self, client: TestClient, install_service):
        install_service(["Sorry, I can only answer in prose."])

        response = client.post("/api/generate-tool", json={"prompt": "Volcanoes"})

        assert response.status_code == 502
        assert response.json() == {"message": "Failed to generate educational tool"}

    def test_blank_prompt(self, client: TestClient, install_service):
        install_service()

        response = client.post("/api/generate-tool", json={"prompt": "   "})

        assert response.status_code == 400
        assert response.json() == {"message": "Prompt must not be empty"}

    def test_anonymous_request_not_recorded(self, client: TestClient, db: Session, install_service):
        install_service(["<div>ok</div>"])

        client.post("/api/generate-tool", json={"prompt": "Volcanoes"})

        assert db.scalars(select(GenerationRequest)).all() == []

    def test_signed_in_request_recorded(
        self,
        client: TestClient,
        db: Session,
        install_service,
        test_user: User,
        session_cookies: dict,
    ):
        install_service(["<div>volcano quiz</div>"])
        client.cookies.update(session_cookies)

        response = client.post(
            "/api/generate-tool",
            json={"prompt": "Volcanoes", "toolType": "quiz", "category": "Geology"},
        )

        assert response.status_code == 200
        rows = db.scalars(select(GenerationRequest)).all()
        assert len(rows) == 1
        assert rows[0].user_id == test_user.id
        assert rows[0].prompt == "Volcanoes"
        assert rows[0].tool_type == "quiz"
        assert rows[0].category == "Geology"
        assert rows[0].html == "<div>volcano quiz</div>"
        assert rows[0].status == "completed"

    def test_signed_in_failure_recorded(
        self,
        client: TestClient,
        db: Session,
        install_service,
        test_user: User,
        session_cookies: dict,
    ):
        install_service(["Sorry, I can only answer in prose."])
        client.cookies.update(session_cookies)

        response = client.post("/api/generate-tool", json={"prompt": "Volcanoes", "toolType": "game"})

        assert response.status_code == 502
        rows = db.scalars(select(GenerationRequest)).all()
        assert len(rows) == 1
        assert rows[0].user_id == test_user.id
        assert rows[0].status == "failed"
        assert rows[0].html is None
        assert rows[0].tool_type == "game"

    def test_blank_prompt_not_recorded(
        self,
        client: TestClient,
        db: Session,
        install_service,
        test_user: User,
        session_cookies: dict,
    ):
        install_service()
        client.cookies.update(session_cookies)

        response = client.post("/api/generate-tool", json={"prompt": "   "})

        assert response.status_code == 400
        assert db.scalars(select(GenerationRequest)).all() == []


class TestAnalyzeImage:
    """Tests for POST /api/analyze-image."""

    def test_success(self, client: TestClient, install_service):
        provider = install_service(image_outcome="A labelled diagram of the heart.")
        payload = base64.b64encode(b"\x89PNG fake image").decode()

        response = client.post("/api/analyze-image", json={"data": payload, "mimeType": "image/png"})

        assert response.status_code == 200
        assert response.json() == {"analysis": "A labelled diagram of the heart."}
        model, image_bytes, mime_type, _ = provider.image_calls[0]
        assert model == "vision-model"
        assert image_bytes == b"\x89PNG fake image"
        assert mime_type == "image/png"

    def test_data_url_accepted(self, client: TestClient, install_service):
        provider = install_service(image_outcome="A map.")
        payload = "data:image/jpeg;base64," + base64.b64encode(b"jpeg bytes").decode()

        response = client.post("/api/analyze-image", json={"data": payload, "mimeType": "image/jpeg"})

        assert response.status_code == 200
        assert provider.image_calls[0][1] == b"jpeg bytes"

    def test_line_wrapped_base64_accepted(self, client: TestClient, install_service):
        provider = install_service(image_outcome="A photo.")
        image = bytes(range(256))
        payload = base64.encodebytes(image).decode()

        assert "\n" in payload

        response = client.post("/api/analyze-image", json={"data": payload, "mimeType": "image/png"})

        assert response.status_code == 200
        assert provider.image_calls[0][1] == image

    def test_invalid_base64(self, client: TestClient, install_service):
        provider = install_service(image_outcome="unused")

        response = client.post("/api/analyze-image", json={"data": "not base64!!", "mimeType": "image/png"})

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid image data"}
        assert provider.image_calls == []

    def test_non_image_mime_type(self, client: TestClient, install_service):
        install_service()
        payload = base64.b64encode(b"%PDF").decode()

        response = client.post("/api/analyze-image", json={"data": payload, "mimeType": "application/pdf"})

        assert response.status_code == 422

    def test_provider_failure(self, client: TestClient, install_service):
        install_service(image_outcome=TransientProviderError("overloaded", status_code=503))
        payload = base64.b64encode(b"img").decode()

        response = client.post("/api/analyze-image", json={"data": payload, "mimeType": "image/png"})

        assert response.status_code == 502
        assert response.json() == {"message": "Failed to analyze image"}
