"""Tests for the analyze-image and generate-audio functions."""

from fastapi.testclient import TestClient

from tests.conftest import FakeSpeechClient, FakeVisionClient, InMemoryWordRepository
from visual_dictionary.api.app import create_app


def test_analyze_image_returns_records_and_saves_words(
    container,
    auth_headers,
    vision_client: FakeVisionClient,
    word_repository: InMemoryWordRepository,
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/functions/v1/analyze-image",
        json={"imageUrl": "https://img.test/kitchen.png"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    analysis = response.json()["analysis"]
    assert analysis[0] == {
        "word": "Apple",
        "definition": "A round fruit with red or green skin.",
        "sampleSentence": "I eat an apple every morning.",
    }
    assert vision_client.calls[0]["image_url"] == "https://img.test/kitchen.png"
    assert len(word_repository.words) == 2


def test_analyze_image_without_url_is_bad_request(container, auth_headers) -> None:
    client = TestClient(create_app(container))

    response = client.post("/functions/v1/analyze-image", json={}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "No image URL provided"}


def test_analyze_image_model_failure_is_server_error(
    container, auth_headers, vision_client: FakeVisionClient
) -> None:
    async def broken(**_kwargs) -> str:  # type: ignore[no-untyped-def]
        raise RuntimeError("model offline")

    vision_client.describe = broken  # type: ignore[method-assign]
    client = TestClient(create_app(container))

    response = client.post(
        "/functions/v1/analyze-image",
        json={"image": "https://img.test/a.png"},
        headers=auth_headers,
    )

    assert response.status_code == 500
    assert response.json() == {"error": "An unexpected error occurred"}


def test_generate_audio_returns_mpeg_bytes(
    container, auth_headers, speech_client: FakeSpeechClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/functions/v1/generate-audio", json={"text": "apple"}, headers=auth_headers
    )

    assert response.status_code == 200
    assert response.headers["content-type"] == "audio/mpeg"
    assert response.content == speech_client.content


def test_generate_audio_errors_are_json_with_timestamp(
    container, auth_headers, speech_client: FakeSpeechClient
) -> None:
    speech_client.failing_formats = {"mp3"}
    client = TestClient(create_app(container))

    missing = client.post(
        "/functions/v1/generate-audio", json={}, headers=auth_headers
    )
    failed = client.post(
        "/functions/v1/generate-audio", json={"text": "apple"}, headers=auth_headers
    )

    assert missing.status_code == 400
    assert missing.json()["error"] == "No text provided"
    assert "timestamp" in missing.json()
    assert failed.status_code == 500
    assert failed.json()["error"] == "Failed to generate audio"


def test_functions_require_session(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/functions/v1/generate-audio", json={"text": "apple"})

    assert response.status_code == 401
    assert response.json() == {"error": "Not authenticated"}


def test_functions_answer_cors_preflight(container) -> None:
    client = TestClient(create_app(container))

    response = client.options(
        "/functions/v1/analyze-image",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, content-type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_functions_without_body_report_missing_input(container, auth_headers) -> None:
    client = TestClient(create_app(container))

    analyze = client.post("/functions/v1/analyze-image", headers=auth_headers)
    audio = client.post("/functions/v1/generate-audio", headers=auth_headers)

    assert analyze.status_code == 400
    assert analyze.json() == {"error": "No image URL provided"}
    assert audio.status_code == 400
    assert audio.json()["error"] == "No text provided"


def test_malformed_body_is_bad_request(container, auth_headers) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/functions/v1/analyze-image",
        content=b"{not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}
