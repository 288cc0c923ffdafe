"""
Shared pytest fixtures and configuration for all tests
"""
import pytest
import sys
from pathlib import Path
from unittest.mock import AsyncMock

# Add backend to Python path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

@pytest.fixture
def settings():
    """Settings with a test API key, isolated from any local .env file"""
    from config.settings import Settings
    return Settings(
        _env_file=None,
        OPENROUTER_API_KEY="test-key",
        SITE_URL="https://nanobanana.test",
        APP_TITLE="Nano Banana Test"
    )

@pytest.fixture
def unconfigured_settings():
    """Settings without an API key"""
    from config.settings import Settings
    return Settings(_env_file=None, OPENROUTER_API_KEY=None)

@pytest.fixture
def sample_message():
    """Upstream message with text and one generated image"""
    return {
        "role": "assistant",
        "content": "ok",
        "images": [
            {"type": "image_url", "image_url": {"url": "http://x/1.png"}}
        ]
    }

@pytest.fixture
def fake_openrouter_service():
    """Stand-in for OpenRouterService; tests set generate's return value or side effect"""
    service = AsyncMock()
    service.is_configured = True
    service.model = "google/gemini-2.5-flash-image-preview"
    return service

@pytest.fixture
def client(fake_openrouter_service):
    """FastAPI test client with the OpenRouter service swapped for the fake"""
    from fastapi.testclient import TestClient
    from main import app
    from api.generate import get_openrouter_service

    app.dependency_overrides[get_openrouter_service] = lambda: fake_openrouter_service
    yield TestClient(app)
    app.dependency_overrides.clear()
