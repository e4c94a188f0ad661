"""
Shared fixtures: offline adapters, fake Gemini clients, seeded scorer
"""

import pytest

from ecosense import create_app
from ecosense.ai_service import GeminiService
from ecosense.api_integrations import HuggingFaceAPI, OpenWeatherAPI
from ecosense.feature_processors import FeatureServices
from ecosense.scoring import RandomScorer

from fakes import FailingSession, FakeGeminiClient


@pytest.fixture
def scorer():
    return RandomScorer(seed=42)


@pytest.fixture
def failing_session():
    return FailingSession()


@pytest.fixture
def offline_services(failing_session, scorer):
    """Every adapter configured but unreachable; Gemini has no key"""
    return FeatureServices(
        weather=OpenWeatherAPI(api_key='test-key', session=failing_session),
        inference=HuggingFaceAPI(api_key='test-key', session=failing_session),
        gemini=GeminiService(api_key=''),
        scorer=scorer,
        simulate_latency=False,
    )


@pytest.fixture
def gemini_services(failing_session, scorer):
    """Factory: offline adapters plus a fake Gemini client answering `reply`"""
    def build(reply=None, error=None):
        return FeatureServices(
            weather=OpenWeatherAPI(api_key='test-key', session=failing_session),
            inference=HuggingFaceAPI(api_key='test-key', session=failing_session),
            gemini=GeminiService(api_key='test-key', client=FakeGeminiClient(reply=reply, error=error)),
            scorer=scorer,
            simulate_latency=False,
        )
    return build


@pytest.fixture
def app(offline_services):
    app = create_app({
        'TESTING': True,
        'SIMULATE_LATENCY': False,
        'CORS_ORIGINS': ['http://localhost:3000'],
        'FEATURE_SERVICES': offline_services,
    })
    yield app


@pytest.fixture
def client(app):
    return app.test_client()
