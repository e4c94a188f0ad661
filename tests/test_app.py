"""
Tests for the application factory.
"""

from ecosense import create_app
from ecosense.features import SERVICES_KEY


def test_features_blueprint_registered(app):
    assert 'features' in app.blueprints
    rules = {str(rule) for rule in app.url_map.iter_rules()}
    assert '/features/<feature_id>' in rules
    assert '/health' in rules


def test_overrides_applied(app, offline_services):
    assert app.config['TESTING'] is True
    assert app.config['SIMULATE_LATENCY'] is False
    assert app.extensions[SERVICES_KEY] is offline_services


def test_default_services_follow_latency_setting():
    app = create_app({'TESTING': True, 'SIMULATE_LATENCY': False})
    assert app.extensions[SERVICES_KEY].simulate_latency is False


def test_health(client):
    resp = client.get('/health')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['status'] == 'healthy'
    assert body['modules']['features'] is True
    assert set(body['integrations']) == {'openweather', 'huggingface', 'gemini'}


def test_unknown_route_is_json_404(client):
    resp = client.get('/nowhere')
    assert resp.status_code == 404
    assert resp.get_json()['error'] == 'Not Found'


def test_cors_headers(client):
    resp = client.get('/health', headers={'Origin': 'http://localhost:3000'})
    assert resp.headers.get('Access-Control-Allow-Origin') == 'http://localhost:3000'


def test_upload_limit(app):
    assert app.config['MAX_CONTENT_LENGTH'] > 0
