"""
Tests for the /features blueprint.
"""

import io

import pytest


class TestRunFeature:

    def test_tokyo_submission(self, client):
        resp = client.post('/features/1', data={'input_0': 'Tokyo, Japan'})
        assert resp.status_code == 200
        body = resp.get_json()
        assert body['success'] is True
        assert body['message'] == 'Analysis completed successfully'
        assert body['data']['_inputPercentage'] == 11
        assert body['data']['weatherData']['city'] == 'Tokyo'
        assert body['data']['resourceTable']

    def test_response_keeps_processor_key_order(self, client):
        body = client.post('/features/8', data={'input_3': 'enzyme'}).get_json()
        assert list(body['data'])[:2] == ['_inputWarning', '_inputPercentage']

    @pytest.mark.parametrize("feature_id", ['0', '11', 'abc'])
    def test_invalid_id(self, client, feature_id):
        resp = client.post(f'/features/{feature_id}', data={'input_0': 'x'})
        assert resp.status_code == 400
        body = resp.get_json()
        assert body['success'] is False
        assert 'Invalid feature ID' in body['error']

    def test_empty_submission(self, client):
        resp = client.post('/features/3', data={'input_0': '   ', '_totalInputs': '7'})
        assert resp.status_code == 400
        assert resp.get_json() == {'success': False, 'error': 'No input data provided'}

    def test_only_undeclared_fields_is_empty(self, client):
        resp = client.post('/features/8', data={'notes': 'hello', 'input_9': 'beyond the schema'})
        assert resp.status_code == 400
        assert resp.get_json()['error'] == 'No input data provided'

    def test_undeclared_fields_do_not_inflate_completeness(self, client):
        data = {'input_0': 'Tokyo, Japan'}
        data.update({f'extra_{i}': 'noise' for i in range(6)})
        resp = client.post('/features/1', data=data)
        assert resp.status_code == 200
        result = resp.get_json()['data']
        assert result['_inputPercentage'] == 11
        assert '1 out of 9 inputs (11%)' in result['_inputWarning']

    def test_full_submission_with_extras_caps_at_hundred(self, client):
        data = {f'input_{i}': 'value' for i in range(6)}
        data.update({'notes': 'a', 'comment': 'b'})
        result = client.post('/features/8', data=data).get_json()['data']
        assert result['_inputPercentage'] == 100
        assert result['_inputWarning'] is None

    def test_file_upload_becomes_reference(self, client):
        data = {
            'input_0': 'Mumbai',
            'input_2': (io.BytesIO(b'fake png bytes'), 'satellite.png', 'image/png'),
        }
        resp = client.post('/features/1', data=data, content_type='multipart/form-data')
        assert resp.status_code == 200
        result = resp.get_json()['data']
        assert result['_inputPercentage'] == 22
        assert 'satellite.png' in result['imageAnalysis']

    def test_file_only_submission_is_accepted(self, client):
        data = {'input_0': (io.BytesIO(b'RIFF....'), 'speech.wav', 'audio/wav')}
        resp = client.post('/features/6', data=data, content_type='multipart/form-data')
        assert resp.status_code == 200
        assert resp.get_json()['data']['_inputPercentage'] == 14

    def test_processing_failure_returns_500(self, client, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError('router offline')

        monkeypatch.setattr('ecosense.features.process_feature', explode)
        resp = client.post('/features/2', data={'input_0': 'Nairobi'})
        assert resp.status_code == 500
        body = resp.get_json()
        assert body['success'] is False
        assert body['error'] == 'Failed to process feature'
        assert body['details'] == 'router offline'


class TestFeatureInfo:

    def test_describe(self, client):
        resp = client.get('/features/3')
        assert resp.status_code == 200
        body = resp.get_json()
        assert body['success'] is True
        assert body['id'] == 3
        assert len(body['inputs']) == 7

    def test_describe_invalid(self, client):
        resp = client.get('/features/42')
        assert resp.status_code == 400
        assert resp.get_json()['success'] is False

    def test_catalogue(self, client):
        resp = client.get('/features/')
        assert resp.status_code == 200
        features = resp.get_json()['features']
        assert len(features) == 10
        assert features[6]['title'] == 'Urban Dynamics Digital Twin'
        assert features[0]['inputCount'] == 9
