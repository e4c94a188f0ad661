"""
Tests for the Gemini service wrapper and local embeddings.
"""

import base64

import pytest

from ecosense.ai_service import GeminiService, GenerationError, generate_embeddings, strip_code_fences

from fakes import FakeGeminiClient


class TestStripCodeFences:

    @pytest.mark.parametrize("text, expected", [
        ('```json\n{"a": 1}\n```', '{"a": 1}'),
        ('```\n{"a": 1}\n```', '{"a": 1}'),
        ('  {"a": 1}  ', '{"a": 1}'),
        (None, ''),
    ])
    def test_strip(self, text, expected):
        assert strip_code_fences(text) == expected


class TestGeminiService:

    def test_no_key_raises(self):
        service = GeminiService(api_key='')
        with pytest.raises(GenerationError):
            service.generate_text('hello')

    def test_generate_text(self):
        client = FakeGeminiClient(reply='A calm day.')
        service = GeminiService(api_key='k', model='gemini-test', client=client)
        assert service.generate_text('Describe the weather') == 'A calm day.'
        assert client.models.calls[0]['model'] == 'gemini-test'

    def test_generate_json_strips_fences(self):
        client = FakeGeminiClient(reply='```json\n{"alertMessage": "Flood watch"}\n```')
        service = GeminiService(api_key='k', client=client)
        assert service.generate_json('Assess risk') == {'alertMessage': 'Flood watch'}
        assert 'Respond ONLY with valid JSON' in client.models.calls[0]['contents']

    def test_generate_json_with_schema(self):
        client = FakeGeminiClient(reply='{"ok": true}')
        service = GeminiService(api_key='k', client=client)
        service.generate_json('Check', schema='{"ok": "boolean"}')
        assert '{"ok": "boolean"}' in client.models.calls[0]['contents']

    def test_invalid_json_raises(self):
        service = GeminiService(api_key='k', client=FakeGeminiClient(reply='not json at all'))
        with pytest.raises(GenerationError):
            service.generate_json('Assess risk')

    def test_empty_reply_raises(self):
        service = GeminiService(api_key='k', client=FakeGeminiClient(reply=''))
        with pytest.raises(GenerationError):
            service.generate_text('hello')

    def test_client_error_wrapped(self):
        service = GeminiService(api_key='k', client=FakeGeminiClient(error=RuntimeError('quota exceeded')))
        with pytest.raises(GenerationError) as excinfo:
            service.generate_text('hello')
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_analyze_image_sends_prompt_and_image(self):
        client = FakeGeminiClient(reply='Standing water in the north-east quadrant.')
        service = GeminiService(api_key='k', client=client)
        image = base64.b64encode(b'\x89PNG fake image bytes').decode('ascii')

        result = service.analyze_image(image, 'image/png', 'Describe flooding')

        assert result.startswith('Standing water')
        contents = client.models.calls[0]['contents']
        assert contents[0] == 'Describe flooding'
        assert len(contents) == 2

    def test_analyze_image_bad_base64(self):
        service = GeminiService(api_key='k', client=FakeGeminiClient(reply='unused'))
        with pytest.raises(GenerationError):
            service.analyze_image('abc', 'image/png', 'Describe')


class TestEmbeddings:

    def test_shape_and_rounding(self):
        rows = generate_embeddings([[1.0, 2.0, 3.0], [10, 20]])
        assert len(rows) == 2
        assert all(len(row) == 4 for row in rows)
        assert all(round(v, 4) == v for row in rows for v in row)

    def test_deterministic(self):
        assert generate_embeddings([[0.5, 0.25]]) == generate_embeddings([[0.5, 0.25]])

    def test_empty_row(self):
        assert generate_embeddings([[]], dims=3) == [[0.0, 0.0, 0.0]]

    def test_single_value_row(self):
        # sin(1), sin(2), sin(3), sin(4) scaled by the value
        row = generate_embeddings([[2.0]])[0]
        assert row[0] == pytest.approx(1.6829, abs=1e-4)
