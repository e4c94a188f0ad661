"""
Test doubles for requests sessions and the Gemini client
"""

import requests


class FailingSession:
    """requests.Session stand-in whose every call fails like a dead network"""

    def __init__(self):
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append(('GET', url))
        raise requests.ConnectionError(f"offline: {url}")

    def post(self, url, **kwargs):
        self.calls.append(('POST', url))
        raise requests.ConnectionError(f"offline: {url}")


class FakeResponse:

    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code
        self.text = str(payload)

    def json(self):
        return self._payload


class CannedSession:
    """Answers each request with the first payload whose key is a substring of the URL"""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def _answer(self, method, url, kwargs):
        self.calls.append((method, url, kwargs))
        for fragment, payload in self.responses.items():
            if fragment in url:
                if isinstance(payload, FakeResponse):
                    return payload
                return FakeResponse(payload)
        return FakeResponse({'message': 'not found'}, status_code=404)

    def get(self, url, **kwargs):
        return self._answer('GET', url, kwargs)

    def post(self, url, **kwargs):
        return self._answer('POST', url, kwargs)


class FakeGeminiResponse:

    def __init__(self, text):
        self.text = text


class FakeModels:

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def generate_content(self, model, contents):
        self.calls.append({'model': model, 'contents': contents})
        if self.error:
            raise self.error
        return FakeGeminiResponse(self.reply)


class FakeGeminiClient:

    def __init__(self, reply=None, error=None):
        self.models = FakeModels(reply=reply, error=error)
