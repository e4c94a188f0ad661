"""
EcoSense AI - Gemini Service
Text, structured JSON and image analysis through the Google Gen AI SDK,
plus the local embedding projection used by the pattern explorer.
Unlike the other adapters, Gemini failures raise GenerationError so
each feature can decide on its own templated fallback.
"""

import base64
import json
import logging

import numpy as np
from google import genai
from google.genai import types

from ecosense import config

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

JSON_ONLY_SUFFIX = "\n\nRespond ONLY with valid JSON. No markdown, no explanation, just the JSON object."
JSON_SCHEMA_SUFFIX = (
    "\n\nRespond ONLY with valid JSON matching this schema:\n{schema}"
    "\n\nNo markdown, no explanation, just the JSON object."
)


class GenerationError(Exception):
    """Gemini could not produce a usable response"""


def strip_code_fences(text):
    """Drop a leading ```json / ``` fence and a trailing ``` fence"""
    cleaned = (text or '').strip()
    if cleaned.startswith('```json'):
        cleaned = cleaned[7:]
    elif cleaned.startswith('```'):
        cleaned = cleaned[3:]
    if cleaned.endswith('```'):
        cleaned = cleaned[:-3]
    return cleaned.strip()


class GeminiService:

    def __init__(self, api_key=None, model=None, client=None):
        self.api_key = api_key if api_key is not None else config.GEMINI_API_KEY
        self.model = model or config.GEMINI_MODEL
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise GenerationError("GEMINI_API_KEY is not configured")
            self._client = genai.Client(api_key=self.api_key)
            logger.info(f"✅ Gemini client initialized with model: {self.model}")
        return self._client

    def _generate(self, contents):
        client = self.client
        try:
            resp = client.models.generate_content(model=self.model, contents=contents)
        except Exception as e:
            logger.error(f"❌ Gemini API error: {e}")
            raise GenerationError("Failed to generate AI response") from e

        text = getattr(resp, 'text', None)
        if not text:
            raise GenerationError("Gemini returned an empty response")
        return text

    def generate_text(self, prompt):
        return self._generate(prompt)

    def generate_json(self, prompt, schema=None):
        if schema:
            full_prompt = prompt + JSON_SCHEMA_SUFFIX.format(schema=schema)
        else:
            full_prompt = prompt + JSON_ONLY_SUFFIX

        text = self.generate_text(full_prompt)
        try:
            return json.loads(strip_code_fences(text))
        except ValueError as e:
            logger.error(f"❌ Gemini JSON parse error: {e}")
            raise GenerationError("Failed to generate structured AI response") from e

    def analyze_image(self, image_base64, mime_type, prompt):
        try:
            image_part = types.Part.from_bytes(data=base64.b64decode(image_base64), mime_type=mime_type)
        except (ValueError, TypeError) as e:
            raise GenerationError("Image payload is not valid base64") from e
        return self._generate([prompt, image_part])


def generate_embeddings(rows, dims=4):
    """
    Project each numeric row onto `dims` sine bases:
    out[i] = mean_j(row[j] * sin((i + 1) * (j + 1))), rounded to 4 places.
    Deterministic; empty rows project to zeros.
    """
    result = []
    for row in rows:
        values = np.asarray(row, dtype=float)
        if values.size == 0:
            result.append([0.0] * dims)
            continue
        i = np.arange(1, dims + 1).reshape(-1, 1)
        j = np.arange(1, values.size + 1).reshape(1, -1)
        projected = (np.sin(i * j) * values).sum(axis=1) / values.size
        result.append([round(float(v), 4) for v in projected])
    return result
