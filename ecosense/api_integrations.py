"""
EcoSense AI - External Data Adapters
Handles all calls to the weather and inference providers
- OpenWeather: current weather, forecast, geocoding, air pollution
- Hugging Face Inference API: sentiment, emotion, zero-shot, translation,
  NER, similarity, summarization, toxicity
Every call is a single attempt. Failures are logged and turned into
None or a neutral default so feature processing can carry on.
"""

import re
import logging
import requests

from ecosense import config
from ecosense.utils import round_half_up

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# A shared requests session and default headers
DEFAULT_HEADERS = {'User-Agent': 'EcoSenseAI/1.0 (Environmental Intelligence Demo)'}
SESSION = requests.Session()

# Errors that mean "the provider did not give us something usable"
ADAPTER_ERRORS = (requests.RequestException, ValueError, KeyError, IndexError, TypeError)

COORDINATE_PATTERN = re.compile(r'^(-?\d+\.?\d*),\s*(-?\d+\.?\d*)$')

AIR_QUALITY_LEVELS = ['Good', 'Fair', 'Moderate', 'Poor', 'Very Poor']


class UpstreamError(requests.RequestException):
    """Non-2xx or error body from a provider"""


# ------------------------
# Helper: single-shot request
# ------------------------
def _http_get(session, url, params=None, headers=None, timeout=None):
    headers = {**DEFAULT_HEADERS, **(headers or {})}
    resp = session.get(url, params=params, headers=headers, timeout=timeout or config.HTTP_TIMEOUT)
    if resp.status_code != 200:
        raise UpstreamError(f"{url} returned {resp.status_code}: {getattr(resp, 'text', '')[:200]}")
    return resp


def _http_post(session, url, json_payload=None, headers=None, timeout=None):
    headers = {**DEFAULT_HEADERS, **(headers or {})}
    resp = session.post(url, headers=headers, json=json_payload, timeout=timeout or config.HTTP_TIMEOUT)
    if resp.status_code != 200:
        raise UpstreamError(f"{url} returned {resp.status_code}: {getattr(resp, 'text', '')[:200]}")
    return resp


def parse_coordinates(location):
    """'lat,lon' text to a (lat, lon) float pair, or None"""
    match = COORDINATE_PATTERN.match((location or '').strip())
    if not match:
        return None
    return float(match.group(1)), float(match.group(2))


# ========================
# WEATHER APIs
# ========================

class OpenWeatherAPI:
    """
    OpenWeather API Integration
    Provides current weather, 5-day forecast, geocoding and air quality
    """

    def __init__(self, api_key=None, base_url=None, geo_url=None, session=None, timeout=None):
        self.api_key = api_key if api_key is not None else config.OPENWEATHER_API_KEY
        self.base_url = base_url or config.OPENWEATHER_BASE_URL
        self.geo_url = geo_url or config.OPENWEATHER_GEO_URL
        self.session = session or SESSION
        self.timeout = timeout or config.HTTP_TIMEOUT

    def _location_params(self, location):
        coords = parse_coordinates(location)
        if coords:
            return {'lat': coords[0], 'lon': coords[1]}
        return {'q': location}

    def get_current_weather(self, location):
        """Get current weather conditions for a place name or 'lat,lon'"""
        if not self.api_key:
            logger.warning("⚠️ OpenWeather API key not set, weather unavailable")
            return None

        try:
            params = {**self._location_params(location), 'appid': self.api_key, 'units': 'metric'}
            data = _http_get(self.session, f"{self.base_url}/weather", params=params, timeout=self.timeout).json()
            return {
                'temperature': data['main']['temp'],
                'humidity': data['main']['humidity'],
                'pressure': data['main']['pressure'],
                'windSpeed': data['wind']['speed'],
                'description': data['weather'][0]['description'],
                'icon': data['weather'][0]['icon'],
                'city': data['name'],
                'country': data['sys']['country'],
                'feelsLike': data['main']['feels_like'],
                'visibility': data['visibility'] / 1000,
                'clouds': data['clouds']['all'],
            }
        except ADAPTER_ERRORS as e:
            logger.error(f"❌ Weather fetch error: {e}")
            return None

    def get_air_quality(self, lat, lon):
        if not self.api_key:
            return None

        try:
            params = {'lat': lat, 'lon': lon, 'appid': self.api_key}
            data = _http_get(self.session, f"{self.base_url}/air_pollution", params=params, timeout=self.timeout).json()
            entry = data['list'][0]
            aqi = entry['main']['aqi']
            level = AIR_QUALITY_LEVELS[aqi - 1] if 1 <= aqi <= len(AIR_QUALITY_LEVELS) else 'Unknown'
            return {
                'aqi': aqi,
                'components': entry['components'],
                'qualityLevel': level,
            }
        except ADAPTER_ERRORS as e:
            logger.error(f"❌ Air quality fetch error: {e}")
            return None

    def get_forecast(self, location):
        """Daily forecast: every 8th three-hour slot is one day"""
        if not self.api_key:
            return []

        try:
            params = {**self._location_params(location), 'appid': self.api_key, 'units': 'metric'}
            data = _http_get(self.session, f"{self.base_url}/forecast", params=params, timeout=self.timeout).json()
            daily = []
            for item in data['list'][::8]:
                daily.append({
                    'date': item['dt_txt'].split(' ')[0],
                    'temperature': item['main']['temp'],
                    'humidity': item['main']['humidity'],
                    'description': item['weather'][0]['description'],
                    'precipitation': item.get('pop', 0) * 100,
                })
            return daily
        except ADAPTER_ERRORS as e:
            logger.error(f"❌ Forecast fetch error: {e}")
            return []

    def geocode(self, location):
        coords = parse_coordinates(location)
        if coords:
            return {'lat': coords[0], 'lon': coords[1]}

        if not self.api_key or not location:
            return None

        try:
            params = {'q': location, 'limit': 1, 'appid': self.api_key}
            data = _http_get(self.session, f"{self.geo_url}/direct", params=params, timeout=self.timeout).json()
            if not data:
                return None
            return {'lat': data[0]['lat'], 'lon': data[0]['lon']}
        except ADAPTER_ERRORS as e:
            logger.error(f"❌ Geocoding error: {e}")
            return None

    @staticmethod
    def calculate_disaster_risk(weather):
        """Flood, storm and heatwave risk (0-100) from a weather snapshot"""
        humidity = weather.get('humidity', 0)
        wind_speed = weather.get('windSpeed', 0)
        pressure = weather.get('pressure', 1013)
        temperature = weather.get('temperature', 0)

        if humidity > 90:
            flood_risk = 80
        elif humidity > 80:
            flood_risk = 60
        elif humidity > 70:
            flood_risk = 40
        else:
            flood_risk = 20

        if wind_speed > 20:
            storm_risk = 90
        elif wind_speed > 15:
            storm_risk = 70
        elif wind_speed > 10:
            storm_risk = 50
        else:
            storm_risk = 20

        # Low pressure systems
        if pressure < 1000:
            storm_risk = min(100, storm_risk + 20)

        if temperature > 40:
            heatwave_risk = 95
        elif temperature > 35:
            heatwave_risk = 70
        elif temperature > 30:
            heatwave_risk = 40
        else:
            heatwave_risk = 10

        overall_risk = round_half_up((flood_risk + storm_risk + heatwave_risk) / 3)

        if overall_risk > 70:
            risk_level = 'Critical'
        elif overall_risk > 50:
            risk_level = 'High'
        elif overall_risk > 30:
            risk_level = 'Moderate'
        else:
            risk_level = 'Low'

        return {
            'floodRisk': flood_risk,
            'stormRisk': storm_risk,
            'heatwaveRisk': heatwave_risk,
            'overallRisk': overall_risk,
            'riskLevel': risk_level,
        }


# ========================
# AI/ML APIs
# ========================

class HuggingFaceAPI:
    """
    Hugging Face Inference API Integration
    Free tier works without a key (rate limited). Every method returns a
    neutral default when the model is loading, rate limited or unreachable.
    """

    MODELS = {
        'sentiment': 'nlptown/bert-base-multilingual-uncased-sentiment',
        'emotion': 'j-hartmann/emotion-english-distilroberta-base',
        'zero_shot': 'facebook/bart-large-mnli',
        'summarization': 'facebook/bart-large-cnn',
        'ner': 'dslim/bert-base-NER',
        'similarity': 'sentence-transformers/all-MiniLM-L6-v2',
        'toxicity': 'unitary/toxic-bert',
    }

    TRANSLATION_MODELS = {
        'es': 'Helsinki-NLP/opus-mt-en-es',
        'fr': 'Helsinki-NLP/opus-mt-en-fr',
        'de': 'Helsinki-NLP/opus-mt-en-de',
        'ja': 'Helsinki-NLP/opus-mt-en-jap',
        'zh': 'Helsinki-NLP/opus-mt-en-zh',
        'ar': 'Helsinki-NLP/opus-mt-en-ar',
        'hi': 'Helsinki-NLP/opus-mt-en-hi',
        'pt': 'Helsinki-NLP/opus-mt-en-pt',
        'ru': 'Helsinki-NLP/opus-mt-en-ru',
        'ko': 'Helsinki-NLP/opus-mt-en-ko',
    }

    def __init__(self, api_key=None, base_url=None, session=None, timeout=None):
        self.api_key = api_key if api_key is not None else config.HUGGINGFACE_API_KEY
        self.base_url = base_url or config.HUGGINGFACE_BASE_URL
        self.session = session or SESSION
        self.timeout = timeout or config.HTTP_TIMEOUT

    def query_model(self, model_name, payload):
        """POST a payload to a hosted model; raises on transport or API errors"""
        headers = {'Content-Type': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f"Bearer {self.api_key}"

        resp = _http_post(self.session, f"{self.base_url}/{model_name}", json_payload=payload,
                          headers=headers, timeout=self.timeout)
        result = resp.json()
        # Loading models answer 200 with {"error": "...", "estimated_time": ...}
        if isinstance(result, dict) and 'error' in result:
            raise UpstreamError(f"{model_name}: {result['error']}")
        return result

    def analyze_sentiment(self, text):
        default = [{'label': 'neutral', 'score': 0.5}]
        try:
            result = self.query_model(self.MODELS['sentiment'], {'inputs': text})
            scores = result[0] if result else None
            if not scores:
                return default
            return sorted(scores, key=lambda s: s['score'], reverse=True)
        except ADAPTER_ERRORS as e:
            logger.error(f"❌ HF sentiment error: {e}")
            return default

    def classify_emotion(self, text):
        default = [
            {'label': 'neutral', 'score': 0.4},
            {'label': 'joy', 'score': 0.3},
            {'label': 'sadness', 'score': 0.3},
        ]
        try:
            result = self.query_model(self.MODELS['emotion'], {'inputs': text})
            return (result[0] if result else None) or default
        except ADAPTER_ERRORS as e:
            logger.error(f"❌ HF emotion classification error: {e}")
            return default

    def classify_zero_shot(self, text, labels):
        labels = list(labels)
        uniform = [1 / len(labels) for _ in labels] if labels else []
        try:
            result = self.query_model(self.MODELS['zero_shot'], {
                'inputs': text,
                'parameters': {'candidate_labels': labels},
            })
            return {
                'labels': result.get('labels') or labels,
                'scores': result.get('scores') or uniform,
            }
        except (*ADAPTER_ERRORS, AttributeError) as e:
            logger.error(f"❌ HF zero-shot error: {e}")
            return {'labels': labels, 'scores': uniform}

    def summarize_text(self, text):
        try:
            result = self.query_model(self.MODELS['summarization'], {
                'inputs': text,
                'parameters': {'max_length': 150, 'min_length': 30},
            })
            return (result[0].get('summary_text') if result else None) or text[:200] + '...'
        except (*ADAPTER_ERRORS, AttributeError) as e:
            logger.error(f"❌ HF summarization error: {e}")
            return text[:200] + '...'

    def translate_text(self, text, target_lang='es'):
        model = self.TRANSLATION_MODELS.get(target_lang, self.TRANSLATION_MODELS['es'])
        try:
            result = self.query_model(model, {'inputs': text})
            return (result[0].get('translation_text') if result else None) or text
        except (*ADAPTER_ERRORS, AttributeError) as e:
            logger.error(f"❌ HF translation error ({target_lang}): {e}")
            return text

    def extract_entities(self, text):
        try:
            result = self.query_model(self.MODELS['ner'], {'inputs': text})
            entities = []
            for item in result or []:
                entities.append({
                    'word': item.get('word', ''),
                    'entity': item.get('entity') or item.get('entity_group', ''),
                    'score': item.get('score', 0),
                })
            return entities
        except (*ADAPTER_ERRORS, AttributeError) as e:
            logger.error(f"❌ HF NER error: {e}")
            return []

    def compute_similarity(self, source, sentences):
        sentences = list(sentences)
        try:
            result = self.query_model(self.MODELS['similarity'], {
                'inputs': {'source_sentence': source, 'sentences': sentences},
            })
            if not isinstance(result, list) or len(result) != len(sentences):
                raise ValueError("unexpected similarity payload")
            return [float(score) for score in result]
        except ADAPTER_ERRORS as e:
            logger.error(f"❌ HF similarity error: {e}")
            return [0.5 for _ in sentences]

    def detect_toxicity(self, text):
        default = [{'label': 'non-toxic', 'score': 0.95}]
        try:
            result = self.query_model(self.MODELS['toxicity'], {'inputs': text})
            return (result[0] if result else None) or default
        except ADAPTER_ERRORS as e:
            logger.error(f"❌ HF toxicity error: {e}")
            return default


# ========================
# EXPORT ALL
# ========================

__all__ = [
    'OpenWeatherAPI',
    'HuggingFaceAPI',
    'UpstreamError',
    'parse_coordinates',
]
