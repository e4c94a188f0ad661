"""
EcoSense AI - Feature Input Schema
Ordered, typed input descriptors for the ten showcase features.
The wire name of each input is its position: input_0, input_1, ...
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

TEXT = 'text'
FILE = 'file'

# Roles
LOCATION = 'location'
PRIMARY_TEXT = 'primary_text'

FILE_HINTS = ('file', 'upload', 'image', 'audio', 'video', 'csv', 'dataset')


def guess_input_kind(label):
    """Fallback only: the explicit kind on a descriptor always wins"""
    lowered = (label or '').lower()
    return FILE if any(hint in lowered for hint in FILE_HINTS) else TEXT


def _slug(label):
    return re.sub(r'[^a-z0-9]+', '_', label.lower()).strip('_')


@dataclass(frozen=True)
class InputDescriptor:
    key: str
    name: str
    label: str
    kind: str
    required: bool
    default: str = ''
    example: str = ''
    placeholder: str = ''
    role: Optional[str] = None

    def to_dict(self):
        data = {
            'key': self.key,
            'name': self.name,
            'label': self.label,
            'kind': self.kind,
            'required': self.required,
            'default': self.default,
            'example': self.example,
            'placeholder': self.placeholder,
        }
        if self.role:
            data['role'] = self.role
        return data


@dataclass(frozen=True)
class FeatureDefinition:
    id: int
    title: str
    emoji: str
    description: str
    inputs: Tuple[InputDescriptor, ...] = field(default_factory=tuple)

    def field_for_role(self, role) -> Optional[InputDescriptor]:
        return next((d for d in self.inputs if d.role == role), None)

    def input_keys(self) -> Tuple[str, ...]:
        return tuple(d.key for d in self.inputs)

    def summary(self):
        return {
            'id': self.id,
            'title': self.title,
            'emoji': self.emoji,
            'description': self.description,
            'inputCount': len(self.inputs),
        }

    def to_dict(self):
        return {**self.summary(), 'inputs': [d.to_dict() for d in self.inputs]}


def _inputs(*rows):
    """
    Each row is (label, default, example, placeholder[, kind[, role]]).
    An empty placeholder marks an upload field.
    """
    descriptors = []
    for index, row in enumerate(rows):
        label, default, example, placeholder = row[:4]
        kind = row[4] if len(row) > 4 and row[4] else (FILE if placeholder == '' else None)
        role = row[5] if len(row) > 5 else None
        kind = kind or guess_input_kind(label)
        descriptors.append(InputDescriptor(
            key=f"input_{index}",
            name=_slug(label),
            label=label,
            kind=kind,
            required=kind == TEXT,
            default=default,
            example=example,
            placeholder=placeholder,
            role=role,
        ))
    return tuple(descriptors)


# ========================
# FEATURE TABLE
# ========================

FEATURES: Dict[int, FeatureDefinition] = {
    1: FeatureDefinition(
        id=1,
        title="Multimodal Crisis Predictor & Planner",
        emoji="🌪️",
        description="AI-powered disaster prediction and response planning using satellite imagery, "
                    "weather data, and social media analysis.",
        inputs=_inputs(
            ("Location", "New York, USA", "e.g. Tokyo, Japan or 40.7128, -74.0060",
             "Enter city name or coordinates", TEXT, LOCATION),
            ("Weather & climate conditions", "cloudy, heavy rain expected", "e.g. sunny, 25°C, high humidity",
             "Describe current weather conditions"),
            ("Satellite imagery", "", "Optional: Upload satellite image", ""),
            ("Social media posts", "Reports of flooding in downtown area",
             "e.g. Traffic jam on highway, people evacuating", "Enter social media reports or news",
             TEXT, PRIMARY_TEXT),
            ("Voice emergency reports", "", "Optional: Upload voice emergency report", ""),
            ("IoT sensor data", "Air quality: 150 AQI, Water level: 2m above normal",
             "e.g. Temperature: 35°C, PM2.5: 80", "Enter sensor readings"),
            ("GPS mobility traces", "High traffic towards city center", "e.g. People moving to shelters",
             "Describe mobility patterns"),
            ("Road network graphs", "", "Optional: Upload road network data", ""),
            ("Traffic sensor feeds", "Rush hour traffic, main roads congested",
             "e.g. Highway closed, alternate routes busy", "Describe traffic conditions"),
        ),
    ),
    2: FeatureDefinition(
        id=2,
        title="Multisensory Ecosystem Health Analyzer",
        emoji="🌿",
        description="Comprehensive ecosystem monitoring using bioacoustics, vegetation analysis, "
                    "and environmental sensors.",
        inputs=_inputs(
            ("Ecosystem location", "Amazon Rainforest, Brazil", "e.g. Yellowstone Park, USA",
             "Enter ecosystem location", TEXT, LOCATION),
            ("Drone or satellite vegetation imagery", "", "Optional: Upload drone/satellite vegetation image", ""),
            ("Bioacoustic recordings", "", "Optional: Upload bioacoustic recording (bird sounds, etc.)", ""),
            ("Soil chemical measurements", "pH: 6.5, Nitrogen: moderate, Organic matter: high",
             "e.g. Clay soil, low phosphorus", "Describe soil conditions"),
            ("Water quality readings", "Clear water, slight algae presence, pH 7.2",
             "e.g. Turbidity: low, Dissolved oxygen: 8mg/L", "Describe water quality"),
            ("Species occurrence", "Deer, eagles, various songbirds observed",
             "e.g. 15 bird species, 3 mammal species", "List observed species", TEXT, PRIMARY_TEXT),
            ("Climate history", "Temperature rising 0.5°C per decade", "e.g. Rainfall decreased 10% over 5 years",
             "Describe climate trends"),
            ("Time-lapse ecosystem video", "", "Optional: Upload time-lapse ecosystem video", ""),
        ),
    ),
    3: FeatureDefinition(
        id=3,
        title="Human Emotion & Environment Resonance Scanner",
        emoji="💚",
        description="AI analysis of emotional responses to environmental factors using biometrics "
                    "and contextual data.",
        inputs=_inputs(
            ("Face video stream", "", "Optional: Upload face video for expression analysis", ""),
            ("Voice recordings", "", "Optional: Upload voice recording", ""),
            ("Text journal", "Feeling stressed due to work deadlines. The noisy environment makes it harder "
                             "to concentrate. Taking a walk in the park helped a bit.",
             "e.g. Write how you're feeling today", "Enter your journal entry or mood description",
             TEXT, PRIMARY_TEXT),
            ("Heart rate & skin conductance", "Heart rate: 75bpm, slightly elevated",
             "e.g. Heart rate: 80bpm, skin conductance: normal", "Enter biometric data if available"),
            ("Ambient sound", "Office environment, moderate noise, artificial lighting",
             "e.g. Traffic noise, construction sounds nearby", "Describe ambient sounds around you"),
            ("Light & color", "Bright fluorescent lights, blue-white color",
             "e.g. Warm natural sunlight, dim indoor lighting", "Describe lighting conditions"),
            ("Location for weather & air quality", "New York, USA", "e.g. London, UK for weather correlation",
             "Enter your location for weather data", TEXT, LOCATION),
        ),
    ),
    4: FeatureDefinition(
        id=4,
        title="AI Creative World Builder",
        emoji="🎨",
        description="Generative AI for creating immersive environmental worlds from user inputs and references.",
        inputs=_inputs(
            ("User sketch", "", "Optional: Upload a rough sketch of your world", ""),
            ("Theme description", "A mystical floating island kingdom with crystal caves, ancient ruins, and "
                                  "magical forests. The sky has two moons.",
             "e.g. Post-apocalyptic desert with underground cities", "Describe your world theme and setting",
             TEXT, PRIMARY_TEXT),
            ("Audio mood sample", "", "Optional: Upload mood music for atmosphere", ""),
            ("Environment photos", "", "Optional: Upload reference environment photos", ""),
            ("Historical reference images", "", "Optional: Upload historical/fantasy art references", ""),
            ("Art style", "Studio Ghibli meets Lord of the Rings, vibrant colors, detailed architecture",
             "e.g. Cyberpunk, dark fantasy, steampunk", "Describe desired art style"),
            ("Terrain features", "Mountainous terrain with deep valleys and floating rock formations",
             "e.g. Flat plains with scattered oases", "Describe terrain features"),
        ),
    ),
    5: FeatureDefinition(
        id=5,
        title="Cross-Domain Scientific Hypothesis Generator",
        emoji="🔬",
        description="AI-driven scientific discovery across multiple domains, generating testable hypotheses "
                    "from diverse data sources.",
        inputs=_inputs(
            ("Research context", "Research on how urban green spaces affect air quality and citizen health "
                                 "outcomes. Previous studies show correlation but causation unclear.",
             "e.g. Paste research abstract or describe your study", "Enter research context or paste paper abstract",
             TEXT, PRIMARY_TEXT),
            ("Experimental dataset", "", "Optional: Upload experimental dataset (CSV)", ""),
            ("Data relationships", "Variables: tree coverage %, PM2.5 levels, respiratory illness rates, temperature",
             "e.g. List your key variables and relationships", "Describe your data relationships"),
            ("Simulation outputs", "", "Optional: Upload simulation outputs", ""),
            ("Diagram images", "", "Optional: Upload research diagrams", ""),
            ("Voice queries", "", "Optional: Ask questions via voice", ""),
            ("Prior findings", "Based on existing literature: green spaces reduce PM2.5 by 10-20%",
             "e.g. Previous model predicted X correlation", "Enter prior findings or hypotheses"),
        ),
    ),
    6: FeatureDefinition(
        id=6,
        title="Global Culture & Language Fusion Translator",
        emoji="🌍",
        description="Multilingual AI translator that preserves cultural context, emotions, and gestures "
                    "across languages.",
        inputs=_inputs(
            ("Speech audio", "", "Optional: Upload speech audio for translation", ""),
            ("Text to translate", "Hello! I hope you're having a wonderful day. I'd like to schedule a meeting "
                                  "to discuss our partnership opportunities.",
             "e.g. Enter text you want to translate", "Enter text to translate", TEXT, PRIMARY_TEXT),
            ("Gesture video", "", "Optional: Upload gesture video for analysis", ""),
            ("Facial expression video", "", "Optional: Upload facial expression video", ""),
            ("Cultural context", "Translating for Japanese business context, formal setting",
             "e.g. Casual conversation with friends in Spain", "Describe the cultural context"),
            ("Background audio", "", "Optional: Upload background audio for context", ""),
            ("Geographic context", "New York to Tokyo business communication",
             "e.g. USA to France, casual tourism", "Describe geographic/cultural journey"),
        ),
    ),
    7: FeatureDefinition(
        id=7,
        title="Urban Dynamics Digital Twin",
        emoji="🏙️",
        description="Real-time urban simulation and planning tool using traffic, air quality, and citizen data.",
        inputs=_inputs(
            ("Traffic CCTV footage", "", "Optional: Upload traffic camera footage", ""),
            ("City or district", "Manhattan, New York City", "e.g. Downtown Tokyo, Central London",
             "Enter city or district name", TEXT, LOCATION),
            ("Traffic flow", "Morning rush hour, 8-9 AM, weekday, major intersections congested",
             "e.g. 50,000 vehicles/hour, average speed 15km/h", "Describe traffic conditions"),
            ("Air quality sensors", "PM2.5: 45, AQI: 120, slight smog visible", "e.g. Good air quality, AQI: 50",
             "Enter air quality readings"),
            ("Noise levels", "65 dB average, construction noise on 5th avenue", "e.g. 70 dB, heavy traffic noise",
             "Describe noise levels"),
            ("Public transit status", "Subway running normally, buses delayed 10 minutes",
             "e.g. Metro: 5 min intervals, buses: 15 min intervals", "Describe public transit status"),
            ("Citizen feedback", "Citizens complaining about traffic and air quality on social media",
             "e.g. Positive feedback about new bike lanes", "Enter citizen feedback summary", TEXT, PRIMARY_TEXT),
            ("Recent events", "Last major event: marathon last weekend caused road closures",
             "e.g. Festival caused 30% traffic increase", "Describe recent events affecting city"),
        ),
    ),
    8: FeatureDefinition(
        id=8,
        title="Bio-Synthetic Creativity Lab",
        emoji="🧬",
        description="AI-driven molecular design and bio-inspired creativity using protein sequences "
                    "and creative prompts.",
        inputs=_inputs(
            ("Protein sequence", "MKWVTFISLLFLFSSAYSRGVFRRDAHKSEVAHR", "e.g. Paste protein sequence in FASTA format",
             "Enter protein sequence"),
            ("Molecular constraints", "Small molecule for binding to carbon dioxide, water-soluble, non-toxic",
             "e.g. Enzyme for plastic degradation", "Describe molecular constraints"),
            ("Environmental constraints", "Stable at pH 7-9, temperature resistant up to 60°C",
             "e.g. Must work in marine environment", "Enter environmental constraints"),
            ("Creative prompt", "Design an enzyme that can break down microplastics in ocean water",
             "e.g. Create a bio-luminescent protein", "Enter your creative prompt for bio-design",
             TEXT, PRIMARY_TEXT),
            ("Audio motif", "", "Optional: Upload audio motif for bio-art", ""),
            ("Chemical properties", "Target properties: high catalytic activity, long half-life, easy to produce",
             "e.g. Binding affinity > 10nM, solubility > 1mg/mL", "Enter desired chemical properties"),
        ),
    ),
    9: FeatureDefinition(
        id=9,
        title="Adaptive Education & Skill Synthesizer",
        emoji="🎓",
        description="Personalized learning platform that adapts to student needs using multimodal analysis.",
        inputs=_inputs(
            ("Student video", "", "Optional: Upload student video for engagement analysis", ""),
            ("Speech responses", "", "Optional: Upload student speech responses", ""),
            ("Test results", "Math: 75%, Science: 82%, English: 68%, History: 90%",
             "e.g. List recent test scores or grades", "Enter test scores or assessment results"),
            ("Engagement patterns", "Good focus in morning, attention drops after lunch, prefers visual learning",
             "e.g. Eye tracking shows high engagement with videos", "Describe engagement patterns",
             TEXT, PRIMARY_TEXT),
            ("Curriculum content", "High school level, preparing for college entrance exams, focus on STEM",
             "e.g. Grade 10, AP courses in Physics and Math", "Describe curriculum and learning goals"),
            ("Code submissions", "", "Optional: Upload code submissions for analysis", ""),
            ("Peer feedback", "Good at problem-solving, needs work on essay writing, collaborative learner",
             "e.g. Excellent in group work, struggles with timed tests", "Enter peer feedback or observations"),
        ),
    ),
    10: FeatureDefinition(
        id=10,
        title="Quantum-Inspired Pattern Explorer",
        emoji="⚛️",
        description="Advanced pattern discovery using tensor networks and topological data analysis "
                    "across multiple data types.",
        inputs=_inputs(
            ("Numerical dataset", "Temperature data: [23.5, 24.1, 23.8, 25.2, 26.0, 24.5]\n"
                                  "Humidity data: [65, 68, 70, 72, 71, 69]",
             "e.g. Paste numerical data arrays", "Enter numerical dataset", TEXT, PRIMARY_TEXT),
            ("Time-series pattern", "Monthly readings over 2 years: increasing trend with seasonal variations",
             "e.g. Stock prices, sensor readings over time", "Describe time-series pattern"),
            ("Graph structure", "Nodes: [City A, City B, City C], Edges: [A-B: strong, B-C: weak, A-C: moderate]",
             "e.g. Social network, transportation links", "Describe graph/network structure"),
            ("Images", "", "Optional: Upload images for pattern analysis", ""),
            ("Text corpus", "Research papers about climate change patterns and predictions",
             "e.g. News articles, research documents", "Enter text corpus for analysis"),
            ("Waveforms", "", "Optional: Upload waveform data (audio, signals)", ""),
            ("Analysis goals", "Looking for anomalies in sensor data, predict future trends, find hidden correlations",
             "e.g. Cluster similar items, detect outliers", "Describe your analysis goals"),
        ),
    ),
}


def parse_feature_id(value) -> Optional[int]:
    """Feature id from a path segment or int; None when it is not 1..10"""
    try:
        feature_id = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return feature_id if feature_id in FEATURES else None


def get_feature(feature_id) -> Optional[FeatureDefinition]:
    parsed = parse_feature_id(feature_id)
    return FEATURES.get(parsed) if parsed is not None else None


def total_inputs(feature_id) -> int:
    feature = get_feature(feature_id)
    return len(feature.inputs) if feature else 0


def describe_feature(feature_id):
    feature = get_feature(feature_id)
    return feature.to_dict() if feature else None


def list_features():
    return [FEATURES[feature_id].summary() for feature_id in sorted(FEATURES)]
