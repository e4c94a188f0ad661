"""
Tests for the ten feature processors and the router.
"""

import json

import pytest

from ecosense.ai_service import GeminiService
from ecosense.api_integrations import HuggingFaceAPI
from ecosense.feature_processors import (
    FeatureServices,
    extract_location,
    extract_text_content,
    parse_numeric_series,
    process_bio_lab,
    process_crisis_predictor,
    process_ecosystem_analyzer,
    process_education,
    process_feature,
    process_pattern_explorer,
    process_translator,
    process_urban_twin,
    process_world_builder,
    summarize_series,
)
from ecosense.feature_schema import FEATURES
from ecosense.regional_data import find_region
from ecosense.scoring import RandomScorer

from fakes import FailingSession

EXPECTED_KEYS = {
    1: {'alertMessage', 'resourceTable', 'riskAnalysis', 'confidenceScore', 'recommendedActions'},
    2: {'resilienceScore', 'speciesList', 'degradationTimeline', 'priorityActions', 'healthStatus'},
    3: {'emotionTrajectory', 'resilienceScore', 'sentimentIndex', 'recommendations', 'correlations'},
    4: {'worldName', 'worldDescription', 'npcCharacters', 'storyBranches', 'landmarks'},
    5: {'hypotheses', 'experimentBlueprints', 'statisticalPower', 'keyVariables', 'contextSummary'},
    6: {'translatedText', 'translations', 'culturalNotes', 'etiquetteAlerts', 'biasAssessment'},
    7: {'trafficPrediction', 'urbanStressIndex', 'policyScenarios', 'keyMetrics', 'cityName'},
    8: {'proteinSequence', 'propertyPredictions', 'synthesisPathway', 'applications', 'ethicalReport'},
    9: {'skillDependencyGraph', 'engagementChart', 'skillPredictions', 'learningPath', 'regionalContext'},
    10: {'embeddings', 'anomalyTimeline', 'predictiveTrends', 'benchmarkScores', 'seriesStatistics'},
}


def default_form(feature_id):
    return {d.key: d.default for d in FEATURES[feature_id].inputs if d.default}


class ExplodingWeather:
    """Weather adapter that breaks in a way no adapter fallback covers"""

    def get_current_weather(self, location):
        raise RuntimeError("sensor grid on fire")

    def get_forecast(self, location):
        raise RuntimeError("sensor grid on fire")

    def geocode(self, location):
        raise RuntimeError("sensor grid on fire")

    def get_air_quality(self, lat, lon):
        raise RuntimeError("sensor grid on fire")


class TestAllProcessorsOffline:

    @pytest.mark.parametrize("feature_id", range(1, 11))
    def test_empty_submission(self, feature_id, offline_services):
        result = process_feature(feature_id, {}, offline_services)
        assert result is not None
        assert result['_inputPercentage'] == 0
        assert result['_inputWarning']
        assert EXPECTED_KEYS[feature_id] <= set(result)

    @pytest.mark.parametrize("feature_id", range(1, 11))
    def test_default_submission(self, feature_id, offline_services):
        form = default_form(feature_id)
        result = process_feature(feature_id, form, offline_services)
        assert EXPECTED_KEYS[feature_id] <= set(result)
        assert (result['_inputWarning'] is None) == (result['_inputPercentage'] >= 80)

    @pytest.mark.parametrize("feature_id", range(1, 11))
    def test_results_are_json_serialisable(self, feature_id, offline_services):
        json.dumps(process_feature(feature_id, default_form(feature_id), offline_services))


class TestRouter:

    @pytest.mark.parametrize("feature_id", [0, 11, -1, 'abc', None])
    def test_invalid_ids(self, feature_id, offline_services):
        assert process_feature(feature_id, {}, offline_services) == {'error': 'Invalid feature ID'}

    def test_string_id_dispatches(self, offline_services):
        result = process_feature('8', {}, offline_services)
        assert 'proteinSequence' in result


class TestCrisisPredictor:

    def test_tokyo_scenario(self, offline_services):
        result = process_crisis_predictor({'input_0': 'Tokyo, Japan'}, offline_services)
        tokyo = find_region('Tokyo')

        assert result['_inputPercentage'] == 11
        assert result['weatherData']['city'] == 'Tokyo'
        assert result['weatherData']['temperature'] == tokyo.avg_temperature.summer
        assert result['alertMessage']
        assert 'Tokyo' in result['alertMessage']
        assert len(result['resourceTable']) >= 1
        assert result['affectedPopulation'] == tokyo.urban.population
        assert result['forecastData'] == []

    def test_resource_quantities_follow_population(self, offline_services):
        result = process_crisis_predictor({'input_0': 'Nairobi, Kenya'}, offline_services)
        population = find_region('Nairobi').urban.population
        water = result['resourceTable'][0]
        assert water['resource'] == 'Water supplies'
        assert water['quantity'] == int(population * 0.05)
        assert result['resourceTable'][-1]['quantity'] == 500

    def test_gemini_content_used_when_available(self, gemini_services):
        reply = json.dumps({
            'alertMessage': 'Typhoon watch in effect',
            'recommendedActions': ['Secure loose objects'],
            'affectedPopulation': 1000,
        })
        result = process_crisis_predictor({'input_0': 'Tokyo'}, gemini_services(reply=reply))
        assert result['alertMessage'] == 'Typhoon watch in effect'
        assert result['recommendedActions'] == ['Secure loose objects']
        assert result['affectedPopulation'] == 1000
        assert result['resourceTable'][0]['quantity'] == 50

    def test_image_analysis_with_upload(self, gemini_services):
        form = {
            'input_0': 'Mumbai',
            'input_2': {'filename': 'sat.png', 'mimeType': 'image/png', 'size': 3, 'base64': 'YWJj'},
        }
        result = process_crisis_predictor(form, gemini_services(reply='Flooded low-lying districts'))
        assert result['imageAnalysis'] == 'Flooded low-lying districts'

    def test_image_analysis_fallback(self, offline_services):
        form = {
            'input_0': 'Mumbai',
            'input_2': {'filename': 'sat.png', 'mimeType': 'image/png', 'size': 3, 'base64': 'YWJj'},
        }
        result = process_crisis_predictor(form, offline_services)
        assert 'sat.png' in result['imageAnalysis']

    def test_unexpected_error_gives_minimal_result(self, offline_services):
        offline_services.weather = ExplodingWeather()
        result = process_crisis_predictor({'input_0': 'Cairo'}, offline_services)
        assert result['alertMessage'] == 'Environmental monitoring active for Cairo. Using regional baseline data.'
        assert len(result['resourceTable']) == 1
        assert result['_inputPercentage'] == 11


class TestEcosystemAnalyzer:

    def test_vegetation_health_within_ten_percent_of_biodiversity(self, offline_services):
        result = process_ecosystem_analyzer({'input_0': 'Tokyo, Japan'}, offline_services)
        base = find_region('Tokyo').ecosystem.biodiversity_index * 100
        assert base * 0.9 - 1 <= result['vegetationHealth'] <= base * 1.1 + 1
        assert result['biodiversityIndex'] == find_region('Tokyo').ecosystem.biodiversity_index


class TestTranslator:

    def test_hello_echo_fallback(self, offline_services):
        result = process_translator({'input_1': 'Hello'}, offline_services)
        assert result['translations']['spanish'] == 'Hello'
        assert set(result['translations']) == {'spanish', 'french', 'german', 'japanese', 'chinese'}
        assert result['translatedText'] == 'Hello'
        assert result['confidenceScore'] == 75

    def test_cultural_target_from_context(self, offline_services):
        form = {'input_1': 'Good morning', 'input_4': 'Meeting partners in Japan'}
        result = process_translator(form, offline_services)
        assert result['targetRegion'] == 'Tokyo'
        assert 'Tokyo (Japan)' in result['culturalNotes']

    def test_default_text_when_empty(self, offline_services):
        result = process_translator({}, offline_services)
        assert result['translations']['spanish'] == 'Hello, how are you today?'


class TestUrbanTwin:

    def test_location_from_city_field(self, offline_services):
        result = process_urban_twin({'input_1': 'Central London'}, offline_services)
        london = find_region('London')
        assert result['cityName'] == 'London'
        assert result['keyMetrics']['population'] == london.urban.population
        assert len(result['trafficPrediction']['datasets'][0]['data']) == 6
        assert [p['name'] for p in result['policyScenarios']] == [
            'Expand Green Spaces', 'Enhanced Public Transit', 'Noise Reduction Program',
        ]

    def test_minimal_result_on_error(self, offline_services):
        offline_services.weather = ExplodingWeather()
        result = process_urban_twin({'input_1': 'Dubai'}, offline_services)
        assert result['urbanStressIndex'] == 5
        assert result['cityName'] == 'Dubai'


class TestWorldBuilder:

    def test_template_world(self, offline_services):
        result = process_world_builder({'input_1': 'A floating kingdom above Kenya'}, offline_services)
        assert result['worldName'] == 'The Fantasy Realm of Nairobi'
        assert result['landmarks'] == ['Crystal Waterfall', 'Ancient Stone Circle']

    def test_empty_gemini_lists_get_defaults(self, gemini_services):
        reply = json.dumps({'worldName': 'Verdantia', 'worldDescription': 'Green.', 'npcCharacters': []})
        result = process_world_builder({'input_1': 'forest'}, gemini_services(reply=reply))
        assert result['worldName'] == 'Verdantia'
        assert result['npcCharacters'][0]['name'] == 'Forest Guardian'


class TestBioLab:

    def test_fasta_layout(self, offline_services):
        result = process_bio_lab({'input_3': 'enzyme for plastics'}, offline_services)
        lines = result['proteinSequence'].split('\n')
        assert lines[0] == '>Generated_Enzyme_001'
        assert [len(line) for line in lines[1:]] == [60, 60, 30]
        assert set(''.join(lines[1:])) <= set('ACDEFGHIKLMNPQRSTVWY')

    def test_seeded_scorer_is_reproducible(self):
        def run():
            services = FeatureServices(
                inference=HuggingFaceAPI(session=FailingSession()),
                gemini=GeminiService(api_key=''),
                scorer=RandomScorer(seed=3),
                simulate_latency=False,
            )
            return process_bio_lab({'input_3': 'peptide'}, services)

        assert run() == run()


class TestEducation:

    def test_non_object_gemini_reply_uses_template(self, gemini_services):
        result = process_education({'input_3': 'visual learner'}, gemini_services(reply='["not", "an", "object"]'))
        assert len(result['learningPath']) == 5
        assert result['learningPath'][-1] == 'Final assessment and certification'

    def test_engagement_chart(self, offline_services):
        result = process_education({}, offline_services)
        data = result['engagementChart']['datasets'][0]['data']
        assert data[0] == 45


class TestPatternExplorer:

    def test_series_statistics(self, offline_services):
        form = {'input_0': 'Readings: [1, 2, 3, 100, 2, 3, 1, 2, 3, 2, 1]'}
        result = process_pattern_explorer(form, offline_services)
        stats = result['seriesStatistics'][0]
        assert stats['name'] == 'Readings'
        assert stats['count'] == 11
        assert stats['max'] == 100
        assert stats['anomalies'] == [3]
        assert len(result['embeddings']) == 1
        assert len(result['embeddings'][0]) == 4

    def test_without_series_uses_three_embeddings(self, offline_services):
        result = process_pattern_explorer({'input_6': 'find outliers'}, offline_services)
        assert result['seriesStatistics'] == []
        assert len(result['embeddings']) == 3
        assert result['similarityResults'] == [0.5, 0.5, 0.5, 0.5]

    def test_parse_numeric_series(self):
        series = parse_numeric_series("Temperature data: [23.5, 24.1]\nHumidity data: [65, 68, 70]\n[7]")
        assert series == [
            {'name': 'Temperature data', 'values': [23.5, 24.1]},
            {'name': 'Humidity data', 'values': [65.0, 68.0, 70.0]},
        ]

    def test_flat_series_has_no_anomalies(self):
        stats = summarize_series([{'name': 'flat', 'values': [5, 5, 5]}])[0]
        assert stats['std'] == 0
        assert stats['anomalies'] == []


class TestInputHelpers:

    def test_location_field_preferred(self):
        assert extract_location({'input_0': 'Paris, France', 'input_3': 'Rain in Berlin'}, FEATURES[1]) == 'Paris, France'

    def test_location_from_capitalised_phrase(self):
        assert extract_location({'input_0': 'heading to Mumbai India soon'}) == 'Mumbai India'

    def test_location_default(self):
        assert extract_location({}) == 'New York'
        assert extract_location({'_meta': 'Tokyo'}) == 'New York'

    def test_text_content_skips_blanks_files_and_metadata(self):
        form = {
            'input_0': 'alpha',
            'input_1': '  ',
            'input_2': {'filename': 'a.png', 'base64': 'YQ=='},
            '_totalInputs': '7',
            'input_3': 'beta',
        }
        assert extract_text_content(form) == 'alpha beta'


class TestLatency:

    def test_pause_uses_feature_window(self, offline_services):
        waits = []
        offline_services.simulate_latency = True
        offline_services._sleep = waits.append
        process_bio_lab({}, offline_services)
        assert len(waits) == 1
        assert 3.0 <= waits[0] <= 5.0

    def test_disabled_latency_never_sleeps(self, offline_services):
        waits = []
        offline_services._sleep = waits.append
        process_bio_lab({}, offline_services)
        assert waits == []


class TestDefaultServices:

    def test_processors_fall_back_to_module_services(self, monkeypatch, offline_services):
        monkeypatch.setattr('ecosense.feature_processors._default_services', offline_services)
        result = process_translator({'input_1': 'Hello'})
        assert result['translations']['spanish'] == 'Hello'
