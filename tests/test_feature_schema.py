"""
Tests for the per-feature input schema.
"""

import pytest

from ecosense.feature_schema import (
    FEATURES,
    FILE,
    LOCATION,
    PRIMARY_TEXT,
    TEXT,
    describe_feature,
    get_feature,
    guess_input_kind,
    list_features,
    parse_feature_id,
    total_inputs,
)

EXPECTED_INPUT_COUNTS = {1: 9, 2: 8, 3: 7, 4: 7, 5: 7, 6: 7, 7: 8, 8: 6, 9: 7, 10: 7}


class TestFeatureTable:

    def test_ten_features(self):
        assert sorted(FEATURES) == list(range(1, 11))

    @pytest.mark.parametrize("feature_id, count", sorted(EXPECTED_INPUT_COUNTS.items()))
    def test_input_counts(self, feature_id, count):
        assert total_inputs(feature_id) == count

    def test_input_keys_are_positional(self):
        for feature in FEATURES.values():
            assert [d.key for d in feature.inputs] == [f"input_{i}" for i in range(len(feature.inputs))]

    def test_input_keys_match_descriptors(self):
        assert FEATURES[8].input_keys() == tuple(f"input_{i}" for i in range(6))
        assert len(FEATURES[1].input_keys()) == total_inputs(1)

    def test_upload_fields_are_optional_files(self):
        satellite = FEATURES[1].inputs[2]
        assert satellite.label == 'Satellite imagery'
        assert satellite.kind == FILE
        assert satellite.required is False

    def test_every_feature_has_primary_text(self):
        for feature in FEATURES.values():
            descriptor = feature.field_for_role(PRIMARY_TEXT)
            assert descriptor is not None
            assert descriptor.kind == TEXT

    @pytest.mark.parametrize("feature_id, key", [(1, 'input_0'), (2, 'input_0'), (3, 'input_6'), (7, 'input_1')])
    def test_location_fields(self, feature_id, key):
        assert FEATURES[feature_id].field_for_role(LOCATION).key == key

    def test_non_geographic_features_have_no_location(self):
        assert FEATURES[6].field_for_role(LOCATION) is None


class TestLookups:

    @pytest.mark.parametrize("value, expected", [
        ('1', 1), (10, 10), (' 7 ', 7), ('0', None), ('11', None), ('abc', None), (None, None), ('-1', None),
    ])
    def test_parse_feature_id(self, value, expected):
        assert parse_feature_id(value) == expected

    def test_get_feature(self):
        assert get_feature('3').title == 'Human Emotion & Environment Resonance Scanner'
        assert get_feature(42) is None

    def test_total_inputs_for_unknown(self):
        assert total_inputs(99) == 0

    def test_describe_feature(self):
        info = describe_feature(8)
        assert info['id'] == 8
        assert info['inputCount'] == 6
        assert info['inputs'][0]['key'] == 'input_0'
        assert {'label', 'kind', 'required', 'default', 'example', 'placeholder'} <= set(info['inputs'][0])
        assert describe_feature(0) is None

    def test_list_features(self):
        catalogue = list_features()
        assert [f['id'] for f in catalogue] == list(range(1, 11))
        assert all('inputs' not in f for f in catalogue)
        assert catalogue[0]['emoji'] == '🌪️'


class TestGuessInputKind:

    @pytest.mark.parametrize("label, expected", [
        ('Satellite image', FILE),
        ('Upload CSV dataset', FILE),
        ('Background audio', FILE),
        ('Location', TEXT),
        ('Free-form notes', TEXT),
        ('', TEXT),
    ])
    def test_heuristic(self, label, expected):
        assert guess_input_kind(label) == expected

    def test_explicit_kind_wins(self):
        # "Numerical dataset" contains a file hint but is declared as text
        assert FEATURES[10].inputs[0].label == 'Numerical dataset'
        assert FEATURES[10].inputs[0].kind == TEXT
